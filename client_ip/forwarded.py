"""
RFC 7239 ``Forwarded`` header extractor.

Kept out of the package root: it is only offered through
``ClientIpSource.RIGHTMOST_FORWARDED`` when ``CLIENT_IP_FORWARDED_HEADER``
is enabled, or by importing this module directly.
"""

from client_ip.constants import FORWARDED
from client_ip.headers import HeaderSource
from client_ip.logging import get_logger
from client_ip.parsing import (
    IPAddress,
    forwarded_for_value,
    parse_forwarded_for,
    rejection_reason,
    split_list,
    unquote,
)

logger = get_logger(__name__)


def rightmost_forwarded(headers: HeaderSource) -> IPAddress | None:
    """
    Extract the rightmost IP from ``Forwarded`` header.

    Elements are scanned from the last one backwards and the first element
    with a usable ``for`` address wins, so trailing elements that only carry
    ``proto`` or ``by`` are skipped.

    Example:
        ``Forwarded: for=192.0.2.1;proto=http, for="[2001:db8::1]:8080"``
        yields ``2001:db8::1``.
    """
    elements = split_list(headers.get_all(FORWARDED))
    for element in reversed(elements):
        ip = parse_forwarded_for(element)
        if ip is not None:
            return ip

    if elements:
        logger.debug(
            "client_ip_header_malformed",
            header=FORWARDED,
            reason=_element_rejection_reason(elements[-1]),
        )
    return None


def _element_rejection_reason(element: str) -> str:
    """
    Classify why a ``Forwarded`` element has no address.

    Returns ``no_for``, ``unterminated_quote`` or one of the reasons of
    ``rejection_reason`` (``unknown``, ``obfuscated``, ...).
    """
    value = forwarded_for_value(element)
    if value is None:
        return "no_for"
    normalized = unquote(value)
    if normalized is None:
        return "unterminated_quote"
    return rejection_reason(normalized)
