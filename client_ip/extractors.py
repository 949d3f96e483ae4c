"""
Client IP extractors, one per proxy header.

Each extractor is a pure function of its headers and returns the client
address or None. None covers every negative outcome: the header is missing,
blank or malformed. Which extractor to trust depends on the deployment and
is the caller's decision; trusting a header the edge proxy does not
overwrite lets clients choose their own IP.

The ``Forwarded`` extractor lives in ``client_ip.forwarded``.
"""

from client_ip.constants import (
    CF_CONNECTING_IP,
    CLOUDFRONT_VIEWER_ADDRESS,
    FLY_CLIENT_IP,
    TRUE_CLIENT_IP,
    X_FORWARDED_FOR,
    X_REAL_IP,
)
from client_ip.headers import HeaderSource
from client_ip.logging import get_logger
from client_ip.parsing import (
    IPAddress,
    first_value,
    parse_address,
    parse_ip_literal,
    rejection_reason,
    rightmost,
)

logger = get_logger(__name__)


def cf_connecting_ip(headers: HeaderSource) -> IPAddress | None:
    """Extract client IP from ``CF-Connecting-IP`` (Cloudflare) header."""
    return _ip_from_single_header(headers, CF_CONNECTING_IP)


def cloudfront_viewer_address(headers: HeaderSource) -> IPAddress | None:
    """
    Extract client IP from ``CloudFront-Viewer-Address`` (AWS CloudFront) header.

    The value is ``address:port`` and CloudFront does not bracket IPv6
    addresses (``2001:db8::1:443``), so the port is split off at the last
    colon before falling back to the generic literal rules.
    """
    value = _single_value(headers, CLOUDFRONT_VIEWER_ADDRESS)
    if value is None:
        return None

    host, sep, port = value.rpartition(":")
    if sep and port.isascii() and port.isdigit():
        ip = parse_address(host)
        if ip is not None:
            return ip

    ip = parse_ip_literal(value)
    if ip is None:
        _log_malformed(CLOUDFRONT_VIEWER_ADDRESS, rejection_reason(value))
    return ip


def fly_client_ip(headers: HeaderSource) -> IPAddress | None:
    """
    Extract client IP from ``Fly-Client-IP`` (Fly.io) header.

    Fly health checks do not carry this header unless it is configured in
    ``http_service.checks.headers``.
    """
    return _ip_from_single_header(headers, FLY_CLIENT_IP)


def rightmost_x_forwarded_for(headers: HeaderSource) -> IPAddress | None:
    """
    Extract the rightmost IP from ``X-Forwarded-For`` header.

    Entries from every occurrence of the header are taken in order and only
    the last one is used: it was appended by the nearest proxy, everything
    before it may come from the client. A malformed last entry yields None
    rather than falling back to an earlier one.
    """
    token = rightmost(headers.get_all(X_FORWARDED_FOR))
    if token is None:
        return None

    ip = parse_ip_literal(token)
    if ip is None:
        _log_malformed(X_FORWARDED_FOR, rejection_reason(token))
    return ip


def true_client_ip(headers: HeaderSource) -> IPAddress | None:
    """Extract client IP from ``True-Client-IP`` (Akamai, Cloudflare) header."""
    return _ip_from_single_header(headers, TRUE_CLIENT_IP)


def x_real_ip(headers: HeaderSource) -> IPAddress | None:
    """Extract client IP from ``X-Real-Ip`` (Nginx) header."""
    return _ip_from_single_header(headers, X_REAL_IP)


def _ip_from_single_header(headers: HeaderSource, header_name: str) -> IPAddress | None:
    """Parse the first occurrence of a header expected to hold one address."""
    value = _single_value(headers, header_name)
    if value is None:
        return None

    ip = parse_ip_literal(value)
    if ip is None:
        _log_malformed(header_name, rejection_reason(value))
    return ip


def _single_value(headers: HeaderSource, header_name: str) -> str | None:
    """
    Return the first occurrence of a header that must occur once.

    A repeated header means a proxy appended its copy instead of replacing
    the client's, so a warning is logged; the first occurrence is still used.
    """
    values = headers.get_all(header_name)
    if len(values) > 1:
        logger.warning(
            "client_ip_header_malformed",
            header=header_name,
            reason="repeated_header",
            occurrences=len(values),
        )
    return first_value(values)


def _log_malformed(header_name: str, reason: str) -> None:
    logger.debug("client_ip_header_malformed", header=header_name, reason=reason)
