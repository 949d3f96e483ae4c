"""
Selection of an extractor by name.

Lets deployments pick the trusted header from configuration, e.g.
``CLIENT_IP_SOURCE=rightmost_x_forwarded_for``.

Usage::

    from client_ip.sources import extract_client_ip

    ip = extract_client_ip(headers, "cf_connecting_ip")
"""

from collections.abc import Callable

from client_ip.config import get_settings
from client_ip.constants import ClientIpSource
from client_ip.exceptions import SourceUnavailableError
from client_ip.extractors import (
    cf_connecting_ip,
    cloudfront_viewer_address,
    fly_client_ip,
    rightmost_x_forwarded_for,
    true_client_ip,
    x_real_ip,
)
from client_ip.headers import HeaderSource
from client_ip.logging import get_logger
from client_ip.parsing import IPAddress

logger = get_logger(__name__)

Extractor = Callable[[HeaderSource], IPAddress | None]

_EXTRACTORS: dict[ClientIpSource, Extractor] = {
    ClientIpSource.CF_CONNECTING_IP: cf_connecting_ip,
    ClientIpSource.CLOUDFRONT_VIEWER_ADDRESS: cloudfront_viewer_address,
    ClientIpSource.FLY_CLIENT_IP: fly_client_ip,
    ClientIpSource.RIGHTMOST_X_FORWARDED_FOR: rightmost_x_forwarded_for,
    ClientIpSource.TRUE_CLIENT_IP: true_client_ip,
    ClientIpSource.X_REAL_IP: x_real_ip,
}


def get_extractor(
    source: ClientIpSource | str,
    *,
    forwarded_enabled: bool | None = None,
) -> Extractor:
    """
    Resolve a source to its extractor function.

    Args:
        source: A ClientIpSource or any name accepted by ClientIpSource.parse.
        forwarded_enabled: Whether the Forwarded extractor may be used.
            Defaults to the CLIENT_IP_FORWARDED_HEADER setting.

    Returns:
        The extractor callable.

    Raises:
        UnknownSourceError: If the name matches no source.
        SourceUnavailableError: If the Forwarded extractor is requested but disabled.
    """
    if not isinstance(source, ClientIpSource):
        source = ClientIpSource.parse(source)

    if source is not ClientIpSource.RIGHTMOST_FORWARDED:
        return _EXTRACTORS[source]

    if forwarded_enabled is None:
        forwarded_enabled = get_settings().CLIENT_IP_FORWARDED_HEADER
    if not forwarded_enabled:
        logger.warning("client_ip_source_unavailable", source=source.value)
        raise SourceUnavailableError(
            f"{source.value} requires CLIENT_IP_FORWARDED_HEADER to be enabled"
        )

    from client_ip.forwarded import rightmost_forwarded

    return rightmost_forwarded


def extract_client_ip(headers: HeaderSource, source: ClientIpSource | str) -> IPAddress | None:
    """
    Run the extractor for ``source`` over ``headers``.

    Raises only for configuration errors (see get_extractor); a missing or
    malformed header yields None.
    """
    return get_extractor(source)(headers)
