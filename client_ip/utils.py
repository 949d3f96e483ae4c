"""
Django request helpers.
"""

from typing import cast, overload

from django.http import HttpRequest

from client_ip.config import get_settings
from client_ip.constants import ClientIpSource
from client_ip.headers import MetaHeaders
from client_ip.sources import extract_client_ip


@overload
def get_client_ip(
    request: HttpRequest, default: None = None, *, source: ClientIpSource | str | None = None
) -> str | None: ...


@overload
def get_client_ip(
    request: HttpRequest, default: str, *, source: ClientIpSource | str | None = None
) -> str: ...


def get_client_ip(
    request: HttpRequest,
    default: str | None = None,
    *,
    source: ClientIpSource | str | None = None,
) -> str | None:
    """
    Extract the client IP of a Django request.

    With a source (the argument, or CLIENT_IP_SOURCE), only that header is
    consulted. A configured header that is missing or malformed gives
    ``default``: falling back to REMOTE_ADDR behind a proxy would report the
    proxy's own address. Without any source, REMOTE_ADDR is used.

    Args:
        request: The Django HTTP request.
        default: Fallback value when no IP can be determined.
            Defaults to None.
        source: Extractor to use instead of the CLIENT_IP_SOURCE setting.

    Returns:
        The client IP address as text, or default if not available.

    Raises:
        UnknownSourceError: If ``source`` names no extractor.
        SourceUnavailableError: If ``source`` is disabled.
    """
    if source is None:
        source = get_settings().CLIENT_IP_SOURCE

    if source is None:
        remote_addr = cast(str | None, request.META.get("REMOTE_ADDR"))
        if remote_addr:
            return remote_addr
        return default

    ip = extract_client_ip(MetaHeaders(request.META), source)
    if ip is None:
        return default
    return str(ip)
