"""
Client IP extraction from proxy headers.

Each extractor reads one header and returns an ``ipaddress`` object or None.
List-style headers are read rightmost-first, since only the last entry is
written by the proxy in front of the application.

The ``Forwarded`` extractor is optional; see ``client_ip.forwarded``.
"""

from client_ip.constants import ClientIpSource
from client_ip.exceptions import ClientIpError, SourceUnavailableError, UnknownSourceError
from client_ip.extractors import (
    cf_connecting_ip,
    cloudfront_viewer_address,
    fly_client_ip,
    rightmost_x_forwarded_for,
    true_client_ip,
    x_real_ip,
)
from client_ip.headers import HeaderList, HeaderSource, MetaHeaders
from client_ip.parsing import IPAddress
from client_ip.sources import extract_client_ip, get_extractor

__all__ = [
    "ClientIpError",
    "ClientIpSource",
    "HeaderList",
    "HeaderSource",
    "IPAddress",
    "MetaHeaders",
    "SourceUnavailableError",
    "UnknownSourceError",
    "cf_connecting_ip",
    "cloudfront_viewer_address",
    "extract_client_ip",
    "fly_client_ip",
    "get_extractor",
    "rightmost_x_forwarded_for",
    "true_client_ip",
    "x_real_ip",
]
