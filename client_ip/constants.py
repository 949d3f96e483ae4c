"""
Constants for client IP extraction.

Header names and the enum of named extractor sources.
"""

from enum import StrEnum

from client_ip.exceptions import UnknownSourceError

CF_CONNECTING_IP = "cf-connecting-ip"
CLOUDFRONT_VIEWER_ADDRESS = "cloudfront-viewer-address"
FLY_CLIENT_IP = "fly-client-ip"
FORWARDED = "forwarded"
TRUE_CLIENT_IP = "true-client-ip"
X_FORWARDED_FOR = "x-forwarded-for"
X_REAL_IP = "x-real-ip"


class ClientIpSource(StrEnum):
    """
    Named choice of extractor.

    Values match the extractor function names so a source can be configured
    from an environment variable.
    """

    CF_CONNECTING_IP = "cf_connecting_ip"
    CLOUDFRONT_VIEWER_ADDRESS = "cloudfront_viewer_address"
    FLY_CLIENT_IP = "fly_client_ip"
    RIGHTMOST_FORWARDED = "rightmost_forwarded"
    RIGHTMOST_X_FORWARDED_FOR = "rightmost_x_forwarded_for"
    TRUE_CLIENT_IP = "true_client_ip"
    X_REAL_IP = "x_real_ip"

    @property
    def header_name(self) -> str:
        """Lowercase name of the header the extractor reads."""
        return _HEADER_NAMES[self]

    @classmethod
    def parse(cls, name: str) -> "ClientIpSource":
        """
        Resolve a source from its name or from the header it reads.

        Matching is case-insensitive and treats ``-`` and ``_`` alike, so
        ``"RIGHTMOST-X-FORWARDED-FOR"`` and ``"X-Forwarded-For"`` both resolve
        to ``RIGHTMOST_X_FORWARDED_FOR``.

        Raises:
            UnknownSourceError: If the name matches no source.
        """
        key = name.strip().lower().replace("-", "_")
        for source in cls:
            if key == source.value or key == source.header_name.replace("-", "_"):
                return source
        raise UnknownSourceError(f"Unknown client IP source: {name!r}")


_HEADER_NAMES: dict[ClientIpSource, str] = {
    ClientIpSource.CF_CONNECTING_IP: CF_CONNECTING_IP,
    ClientIpSource.CLOUDFRONT_VIEWER_ADDRESS: CLOUDFRONT_VIEWER_ADDRESS,
    ClientIpSource.FLY_CLIENT_IP: FLY_CLIENT_IP,
    ClientIpSource.RIGHTMOST_FORWARDED: FORWARDED,
    ClientIpSource.RIGHTMOST_X_FORWARDED_FOR: X_FORWARDED_FOR,
    ClientIpSource.TRUE_CLIENT_IP: TRUE_CLIENT_IP,
    ClientIpSource.X_REAL_IP: X_REAL_IP,
}
