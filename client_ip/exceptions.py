"""
Exceptions for client IP source configuration.

Extraction itself never raises: malformed headers yield ``None``. These are
only raised while resolving which extractor to use.
"""


class ClientIpError(Exception):
    """Base exception for client IP configuration errors."""

    pass


class UnknownSourceError(ClientIpError, ValueError):
    """Source name does not match any known extractor."""

    pass


class SourceUnavailableError(ClientIpError):
    """Source is known but its feature is not enabled."""

    pass
