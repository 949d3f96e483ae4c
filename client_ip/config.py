"""
Environment-based configuration for client IP extraction.
"""

from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings

from client_ip.constants import ClientIpSource


class ClientIpSettings(BaseSettings):
    """Environment-based configuration using pydantic-settings."""

    # Extractor used by get_client_ip; unset means the socket peer address
    CLIENT_IP_SOURCE: ClientIpSource | None = None

    # Enables the RFC 7239 Forwarded extractor
    CLIENT_IP_FORWARDED_HEADER: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    model_config = {"env_file": ".env", "extra": "ignore"}

    @field_validator("CLIENT_IP_SOURCE", mode="before")
    @classmethod
    def _parse_source(cls, value: Any) -> Any:
        if isinstance(value, str):
            if not value.strip():
                return None
            return ClientIpSource.parse(value)
        return value


@lru_cache(maxsize=1)
def get_settings() -> ClientIpSettings:
    """
    Return the process-wide settings, read once from the environment.

    Call ``get_settings.cache_clear()`` after changing the environment.
    """
    return ClientIpSettings()
