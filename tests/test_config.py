"""
Tests for environment-based settings.
"""

import pytest
from pydantic import ValidationError

from client_ip.config import ClientIpSettings, get_settings
from client_ip.constants import ClientIpSource


class TestClientIpSettings:
    """Tests for ClientIpSettings."""

    def test_defaults(self) -> None:
        """Should default to no header source and the Forwarded extractor disabled."""
        settings = ClientIpSettings()

        assert settings.CLIENT_IP_SOURCE is None
        assert settings.CLIENT_IP_FORWARDED_HEADER is False
        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_JSON is True

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("rightmost_x_forwarded_for", ClientIpSource.RIGHTMOST_X_FORWARDED_FOR),
            ("X-Forwarded-For", ClientIpSource.RIGHTMOST_X_FORWARDED_FOR),
            ("CF-Connecting-IP", ClientIpSource.CF_CONNECTING_IP),
        ],
    )
    def test_source_from_env(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: ClientIpSource
    ) -> None:
        """Should accept extractor and header names from the environment."""
        monkeypatch.setenv("CLIENT_IP_SOURCE", value)

        assert ClientIpSettings().CLIENT_IP_SOURCE is expected

    def test_blank_source_is_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A blank value should mean no source."""
        monkeypatch.setenv("CLIENT_IP_SOURCE", "  ")

        assert ClientIpSettings().CLIENT_IP_SOURCE is None

    def test_unknown_source_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should fail validation for an unknown source."""
        monkeypatch.setenv("CLIENT_IP_SOURCE", "x-client-ip")

        with pytest.raises(ValidationError) as exc_info:
            ClientIpSettings()

        assert "Unknown client IP source" in str(exc_info.value)

    def test_forwarded_flag_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should parse the Forwarded toggle as a boolean."""
        monkeypatch.setenv("CLIENT_IP_FORWARDED_HEADER", "1")

        assert ClientIpSettings().CLIENT_IP_FORWARDED_HEADER is True

    def test_init_kwargs(self) -> None:
        """Explicit values should be parsed like environment values."""
        settings = ClientIpSettings(CLIENT_IP_SOURCE="Fly-Client-IP")

        assert settings.CLIENT_IP_SOURCE is ClientIpSource.FLY_CLIENT_IP


class TestGetSettings:
    """Tests for get_settings function."""

    def test_cached(self) -> None:
        """Should return the same instance until the cache is cleared."""
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Clearing the cache should pick up environment changes."""
        assert get_settings().CLIENT_IP_SOURCE is None

        monkeypatch.setenv("CLIENT_IP_SOURCE", "x_real_ip")
        get_settings.cache_clear()

        assert get_settings().CLIENT_IP_SOURCE is ClientIpSource.X_REAL_IP
