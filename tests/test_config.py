"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from crpt_client.core.config import ApiSettings, LogSettings, RateLimitSettings, Settings


def test_rate_limit_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RATE_LIMIT_REQUESTS", "12")
    monkeypatch.setenv("RATE_LIMIT_PERIOD_SECONDS", "2.5")

    cfg = RateLimitSettings()

    assert cfg.requests == 12
    assert cfg.period_seconds == 2.5


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("RATE_LIMIT_REQUESTS", "0"),
        ("RATE_LIMIT_REQUESTS", "-1"),
        ("RATE_LIMIT_PERIOD_SECONDS", "0"),
        ("RATE_LIMIT_PERIOD_SECONDS", "nan"),
        ("RATE_LIMIT_PERIOD_SECONDS", "inf"),
        ("RATE_LIMIT_SHUTDOWN_TIMEOUT_SECONDS", "-0.5"),
    ],
)
def test_rate_limit_settings_reject_out_of_range_values(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        RateLimitSettings()


def test_api_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CRPT_API_BASE_URL", raising=False)

    cfg = ApiSettings()

    assert cfg.base_url == "https://dev.edo.crpt.tech"
    assert cfg.document_path == "/api/v1/incoming-documents/unsigned-events"
    assert cfg.verify_tls is True
    assert cfg.ca_bundle_path is None


def test_api_settings_tls_options(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRPT_API_VERIFY_TLS", "false")
    monkeypatch.setenv("CRPT_API_TIMEOUT_SECONDS", "3")

    cfg = ApiSettings()

    assert cfg.verify_tls is False
    assert cfg.timeout_seconds == 3.0


def test_settings_compose_sections(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_FORMAT", "plain")
    monkeypatch.setenv("CRPT_API_BASE_URL", "https://markirovka.test")

    cfg = Settings()

    assert isinstance(cfg.log, LogSettings)
    assert cfg.log.format == "plain"
    assert cfg.api.base_url == "https://markirovka.test"
    assert cfg.app_env == "testing"
