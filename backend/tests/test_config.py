import pytest

from backend.app.api import config


def test_defaults(monkeypatch):
    for name in ("CONTRACT_EXPIRING_DAYS", "WEBHOOK_TIMEOUT_SECONDS", "ANALYTICS_DEFAULT_PERIOD", "CORS_ALLOW_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    assert config.contract_expiring_days() == 30
    assert config.webhook_timeout_seconds() == 10.0
    assert config.analytics_default_period() == "6_months"
    assert config.cors_origins() == ["http://localhost:5173", "http://127.0.0.1:5173"]


def test_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("CONTRACT_EXPIRING_DAYS", "soon")
    monkeypatch.setenv("WEBHOOK_TIMEOUT_SECONDS", "fast")
    monkeypatch.setenv("ANALYTICS_DEFAULT_PERIOD", "decade")

    assert config.contract_expiring_days() == 30
    assert config.webhook_timeout_seconds() == 10.0
    assert config.analytics_default_period() == "6_months"


def test_overrides(monkeypatch):
    monkeypatch.setenv("CONTRACT_EXPIRING_DAYS", "45")
    monkeypatch.setenv("ANALYTICS_DEFAULT_PERIOD", "1_year")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://app.example.com, http://localhost:5173")

    assert config.contract_expiring_days() == 45
    assert config.analytics_default_period() == "1_year"
    assert config.cors_origins() == ["https://app.example.com", "http://localhost:5173"]


def test_empty_cors_origins_is_an_error(monkeypatch):
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", " , ")
    with pytest.raises(RuntimeError):
        config.cors_origins()
