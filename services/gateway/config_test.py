"""Tests for gateway configuration."""

import pytest
from pydantic import ValidationError

from infra.ota import DEFAULT_OTA_ENDPOINT
from services.gateway import config as config_module
from services.gateway.config import GatewayConfig, load_config

ENV_VARS = [
    "API_BASE_URL",
    "OTA_API_KEY",
    "OTA_ENDPOINT",
    "OTA_SYNC_CRON",
    "OTA_SYNC_ENABLED",
    "UPSTREAM_TIMEOUT",
    "PORT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the developer's environment and .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "load_dotenv", lambda: None)


def test_defaults(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "http://localhost:4000")

    config = load_config()

    assert config.api_base_url == "http://localhost:4000"
    assert config.ota_api_key is None
    assert config.ota_endpoint == DEFAULT_OTA_ENDPOINT
    assert config.ota_sync_cron == "0 * * * *"
    assert config.ota_sync_enabled is True
    assert config.upstream_timeout == 30.0
    assert config.port == 3000
    assert config.log_level == "INFO"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "http://hotel-api")
    monkeypatch.setenv("OTA_API_KEY", "abc")
    monkeypatch.setenv("OTA_ENDPOINT", "https://partner.example/update")
    monkeypatch.setenv("OTA_SYNC_ENABLED", "false")
    monkeypatch.setenv("UPSTREAM_TIMEOUT", "5")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = load_config()

    assert config.ota_api_key == "abc"
    assert config.ota_endpoint == "https://partner.example/update"
    assert config.ota_sync_enabled is False
    assert config.upstream_timeout == 5.0
    assert config.port == 8080
    assert config.log_level == "DEBUG"


def test_missing_base_url_raises():
    with pytest.raises(ValueError, match="API_BASE_URL"):
        load_config()


def test_config_is_immutable():
    config = GatewayConfig(api_base_url="http://hotel-api")

    with pytest.raises(ValidationError):
        config.api_base_url = "http://elsewhere"
