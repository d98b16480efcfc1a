"""Tests for configuration loading and JWT secret validation."""

import json

import pytest

from hearing_api.config import (
    ConfigManager,
    HearingConfig,
    _validate_jwt_secret_key,
)

STRONG_SECRET = "Zq8-vN3pL_w7Xk2Rt5Yb9Hc4Jm6Fd1Gs0Ae"


@pytest.fixture
def manager(monkeypatch):
    """A ConfigManager isolated from the process environment."""
    for name in list(ConfigManager.ENV_OVERRIDES) + ["HEARING_CONFIG_FILE"]:
        monkeypatch.delenv(name, raising=False)
    return ConfigManager()


@pytest.mark.unit
class TestConfigManager:

    def test_defaults(self, manager):
        config = manager.load_config()

        assert config.app.session_ttl_seconds == 3600
        assert config.app.jwt_algorithm == "HS256"
        assert config.server.port == 5000
        assert config.app.log_to_file is False

    def test_generates_secret_when_not_configured(self, manager):
        config = manager.load_config()

        assert len(config.app.jwt_secret_key) >= 64

    def test_config_is_cached_until_reset(self, manager):
        first = manager.load_config()
        assert manager.load_config() is first

        manager.reset()
        second = manager.load_config()
        assert second is not first
        # A new random secret is generated after reset
        assert second.app.jwt_secret_key != first.app.jwt_secret_key

    def test_environment_overrides(self, manager, monkeypatch):
        monkeypatch.setenv("HEARING_JWT_SECRET_KEY", STRONG_SECRET)
        monkeypatch.setenv("HEARING_SESSION_TTL_SECONDS", "120")
        monkeypatch.setenv("HEARING_PORT", "8080")
        monkeypatch.setenv("HEARING_DEBUG", "true")
        monkeypatch.setenv("HEARING_LOG_LEVEL", "debug")
        monkeypatch.setenv("HEARING_CORS_ORIGINS", "https://a.example, https://b.example")

        config = manager.load_config()

        assert config.app.jwt_secret_key == STRONG_SECRET
        assert config.app.session_ttl_seconds == 120
        assert config.server.port == 8080
        assert config.server.debug is True
        assert config.app.log_level == "DEBUG"
        assert config.app.cors_origins == ["https://a.example", "https://b.example"]

    def test_invalid_env_value_is_ignored(self, manager, monkeypatch):
        monkeypatch.setenv("HEARING_PORT", "not-a-port")

        config = manager.load_config()

        assert config.server.port == 5000

    def test_config_file_then_environment(self, manager, monkeypatch, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({
            "app": {"session_ttl_seconds": 600, "jwt_secret_key": STRONG_SECRET},
            "server": {"port": 9000, "host": "0.0.0.0"},
        }))
        monkeypatch.setenv("HEARING_CONFIG_FILE", str(config_file))
        monkeypatch.setenv("HEARING_PORT", "9100")

        config = manager.load_config()

        assert config.app.session_ttl_seconds == 600
        assert config.server.host == "0.0.0.0"
        assert config.server.port == 9100  # environment wins

    def test_missing_config_file_falls_back_to_defaults(self, manager, monkeypatch, tmp_path):
        monkeypatch.setenv("HEARING_CONFIG_FILE", str(tmp_path / "absent.json"))

        config = manager.load_config()

        assert config.server.port == 5000

    def test_round_trip_dict(self, manager):
        config = manager.load_config()

        rebuilt = HearingConfig.from_dict(config.to_dict())

        assert rebuilt == config

    def test_weak_configured_secret_exits(self, manager, monkeypatch):
        monkeypatch.setenv("HEARING_JWT_SECRET_KEY", "hearing-test-secret-key")

        with pytest.raises(SystemExit):
            manager.load_config()


@pytest.mark.unit
class TestJwtSecretValidation:

    @pytest.mark.parametrize("secret", [
        "",
        "secret",
        "short-but-random-Xy7",
        "a" * 40,
        "abababababababababababababababababab",
    ])
    def test_rejects_insecure_secrets(self, secret):
        with pytest.raises(SystemExit):
            _validate_jwt_secret_key(secret)

    def test_accepts_strong_secret(self):
        _validate_jwt_secret_key(STRONG_SECRET)
