"""
Configuration management for the Hearing Test API.

Defaults are layered with an optional JSON config file and then with
HEARING_* environment variables. The result is cached for the process.
"""

import json
import logging
import os
import secrets
import sys
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Dict, Any, Optional, List

# List of known weak/default JWT secrets that should be rejected
WEAK_JWT_SECRETS = {
    "hearing-test-secret-key",
    "your-secret-key-change-in-production",
    "secret",
    "key",
    "password",
    "jwt-secret",
    "secret-key",
    "change-me",
    "default",
    "test",
    "development",
    "dev",
    "demo",
    "example",
    "sample",
}


def _validate_jwt_secret_key(jwt_secret_key: str) -> None:
    """Validate JWT secret key security and reject weak/default keys.

    Args:
        jwt_secret_key: The JWT secret key to validate

    Raises:
        SystemExit: If the secret key is weak, default, or insecure
    """
    if not jwt_secret_key:
        logging.critical(
            "JWT secret key is empty - this is a critical security vulnerability"
        )
        sys.exit(1)

    if jwt_secret_key.lower() in WEAK_JWT_SECRETS:
        logging.critical(
            f"JWT secret key '{jwt_secret_key}' is a known weak/default secret. "
            f"Set HEARING_JWT_SECRET_KEY environment variable with a secure key."
        )
        sys.exit(1)

    if len(jwt_secret_key) < 32:
        logging.critical(
            f"JWT secret key is too short ({len(jwt_secret_key)} chars). "
            f"Minimum 32 characters required for security."
        )
        sys.exit(1)

    unique_chars = len(set(jwt_secret_key))
    if unique_chars < 8:
        logging.critical(
            f"JWT secret key has insufficient entropy ({unique_chars} unique characters). "
            f"Use a cryptographically secure random key."
        )
        sys.exit(1)

    logging.debug(
        f"JWT secret key validation passed ({len(jwt_secret_key)} chars, {unique_chars} unique)"
    )


def _env_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False
    auto_reload: bool = False


@dataclass
class AppConfig:
    """Main application configuration."""

    app_name: str = "Hearing Test API"
    description: str = "Multi-tenant API for occupational hearing-test records"

    # Session tokens
    jwt_secret_key: str = ""  # Must be set at runtime - no default for security
    jwt_algorithm: str = "HS256"
    session_ttl_seconds: int = 3600

    # Seeded credentials
    password_hash_iterations: int = 120_000  # PBKDF2 iterations

    # HTTP
    cors_origins: List[str] = field(
        default_factory=lambda: ["http://127.0.0.1:5000", "http://localhost:5000"]
    )
    max_request_bytes: int = 64 * 1024
    include_hsts: bool = False

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"


@dataclass
class HearingConfig:
    """Complete configuration for the Hearing Test API."""

    app: AppConfig
    server: ServerConfig

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "app": asdict(self.app),
            "server": asdict(self.server),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HearingConfig":
        """Create from dictionary."""
        return cls(
            app=AppConfig(**data.get("app", {})),
            server=ServerConfig(**data.get("server", {})),
        )


class ConfigManager:
    """Manages configuration loading and environment overrides."""

    # env var -> (section, field, converter)
    ENV_OVERRIDES = {
        "HEARING_JWT_SECRET_KEY": ("app", "jwt_secret_key", str),
        "HEARING_SESSION_TTL_SECONDS": ("app", "session_ttl_seconds", int),
        "HEARING_PASSWORD_HASH_ITERATIONS": ("app", "password_hash_iterations", int),
        "HEARING_LOG_LEVEL": ("app", "log_level", str.upper),
        "HEARING_LOG_TO_FILE": ("app", "log_to_file", _env_bool),
        "HEARING_LOG_DIR": ("app", "log_dir", str),
        "HEARING_MAX_REQUEST_BYTES": ("app", "max_request_bytes", int),
        "HEARING_CORS_ORIGINS": (
            "app",
            "cors_origins",
            lambda v: [o.strip() for o in v.split(",") if o.strip()],
        ),
        "HEARING_HOST": ("server", "host", str),
        "HEARING_PORT": ("server", "port", int),
        "HEARING_DEBUG": ("server", "debug", _env_bool),
    }

    def __init__(self):
        self.config_file: Optional[Path] = None
        self.config: Optional[HearingConfig] = None

    def get_config_file_path(self) -> Optional[Path]:
        """Get the path of the optional JSON config file."""
        config_file = os.getenv("HEARING_CONFIG_FILE")
        return Path(config_file) if config_file else None

    def _read_config_file(self) -> Dict[str, Any]:
        self.config_file = self.get_config_file_path()
        if self.config_file is None:
            return {}

        if not self.config_file.exists():
            logging.warning(f"Config file {self.config_file} not found, using defaults")
            return {}

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logging.warning(f"Failed to load config from {self.config_file}: {e}")
            return {}

        logging.info(f"Loaded configuration from {self.config_file}")
        return data

    def _apply_env_overrides(self, config: HearingConfig) -> None:
        for env_name, (section, field_name, convert) in self.ENV_OVERRIDES.items():
            raw = os.getenv(env_name)
            if raw is None or raw == "":
                continue
            try:
                value = convert(raw)
            except ValueError:
                logging.warning(f"Ignoring invalid value for {env_name}: {raw!r}")
                continue
            setattr(getattr(config, section), field_name, value)

    def create_config(self) -> HearingConfig:
        """Build configuration from defaults, config file and environment."""
        config = HearingConfig.from_dict(self._read_config_file())
        self._apply_env_overrides(config)

        if not config.app.jwt_secret_key:
            # Generate cryptographically secure 64-byte secret
            config.app.jwt_secret_key = secrets.token_urlsafe(64)
            logging.info("Generated new JWT secret key (not from environment)")
        else:
            logging.info("Using configured JWT secret key")

        _validate_jwt_secret_key(config.app.jwt_secret_key)
        return config

    def load_config(self) -> HearingConfig:
        """Load configuration once and return the cached instance afterwards."""
        if self.config is None:
            self.config = self.create_config()
        return self.config

    def reset(self) -> None:
        """Drop the cached configuration so the next load re-reads sources."""
        self.config = None
        self.config_file = None


# Global config manager instance
config_manager = ConfigManager()


def get_config() -> HearingConfig:
    """Get the current configuration."""
    return config_manager.load_config()


def reset_config() -> None:
    """Clear the cached configuration."""
    config_manager.reset()
