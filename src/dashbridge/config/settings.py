"""Configuration management for dashbridge.

Loads settings from a YAML configuration file with environment variable
overrides for deployment-specific values. Supports .env files.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/dashbridge.yaml")
UNKNOWN_VERSION = "UNKNOWN"


class ServerConfig(BaseModel):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=9999, ge=1, le=65535)
    env_name: str = Field(default="development", description="Environment name announced to clients")
    static_dir: str | None = Field(default="client")
    version_file: str = Field(default="VERSION")


class BackendConfig(BaseModel):
    base_url: str = Field(default="http://localhost:10000")
    timeout: float | None = Field(default=None, gt=0)


class AccountsConfig(BaseModel):
    host: str = Field(default="accounts.continuuity.com")
    port: int = Field(default=443, ge=1, le=65535)
    timeout: float = Field(default=10.0, gt=0, description="Socket timeout for destination listing")


class VersionCheckConfig(BaseModel):
    host: str = Field(default="www.continuuity.com")
    port: int = Field(default=80, ge=1, le=65535)
    path: str = Field(default="/version")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for the dashbridge server.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "DASHBRIDGE_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    credential_file: str = Field(default=".credential")

    server: ServerConfig = Field(default_factory=ServerConfig)
    backend: BackendConfig = Field(default_factory=BackendConfig)
    accounts: AccountsConfig = Field(default_factory=AccountsConfig)
    version_check: VersionCheckConfig = Field(default_factory=VersionCheckConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Values present in the YAML file are passed as init kwargs and so win
    over the environment; env vars fill in whatever the file leaves out.

    Priority: YAML file > env vars > .env file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    return Settings(**yaml_data)


def read_version(path: Path | str) -> str:
    """Read the server version from a VERSION file, or ``UNKNOWN``."""
    try:
        return Path(path).read_text(encoding="utf-8").strip()
    except OSError:
        logger.info("No version file at %s", path)
        return UNKNOWN_VERSION
