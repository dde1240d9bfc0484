"""Configuration management for dashbridge.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides for deployment-specific values
like backend and accounts hosts.
"""

from dashbridge.config.settings import Settings, load_settings, read_version

__all__ = ["Settings", "load_settings", "read_version"]
