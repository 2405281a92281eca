"""
P4Bridge Configuration Manager.

Centralized configuration with:
- Schema-driven validation
- Environment variable (and .env) override
- Optional JSON config file
- Secret masking for logs and status output
"""

import json
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv

from p4bridge.shared.gate import GateLogger
from p4bridge.CommandGate.models import CommandConfig, ConnectionConfig

_log = GateLogger.get("Config")

from p4bridge.Config.schema import (
    CONFIG_SCHEMA,
    ConfigCategory,
    ConfigField,
    ConfigType,
    get_schema_by_key,
    get_schema_by_category,
)


def _env_file() -> Path:
    return Path(os.environ.get("P4BRIDGE_ENV_FILE", Path.cwd() / ".env"))


def _config_json() -> Optional[Path]:
    path = os.environ.get("P4BRIDGE_CONFIG_JSON")
    return Path(path) if path else None


class ConfigManager:
    """
    Manages P4Bridge configuration.

    Priority order:
    1. Environment variables (including .env)
    2. config.json (when P4BRIDGE_CONFIG_JSON is set)
    3. Schema defaults
    """

    def __init__(self):
        self._cache: Dict[str, Any] = {}
        self._loaded = False
        self._load()

    def _load(self):
        """Load configuration from all sources."""
        load_dotenv(_env_file())

        json_config = {}
        json_path = _config_json()
        if json_path and json_path.exists():
            try:
                with open(json_path, encoding="utf-8") as f:
                    json_config = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                _log.warning(f"Could not read {json_path}: {e}")

        for field in CONFIG_SCHEMA:
            # Priority: env var > json config > default
            value = os.environ.get(field.env_var)

            if value is None and field.key in json_config:
                value = json_config[field.key]

            if value is None:
                value = field.default

            self._cache[field.key] = self._convert_type(value, field.config_type)

        self._loaded = True

    def _convert_type(self, value: Any, config_type: ConfigType) -> Any:
        """Convert value to appropriate type."""
        if value is None:
            return None

        try:
            if config_type == ConfigType.INTEGER:
                return int(value)
            elif config_type == ConfigType.BOOLEAN:
                if isinstance(value, bool):
                    return value
                return str(value).lower() in ("true", "1", "yes", "on")
            elif config_type == ConfigType.LIST:
                if isinstance(value, list):
                    return value
                return [v.strip() for v in str(value).split(",") if v.strip()]
            else:
                return str(value)
        except (ValueError, TypeError):
            return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        if not self._loaded:
            self._load()
        return self._cache.get(key, default)

    def get_all(self, include_secrets: bool = False) -> Dict[str, Any]:
        """Get all configuration values."""
        result = {}
        for field in CONFIG_SCHEMA:
            value = self._cache.get(field.key)
            if field.sensitive and not include_secrets:
                result[field.key] = "****" if value else None
            else:
                result[field.key] = value
        return result

    def get_status(self) -> Dict[str, Any]:
        """Get configuration status with missing/invalid checks."""
        is_valid, errors = self.validate()
        missing = [
            field.key for field in CONFIG_SCHEMA
            if field.required and self._cache.get(field.key) in (None, "")
        ]
        return {
            "status": "ok" if is_valid else "incomplete",
            "missing": missing,
            "errors": errors,
            "total_count": len(CONFIG_SCHEMA),
        }

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Validate configuration.

        Returns:
            (is_valid, list of error messages)
        """
        errors = []

        for field in CONFIG_SCHEMA:
            value = self._cache.get(field.key)

            if field.required and (value is None or value == ""):
                errors.append(f"Required config missing: {field.key}")
                continue

            if value and field.validation:
                if not re.match(field.validation, str(value)):
                    errors.append(f"Invalid format for {field.key}")

            if value and field.options and str(value).lower() not in [o.lower() for o in field.options]:
                errors.append(f"Invalid option for {field.key}: {value}")

            if field.config_type == ConfigType.INTEGER and value is not None and not isinstance(value, int):
                errors.append(f"{field.key} must be an integer")

        return len(errors) == 0, errors

    # ==================== Typed views ====================

    def get_connection_config(self) -> ConnectionConfig:
        """Build the immutable backend connection settings."""
        return ConnectionConfig(
            port=self.get("P4PORT"),
            user=self.get("P4USER"),
            password=self.get("P4PASSWD") or "",
            client=self.get("P4CLIENT"),
        )

    def get_command_config(self) -> CommandConfig:
        """Build executor settings."""
        return CommandConfig(
            binary=self.get("P4_BINARY"),
            workspace_root=self.get("P4_WORKSPACE_ROOT"),
            default_timeout_seconds=self.get("P4_COMMAND_TIMEOUT"),
        )

    def is_development(self) -> bool:
        return str(self.get("APP_ENV", "production")).lower() == "development"


# Global instance
_manager: Optional[ConfigManager] = None


def get_manager() -> ConfigManager:
    """Get or create the global ConfigManager."""
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager


def reload() -> ConfigManager:
    """Reload configuration from the environment and files."""
    global _manager
    _manager = ConfigManager()
    return _manager


# Convenience functions
def get(key: str, default: Any = None) -> Any:
    """Get a config value."""
    return get_manager().get(key, default)


def get_all(include_secrets: bool = False) -> Dict:
    """Get all config values."""
    return get_manager().get_all(include_secrets)


def get_status() -> Dict:
    """Get config status."""
    return get_manager().get_status()


def validate() -> Tuple[bool, List[str]]:
    """Validate configuration."""
    return get_manager().validate()


def get_connection_config() -> ConnectionConfig:
    return get_manager().get_connection_config()


def get_command_config() -> CommandConfig:
    return get_manager().get_command_config()


def is_development() -> bool:
    return get_manager().is_development()


__all__ = [
    "CONFIG_SCHEMA",
    "ConfigCategory",
    "ConfigField",
    "ConfigManager",
    "ConfigType",
    "get",
    "get_all",
    "get_command_config",
    "get_connection_config",
    "get_manager",
    "get_schema_by_category",
    "get_schema_by_key",
    "get_status",
    "is_development",
    "reload",
    "validate",
]
