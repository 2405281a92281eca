"""
Configuration schema for P4Bridge.

Defines all configurable options with metadata for validation
and documentation.
"""

from enum import Enum
from typing import Optional, List, Any
from dataclasses import dataclass


class ConfigType(Enum):
    """Configuration value types."""
    STRING = "string"
    SECRET = "secret"      # Masked in output, never logged
    INTEGER = "integer"
    BOOLEAN = "boolean"
    PATH = "path"          # File system path
    URL = "url"
    LIST = "list"          # Comma-separated values


class ConfigCategory(Enum):
    """Configuration categories for grouping."""
    PERFORCE = "perforce"
    SERVER = "server"
    SECURITY = "security"
    ADAPTER = "adapter"


@dataclass
class ConfigField:
    """Definition of a configuration field."""
    key: str
    description: str
    config_type: ConfigType
    category: ConfigCategory
    required: bool = False
    default: Any = None
    env_var: str = None          # Override env var name (defaults to key)
    validation: str = None       # Regex pattern
    options: List[str] = None    # For enumerated types
    sensitive: bool = False

    def __post_init__(self):
        if self.env_var is None:
            self.env_var = self.key
        if self.config_type == ConfigType.SECRET:
            self.sensitive = True


# ==================== Schema Definition ====================

CONFIG_SCHEMA: List[ConfigField] = [
    # === Perforce ===
    ConfigField(
        key="P4PORT",
        description="Perforce server address (host:port)",
        config_type=ConfigType.STRING,
        category=ConfigCategory.PERFORCE,
        required=True,
        default="localhost:1666",
    ),
    ConfigField(
        key="P4USER",
        description="Perforce user the gateway runs commands as",
        config_type=ConfigType.STRING,
        category=ConfigCategory.PERFORCE,
        required=True,
        default="super",
    ),
    ConfigField(
        key="P4PASSWD",
        description="Password or ticket for P4USER",
        config_type=ConfigType.SECRET,
        category=ConfigCategory.PERFORCE,
        required=False,
        default="",
    ),
    ConfigField(
        key="P4CLIENT",
        description="Perforce workspace (client) name",
        config_type=ConfigType.STRING,
        category=ConfigCategory.PERFORCE,
        required=True,
        default="p4bridge-client",
    ),
    ConfigField(
        key="P4_BINARY",
        description="Perforce command-line client executable",
        config_type=ConfigType.STRING,
        category=ConfigCategory.PERFORCE,
        required=False,
        default="p4",
    ),
    ConfigField(
        key="P4_WORKSPACE_ROOT",
        description="Working directory for p4 commands (workspace root)",
        config_type=ConfigType.PATH,
        category=ConfigCategory.PERFORCE,
        required=False,
        default="/workspace",
    ),
    ConfigField(
        key="P4_COMMAND_TIMEOUT",
        description="Timeout in seconds for a single p4 command",
        config_type=ConfigType.INTEGER,
        category=ConfigCategory.PERFORCE,
        required=False,
        default=30,
    ),

    # === Server ===
    ConfigField(
        key="HOST",
        description="Server bind address",
        config_type=ConfigType.STRING,
        category=ConfigCategory.SERVER,
        required=False,
        default="0.0.0.0",
    ),
    ConfigField(
        key="PORT",
        description="Server port",
        config_type=ConfigType.INTEGER,
        category=ConfigCategory.SERVER,
        required=False,
        default=3000,
    ),
    ConfigField(
        key="LOG_LEVEL",
        description="Logging verbosity",
        config_type=ConfigType.STRING,
        category=ConfigCategory.SERVER,
        required=False,
        default="INFO",
        options=["DEBUG", "INFO", "WARNING", "ERROR"],
    ),
    ConfigField(
        key="APP_ENV",
        description="Runtime mode; development exposes internal error details",
        config_type=ConfigType.STRING,
        category=ConfigCategory.SERVER,
        required=False,
        default="production",
        options=["development", "production"],
    ),

    # === Security ===
    ConfigField(
        key="RATE_LIMIT_MAX_REQUESTS",
        description="Requests allowed per client address per window",
        config_type=ConfigType.INTEGER,
        category=ConfigCategory.SECURITY,
        required=False,
        default=100,
    ),
    ConfigField(
        key="RATE_LIMIT_WINDOW_SECONDS",
        description="Rate limit sliding window length in seconds",
        config_type=ConfigType.INTEGER,
        category=ConfigCategory.SECURITY,
        required=False,
        default=900,
    ),
    ConfigField(
        key="CORS_ALLOWED_ORIGINS",
        description="CORS allowed origins (comma-separated)",
        config_type=ConfigType.LIST,
        category=ConfigCategory.SECURITY,
        required=False,
        default="*",
    ),

    # === Adapter ===
    ConfigField(
        key="PERFORCE_API_URL",
        description="Base URL of the REST gateway used by the MCP tool adapter",
        config_type=ConfigType.URL,
        category=ConfigCategory.ADAPTER,
        required=False,
        default="http://localhost:3000/api",
        validation=r"^https?://.*",
    ),
    ConfigField(
        key="PERFORCE_API_TIMEOUT",
        description="HTTP timeout in seconds for adapter requests",
        config_type=ConfigType.INTEGER,
        category=ConfigCategory.ADAPTER,
        required=False,
        default=30,
    ),
]


def get_schema_by_key(key: str) -> Optional[ConfigField]:
    """Get schema field by key."""
    for field in CONFIG_SCHEMA:
        if field.key == key:
            return field
    return None


def get_schema_by_category(category: ConfigCategory) -> List[ConfigField]:
    """Get all fields in a category."""
    return [f for f in CONFIG_SCHEMA if f.category == category]


def get_required_fields() -> List[ConfigField]:
    """Get all required fields."""
    return [f for f in CONFIG_SCHEMA if f.required]
