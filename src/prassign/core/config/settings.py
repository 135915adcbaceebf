"""Configuration management for prassign."""
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PRAssignConfig(BaseSettings):
    """Main configuration for the reviewer assignment service.

    Configuration can be loaded from:
    1. Environment variables (prefixed with PRASSIGN_)
    2. YAML configuration file (prassign.yaml)
    3. Default values
    """

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host address")
    api_port: int = Field(default=8080, description="API port")

    # Database Configuration
    storage: str = Field(default="sqlite", description="Storage backend (sqlite or postgresql)")
    db_path: str = Field(default="./prassign.db", description="Database file path for SQLite")
    db_url: Optional[str] = Field(default=None, description="Database URL for PostgreSQL")
    isolation_level: str = Field(
        default="SERIALIZABLE",
        description="Transaction isolation level for PostgreSQL connections"
    )
    echo_sql: bool = Field(default=False, description="Log emitted SQL statements")

    # Assignment Configuration
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for reviewer selection (random when unset)"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_file: Optional[str] = Field(default=None, description="Log file path")

    model_config = SettingsConfigDict(
        env_prefix="PRASSIGN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    def get_database_url(self) -> str:
        """Get the database URL based on configuration.

        Returns:
            Database URL string
        """
        if self.db_url:
            return self.db_url

        if self.storage == "sqlite":
            if self.db_path == ":memory:":
                return "sqlite+aiosqlite:///:memory:"
            # Ensure path is absolute
            db_path = Path(self.db_path)
            if not db_path.is_absolute():
                db_path = Path.cwd() / db_path
            return f"sqlite+aiosqlite:///{db_path}"
        elif self.storage == "postgresql":
            raise ValueError(
                "PostgreSQL selected but db_url not provided. "
                "Set PRASSIGN_DB_URL or db_url in config file."
            )
        else:
            raise ValueError(f"Unknown storage backend: {self.storage}")

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "PRAssignConfig":
        """Load configuration from a YAML mapping of field names to values.

        An empty file yields the defaults. Environment variables still apply
        to fields the file does not set.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is not a mapping or names unknown fields
        """
        config_path = Path(config_path)
        if not config_path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        data = yaml.safe_load(config_path.read_text()) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {config_path}")

        unknown = sorted(set(data) - set(cls.model_fields))
        if unknown:
            raise ValueError(f"Unknown configuration keys in {config_path}: {', '.join(unknown)}")

        return cls(**data)

    def to_yaml(self, config_path: str | Path) -> None:
        """Write the configuration as YAML, leaving unset optional fields out."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(
            yaml.safe_dump(self.model_dump(exclude_none=True), sort_keys=False)
        )

    @classmethod
    def create_default_config(cls, config_path: str | Path) -> "PRAssignConfig":
        """Write a configuration file holding the defaults and return it."""
        config = cls()
        config.to_yaml(config_path)
        return config


DEFAULT_CONFIG_FILE = "prassign.yaml"
CONFIG_FILE_ENV = "PRASSIGN_CONFIG_FILE"

# Global configuration instance
_config: Optional[PRAssignConfig] = None


def find_config_file() -> Optional[Path]:
    """Locate the configuration file used when none is given explicitly.

    ``$PRASSIGN_CONFIG_FILE`` wins when set; otherwise ``prassign.yaml`` in
    the working directory is used if present.
    """
    explicit = os.environ.get(CONFIG_FILE_ENV)
    if explicit:
        return Path(explicit)

    candidate = Path(DEFAULT_CONFIG_FILE)
    return candidate if candidate.is_file() else None


def init_config(config_path: Optional[str | Path] = None) -> PRAssignConfig:
    """Initialize the global configuration.

    Args:
        config_path: YAML file to load; falls back to :func:`find_config_file`
            and then to environment variables and defaults

    Returns:
        PRAssignConfig instance
    """
    global _config

    path = Path(config_path) if config_path else find_config_file()
    _config = PRAssignConfig.from_yaml(path) if path else PRAssignConfig()
    return _config


def get_config() -> PRAssignConfig:
    """Get the global configuration, initializing it on first use."""
    if _config is None:
        return init_config()
    return _config
