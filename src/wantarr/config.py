"""Configuration loading for wantarr CLI."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Self

DEFAULT_LOG_LEVEL = "info"


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing."""


class QualityDefinitionNotFoundError(ConfigurationError):
    """Raised when a quality tier in use has no size definition."""


@dataclass
class LibraryConfig:
    """Location of the library snapshot used for lookups."""

    path: Path


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = DEFAULT_LOG_LEVEL


def _config_file_path() -> Path:
    """Get the default config file path."""
    return Path.home() / ".config" / "wantarr" / "config.toml"


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a config table, empty when absent."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigurationError(f"Invalid config file: [{name}] must be a table")
    return section


def _parse_library_from_dict(data: dict[str, Any]) -> LibraryConfig | None:
    """Parse LibraryConfig from a config dictionary.

    Args:
        data: The full config dictionary

    Returns:
        LibraryConfig instance, or None when no path is set

    Raises:
        ConfigurationError: If [library] is not a table
    """
    library = _section(data, "library")
    if not library.get("path"):
        return None
    return LibraryConfig(path=Path(library["path"]).expanduser())


def _parse_library_from_env(base: LibraryConfig | None) -> LibraryConfig | None:
    """Parse LibraryConfig from environment variables.

    Args:
        base: Base LibraryConfig to use when the variable is unset

    Returns:
        LibraryConfig instance with environment overrides
    """
    library_path = os.environ.get("WANTARR_LIBRARY_PATH")
    if not library_path:
        return base
    return LibraryConfig(path=Path(library_path).expanduser())


def _parse_logging_from_dict(data: dict[str, Any]) -> LoggingConfig:
    """Parse LoggingConfig from a config dictionary."""
    logging_data = _section(data, "logging")
    return LoggingConfig(level=str(logging_data.get("level", DEFAULT_LOG_LEVEL)))


def _parse_logging_from_env(base: LoggingConfig) -> LoggingConfig:
    """Parse LoggingConfig from environment variables."""
    level = os.environ.get("WANTARR_LOG_LEVEL")
    if not level:
        return base
    return LoggingConfig(level=level)


@dataclass
class Config:
    """Application configuration."""

    library: LibraryConfig | None = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls) -> Self:
        """Load configuration from environment and config file.

        Configuration precedence (highest to lowest):
        1. Environment variables
        2. Config file (~/.config/wantarr/config.toml)

        Environment variables:
        - WANTARR_LIBRARY_PATH
        - WANTARR_LOG_LEVEL

        Returns:
            Config instance with loaded values

        Raises:
            ConfigurationError: If config file exists but is invalid
        """
        config = cls()

        config_file = _config_file_path()
        if config_file.exists():
            config = cls._load_from_file(config_file)

        return cls._load_from_env(config)

    @classmethod
    def _load_from_file(cls, path: Path) -> Self:
        """Load configuration from TOML file.

        Raises:
            ConfigurationError: If file cannot be parsed
        """
        data = _load_toml_file(path)
        return cls(
            library=_parse_library_from_dict(data),
            logging=_parse_logging_from_dict(data),
        )

    @classmethod
    def _load_from_env(cls, base: Self) -> Self:
        """Override configuration with environment variables."""
        return cls(
            library=_parse_library_from_env(base.library),
            logging=_parse_logging_from_env(base.logging),
        )

    def require_library(self) -> LibraryConfig:
        """Get library config, raising if not configured.

        Returns:
            LibraryConfig instance

        Raises:
            ConfigurationError: If no library snapshot is configured
        """
        if self.library is None:
            raise ConfigurationError(
                "No library is configured. Pass --library, set the "
                "WANTARR_LIBRARY_PATH environment variable, or create "
                "~/.config/wantarr/config.toml"
            )
        return self.library


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load and parse a TOML file.

    Raises:
        ConfigurationError: If file cannot be parsed
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid config file: {e}") from e
