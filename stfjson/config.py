"""
Configuration for stfjson.

Supports loading from:
1. Environment variables (highest priority)
2. YAML config file
3. Default values (fallback)
"""

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class ReaderConfig(BaseModel):
    """Chunk reader configuration."""

    # Agenda was a DOS program; exports are in the OEM code page.
    encoding: str = "cp437"


class BuilderConfig(BaseModel):
    """Document builder configuration."""

    default_date_format: int = Field(default=1, ge=1, le=12)
    echo_comments: bool = True


class OutputConfig(BaseModel):
    """Rendering configuration."""

    format: Literal["json", "yaml"] = "json"
    indent: int = Field(default=2, ge=0)
    ensure_ascii: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True


# Environment variable for each configurable field, by section
ENV_VARS: dict[str, dict[str, str]] = {
    "reader": {
        "encoding": "STFJSON_ENCODING",
    },
    "builder": {
        "default_date_format": "STFJSON_DEFAULT_DATE_FORMAT",
        "echo_comments": "STFJSON_ECHO_COMMENTS",
    },
    "output": {
        "format": "STFJSON_OUTPUT_FORMAT",
        "indent": "STFJSON_OUTPUT_INDENT",
        "ensure_ascii": "STFJSON_OUTPUT_ENSURE_ASCII",
    },
    "logging": {
        "level": "STFJSON_LOG_LEVEL",
        "log_to_file": "STFJSON_LOG_TO_FILE",
        "log_dir": "STFJSON_LOG_DIR",
        "file_rotation": "STFJSON_LOG_FILE_ROTATION",
        "file_retention": "STFJSON_LOG_FILE_RETENTION",
        "compression": "STFJSON_LOG_COMPRESSION",
        "serialize": "STFJSON_LOG_SERIALIZE",
    },
}


def _load_dotenv(env_file: str | Path | None) -> None:
    if env_file:
        load_dotenv(env_file)
    elif Path(".env").exists():
        load_dotenv()


def get_env(key: str, default: Any = None) -> Any:
    """Get environment variable with type conversion."""
    value = os.getenv(key)
    if value is None:
        return default
    if value == "":
        return default
    # bool before int, bool is an int subclass
    if isinstance(default, bool):
        return str(value).lower() in ("true", "1", "yes")
    if isinstance(default, int):
        return int(value)
    return value


class Config(BaseModel):
    """Main configuration."""

    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    builder: BuilderConfig = Field(default_factory=BuilderConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def _env_overrides(cls) -> dict[str, dict[str, Any]]:
        """Fields set through the environment, converted to each field's type."""
        defaults = cls()
        overrides: dict[str, dict[str, Any]] = {}
        for section, fields in ENV_VARS.items():
            section_defaults = getattr(defaults, section)
            for field, key in fields.items():
                if os.getenv(key):
                    default = getattr(section_defaults, field)
                    overrides.setdefault(section, {})[field] = get_env(key, default)
        return overrides

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load configuration from environment variables.

        Priority: .env file -> system environment variables -> defaults

        Args:
            env_file: Optional path to .env file (default: .env in working directory)

        Returns:
            Config instance

        Environment variables:
            STFJSON_ENCODING: Input encoding for byte streams
            STFJSON_DEFAULT_DATE_FORMAT: Date format index used until a {d} tag
            STFJSON_ECHO_COMMENTS: Report {S} comment chunks to the log
            STFJSON_OUTPUT_FORMAT: json or yaml
            STFJSON_OUTPUT_INDENT: Indentation width
            STFJSON_OUTPUT_ENSURE_ASCII: Escape non-ASCII characters in JSON
            STFJSON_LOG_LEVEL: Log level
            STFJSON_LOG_TO_FILE: Also write a rotating log file
            STFJSON_LOG_DIR: Directory for log files
        """
        _load_dotenv(env_file)
        return cls(**cls._env_overrides())

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        return cls(**(data or {}))

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Load configuration with priority: env vars > YAML > defaults.

        Each environment variable overrides only its own field, so the rest
        of a YAML section is kept.

        Args:
            yaml_path: Optional path to YAML config
            env_file: Optional path to .env file

        Returns:
            Config instance
        """
        if yaml_path and Path(yaml_path).exists():
            with open(yaml_path) as f:
                config_dict = yaml.safe_load(f) or {}
        else:
            config_dict = {}

        _load_dotenv(env_file)

        final_dict = {**config_dict}
        for section, fields in cls._env_overrides().items():
            final_dict[section] = {**(final_dict.get(section) or {}), **fields}

        return cls(**final_dict)
