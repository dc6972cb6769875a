"""Configuration management for tf-schema-diff using Pydantic.

Settings come from (lowest to highest precedence) model defaults, an optional
YAML file, ``TF_SCHEMA_DIFF_*`` environment variables and CLI overrides.
The oracle API key is read from ``CLAUDE_API_KEY`` or ``ANTHROPIC_API_KEY``
when not set explicitly.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from tf_schema_diff.exceptions import ConfigurationError

API_KEY_ENV_VARS = ("CLAUDE_API_KEY", "ANTHROPIC_API_KEY")


class OracleConfig(BaseModel):
    """Configuration for the rename-inference oracle."""

    api_key: str | None = Field(default=None, description="Oracle API key")
    base_url: str = Field(default="https://api.anthropic.com", description="Oracle API base URL")
    api_version: str = Field(default="2023-06-01", description="Value of the API version header")
    model: str = Field(default="claude-3-5-sonnet-latest", description="Model identifier")
    max_tokens: int = Field(default=1024, ge=1, le=8192, description="Maximum output tokens")
    max_retries: int = Field(
        default=5, ge=1, le=10, description="Maximum attempts per oracle call"
    )
    timeout: int = Field(default=120, ge=1, le=1200, description="Request timeout in seconds")
    retry_min_wait: float = Field(default=2.0, ge=0, description="Minimum retry backoff (s)")
    retry_max_wait: float = Field(default=60.0, ge=0, description="Maximum retry backoff (s)")
    on_error: str = Field(
        default="abort",
        description="What to do when an oracle call fails after retries (abort or record)",
    )

    @field_validator("base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate and normalize URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("on_error")
    @classmethod
    def validate_on_error(cls, v: str) -> str:
        valid = ["abort", "record"]
        v_lower = v.lower()
        if v_lower not in valid:
            raise ValueError(f"on_error must be one of: {', '.join(valid)}")
        return v_lower

    @model_validator(mode="after")
    def validate_waits(self) -> "OracleConfig":
        if self.retry_min_wait > self.retry_max_wait:
            raise ValueError("retry_min_wait must not exceed retry_max_wait")
        return self


class OutputConfig(BaseModel):
    """Report output configuration."""

    path: str = Field(default="output.json", description="Where the report is written")
    indent: int = Field(default=2, ge=0, le=8, description="JSON indentation")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Console log level")
    file_level: str = Field(default="DEBUG", description="File log level")
    format: str = Field(default="json", description="Log file format (json or console)")
    file: str | None = Field(default=None, description="Log file path")

    @field_validator("level", "file_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = ["json", "console"]
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(f"Log format must be one of: {', '.join(valid_formats)}")
        return v_lower


class DiffConfig(BaseSettings):
    """Main configuration for tf-schema-diff."""

    model_config = SettingsConfigDict(
        env_prefix="TF_SCHEMA_DIFF_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    oracle: OracleConfig = Field(default_factory=OracleConfig, description="Oracle settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Report output")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # YAML values arrive as init kwargs; environment variables outrank them
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @model_validator(mode="after")
    def load_api_key_from_env(self) -> "DiffConfig":
        """Fill the oracle API key from the well-known environment variables."""
        if not self.oracle.api_key:
            for var_name in API_KEY_ENV_VARS:
                value = os.environ.get(var_name)
                if value:
                    self.oracle.api_key = value
                    break
        return self


def load_config(config_path: str | Path | None = None) -> DiffConfig:
    """Load configuration, from a YAML file when one is given.

    Raises:
        ConfigurationError: If the file is missing, empty or invalid
    """
    if config_path is None:
        try:
            return DiffConfig()
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    return load_config_from_yaml(config_path)


def load_config_from_yaml(config_path: str | Path) -> DiffConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        DiffConfig: Loaded configuration

    Raises:
        ConfigurationError: If config file doesn't exist or is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not config_data:
        raise ConfigurationError(f"Empty configuration file: {config_path}")

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

    try:
        config_data = _expand_env_vars(config_data)
        return DiffConfig(**config_data)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def _expand_env_vars(data):
    """Recursively expand ``${VAR_NAME}`` values from the environment."""
    if isinstance(data, dict):
        return {k: _expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        if data.startswith("${") and data.endswith("}"):
            var_name = data[2:-1]
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(
                    f"Environment variable '{var_name}' not found. "
                    f"Please set it in your environment or .env file."
                )
            return env_value
        return data
    else:
        return data
