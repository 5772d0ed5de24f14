"""
Configuration management using Pydantic for validation.

This module provides type-safe configuration loading and validation
for geohash range queries.
"""
import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from geoquery.utils.exceptions import ConfigurationError


class QueryConfig(BaseModel):
    """Settings shared by the query service and the CLI."""
    model_config = ConfigDict(extra='forbid')

    geohash_field: str = Field("g", min_length=1, description="Record field holding the geohash")
    geohash_precision: int = Field(10, ge=1, le=22, description="Characters stored per location")
    validate_inputs: bool = Field(True, description="Reject invalid locations and radii")
    log_level: str = Field("INFO", description="Logging level name")
    json_logs: bool = Field(False, description="Emit JSON logs instead of console output")

    @field_validator('log_level')
    @classmethod
    def check_log_level(cls, v):
        """Normalize and check the logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


def load_config(config_path: Path) -> QueryConfig:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Validated QueryConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is malformed
        ConfigurationError: If the document is not a mapping
        ValidationError: If config validation fails

    Example:
        >>> config = load_config(Path("config/geoquery.yaml"))
        >>> print(config.geohash_field, config.geohash_precision)
        g 10
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Config root must be a mapping, got {type(config_dict).__name__}"
        )

    return QueryConfig(**config_dict)


def get_default_config() -> QueryConfig:
    """Get default configuration."""
    return QueryConfig()
