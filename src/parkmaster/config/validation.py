"""
Configuration Validation and Loading
Handles YAML loading, environment overrides, and validation
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigError
from .models import AppConfig

MAX_CONFIG_SIZE = 1024 * 1024

# Environment variable -> dotted config path
ENV_OVERRIDES = {
    "PORT": "api.port",
    "PARKMASTER_HOST": "api.host",
    "PARKMASTER_DATA_DIR": "data_dir",
    "PARKMASTER_LOG_LEVEL": "log_level",
}


class ConfigValidator:
    """Handles configuration file validation and security checks"""

    @staticmethod
    def validate_file_security(config_path: Path) -> None:
        """Validate configuration file meets security requirements"""
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        if config_path.suffix.lower() not in ['.yaml', '.yml']:
            raise ConfigError(f"Invalid config file extension: {config_path.suffix}")

        if config_path.stat().st_size > MAX_CONFIG_SIZE:
            raise ConfigError("Configuration file too large (max 1MB)")


class ConfigLoader:
    """Builds AppConfig from YAML files, dictionaries and the environment"""

    @staticmethod
    def load_from_yaml_file(config_path: Union[str, Path],
                            environ: Optional[Mapping[str, str]] = None) -> AppConfig:
        """
        Load configuration from YAML file with security validation

        Raises:
            ConfigError: File missing, oversized, unparsable or invalid
        """
        config_path = Path(config_path)
        ConfigValidator.validate_file_security(config_path)

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                yaml_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if not isinstance(yaml_data, dict):
            raise ConfigError("Configuration file must contain a YAML dictionary")

        config = ConfigLoader.load_from_data(yaml_data, environ)
        config.config_loaded_from = str(config_path)

        logging.info(f"Loaded configuration from {config_path}")
        return config

    @staticmethod
    def load_from_data(data: Dict[str, Any],
                       environ: Optional[Mapping[str, str]] = None) -> AppConfig:
        """Validate a configuration dictionary after applying environment overrides"""
        merged = apply_env_overrides(data, os.environ if environ is None else environ)
        try:
            return AppConfig.model_validate(merged)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


def apply_env_overrides(data: Dict[str, Any], environ: Mapping[str, str]) -> Dict[str, Any]:
    """Copy of ``data`` with ENV_OVERRIDES values written into it"""
    merged: Dict[str, Any] = {**data}
    for env_key, dotted in ENV_OVERRIDES.items():
        value = environ.get(env_key)
        if value is None or value == "":
            continue

        *parents, leaf = dotted.split(".")
        target = merged
        for part in parents:
            section = target.get(part)
            section = {**section} if isinstance(section, dict) else {}
            target[part] = section
            target = section
        target[leaf] = value.upper() if leaf == "log_level" else value

    return merged
