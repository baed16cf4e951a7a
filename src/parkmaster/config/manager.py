"""
Configuration Manager
Resolves the active service configuration
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from .models import AppConfig
from .validation import ConfigLoader

CONFIG_PATH_ENV = "PARKMASTER_CONFIG"


class ConfigManager:
    """
    Loads configuration once and caches it

    Resolution order: explicit file, then $PARKMASTER_CONFIG, then defaults.
    Environment overrides apply in every case.
    """

    def __init__(self, config_file: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self.config_file = config_file
        self.environ = os.environ if environ is None else environ
        self._config: Optional[AppConfig] = None

    @property
    def config(self) -> AppConfig:
        """Get current configuration, loading if needed"""
        if self._config is None:
            self.load_config(self.config_file)
        return self._config

    def load_config(self, config_file: Optional[str] = None) -> AppConfig:
        """Load configuration from file or use defaults"""
        config_file = config_file or self.environ.get(CONFIG_PATH_ENV)

        if config_file:
            self._config = ConfigLoader.load_from_yaml_file(Path(config_file), self.environ)
        else:
            self._config = ConfigLoader.load_from_data({}, self.environ)
            logging.warning("No configuration file given, using defaults")

        return self._config

