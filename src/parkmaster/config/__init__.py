"""
Park Master configuration package
Pydantic models with YAML loading and environment overrides
"""

from .manager import ConfigManager
from .models import APISettings, AppConfig
from .validation import ConfigLoader, ConfigValidator

__all__ = [
    "APISettings",
    "AppConfig",
    "ConfigManager",
    "ConfigLoader",
    "ConfigValidator",
]
