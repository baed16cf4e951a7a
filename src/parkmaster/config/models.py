"""
Service Configuration Models
Pydantic models for Park Master service configuration with validation
"""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.enums import LogLevel


class APISettings(BaseModel):
    """HTTP server settings"""

    host: str = Field("0.0.0.0", description="Bind address")
    port: int = Field(3001, ge=1, le=65535, description="Listen port")
    cors_enabled: bool = Field(True, description="Enable CORS middleware")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")


class AppConfig(BaseModel):
    """
    Complete Park Master service configuration

    Loaded from YAML when a file is given, otherwise defaults; environment
    variables override either.
    """
    model_config = ConfigDict(
        use_enum_values=True,
        validate_assignment=True,
        validate_default=True,
        extra="forbid",
    )

    data_dir: Path = Field(default_factory=lambda: Path("data"), description="Directory holding the JSON collections")
    api: APISettings = Field(default_factory=APISettings)
    log_level: LogLevel = Field(LogLevel.INFO, description="Logging level")

    # Runtime state (not serialized)
    config_loaded_from: Optional[str] = Field(default=None, exclude=True)
