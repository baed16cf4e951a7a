"""
Park Master data models
Pydantic models for records, facility settings and API payloads
"""

from .enums import LogLevel, PaymentStatus, VehicleType, ViewMode
from .records import (
    Credentials,
    ExitRequest,
    FacilitySettings,
    LoginRequest,
    PricingTier,
    generate_uuid7,
    utc_now_iso,
)
from .responses import ErrorResponse, HealthResponse, LoginResponse, OperationResponse

__all__ = [
    # Enums
    "LogLevel",
    "PaymentStatus",
    "VehicleType",
    "ViewMode",

    # Records and settings
    "Credentials",
    "FacilitySettings",
    "PricingTier",

    # Requests and responses
    "ErrorResponse",
    "ExitRequest",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "OperationResponse",

    # Helpers
    "generate_uuid7",
    "utc_now_iso",
]
