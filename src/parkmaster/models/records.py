"""
Facility settings and request models for Park Master
Field names are camelCase to match the persisted JSON documents
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from uuid_utils import uuid7

from .enums import VehicleType, ViewMode


def generate_uuid7() -> str:
    """Generate UUIDv7 for time-ordered unique identifiers using uuid-utils"""
    return str(uuid7())


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# Facility settings
class PricingTier(BaseModel):
    """Pricing for one vehicle type"""
    baseHours: Union[int, float] = Field(..., ge=0, description="Hours covered by the base fee")
    baseFee: Union[int, float] = Field(..., ge=0, description="Fee for the base duration")
    extraHourFee: Union[int, float] = Field(..., ge=0, description="Fee per hour beyond the base duration")


class Credentials(BaseModel):
    """Operator login credential"""
    username: str = Field(..., description="Operator username")
    password: str = Field(..., description="Operator password")


def _default_pricing() -> Dict[str, PricingTier]:
    return {
        VehicleType.CAR.value: PricingTier(baseHours=2, baseFee=50, extraHourFee=25),
        VehicleType.BIKE.value: PricingTier(baseHours=2, baseFee=20, extraHourFee=10),
        VehicleType.RICKSHAW.value: PricingTier(baseHours=2, baseFee=30, extraHourFee=15),
    }


class FacilitySettings(BaseModel):
    """
    Facility-wide settings with the built-in defaults

    Instantiating with no arguments yields the default settings document
    that is persisted on first read.
    """
    model_config = ConfigDict(extra="allow")

    siteName: str = Field(default="Park Master Pro", description="Site display name")
    pricing: Dict[str, PricingTier] = Field(default_factory=_default_pricing, description="Pricing keyed by vehicle type")
    credentials: Credentials = Field(
        default_factory=lambda: Credentials(username="admin", password="admin123"),
        description="Operator login credential",
    )
    viewMode: ViewMode = Field(default=ViewMode.GRID, description="Dashboard view preference")

    def to_document(self) -> Dict[str, Any]:
        """Plain JSON document as stored on disk"""
        return self.model_dump(mode="json")


# Request bodies
class LoginRequest(BaseModel):
    """Operator login attempt"""
    username: str = Field("", description="Operator username")
    password: str = Field("", description="Operator password")


class ExitRequest(BaseModel):
    """Vehicle departure payload"""
    fee: Optional[Any] = Field(None, description="Fee supplied by the caller")
