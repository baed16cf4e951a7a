"""
API response models
"""

from pydantic import BaseModel, Field

from .records import utc_now_iso


class HealthResponse(BaseModel):
    """Liveness check response"""
    status: str = Field(default="OK", description="Health status")
    timestamp: str = Field(default_factory=utc_now_iso, description="Response timestamp")


class ErrorResponse(BaseModel):
    """Unified error response model"""
    error: str = Field(..., description="Error message")


class LoginResponse(BaseModel):
    """Credential check result"""
    success: bool = Field(..., description="Whether the credential matched")
    message: str = Field(..., description="Human-readable result")


class OperationResponse(BaseModel):
    """Standard operation success response"""
    success: bool = Field(default=True, description="Operation status")
