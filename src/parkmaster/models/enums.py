"""
Model Enumerations
Common enum types used throughout Park Master
"""

from enum import Enum


class VehicleType(str, Enum):
    """Vehicle type tags priced by the built-in default settings"""
    CAR = "car"
    BIKE = "bike"
    RICKSHAW = "rickshaw"


class PaymentStatus(str, Enum):
    """Subscription payment state of a permanent client"""
    UNPAID = "unpaid"
    PAID = "paid"


class ViewMode(str, Enum):
    """Display preference for the operator dashboard"""
    GRID = "grid"
    LIST = "list"


class LogLevel(str, Enum):
    """Enumeration for logging levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
