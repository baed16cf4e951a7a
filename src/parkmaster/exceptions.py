"""
Exception hierarchy for Park Master
Typed failures surfaced by the record store and lifecycle services
"""

from typing import Optional


class ParkMasterError(Exception):
    """Base exception for all Park Master errors"""


class ConfigError(ParkMasterError):
    """Invalid or unreadable service configuration"""


class RecordNotFoundError(ParkMasterError):
    """Identifier-keyed lookup found no matching record"""

    def __init__(self, message: str, *, collection: str = "", record_id: Optional[str] = None):
        self.collection = collection
        self.record_id = record_id
        super().__init__(message)


class StorageFailureError(ParkMasterError):
    """
    Persisted collection is unreadable or unwritable

    Raised for every failure other than first-time absence, which the
    record store handles by writing the default value.
    """

    def __init__(self, message: str, *, collection: str = "", path: str = ""):
        self.collection = collection
        self.path = path
        super().__init__(message)


class MissingDateKeyError(ParkMasterError, ValueError):
    """Daily statistics record carries no date key"""
