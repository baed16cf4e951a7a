"""
Facility Settings Holder
Single settings document with a built-in default
"""

import copy
import logging
import secrets
from typing import Any, Dict

from ..models.records import FacilitySettings
from ..storage.record_store import RecordStore

SETTINGS_COLLECTION = "settings"


class FacilitySettingsHolder:
    """
    Reads and replaces the facility settings document

    Settings are handed out by value; the holder keeps no cached copy.
    """

    def __init__(self, store: RecordStore):
        self.store = store
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def default_settings() -> Dict[str, Any]:
        """Built-in default settings document"""
        return FacilitySettings().to_document()

    async def get(self) -> Dict[str, Any]:
        """Current settings, persisting the default on first access"""
        return await self.store.load(SETTINGS_COLLECTION, self.default_settings())

    async def replace(self, new_settings: Dict[str, Any]) -> Dict[str, Any]:
        """
        Overwrite the whole settings document

        No merge and no validation: sub-fields omitted from the payload are
        gone afterwards.
        """
        await self.store.save(SETTINGS_COLLECTION, new_settings)
        self.logger.info(f"Settings replaced (keys={sorted(new_settings.keys())})")
        return copy.deepcopy(new_settings)

    async def verify_credential(self, username: str, password: str) -> bool:
        """Plain comparison against the stored username/password pair"""
        settings = await self.get()

        credentials = settings.get("credentials") if isinstance(settings, dict) else None
        if not isinstance(credentials, dict):
            self.logger.warning("Stored settings carry no credentials, rejecting login")
            return False

        stored_user = credentials.get("username")
        stored_password = credentials.get("password")
        if not isinstance(stored_user, str) or not isinstance(stored_password, str):
            self.logger.warning("Stored credentials are incomplete, rejecting login")
            return False

        user_ok = secrets.compare_digest(str(username).encode(), stored_user.encode())
        password_ok = secrets.compare_digest(str(password).encode(), stored_password.encode())
        if user_ok and password_ok:
            return True

        self.logger.warning(f"Failed login attempt for user '{username}'")
        return False
