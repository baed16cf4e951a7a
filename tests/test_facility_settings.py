"""
Unit tests for FacilitySettingsHolder
Built-in default, wholesale replacement and credential checks
"""

import json

import pytest

from parkmaster.services.facility_settings import SETTINGS_COLLECTION, FacilitySettingsHolder


@pytest.fixture
def settings(store):
    return FacilitySettingsHolder(store)


class TestGet:
    """Test default materialization"""

    @pytest.mark.asyncio
    async def test_default_settings(self, settings):
        """Empty store serves the built-in default"""
        current = await settings.get()

        assert current["siteName"] == "Park Master Pro"
        assert current["viewMode"] == "grid"
        assert current["credentials"] == {"username": "admin", "password": "admin123"}
        assert current["pricing"]["car"] == {"baseHours": 2, "baseFee": 50, "extraHourFee": 25}
        assert current["pricing"]["bike"] == {"baseHours": 2, "baseFee": 20, "extraHourFee": 10}
        assert current["pricing"]["rickshaw"] == {"baseHours": 2, "baseFee": 30, "extraHourFee": 15}

    @pytest.mark.asyncio
    async def test_default_is_persisted(self, settings, store):
        """First get writes the default; second get reads it back"""
        first = await settings.get()

        on_disk = json.loads(store.path_for(SETTINGS_COLLECTION).read_text())
        assert on_disk == first
        assert await settings.get() == first

    @pytest.mark.asyncio
    async def test_persisted_settings_are_not_rederived(self, settings, store):
        """Once stored, settings come from disk even if they differ from the default"""
        await store.save(SETTINGS_COLLECTION, {"siteName": "Custom"})

        assert await settings.get() == {"siteName": "Custom"}


class TestReplace:
    """Test wholesale replacement"""

    @pytest.mark.asyncio
    async def test_replace_returns_payload(self, settings):
        """Replace stores and echoes the new document"""
        new = {**settings.default_settings(), "siteName": "City Center Parking", "viewMode": "list"}

        assert await settings.replace(new) == new
        assert await settings.get() == new

    @pytest.mark.asyncio
    async def test_replace_does_not_merge(self, settings):
        """Omitted sub-fields are gone after replace"""
        await settings.get()

        await settings.replace({"siteName": "Bare"})

        assert await settings.get() == {"siteName": "Bare"}

    @pytest.mark.asyncio
    async def test_replace_performs_no_validation(self, settings):
        """Unknown view modes and odd pricing shapes are stored as given"""
        payload = {"viewMode": "hologram", "pricing": {"car": "free"}}

        assert await settings.replace(payload) == payload


class TestVerifyCredential:
    """Test the plain credential comparison"""

    @pytest.mark.asyncio
    async def test_default_credential(self, settings):
        """Default admin credential is accepted on an empty store"""
        assert await settings.verify_credential("admin", "admin123") is True

    @pytest.mark.asyncio
    async def test_wrong_password(self, settings):
        """Any mismatch is rejected"""
        assert await settings.verify_credential("admin", "nope") is False
        assert await settings.verify_credential("root", "admin123") is False

    @pytest.mark.asyncio
    async def test_replaced_credential(self, settings):
        """Verification follows the stored credential"""
        await settings.replace({**settings.default_settings(), "credentials": {"username": "ops", "password": "s3cret"}})

        assert await settings.verify_credential("ops", "s3cret") is True
        assert await settings.verify_credential("admin", "admin123") is False

    @pytest.mark.asyncio
    async def test_missing_credentials_reject(self, settings):
        """Settings replaced without credentials reject every login"""
        await settings.replace({"siteName": "No login"})

        assert await settings.verify_credential("admin", "admin123") is False

    @pytest.mark.asyncio
    async def test_verify_materializes_default(self, settings, store):
        """Checking a credential on an empty store persists the default"""
        await settings.verify_credential("admin", "x")

        assert store.path_for(SETTINGS_COLLECTION).exists()
