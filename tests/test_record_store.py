"""
Unit tests for RecordStore
Default initialization, atomic writes, failure surfacing and
per-collection serialization
"""

import asyncio
import json

import pytest

from parkmaster.exceptions import StorageFailureError
from parkmaster.storage.record_store import RecordStore


class TestLoad:
    """Test whole-collection reads"""

    @pytest.mark.asyncio
    async def test_missing_collection_returns_and_persists_default(self, store):
        """First load writes the default to disk"""
        contents = await store.load("vehicles", [])

        assert contents == []
        assert store.path_for("vehicles").exists()
        assert json.loads(store.path_for("vehicles").read_text()) == []

    @pytest.mark.asyncio
    async def test_default_falls_back_to_empty_list(self, store):
        """Omitted default means an empty collection"""
        assert await store.load("daily-stats") == []

    @pytest.mark.asyncio
    async def test_object_default(self, store):
        """Defaults may be single objects, not only lists"""
        default = {"siteName": "Lot A", "viewMode": "grid"}

        assert await store.load("settings", default) == default
        assert await store.load("settings", {"ignored": True}) == default

    @pytest.mark.asyncio
    async def test_default_is_copied(self, store):
        """Mutating the returned default never touches the caller's object"""
        default = {"pricing": {"car": {"baseFee": 50}}}

        contents = await store.load("settings", default)
        contents["pricing"]["car"]["baseFee"] = 999

        assert default["pricing"]["car"]["baseFee"] == 50
        assert (await store.load("settings"))["pricing"]["car"]["baseFee"] == 50

    @pytest.mark.asyncio
    async def test_existing_collection_is_read(self, store):
        """Persisted contents win over the default"""
        store.path_for("vehicles").write_text(json.dumps([{"id": "a"}]))

        assert await store.load("vehicles", []) == [{"id": "a"}]

    @pytest.mark.asyncio
    async def test_malformed_json_is_storage_failure(self, store):
        """Corrupt data is fatal and is not replaced by the default"""
        path = store.path_for("vehicles")
        path.write_text("{not json")

        with pytest.raises(StorageFailureError) as exc_info:
            await store.load("vehicles", [])

        assert exc_info.value.collection == "vehicles"
        assert exc_info.value.path == str(path)
        assert path.read_text() == "{not json"

    @pytest.mark.asyncio
    async def test_unreadable_collection_is_storage_failure(self, store):
        """A directory where the file should be cannot be read"""
        store.path_for("vehicles").mkdir()

        with pytest.raises(StorageFailureError):
            await store.load("vehicles", [])

    @pytest.mark.asyncio
    async def test_wrong_container_is_storage_failure(self, store):
        """Valid JSON of the wrong kind is rejected, not returned"""
        path = store.path_for("vehicles")
        path.write_text(json.dumps({"not": "a list"}))

        with pytest.raises(StorageFailureError) as exc_info:
            await store.load("vehicles", [])

        assert exc_info.value.collection == "vehicles"
        assert exc_info.value.path == str(path)
        assert json.loads(path.read_text()) == {"not": "a list"}

    @pytest.mark.asyncio
    async def test_object_collection_holding_list_is_storage_failure(self, store):
        """A single-object collection cannot load a list"""
        store.path_for("settings").write_text("[]")

        with pytest.raises(StorageFailureError):
            await store.load("settings", {"siteName": "Lot A"})

    @pytest.mark.asyncio
    async def test_entries_of_wrong_type_are_storage_failure(self, store):
        """item_type is enforced on every entry of a list collection"""
        store.path_for("vehicles").write_text(json.dumps([{"id": "1"}, 42, "car"]))

        assert await store.load("vehicles", []) == [{"id": "1"}, 42, "car"]
        with pytest.raises(StorageFailureError):
            await store.load("vehicles", [], item_type=dict)

    @pytest.mark.asyncio
    async def test_wrong_shape_aborts_transaction(self, store):
        """A transaction over a malformed collection never runs or saves"""
        store.path_for("vehicles").write_text("{}")

        with pytest.raises(StorageFailureError):
            async with store.transaction("vehicles", [], item_type=dict) as tx:
                tx.contents.append({"id": "1"})

        assert store.path_for("vehicles").read_text() == "{}"

    def test_invalid_collection_name_rejected(self, store):
        """Names cannot escape the data directory"""
        with pytest.raises(ValueError):
            store.path_for("../etc/passwd")


class TestSave:
    """Test whole-collection writes"""

    @pytest.mark.asyncio
    async def test_save_overwrites_whole_collection(self, store):
        """Save replaces, it never appends"""
        await store.save("vehicles", [{"id": "1"}, {"id": "2"}])
        await store.save("vehicles", [{"id": "3"}])

        assert await store.load("vehicles") == [{"id": "3"}]

    @pytest.mark.asyncio
    async def test_save_writes_indented_json(self, store):
        """Files are human-readable with two-space indentation"""
        await store.save("daily-stats", [{"date": "2026-03-01"}])

        assert store.path_for("daily-stats").read_text() == json.dumps([{"date": "2026-03-01"}], indent=2)

    @pytest.mark.asyncio
    async def test_failed_save_leaves_previous_contents(self, store):
        """Unserializable contents fail without touching the stored file"""
        await store.save("vehicles", [{"id": "1"}])

        with pytest.raises(StorageFailureError):
            await store.save("vehicles", [{"id": "2", "bad": object()}])

        assert await store.load("vehicles") == [{"id": "1"}]
        leftovers = [p.name for p in store.base_path.iterdir() if p.suffix == ".tmp"]
        assert leftovers == []

    def test_data_directory_created(self, tmp_path):
        """Store creates nested data directories on construction"""
        base = tmp_path / "nested" / "data"
        RecordStore(base)

        assert base.is_dir()


class TestTransaction:
    """Test serialized load/mutate/save cycles"""

    @pytest.mark.asyncio
    async def test_transaction_saves_mutation(self, store):
        """Contents are saved when the block exits normally"""
        async with store.transaction("vehicles", []) as tx:
            tx.contents.append({"id": "1"})

        assert await store.load("vehicles") == [{"id": "1"}]

    @pytest.mark.asyncio
    async def test_transaction_supports_reassignment(self, store):
        """Reassigning contents replaces the collection"""
        await store.save("permanent-clients", [{"id": "1"}, {"id": "2"}])

        async with store.transaction("permanent-clients", []) as tx:
            tx.contents = [c for c in tx.contents if c["id"] != "1"]

        assert await store.load("permanent-clients") == [{"id": "2"}]

    @pytest.mark.asyncio
    async def test_transaction_error_discards_mutation(self, store):
        """An exception inside the block saves nothing"""
        await store.save("vehicles", [{"id": "1"}])

        with pytest.raises(RuntimeError):
            async with store.transaction("vehicles", []) as tx:
                tx.contents.append({"id": "2"})
                raise RuntimeError("abort")

        assert await store.load("vehicles") == [{"id": "1"}]

    @pytest.mark.asyncio
    async def test_transactions_on_same_collection_are_serialized(self, store):
        """Second transaction waits for the first to save"""
        order = []

        async def first():
            async with store.transaction("counter", []) as tx:
                order.append("first-start")
                await asyncio.sleep(0.05)
                tx.contents.append(1)
                order.append("first-end")

        async def second():
            await asyncio.sleep(0.01)
            async with store.transaction("counter", []) as tx:
                order.append("second-start")
                tx.contents.append(2)

        await asyncio.gather(first(), second())

        assert order == ["first-start", "first-end", "second-start"]
        assert await store.load("counter") == [1, 2]

    @pytest.mark.asyncio
    async def test_concurrent_appends_are_not_lost(self, store):
        """Many overlapping load/mutate/save cycles keep every mutation"""

        async def append(n):
            async with store.transaction("counter", []) as tx:
                tx.contents.append(n)

        await asyncio.gather(*(append(n) for n in range(25)))

        assert sorted(await store.load("counter")) == list(range(25))

    @pytest.mark.asyncio
    async def test_lock_released_after_error(self, store):
        """A failed transaction does not block the next one"""
        with pytest.raises(KeyError):
            async with store.transaction("vehicles", []):
                raise KeyError("boom")

        async with store.transaction("vehicles", []) as tx:
            tx.contents.append({"id": "after"})

        assert await store.load("vehicles") == [{"id": "after"}]
