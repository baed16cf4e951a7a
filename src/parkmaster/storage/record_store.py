"""
Record store
Whole-collection JSON persistence with default initialization and
per-collection serialization
"""

import asyncio
import copy
import json
import logging
import os
import re
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, Optional, Union

from ..exceptions import StorageFailureError

_COLLECTION_NAME = re.compile(r"^[A-Za-z0-9_-]+$")


class CollectionTransaction:
    """
    Working copy of one collection inside RecordStore.transaction()

    Mutate ``contents`` in place or reassign it; whatever it holds when the
    ``async with`` block exits normally is saved.
    """

    def __init__(self, name: str, contents: Any):
        self.name = name
        self.contents = contents


class RecordStore:
    """
    Generic store over named collections of records
    - One JSON file per collection (<base_path>/<name>.json)
    - Missing collections are initialized to a caller-supplied default
    - Writes are atomic: temp file + rename, never a partial file
    - One asyncio.Lock per collection guards load/mutate/save cycles

    The lock only serializes operations that go through this instance on
    one event loop. Separate processes sharing a data directory can still
    lose updates.
    """

    def __init__(self, base_path: Optional[Union[str, Path]] = None):
        """
        Initialize record store

        Args:
            base_path: Data directory (default: ./data)
        """
        self.logger = logging.getLogger(__name__)

        if base_path:
            self.base_path = Path(base_path)
        else:
            self.base_path = Path.cwd() / "data"

        self._locks: Dict[str, asyncio.Lock] = {}

        self._ensure_directory()
        self.logger.info(f"Record store ready at {self.base_path}")

    def _ensure_directory(self):
        """Create the data directory if it doesn't exist"""
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageFailureError(
                f"Cannot create data directory {self.base_path}: {e}",
                path=str(self.base_path),
            ) from e

    def path_for(self, name: str) -> Path:
        """File backing a collection"""
        if not _COLLECTION_NAME.match(name):
            raise ValueError(f"Invalid collection name: {name!r}")
        return self.base_path / f"{name}.json"

    def _lock(self, name: str) -> asyncio.Lock:
        lock = self._locks.get(name)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[name] = lock
        return lock

    # ============= Blocking file primitives (run in a worker thread) =============

    @staticmethod
    def _read_file(path: Path) -> Any:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    @staticmethod
    def _write_file(path: Path, contents: Any) -> None:
        payload = json.dumps(contents, indent=2)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

    # ============= Unlocked operations =============

    async def _load(self, name: str, default: Any, item_type: Optional[type] = None) -> Any:
        path = self.path_for(name)
        try:
            contents = await asyncio.to_thread(self._read_file, path)
        except FileNotFoundError:
            self.logger.info(f"Collection '{name}' not found, initializing with default")
            await self._save(name, default)
            return copy.deepcopy(default)
        except (OSError, ValueError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            self.logger.error(f"Failed to read collection '{name}' from {path}: {e}")
            raise StorageFailureError(
                f"Failed to read collection '{name}': {e}",
                collection=name,
                path=str(path),
            ) from e

        self._check_shape(name, path, contents, default, item_type)
        self.logger.debug(f"Loaded collection '{name}'")
        return contents

    def _check_shape(self, name: str, path: Path, contents: Any, default: Any,
                     item_type: Optional[type]) -> None:
        """Persisted value must be the same kind of container as the default"""
        problem = None
        if isinstance(default, (list, dict)) and not isinstance(contents, type(default)):
            problem = f"expected {type(default).__name__}, found {type(contents).__name__}"
        elif item_type is not None and isinstance(contents, list):
            bad = [item for item in contents if not isinstance(item, item_type)]
            if bad:
                problem = f"{len(bad)} entries are not {item_type.__name__}"

        if problem:
            self.logger.error(f"Collection '{name}' in {path} has the wrong shape: {problem}")
            raise StorageFailureError(
                f"Collection '{name}' has the wrong shape: {problem}",
                collection=name,
                path=str(path),
            )

    async def _save(self, name: str, contents: Any) -> None:
        path = self.path_for(name)
        try:
            await asyncio.to_thread(self._write_file, path, contents)
        except (OSError, TypeError, ValueError) as e:
            self.logger.error(f"Failed to write collection '{name}' to {path}: {e}")
            raise StorageFailureError(
                f"Failed to write collection '{name}': {e}",
                collection=name,
                path=str(path),
            ) from e

        self.logger.debug(f"Saved collection '{name}'")

    # ============= Public API =============

    async def load(self, name: str, default: Any = None, item_type: Optional[type] = None) -> Any:
        """
        Load a whole collection

        Args:
            name: Collection name
            default: Contents to persist and return when the collection
                does not exist yet (default: empty list)
            item_type: When given, every entry of a list collection must be
                an instance of this type

        Returns:
            Current collection contents

        Raises:
            StorageFailureError: Collection exists but cannot be read, parsed,
                or does not have the shape of the default
        """
        if default is None:
            default = []
        async with self._lock(name):
            return await self._load(name, default, item_type)

    async def save(self, name: str, contents: Any) -> None:
        """
        Overwrite a whole collection

        Raises:
            StorageFailureError: Collection cannot be written; the previous
                contents stay in place
        """
        async with self._lock(name):
            await self._save(name, contents)

    @asynccontextmanager
    async def transaction(self, name: str, default: Any = None,
                          item_type: Optional[type] = None) -> AsyncIterator[CollectionTransaction]:
        """
        Serialized load/mutate/save cycle over one collection

        The collection lock is held for the whole block. Contents are saved
        only when the block exits without an exception.

        Usage:
            async with store.transaction("vehicles", []) as tx:
                tx.contents.append(record)
        """
        if default is None:
            default = []
        async with self._lock(name):
            tx = CollectionTransaction(name, await self._load(name, default, item_type))
            yield tx
            await self._save(name, tx.contents)
