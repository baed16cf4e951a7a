"""
Permanent Client Roster
Subscription clients: register, partial update, remove
"""

import copy
import logging
from typing import Any, Callable, Dict, List, Optional

from ..exceptions import RecordNotFoundError
from ..models.enums import PaymentStatus
from ..models.records import generate_uuid7, utc_now_iso
from ..storage.record_store import RecordStore
from ._lookup import find_index

PERMANENT_CLIENTS_COLLECTION = "permanent-clients"


class ClientRoster:
    """Roster of permanent clients, the only records the core deletes"""

    def __init__(self,
                 store: RecordStore,
                 id_factory: Callable[[], str] = generate_uuid7,
                 clock: Callable[[], str] = utc_now_iso):
        self.store = store
        self._new_id = id_factory
        self._now = clock
        self.logger = logging.getLogger(__name__)

    async def list(self) -> List[Dict[str, Any]]:
        """All permanent clients in registration order"""
        return await self.store.load(PERMANENT_CLIENTS_COLLECTION, [], item_type=dict)

    async def register(self, fields: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Add a client to the roster

        New clients always start permanent and unpaid, whatever the caller sent.
        """
        client = {
            **(fields or {}),
            "id": self._new_id(),
            "isPermanent": True,
            "paymentStatus": PaymentStatus.UNPAID.value,
            "entryTime": self._now(),
        }

        async with self.store.transaction(PERMANENT_CLIENTS_COLLECTION, [], item_type=dict) as tx:
            tx.contents.append(client)

        self.logger.info(f"Registered permanent client {client['id']}")
        return copy.deepcopy(client)

    async def update(self, client_id: str, patch: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Shallow-merge a patch onto an existing client

        Patch fields overwrite, unspecified fields persist. The identifier
        and the permanence flag are not patchable.

        Raises:
            RecordNotFoundError: No client with this identifier
        """
        async with self.store.transaction(PERMANENT_CLIENTS_COLLECTION, [], item_type=dict) as tx:
            index = find_index(tx.contents, client_id)
            if index is None:
                raise RecordNotFoundError(
                    "Client not found",
                    collection=PERMANENT_CLIENTS_COLLECTION,
                    record_id=client_id,
                )

            client = {
                **tx.contents[index],
                **(patch or {}),
                "id": tx.contents[index]["id"],
                "isPermanent": True,
            }
            tx.contents[index] = client

        self.logger.info(f"Updated permanent client {client_id}: {sorted((patch or {}).keys())}")
        return copy.deepcopy(client)

    async def remove(self, client_id: str) -> bool:
        """Remove a client; removing an unknown identifier is a successful no-op"""
        async with self.store.transaction(PERMANENT_CLIENTS_COLLECTION, [], item_type=dict) as tx:
            before = len(tx.contents)
            tx.contents = [c for c in tx.contents if c.get("id") != client_id]
            removed = before - len(tx.contents)

        if removed:
            self.logger.info(f"Removed permanent client {client_id}")
        else:
            self.logger.debug(f"Remove requested for absent client {client_id}")
        return True
