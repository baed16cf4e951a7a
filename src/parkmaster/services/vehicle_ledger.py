"""
Vehicle Ledger
Entry/exit lifecycle of vehicles inside the facility
"""

import copy
import logging
from typing import Any, Callable, Dict, List, Optional

from ..exceptions import RecordNotFoundError
from ..models.records import generate_uuid7, utc_now_iso
from ..storage.record_store import RecordStore
from ._lookup import find_index

VEHICLES_COLLECTION = "vehicles"

# Fields owned by the exit transition; never accepted on entry
_EXIT_FIELDS = ("exitTime", "fee")


class VehicleLedger:
    """
    Active and departed vehicles, in one collection

    A vehicle is inside while it has no ``exitTime``. Departure attaches
    ``exitTime`` and ``fee`` together; records are never deleted.
    """

    def __init__(self,
                 store: RecordStore,
                 id_factory: Callable[[], str] = generate_uuid7,
                 clock: Callable[[], str] = utc_now_iso):
        self.store = store
        self._new_id = id_factory
        self._now = clock
        self.logger = logging.getLogger(__name__)

    async def list(self) -> List[Dict[str, Any]]:
        """All vehicles, active and departed intermixed, in entry order"""
        return await self.store.load(VEHICLES_COLLECTION, [], item_type=dict)

    async def list_active(self) -> List[Dict[str, Any]]:
        """Vehicles currently inside the facility"""
        return [v for v in await self.list() if v.get("exitTime") is None]

    async def list_departed(self) -> List[Dict[str, Any]]:
        """Vehicles that have exited"""
        return [v for v in await self.list() if v.get("exitTime") is not None]

    async def get(self, vehicle_id: str) -> Dict[str, Any]:
        """Single vehicle by identifier"""
        for vehicle in await self.list():
            if vehicle.get("id") == vehicle_id:
                return vehicle
        raise RecordNotFoundError("Vehicle not found", collection=VEHICLES_COLLECTION, record_id=vehicle_id)

    async def record_entry(self, fields: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Register a vehicle entering the facility

        Caller fields are carried verbatim; ``id`` and ``entryTime`` are
        assigned here and override anything the caller sent.

        Args:
            fields: Descriptive fields (type, plateNumber, ownerName, slot, ...)

        Returns:
            The completed vehicle record
        """
        vehicle = {k: v for k, v in (fields or {}).items() if k not in _EXIT_FIELDS}
        vehicle["id"] = self._new_id()
        vehicle["entryTime"] = self._now()

        async with self.store.transaction(VEHICLES_COLLECTION, [], item_type=dict) as tx:
            tx.contents.append(vehicle)

        self.logger.info(f"Vehicle {vehicle['id']} entered (type={vehicle.get('type')})")
        return copy.deepcopy(vehicle)

    async def record_exit(self, vehicle_id: str, fee: Any) -> Dict[str, Any]:
        """
        Mark a vehicle as departed

        Exiting an already-departed vehicle overwrites its exit time and
        fee again.

        Args:
            vehicle_id: Identifier assigned at entry
            fee: Fee computed by the caller

        Returns:
            The updated vehicle record

        Raises:
            RecordNotFoundError: No vehicle with this identifier
        """
        async with self.store.transaction(VEHICLES_COLLECTION, [], item_type=dict) as tx:
            index = find_index(tx.contents, vehicle_id)
            if index is None:
                self.logger.warning(f"Exit requested for unknown vehicle {vehicle_id}")
                raise RecordNotFoundError(
                    "Vehicle not found",
                    collection=VEHICLES_COLLECTION,
                    record_id=vehicle_id,
                )

            vehicle = {**tx.contents[index], "exitTime": self._now(), "fee": fee}
            tx.contents[index] = vehicle

        self.logger.info(f"Vehicle {vehicle_id} exited (fee={fee})")
        return copy.deepcopy(vehicle)

