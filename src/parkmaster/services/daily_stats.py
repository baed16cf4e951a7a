"""
Daily Statistics Aggregator
One revenue/occupancy record per calendar day, upserted by date
"""

import copy
import logging
from typing import Any, Dict, List

from ..exceptions import MissingDateKeyError, RecordNotFoundError
from ..storage.record_store import RecordStore

DAILY_STATS_COLLECTION = "daily-stats"
DATE_KEY = "date"


class DailyStatsAggregator:
    """Per-day metrics keyed by an opaque date string"""

    def __init__(self, store: RecordStore):
        self.store = store
        self.logger = logging.getLogger(__name__)

    async def list(self) -> List[Dict[str, Any]]:
        """All daily records in persisted insertion order"""
        return await self.store.load(DAILY_STATS_COLLECTION, [], item_type=dict)

    async def get(self, date: str) -> Dict[str, Any]:
        """Record for one date"""
        for record in await self.list():
            if record.get(DATE_KEY) == date:
                return record
        raise RecordNotFoundError("Daily stats not found", collection=DAILY_STATS_COLLECTION, record_id=date)

    async def upsert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert or fully replace the record for the record's date

        An existing record for the same date is replaced, not merged, so
        metrics missing from the new payload are dropped.

        Raises:
            MissingDateKeyError: Record has no date
        """
        date = record.get(DATE_KEY)
        if date is None:
            raise MissingDateKeyError("Daily stats record requires a 'date' key")

        stored = copy.deepcopy(record)
        async with self.store.transaction(DAILY_STATS_COLLECTION, [], item_type=dict) as tx:
            for index, existing in enumerate(tx.contents):
                if existing.get(DATE_KEY) == date:
                    tx.contents[index] = stored
                    action = "Replaced"
                    break
            else:
                tx.contents.append(stored)
                action = "Added"

        self.logger.info(f"{action} daily stats for {date}")
        return copy.deepcopy(stored)
