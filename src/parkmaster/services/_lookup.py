"""Identifier lookups shared by the lifecycle services"""

from typing import Any, Dict, List, Optional


def find_index(records: List[Dict[str, Any]], record_id: str) -> Optional[int]:
    """Position of the record with this id, or None"""
    for index, record in enumerate(records):
        if record.get("id") == record_id:
            return index
    return None
