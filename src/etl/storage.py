# ========================
# src/etl/storage.py
# ========================

"""
Data Storage Module

In-memory keyed record store with sequential id assignment.
"""

import logging
from typing import Dict, List, NamedTuple, Optional

from .extraction import Record, RecordSet

logger = logging.getLogger(__name__)


class StoredRecord(NamedTuple):
    """A record together with the id the store assigned to it."""
    id: int
    fields: Record


class RecordStore:
    """
    Stores records under integer ids starting at 1.

    Ids are handed out in insertion order and keep increasing across `load`
    calls until `clear` resets the store. Records are held as tuples, so
    `get` and `get_all` hand out values that callers cannot use to alter
    stored data. Not thread-safe: a store belongs to a single caller.
    """

    def __init__(self):
        """Create an empty store."""
        self._records: Dict[int, Record] = {}
        self._next_id = 1

    def load(self, records: RecordSet) -> int:
        """
        Insert records in order, assigning each the next id.

        Args:
            records (list[tuple]): Records to insert

        Returns:
            int: Number of records inserted
        """
        count = 0
        for record in records:
            self._records[self._next_id] = tuple(record)
            self._next_id += 1
            count += 1

        logger.info(f"Loaded {count} records to local database")
        return count

    def get(self, record_id: int) -> Optional[Record]:
        """Record stored under `record_id`, or None when absent."""
        return self._records.get(record_id)

    def get_all(self) -> RecordSet:
        """Snapshot of all stored records in ascending id order."""
        return list(self._records.values())

    def get_all_stored(self) -> List[StoredRecord]:
        """Snapshot of all stored records paired with their ids."""
        return [StoredRecord(record_id, record) for record_id, record in self._records.items()]

    def count(self) -> int:
        """Number of records currently stored."""
        return len(self._records)

    def clear(self) -> None:
        """Remove every record and restart ids at 1."""
        if self._records:
            logger.info(f"Clearing {len(self._records)} records from local database")
        self._records.clear()
        self._next_id = 1

    @property
    def next_id(self) -> int:
        """Id the next inserted record will receive."""
        return self._next_id

    def __len__(self) -> int:
        return self.count()
