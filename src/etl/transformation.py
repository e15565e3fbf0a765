# ========================
# src/etl/transformation.py
# ========================

"""
Data Transformation Module

Normalizes extracted records and filters them by field count.
"""

import logging

from .extraction import Record, RecordSet

logger = logging.getLogger(__name__)


class DataTransformer:
    """
    Applies normalization and filtering rules to record sets.
    Every method returns a new record set and leaves its input untouched.
    """

    def transform(self, records: RecordSet) -> RecordSet:
        """
        Strip surrounding whitespace from every field and upper-case it.

        Args:
            records (list[tuple]): Extracted records

        Returns:
            list[tuple]: New records with the same length and field counts
        """
        transformed = [self._normalize_record(record) for record in records]
        logger.debug(f"Transformed {len(transformed)} records")
        return transformed

    def filter_by_field_count(self, records: RecordSet, min_fields: int) -> RecordSet:
        """
        Keep records with at least `min_fields` fields, preserving order.

        Args:
            records (list[tuple]): Records to filter
            min_fields (int): Minimum field count; zero or negative keeps everything

        Returns:
            list[tuple]: The retained records
        """
        filtered = [record for record in records if len(record) >= min_fields]

        dropped = len(records) - len(filtered)
        if dropped:
            logger.debug(f"Dropped {dropped} records with fewer than {min_fields} fields")
        return filtered

    def aggregate_count(self, records: RecordSet) -> int:
        """Total number of records."""
        return len(records)

    @staticmethod
    def _normalize_record(record: Record) -> Record:
        return tuple(field.strip().upper() for field in record)
