# ========================
# src/etl/console.py
# ========================

"""
Console Output Module

Renders record sets as human-readable text blocks.
"""

import sys
from typing import Optional, TextIO

from .extraction import RecordSet

OUTPUT_HEADER = "===== ETL Pipeline Output ====="
OUTPUT_SEPARATOR = "-------------------------------"
OUTPUT_FOOTER = "==============================="
SUMMARY_HEADER = "===== ETL Pipeline Summary ====="
SUMMARY_FOOTER = "================================"
FIELD_SEPARATOR = " | "


class ConsoleSink:
    """Writes record sets to a text stream (stdout unless told otherwise)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def load(self, records: RecordSet) -> None:
        """Write every record, numbered from 1, between a header and footer."""
        self._write(OUTPUT_HEADER)
        self._write(f"Total Records: {len(records)}")
        self._write(OUTPUT_SEPARATOR)

        for number, record in enumerate(records, start=1):
            self._write(f"Record {number}: {FIELD_SEPARATOR.join(record)}")

        self._write(OUTPUT_FOOTER)

    def load_summary(self, records: RecordSet) -> None:
        """Write the record count and the field count of the first record."""
        self._write(SUMMARY_HEADER)
        self._write(f"Total Records Processed: {len(records)}")

        if records:
            self._write(f"Fields per Record: {len(records[0])}")
        else:
            self._write("No records to summarize.")

        self._write(SUMMARY_FOOTER)

    def _write(self, line: str) -> None:
        # resolve stdout lazily so redirected streams are honoured
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(line + "\n")
