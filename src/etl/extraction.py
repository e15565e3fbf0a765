# ========================
# src/etl/extraction.py
# ========================

"""
Data Extraction Module

Reads line-oriented text sources and splits each non-blank line into a record.
"""

import logging
from typing import Iterable, List, Tuple

logger = logging.getLogger(__name__)

FIELD_DELIMITER = ","

Record = Tuple[str, ...]
RecordSet = List[Record]


class SourceUnavailable(Exception):
    """Raised when an input source cannot be opened or read."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot read source '{source}': {reason}")


class FileExtractor:
    """
    Extracts records from delimited text.
    Every non-blank line becomes one record; there is no header handling.
    """

    def __init__(self, delimiter: str = FIELD_DELIMITER):
        """
        Initialize the extractor.

        Args:
            delimiter (str): Field separator, comma unless overridden
        """
        self.delimiter = delimiter

    def extract_from_file(self, file_path: str) -> RecordSet:
        """
        Read a file and return its records.

        Args:
            file_path (str): Path to the input file

        Returns:
            list[tuple]: One record per non-blank line, in file order

        Raises:
            SourceUnavailable: If the file is missing, unreadable or fails mid-read
        """
        logger.info(f"Extracting records from: {file_path}")
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                records = self.extract_lines(f)
        except FileNotFoundError as e:
            logger.error(f"File '{file_path}' was not found")
            raise SourceUnavailable(str(file_path), "file not found") from e
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading file '{file_path}': {e}")
            raise SourceUnavailable(str(file_path), str(e)) from e

        if not records:
            logger.warning(f"No records found in the file: {file_path}")
        return records

    def extract_lines(self, lines: Iterable[str]) -> RecordSet:
        """
        Split an iterable of text lines into records, skipping blank lines.

        Args:
            lines: Any line-oriented source (open file, list of strings, ...)

        Returns:
            list[tuple]: A new record set
        """
        records = []
        line_count = 0

        for line in lines:
            line_count += 1
            line = line.rstrip("\r\n")
            if not line.strip():
                logger.debug(f"Skipping blank line {line_count}")
                continue
            records.append(self.split_line(line))

        logger.info(f"Extracted {len(records)} records from {line_count} lines")
        return records

    def split_line(self, line: str) -> Record:
        """Split a single line into an immutable record."""
        return tuple(line.split(self.delimiter))

    def get_record_count(self, file_path: str) -> int:
        """Number of records a file would yield."""
        return len(self.extract_from_file(file_path))
