#!/usr/bin/env python3
# ========================
# main.py
# ========================

"""
Main Entry Point for the Delimited Record ETL Pipeline

Runs a single file through extract, transform, filter and both load sinks,
then prints an execution summary.

Usage: python main.py <file-path>
"""

import sys
import logging
from pathlib import Path
from typing import List, Optional

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent))

from src.etl import ConsoleSink, ETLPipeline, LoadClassification, PipelineResult, RecordStore
from src.utils import Config, setup_logging

CLASSIFICATION_MESSAGES = {
    LoadClassification.EXCEEDS_UPPER_BOUND: "Warning: Loaded record count exceeds {upper}!",
    LoadClassification.BELOW_LOWER_BOUND: "Warning: Loaded record count is below {lower}!",
    LoadClassification.EMPTY: "Warning: No records were loaded into the database!",
    LoadClassification.NOMINAL: "Loaded record count is within the expected range."
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 1:
        print("Usage: main.py <file-path>", file=sys.stderr)
        print("Example: main.py data.csv", file=sys.stderr)
        return 1

    input_file = args[0]
    config = Config()

    setup_logging(
        log_level=config.LOG_LEVEL,
        log_file=config.LOG_FILE,
        log_dir=config.LOG_DIR
    )
    logger = logging.getLogger(__name__)

    print("Starting ETL Pipeline...")
    print(f"Input file: {input_file}")
    print()

    store = RecordStore()
    pipeline = ETLPipeline(
        input_file=input_file,
        store=store,
        console=ConsoleSink(sys.stdout),
        config=config
    )
    result = pipeline.run()

    if not result.succeeded:
        logger.error(f"Pipeline execution failed in phase {result.phase.name}")
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    _print_execution_summary(result, config)
    return 0


def _print_execution_summary(result: PipelineResult, config: Config) -> None:
    """Print final execution summary."""
    print()
    print(f"Extracted {result.extracted_count} records")
    print(f"Transformed and filtered {result.filtered_count} records")
    print(f"Database now contains {result.store_count} records")

    message = CLASSIFICATION_MESSAGES[result.classification]
    print(message.format(upper=config.LOAD_UPPER_BOUND, lower=config.LOAD_LOWER_BOUND))

    print("ETL Pipeline completed successfully!")


if __name__ == '__main__':
    exit_code = main()
    sys.exit(exit_code)
