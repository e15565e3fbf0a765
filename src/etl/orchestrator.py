# ========================
# src/etl/orchestrator.py
# ========================

"""
Pipeline Orchestrator Module

Sequences extraction, transformation, filtering and the two load sinks,
and reports the outcome as a structured result.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .extraction import FileExtractor, SourceUnavailable
from .transformation import DataTransformer
from .console import ConsoleSink
from .storage import RecordStore
from ..utils.performance_monitor import monitor_performance
from ..utils.config import Config

logger = logging.getLogger(__name__)


class PipelinePhase(str, Enum):
    EXTRACTING = "extracting"
    TRANSFORMING = "transforming"
    FILTERING = "filtering"
    LOADING_CONSOLE = "loading_console"
    LOADING_STORE = "loading_store"
    DONE = "done"
    FAILED = "failed"


class LoadClassification(str, Enum):
    EXCEEDS_UPPER_BOUND = "exceeds-upper-bound"
    BELOW_LOWER_BOUND = "below-lower-bound"
    EMPTY = "empty"
    NOMINAL = "nominal"


def classify_load_count(count: int, lower_bound: int = 10, upper_bound: int = 100) -> LoadClassification:
    """
    Classify how many records a run loaded into the store.

    Args:
        count (int): Records inserted by the run
        lower_bound (int): Counts below this (but above zero) are flagged
        upper_bound (int): Counts above this are flagged

    Returns:
        LoadClassification: Informational status, never an error
    """
    if count > upper_bound:
        return LoadClassification.EXCEEDS_UPPER_BOUND
    if count == 0:
        return LoadClassification.EMPTY
    if count < lower_bound:
        return LoadClassification.BELOW_LOWER_BOUND
    return LoadClassification.NOMINAL


@dataclass
class PipelineResult:
    """Outcome of a single pipeline run."""
    input_file: str
    phase: PipelinePhase
    extracted_count: int = 0
    transformed_count: int = 0
    filtered_count: int = 0
    loaded_count: int = 0
    store_count: int = 0
    classification: Optional[LoadClassification] = None
    error: Optional[SourceUnavailable] = None
    phases: List[PipelinePhase] = field(default_factory=list)
    performance: Dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.phase is PipelinePhase.DONE

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view of the result."""
        return {
            'input_file': self.input_file,
            'phase': self.phase.value,
            'extracted_count': self.extracted_count,
            'transformed_count': self.transformed_count,
            'filtered_count': self.filtered_count,
            'loaded_count': self.loaded_count,
            'store_count': self.store_count,
            'classification': self.classification.value if self.classification else None,
            'error': str(self.error) if self.error else None,
            'phases': [phase.value for phase in self.phases],
            'performance': {
                key: value for key, value in self.performance.items() if key != 'checkpoints'
            }
        }


class ETLPipeline:
    """
    Runs Extract -> Transform -> Filter -> {console, store} once per `run`.

    Extraction is the only phase that can fail; when it does the run stops
    in FAILED and neither sink receives anything.
    """

    def __init__(self,
                 input_file: str,
                 store: RecordStore,
                 console: Optional[ConsoleSink] = None,
                 min_fields: Optional[int] = None,
                 config: Optional[Config] = None):
        """
        Initialize the pipeline.

        Args:
            input_file (str): Path to the delimited input file
            store (RecordStore): Store that receives the filtered records
            console (ConsoleSink): Console sink, writing to stdout by default
            min_fields (int): Minimum fields a record needs to survive filtering
            config (Config): Configuration object
        """
        self.input_file = input_file
        self.config = config or Config()
        self.min_fields = self.config.MIN_FIELDS if min_fields is None else min_fields

        self.extractor = FileExtractor()
        self.transformer = DataTransformer()
        self.console = console or ConsoleSink()
        self.store = store

        self.phase: Optional[PipelinePhase] = None

        logger.info("ETLPipeline initialized:")
        logger.info(f"  Input: {self.input_file}")
        logger.info(f"  Minimum fields: {self.min_fields}")

    def run(self) -> PipelineResult:
        """
        Execute every phase in order.

        Returns:
            PipelineResult: Counts, final phase and load classification.
                On extraction failure `phase` is FAILED and `error` holds
                the SourceUnavailable raised by the extractor.
        """
        logger.info(f"Starting ETL pipeline for '{self.input_file}'...")
        result = PipelineResult(input_file=str(self.input_file), phase=PipelinePhase.EXTRACTING)

        with monitor_performance("ETL Pipeline") as monitor:
            self._enter(PipelinePhase.EXTRACTING, result, monitor)
            try:
                raw_records = self.extractor.extract_from_file(self.input_file)
            except SourceUnavailable as e:
                logger.error(f"Extraction failed, aborting pipeline: {e}")
                result.error = e
                self._enter(PipelinePhase.FAILED, result, monitor)
            else:
                self._run_remaining_phases(raw_records, result, monitor)

        result.performance = monitor.summary
        if result.succeeded:
            self._log_final_summary(result)
        return result

    def _run_remaining_phases(self, raw_records, result: PipelineResult, monitor) -> None:
        result.extracted_count = self.transformer.aggregate_count(raw_records)
        monitor.update_progress(result.extracted_count)

        self._enter(PipelinePhase.TRANSFORMING, result, monitor)
        transformed = self.transformer.transform(raw_records)
        result.transformed_count = self.transformer.aggregate_count(transformed)

        self._enter(PipelinePhase.FILTERING, result, monitor)
        filtered = self.transformer.filter_by_field_count(transformed, self.min_fields)
        result.filtered_count = self.transformer.aggregate_count(filtered)

        self._enter(PipelinePhase.LOADING_CONSOLE, result, monitor)
        self.console.load(filtered)

        self._enter(PipelinePhase.LOADING_STORE, result, monitor)
        result.loaded_count = self.store.load(filtered)
        result.store_count = self.store.count()

        result.classification = classify_load_count(
            result.loaded_count,
            lower_bound=self.config.LOAD_LOWER_BOUND,
            upper_bound=self.config.LOAD_UPPER_BOUND
        )
        self._enter(PipelinePhase.DONE, result, monitor)

    def _enter(self, phase: PipelinePhase, result: PipelineResult, monitor) -> None:
        self.phase = phase
        result.phase = phase
        result.phases.append(phase)
        monitor.add_checkpoint(phase.value)
        logger.info(f"Phase: {phase.name}")

    def _log_final_summary(self, result: PipelineResult) -> None:
        logger.info("=" * 60)
        logger.info("PIPELINE EXECUTION SUMMARY")
        logger.info("=" * 60)
        logger.info(f"Input file: {result.input_file}")
        logger.info(f"Records extracted: {result.extracted_count:,}")
        logger.info(f"Records after filtering: {result.filtered_count:,}")
        logger.info(f"Records loaded: {result.loaded_count:,}")
        logger.info(f"Store size: {result.store_count:,}")
        logger.info(f"Load classification: {result.classification.value}")
        logger.info("=" * 60)
