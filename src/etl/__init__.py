# ========================
# src/etl/__init__.py
# ========================

"""
ETL Pipeline Package

This package contains the components of the delimited-record ETL pipeline:
- extraction: Line-oriented reading and field splitting
- transformation: Field normalization and field-count filtering
- console: Text rendering of record sets
- storage: In-memory record store with sequential ids
- orchestrator: Pipeline coordination
"""

from .extraction import FileExtractor, SourceUnavailable
from .transformation import DataTransformer
from .console import ConsoleSink
from .storage import RecordStore, StoredRecord
from .orchestrator import (
    ETLPipeline,
    LoadClassification,
    PipelinePhase,
    PipelineResult,
    classify_load_count
)

__all__ = [
    'FileExtractor',
    'SourceUnavailable',
    'DataTransformer',
    'ConsoleSink',
    'RecordStore',
    'StoredRecord',
    'ETLPipeline',
    'LoadClassification',
    'PipelinePhase',
    'PipelineResult',
    'classify_load_count'
]

__version__ = "1.0.0"
