"""
Ingestion pipeline package.

fetch → normalize → enrich → deduplicate-upsert, shared by the trial,
publication and researcher endpoints.

Package Structure:
- pipeline.py: IngestionPipeline orchestration and build_pipeline factory
"""
from app.schemas.ingestion import (
    FetchEmpty,
    FetchOk,
    IngestReport,
    SkipReason,
    Skipped,
    Stored,
)

from .pipeline import IngestionPipeline, build_pipeline

__all__ = [
    "IngestionPipeline",
    "build_pipeline",
    "IngestReport",
    "FetchOk",
    "FetchEmpty",
    "Stored",
    "Skipped",
    "SkipReason",
]
