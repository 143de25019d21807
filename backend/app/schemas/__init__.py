"""
Schemas Module

Contains all Pydantic models (DTOs) for:
- Normalized records produced by the source adapters
- Ingestion results and per-record outcomes
- API request validation
"""
from .records import (
    RecordKind,
    TrialStatus,
    NormalizedRecord,
    ClinicalTrialRecord,
    PublicationRecord,
    ResearcherRecord,
)
from .search import (
    IngestQuery,
    ExtractDiseaseRequest,
    KeywordsRequest,
    EnhanceQueryRequest,
)
from .ingestion import (
    MAX_RESULTS_PER_CALL,
    FetchOk,
    FetchEmpty,
    FetchResult,
    SkipReason,
    Stored,
    Skipped,
    RecordOutcome,
    IngestReport,
)

__all__ = [
    "RecordKind",
    "TrialStatus",
    "NormalizedRecord",
    "ClinicalTrialRecord",
    "PublicationRecord",
    "ResearcherRecord",
    "IngestQuery",
    "ExtractDiseaseRequest",
    "KeywordsRequest",
    "EnhanceQueryRequest",
    "MAX_RESULTS_PER_CALL",
    "FetchOk",
    "FetchEmpty",
    "FetchResult",
    "SkipReason",
    "Stored",
    "Skipped",
    "RecordOutcome",
    "IngestReport",
]
