"""
Ingestion Schemas

Result types for the ingestion pipeline.

Adapters report FetchOk or FetchEmpty instead of raising, and every record
that enters the pipeline leaves it as exactly one RecordOutcome.
"""
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from app.schemas.records import NormalizedRecord
from app.schemas.search import IngestQuery

# Hard cap on parsed records per source call
MAX_RESULTS_PER_CALL = 10


class FetchOk(BaseModel):
    """The source returned at least one parsed record."""
    status: Literal["ok"] = "ok"
    records: List[NormalizedRecord]


class FetchEmpty(BaseModel):
    """The source yielded nothing usable."""
    status: Literal["empty"] = "empty"
    reason: str


FetchResult = Union[FetchOk, FetchEmpty]


class SkipReason(str, Enum):
    ENRICHMENT_FAILED = "enrichment_failed"
    STORAGE_FAILED = "storage_failed"


class Stored(BaseModel):
    """The record was written; row holds the stored columns."""
    outcome: Literal["stored"] = "stored"
    key: str
    row: Dict[str, Any]
    enriched: bool = False


class Skipped(BaseModel):
    """The record was dropped from the result batch."""
    outcome: Literal["skipped"] = "skipped"
    key: str
    reason: SkipReason
    detail: Optional[str] = None


RecordOutcome = Union[Stored, Skipped]


class IngestReport(BaseModel):
    """Everything one ingest cycle produced, in source order."""
    query: IngestQuery
    fallback_used: bool = False
    outcomes: List[RecordOutcome] = Field(default_factory=list)

    @property
    def stored(self) -> List[Dict[str, Any]]:
        """Rows that were stored, which is all the HTTP response exposes."""
        return [o.row for o in self.outcomes if isinstance(o, Stored)]

    @property
    def skipped(self) -> List[Skipped]:
        return [o for o in self.outcomes if isinstance(o, Skipped)]
