"""
Search API Routes

One ingest endpoint per entity kind. Each request runs a full ingest cycle
and answers with the records that were enriched and stored.
"""
from fastapi import APIRouter, Depends, Request

from app.core.dependencies import get_enricher, get_store
from app.core.exceptions import CuraLinkError, IngestError
from app.core.logging import get_logger
from app.core.rate_limit import INGEST_LIMIT, limiter
from app.schemas.ingestion import IngestReport
from app.schemas.records import RecordKind
from app.schemas.search import IngestQuery
from app.services.enrichment import Enricher
from app.services.ingestion import build_pipeline
from app.services.store import RecordStore

logger = get_logger(__name__)

router = APIRouter(prefix="/api/search", tags=["search"])


async def run_ingest(
    kind: RecordKind,
    query: IngestQuery,
    store: RecordStore,
    enricher: Enricher
) -> IngestReport:
    """
    Run one ingest cycle, turning unexpected failures into IngestError.

    No partial result is returned when this raises.
    """
    pipeline = build_pipeline(kind, store, enricher)
    try:
        return await pipeline.run(query)
    except CuraLinkError:
        raise
    except Exception as e:
        logger.exception(f"{kind.value} ingest failed")
        raise IngestError(kind.value, str(e)) from e


@router.post("/clinical-trials")
@limiter.limit(INGEST_LIMIT)
async def ingest_clinical_trials(
    request: Request,
    query: IngestQuery,
    store: RecordStore = Depends(get_store),
    enricher: Enricher = Depends(get_enricher)
):
    """Fetch trials from ClinicalTrials.gov, summarize and store them."""
    report = await run_ingest(RecordKind.CLINICAL_TRIAL, query, store, enricher)
    return {"trials": report.stored}


@router.post("/publications")
@limiter.limit(INGEST_LIMIT)
async def ingest_publications(
    request: Request,
    query: IngestQuery,
    store: RecordStore = Depends(get_store),
    enricher: Enricher = Depends(get_enricher)
):
    """Scrape publications from Google Scholar, summarize and store them."""
    report = await run_ingest(RecordKind.PUBLICATION, query, store, enricher)
    return {"publications": report.stored}


@router.post("/researchers")
@limiter.limit(INGEST_LIMIT)
async def ingest_researchers(
    request: Request,
    query: IngestQuery,
    store: RecordStore = Depends(get_store)
):
    """Scrape researcher profiles from Google Scholar and store them."""
    report = await run_ingest(RecordKind.RESEARCHER, query, store, None)
    return {"researchers": report.stored}
