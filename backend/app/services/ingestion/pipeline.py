"""
Ingestion pipeline.

Runs one ingest cycle for one entity kind:
1. Check the store is reachable (the only request-fatal step)
2. Fetch from the source adapter, or synthesize its fallback record
3. For each record: enrich, then upsert
4. Return every record's outcome in source order

There is no batch transaction; a smaller result set is the normal outcome
of per-record failures.
"""
import asyncio
from typing import List, Optional

from app.core.config import settings
from app.core.exceptions import EnrichmentError
from app.core.logging import get_logger
from app.schemas.ingestion import (
    FetchOk,
    IngestReport,
    RecordOutcome,
    SkipReason,
    Skipped,
    Stored,
)
from app.schemas.records import NormalizedRecord, RecordKind
from app.schemas.search import IngestQuery
from app.services.enrichment import Enricher
from app.services.sources import SOURCES_BY_KIND, BaseSource
from app.services.store import RecordStore

logger = get_logger(__name__)


class IngestionPipeline:
    """
    Wires a source adapter, an optional enricher and the record store.

    Args:
        source: Adapter for the entity kind being ingested
        store: Record store performing the conflict-aware upserts
        enricher: Summary generator; None disables enrichment
        max_concurrency: Records processed at once (1 = strictly sequential)
        store_unenriched: Store records whose enrichment failed instead of
            dropping them
    """

    def __init__(
        self,
        source: BaseSource,
        store: RecordStore,
        enricher: Optional[Enricher] = None,
        max_concurrency: int = 1,
        store_unenriched: bool = True
    ):
        self.source = source
        self.store = store
        self.enricher = enricher
        self.max_concurrency = max(1, max_concurrency)
        self.store_unenriched = store_unenriched

    async def run(self, query: IngestQuery) -> IngestReport:
        """
        Execute one ingest cycle.

        Raises:
            StoreConnectionError: if the store is unreachable before any
                record-level work starts
        """
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.store.check_connection)

        result = await self.source.fetch(query)
        if isinstance(result, FetchOk):
            records = list(result.records)
            fallback_used = False
        else:
            logger.info(f"{self.source.name}: using fallback record ({result.reason})")
            records = [self.source.fallback(query)]
            fallback_used = True

        if self.max_concurrency == 1:
            outcomes = [await self._process(record) for record in records]
        else:
            outcomes = await self._process_concurrently(records)

        report = IngestReport(query=query, fallback_used=fallback_used, outcomes=outcomes)
        logger.info(
            f"{self.source.name}: {len(report.stored)} stored, "
            f"{len(report.skipped)} skipped of {len(records)} records"
        )
        return report

    async def _process_concurrently(self, records: List[NormalizedRecord]) -> List[RecordOutcome]:
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def bounded(record: NormalizedRecord) -> RecordOutcome:
            async with semaphore:
                return await self._process(record)

        # gather keeps input order
        return list(await asyncio.gather(*(bounded(r) for r in records)))

    async def _process(self, record: NormalizedRecord) -> RecordOutcome:
        """Enrich then upsert one record; failures become Skipped outcomes."""
        if self.enricher is not None and self.enricher.supports(record):
            try:
                await self.enricher.enrich(record)
            except EnrichmentError as e:
                logger.warning(f"Enrichment failed: {e}")
                if not self.store_unenriched:
                    return Skipped(
                        key=record.describe(),
                        reason=SkipReason.ENRICHMENT_FAILED,
                        detail=str(e)
                    )

        loop = asyncio.get_running_loop()
        outcome = await loop.run_in_executor(None, self.store.upsert, record)

        if isinstance(outcome, Stored):
            logger.info(f"Stored {record.kind.value}: {outcome.key}")
        return outcome


def build_pipeline(
    kind: RecordKind,
    store: RecordStore,
    enricher: Optional[Enricher] = None,
    source: Optional[BaseSource] = None
) -> IngestionPipeline:
    """
    Pipeline for one entity kind configured from settings.

    Researchers are never enriched, so the enricher is dropped for them.
    """
    if source is None:
        source = SOURCES_BY_KIND[kind](max_results=settings.SOURCE_MAX_RESULTS)
    if kind == RecordKind.RESEARCHER:
        enricher = None

    return IngestionPipeline(
        source=source,
        store=store,
        enricher=enricher,
        max_concurrency=settings.INGEST_CONCURRENCY,
        store_unenriched=settings.STORE_UNENRICHED,
    )
