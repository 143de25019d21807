"""
Summary Enrichment

Attaches a short patient-facing synopsis to trial and publication records.
The summarization client is injected, so tests can pass any object with an
async ainvoke(prompt) method.
"""
import asyncio
from typing import Callable, Dict, Optional

from app.core.config import settings
from app.core.exceptions import EnrichmentError
from app.core.logging import get_logger
from app.schemas.records import (
    ClinicalTrialRecord,
    NormalizedRecord,
    PublicationRecord,
    RecordKind,
)

logger = get_logger(__name__)


def build_trial_prompt(trial: ClinicalTrialRecord) -> str:
    lines = [
        "Summarize this clinical trial in 2-3 concise sentences for a patient:",
        f"Title: {trial.title}",
        f"Conditions: {', '.join(trial.condition)}",
    ]
    if trial.eligibility:
        lines.append(f"Eligibility: {trial.eligibility}")
    return "\n".join(lines)


def build_publication_prompt(publication: PublicationRecord) -> str:
    lines = [
        "Summarize this research publication in 2-3 concise sentences for a patient audience:",
        f"Title: {publication.title}",
    ]
    if publication.abstract:
        lines.append(f"Abstract: {publication.abstract}")
    return "\n".join(lines)


# Researchers have no prompt and are never enriched
PROMPT_BUILDERS: Dict[RecordKind, Callable[[NormalizedRecord], str]] = {
    RecordKind.CLINICAL_TRIAL: build_trial_prompt,
    RecordKind.PUBLICATION: build_publication_prompt,
}


def response_text(response) -> str:
    """Plain text of a chat model response (message object or string)."""
    content = getattr(response, "content", response)
    if isinstance(content, list):
        content = "".join(
            part.get("text", "") if isinstance(part, dict) else str(part)
            for part in content
        )
    return str(content).strip()


class Enricher:
    """Generates ai_summary for one record per call, with a single attempt."""

    def __init__(self, llm=None, timeout_seconds: Optional[float] = None):
        self._llm = llm
        self.timeout_seconds = timeout_seconds or settings.LLM_TIMEOUT_SECONDS

    @property
    def llm(self):
        if self._llm is None:
            from app.services.llm import get_summarizer
            self._llm = get_summarizer()
        return self._llm

    def supports(self, record: NormalizedRecord) -> bool:
        return record.kind in PROMPT_BUILDERS

    async def enrich(self, record: NormalizedRecord) -> NormalizedRecord:
        """
        Set record.ai_summary from one summarization call.

        Records of a kind without a prompt are returned untouched.

        Raises:
            EnrichmentError: if the call fails, times out or returns no text
        """
        if not self.supports(record):
            return record

        prompt = PROMPT_BUILDERS[record.kind](record)

        try:
            response = await asyncio.wait_for(self.llm.ainvoke(prompt), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            raise EnrichmentError(record.describe(), f"timed out after {self.timeout_seconds}s") from e
        except Exception as e:
            raise EnrichmentError(record.describe(), str(e)) from e

        summary = response_text(response)
        if not summary:
            raise EnrichmentError(record.describe(), "empty response")

        record.ai_summary = summary
        logger.debug(f"Summarized {record.kind.value}: {record.describe()}")
        return record
