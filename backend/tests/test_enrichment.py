"""Tests for services/enrichment.py - Summary enrichment."""
import asyncio

import pytest

from conftest import FakeLLM


def _trial(**overrides):
    from app.schemas.records import ClinicalTrialRecord

    fields = dict(
        nct_id="NCT01234567",
        title="Drug X in Lung Cancer",
        condition=["Lung Cancer", "NSCLC"],
        eligibility="Adults over 18",
    )
    fields.update(overrides)
    return ClinicalTrialRecord(**fields)


def _publication(**overrides):
    from app.schemas.records import PublicationRecord

    fields = dict(title="Targeted therapy", abstract="We report results.")
    fields.update(overrides)
    return PublicationRecord(**fields)


class TestPrompts:
    """Test the summary prompt builders."""

    def test_trial_prompt(self):
        from app.services.enrichment import build_trial_prompt

        prompt = build_trial_prompt(_trial())

        assert prompt.splitlines() == [
            "Summarize this clinical trial in 2-3 concise sentences for a patient:",
            "Title: Drug X in Lung Cancer",
            "Conditions: Lung Cancer, NSCLC",
            "Eligibility: Adults over 18",
        ]

    def test_trial_prompt_without_eligibility(self):
        from app.services.enrichment import build_trial_prompt

        assert "Eligibility" not in build_trial_prompt(_trial(eligibility=None))

    def test_publication_prompt(self):
        from app.services.enrichment import build_publication_prompt

        prompt = build_publication_prompt(_publication())

        assert prompt.startswith("Summarize this research publication")
        assert "Title: Targeted therapy" in prompt
        assert "Abstract: We report results." in prompt

    def test_publication_prompt_without_abstract(self):
        from app.services.enrichment import build_publication_prompt

        assert "Abstract" not in build_publication_prompt(_publication(abstract=None))

    def test_researchers_have_no_prompt(self):
        from app.schemas.records import RecordKind
        from app.services.enrichment import PROMPT_BUILDERS

        assert RecordKind.RESEARCHER not in PROMPT_BUILDERS


class TestResponseText:

    def test_plain_string(self):
        from app.services.enrichment import response_text

        assert response_text("  summary  ") == "summary"

    def test_message_content(self):
        from unittest.mock import MagicMock
        from app.services.enrichment import response_text

        message = MagicMock()
        message.content = "From a message."
        assert response_text(message) == "From a message."

    def test_content_parts(self):
        from unittest.mock import MagicMock
        from app.services.enrichment import response_text

        message = MagicMock()
        message.content = [{"type": "text", "text": "Part one. "}, {"type": "text", "text": "Part two."}]
        assert response_text(message) == "Part one. Part two."


class TestEnricher:
    """Test single-record enrichment."""

    def test_sets_summary_on_trial(self, fake_llm):
        from app.services.enrichment import Enricher

        trial = asyncio.run(Enricher(llm=fake_llm).enrich(_trial()))

        assert trial.ai_summary == "A short patient-friendly summary."
        assert len(fake_llm.prompts) == 1

    def test_sets_summary_on_publication(self, fake_llm):
        from app.services.enrichment import Enricher

        publication = asyncio.run(Enricher(llm=fake_llm).enrich(_publication()))

        assert publication.ai_summary == "A short patient-friendly summary."

    def test_researcher_is_untouched(self, fake_llm):
        from app.schemas.records import ResearcherRecord
        from app.services.enrichment import Enricher

        researcher = ResearcherRecord(name="Jane Doe", affiliation="Mayo Clinic")
        enricher = Enricher(llm=fake_llm)

        assert not enricher.supports(researcher)
        assert asyncio.run(enricher.enrich(researcher)) is researcher
        assert fake_llm.prompts == []

    def test_failure_raises_enrichment_error(self):
        from app.core.exceptions import EnrichmentError
        from app.services.enrichment import Enricher

        trial = _trial()
        enricher = Enricher(llm=FakeLLM(fail_on=["Drug X"]))

        with pytest.raises(EnrichmentError) as exc_info:
            asyncio.run(enricher.enrich(trial))

        assert exc_info.value.record_key == "NCT01234567"
        assert trial.ai_summary is None

    def test_empty_response_raises(self):
        from app.core.exceptions import EnrichmentError
        from app.services.enrichment import Enricher

        with pytest.raises(EnrichmentError, match="empty response"):
            asyncio.run(Enricher(llm=FakeLLM(reply="   ")).enrich(_trial()))

    def test_timeout_raises(self):
        from app.core.exceptions import EnrichmentError
        from app.services.enrichment import Enricher

        class SlowLLM:
            async def ainvoke(self, prompt):
                await asyncio.sleep(1)
                return "too late"

        with pytest.raises(EnrichmentError, match="timed out"):
            asyncio.run(Enricher(llm=SlowLLM(), timeout_seconds=0.01).enrich(_trial()))

    def test_one_attempt_per_record(self):
        from app.core.exceptions import EnrichmentError
        from app.services.enrichment import Enricher

        llm = FakeLLM(fail_on=["Drug X"])
        with pytest.raises(EnrichmentError):
            asyncio.run(Enricher(llm=llm).enrich(_trial()))

        assert len(llm.prompts) == 1
