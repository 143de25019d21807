"""
FastAPI Dependencies

Dependency injection for settings, the record store and the LLM handles.
Every dependency can be replaced through app.dependency_overrides, which is
how tests swap in a temporary store and a fake summarizer.
"""
from functools import lru_cache

from fastapi import Depends

from app.core.config import Settings
from app.services import llm
from app.services.enrichment import Enricher
from app.services.store import RecordStore


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache()
def get_store() -> RecordStore:
    """
    Get the record store bound to DATABASE_URL.

    Example test override:
        app.dependency_overrides[get_store] = lambda: RecordStore(database_url="sqlite:///test.db")
    """
    return RecordStore(database_url=get_settings().DATABASE_URL)


def get_summarizer():
    """
    Get the chat client used for summaries and query assistance.

    Example test override:
        class FakeLLM:
            async def ainvoke(self, prompt): return "A short summary."

        app.dependency_overrides[get_summarizer] = lambda: FakeLLM()
    """
    return llm.get_summarizer()


def get_enricher(summarizer=Depends(get_summarizer)) -> Enricher:
    """Get the enricher for trial and publication records."""
    return Enricher(llm=summarizer, timeout_seconds=get_settings().LLM_TIMEOUT_SECONDS)
