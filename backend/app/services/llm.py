"""
LLM Client Management

Provides cached chat clients for summary generation and query assistance.
Clients are built with an explicit timeout and no automatic retries, so each
record gets at most one summarization attempt per ingest cycle.
"""
from functools import lru_cache
from typing import Optional

from langchain_openai import ChatOpenAI

from app.core.config import settings


@lru_cache(maxsize=4)
def get_llm(
    model: str = "gpt-4o-mini",
    temperature: float = 0.2,
    timeout: Optional[float] = None
) -> ChatOpenAI:
    """
    Get a cached LLM instance.

    Args:
        model: OpenAI model name (e.g., "gpt-4o-mini", "gpt-4o")
        temperature: Temperature for generation
        timeout: Request timeout in seconds (default: settings.LLM_TIMEOUT_SECONDS)

    Returns:
        Cached ChatOpenAI instance
    """
    return ChatOpenAI(
        model=model,
        temperature=temperature,
        timeout=timeout or settings.LLM_TIMEOUT_SECONDS,
        max_retries=0,
        api_key=settings.OPENAI_API_KEY
    )


def get_summarizer() -> ChatOpenAI:
    """The configured client used for record summaries."""
    return get_llm(model=settings.LLM_MODEL, temperature=settings.LLM_TEMPERATURE)


def clear_llm_cache():
    """
    Clear the LLM client cache.

    Useful for testing or when you need to force re-initialization.
    """
    get_llm.cache_clear()
