"""
Query assistance helpers.

Small LLM calls that help a patient turn free text into ingest terms:
the primary disease, related keywords, and a disease-aware search query.
"""
from typing import List

from app.core.exceptions import LLMError
from app.core.logging import get_logger
from app.services.enrichment import response_text

logger = get_logger(__name__)


async def _complete(llm, prompt: str) -> str:
    try:
        response = await llm.ainvoke(prompt)
    except Exception as e:
        raise LLMError(f"Query assist call failed: {e}") from e
    return response_text(response)


async def extract_disease(llm, text: str) -> str:
    prompt = (
        "Extract the primary disease or medical condition from this text. "
        f'Return only the disease name, nothing else: "{text}"'
    )
    return (await _complete(llm, prompt)).strip().strip('"').strip()


async def generate_keywords(llm, disease: str, context: str = None) -> List[str]:
    """Ask for 5-7 research keywords and split the comma-separated answer."""
    context_part = f" in the context of: {context}" if context else ""
    prompt = (
        f'Generate 5-7 relevant medical research keywords for "{disease}"{context_part}. '
        "Return only comma-separated keywords."
    )
    answer = await _complete(llm, prompt)
    keywords = [k.strip() for k in answer.split(",")]
    return [k for k in keywords if k]


async def enhance_search_query(llm, query: str, disease: str) -> str:
    prompt = (
        "Enhance this medical search query by combining it with the disease context. "
        "Return only the enhanced query:\n"
        f"Query: {query}\n"
        f"Disease: {disease}"
    )
    enhanced = await _complete(llm, prompt)
    if not enhanced:
        logger.warning("Empty enhanced query, keeping the original")
        return query
    return enhanced
