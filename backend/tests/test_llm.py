"""Tests for services/llm.py - LLM client management."""
import inspect

import pytest


class TestLLMModule:
    """Test the LLM module exports and structure."""

    def test_get_llm_is_exported(self):
        from app.services.llm import get_llm

        assert callable(get_llm)

    def test_get_summarizer_is_exported(self):
        from app.services.llm import get_summarizer

        assert callable(get_summarizer)

    def test_clear_llm_cache_is_exported(self):
        from app.services.llm import clear_llm_cache

        assert callable(clear_llm_cache)


class TestLLMCaching:
    """Test LLM client caching behavior."""

    def test_get_llm_is_cached(self):
        from app.services.llm import get_llm

        assert hasattr(get_llm, 'cache_info')

    def test_same_arguments_return_same_client(self):
        from app.services.llm import clear_llm_cache, get_llm

        clear_llm_cache()
        assert get_llm("gpt-4o-mini", 0.2) is get_llm("gpt-4o-mini", 0.2)

    def test_clear_llm_cache_clears_all(self):
        from app.services.llm import clear_llm_cache, get_llm

        get_llm()
        clear_llm_cache()
        assert get_llm.cache_info().currsize == 0


class TestLLMClientConfiguration:
    """Summaries get one attempt with an explicit timeout."""

    def test_get_llm_has_default_model(self):
        from app.services.llm import get_llm

        sig = inspect.signature(get_llm)
        assert sig.parameters['model'].default == "gpt-4o-mini"

    def test_client_does_not_retry(self):
        from app.services.llm import clear_llm_cache, get_llm

        clear_llm_cache()
        assert get_llm().max_retries == 0

    def test_client_has_timeout(self):
        from app.core.config import settings
        from app.services.llm import clear_llm_cache, get_llm

        clear_llm_cache()
        assert get_llm().request_timeout == settings.LLM_TIMEOUT_SECONDS
