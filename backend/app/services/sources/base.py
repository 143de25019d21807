"""
Base types and interfaces for data sources.

Every source adapter issues one GET per ingest cycle, parses the response
into normalized records and knows how to synthesize a placeholder record
when the source yields nothing. Failures never escape fetch(): they are
logged and reported as FetchEmpty.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

import httpx

from app.core.exceptions import (
    SourceError,
    SourceHTTPError,
    SourceParseError,
    SourceTimeoutError,
)
from app.core.logging import get_logger
from app.schemas.records import NormalizedRecord
from app.schemas.search import IngestQuery
from app.schemas.ingestion import MAX_RESULTS_PER_CALL, FetchEmpty, FetchOk, FetchResult

logger = get_logger(__name__)

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class BaseSource(ABC):
    """
    Abstract base class for all source adapters.

    Subclasses provide the request, the parser and the fallback record;
    the base class owns the HTTP call, the result cap and error handling.

    Example:
        class NewSource(BaseSource):
            name = "NewSource"
            user_agent = "CuraLink/1.0"

            def build_request(self, query):
                return "https://example.org/search", {"q": query.disease}

            def parse(self, response, query):
                return [...]

            def fallback(self, query):
                return ...
    """

    name: str = "source"
    user_agent: str = "CuraLink/1.0"
    default_timeout: float = 10.0

    def __init__(
        self,
        timeout: Optional[float] = None,
        max_results: int = MAX_RESULTS_PER_CALL,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            timeout: Request timeout in seconds
            max_results: Parsed records kept per call, never above MAX_RESULTS_PER_CALL
            transport: Optional httpx transport, used by tests to stub the source
        """
        self.timeout = timeout or self.default_timeout
        self.max_results = max(0, min(max_results, MAX_RESULTS_PER_CALL))
        self._transport = transport

    @abstractmethod
    def build_request(self, query: IngestQuery) -> Tuple[str, Dict[str, Any]]:
        """Return the URL and query parameters for this search."""
        pass

    @abstractmethod
    def parse(self, response: httpx.Response, query: IngestQuery) -> List[NormalizedRecord]:
        """Turn a successful response into normalized records, in source order."""
        pass

    @abstractmethod
    def fallback(self, query: IngestQuery) -> NormalizedRecord:
        """Deterministic placeholder record built only from the query terms."""
        pass

    async def _get(self, url: str, params: Dict[str, Any]) -> httpx.Response:
        headers = {"User-Agent": self.user_agent}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True
            ) as client:
                response = await client.get(url, params=params, headers=headers)
        except httpx.TimeoutException as e:
            raise SourceTimeoutError(self.name, self.timeout) from e
        except httpx.HTTPError as e:
            raise SourceError(self.name, f"Request failed: {e}") from e

        if not response.is_success:
            raise SourceHTTPError(self.name, response.status_code)
        return response

    async def fetch(self, query: IngestQuery) -> FetchResult:
        """
        Search the source and return at most max_results records.

        Returns:
            FetchOk with the parsed records, or FetchEmpty when the source was
            unreachable, answered with an error, could not be parsed or had
            no matching results
        """
        url, params = self.build_request(query)
        logger.info(f"Searching {self.name}: {' '.join(query.terms())[:50]}...")

        try:
            response = await self._get(url, params)
        except SourceError as e:
            logger.error(str(e))
            return FetchEmpty(reason=str(e))

        try:
            records = self.parse(response, query)
        except Exception as e:
            error = SourceParseError(self.name, str(e))
            logger.error(str(error))
            return FetchEmpty(reason=str(error))

        records = records[:self.max_results]
        if not records:
            logger.warning(f"{self.name}: no results")
            return FetchEmpty(reason=f"{self.name}: no results")

        logger.info(f"{self.name}: parsed {len(records)} records")
        return FetchOk(records=records)
