"""
Pytest fixtures and configuration for backend tests.

Provides a temporary SQLite record store, a fake summarization client,
stubbed source transports and sample source payloads.
"""
import os
import sys
import tempfile
from typing import Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Settings are read on first import, so the environment must be ready first
_TEST_DIR = tempfile.mkdtemp(prefix="curalink-tests-")
os.environ.setdefault("OPENAI_API_KEY", "test-key-not-real")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TEST_DIR, 'default.db')}")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")


@pytest.fixture(scope="session", autouse=True)
def set_test_environment():
    """Set environment variables for testing."""
    os.environ["OPENAI_API_KEY"] = "test-key-not-real"
    os.environ["RATE_LIMIT_ENABLED"] = "false"
    yield


class FakeLLM:
    """
    Stand-in for the chat client.

    Returns `reply` for every prompt, except prompts containing one of the
    `fail_on` substrings, which raise.
    """

    def __init__(self, reply: str = "A short patient-friendly summary.", fail_on: Optional[List[str]] = None):
        self.reply = reply
        self.fail_on = fail_on or []
        self.prompts: List[str] = []

    async def ainvoke(self, prompt: str):
        self.prompts.append(prompt)
        for marker in self.fail_on:
            if marker in prompt:
                raise RuntimeError(f"model unavailable for {marker}")
        return self.reply


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def store(tmp_path):
    """A RecordStore backed by a fresh SQLite file."""
    from app.services.store import RecordStore

    record_store = RecordStore(database_url=f"sqlite:///{tmp_path / 'records.db'}")
    record_store.check_connection()
    return record_store


def make_study(
    nct_id: str,
    title: str = "A Study of Drug X",
    status: Optional[str] = "RECRUITING",
    phases: Optional[List[str]] = None,
    conditions: Optional[List[str]] = None,
    city: Optional[str] = "Boston",
    email: Optional[str] = "trials@hospital.org",
) -> Dict:
    """One study in the ClinicalTrials.gov v2 response shape."""
    return {
        "protocolSection": {
            "identificationModule": {
                "nctId": nct_id,
                "briefTitle": f"{title} (brief)",
                "officialTitle": title,
            },
            "statusModule": {"overallStatus": status},
            "designModule": {"phases": phases if phases is not None else ["PHASE2"]},
            "conditionsModule": {"conditions": conditions or ["Lung Cancer"]},
            "armsInterventionsModule": {
                "interventions": [{"name": "Drug X", "type": "DRUG"}]
            },
            "eligibilityModule": {"eligibilityCriteria": "Adults over 18"},
            "contactsLocationsModule": {
                "locations": [{"city": city}] if city else [],
                "centralContacts": [{"email": email}] if email else [],
            },
            "sponsorCollaboratorsModule": {"leadSponsor": {"name": "Example University"}},
        }
    }


@pytest.fixture
def studies_payload():
    return {"studies": [make_study(f"NCT0000000{i}", title=f"Trial {i}") for i in range(1, 4)]}


def make_scholar_hit(title: str, citation: str = "J Smith, M Jones - Nature Medicine, 2021 - nature.com",
                     snippet: str = "We report results.", href: Optional[str] = "https://example.org/paper") -> str:
    link = f'<a href="{href}">{title}</a>' if href else title
    return (
        '<div class="gs_r"><div class="gs_ri">'
        f'<h3 class="gs_rt">{link}</h3>'
        f'<div class="gs_a">{citation}</div>'
        f'<div class="gs_rs">{snippet}</div>'
        '</div></div>'
    )


def make_scholar_page(hits: List[str]) -> str:
    return f"<html><body><div id=\"gs_res_ccl\">{''.join(hits)}</div></body></html>"


def make_author_card(name: str, affiliation: str = "Mayo Clinic", href: str = "/citations?user=abc",
                     interests: Optional[List[str]] = None) -> str:
    tags = "".join(f'<a class="gs_ai_one_int">{i}</a>' for i in (interests or ["Oncology"]))
    return (
        '<div class="gs_ai gs_scl gs_ai_chpr">'
        f'<h3 class="gs_ai_name"><a href="{href}">{name}</a></h3>'
        f'<div class="gs_ai_aff">{affiliation}</div>'
        f'<div class="gs_ai_int">{tags}</div>'
        '</div>'
    )


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


def json_transport(payload, status_code: int = 200) -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(status_code, json=payload))


def html_transport(html: str, status_code: int = 200) -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(status_code, text=html))


def failing_transport(exc: Exception) -> RecordingTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc
    return RecordingTransport(handler)


@pytest.fixture
def test_client(store, fake_llm):
    """Test client with the store and summarizer replaced."""
    from app.main import app
    from app.core.dependencies import get_store, get_summarizer

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_summarizer] = lambda: fake_llm

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
