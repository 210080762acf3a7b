"""
Pytest configuration and fixtures.

Provides:
- Isolated data directory and rules-only extraction (set before config import)
- Sample content inputs
- Temp-file session store and workflow service
- FastAPI test client
"""
import os
import tempfile

os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="vcg-test-"))
os.environ.setdefault("LLM_PROVIDER", "rules")

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from models.content import ContentInput, ContentMetadata, ContentType


REVENUE_TEXT = "Revenue grew 25% in Q4. We should expand to Europe next year."
TIMELINE_TEXT = "First we designed the prototype. Then we tested it in 2023. Finally we shipped in 2024."
TINY_TEXT = "hi ok"


# ============ Content Fixtures ============


@pytest.fixture
def revenue_content() -> ContentInput:
    return ContentInput(content=REVENUE_TEXT)


@pytest.fixture
def timeline_content() -> ContentInput:
    return ContentInput(content=TIMELINE_TEXT)


@pytest.fixture
def tiny_content() -> ContentInput:
    return ContentInput(content=TINY_TEXT)


@pytest.fixture
def report_content() -> ContentInput:
    """Longer, data-heavy document."""
    text = (
        "Our analysis of the 2021 to 2024 data shows significant growth. "
        "Revenue increased from $1,200 in 2021 to $4,500 in 2024 because demand rose sharply. "
        "Customer satisfaction reached 4 out of 5 and retention hit 87%. "
        "However, churn was higher than expected in 2022. "
        "Compared to competitors, our margins remained 12% better. "
        "The key finding is that the pricing framework drives the result."
    )
    return ContentInput(
        content=text,
        type=ContentType.DOCUMENT,
        metadata=ContentMetadata(title="Annual Report"),
    )


# ============ Cache Isolation ============


@pytest.fixture(autouse=True)
def clear_analysis_cache():
    from services.analysis_cache import analysis_cache

    analysis_cache._cache.clear()
    yield
    analysis_cache._cache.clear()


# ============ Workflow Fixtures ============


@pytest.fixture
def session_store(tmp_path):
    from storage.session_store import SessionStore

    return SessionStore(storage_path=tmp_path / "sessions.json")


@pytest.fixture
def workflow(session_store):
    from services.workflow import WorkflowService

    return WorkflowService(store=session_store)


# ============ FastAPI Test Client ============


@pytest.fixture
def app():
    from main import app

    return app


@pytest.fixture
def client(app, session_store, monkeypatch) -> Generator[TestClient, None, None]:
    """Test client whose session routes write to a temp store."""
    from services.workflow import workflow_service

    monkeypatch.setattr(workflow_service, "store", session_store)
    with TestClient(app) as c:
        yield c
