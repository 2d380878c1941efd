from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from docportal.api import deps
from docportal.core.config import settings
from docportal.db.session import create_db_engine, get_db, init_db
from docportal.main import app
from docportal.schemas.analysis import AnalysisResult
from docportal.services.analyzer import DocumentAnalyzer
from docportal.services.credential_store import ClientStore
from docportal.services.document_store import DocumentStore


class FakeAnalyzer(DocumentAnalyzer):
    """
    Analyzer answering from a table keyed by file content.

    Values may be an AnalysisResult, a camelCase dict as the real service
    returns, or an exception instance to raise.
    """

    def __init__(self, results: dict[bytes, Any] | None = None) -> None:
        self.results = dict(results or {})
        self.calls: list[tuple[bytes, str]] = []

    @property
    def name(self) -> str:
        return "fake"

    def _analyze(self, payload: bytes, mime_type: str) -> AnalysisResult:
        self.calls.append((payload, mime_type))
        result = self.results.get(payload)
        if isinstance(result, Exception):
            raise result
        if result is None:
            return AnalysisResult.read_error()
        if isinstance(result, AnalysisResult):
            return result
        return AnalysisResult.model_validate(result)


def analysis(client_name: str, hours: float = 0, resolved: bool = False, materials=None) -> dict:
    return {
        "clientName": client_name,
        "confidence": 0.9,
        "data": {
            "hours": hours,
            "isResolved": resolved,
            "materials": materials or [],
        },
    }


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def clients(db) -> ClientStore:
    return ClientStore(db)


@pytest.fixture
def documents(db) -> DocumentStore:
    return DocumentStore(db)


@pytest.fixture
def analyzer() -> FakeAnalyzer:
    return FakeAnalyzer()


@pytest.fixture
def api(engine, analyzer):
    def _get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[deps.get_analyzer] = lambda: analyzer
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def login(api: TestClient, username: str, password: str) -> dict[str, str]:
    res = api.post(
        f"{settings.API_V1_STR}/auth/login",
        data={"username": username, "password": password},
    )
    assert res.status_code == 200, res.text
    # Tests authenticate with the header only
    api.cookies.clear()
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


@pytest.fixture
def admin_headers(api) -> dict[str, str]:
    return login(api, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
