from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tipstream.app import create_app
from tipstream.core import dependencies
from tipstream.core.config import get_settings
from tipstream.core.dependencies import get_tip_service
from tipstream.services import TipService


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    get_settings.cache_clear()
    dependencies._gemini_generator = None
    yield
    get_settings.cache_clear()
    dependencies._gemini_generator = None


@pytest.fixture
def app() -> FastAPI:
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    app.dependency_overrides[get_tip_service] = lambda: TipService(generator=None)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
