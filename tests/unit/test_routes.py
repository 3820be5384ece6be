"""Unit tests for the HTTP API."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from history_reader import __version__
from history_reader.api.routes import get_preference_store, get_reader, get_status_board
from history_reader.main import app
from history_reader.models import DisplayPayload, FetchStatus, ReadResult
from history_reader.preferences import PreferenceStore
from history_reader.services.status import StatusBoard


@pytest.fixture
def reader() -> MagicMock:
    reader = MagicMock()
    reader.run = AsyncMock()
    return reader


@pytest.fixture
def board() -> StatusBoard:
    return StatusBoard()


@pytest.fixture
def client(reader: MagicMock, board: StatusBoard, tmp_path: Path):
    store = PreferenceStore(tmp_path / "prefs.json")
    app.dependency_overrides[get_reader] = lambda: reader
    app.dependency_overrides[get_status_board] = lambda: board
    app.dependency_overrides[get_preference_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestInfoEndpoints:
    def test_root(self, client: TestClient) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["version"] == __version__

    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/v1/health")
        assert response.json() == {"status": "healthy", "version": __version__}


class TestArticleEndpoint:
    """Tests for POST /api/v1/article."""

    def test_complete(self, client: TestClient, reader: MagicMock) -> None:
        payload = DisplayPayload(
            header_topic="明治維新",
            header_category="明治時代の政治",
            body_text="明治維新とは...",
        )
        reader.run.return_value = ReadResult(
            status=FetchStatus.COMPLETE, attempts=2, payload=payload
        )

        response = client.post("/api/v1/article")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "complete"
        assert body["attempts"] == 2
        assert body["topic"] == "明治維新"
        assert body["category"] == "明治時代の政治"
        assert body["content"] == payload.content
        assert body["char_count"] == payload.char_count
        assert body["error"] is None

    def test_error(self, client: TestClient, reader: MagicMock) -> None:
        reader.run.return_value = ReadResult(
            status=FetchStatus.ERROR,
            attempts=4,
            error="取得できませんでした。\nエラー: timeout",
        )

        response = client.post("/api/v1/article")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "error"
        assert body["content"] is None
        assert body["char_count"] == 0
        assert body["error"] == "取得できませんでした。\nエラー: timeout"

    def test_busy_returns_conflict(self, client: TestClient, reader: MagicMock) -> None:
        reader.run.return_value = None

        response = client.post("/api/v1/article")

        assert response.status_code == 409


class TestStatusEndpoint:
    def test_reports_board(self, client: TestClient, board: StatusBoard) -> None:
        board(FetchStatus.FETCHING, "検索開始...")

        response = client.get("/api/v1/status")

        assert response.json() == {"status": "fetching", "message": "検索開始..."}

    def test_idle_by_default(self, client: TestClient) -> None:
        assert client.get("/api/v1/status").json()["status"] == "idle"


class TestPreferencesEndpoints:
    """Tests for GET/PUT /api/v1/preferences."""

    def test_defaults(self, client: TestClient) -> None:
        response = client.get("/api/v1/preferences")
        assert response.json() == {"font_size": 14, "font_family": "serif"}

    def test_update_and_read_back(self, client: TestClient) -> None:
        response = client.put(
            "/api/v1/preferences", json={"font_size": 18, "font_family": "Noto Sans JP"}
        )
        assert response.status_code == 200

        assert client.get("/api/v1/preferences").json() == {
            "font_size": 18,
            "font_family": "Noto Sans JP",
        }

    def test_out_of_range_size_resets(self, client: TestClient) -> None:
        response = client.put("/api/v1/preferences", json={"font_size": 4, "font_family": "serif"})
        assert response.json()["font_size"] == 14
