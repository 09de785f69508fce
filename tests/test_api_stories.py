"""Tests for the HTTP shell (/, /getTimeStories, /debug, 404 mapping).

The pipeline is mocked at the router boundary so no network calls are made;
one test swaps only the fetcher to run the real extractor behind the API.
"""

from __future__ import annotations

from typing import Generator
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from timestories.api.app import create_app
from timestories.scraper.errors import FetchTimeoutError, NetworkError
from timestories.scraper.models import FetchedDocument, Story


_STORIES = [
    Story(title="Markets Rally After the Vote", link="https://time.com/7012345/markets-rally"),
    Story(title="Storm Season Begins Early", link="https://time.com/7012346/storm-season"),
]
_DOCUMENT = FetchedDocument(url="https://time.com/", html="<html>" + "x" * 94 + "</html>", status_code=200)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    with TestClient(create_app(), raise_server_exceptions=True) as c:
        yield c


def _pipeline(result=None, error: Exception | None = None) -> AsyncMock:
    if error is not None:
        return AsyncMock(side_effect=error)
    return AsyncMock(return_value=result)


# ---------------------------------------------------------------------------
# GET /
# ---------------------------------------------------------------------------

class TestIndex:
    def test_lists_endpoints(self, client) -> None:
        with patch("timestories.api.routers.stories.latest_stories") as pipeline:
            resp = client.get("/")

        assert resp.status_code == 200
        body = resp.json()
        assert "message" in body
        assert set(body["endpoints"]) == {"GET /getTimeStories", "GET /debug"}
        pipeline.assert_not_called()


# ---------------------------------------------------------------------------
# GET /getTimeStories
# ---------------------------------------------------------------------------

class TestGetTimeStories:
    def test_returns_stories(self, client) -> None:
        with patch(
            "timestories.api.routers.stories.latest_stories",
            _pipeline((_DOCUMENT, _STORIES)),
        ):
            resp = client.get("/getTimeStories")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("application/json")
        assert resp.json() == [s.to_dict() for s in _STORIES]

    def test_body_is_pretty_printed(self, client) -> None:
        with patch(
            "timestories.api.routers.stories.latest_stories",
            _pipeline((_DOCUMENT, _STORIES)),
        ):
            resp = client.get("/getTimeStories")

        assert resp.text.startswith('[\n  {\n    "title": ')

    def test_empty_result_is_not_an_error(self, client) -> None:
        with patch(
            "timestories.api.routers.stories.latest_stories",
            _pipeline((_DOCUMENT, [])),
        ):
            resp = client.get("/getTimeStories")

        assert resp.status_code == 200
        assert resp.json() == []

    def test_fetch_failure_returns_500(self, client) -> None:
        with patch(
            "timestories.api.routers.stories.latest_stories",
            _pipeline(error=FetchTimeoutError("Request timeout after 15s")),
        ):
            resp = client.get("/getTimeStories")

        assert resp.status_code == 500
        assert resp.json() == {
            "error": "Failed to fetch stories",
            "message": "Request timeout after 15s",
        }

    def test_unexpected_failure_returns_500(self, client) -> None:
        with patch(
            "timestories.api.routers.stories.latest_stories",
            _pipeline(error=RuntimeError("boom")),
        ):
            resp = client.get("/getTimeStories")

        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to fetch stories"
        assert resp.json()["message"] == "boom"

    def test_real_extractor_behind_api(self, client, monkeypatch) -> None:
        monkeypatch.setattr("timestories.config.settings.target_url", "https://time.com/")
        html = "".join(
            f'<li><a href="https://time.com/70123{n:02d}/story-slug-{n}/">Headline number {n} today</a></li>'
            for n in range(8)
        )
        document = FetchedDocument(url="https://time.com/", html=html, status_code=200)
        with patch(
            "timestories.scraper.pipeline.fetch_document",
            AsyncMock(return_value=document),
        ):
            resp = client.get("/getTimeStories")

        assert resp.status_code == 200
        body = resp.json()
        assert len(body) == 6
        assert body[0] == {
            "title": "Headline number 0 today",
            "link": "https://time.com/7012300/story-slug-0",
        }


# ---------------------------------------------------------------------------
# GET /debug
# ---------------------------------------------------------------------------

class TestDebug:
    def test_reports_document_stats(self, client) -> None:
        with patch(
            "timestories.api.routers.stories.latest_stories",
            _pipeline((_DOCUMENT, _STORIES)),
        ):
            resp = client.get("/debug")

        assert resp.status_code == 200
        assert resp.json() == {
            "htmlLength": 107,
            "storiesFound": 2,
            "stories": [s.to_dict() for s in _STORIES],
        }

    def test_failure_returns_500(self, client) -> None:
        with patch(
            "timestories.api.routers.stories.latest_stories",
            _pipeline(error=NetworkError("connection reset")),
        ):
            resp = client.get("/debug")

        assert resp.status_code == 500
        assert "error" in resp.json()


# ---------------------------------------------------------------------------
# Routing / headers
# ---------------------------------------------------------------------------

class TestRouting:
    def test_trailing_slash_is_not_redirected(self, client) -> None:
        for path in ("/debug/", "/getTimeStories/"):
            resp = client.get(path, follow_redirects=False)
            assert resp.status_code == 404
            assert resp.json() == {"error": "Endpoint not found"}

    def test_cors_headers_without_origin(self, client) -> None:
        resp = client.get("/")
        assert resp.headers["access-control-allow-origin"] == "*"
        assert resp.headers["access-control-allow-methods"] == "GET"
        assert resp.headers["access-control-allow-headers"] == "Content-Type"

    def test_cors_headers_on_errors(self, client) -> None:
        with patch(
            "timestories.api.routers.stories.latest_stories",
            _pipeline(error=NetworkError("connection reset")),
        ):
            failed = client.get("/getTimeStories")
        missing = client.get("/nope")

        assert failed.status_code == 500
        assert missing.status_code == 404
        for resp in (failed, missing):
            assert resp.headers["access-control-allow-origin"] == "*"

    def test_unknown_path_returns_404(self, client) -> None:
        resp = client.get("/nope")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Endpoint not found"}
        assert resp.headers["content-type"].startswith("application/json")

    def test_non_get_method_returns_404(self, client) -> None:
        resp = client.post("/getTimeStories")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Endpoint not found"}

    def test_cors_allows_any_origin(self, client) -> None:
        resp = client.get("/", headers={"Origin": "https://dashboard.example.com"})
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_cors_preflight_allows_get(self, client) -> None:
        resp = client.options(
            "/getTimeStories",
            headers={
                "Origin": "https://dashboard.example.com",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert resp.status_code == 200
        assert "GET" in resp.headers["access-control-allow-methods"]
