"""Tests for the HTTP API."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from conftest import wiki_url
from errors import RateLimitError
from server import API_ENDPOINTS, INVALID_JSON_MESSAGE, create_app


@pytest.fixture
def client(config, pipeline):
    return TestClient(create_app(config, pipeline=pipeline))


class TestSummarize:

    def test_single_article(self, client):
        response = client.post("/api/summarize", json={"url": wiki_url("Cat"), "length": "short"})

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Cat"
        assert body["originalUrl"] == wiki_url("Cat")
        assert body["length"] == "short"
        assert body["wordCount"] > 0
        assert "Learning Objectives" in body["summary"]

    def test_length_defaults_to_short(self, client):
        response = client.post("/api/summarize", json={"url": wiki_url("Cat")})
        assert response.json()["length"] == "short"

    def test_invalid_url(self, client):
        response = client.post("/api/summarize", json={"url": "https://example.com/wiki/Cat"})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_URL"

    def test_missing_body(self, client):
        response = client.post("/api/summarize")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_URL"

    def test_unknown_article(self, client):
        response = client.post("/api/summarize", json={"url": wiki_url("Missing")})

        assert response.status_code == 404
        assert response.json() == {"error": 'Article "Missing" not found', "code": "ARTICLE_NOT_FOUND"}

    def test_malformed_json(self, client):
        response = client.post(
            "/api/summarize",
            content=b'{"url": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == INVALID_JSON_MESSAGE


class TestSummarizeMultiple:

    def test_multiple_articles(self, client):
        response = client.post(
            "/api/summarize-multiple",
            json={"urls": [wiki_url("Cat"), wiki_url("Dog")], "length": "medium"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["titles"] == ["Cat", "Dog"]
        assert body["successCount"] == 2
        assert body["totalCount"] == 2
        assert body["length"] == "medium"
        assert body["analytics"]["summaryStrategy"] == "multi_topic_structured"
        assert "compressionRatio" in body["analytics"]["optimization"]
        assert "warnings" not in body

    def test_partial_failure_reports_warnings(self, client):
        response = client.post("/api/summarize-multiple", json={"urls": [wiki_url("Cat"), wiki_url("Missing")]})

        assert response.status_code == 200
        body = response.json()
        assert body["successCount"] == 1
        assert body["totalCount"] == 2
        assert body["warnings"] == ['Article "Missing" not found']

    @pytest.mark.parametrize("payload", [{"urls": []}, {"urls": "not a list"}, {}])
    def test_urls_must_be_a_list(self, client, payload):
        response = client.post("/api/summarize-multiple", json=payload)

        assert response.status_code == 400
        assert "array of Wikipedia URLs" in response.json()["error"]

    def test_too_many_urls(self, client):
        urls = [wiki_url(f"Page {i}") for i in range(11)]
        response = client.post("/api/summarize-multiple", json={"urls": urls})

        assert response.status_code == 400
        assert response.json()["error"] == "Maximum 10 URLs allowed per request."

    def test_every_article_missing(self, client):
        response = client.post("/api/summarize-multiple", json={"urls": [wiki_url("Missing")]})

        assert response.status_code == 404
        assert "No articles could be retrieved" in response.json()["error"]


class TestErrors:

    def test_rate_limit_sets_retry_after(self, config, pipeline, monkeypatch):
        monkeypatch.setattr(pipeline, "summarize_single", AsyncMock(side_effect=RateLimitError()))
        client = TestClient(create_app(config, pipeline=pipeline))

        response = client.post("/api/summarize", json={"url": wiki_url("Cat")})

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "60"
        assert response.json()["code"] == "RATE_LIMIT_EXCEEDED"

    def test_unexpected_error_is_sanitized(self, config, pipeline, monkeypatch):
        monkeypatch.setattr(
            pipeline, "summarize_single", AsyncMock(side_effect=RuntimeError("upstream rejected token=abc123"))
        )
        client = TestClient(create_app(config, pipeline=pipeline), raise_server_exceptions=False)

        response = client.post("/api/summarize", json={"url": wiki_url("Cat")})

        assert response.status_code == 500
        assert response.json()["code"] == "INTERNAL_ERROR"
        assert "abc123" not in response.text

    def test_unknown_endpoint(self, client):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "API endpoint not found"
        assert body["code"] == "NOT_FOUND"
        assert body["availableEndpoints"] == API_ENDPOINTS


class TestHealthAndHeaders:

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["uptime"] >= 0
        assert "timestamp" in body

    def test_request_id_is_generated(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Request-ID"]

    def test_request_id_is_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "req-42"})
        assert response.headers["X-Request-ID"] == "req-42"
