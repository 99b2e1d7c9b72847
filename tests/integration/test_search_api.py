"""HTTP-level tests for POST /api/search."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_search_service
from app.application.search_service import (
    NOTICE_DATABASE_UNAVAILABLE,
    NOTICE_NO_VERIFIED_CARRIERS,
    CarrierSearchService,
)
from app.application.suggestion.suggestion_service import CarrierSuggestionService
from app.main import create_app
from tests.mocks.mock_repositories import MockCarrierRepository
from tests.mocks.mock_services import MockAIService, MockRateLimiter, tool_call_response


@pytest.fixture
def repository(seed_carriers):
    return MockCarrierRepository(seed_carriers)


@pytest.fixture
def ai_service():
    return MockAIService()


@pytest.fixture
def rate_limiter():
    return MockRateLimiter()


@pytest.fixture
def client(repository, ai_service, rate_limiter):
    app = create_app()
    suggestions = CarrierSuggestionService(ai_service=ai_service, rate_limiter=rate_limiter)
    service = CarrierSearchService(repository, suggestions)
    app.dependency_overrides[get_search_service] = lambda: service
    return TestClient(app)


class TestSearchEndpoint:

    def test_store_hits_in_camel_case(self, client):
        response = client.post("/api/search", json={"type": "reefer"})

        assert response.status_code == 200
        body = response.json()
        assert body["usedAi"] is False
        assert "notice" not in body
        assert "suggestions" not in body
        [carrier] = body["carriers"]
        assert carrier["name"] == "Alpine Logistics"
        assert carrier["logoEmoji"] == "⛰️"
        assert carrier["source"] == "db"
        assert carrier["contact"]["email"] == "hello@alpine.example"
        assert "confidence" not in carrier
        assert int(response.headers["x-duration-ms"]) >= 0

    def test_empty_body_lists_all(self, client):
        response = client.post("/api/search", json={})

        assert response.status_code == 200
        assert len(response.json()["carriers"]) == 2

    def test_blank_fields_are_absent_and_codes_upper_cased(self, client, repository):
        response = client.post(
            "/api/search", json={"type": " ", "origin": "es", "destination": "", "verifiedOnly": True}
        )

        assert response.status_code == 200
        search_filter = repository.call_log[-1][1]
        assert search_filter.type is None
        assert search_filter.origin == "ES"
        assert search_filter.destination is None
        assert search_filter.verified_only is True
        assert [c["name"] for c in response.json()["carriers"]] == ["Iberia Freight"]

    def test_unknown_type_rejected(self, client, repository):
        response = client.post("/api/search", json={"type": "hovercraft"})

        assert response.status_code == 422
        assert repository.call_log == []

    def test_ai_suggestions_when_nothing_matches(self, client, ai_service, rate_limiter):
        ai_service.responses.append(
            tool_call_response(
                {
                    "items": [
                        {
                            "id": "ai-1",
                            "name": "Baltic Tank Lines",
                            "types": ["tanker"],
                            "lanes": [{"origin": "PL", "destination": "LT"}],
                        }
                    ]
                }
            )
        )

        response = client.post(
            "/api/search",
            json={"type": "tanker", "origin": "PL", "destination": "LT"},
            headers={"x-forwarded-for": "198.51.100.4, 10.0.0.1"},
        )

        body = response.json()
        assert body["usedAi"] is True
        assert body["carriers"] == []
        assert body["notice"] == NOTICE_NO_VERIFIED_CARRIERS
        [suggestion] = body["suggestions"]
        assert suggestion["name"] == "Baltic Tank Lines"
        assert suggestion["verified"] is False
        assert suggestion["source"] == "ai"
        assert suggestion["confidence"] == 0.55
        assert "contact" not in suggestion
        assert rate_limiter.call_log == ["198.51.100.4"]

    def test_store_outage_degrades_to_suggestions(self, client, repository, rate_limiter):
        repository.should_fail_on_connect = True

        response = client.post(
            "/api/search",
            json={"type": "truck", "origin": "FR"},
            headers={"cf-connecting-ip": "203.0.113.9"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["notice"] == NOTICE_DATABASE_UNAVAILABLE
        assert body["suggestions"][0]["id"].startswith("ai-")
        assert rate_limiter.call_log == ["203.0.113.9"]

    def test_rate_key_defaults_to_local(self, client, repository, rate_limiter):
        repository.carriers.clear()

        client.post("/api/search", json={"type": "truck", "origin": "FR"})

        assert rate_limiter.call_log == ["local"]

    def test_unexpected_failure_is_500(self):
        app = create_app()
        service = MagicMock()
        service.search = AsyncMock(side_effect=RuntimeError("boom"))
        app.dependency_overrides[get_search_service] = lambda: service

        response = TestClient(app).post("/api/search", json={"type": "truck"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Search request could not be completed"}


def test_health_endpoints():
    client = TestClient(create_app())

    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/").json()["message"] == "LaneList API"
