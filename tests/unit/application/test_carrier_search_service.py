"""Tests for the carrier search orchestration and its fallback notices."""

import pytest

from app.application.search_service import (
    NOTICE_DATABASE_UNAVAILABLE,
    NOTICE_NO_VERIFIED_CARRIERS,
    NOTICE_QUERY_ERROR,
    CarrierSearchService,
)
from app.application.suggestion.suggestion_service import CarrierSuggestionService
from app.domain.entities.carrier import CarrierSource, SearchFilter, TransportType
from tests.mocks.mock_repositories import MockCarrierRepository
from tests.mocks.mock_services import MockAIService, MockRateLimiter


def make_search_service(repository, ai=None, enabled=True):
    suggestions = CarrierSuggestionService(
        ai_service=ai,
        rate_limiter=MockRateLimiter(),
        enabled=enabled,
    )
    return CarrierSearchService(repository, suggestions)


class TestDatabaseResults:

    async def test_type_filter_returns_matching_carriers(self, alpine_logistics):
        service = make_search_service(MockCarrierRepository([alpine_logistics]))

        result = await service.search(SearchFilter.create(type="truck"), "local")

        assert result.used_ai is False
        assert result.notice is None
        assert [c.name for c in result.carriers] == ["Alpine Logistics"]
        assert result.carriers[0].source is CarrierSource.DB
        assert result.carriers[0].contact is not None

    async def test_lane_filters_match_any_lane(self, seed_carriers):
        service = make_search_service(MockCarrierRepository(seed_carriers))

        result = await service.search(SearchFilter.create(origin="ES"), "local")

        assert [c.name for c in result.carriers] == ["Iberia Freight"]

    async def test_empty_filter_lists_everything(self, seed_carriers):
        service = make_search_service(MockCarrierRepository(seed_carriers))

        result = await service.search(SearchFilter(), "local")

        assert len(result.carriers) == 2
        assert result.used_ai is False

    async def test_limit_passed_to_store(self, seed_carriers):
        repository = MockCarrierRepository(seed_carriers)
        service = make_search_service(repository)

        await service.search(SearchFilter(), "local")

        assert repository.call_log[-1][2] == 50


class TestFallbacks:

    async def test_empty_store_with_ai_disabled_returns_stub(self):
        repository = MockCarrierRepository([])
        ai = MockAIService()
        service = make_search_service(repository, ai, enabled=False)

        result = await service.search(
            SearchFilter.create(type="truck", origin="FR", destination="DE"), "local"
        )

        assert result.used_ai is True
        assert result.carriers == []
        assert result.notice == NOTICE_NO_VERIFIED_CARRIERS
        [stub] = result.suggestions
        assert stub.source is CarrierSource.AI
        assert stub.verified is False
        assert stub.types == [TransportType.TRUCK]
        assert ai.call_count == 0

    async def test_connect_failure(self, seed_carriers):
        repository = MockCarrierRepository(seed_carriers)
        repository.should_fail_on_connect = True

        result = await make_search_service(repository).search(SearchFilter(), "local")

        assert result.used_ai is True
        assert result.notice == NOTICE_DATABASE_UNAVAILABLE
        assert result.suggestions
        assert repository.get_call_count("find") == 0

    async def test_query_failure(self, seed_carriers):
        repository = MockCarrierRepository(seed_carriers)
        repository.should_fail_on_find = True

        result = await make_search_service(repository).search(SearchFilter(), "local")

        assert result.notice == NOTICE_QUERY_ERROR
        assert result.carriers == []
        assert len(result.suggestions) == 1

    @pytest.mark.parametrize("verified_only", [True, False])
    async def test_verified_only_excludes_unverified(self, alpine_logistics, verified_only):
        alpine_logistics.verified = False
        service = make_search_service(MockCarrierRepository([alpine_logistics]))

        result = await service.search(
            SearchFilter.create(type="truck", verified_only=verified_only), "local"
        )

        assert result.used_ai is verified_only
