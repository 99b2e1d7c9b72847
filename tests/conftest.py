"""Pytest fixtures for provider-based architecture."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import List

import pytest

from app.core.config import get_settings
from app.domain.entities.carrier import Carrier
from app.infrastructure.persistence.seed_data import build_seed_carriers
from app.infrastructure.providers import reset_all_providers


@pytest.fixture(autouse=True)
async def reset_provider_state() -> AsyncIterator[None]:
    """Ensure each test starts with clean provider singletons."""
    await reset_all_providers()
    yield
    await reset_all_providers()


@pytest.fixture
def clean_settings_cache():
    """Re-read settings from the environment for the duration of a test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def seed_carriers() -> List[Carrier]:
    """Alpine Logistics and Iberia Freight."""
    return build_seed_carriers()


@pytest.fixture
def alpine_logistics(seed_carriers) -> Carrier:
    return seed_carriers[0]
