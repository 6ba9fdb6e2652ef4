"""Shared test fixtures."""

import copy
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from spoonacular_proxy.adapters.spoonacular_client import SpoonacularClient
from spoonacular_proxy.config import Settings
from spoonacular_proxy.containers import AppContainer, wire_container
from spoonacular_proxy.domain.upstream import Locator
from spoonacular_proxy.errors import UpstreamError
from spoonacular_proxy.services.cache import InMemoryCache


@dataclass
class ManualClock:
    """Clock that only moves when told to."""

    now: datetime = field(
        default_factory=lambda: datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@dataclass
class FakeSpoonacularClient(SpoonacularClient):
    """Fake Spoonacular client with canned responses keyed by path."""

    responses: dict[str, object] = field(default_factory=dict)
    failures: dict[str, UpstreamError] = field(default_factory=dict)
    calls: list[Locator] = field(default_factory=list)
    closed: bool = False

    async def send(self, locator: Locator) -> object:
        self.calls.append(locator)
        failure = self.failures.get(locator.path)
        if failure is not None:
            raise failure
        payload = self.responses.get(locator.path, {"path": locator.path})
        return copy.deepcopy(payload)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    return Settings(
        spoonacular_api_key="test-key",
        spoonacular_base_url="https://api.test",
        environment="test",
    )


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def cache(clock: ManualClock) -> InMemoryCache:
    return InMemoryCache(clock=clock)


@pytest.fixture
def spoonacular_client() -> FakeSpoonacularClient:
    return FakeSpoonacularClient(
        responses={
            "/recipes/complexSearch": {
                "results": [{"id": 715538, "title": "Chicken Bruschetta"}],
                "totalResults": 1,
            },
            "/recipes/12345/information": {"id": 12345, "title": "Pasta"},
            "/recipes/findByIngredients": [{"id": 1, "title": "Apple Pie"}],
        }
    )


@pytest.fixture
def container(
    settings: Settings,
    spoonacular_client: FakeSpoonacularClient,
    cache: InMemoryCache,
) -> AppContainer:
    return wire_container(settings, spoonacular_client, cache)
