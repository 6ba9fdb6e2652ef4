"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from spoonacular_proxy.adapters.spoonacular_client import (
    HttpxSpoonacularClient,
    SpoonacularClient,
)
from spoonacular_proxy.config import Settings
from spoonacular_proxy.services.cache import InMemoryCache
from spoonacular_proxy.services.fetcher import CachedFetcher
from spoonacular_proxy.services.spoonacular import SpoonacularService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    spoonacular_client: SpoonacularClient
    cache: InMemoryCache
    fetcher: CachedFetcher
    spoonacular_service: SpoonacularService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    spoonacular_client = HttpxSpoonacularClient.create(
        api_key=resolved_settings.spoonacular_api_key,
        base_url=resolved_settings.spoonacular_base_url,
        timeout_seconds=resolved_settings.spoonacular_timeout_seconds,
    )
    return wire_container(resolved_settings, spoonacular_client, InMemoryCache())


def wire_container(
    settings: Settings, client: SpoonacularClient, cache: InMemoryCache
) -> AppContainer:
    """Assemble the container around a client and a cache instance."""
    fetcher = CachedFetcher(
        client=client,
        cache=cache,
        single_flight=settings.cache_single_flight,
    )
    spoonacular_service = SpoonacularService(
        fetcher=fetcher,
        default_ttl_seconds=settings.cache_default_ttl_seconds,
        ttl_overrides=dict(settings.cache_ttl_overrides),
    )

    async def close_resources() -> None:
        await client.close()

    return AppContainer(
        settings=settings,
        spoonacular_client=client,
        cache=cache,
        fetcher=fetcher,
        spoonacular_service=spoonacular_service,
        close_resources=close_resources,
    )
