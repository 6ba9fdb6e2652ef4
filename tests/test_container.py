"""Tests for container wiring."""

import asyncio

from spoonacular_proxy.adapters.spoonacular_client import HttpxSpoonacularClient
from spoonacular_proxy.containers import build_container


def test_build_container_shares_one_cache(settings) -> None:
    container = build_container(settings)

    assert isinstance(container.spoonacular_client, HttpxSpoonacularClient)
    assert container.fetcher.cache is container.cache
    assert container.spoonacular_service.fetcher is container.fetcher
    asyncio.run(container.close_resources())
    assert container.spoonacular_client.http_client.is_closed


def test_build_container_applies_cache_settings(settings) -> None:
    settings.cache_single_flight = True
    settings.cache_ttl_overrides = {"recipeById": 86400}

    container = build_container(settings)

    assert container.fetcher.single_flight is True
    assert container.spoonacular_service.ttl("recipeById") == 86400
    asyncio.run(container.close_resources())


def test_separate_containers_do_not_share_state(settings) -> None:
    first = build_container(settings)
    second = build_container(settings)
    first.cache.set("recipe_1", {"id": 1}, ttl_seconds=60)

    assert second.cache.get("recipe_1") is None
    asyncio.run(first.close_resources())
    asyncio.run(second.close_resources())
