"""Cache introspection endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from spoonacular_proxy.domain.operations import (
    INGREDIENT_KEY_TAGS,
    QUERY_KEY_TAGS,
    RECIPE_KEY_TAGS,
)
from spoonacular_proxy.services.cache_keys import key_tag

if TYPE_CHECKING:
    from collections.abc import Collection

    from spoonacular_proxy.containers import AppContainer

router = APIRouter(prefix="/api/cache", tags=["cache"])

_logger = logging.getLogger(__name__)


@router.get("/stats")
async def cache_stats(request: Request) -> dict[str, object]:
    """Return counts and keys of the live cache entries."""
    container: AppContainer = request.app.state.container
    keys = container.cache.keys()
    return {
        "totalCachedItems": len(keys),
        "cachedQueries": _count_tagged(keys, QUERY_KEY_TAGS),
        "cachedRecipes": _count_tagged(keys, RECIPE_KEY_TAGS),
        "cachedIngredients": _count_tagged(keys, INGREDIENT_KEY_TAGS),
        "cacheKeys": keys,
    }


@router.delete("/clear")
async def clear_cache(request: Request) -> dict[str, str]:
    """Drop every cached entry."""
    container: AppContainer = request.app.state.container
    container.cache.flush_all()
    _logger.info("Cache cleared")
    return {"message": "Cache cleared successfully"}


def _count_tagged(keys: list[str], tags: Collection[str]) -> int:
    return sum(1 for key in keys if key_tag(key) in tags)
