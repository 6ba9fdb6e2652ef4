"""Ingredient endpoints proxied to Spoonacular."""

import logging

from fastapi import APIRouter, Query, Request

from spoonacular_proxy.api.common import get_service, parse_id, require, run_operation
from spoonacular_proxy.api.models import IngredientListRequest
from spoonacular_proxy.errors import InputValidationError

router = APIRouter(prefix="/api/ingredients", tags=["ingredients"])

_logger = logging.getLogger(__name__)

_INGREDIENT_ID_REQUIRED = "Valid ingredient ID is required"


@router.get("/autocomplete")
async def autocomplete_ingredients(
    request: Request,
    query: str | None = None,
    number: str | None = None,
    intolerances: str | None = None,
) -> dict[str, object]:
    """Autocomplete ingredient names."""
    if not query:
        _logger.warning("Ingredient autocomplete called without a query")
    query = require(query, "Query parameter is required")
    return await run_operation(
        get_service(request).autocomplete_ingredients(
            query, number=number, intolerances=intolerances
        ),
        "Failed to autocomplete ingredients",
    )


@router.get("/search")
async def search_ingredients(  # noqa: PLR0913
    request: Request,
    query: str | None = None,
    number: str | None = None,
    intolerances: str | None = None,
    sort: str | None = None,
    sort_direction: str | None = Query(default=None, alias="sortDirection"),
) -> dict[str, object]:
    """Search ingredients by name."""
    query = require(query, "Query parameter is required")
    return await run_operation(
        get_service(request).search_ingredients(
            query,
            number=number,
            intolerances=intolerances,
            sort=sort,
            sort_direction=sort_direction,
        ),
        "Failed to search ingredients",
    )


@router.get("/convert")
async def convert_amounts(
    request: Request,
    ingredient_name: str | None = Query(default=None, alias="ingredientName"),
    source_amount: str | None = Query(default=None, alias="sourceAmount"),
    source_unit: str | None = Query(default=None, alias="sourceUnit"),
    target_unit: str | None = Query(default=None, alias="targetUnit"),
) -> dict[str, object]:
    """Convert an ingredient amount between units."""
    if not (ingredient_name and source_amount and source_unit and target_unit):
        raise InputValidationError(
            "ingredientName, sourceAmount, sourceUnit, and targetUnit are required"
        )
    return await run_operation(
        get_service(request).convert_amounts(
            ingredient_name, source_amount, source_unit, target_unit
        ),
        "Failed to convert amounts",
    )


@router.post("/parse")
async def parse_ingredients(
    body: IngredientListRequest, request: Request
) -> dict[str, object]:
    """Parse free-text ingredient lines."""
    ingredient_list = require(
        body.ingredient_list, "ingredientList is required in request body"
    )
    return await run_operation(
        get_service(request).parse_ingredients(ingredient_list, servings=body.servings),
        "Failed to parse ingredients",
    )


@router.post("/glycemicLoad")
async def glycemic_load(
    body: IngredientListRequest, request: Request
) -> dict[str, object]:
    """Compute the glycemic load of an ingredient list."""
    ingredient_list = require(
        body.ingredient_list, "ingredientList is required in request body"
    )
    return await run_operation(
        get_service(request).glycemic_load(ingredient_list),
        "Failed to compute glycemic load",
    )


@router.get("/substitutes")
async def ingredient_substitutes(
    request: Request,
    ingredient_name: str | None = Query(default=None, alias="ingredientName"),
) -> dict[str, object]:
    """Fetch substitutes for an ingredient by name."""
    ingredient_name = require(ingredient_name, "ingredientName parameter is required")
    return await run_operation(
        get_service(request).ingredient_substitutes(ingredient_name),
        "Failed to fetch ingredient substitutes",
    )


@router.get("/{ingredient_id}/information")
async def ingredient_information(
    ingredient_id: str,
    request: Request,
    amount: str | None = None,
    unit: str | None = None,
    locale: str | None = None,
) -> dict[str, object]:
    """Fetch information about an ingredient."""
    parsed_id = parse_id(ingredient_id, _INGREDIENT_ID_REQUIRED)
    return await run_operation(
        get_service(request).get_ingredient_info(
            parsed_id, amount=amount, unit=unit, locale=locale
        ),
        "Failed to fetch ingredient information",
    )


@router.get("/{ingredient_id}/amount")
async def ingredient_amount(
    ingredient_id: str,
    request: Request,
    nutrient: str | None = None,
    target: str | None = None,
    unit: str | None = None,
) -> dict[str, object]:
    """Compute the ingredient amount that reaches a nutrient target."""
    message = "Valid ingredient ID, nutrient, and target are required"
    parsed_id = parse_id(ingredient_id, message)
    if not nutrient or not target:
        raise InputValidationError(message)
    return await run_operation(
        get_service(request).compute_ingredient_amount(
            parsed_id, nutrient, target, unit=unit
        ),
        "Failed to compute ingredient amount",
    )


@router.get("/{ingredient_id}/substitutes")
async def ingredient_substitutes_by_id(
    ingredient_id: str, request: Request
) -> dict[str, object]:
    """Fetch substitutes for an ingredient by id."""
    parsed_id = parse_id(ingredient_id, _INGREDIENT_ID_REQUIRED)
    return await run_operation(
        get_service(request).ingredient_substitutes_by_id(parsed_id),
        "Failed to fetch ingredient substitutes by ID",
    )
