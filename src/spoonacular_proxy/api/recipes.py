"""Recipe endpoints proxied to Spoonacular."""

from fastapi import APIRouter, Query, Request

from spoonacular_proxy.api.common import get_service, parse_id, require, run_operation
from spoonacular_proxy.api.models import (
    AnalyzeInstructionsRequest,
    AnalyzeRecipeRequest,
    BulkRecipesRequest,
    ClassifyCuisineRequest,
    ExtractRecipeRequest,
)
from spoonacular_proxy.domain.operations import NUTRIENT_FILTERS
from spoonacular_proxy.errors import InputValidationError
from spoonacular_proxy.services.cache_keys import normalize_multi

router = APIRouter(prefix="/api", tags=["recipes"])

_RECIPE_ID_REQUIRED = "Valid recipe ID is required"


@router.get("/searchRecipes")
async def search_recipes(
    request: Request, query: str | None = None
) -> dict[str, object]:
    """Search recipes by free text."""
    query = require(
        query,
        "Query parameter is required",
        example="/api/searchRecipes?query=chicken",
    )
    return await run_operation(
        get_service(request).search_recipes(query), "Failed to search recipes"
    )


@router.get("/searchRecipesByNutrients")
async def search_recipes_by_nutrients(
    request: Request, number: str | None = None
) -> dict[str, object]:
    """Find recipes within nutrient bounds given as query parameters."""
    filters = {name: request.query_params.get(name) for name in NUTRIENT_FILTERS}
    return await run_operation(
        get_service(request).search_by_nutrients(filters, number=number),
        "Failed to search recipes by nutrients",
    )


@router.get("/searchRecipesByIngredients")
async def search_recipes_by_ingredients(
    request: Request,
    ingredients: str | None = None,
    number: str | None = None,
    ranking: str | None = None,
    ignore_pantry: str | None = Query(default=None, alias="ignorePantry"),
) -> dict[str, object]:
    """Find recipes using a comma separated ingredient list."""
    ingredients = require(
        ingredients,
        "Ingredients parameter is required",
        example="/api/searchRecipesByIngredients?ingredients=apples,flour,sugar",
    )
    return await run_operation(
        get_service(request).search_by_ingredients(
            ingredients, number=number, ranking=ranking, ignore_pantry=ignore_pantry
        ),
        "Failed to search recipes by ingredients",
    )


@router.post("/recipes/bulk")
async def recipes_bulk(
    body: BulkRecipesRequest, request: Request
) -> dict[str, object]:
    """Fetch several recipes at once."""
    ids = normalize_multi(body.ids or [])
    if not ids:
        raise InputValidationError("Array of recipe IDs is required in request body")
    return await run_operation(
        get_service(request).get_recipes_bulk(ids), "Failed to fetch bulk recipes"
    )


@router.get("/recipes/random")
async def random_recipes(
    request: Request,
    number: str | None = None,
    tags: str | None = None,
    include_tags: str | None = None,
    exclude_tags: str | None = None,
) -> dict[str, object]:
    """Fetch random recipes."""
    return await run_operation(
        get_service(request).random_recipes(
            number=number,
            tags=tags,
            include_tags=include_tags,
            exclude_tags=exclude_tags,
        ),
        "Failed to fetch random recipes",
    )


@router.get("/recipes/autocomplete")
async def autocomplete_recipes(
    request: Request, query: str | None = None, number: str | None = None
) -> dict[str, object]:
    """Autocomplete recipe names."""
    query = require(query, "Query parameter is required")
    return await run_operation(
        get_service(request).autocomplete_recipes(query, number=number),
        "Failed to autocomplete recipes",
    )


@router.post("/recipes/extract")
async def extract_recipe(
    body: ExtractRecipeRequest, request: Request
) -> dict[str, object]:
    """Extract a recipe from a web page."""
    url = require(body.url, "URL is required in request body")
    return await run_operation(
        get_service(request).extract_recipe(url), "Failed to extract recipe"
    )


@router.post("/recipes/analyze")
async def analyze_recipe(
    body: AnalyzeRecipeRequest, request: Request
) -> dict[str, object]:
    """Analyze a recipe supplied in the request body."""
    if not (body.title and body.servings and body.ingredients and body.instructions):
        raise InputValidationError(
            "Title, servings, ingredients, and instructions are required"
        )
    return await run_operation(
        get_service(request).analyze_recipe(
            title=body.title,
            servings=body.servings,
            ingredients=body.ingredients,
            instructions=body.instructions,
        ),
        "Failed to analyze recipe",
    )


@router.post("/recipes/analyzeInstructions")
async def analyze_instructions(
    body: AnalyzeInstructionsRequest, request: Request
) -> dict[str, object]:
    """Break instructions into structured steps."""
    instructions = require(
        body.instructions, "Instructions are required in request body"
    )
    return await run_operation(
        get_service(request).analyze_instructions(instructions),
        "Failed to analyze instructions",
    )


@router.post("/recipes/classifyCuisine")
async def classify_cuisine(
    body: ClassifyCuisineRequest, request: Request
) -> dict[str, object]:
    """Classify the cuisine of a recipe."""
    if not body.title and not body.ingredient_list:
        raise InputValidationError("Either title or ingredientList is required")
    return await run_operation(
        get_service(request).classify_cuisine(
            title=body.title, ingredient_list=body.ingredient_list
        ),
        "Failed to classify cuisine",
    )


@router.get("/recipes/analyzeQuery")
async def analyze_query(request: Request, q: str | None = None) -> dict[str, object]:
    """Parse a natural language recipe query."""
    q = require(q, "Query parameter 'q' is required")
    return await run_operation(
        get_service(request).analyze_query(q), "Failed to analyze query"
    )


@router.get("/recipes/guessNutrition")
async def guess_nutrition(
    request: Request, title: str | None = None
) -> dict[str, object]:
    """Estimate nutrition for a dish name."""
    title = require(title, "Title parameter is required")
    return await run_operation(
        get_service(request).guess_nutrition(title), "Failed to guess nutrition"
    )


@router.get("/recipe/{recipe_id}")
async def get_recipe(recipe_id: str, request: Request) -> dict[str, object]:
    """Fetch recipe information by id."""
    parsed_id = parse_id(recipe_id, _RECIPE_ID_REQUIRED)
    return await run_operation(
        get_service(request).get_recipe(parsed_id), "Failed to fetch recipe details"
    )


@router.get("/recipe/{recipe_id}/similar")
async def similar_recipes(
    recipe_id: str, request: Request, number: str | None = None
) -> dict[str, object]:
    """Fetch recipes similar to the given one."""
    parsed_id = parse_id(recipe_id, _RECIPE_ID_REQUIRED)
    return await run_operation(
        get_service(request).similar_recipes(parsed_id, number=number),
        "Failed to fetch similar recipes",
    )


def _widget_route(path: str, operation: str, error: str) -> None:
    async def endpoint(recipe_id: str, request: Request) -> dict[str, object]:
        parsed_id = parse_id(recipe_id, _RECIPE_ID_REQUIRED)
        return await run_operation(
            get_service(request).get_recipe_widget(operation, parsed_id), error
        )

    endpoint.__name__ = f"recipe_{operation}"
    router.add_api_route(path, endpoint, methods=["GET"])


_widget_route(
    "/recipe/{recipe_id}/taste", "recipeTaste", "Failed to fetch recipe taste"
)
_widget_route(
    "/recipe/{recipe_id}/equipment",
    "recipeEquipment",
    "Failed to fetch recipe equipment",
)
_widget_route(
    "/recipe/{recipe_id}/price", "recipePrice", "Failed to fetch recipe price breakdown"
)
_widget_route(
    "/recipe/{recipe_id}/ingredients",
    "recipeIngredients",
    "Failed to fetch recipe ingredients",
)
_widget_route(
    "/recipe/{recipe_id}/nutrition",
    "recipeNutrition",
    "Failed to fetch recipe nutrition",
)
_widget_route(
    "/recipe/{recipe_id}/analyzedInstructions",
    "analyzedInstructions",
    "Failed to fetch analyzed instructions",
)
_widget_route(
    "/recipe/{recipe_id}/summary", "recipeSummary", "Failed to summarize recipe"
)
