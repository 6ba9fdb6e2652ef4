"""Upstream operations, their cache key layout and TTLs."""

from dataclasses import dataclass

DEFAULT_TTL_SECONDS = 3600
RANDOM_TTL_SECONDS = 300


@dataclass(frozen=True)
class KeySpec:
    """Cache key layout for one operation.

    Required fields contribute their encoded value to the key, optional fields
    contribute ``name=value`` and are skipped when absent. Both are rendered
    in the declared order, never in caller order.
    """

    prefix: str
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    free_text: frozenset[str] = frozenset()
    multi_valued: frozenset[str] = frozenset()


NUTRIENT_FILTERS = (
    "minCarbs",
    "maxCarbs",
    "minProtein",
    "maxProtein",
    "minFat",
    "maxFat",
    "minCalories",
    "maxCalories",
)

KEY_SPECS: dict[str, KeySpec] = {
    "search": KeySpec("search", ("query",), free_text=frozenset({"query"})),
    "searchByNutrients": KeySpec("nutrients", optional=(*NUTRIENT_FILTERS, "number")),
    "searchByIngredients": KeySpec(
        "ingredients",
        ("ingredients",),
        ("number", "ranking", "ignorePantry"),
        free_text=frozenset({"ingredients"}),
    ),
    "recipeById": KeySpec("recipe", ("id",)),
    "recipesBulk": KeySpec("bulk", ("ids",), multi_valued=frozenset({"ids"})),
    "similarRecipes": KeySpec("similar", ("id",), ("number",)),
    "randomRecipes": KeySpec(
        "random",
        optional=("number", "tags", "includeTags", "excludeTags"),
        free_text=frozenset({"tags", "includeTags", "excludeTags"}),
    ),
    "recipeAutocomplete": KeySpec(
        "autocomplete", ("query",), ("number",), free_text=frozenset({"query"})
    ),
    "recipeTaste": KeySpec("taste", ("id",)),
    "recipeEquipment": KeySpec("equipment", ("id",)),
    "recipePrice": KeySpec("price", ("id",)),
    "recipeIngredients": KeySpec("ingredients_info", ("id",)),
    "recipeNutrition": KeySpec("nutrition", ("id",)),
    "analyzedInstructions": KeySpec("analyzed_instructions", ("id",)),
    "recipeSummary": KeySpec("summary", ("id",)),
    "extractRecipe": KeySpec("extract", ("url",)),
    "analyzeQuery": KeySpec("analyze_query", ("q",), free_text=frozenset({"q"})),
    "guessNutrition": KeySpec(
        "guess_nutrition", ("title",), free_text=frozenset({"title"})
    ),
    "ingredientAutocomplete": KeySpec(
        "ingredient_autocomplete",
        ("query",),
        ("number", "intolerances"),
        free_text=frozenset({"query", "intolerances"}),
    ),
    "ingredientSearch": KeySpec(
        "ingredient_search",
        ("query",),
        ("number", "intolerances", "sort", "sortDirection"),
        free_text=frozenset({"query", "intolerances"}),
    ),
    "ingredientInfo": KeySpec("ingredient", ("id",), ("amount", "unit", "locale")),
    "ingredientAmount": KeySpec(
        "ingredient_amount", ("id", "nutrient", "target"), ("unit",)
    ),
    "convertAmounts": KeySpec(
        "convert",
        ("ingredientName", "sourceAmount", "sourceUnit", "targetUnit"),
        free_text=frozenset({"ingredientName"}),
    ),
    "ingredientSubstitutes": KeySpec(
        "substitutes", ("ingredientName",), free_text=frozenset({"ingredientName"})
    ),
    "ingredientSubstitutesById": KeySpec("substitutes_id", ("id",)),
}

OPERATION_TTLS: dict[str, int] = {
    "randomRecipes": RANDOM_TTL_SECONDS,
}

# Key tags grouped by the cache stats endpoint.
QUERY_KEY_TAGS = frozenset({"search"})
RECIPE_KEY_TAGS = frozenset({"recipe"})
INGREDIENT_KEY_TAGS = frozenset(
    {"ingredient", "ingredient_autocomplete", "ingredient_search", "ingredient_amount"}
)


def ttl_for(
    operation: str,
    overrides: dict[str, int] | None = None,
    default: int = DEFAULT_TTL_SECONDS,
) -> int:
    """Return the TTL in seconds for an operation."""
    if overrides and operation in overrides:
        return overrides[operation]
    return OPERATION_TTLS.get(operation, default)
