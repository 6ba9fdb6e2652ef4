"""Spoonacular operations routed through the response cache."""

import logging
from dataclasses import dataclass, field

from spoonacular_proxy.domain.operations import (
    DEFAULT_TTL_SECONDS,
    NUTRIENT_FILTERS,
    ttl_for,
)
from spoonacular_proxy.domain.upstream import Locator
from spoonacular_proxy.services.cache_keys import derive_key, normalize_multi
from spoonacular_proxy.services.fetcher import CachedFetcher

_logger = logging.getLogger(__name__)

RECIPE_WIDGETS = {
    "recipeTaste": "tasteWidget.json",
    "recipeEquipment": "equipmentWidget.json",
    "recipePrice": "priceBreakdownWidget.json",
    "recipeIngredients": "ingredientWidget.json",
    "recipeNutrition": "nutritionWidget.json",
    "analyzedInstructions": "analyzedInstructions",
    "recipeSummary": "summary",
}

Payload = dict[str, object]


@dataclass
class SpoonacularService:
    """Service exposing Spoonacular operations with caching."""

    fetcher: CachedFetcher
    default_ttl_seconds: int = DEFAULT_TTL_SECONDS
    ttl_overrides: dict[str, int] = field(default_factory=dict)

    def ttl(self, operation: str) -> int:
        """Return the cache TTL for an operation."""
        return ttl_for(operation, self.ttl_overrides, self.default_ttl_seconds)

    async def _cached(
        self, operation: str, key_params: dict[str, object], locator: Locator
    ) -> Payload:
        key = derive_key(operation, key_params)
        return await self.fetcher.fetch_with_cache(key, locator, self.ttl(operation))

    # Recipes

    async def search_recipes(self, query: str) -> Payload:
        """Search recipes by free text."""
        return await self._cached(
            "search",
            {"query": query},
            Locator.get(
                "/recipes/complexSearch",
                {"query": query, "number": 12, "addRecipeInformation": True},
            ),
        )

    async def search_by_nutrients(
        self, filters: dict[str, str | None], number: str | None = None
    ) -> Payload:
        """Find recipes within macro-nutrient bounds."""
        bounds = {name: filters.get(name) for name in NUTRIENT_FILTERS}
        return await self._cached(
            "searchByNutrients",
            {**bounds, "number": number},
            Locator.get("/recipes/findByNutrients", {"number": number or 12, **bounds}),
        )

    async def search_by_ingredients(
        self,
        ingredients: str,
        number: str | None = None,
        ranking: str | None = None,
        ignore_pantry: str | None = None,
    ) -> Payload:
        """Find recipes that use the given ingredients."""
        return await self._cached(
            "searchByIngredients",
            {
                "ingredients": ingredients,
                "number": number,
                "ranking": ranking,
                "ignorePantry": ignore_pantry,
            },
            Locator.get(
                "/recipes/findByIngredients",
                {
                    "ingredients": ingredients,
                    "number": number or 12,
                    "ranking": ranking or 1,
                    "ignorePantry": ignore_pantry or "false",
                },
            ),
        )

    async def get_recipe(self, recipe_id: int) -> Payload:
        """Fetch full recipe information including nutrition."""
        return await self._cached(
            "recipeById",
            {"id": recipe_id},
            Locator.get(
                f"/recipes/{recipe_id}/information", {"includeNutrition": True}
            ),
        )

    async def get_recipes_bulk(self, ids: list[int | str]) -> Payload:
        """Fetch information for several recipes at once."""
        normalized = normalize_multi(ids)
        return await self._cached(
            "recipesBulk",
            {"ids": normalized},
            Locator.get(
                "/recipes/informationBulk",
                {"ids": ",".join(normalized), "includeNutrition": True},
            ),
        )

    async def similar_recipes(
        self, recipe_id: int, number: str | None = None
    ) -> Payload:
        """Fetch recipes similar to the given one."""
        return await self._cached(
            "similarRecipes",
            {"id": recipe_id, "number": number},
            Locator.get(f"/recipes/{recipe_id}/similar", {"number": number or 3}),
        )

    async def random_recipes(
        self,
        number: str | None = None,
        tags: str | None = None,
        include_tags: str | None = None,
        exclude_tags: str | None = None,
    ) -> Payload:
        """Fetch random recipes, cached for a short window."""
        return await self._cached(
            "randomRecipes",
            {
                "number": number,
                "tags": tags,
                "includeTags": include_tags,
                "excludeTags": exclude_tags,
            },
            Locator.get(
                "/recipes/random",
                {
                    "number": number or 3,
                    "tags": tags,
                    "include-tags": include_tags,
                    "exclude-tags": exclude_tags,
                },
            ),
        )

    async def autocomplete_recipes(
        self, query: str, number: str | None = None
    ) -> Payload:
        """Autocomplete a partial recipe name."""
        return await self._cached(
            "recipeAutocomplete",
            {"query": query, "number": number},
            Locator.get(
                "/recipes/autocomplete", {"query": query, "number": number or 10}
            ),
        )

    async def get_recipe_widget(self, operation: str, recipe_id: int) -> Payload:
        """Fetch a per-recipe widget such as taste, price or nutrition."""
        suffix = RECIPE_WIDGETS[operation]
        return await self._cached(
            operation,
            {"id": recipe_id},
            Locator.get(f"/recipes/{recipe_id}/{suffix}", {}),
        )

    async def extract_recipe(self, url: str) -> Payload:
        """Extract a recipe from a web page."""
        return await self._cached(
            "extractRecipe",
            {"url": url},
            Locator.get("/recipes/extract", {"url": url}),
        )

    async def analyze_recipe(
        self, title: str, servings: int | str, ingredients: str, instructions: str
    ) -> Payload:
        """Analyze a recipe supplied by the caller."""
        return await self.fetcher.forward(
            Locator.post_form(
                "/recipes/analyze",
                {
                    "title": title,
                    "servings": servings,
                    "ingredients": ingredients,
                    "instructions": instructions,
                },
            )
        )

    async def analyze_instructions(self, instructions: str) -> Payload:
        """Break free-text instructions into structured steps."""
        return await self.fetcher.forward(
            Locator.post_form(
                "/recipes/analyzeInstructions", {"instructions": instructions}
            )
        )

    async def classify_cuisine(
        self, title: str | None = None, ingredient_list: str | None = None
    ) -> Payload:
        """Guess the cuisine of a recipe."""
        return await self.fetcher.forward(
            Locator.post_form(
                "/recipes/cuisine",
                {"title": title, "ingredientList": ingredient_list},
            )
        )

    async def analyze_query(self, q: str) -> Payload:
        """Parse a natural language recipe search query."""
        return await self._cached(
            "analyzeQuery",
            {"q": q},
            Locator.get("/recipes/queries/analyze", {"q": q}),
        )

    async def guess_nutrition(self, title: str) -> Payload:
        """Estimate nutrition for a dish name."""
        return await self._cached(
            "guessNutrition",
            {"title": title},
            Locator.get("/recipes/guessNutrition", {"title": title}),
        )

    # Ingredients

    async def autocomplete_ingredients(
        self, query: str, number: str | None = None, intolerances: str | None = None
    ) -> Payload:
        """Autocomplete a partial ingredient name."""
        _logger.debug("Ingredient autocomplete: query=%s", query)
        return await self._cached(
            "ingredientAutocomplete",
            {"query": query, "number": number, "intolerances": intolerances},
            Locator.get(
                "/food/ingredients/autocomplete",
                {"query": query, "number": number or 10, "intolerances": intolerances},
            ),
        )

    async def search_ingredients(  # noqa: PLR0913
        self,
        query: str,
        number: str | None = None,
        intolerances: str | None = None,
        sort: str | None = None,
        sort_direction: str | None = None,
    ) -> Payload:
        """Search ingredients by name."""
        return await self._cached(
            "ingredientSearch",
            {
                "query": query,
                "number": number,
                "intolerances": intolerances,
                "sort": sort,
                "sortDirection": sort_direction,
            },
            Locator.get(
                "/food/ingredients/search",
                {
                    "query": query,
                    "number": number or 10,
                    "intolerances": intolerances,
                    "sort": sort,
                    "sortDirection": sort_direction,
                },
            ),
        )

    async def get_ingredient_info(
        self,
        ingredient_id: int,
        amount: str | None = None,
        unit: str | None = None,
        locale: str | None = None,
    ) -> Payload:
        """Fetch nutrition and cost information for an ingredient."""
        return await self._cached(
            "ingredientInfo",
            {"id": ingredient_id, "amount": amount, "unit": unit, "locale": locale},
            Locator.get(
                f"/food/ingredients/{ingredient_id}/information",
                {
                    "amount": amount or 1,
                    "unit": unit or "serving",
                    "locale": locale or "en_US",
                },
            ),
        )

    async def compute_ingredient_amount(
        self, ingredient_id: int, nutrient: str, target: str, unit: str | None = None
    ) -> Payload:
        """Compute how much of an ingredient reaches a nutrient target."""
        return await self._cached(
            "ingredientAmount",
            {"id": ingredient_id, "nutrient": nutrient, "target": target, "unit": unit},
            Locator.get(
                f"/food/ingredients/{ingredient_id}/amount",
                {"nutrient": nutrient, "target": target, "unit": unit},
            ),
        )

    async def convert_amounts(
        self,
        ingredient_name: str,
        source_amount: str,
        source_unit: str,
        target_unit: str,
    ) -> Payload:
        """Convert an ingredient amount between units."""
        params = {
            "ingredientName": ingredient_name,
            "sourceAmount": source_amount,
            "sourceUnit": source_unit,
            "targetUnit": target_unit,
        }
        return await self._cached(
            "convertAmounts", params, Locator.get("/recipes/convert", params)
        )

    async def parse_ingredients(
        self, ingredient_list: str, servings: int | str | None = None
    ) -> Payload:
        """Parse free-text ingredient lines."""
        return await self.fetcher.forward(
            Locator.post_form(
                "/recipes/parseIngredients",
                {"ingredientList": ingredient_list, "servings": servings or 1},
            )
        )

    async def glycemic_load(self, ingredient_list: str) -> Payload:
        """Compute the glycemic load of an ingredient list."""
        return await self.fetcher.forward(
            Locator.post_form(
                "/food/ingredients/glycemicLoad", {"ingredientList": ingredient_list}
            )
        )

    async def ingredient_substitutes(self, ingredient_name: str) -> Payload:
        """Fetch substitutes for an ingredient by name."""
        return await self._cached(
            "ingredientSubstitutes",
            {"ingredientName": ingredient_name},
            Locator.get(
                "/food/ingredients/substitutes", {"ingredientName": ingredient_name}
            ),
        )

    async def ingredient_substitutes_by_id(self, ingredient_id: int) -> Payload:
        """Fetch substitutes for an ingredient by id."""
        return await self._cached(
            "ingredientSubstitutesById",
            {"id": ingredient_id},
            Locator.get(f"/food/ingredients/{ingredient_id}/substitutes", {}),
        )
