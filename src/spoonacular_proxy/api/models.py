"""Pydantic models for JSON request bodies."""

from pydantic import BaseModel, ConfigDict, Field


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class BulkRecipesRequest(_Body):
    """Body for bulk recipe lookups."""

    ids: list[int | str] | None = None


class ExtractRecipeRequest(_Body):
    """Body for recipe extraction from a URL."""

    url: str | None = None


class AnalyzeRecipeRequest(_Body):
    """Body for recipe analysis."""

    title: str | None = None
    servings: int | str | None = None
    ingredients: str | None = None
    instructions: str | None = None


class AnalyzeInstructionsRequest(_Body):
    """Body for instruction analysis."""

    instructions: str | None = None


class ClassifyCuisineRequest(_Body):
    """Body for cuisine classification."""

    title: str | None = None
    ingredient_list: str | None = Field(default=None, alias="ingredientList")


class IngredientListRequest(_Body):
    """Body carrying a newline separated ingredient list."""

    ingredient_list: str | None = Field(default=None, alias="ingredientList")
    servings: int | str | None = None
