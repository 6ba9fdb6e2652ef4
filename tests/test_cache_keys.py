"""Tests for cache key derivation."""

from spoonacular_proxy.domain.operations import KEY_SPECS
from spoonacular_proxy.services.cache_keys import derive_key, key_tag, normalize_multi


def test_free_text_is_case_folded() -> None:
    assert derive_key("search", {"query": "Chicken"}) == derive_key(
        "search", {"query": "chicken"}
    )
    assert derive_key("search", {"query": "  CHICKEN "}) == "search:chicken"


def test_id_keys_use_bare_values() -> None:
    assert derive_key("recipeById", {"id": 12345}) == "recipe:12345"
    assert derive_key("ingredientInfo", {"id": 9266}) == "ingredient:9266"


def test_caller_field_order_does_not_change_key() -> None:
    first = derive_key(
        "ingredientSearch",
        {"query": "Rice", "sort": "calories", "number": "5", "intolerances": "Dairy"},
    )
    second = derive_key(
        "ingredientSearch",
        {"intolerances": "dairy", "number": "5", "sort": "calories", "query": "rice"},
    )

    assert first == second
    assert first == "ingredient_search:rice:number=5:intolerances=dairy:sort=calories"


def test_absent_optional_fields_are_omitted() -> None:
    bare = derive_key("similarRecipes", {"id": 7})
    with_none = derive_key("similarRecipes", {"id": 7, "number": None})
    with_empty = derive_key("similarRecipes", {"id": 7, "number": ""})

    assert bare == with_none == with_empty == "similar:7"


def test_optional_fields_with_same_value_do_not_collide() -> None:
    min_carbs = derive_key("searchByNutrients", {"minCarbs": "10"})
    max_carbs = derive_key("searchByNutrients", {"maxCarbs": "10"})

    assert min_carbs != max_carbs


def test_multi_valued_fields_are_sorted_and_deduplicated() -> None:
    assert derive_key("recipesBulk", {"ids": [715538, 42, 715538]}) == derive_key(
        "recipesBulk", {"ids": "42,715538"}
    )
    assert derive_key("recipesBulk", {"ids": [3, 10, 2]}) == "bulk:2,3,10"


def test_normalize_multi_orders_numbers_before_text() -> None:
    assert normalize_multi(["b", "10", "2", "a"]) == ["2", "10", "a", "b"]


def test_normalize_multi_treats_non_decimal_digits_as_text() -> None:
    assert normalize_multi(["²", "3"]) == ["3", "²"]


def test_unknown_params_are_ignored_for_known_operations() -> None:
    assert derive_key("recipeById", {"id": 5, "extra": "x"}) == "recipe:5"


def test_unknown_operation_still_yields_a_stable_key() -> None:
    first = derive_key("mystery", {"b": 2, "a": 1})
    second = derive_key("mystery", {"a": 1, "b": 2})

    assert first == second == "mystery:a=1:b=2"


def test_non_text_url_keeps_case() -> None:
    key = derive_key("extractRecipe", {"url": "https://Example.com/Pie"})

    assert key == "extract:https%3A%2F%2FExample.com%2FPie"


def test_operation_tags_are_unique() -> None:
    prefixes = [spec.prefix for spec in KEY_SPECS.values()]

    assert len(prefixes) == len(set(prefixes))


def test_different_operations_never_share_a_key() -> None:
    assert derive_key("ingredientSubstitutes", {"ingredientName": "id_5"}) != (
        derive_key("ingredientSubstitutesById", {"id": 5})
    )
    assert derive_key("searchByIngredients", {"ingredients": "info_716429"}) != (
        derive_key("recipeIngredients", {"id": 716429})
    )
    assert derive_key("search", {"query": "x"}) != derive_key(
        "ingredientSearch", {"query": "x"}
    )


def test_separators_inside_free_text_cannot_forge_other_fields() -> None:
    plain = derive_key("ingredientSearch", {"query": "rice", "number": "5"})
    smuggled = derive_key("ingredientSearch", {"query": "rice:number=5"})

    assert plain != smuggled
    assert smuggled == "ingredient_search:rice%3Anumber%3D5"


def test_commas_inside_one_item_stay_inside_that_item() -> None:
    split = derive_key("recipesBulk", {"ids": ["1", "2"]})
    joined = derive_key("recipesBulk", {"ids": ["1,2"]})

    assert split != joined


def test_key_tag_returns_the_operation_tag() -> None:
    assert key_tag(derive_key("ingredientAutocomplete", {"query": "app"})) == (
        "ingredient_autocomplete"
    )
    assert key_tag(derive_key("recipeIngredients", {"id": 1})) == "ingredients_info"
