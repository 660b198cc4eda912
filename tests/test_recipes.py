"""Tests for recipe annotation and macro parsing."""

import pytest

from savr.domain.pantry import Ingredient
from savr.domain.recipes import Recipe, annotate_recipe, parse_grams, recipe_macros
from tests.conftest import recipe_payload


def _pantry(*names: str) -> list[Ingredient]:
    return [Ingredient(id=str(index), name=name) for index, name in enumerate(names)]


def test_annotate_marks_missing_ingredients() -> None:
    recipe = Recipe.model_validate(recipe_payload())

    annotated = annotate_recipe(recipe, _pantry("Chicken", "rice "))

    assert annotated.missing_ingredients == ["1 tbsp soy sauce"]
    assert annotated.match_percentage == 67
    assert recipe.match_percentage == 0


def test_annotate_empty_ingredient_list() -> None:
    recipe = Recipe.model_validate(recipe_payload(ingredients=[]))

    annotated = annotate_recipe(recipe, _pantry("chicken"))

    assert annotated.missing_ingredients == []
    assert annotated.match_percentage == 0


def test_annotate_accepts_substring_matches() -> None:
    recipe = Recipe.model_validate(recipe_payload(ingredients=["2 tbsp peanut butter"]))

    assert annotate_recipe(recipe, _pantry("pea")).match_percentage == 100


def test_annotate_ignores_blank_pantry_names() -> None:
    recipe = Recipe.model_validate(recipe_payload())

    annotated = annotate_recipe(recipe, _pantry("   "))

    assert annotated.match_percentage == 0
    assert len(annotated.missing_ingredients) == 3


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("25g", 25.0),
        ("12,5 g", 12.5),
        ("approx. 8.5g", 8.5),
        ("", 0.0),
        (None, 0.0),
        ("none", 0.0),
        (7, 7.0),
    ],
)
def test_parse_grams(raw: str | float | None, expected: float) -> None:
    assert parse_grams(raw) == expected


def test_recipe_macros_are_numeric() -> None:
    macros = recipe_macros(Recipe.model_validate(recipe_payload()))

    assert (macros.protein, macros.carbs, macros.fats) == (40.0, 55.0, 12.0)
