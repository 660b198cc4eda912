"""Recipe models and pantry match annotation."""

import re
from collections.abc import Iterable

from pydantic import BaseModel, Field

from savr.domain.nutrition import Macros
from savr.domain.pantry import Ingredient, normalize_name
from savr.domain.targets import round_half_away

_GRAMS_PATTERN = re.compile(r"(\d+(?:[.,]\d+)?)")


class RecipeMacros(BaseModel):
    """Macros as the recipe generator writes them, e.g. ``"25g"``."""

    protein: str = "0g"
    carbs: str = "0g"
    fats: str = "0g"


class Recipe(BaseModel):
    """A generated or saved recipe."""

    id: str = ""
    title: str
    description: str = ""
    prep_time: str = ""
    cook_time: str = ""
    calories: float = Field(default=0.0, ge=0.0)
    macros: RecipeMacros = Field(default_factory=RecipeMacros)
    ingredients: list[str] = Field(default_factory=list)
    missing_ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    match_percentage: int = Field(default=0, ge=0, le=100)
    tags: list[str] = Field(default_factory=list)


def annotate_recipe(recipe: Recipe, pantry: Iterable[Ingredient]) -> Recipe:
    """Mark which recipe ingredients are missing from the pantry.

    An ingredient line counts as present when it contains any pantry item
    name as a substring, so "pea" also matches "peanut butter".
    """
    names = {normalize_name(item.name) for item in pantry}
    names.discard("")
    missing = [
        line
        for line in recipe.ingredients
        if not any(name in normalize_name(line) for name in names)
    ]
    total = len(recipe.ingredients)
    if total == 0:
        match = 0
    else:
        match = round_half_away(100 * (total - len(missing)) / total)
    return recipe.model_copy(
        update={"missing_ingredients": missing, "match_percentage": match}
    )


def parse_grams(value: str | float | None) -> float:
    """Parse a gram amount such as ``"25g"`` or ``"12.5 g"``."""
    if isinstance(value, int | float):
        return float(value)
    if not value:
        return 0.0
    match = _GRAMS_PATTERN.search(value)
    if match is None:
        return 0.0
    return float(match.group(1).replace(",", "."))


def recipe_macros(recipe: Recipe) -> Macros:
    """Return the recipe's macros as numeric grams."""
    return Macros(
        protein=parse_grams(recipe.macros.protein),
        carbs=parse_grams(recipe.macros.carbs),
        fats=parse_grams(recipe.macros.fats),
    )
