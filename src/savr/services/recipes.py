"""Recipe generation, cookbook and journal logging."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID, uuid4

from savr.domain.daily_log import DailyLog, MealEntry, MealType
from savr.domain.errors import EmptyPantrySelectionError, RecipeNotFoundError
from savr.domain.nutrition import Macros
from savr.domain.pantry import Ingredient
from savr.domain.profile import UserProfile
from savr.domain.recipes import Recipe, annotate_recipe, recipe_macros
from savr.services.journal import JournalService
from savr.services.pantry import PantryService
from savr.services.profiles import ProfileService

_logger = logging.getLogger(__name__)

_STRING = {"type": "string"}
_STRING_LIST = {"type": "array", "items": _STRING}

RECIPES_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "recipes": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": _STRING,
                    "description": _STRING,
                    "prep_time": _STRING,
                    "cook_time": _STRING,
                    "calories": {"type": "number", "minimum": 0},
                    "macros": {
                        "type": "object",
                        "properties": {
                            "protein": _STRING,
                            "carbs": _STRING,
                            "fats": _STRING,
                        },
                        "required": ["protein", "carbs", "fats"],
                        "additionalProperties": False,
                    },
                    "ingredients": _STRING_LIST,
                    "instructions": _STRING_LIST,
                    "tags": _STRING_LIST,
                },
                "required": [
                    "title",
                    "description",
                    "prep_time",
                    "cook_time",
                    "calories",
                    "macros",
                    "ingredients",
                    "instructions",
                    "tags",
                ],
                "additionalProperties": False,
            },
        }
    },
    "required": ["recipes"],
    "additionalProperties": False,
}


class RecipeGenerator(Protocol):
    """Interface for LLM recipe generation."""

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Return structured recipe data."""


class RecipeRepository(Protocol):
    """Persistence interface for the user's cookbook."""

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        """Return saved recipes."""

    def get_recipe(self, user_id: UUID, recipe_id: str) -> Recipe | None:
        """Return a saved recipe by id, if present."""

    def create_recipe(self, user_id: UUID, recipe: Recipe) -> Recipe:
        """Save a recipe and return it."""

    def delete_recipe(self, user_id: UUID, recipe_id: str) -> None:
        """Delete a saved recipe."""


@dataclass(frozen=True)
class GenerationOptions:
    """Optional constraints for a generation request."""

    meal_type: str | None = None
    time_limit: str | None = None
    skill_level: str | None = None
    equipment: str | None = None


@dataclass
class RecipeService:
    """Service for generating, saving and logging recipes."""

    generator: RecipeGenerator
    repository: RecipeRepository
    pantry_service: PantryService
    profile_service: ProfileService
    journal_service: JournalService
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    async def generate(
        self,
        user_id: UUID,
        strict_mode: bool = False,
        options: GenerationOptions | None = None,
    ) -> list[Recipe]:
        """Generate recipes from the selected pantry items."""
        profile = self.profile_service.require_profile(user_id)
        pantry = self.pantry_service.list_items(user_id)
        selected = [item for item in pantry if item.is_selected]
        if not selected:
            raise EmptyPantrySelectionError("Select at least one ingredient")

        raw = await self.generator.generate(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            prompt=build_prompt(profile, selected, strict_mode, options),
            schema=RECIPES_SCHEMA,
        )
        recipes = []
        for payload in raw.get("recipes", []):
            recipe = Recipe.model_validate(payload)
            if not recipe.id:
                recipe = recipe.model_copy(update={"id": uuid4().hex})
            recipes.append(annotate_recipe(recipe, pantry))
        _logger.info("Generated %s recipes for user %s", len(recipes), user_id)
        return recipes

    def save_recipe(self, user_id: UUID, recipe: Recipe) -> Recipe:
        """Save a recipe to the cookbook without its pantry-derived fields."""
        stored = recipe.model_copy(
            update={
                "id": recipe.id or uuid4().hex,
                "missing_ingredients": [],
                "match_percentage": 0,
            }
        )
        saved = self.repository.create_recipe(user_id, stored)
        return annotate_recipe(saved, self.pantry_service.list_items(user_id))

    def list_saved(self, user_id: UUID) -> list[Recipe]:
        """Return the cookbook annotated against the current pantry."""
        pantry = self.pantry_service.list_items(user_id)
        return [
            annotate_recipe(recipe, pantry)
            for recipe in self.repository.list_recipes(user_id)
        ]

    def get_saved(self, user_id: UUID, recipe_id: str) -> Recipe:
        """Return one saved recipe annotated against the current pantry."""
        recipe = self.repository.get_recipe(user_id, recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(f"Recipe {recipe_id} not found")
        return annotate_recipe(recipe, self.pantry_service.list_items(user_id))

    def delete_recipe(self, user_id: UUID, recipe_id: str) -> None:
        """Remove a recipe from the cookbook."""
        self.repository.delete_recipe(user_id, recipe_id)

    def log_serving(  # noqa: PLR0913
        self,
        user_id: UUID,
        recipe_id: str,
        meal_type: MealType,
        day: date | None = None,
        servings: float = 1.0,
    ) -> DailyLog:
        """Log servings of a saved recipe in the journal."""
        recipe = self.get_saved(user_id, recipe_id)
        macros = recipe_macros(recipe)
        entry = MealEntry(
            id=uuid4().hex,
            type=meal_type,
            name=recipe.title,
            calories=recipe.calories * servings,
            macros=Macros(
                protein=macros.protein * servings,
                carbs=macros.carbs * servings,
                fats=macros.fats * servings,
            ),
            quantity=f"{servings:g} serving" + ("" if servings == 1 else "s"),
            recipe_id=recipe.id,
        )
        target_day = day or self.journal_service.today(user_id)
        return self.journal_service.add_meal(user_id, target_day, entry)


def build_prompt(
    profile: UserProfile,
    ingredients: list[Ingredient],
    strict_mode: bool,
    options: GenerationOptions | None,
) -> str:
    """Describe the user and the pantry for the recipe generator."""
    names = ", ".join(
        f"{item.name} ({item.quantity})" if item.quantity else item.name
        for item in ingredients
    )
    lines = [
        "Suggest 3 recipes as JSON.",
        f"Available ingredients: {names}.",
        f"Goal: {profile.goal}.",
    ]
    if profile.allergies:
        lines.append(f"Never use (allergies): {', '.join(profile.allergies)}.")
    if profile.dislikes:
        lines.append(f"Avoid: {', '.join(profile.dislikes)}.")
    if strict_mode:
        lines.append("Use only the available ingredients plus salt, pepper and water.")
    if options is not None:
        for label, value in (
            ("Meal type", options.meal_type),
            ("Time limit", options.time_limit),
            ("Skill level", options.skill_level),
            ("Equipment", options.equipment),
        ):
            if value:
                lines.append(f"{label}: {value}.")
    lines.append("Macros are grams written like '25g'.")
    return "\n".join(lines)
