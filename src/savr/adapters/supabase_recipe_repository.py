"""Supabase implementation for the saved recipe cookbook."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from savr.domain.recipes import Recipe
from savr.services.recipes import RecipeRepository

_DERIVED_FIELDS = {"id", "missing_ingredients", "match_percentage"}


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed repository for saved recipes."""

    client: Client

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        """Return saved recipes, newest first."""
        response = (
            self.client.table("recipes")
            .select("id, document")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def get_recipe(self, user_id: UUID, recipe_id: str) -> Recipe | None:
        """Return a saved recipe by id, if present."""
        response = (
            self.client.table("recipes")
            .select("id, document")
            .eq("user_id", str(user_id))
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def create_recipe(self, user_id: UUID, recipe: Recipe) -> Recipe:
        """Save a recipe and return it."""
        response = (
            self.client.table("recipes")
            .insert(
                {
                    "id": recipe.id,
                    "user_id": str(user_id),
                    "document": recipe.model_dump(
                        mode="json", exclude=_DERIVED_FIELDS
                    ),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save recipe")
        return _parse_recipe(response.data[0])

    def delete_recipe(self, user_id: UUID, recipe_id: str) -> None:
        """Delete a saved recipe."""
        self.client.table("recipes").delete().eq("user_id", str(user_id)).eq(
            "id", recipe_id
        ).execute()


def _parse_recipe(row: dict[str, object]) -> Recipe:
    document = row.get("document") or {}
    return Recipe.model_validate({**document, "id": str(row["id"])})
