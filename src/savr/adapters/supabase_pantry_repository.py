"""Supabase implementation for pantry items."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from savr.adapters.documents import ingredient_to_row, parse_ingredient
from savr.domain.pantry import Ingredient
from savr.services.pantry import PantryRepository


@dataclass
class SupabasePantryRepository(PantryRepository):
    """Supabase-backed repository for pantry items."""

    client: Client

    def list_items(self, user_id: UUID) -> list[Ingredient]:
        """Return every pantry item of a user."""
        response = (
            self.client.table("pantry_items")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at")
            .execute()
        )
        return [parse_ingredient(row) for row in response.data or []]

    def get_item(self, user_id: UUID, item_id: str) -> Ingredient | None:
        """Return a pantry item by id, if present."""
        response = (
            self.client.table("pantry_items")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("id", item_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_ingredient(response.data[0])

    def create_item(self, user_id: UUID, item: Ingredient) -> Ingredient:
        """Create a pantry item and return it."""
        response = (
            self.client.table("pantry_items")
            .insert({"user_id": str(user_id), **ingredient_to_row(item)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create pantry item")
        return parse_ingredient(response.data[0])

    def update_item(self, user_id: UUID, item: Ingredient) -> Ingredient:
        """Overwrite a pantry item and return it."""
        payload = ingredient_to_row(item)
        payload.pop("id")
        response = (
            self.client.table("pantry_items")
            .update(payload)
            .eq("user_id", str(user_id))
            .eq("id", item.id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update pantry item")
        return parse_ingredient(response.data[0])

    def delete_item(self, user_id: UUID, item_id: str) -> None:
        """Delete a pantry item."""
        self.client.table("pantry_items").delete().eq("user_id", str(user_id)).eq(
            "id", item_id
        ).execute()
