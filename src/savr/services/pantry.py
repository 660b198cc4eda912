"""Pantry management service."""

from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID, uuid4

from savr.domain.errors import PantryItemNotFoundError
from savr.domain.foods import FoodProduct, to_ingredient
from savr.domain.pantry import (
    Ingredient,
    find_ingredient,
    merge_ingredient,
    selected_ingredients,
)


class PantryRepository(Protocol):
    """Persistence interface for pantry items."""

    def list_items(self, user_id: UUID) -> list[Ingredient]:
        """Return every pantry item of a user."""

    def get_item(self, user_id: UUID, item_id: str) -> Ingredient | None:
        """Return a pantry item by id, if present."""

    def create_item(self, user_id: UUID, item: Ingredient) -> Ingredient:
        """Create a pantry item and return it."""

    def update_item(self, user_id: UUID, item: Ingredient) -> Ingredient:
        """Overwrite a pantry item and return it."""

    def delete_item(self, user_id: UUID, item_id: str) -> None:
        """Delete a pantry item."""


@dataclass
class PantryService:
    """Application service for pantry operations."""

    repository: PantryRepository

    def list_items(self, user_id: UUID) -> list[Ingredient]:
        """Return the user's pantry."""
        return self.repository.list_items(user_id)

    def selected(self, user_id: UUID) -> list[Ingredient]:
        """Return the items selected for recipe generation."""
        return selected_ingredients(self.repository.list_items(user_id))

    def add_item(
        self, user_id: UUID, name: str, quantity: str | None = None
    ) -> Ingredient:
        """Add an item by name, merging into an existing item of the same name."""
        return self.add_ingredient(
            user_id, Ingredient(id="", name=name.strip(), quantity=quantity or None)
        )

    def add_ingredient(self, user_id: UUID, incoming: Ingredient) -> Ingredient:
        """Add a fully described item, merging duplicates by name."""
        existing = find_ingredient(self.repository.list_items(user_id), incoming.name)
        if existing is not None:
            return self.repository.update_item(
                user_id, merge_ingredient(existing, incoming)
            )
        item = replace(incoming, name=incoming.name.strip())
        if not item.id:
            item = replace(item, id=uuid4().hex)
        return self.repository.create_item(user_id, item)

    def add_product(
        self, user_id: UUID, product: FoodProduct, *, scanned: bool = False
    ) -> Ingredient:
        """Add a looked-up or scanned product to the pantry."""
        return self.add_ingredient(
            user_id, to_ingredient(product, item_id="", scanned=scanned)
        )

    def update_item(self, user_id: UUID, item: Ingredient) -> Ingredient:
        """Overwrite an existing item.

        Renaming onto another item's name merges the two, keeping the other
        item's id.
        """
        self.get_item(user_id, item.id)
        item = replace(item, name=item.name.strip())
        others = [
            other
            for other in self.repository.list_items(user_id)
            if other.id != item.id
        ]
        existing = find_ingredient(others, item.name)
        if existing is None:
            return self.repository.update_item(user_id, item)
        merged = self.repository.update_item(
            user_id, merge_ingredient(existing, item)
        )
        self.repository.delete_item(user_id, item.id)
        return merged

    def toggle(self, user_id: UUID, item_id: str) -> Ingredient:
        """Flip whether an item is used for the next recipe generation."""
        item = self.get_item(user_id, item_id)
        return self.repository.update_item(
            user_id, replace(item, is_selected=not item.is_selected)
        )

    def select_all(self, user_id: UUID, selected: bool = True) -> list[Ingredient]:
        """Select or deselect every item, writing only the ones that change."""
        items = []
        for item in self.repository.list_items(user_id):
            if item.is_selected != selected:
                item = self.repository.update_item(
                    user_id, replace(item, is_selected=selected)
                )
            items.append(item)
        return items

    def remove_item(self, user_id: UUID, item_id: str) -> None:
        """Remove an item by id."""
        self.repository.delete_item(user_id, item_id)

    def remove_by_name(self, user_id: UUID, name: str) -> bool:
        """Remove an item by case-insensitive name; return False if absent."""
        item = find_ingredient(self.repository.list_items(user_id), name)
        if item is None:
            return False
        self.repository.delete_item(user_id, item.id)
        return True

    def get_item(self, user_id: UUID, item_id: str) -> Ingredient:
        """Return an item or raise ``PantryItemNotFoundError``."""
        item = self.repository.get_item(user_id, item_id)
        if item is None:
            raise PantryItemNotFoundError(f"Pantry item {item_id} not found")
        return item
