"""Pantry ingredient models and merge rules."""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Literal

from savr.domain.nutrition import NutritionFacts

Unit = Literal["g", "portion"]


@dataclass(frozen=True)
class Ingredient:
    """An item in a user's pantry."""

    id: str
    name: str
    quantity: str | None = None
    is_selected: bool = True
    is_scanned: bool = False
    brand: str | None = None
    image: str | None = None
    nutrition: NutritionFacts | None = None
    serving_size: float | None = None
    unit: Unit | None = None


def normalize_name(name: str) -> str:
    """Normalize an ingredient name for comparisons."""
    return name.strip().lower()


def find_ingredient(pantry: Iterable[Ingredient], name: str) -> Ingredient | None:
    """Return the pantry item whose name matches case-insensitively."""
    wanted = normalize_name(name)
    for item in pantry:
        if normalize_name(item.name) == wanted:
            return item
    return None


def merge_ingredient(existing: Ingredient, incoming: Ingredient) -> Ingredient:
    """Merge a duplicate add into the existing pantry item.

    The existing id and name are kept, the item is re-selected, and every
    other field is replaced only when the incoming value is known.
    """
    nutrition = existing.nutrition
    if incoming.nutrition is not None and not incoming.nutrition.is_empty():
        nutrition = incoming.nutrition
    return replace(
        existing,
        quantity=incoming.quantity or existing.quantity,
        is_selected=True,
        is_scanned=existing.is_scanned or incoming.is_scanned,
        brand=incoming.brand or existing.brand,
        image=incoming.image or existing.image,
        nutrition=nutrition,
        serving_size=incoming.serving_size or existing.serving_size,
        unit=incoming.unit or existing.unit,
    )


def selected_ingredients(pantry: Iterable[Ingredient]) -> list[Ingredient]:
    """Return the items included in the next recipe generation."""
    return [item for item in pantry if item.is_selected]
