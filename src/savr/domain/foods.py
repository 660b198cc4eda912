"""Food products from the local catalog or the product database."""

import re
from dataclasses import dataclass

from savr.domain.daily_log import MealEntry, MealType
from savr.domain.nutrition import Macros, NutritionFacts
from savr.domain.pantry import Ingredient

_SERVING_PATTERN = re.compile(r"(\d+(?:[.,]\d+)?)\s*(?:g|ml)\b", re.IGNORECASE)


@dataclass(frozen=True)
class FoodProduct:
    """A food with nutrition facts per 100 g."""

    id: str
    name: str
    per_100g: NutritionFacts
    brand: str | None = None
    image: str | None = None
    serving_size: str | None = None
    quantity: str | None = None
    source: str = "local"


def parse_serving_grams(serving_size: str | None) -> float | None:
    """Extract grams (or ml) from a serving label such as ``"150 g"``."""
    if not serving_size:
        return None
    match = _SERVING_PATTERN.search(serving_size)
    if match is None:
        return None
    return float(match.group(1).replace(",", "."))


def scale_nutrition(per_100g: NutritionFacts, grams: float) -> NutritionFacts:
    """Scale per-100 g facts to a portion, keeping unknown values unknown."""
    factor = max(grams, 0.0) / 100.0

    def _scale(value: float | None) -> float | None:
        return None if value is None else value * factor

    return NutritionFacts(
        calories=_scale(per_100g.calories),
        protein=_scale(per_100g.protein),
        carbs=_scale(per_100g.carbs),
        fats=_scale(per_100g.fats),
    )


def to_ingredient(
    product: FoodProduct, item_id: str, *, scanned: bool = False
) -> Ingredient:
    """Build a pantry item from a product."""
    return Ingredient(
        id=item_id,
        name=product.name,
        quantity=product.quantity,
        is_selected=True,
        is_scanned=scanned,
        brand=product.brand,
        image=product.image,
        nutrition=product.per_100g,
        serving_size=parse_serving_grams(product.serving_size),
        unit="g",
    )


def to_meal_entry(
    product: FoodProduct,
    entry_id: str,
    meal_type: MealType,
    grams: float | None = None,
) -> MealEntry:
    """Build a journal entry for a portion of a product.

    Without an explicit portion the product's serving size is used, then 100 g.
    """
    portion = grams
    if portion is None:
        portion = parse_serving_grams(product.serving_size) or 100.0
    facts = scale_nutrition(product.per_100g, portion)
    return MealEntry(
        id=entry_id,
        type=meal_type,
        name=product.name,
        calories=round(facts.calories or 0.0, 1),
        macros=Macros(
            protein=round(facts.protein or 0.0, 1),
            carbs=round(facts.carbs or 0.0, 1),
            fats=round(facts.fats or 0.0, 1),
        ),
        quantity=f"{portion:g} g",
        product_details={
            "product_id": product.id,
            "brand": product.brand,
            "image": product.image,
            "source": product.source,
        },
    )


def _food(  # noqa: PLR0913
    food_id: str,
    name: str,
    calories: float,
    protein: float,
    carbs: float,
    fats: float,
    serving_size: str,
) -> FoodProduct:
    return FoodProduct(
        id=food_id,
        name=name,
        per_100g=NutritionFacts(
            calories=calories, protein=protein, carbs=carbs, fats=fats
        ),
        brand="Generic",
        serving_size=serving_size,
    )


COMMON_FOODS: tuple[FoodProduct, ...] = (
    _food("gen_banana", "Banana", 89, 1.1, 22.8, 0.3, "150 g"),
    _food("gen_apple", "Apple", 52, 0.3, 14, 0.2, "180 g"),
    _food("gen_avocado", "Avocado", 160, 2, 8.5, 14.7, "200 g"),
    _food("gen_orange", "Orange", 47, 0.9, 12, 0.1, "130 g"),
    _food("gen_strawberry", "Strawberries", 32, 0.7, 7.7, 0.3, "150 g"),
    _food("gen_carrot", "Carrot (raw)", 41, 0.9, 10, 0.2, "100 g"),
    _food("gen_broccoli", "Broccoli (cooked)", 35, 2.4, 7.2, 0.4, "150 g"),
    _food("gen_spinach", "Spinach (cooked)", 23, 2.9, 3.6, 0.4, "150 g"),
    _food("gen_tomato", "Tomato", 18, 0.9, 3.9, 0.2, "120 g"),
    _food("gen_potato", "Potato (cooked)", 87, 1.9, 20, 0.1, "150 g"),
    _food("gen_sweet_potato", "Sweet potato (cooked)", 86, 1.6, 20, 0.1, "150 g"),
    _food("gen_egg", "Egg (whole)", 155, 13, 1.1, 11, "50 g"),
    _food("gen_chicken_breast", "Chicken breast (cooked)", 165, 31, 0, 3.6, "120 g"),
    _food("gen_beef_mince", "Beef mince 5%", 137, 21, 0, 5, "100 g"),
    _food("gen_salmon", "Salmon (cooked)", 208, 20, 0, 13, "120 g"),
    _food("gen_tuna_canned", "Tuna in water (canned)", 116, 26, 0, 1, "100 g"),
    _food("gen_tofu", "Tofu", 76, 8, 1.9, 4.8, "100 g"),
    _food("gen_rice_white", "White rice (cooked)", 130, 2.7, 28, 0.3, "150 g"),
    _food("gen_pasta", "Pasta (cooked)", 131, 5, 25, 1.1, "150 g"),
    _food("gen_oats", "Rolled oats", 389, 16.9, 66, 6.9, "40 g"),
    _food("gen_bread_whole", "Wholemeal bread", 265, 9, 49, 3.2, "60 g"),
    _food("gen_quinoa", "Quinoa (cooked)", 120, 4.4, 21, 1.9, "150 g"),
    _food("gen_lentils", "Lentils (cooked)", 116, 9, 20, 0.4, "150 g"),
    _food("gen_yogurt", "Plain yogurt", 59, 3.5, 4.7, 3.3, "125 g"),
    _food("gen_milk", "Semi-skimmed milk", 47, 3.4, 4.9, 1.6, "200 ml"),
    _food("gen_mozzarella", "Mozzarella", 280, 28, 3.1, 17, "30 g"),
    _food("gen_butter", "Butter", 717, 0.9, 0.1, 81, "10 g"),
    _food("gen_olive_oil", "Olive oil", 884, 0, 0, 100, "10 ml"),
    _food("gen_almonds", "Almonds", 579, 21, 22, 50, "30 g"),
    _food("gen_honey", "Honey", 304, 0.3, 82, 0, "20 g"),
    _food("gen_dark_chocolate", "Dark chocolate 70%", 598, 7.8, 46, 43, "20 g"),
)


def search_catalog(query: str) -> list[FoodProduct]:
    """Return catalog foods whose name contains the query."""
    wanted = query.strip().lower()
    if not wanted:
        return []
    return [food for food in COMMON_FOODS if wanted in food.name.lower()]
