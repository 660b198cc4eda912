"""JSON document codecs for stored profiles, logs and pantry items.

Stored documents are loosely shaped: any field may be missing. Parsing
fills every gap with zero or empty values so the domain never has to check
for absent fields.
"""

from datetime import date

from savr.domain.daily_log import MEAL_TYPES, DailyLog, MealEntry
from savr.domain.nutrition import MacroProgress, Macros, MacroTotals, NutritionFacts
from savr.domain.pantry import Ingredient
from savr.domain.profile import (
    MealDistribution,
    StreakState,
    UserProfile,
    WeightEntry,
)


def profile_to_document(profile: UserProfile) -> dict[str, object]:
    """Serialize a profile to a JSON document."""
    return {
        "name": profile.name,
        "height": profile.height,
        "weight": profile.weight,
        "age": profile.age,
        "gender": profile.gender,
        "goal": profile.goal,
        "activityLevel": profile.activity_level,
        "weeklyGoal": profile.weekly_goal,
        "targetWeight": profile.target_weight,
        "allergies": list(profile.allergies),
        "dislikes": list(profile.dislikes),
        "customMacros": _macros_to_document(profile.custom_macros)
        if profile.custom_macros
        else None,
        "dietPreset": profile.diet_preset,
        "mealDistribution": {
            "breakfast": profile.meal_distribution.breakfast,
            "lunch": profile.meal_distribution.lunch,
            "dinner": profile.meal_distribution.dinner,
            "snack": profile.meal_distribution.snack,
        }
        if profile.meal_distribution
        else None,
        "weightHistory": [
            {"date": entry.day.isoformat(), "weight": entry.weight}
            for entry in profile.weight_history
        ],
        "streak": {
            "current": profile.streak.current,
            "lastLogDate": profile.streak.last_log_date.isoformat()
            if profile.streak.last_log_date
            else None,
            "longest": profile.streak.longest,
        },
        "timezone": profile.timezone,
    }


def parse_profile(doc: dict[str, object], default_timezone: str = "UTC") -> UserProfile:
    """Parse a stored profile document."""
    custom = doc.get("customMacros")
    distribution = doc.get("mealDistribution")
    streak = doc.get("streak") if isinstance(doc.get("streak"), dict) else {}
    history = doc.get("weightHistory") or []
    return UserProfile(
        name=str(doc.get("name") or ""),
        height=_optional_float(doc.get("height")),
        weight=_optional_float(doc.get("weight")),
        age=_optional_int(doc.get("age")),
        gender=doc.get("gender") or "other",
        goal=doc.get("goal") or "maintain",
        activity_level=doc.get("activityLevel"),
        weekly_goal=_optional_float(doc.get("weeklyGoal")),
        target_weight=_optional_float(doc.get("targetWeight")),
        allergies=tuple(str(item) for item in doc.get("allergies") or []),
        dislikes=tuple(str(item) for item in doc.get("dislikes") or []),
        custom_macros=parse_macros(custom) if isinstance(custom, dict) else None,
        diet_preset=doc.get("dietPreset"),
        meal_distribution=MealDistribution(
            breakfast=_float(distribution.get("breakfast")),
            lunch=_float(distribution.get("lunch")),
            dinner=_float(distribution.get("dinner")),
            snack=_float(distribution.get("snack")),
        )
        if isinstance(distribution, dict)
        else None,
        weight_history=tuple(
            WeightEntry(
                day=date.fromisoformat(entry["date"]),
                weight=_float(entry.get("weight")),
            )
            for entry in history
            if isinstance(entry, dict) and entry.get("date")
        ),
        streak=StreakState(
            current=int(streak.get("current") or 0),
            last_log_date=date.fromisoformat(streak["lastLogDate"])
            if streak.get("lastLogDate")
            else None,
            longest=int(streak.get("longest") or streak.get("current") or 0),
        ),
        timezone=str(doc.get("timezone") or default_timezone),
    )


def daily_log_to_document(log: DailyLog) -> dict[str, object]:
    """Serialize a daily log to a JSON document."""
    return {
        "date": log.date.isoformat(),
        "meals": [meal_to_document(meal) for meal in log.meals],
        "consumed": log.consumed,
        "burned": log.burned,
        "water": log.water,
        "macros": {
            "carbs": _progress_to_document(log.macros.carbs),
            "protein": _progress_to_document(log.macros.protein),
            "fats": _progress_to_document(log.macros.fats),
        },
    }


def parse_daily_log(doc: dict[str, object], day: date) -> DailyLog:
    """Parse a stored daily log document.

    Totals are taken from the meal list, never from the stored numbers.
    """
    meals = tuple(
        parse_meal(raw) for raw in doc.get("meals") or [] if isinstance(raw, dict)
    )
    macros = doc.get("macros") if isinstance(doc.get("macros"), dict) else {}
    totals = Macros()
    for meal in meals:
        totals = totals + meal.macros
    return DailyLog(
        date=day,
        meals=meals,
        consumed=sum((meal.calories for meal in meals), 0.0),
        macros=MacroTotals(
            carbs=MacroProgress(totals.carbs, _target(macros, "carbs")),
            protein=MacroProgress(totals.protein, _target(macros, "protein")),
            fats=MacroProgress(totals.fats, _target(macros, "fats")),
        ),
        water=max(0.0, _float(doc.get("water"))),
        burned=_float(doc.get("burned")),
    )


def meal_to_document(meal: MealEntry) -> dict[str, object]:
    """Serialize a meal entry."""
    return {
        "id": meal.id,
        "type": meal.type,
        "name": meal.name,
        "calories": meal.calories,
        "quantity": meal.quantity,
        "macros": _macros_to_document(meal.macros),
        "productDetails": meal.product_details,
        "recipeId": meal.recipe_id,
    }


def parse_meal(doc: dict[str, object]) -> MealEntry:
    """Parse a stored meal entry, zero-filling missing macros."""
    raw_macros = doc.get("macros")
    meal_type = doc.get("type")
    details = doc.get("productDetails")
    return MealEntry(
        id=str(doc.get("id") or ""),
        type=meal_type if meal_type in MEAL_TYPES else "snack",
        name=str(doc.get("name") or ""),
        calories=_float(doc.get("calories")),
        macros=parse_macros(raw_macros) if isinstance(raw_macros, dict) else Macros(),
        quantity=doc.get("quantity"),
        product_details=details if isinstance(details, dict) else None,
        recipe_id=doc.get("recipeId"),
    )


def parse_macros(doc: dict[str, object]) -> Macros:
    """Parse a ``{protein, carbs, fats}`` mapping."""
    return Macros(
        protein=_float(doc.get("protein")),
        carbs=_float(doc.get("carbs")),
        fats=_float(doc.get("fats")),
    )


def ingredient_to_row(item: Ingredient) -> dict[str, object]:
    """Serialize a pantry item to row columns."""
    return {
        "id": item.id,
        "name": item.name,
        "quantity": item.quantity,
        "is_selected": item.is_selected,
        "is_scanned": item.is_scanned,
        "brand": item.brand,
        "image": item.image,
        "nutrition": {
            "calories": item.nutrition.calories,
            "protein": item.nutrition.protein,
            "carbs": item.nutrition.carbs,
            "fats": item.nutrition.fats,
        }
        if item.nutrition
        else None,
        "serving_size": item.serving_size,
        "unit": item.unit,
    }


def parse_ingredient(row: dict[str, object]) -> Ingredient:
    """Parse a pantry row."""
    nutrition = row.get("nutrition")
    is_selected = row.get("is_selected")
    return Ingredient(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        quantity=row.get("quantity"),
        is_selected=True if is_selected is None else bool(is_selected),
        is_scanned=bool(row.get("is_scanned")),
        brand=row.get("brand"),
        image=row.get("image"),
        nutrition=NutritionFacts(
            calories=_optional_float(nutrition.get("calories")),
            protein=_optional_float(nutrition.get("protein")),
            carbs=_optional_float(nutrition.get("carbs")),
            fats=_optional_float(nutrition.get("fats")),
        )
        if isinstance(nutrition, dict)
        else None,
        serving_size=_optional_float(row.get("serving_size")),
        unit=row.get("unit") if row.get("unit") in {"g", "portion"} else None,
    )


def _macros_to_document(macros: Macros) -> dict[str, float]:
    return {"protein": macros.protein, "carbs": macros.carbs, "fats": macros.fats}


def _progress_to_document(progress: MacroProgress) -> dict[str, float]:
    return {"current": progress.current, "target": progress.target}


def _target(macros: dict[str, object], key: str) -> float:
    entry = macros.get(key)
    if isinstance(entry, dict):
        return _float(entry.get("target"))
    return 0.0


def _float(value: object) -> float:
    number = _optional_float(value)
    return number if number is not None else 0.0


def _optional_int(value: object) -> int | None:
    number = _optional_float(value)
    if not number:
        return None
    return int(number)


def _optional_float(value: object) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None
