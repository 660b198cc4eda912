"""Daily nutrition targets derived from a user profile."""

import math
from dataclasses import dataclass

from savr.domain.profile import MealDistribution, UserProfile

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = ACTIVITY_MULTIPLIERS["light"]

GOAL_ADJUSTMENTS = {
    "weight_loss": -500.0,
    "muscle_gain": 300.0,
    "maintain": 0.0,
    "balanced": 0.0,
}

# Shares of calories as (protein, carbs, fats).
DEFAULT_MACRO_SPLIT = (0.30, 0.40, 0.30)
DIET_PRESETS = {
    "balanced": (0.30, 0.40, 0.30),
    "high_protein": (0.40, 0.35, 0.25),
    "low_carb": (0.35, 0.20, 0.45),
    "keto": (0.20, 0.05, 0.75),
}

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9
KCAL_PER_KG_FAT = 7700
WATER_ML_PER_KG = 35
MIN_CALORIES = 1200.0


@dataclass(frozen=True)
class DailyTargets:
    """Daily calorie (kcal), macro (g) and water (ml) targets."""

    calories: int
    protein: int
    carbs: int
    fats: int
    water: int


DEFAULT_TARGETS = DailyTargets(
    calories=2000, protein=150, carbs=200, fats=65, water=2500
)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def calculate_bmr(weight: float, height: float, age: float, gender: str) -> float:
    """Mifflin-St Jeor basal metabolic rate in kcal/day."""
    bmr = 10 * weight + 6.25 * height - 5 * age
    if gender == "male":
        return bmr + 5
    # "other" shares the female offset.
    return bmr - 161


def calculate_tdee(profile: UserProfile) -> float:
    """Total daily energy expenditure for a complete profile."""
    bmr = calculate_bmr(
        float(profile.weight or 0),
        float(profile.height or 0),
        float(profile.age or 0),
        profile.gender,
    )
    multiplier = ACTIVITY_MULTIPLIERS.get(
        profile.activity_level or "", DEFAULT_ACTIVITY_MULTIPLIER
    )
    return bmr * multiplier


def calorie_target(profile: UserProfile) -> float:
    """Unrounded calorie target after the goal adjustment, floored at 1200."""
    tdee = calculate_tdee(profile)
    if profile.weekly_goal is not None:
        adjusted = tdee + profile.weekly_goal * KCAL_PER_KG_FAT / 7
    else:
        adjusted = tdee + GOAL_ADJUSTMENTS.get(profile.goal, 0.0)
    return max(adjusted, MIN_CALORIES)


def compute_targets(profile: UserProfile) -> DailyTargets:
    """Compute daily targets, falling back to defaults for incomplete profiles."""
    if not _is_complete(profile):
        return DEFAULT_TARGETS

    calories = calorie_target(profile)
    if profile.diet_preset in DIET_PRESETS:
        protein, carbs, fats = _split(calories, DIET_PRESETS[profile.diet_preset])
        calories = (
            protein * KCAL_PER_G_PROTEIN
            + carbs * KCAL_PER_G_CARBS
            + fats * KCAL_PER_G_FAT
        )
    elif profile.custom_macros is not None:
        protein = round_half_away(profile.custom_macros.protein)
        carbs = round_half_away(profile.custom_macros.carbs)
        fats = round_half_away(profile.custom_macros.fats)
    else:
        protein, carbs, fats = _split(calories, DEFAULT_MACRO_SPLIT)

    return DailyTargets(
        calories=round_half_away(calories),
        protein=protein,
        carbs=carbs,
        fats=fats,
        water=round_half_away(float(profile.weight or 0) * WATER_ML_PER_KG),
    )


def meal_targets(
    targets: DailyTargets, distribution: MealDistribution | None = None
) -> dict[str, int]:
    """Split the calorie target across meal types."""
    shares = distribution or MealDistribution()
    return {
        "breakfast": round_half_away(targets.calories * shares.breakfast / 100),
        "lunch": round_half_away(targets.calories * shares.lunch / 100),
        "dinner": round_half_away(targets.calories * shares.dinner / 100),
        "snack": round_half_away(targets.calories * shares.snack / 100),
    }


def distribution_total(distribution: MealDistribution) -> float:
    """Return the sum of meal percentages; callers warn when it is not 100."""
    return (
        distribution.breakfast
        + distribution.lunch
        + distribution.dinner
        + distribution.snack
    )


def _is_complete(profile: UserProfile) -> bool:
    return all(
        value is not None and value > 0
        for value in (profile.weight, profile.height, profile.age)
    )


def _split(
    calories: float, ratios: tuple[float, float, float]
) -> tuple[int, int, int]:
    protein_ratio, carbs_ratio, fats_ratio = ratios
    return (
        round_half_away(calories * protein_ratio / KCAL_PER_G_PROTEIN),
        round_half_away(calories * carbs_ratio / KCAL_PER_G_CARBS),
        round_half_away(calories * fats_ratio / KCAL_PER_G_FAT),
    )
