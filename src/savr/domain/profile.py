"""User profile domain models."""

from dataclasses import dataclass, field
from datetime import date
from typing import Literal

from savr.domain.nutrition import Macros

Gender = Literal["male", "female", "other"]
Goal = Literal["weight_loss", "muscle_gain", "maintain", "balanced"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
DietPreset = Literal["balanced", "high_protein", "low_carb", "keto"]


@dataclass(frozen=True)
class WeightEntry:
    """Body weight sample for one calendar day."""

    day: date
    weight: float


@dataclass(frozen=True)
class StreakState:
    """Consecutive-day logging streak."""

    current: int = 0
    last_log_date: date | None = None
    longest: int = 0


@dataclass(frozen=True)
class MealDistribution:
    """Share of the daily calorie target per meal, in percent."""

    breakfast: float = 25.0
    lunch: float = 35.0
    dinner: float = 30.0
    snack: float = 10.0


@dataclass(frozen=True)
class UserProfile:
    """A user's body metrics, goals and food preferences."""

    name: str = ""
    height: float | None = None
    weight: float | None = None
    age: int | None = None
    gender: Gender = "other"
    goal: Goal = "maintain"
    activity_level: ActivityLevel | None = None
    weekly_goal: float | None = None
    target_weight: float | None = None
    allergies: tuple[str, ...] = ()
    dislikes: tuple[str, ...] = ()
    custom_macros: Macros | None = None
    diet_preset: DietPreset | None = None
    meal_distribution: MealDistribution | None = None
    weight_history: tuple[WeightEntry, ...] = ()
    streak: StreakState = field(default_factory=StreakState)
    timezone: str = "UTC"
