"""Nutrition value objects shared across the domain."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Macros:
    """Macronutrient grams."""

    protein: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0

    def __add__(self, other: "Macros") -> "Macros":
        return Macros(
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fats=self.fats + other.fats,
        )


@dataclass(frozen=True)
class NutritionFacts:
    """Calories and macros for a declared quantity of food.

    Any field may be unknown when the upstream product database omits it.
    """

    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fats: float | None = None

    def is_empty(self) -> bool:
        """Return True when no value is known."""
        return all(
            value is None
            for value in (self.calories, self.protein, self.carbs, self.fats)
        )


@dataclass(frozen=True)
class MacroProgress:
    """Consumed grams against a daily target for one macro."""

    current: float = 0.0
    target: float = 0.0


@dataclass(frozen=True)
class MacroTotals:
    """Per-day progress for every macro."""

    carbs: MacroProgress = field(default_factory=MacroProgress)
    protein: MacroProgress = field(default_factory=MacroProgress)
    fats: MacroProgress = field(default_factory=MacroProgress)
