"""Per-day meal log aggregate.

Every mutation returns a new ``DailyLog`` whose ``consumed`` calories and
macro ``current`` values are recomputed from the full meal list, so the
totals can never drift from the meals they summarize.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Literal

from savr.domain.errors import InvalidMealError, MealNotFoundError
from savr.domain.nutrition import MacroProgress, Macros, MacroTotals
from savr.domain.targets import DailyTargets

MealType = Literal["breakfast", "lunch", "dinner", "snack"]
MEAL_TYPES: tuple[MealType, ...] = ("breakfast", "lunch", "dinner", "snack")


@dataclass(frozen=True)
class MealEntry:
    """A food logged against one meal of a day."""

    id: str
    type: MealType
    name: str
    calories: float
    macros: Macros = field(default_factory=Macros)
    quantity: str | None = None
    product_details: dict[str, object] | None = None
    recipe_id: str | None = None


@dataclass(frozen=True)
class DailyLog:
    """Aggregate of everything a user logged on one calendar day."""

    date: date
    meals: tuple[MealEntry, ...] = ()
    consumed: float = 0.0
    macros: MacroTotals = field(default_factory=MacroTotals)
    water: float = 0.0
    burned: float = 0.0


def empty_log(day: date, targets: DailyTargets | None = None) -> DailyLog:
    """Return the zero-valued transient log shown for a day without activity."""
    log = DailyLog(date=day)
    if targets is None:
        return log
    return with_targets(log, targets)


def add_meal(log: DailyLog, entry: MealEntry) -> DailyLog:
    """Append a meal and recompute totals."""
    _validate(entry)
    if any(meal.id == entry.id for meal in log.meals):
        raise InvalidMealError(f"Meal {entry.id} is already logged")
    return _recompute(log, (*log.meals, entry))


def update_meal(log: DailyLog, entry: MealEntry) -> DailyLog:
    """Replace the meal with the same id and recompute totals."""
    _validate(entry)
    if not any(meal.id == entry.id for meal in log.meals):
        raise MealNotFoundError(f"Meal {entry.id} is not in the log for {log.date}")
    meals = tuple(entry if meal.id == entry.id else meal for meal in log.meals)
    return _recompute(log, meals)


def remove_meal(log: DailyLog, meal_id: str) -> DailyLog:
    """Drop the meal with the given id; unknown ids leave the log unchanged."""
    meals = tuple(meal for meal in log.meals if meal.id != meal_id)
    if len(meals) == len(log.meals):
        return log
    return _recompute(log, meals)


def set_water(log: DailyLog, amount_ml: float) -> DailyLog:
    """Set the water intake, clamped at zero."""
    return replace(log, water=max(0.0, float(amount_ml)))


def with_targets(log: DailyLog, targets: DailyTargets) -> DailyLog:
    """Project daily macro targets onto a log."""
    return replace(
        log,
        macros=MacroTotals(
            carbs=replace(log.macros.carbs, target=float(targets.carbs)),
            protein=replace(log.macros.protein, target=float(targets.protein)),
            fats=replace(log.macros.fats, target=float(targets.fats)),
        ),
    )


def is_active(log: DailyLog) -> bool:
    """Return True when the day has any meal or water logged."""
    return bool(log.meals) or log.water > 0


def active_days(logs: Iterable[DailyLog]) -> list[date]:
    """Return the sorted dates with logged activity, for calendar views."""
    return sorted({log.date for log in logs if is_active(log)})


def _validate(entry: MealEntry) -> None:
    if not _is_amount(entry.calories):
        raise InvalidMealError(
            f"Invalid calories for meal {entry.id}: {entry.calories!r}"
        )
    for name in ("protein", "carbs", "fats"):
        grams = getattr(entry.macros, name)
        if not _is_amount(grams):
            raise InvalidMealError(f"Invalid {name} for meal {entry.id}: {grams!r}")


def _is_amount(value: object) -> bool:
    return (
        not isinstance(value, bool)
        and isinstance(value, int | float)
        and math.isfinite(value)
        and value >= 0
    )


def _recompute(log: DailyLog, meals: tuple[MealEntry, ...]) -> DailyLog:
    consumed = 0.0
    totals = Macros()
    for meal in meals:
        consumed += meal.calories
        totals = totals + meal.macros
    return replace(
        log,
        meals=meals,
        consumed=consumed,
        macros=MacroTotals(
            carbs=MacroProgress(current=totals.carbs, target=log.macros.carbs.target),
            protein=MacroProgress(
                current=totals.protein, target=log.macros.protein.target
            ),
            fats=MacroProgress(current=totals.fats, target=log.macros.fats.target),
        ),
    )
