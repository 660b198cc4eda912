"""Body weight history ledger."""

from datetime import date

from savr.domain.profile import WeightEntry


def record_weight(
    history: tuple[WeightEntry, ...], day: date, weight: float
) -> tuple[WeightEntry, ...]:
    """Record a weight sample, keeping at most one entry per day.

    Assumes ``day`` is not earlier than the last entry.
    """
    if history and history[-1].day == day:
        if history[-1].weight == weight:
            return history
        return (*history[:-1], WeightEntry(day=day, weight=weight))
    return (*history, WeightEntry(day=day, weight=weight))
