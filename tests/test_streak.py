"""Tests for streak and weight history rules."""

from datetime import date

from savr.domain.profile import StreakState, WeightEntry
from savr.domain.streak import advance_streak
from savr.domain.weight import record_weight

TODAY = date(2024, 5, 14)


def test_first_log_starts_streak() -> None:
    streak = advance_streak(StreakState(), TODAY, TODAY)

    assert streak == StreakState(current=1, last_log_date=TODAY, longest=1)


def test_consecutive_day_increments() -> None:
    streak = StreakState(current=4, last_log_date=date(2024, 5, 13), longest=4)

    advanced = advance_streak(streak, TODAY, TODAY)

    assert advanced.current == 5
    assert advanced.longest == 5


def test_gap_resets_to_one_and_keeps_longest() -> None:
    streak = StreakState(current=7, last_log_date=date(2024, 5, 10), longest=7)

    advanced = advance_streak(streak, TODAY, TODAY)

    assert advanced.current == 1
    assert advanced.longest == 7


def test_same_day_and_past_days_do_not_change_streak() -> None:
    streak = StreakState(current=2, last_log_date=TODAY, longest=3)

    assert advance_streak(streak, TODAY, TODAY) is streak
    assert advance_streak(streak, date(2024, 5, 1), TODAY) is streak


def test_month_boundary_counts_as_consecutive() -> None:
    streak = StreakState(current=1, last_log_date=date(2024, 2, 29), longest=1)

    assert advance_streak(streak, date(2024, 3, 1), date(2024, 3, 1)).current == 2


def test_record_weight_appends_and_overwrites_same_day() -> None:
    history = record_weight((), date(2024, 5, 1), 80.0)
    history = record_weight(history, date(2024, 5, 2), 79.5)
    history = record_weight(history, date(2024, 5, 2), 79.2)

    assert history == (
        WeightEntry(day=date(2024, 5, 1), weight=80.0),
        WeightEntry(day=date(2024, 5, 2), weight=79.2),
    )
    assert record_weight(history, date(2024, 5, 2), 79.2) is history
