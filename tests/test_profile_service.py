"""Tests for the profile service."""

from dataclasses import replace
from uuid import uuid4

import pytest

from savr.domain.calendar import local_today
from savr.domain.errors import (
    ConcurrentUpdateError,
    InvalidProfileError,
    ProfileNotFoundError,
)
from savr.domain.profile import StreakState
from savr.domain.targets import DEFAULT_TARGETS
from tests.conftest import example_profile


def test_onboarding_seeds_weight_history(profile_service, profile_repository) -> None:
    user_id = uuid4()

    saved = profile_service.save_profile(
        user_id, example_profile(streak=StreakState(current=9, longest=9))
    )

    assert len(saved.weight_history) == 1
    assert saved.weight_history[0].day == local_today("UTC")
    assert saved.weight_history[0].weight == 75
    assert saved.streak == StreakState()
    assert profile_repository.profiles[user_id].version == 1


def test_resave_keeps_stored_streak_and_history(profile_service) -> None:
    user_id = uuid4()
    profile_service.save_profile(user_id, example_profile())
    profile_service.record_activity(user_id, local_today("UTC"))

    saved = profile_service.save_profile(
        user_id, example_profile(name="Sam", streak=StreakState())
    )

    assert saved.name == "Sam"
    assert saved.streak.current == 1
    assert len(saved.weight_history) == 1


def test_weight_change_overwrites_same_day_entry(profile_service) -> None:
    user_id = uuid4()
    profile_service.save_profile(user_id, example_profile())

    saved = profile_service.save_profile(user_id, example_profile(weight=74.2))

    assert [entry.weight for entry in saved.weight_history] == [74.2]


def test_invalid_timezone_rejected(profile_service) -> None:
    with pytest.raises(InvalidProfileError):
        profile_service.save_profile(uuid4(), example_profile(timezone="Mars/Base"))


def test_update_list_fields(profile_service) -> None:
    user_id = uuid4()
    profile_service.save_profile(user_id, example_profile(allergies=("Peanuts",)))

    profile_service.update_field(user_id, "allergies", "shellfish", "add")
    profile_service.update_field(user_id, "allergies", "SHELLFISH", "add")
    updated = profile_service.update_field(user_id, "allergies", "peanuts", "remove")

    assert updated.allergies == ("shellfish",)

    replaced = profile_service.update_field(user_id, "dislikes", ["olives", " "])

    assert replaced.dislikes == ("olives",)


def test_update_numeric_fields_with_coercion(profile_service) -> None:
    user_id = uuid4()
    profile_service.save_profile(user_id, example_profile())

    profile_service.update_field(user_id, "age", "31")
    updated = profile_service.update_field(user_id, "weight", "82.5")

    assert updated.age == 31
    assert updated.weight == 82.5
    assert updated.weight_history[-1].weight == 82.5


@pytest.mark.parametrize(
    ("field_name", "value"),
    [
        ("favourite_colour", "blue"),
        ("goal", "bulk"),
        ("weight", "heavy"),
        ("height", "0"),
        ("age", "inf"),
    ],
)
def test_invalid_field_updates_raise(profile_service, field_name, value) -> None:
    user_id = uuid4()
    profile_service.save_profile(user_id, example_profile())

    with pytest.raises(InvalidProfileError):
        profile_service.update_field(user_id, field_name, value)


def test_update_without_profile_raises(profile_service) -> None:
    with pytest.raises(ProfileNotFoundError):
        profile_service.update_field(uuid4(), "name", "Kim")


def test_targets_default_without_profile(profile_service) -> None:
    assert profile_service.get_targets(uuid4()) == DEFAULT_TARGETS


def test_targets_follow_stored_profile(profile_service) -> None:
    user_id = uuid4()
    profile_service.save_profile(user_id, example_profile())

    assert profile_service.get_targets(user_id).calories == 1836


def test_write_conflict_is_retried(profile_service, profile_repository) -> None:
    user_id = uuid4()
    profile_repository.conflicts = 2

    saved = profile_service.save_profile(user_id, example_profile())

    assert profile_repository.profiles[user_id].value == saved


def test_write_conflicts_exhaust_attempts(profile_service, profile_repository) -> None:
    user_id = uuid4()
    profile_service.save_profile(user_id, example_profile())
    profile_repository.conflicts = 3

    with pytest.raises(ConcurrentUpdateError):
        profile_service.save_profile(user_id, replace(example_profile(), name="Jo"))
