"""Profile business logic: saves, field updates, targets and streaks."""

import math
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol, get_args
from uuid import UUID

from savr.domain.calendar import is_valid_timezone, local_today
from savr.domain.errors import InvalidProfileError, ProfileNotFoundError
from savr.domain.profile import (
    ActivityLevel,
    DietPreset,
    Gender,
    Goal,
    StreakState,
    UserProfile,
)
from savr.domain.streak import advance_streak
from savr.domain.targets import DEFAULT_TARGETS, DailyTargets, compute_targets
from savr.domain.weight import record_weight
from savr.services.consistency import Versioned, compare_and_swap

_LIST_FIELDS = {"allergies", "dislikes"}
_NUMERIC_FIELDS: dict[str, type] = {
    "height": float,
    "weight": float,
    "age": int,
    "weekly_goal": float,
    "target_weight": float,
}
_POSITIVE_FIELDS = {"height", "weight", "age", "target_weight"}
_CHOICE_FIELDS: dict[str, tuple[str, ...]] = {
    "gender": get_args(Gender),
    "goal": get_args(Goal),
    "activity_level": get_args(ActivityLevel),
    "diet_preset": get_args(DietPreset),
}
_TEXT_FIELDS = {"name", "timezone"}


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> Versioned[UserProfile] | None:
        """Return the stored profile and its version, if present."""

    def save_profile(
        self, user_id: UUID, profile: UserProfile, expected_version: int | None
    ) -> bool:
        """Write the profile if the stored version still matches."""


@dataclass
class ProfileService:
    """Application service for profile lifecycle actions."""

    repository: ProfileRepository
    default_timezone: str = "UTC"
    max_attempts: int = 3

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the user's profile, if onboarding is complete."""
        stored = self.repository.get_profile(user_id)
        return stored.value if stored else None

    def require_profile(self, user_id: UUID) -> UserProfile:
        """Return the user's profile or raise ``ProfileNotFoundError``."""
        profile = self.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(f"No profile for user {user_id}")
        return profile

    def today(self, user_id: UUID) -> date:
        """Return today's date in the user's timezone."""
        profile = self.get_profile(user_id)
        timezone = profile.timezone if profile else self.default_timezone
        return local_today(timezone)

    def get_targets(self, user_id: UUID) -> DailyTargets:
        """Return daily targets for the stored profile or the defaults."""
        profile = self.get_profile(user_id)
        if profile is None:
            return DEFAULT_TARGETS
        return compute_targets(profile)

    def save_profile(self, user_id: UUID, profile: UserProfile) -> UserProfile:
        """Save onboarding or edited profile data.

        The stored streak and weight history are authoritative; a changed
        weight is recorded in the history for the user's current day.
        """
        return self._update(user_id, lambda _current: profile)

    def update_field(
        self, user_id: UUID, field_name: str, value: object, action: str = "set"
    ) -> UserProfile:
        """Apply a single-field change such as the assistant's tool calls."""

        def build(current: UserProfile | None) -> UserProfile:
            if current is None:
                raise ProfileNotFoundError(f"No profile for user {user_id}")
            return _apply_field(current, field_name, value, action)

        return self._update(user_id, build)

    def record_activity(self, user_id: UUID, day: date) -> StreakState | None:
        """Advance the streak for a log write on ``day``; repeat calls are no-ops."""

        def mutate(current: UserProfile | None) -> UserProfile | None:
            if current is None:
                return None
            today = local_today(current.timezone)
            return replace(
                current, streak=advance_streak(current.streak, day, today)
            )

        result = compare_and_swap(
            lambda: self.repository.get_profile(user_id),
            lambda profile, version: self.repository.save_profile(
                user_id, profile, version
            ),
            mutate,
            attempts=self.max_attempts,
            label=f"profile:{user_id}",
        )
        return result.value.streak if result.value else None

    def _update(
        self,
        user_id: UUID,
        build: Callable[[UserProfile | None], UserProfile],
    ) -> UserProfile:
        def mutate(current: UserProfile | None) -> UserProfile:
            incoming = build(current)
            timezone = incoming.timezone
            if not is_valid_timezone(timezone):
                raise InvalidProfileError(f"Unknown timezone: {timezone}")
            today = local_today(timezone)
            if current is None:
                history = ()
                if incoming.weight:
                    history = record_weight((), today, incoming.weight)
                return replace(incoming, weight_history=history, streak=StreakState())
            history = current.weight_history
            if incoming.weight and (
                incoming.weight != current.weight or not history
            ):
                history = record_weight(history, today, incoming.weight)
            return replace(incoming, weight_history=history, streak=current.streak)

        result = compare_and_swap(
            lambda: self.repository.get_profile(user_id),
            lambda profile, version: self.repository.save_profile(
                user_id, profile, version
            ),
            mutate,
            attempts=self.max_attempts,
            label=f"profile:{user_id}",
        )
        if result.value is None:
            raise ProfileNotFoundError(f"No profile for user {user_id}")
        return result.value


def _apply_field(
    profile: UserProfile, field_name: str, value: object, action: str
) -> UserProfile:
    if field_name in _LIST_FIELDS:
        current: tuple[str, ...] = getattr(profile, field_name)
        return replace(profile, **{field_name: _apply_list(current, value, action)})
    if field_name in _NUMERIC_FIELDS:
        caster = _NUMERIC_FIELDS[field_name]
        try:
            number = caster(float(value))  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError) as exc:
            raise InvalidProfileError(
                f"{field_name} must be numeric, got {value!r}"
            ) from exc
        positive_only = field_name in _POSITIVE_FIELDS
        if not math.isfinite(number) or (positive_only and number <= 0):
            raise InvalidProfileError(f"Invalid {field_name}: {value!r}")
        return replace(profile, **{field_name: number})
    if field_name in _CHOICE_FIELDS:
        if value not in _CHOICE_FIELDS[field_name]:
            raise InvalidProfileError(f"Invalid {field_name}: {value!r}")
        return replace(profile, **{field_name: value})
    if field_name in _TEXT_FIELDS:
        return replace(profile, **{field_name: str(value).strip()})
    raise InvalidProfileError(f"Unknown profile field: {field_name}")


def _apply_list(
    current: tuple[str, ...], value: object, action: str
) -> tuple[str, ...]:
    if action == "set" and isinstance(value, list | tuple):
        return tuple(str(item).strip() for item in value if str(item).strip())
    entry = str(value).strip()
    if action == "remove":
        return tuple(item for item in current if item.lower() != entry.lower())
    if action not in {"add", "set"}:
        raise InvalidProfileError(f"Unknown action: {action}")
    if not entry or any(item.lower() == entry.lower() for item in current):
        return current
    return (*current, entry)
