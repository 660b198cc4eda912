"""Daily journal service: meals and water per calendar day."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from savr.domain import daily_log
from savr.domain.calendar import month_bounds
from savr.domain.daily_log import DailyLog, MealEntry
from savr.domain.errors import ConcurrentUpdateError
from savr.services.consistency import Versioned, compare_and_swap
from savr.services.profiles import ProfileService

_logger = logging.getLogger(__name__)


class DailyLogRepository(Protocol):
    """Persistence interface for per-day logs."""

    def get_log(self, user_id: UUID, day: date) -> Versioned[DailyLog] | None:
        """Return the stored log for a day and its version, if present."""

    def save_log(
        self, user_id: UUID, log: DailyLog, expected_version: int | None
    ) -> bool:
        """Write the log if the stored version still matches.

        ``expected_version=None`` creates the log only if none exists yet.
        """

    def list_logs(self, user_id: UUID, start: date, end: date) -> list[DailyLog]:
        """Return stored logs with ``start <= date < end``."""


@dataclass
class JournalService:
    """Service that applies meal and water changes to daily logs."""

    repository: DailyLogRepository
    profile_service: ProfileService
    max_attempts: int = 3

    def today(self, user_id: UUID) -> date:
        """Return the user's current calendar day."""
        return self.profile_service.today(user_id)

    def get_day(self, user_id: UUID, day: date) -> DailyLog:
        """Return the log for a day, or a zero-valued log when nothing is stored."""
        targets = self.profile_service.get_targets(user_id)
        stored = self.repository.get_log(user_id, day)
        if stored is None:
            return daily_log.empty_log(day, targets)
        return daily_log.with_targets(stored.value, targets)

    def add_meal(self, user_id: UUID, day: date, entry: MealEntry) -> DailyLog:
        """Log a meal on a day."""
        return self._mutate(user_id, day, lambda log: daily_log.add_meal(log, entry))

    def update_meal(self, user_id: UUID, day: date, entry: MealEntry) -> DailyLog:
        """Replace a logged meal, e.g. after a portion edit."""
        return self._mutate(
            user_id, day, lambda log: daily_log.update_meal(log, entry)
        )

    def remove_meal(self, user_id: UUID, day: date, meal_id: str) -> DailyLog:
        """Remove a logged meal; unknown ids are ignored."""
        return self._mutate(
            user_id, day, lambda log: daily_log.remove_meal(log, meal_id)
        )

    def set_water(self, user_id: UUID, day: date, amount_ml: float) -> DailyLog:
        """Set the water intake for a day."""
        return self._mutate(
            user_id, day, lambda log: daily_log.set_water(log, amount_ml)
        )

    def adjust_water(self, user_id: UUID, day: date, delta_ml: float) -> DailyLog:
        """Add (or with a negative delta, remove) water for a day."""
        return self._mutate(
            user_id,
            day,
            lambda log: daily_log.set_water(log, log.water + delta_ml),
        )

    def calendar(self, user_id: UUID, year: int, month: int) -> list[date]:
        """Return the days of a month with logged activity."""
        start, end = month_bounds(year, month)
        return daily_log.active_days(self.repository.list_logs(user_id, start, end))

    def _mutate(
        self,
        user_id: UUID,
        day: date,
        mutation: Callable[[DailyLog], DailyLog],
    ) -> DailyLog:
        targets = self.profile_service.get_targets(user_id)

        def apply(current: DailyLog | None) -> DailyLog | None:
            base = current or daily_log.empty_log(day, targets)
            updated = daily_log.with_targets(mutation(base), targets)
            if current is None and updated == base:
                return None
            return updated

        result = compare_and_swap(
            lambda: self.repository.get_log(user_id, day),
            lambda log, version: self.repository.save_log(user_id, log, version),
            apply,
            attempts=self.max_attempts,
            label=f"daily_log:{user_id}:{day.isoformat()}",
        )
        if result.created:
            _logger.info("Created daily log %s for user %s", day, user_id)
        if result.written:
            self._record_activity(user_id, day)
        return result.value or daily_log.empty_log(day, targets)

    def _record_activity(self, user_id: UUID, day: date) -> None:
        # The log is already committed; a later write of the day retries this.
        try:
            self.profile_service.record_activity(user_id, day)
        except ConcurrentUpdateError:
            _logger.warning(
                "Streak update failed for user %s on %s", user_id, day, exc_info=True
            )
