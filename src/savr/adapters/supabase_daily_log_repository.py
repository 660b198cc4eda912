"""Supabase-backed daily log repository."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from savr.adapters.documents import daily_log_to_document, parse_daily_log
from savr.domain.daily_log import DailyLog
from savr.services.consistency import Versioned
from savr.services.journal import DailyLogRepository


@dataclass
class SupabaseDailyLogRepository(DailyLogRepository):
    """Supabase implementation for one log document per user and day."""

    client: Client

    def get_log(self, user_id: UUID, day: date) -> Versioned[DailyLog] | None:
        """Return the stored log for a day and its version, if present."""
        response = (
            self.client.table("daily_logs")
            .select("day, document, version")
            .eq("user_id", str(user_id))
            .eq("day", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return Versioned(
            value=parse_daily_log(row.get("document") or {}, day),
            version=int(row.get("version") or 0),
        )

    def save_log(
        self, user_id: UUID, log: DailyLog, expected_version: int | None
    ) -> bool:
        """Write the log only if the stored version still matches."""
        document = daily_log_to_document(log)
        if expected_version is None:
            response = (
                self.client.table("daily_logs")
                .upsert(
                    {
                        "user_id": str(user_id),
                        "day": log.date.isoformat(),
                        "document": document,
                        "version": 1,
                    },
                    on_conflict="user_id,day",
                    ignore_duplicates=True,
                )
                .execute()
            )
            return bool(response.data)
        response = (
            self.client.table("daily_logs")
            .update({"document": document, "version": expected_version + 1})
            .eq("user_id", str(user_id))
            .eq("day", log.date.isoformat())
            .eq("version", expected_version)
            .execute()
        )
        return bool(response.data)

    def list_logs(self, user_id: UUID, start: date, end: date) -> list[DailyLog]:
        """Return stored logs with ``start <= day < end``."""
        response = (
            self.client.table("daily_logs")
            .select("day, document")
            .eq("user_id", str(user_id))
            .gte("day", start.isoformat())
            .lt("day", end.isoformat())
            .order("day")
            .execute()
        )
        return [
            parse_daily_log(row.get("document") or {}, date.fromisoformat(row["day"]))
            for row in response.data or []
        ]
