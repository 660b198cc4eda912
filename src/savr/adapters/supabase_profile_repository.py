"""Supabase-backed profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from savr.adapters.documents import parse_profile, profile_to_document
from savr.domain.profile import UserProfile
from savr.services.consistency import Versioned
from savr.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile documents with a version column."""

    client: Client
    default_timezone: str = "UTC"

    def get_profile(self, user_id: UUID) -> Versioned[UserProfile] | None:
        """Return the stored profile and its version, if present."""
        response = (
            self.client.table("profiles")
            .select("document, version")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return Versioned(
            value=parse_profile(row.get("document") or {}, self.default_timezone),
            version=int(row.get("version") or 0),
        )

    def save_profile(
        self, user_id: UUID, profile: UserProfile, expected_version: int | None
    ) -> bool:
        """Write the profile only if the stored version still matches."""
        document = profile_to_document(profile)
        if expected_version is None:
            response = (
                self.client.table("profiles")
                .upsert(
                    {"user_id": str(user_id), "document": document, "version": 1},
                    on_conflict="user_id",
                    ignore_duplicates=True,
                )
                .execute()
            )
            return bool(response.data)
        response = (
            self.client.table("profiles")
            .update({"document": document, "version": expected_version + 1})
            .eq("user_id", str(user_id))
            .eq("version", expected_version)
            .execute()
        )
        return bool(response.data)
