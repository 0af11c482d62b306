"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from nutritrack.domain.profile import UserProfile
from nutritrack.services.profiles import ProfileRepository

_PROFILE_COLUMNS = (
    "id, height_cm, weight_kg, gender, date_of_birth, activity_level, goal, "
    "health_goals, medical_conditions, daily_targets"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile stored on the users row, if present."""
        response = (
            self.client.table("users")
            .select(_PROFILE_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        if row.get("weight_kg") is None or row.get("height_cm") is None:
            return None
        return _parse_row(row)

    def save_daily_targets(self, user_id: UUID, targets: dict[str, object]) -> None:
        """Write computed targets onto the users row."""
        response = (
            self.client.table("users")
            .update(
                {
                    "daily_targets": targets,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update daily targets in Supabase")


def _parse_row(row: dict[str, object]) -> UserProfile:
    dob_raw = row.get("date_of_birth")
    date_of_birth = None
    if isinstance(dob_raw, str) and dob_raw:
        date_of_birth = date.fromisoformat(dob_raw[:10])
    targets_raw = row.get("daily_targets")
    return UserProfile(
        weight_kg=float(row["weight_kg"]),
        height_cm=float(row["height_cm"]),
        gender=_optional_str(row.get("gender")),
        date_of_birth=date_of_birth,
        activity_level=_optional_str(row.get("activity_level")),
        goal=_optional_str(row.get("goal")),
        health_goals=_str_list(row.get("health_goals")),
        medical_conditions=_str_list(row.get("medical_conditions")),
        daily_targets=targets_raw if isinstance(targets_raw, dict) else None,
    )


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


def _str_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]
