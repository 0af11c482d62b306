"""Supabase repository for the day's food, exercise and habit logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutritrack.domain.energy import ExerciseLogRow
from nutritrack.domain.nutrition import NutritionData
from nutritrack.services.dashboard import DailyLogRepository

_NUTRIENT_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sodium")


@dataclass
class SupabaseDailyLogRepository(DailyLogRepository):
    """Supabase implementation for daily log queries."""

    client: Client

    def list_food_nutrition(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[NutritionData]:
        """Return nutrition_data of food logs in the time range."""
        response = (
            self.client.table("food_logs")
            .select("nutrition_data, logged_at")
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [
            _parse_nutrition(row.get("nutrition_data"))
            for row in response.data or []
        ]

    def list_exercise_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[ExerciseLogRow]:
        """Return exercise logs in the time range."""
        response = (
            self.client.table("exercise_logs")
            .select("exercise_type, duration_minutes, steps, logged_at")
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [
            ExerciseLogRow(
                exercise_type=str(row.get("exercise_type") or "other"),
                duration_minutes=float(row.get("duration_minutes") or 0),
                steps=int(row.get("steps") or 0),
            )
            for row in response.data or []
        ]

    def list_hydration_ml(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[float]:
        """Return hydration habit values in ml for the time range."""
        response = (
            self.client.table("habit_logs")
            .select("value, logged_at")
            .eq("user_id", str(user_id))
            .eq("habit_type", "hydration")
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .execute()
        )
        values = []
        for row in response.data or []:
            # habit values are stored as text
            try:
                values.append(float(row.get("value")))
            except (TypeError, ValueError):
                continue
        return values


def _parse_nutrition(raw: object) -> NutritionData:
    if not isinstance(raw, dict):
        return NutritionData()
    values = {}
    for name in _NUTRIENT_FIELDS:
        amount = raw.get(name)
        values[name] = float(amount) if isinstance(amount, int | float) else 0.0
    return NutritionData(**values)
