"""Today's dashboard: intake, activity and targets in one summary."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from nutritrack.domain.energy import EnergyBalance, ExerciseEntry, ExerciseLogRow
from nutritrack.domain.nutrition import DailyTargets, MacroSplit, NutritionData
from nutritrack.domain.progress import Progress
from nutritrack.services.energy import BmrFormula, calculate_energy_balance
from nutritrack.services.profiles import ProfileService
from nutritrack.services.progress import (
    calculate_macro_percentages,
    calculate_progress,
    describe_calorie_balance,
)
from nutritrack.services.targets import TargetsService


class DailyLogRepository(Protocol):
    """Read interface for the day's logged food, exercise and habits."""

    def list_food_nutrition(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[NutritionData]:
        """Return nutrition of food logged within a time range."""

    def list_exercise_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[ExerciseLogRow]:
        """Return exercise sessions logged within a time range."""

    def list_hydration_ml(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[float]:
        """Return hydration amounts in ml logged within a time range."""


@dataclass(frozen=True)
class DailySummary:
    """Everything the dashboard renders for one day."""

    day: date
    consumed: NutritionData
    targets: DailyTargets
    energy_balance: EnergyBalance
    macro_split: MacroSplit
    progress: dict[str, Progress]
    steps: int
    water_ml: float
    balance_description: str


def sum_nutrition(items: Iterable[NutritionData]) -> NutritionData:
    """Sum nutrients field by field; no items gives all zeros."""
    return sum(items, NutritionData())


@dataclass
class DashboardService:
    """Builds the daily summary from profile, targets and logs.

    Targets saved on the profile take precedence; without them the targets
    are computed from the profile.
    """

    profile_service: ProfileService
    targets_service: TargetsService
    log_repository: DailyLogRepository
    formula: BmrFormula = BmrFormula.MIFFLIN_ST_JEOR

    def get_today(self, user_id: UUID, timezone_name: str) -> DailySummary:
        """Return today's summary in the user's timezone."""
        tz = ZoneInfo(timezone_name)
        now = datetime.now(tz=tz)
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        end = start + timedelta(days=1)
        return self.get_day(user_id, start, end)

    def get_day(self, user_id: UUID, start: datetime, end: datetime) -> DailySummary:
        """Return the summary for an explicit local day window."""
        resolved = self.profile_service.get_resolved(user_id, start.date())
        utc_start, utc_end = start.astimezone(UTC), end.astimezone(UTC)

        consumed = sum_nutrition(
            self.log_repository.list_food_nutrition(user_id, utc_start, utc_end)
        )
        exercise_logs = self.log_repository.list_exercise_logs(
            user_id, utc_start, utc_end
        )
        water_ml = sum(
            self.log_repository.list_hydration_ml(user_id, utc_start, utc_end), 0.0
        )
        steps = sum(row.steps for row in exercise_logs)
        exercises = [
            ExerciseEntry(
                exercise_type=row.exercise_type,
                duration_minutes=row.duration_minutes,
            )
            for row in exercise_logs
        ]

        targets = resolved.stored_targets or self.targets_service.get_targets(
            resolved.biometrics, resolved.goals
        )
        balance = calculate_energy_balance(
            resolved.biometrics,
            calories_consumed=consumed.calories,
            targets=targets,
            exercises=exercises,
            steps=steps,
            formula=self.formula,
        )
        progress = {
            name: calculate_progress(getattr(consumed, name), target)
            for name, target in targets.ranges().items()
            if hasattr(consumed, name)
        }
        return DailySummary(
            day=start.date(),
            consumed=consumed,
            targets=targets,
            energy_balance=balance,
            macro_split=calculate_macro_percentages(consumed),
            progress=progress,
            steps=steps,
            water_ml=water_ml,
            balance_description=describe_calorie_balance(
                balance.net_balance, resolved.goals.goal
            ),
        )
