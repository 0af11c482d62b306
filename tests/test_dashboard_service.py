"""Tests for the dashboard service."""

from dataclasses import replace
from datetime import UTC, date, datetime, timedelta
from uuid import uuid4
from zoneinfo import ZoneInfo

import pytest

from nutritrack.containers import AppContainer
from nutritrack.domain.energy import ExerciseEntry, ExerciseLogRow
from nutritrack.domain.nutrition import DailyTargets, NutrientRange, NutritionData
from nutritrack.domain.profile import UserProfile
from nutritrack.domain.progress import ProgressStatus
from nutritrack.services.dashboard import sum_nutrition
from nutritrack.services.energy import calculate_energy_balance
from nutritrack.services.profiles import ProfileNotFoundError, resolve_profile
from tests.conftest import InMemoryDailyLogRepository, InMemoryProfileRepository


def test_sum_nutrition() -> None:
    assert sum_nutrition([]) == NutritionData()
    total = sum_nutrition(
        [
            NutritionData(calories=300, protein=20, carbs=30, fat=10, sodium=400),
            NutritionData(calories=200, protein=5, carbs=25, fat=8, fiber=4),
        ]
    )
    assert total == NutritionData(
        calories=500, protein=25, carbs=55, fat=18, fiber=4, sodium=400
    )


def test_get_today_builds_summary(
    container: AppContainer,
    profile_repository: InMemoryProfileRepository,
    log_repository: InMemoryDailyLogRepository,
    stored_profile: UserProfile,
) -> None:
    user_id = uuid4()
    profile_repository.profiles[user_id] = stored_profile
    log_repository.food = [
        NutritionData(calories=650, protein=40, carbs=70, fat=20, fiber=8),
        NutritionData(calories=550, protein=30, carbs=60, fat=15, sodium=900),
    ]
    log_repository.exercises = [
        ExerciseLogRow(exercise_type="walking", duration_minutes=30, steps=2000),
        ExerciseLogRow(exercise_type="yoga", duration_minutes=20),
    ]
    log_repository.hydration = [250, 500]

    summary = container.dashboard_service.get_today(user_id, "UTC")

    assert summary.day == datetime.now(tz=UTC).date()
    assert summary.consumed.calories == 1200
    assert summary.steps == 2000
    assert summary.water_ml == 750
    resolved = resolve_profile(stored_profile, summary.day)
    expected = calculate_energy_balance(
        resolved.biometrics,
        calories_consumed=1200,
        targets=summary.targets,
        exercises=[
            ExerciseEntry(exercise_type="walking", duration_minutes=30),
            ExerciseEntry(exercise_type="yoga", duration_minutes=20),
        ],
        steps=2000,
    )
    assert summary.energy_balance == expected
    assert summary.progress["calories"].status == ProgressStatus.UNDER
    assert set(summary.progress) == {
        "calories",
        "protein",
        "carbs",
        "fat",
        "fiber",
        "sodium",
    }
    assert summary.macro_split.protein + summary.macro_split.carbs > 0
    assert summary.balance_description


def test_get_today_uses_local_day_window(
    container: AppContainer,
    profile_repository: InMemoryProfileRepository,
    log_repository: InMemoryDailyLogRepository,
    stored_profile: UserProfile,
) -> None:
    user_id = uuid4()
    profile_repository.profiles[user_id] = stored_profile

    container.dashboard_service.get_today(user_id, "Asia/Tokyo")

    start, end = log_repository.ranges[-1]
    assert start.tzinfo == UTC
    assert end - start == timedelta(days=1)
    local_start = start.astimezone(ZoneInfo("Asia/Tokyo"))
    assert (local_start.hour, local_start.minute) == (0, 0)


def test_get_day_with_empty_logs(
    container: AppContainer,
    profile_repository: InMemoryProfileRepository,
    stored_profile: UserProfile,
) -> None:
    user_id = uuid4()
    profile_repository.profiles[user_id] = stored_profile
    start = datetime(2026, 3, 1, tzinfo=UTC)

    summary = container.dashboard_service.get_day(
        user_id, start, start + timedelta(days=1)
    )

    assert summary.day == date(2026, 3, 1)
    assert summary.consumed == NutritionData()
    assert summary.energy_balance.intake == 0
    assert summary.energy_balance.activity_burn == 0
    assert summary.macro_split.fat == 0


def test_get_today_unknown_user(container: AppContainer) -> None:
    with pytest.raises(ProfileNotFoundError):
        container.dashboard_service.get_today(uuid4(), "UTC")


def test_get_day_prefers_stored_targets(
    container: AppContainer,
    profile_repository: InMemoryProfileRepository,
    stored_profile: UserProfile,
) -> None:
    user_id = uuid4()
    band = NutrientRange(min=10, max=20)
    stored = DailyTargets(
        calories=NutrientRange(min=1500, max=1700),
        protein=band,
        carbs=band,
        fat=band,
        fiber=band,
        sodium=band,
        water=1800,
    )
    profile_repository.profiles[user_id] = replace(
        stored_profile, daily_targets=stored.to_dict()
    )
    start = datetime(2026, 3, 1, tzinfo=UTC)

    summary = container.dashboard_service.get_day(
        user_id, start, start + timedelta(days=1)
    )

    assert summary.targets == stored
    assert summary.energy_balance.remaining_quota == 1600
