"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

import pytest

from nutritrack.config import Settings
from nutritrack.containers import AppContainer
from nutritrack.domain.energy import ExerciseLogRow
from nutritrack.domain.nutrition import NutritionData
from nutritrack.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    Gender,
    UserProfile,
)
from nutritrack.services.cache import InMemoryCache
from nutritrack.services.dashboard import DailyLogRepository, DashboardService
from nutritrack.services.profiles import ProfileRepository, ProfileService
from nutritrack.services.targets import TargetsService


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)
    saved_targets: dict[UUID, dict[str, object]] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def save_daily_targets(self, user_id: UUID, targets: dict[str, object]) -> None:
        self.saved_targets[user_id] = targets


@dataclass
class InMemoryDailyLogRepository(DailyLogRepository):
    """In-memory daily log repository that ignores time ranges."""

    food: list[NutritionData] = field(default_factory=list)
    exercises: list[ExerciseLogRow] = field(default_factory=list)
    hydration: list[float] = field(default_factory=list)
    ranges: list[tuple[datetime, datetime]] = field(default_factory=list)

    def list_food_nutrition(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[NutritionData]:
        self.ranges.append((start, end))
        return list(self.food)

    def list_exercise_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[ExerciseLogRow]:
        return list(self.exercises)

    def list_hydration_ml(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[float]:
        return list(self.hydration)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def female_profile() -> BiometricProfile:
    return BiometricProfile(
        weight_kg=65,
        height_cm=170,
        age=30,
        gender=Gender.FEMALE,
        activity_level=ActivityLevel.MODERATE,
    )


@pytest.fixture
def stored_profile() -> UserProfile:
    return UserProfile(
        weight_kg=70,
        height_cm=175,
        gender="male",
        date_of_birth=date(1990, 6, 15),
        activity_level="light",
        goal="lose_weight",
        health_goals=["improve_hydration"],
        medical_conditions=["none"],
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def log_repository() -> InMemoryDailyLogRepository:
    return InMemoryDailyLogRepository()


@pytest.fixture
def container(
    settings: Settings,
    profile_repository: InMemoryProfileRepository,
    log_repository: InMemoryDailyLogRepository,
) -> AppContainer:
    profile_service = ProfileService(profile_repository)
    targets_service = TargetsService(cache=InMemoryCache())
    dashboard_service = DashboardService(
        profile_service=profile_service,
        targets_service=targets_service,
        log_repository=log_repository,
    )
    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        targets_service=targets_service,
        dashboard_service=dashboard_service,
    )
