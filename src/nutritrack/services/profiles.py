"""Profile resolution and persistence."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Protocol, TypeVar
from uuid import UUID

from nutritrack.domain.nutrition import DailyTargets
from nutritrack.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    Gender,
    GoalContext,
    HealthGoal,
    MedicalCondition,
    UserGoal,
    UserProfile,
)

DEFAULT_AGE = 30

_logger = logging.getLogger(__name__)

_E = TypeVar("_E", bound=StrEnum)


class ProfileNotFoundError(LookupError):
    """Raised when no profile exists for a user."""

    def __init__(self, user_id: UUID) -> None:
        super().__init__(f"Profile not found: {user_id}")
        self.user_id = user_id


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile for a user, if present."""

    def save_daily_targets(self, user_id: UUID, targets: dict[str, object]) -> None:
        """Persist computed daily targets for a user."""


@dataclass(frozen=True)
class ResolvedProfile:
    """Profile with every default applied."""

    biometrics: BiometricProfile
    goals: GoalContext
    stored_targets: DailyTargets | None = None


def calculate_age(date_of_birth: date, today: date) -> int:
    """Return completed years between date_of_birth and today."""
    years = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return max(years, 0)


def resolve_profile(profile: UserProfile, today: date) -> ResolvedProfile:
    """Apply defaults so the calculators receive fully specified inputs.

    Missing age falls back to 30, gender to prefer_not_to_say, activity to
    moderate and goal to maintain. Unrecognised health goals and conditions
    are dropped; the ``none`` condition is removed as it carries no effect.
    Stored targets that cannot be parsed are ignored.
    """
    age = (
        calculate_age(profile.date_of_birth, today)
        if profile.date_of_birth
        else DEFAULT_AGE
    )
    biometrics = BiometricProfile(
        weight_kg=profile.weight_kg,
        height_cm=profile.height_cm,
        age=age,
        gender=_parse_enum(Gender, profile.gender, Gender.PREFER_NOT_TO_SAY),
        activity_level=_parse_enum(
            ActivityLevel, profile.activity_level, ActivityLevel.MODERATE
        ),
    )
    conditions = _parse_enum_set(MedicalCondition, profile.medical_conditions)
    goals = GoalContext(
        goal=_parse_enum(UserGoal, profile.goal, UserGoal.MAINTAIN),
        health_goals=_parse_enum_set(HealthGoal, profile.health_goals),
        conditions=conditions - {MedicalCondition.NONE},
    )
    return ResolvedProfile(
        biometrics=biometrics,
        goals=goals,
        stored_targets=_parse_targets(profile.daily_targets),
    )


def _parse_targets(raw: dict[str, object] | None) -> DailyTargets | None:
    if raw is None:
        return None
    try:
        return DailyTargets.from_dict(raw)
    except (TypeError, ValueError):
        _logger.warning("Ignoring malformed stored targets: %r", raw)
        return None


def _parse_enum(enum_cls: type[_E], raw: str | None, default: _E) -> _E:
    if raw is None:
        return default
    try:
        return enum_cls(raw)
    except ValueError:
        _logger.warning(
            "Unknown %s value %r, using %s", enum_cls.__name__, raw, default
        )
        return default


def _parse_enum_set(enum_cls: type[_E], raw: Iterable[str]) -> frozenset[_E]:
    values: set[_E] = set()
    for item in raw:
        try:
            values.add(enum_cls(item))
        except ValueError:
            _logger.warning("Ignoring unknown %s value %r", enum_cls.__name__, item)
    return frozenset(values)


@dataclass
class ProfileService:
    """Application service for reading profiles and storing targets."""

    repository: ProfileRepository

    def get_resolved(self, user_id: UUID, today: date) -> ResolvedProfile:
        """Return the resolved profile or raise ProfileNotFoundError."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return resolve_profile(profile, today)

    def store_targets(self, user_id: UUID, targets: DailyTargets) -> None:
        """Persist targets computed at onboarding or profile update."""
        self.repository.save_daily_targets(user_id, targets.to_dict())
