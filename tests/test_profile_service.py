"""Tests for profile resolution and the profile service."""

import logging
from dataclasses import replace
from datetime import date
from uuid import uuid4

import pytest

from nutritrack.domain.profile import (
    ActivityLevel,
    Gender,
    HealthGoal,
    MedicalCondition,
    UserGoal,
    UserProfile,
)
from nutritrack.services.profiles import (
    ProfileNotFoundError,
    ProfileService,
    calculate_age,
    resolve_profile,
)
from nutritrack.services.targets import calculate_daily_targets
from tests.conftest import InMemoryProfileRepository


def test_calculate_age_respects_birthday() -> None:
    born = date(1990, 6, 15)

    assert calculate_age(born, date(2026, 6, 14)) == 35
    assert calculate_age(born, date(2026, 6, 15)) == 36
    assert calculate_age(born, date(1980, 1, 1)) == 0


def test_resolve_stored_profile(stored_profile: UserProfile) -> None:
    resolved = resolve_profile(stored_profile, date(2026, 6, 14))

    assert resolved.biometrics.age == 35
    assert resolved.biometrics.gender == Gender.MALE
    assert resolved.biometrics.activity_level == ActivityLevel.LIGHT
    assert resolved.goals.goal == UserGoal.LOSE_WEIGHT
    assert resolved.goals.health_goals == frozenset({HealthGoal.IMPROVE_HYDRATION})
    assert resolved.goals.conditions == frozenset()


def test_resolve_applies_defaults() -> None:
    resolved = resolve_profile(
        UserProfile(weight_kg=70, height_cm=175), date(2026, 1, 1)
    )

    assert resolved.biometrics.age == 30
    assert resolved.biometrics.gender == Gender.PREFER_NOT_TO_SAY
    assert resolved.biometrics.activity_level == ActivityLevel.MODERATE
    assert resolved.goals.goal == UserGoal.MAINTAIN
    assert resolved.goals.health_goals == frozenset()


def test_resolve_drops_unknown_values(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    # configure_logging may have disabled propagation in an earlier test
    monkeypatch.setattr(logging.getLogger("nutritrack"), "propagate", True)
    profile = UserProfile(
        weight_kg=70,
        height_cm=175,
        gender="robot",
        activity_level="extreme",
        goal="get_famous",
        health_goals=["muscle_gain", "learn_piano"],
        medical_conditions=["kidney_disease", "dragon_pox"],
    )
    with caplog.at_level(logging.WARNING, logger="nutritrack"):
        resolved = resolve_profile(profile, date(2026, 1, 1))

    assert resolved.biometrics.gender == Gender.PREFER_NOT_TO_SAY
    assert resolved.biometrics.activity_level == ActivityLevel.MODERATE
    assert resolved.goals.goal == UserGoal.MAINTAIN
    assert resolved.goals.health_goals == frozenset({HealthGoal.MUSCLE_GAIN})
    assert resolved.goals.conditions == frozenset({MedicalCondition.KIDNEY_DISEASE})
    assert "dragon_pox" in caplog.text


def test_get_resolved_raises_for_missing_profile() -> None:
    service = ProfileService(InMemoryProfileRepository())

    with pytest.raises(ProfileNotFoundError):
        service.get_resolved(uuid4(), date(2026, 1, 1))


def test_store_targets_persists_serialised_targets(
    stored_profile: UserProfile,
) -> None:
    repository = InMemoryProfileRepository()
    user_id = uuid4()
    repository.profiles[user_id] = stored_profile
    service = ProfileService(repository)

    resolved = service.get_resolved(user_id, date(2026, 1, 1))
    targets = calculate_daily_targets(resolved.biometrics, resolved.goals)
    service.store_targets(user_id, targets)

    saved = repository.saved_targets[user_id]
    assert saved["calories"] == targets.calories.to_dict()
    assert saved["water"] == targets.water
    assert "iron" in saved


def test_resolve_reads_stored_targets(stored_profile: UserProfile) -> None:
    resolved = resolve_profile(stored_profile, date(2026, 1, 1))
    targets = calculate_daily_targets(resolved.biometrics, resolved.goals)
    saved = replace(stored_profile, daily_targets=targets.to_dict())

    assert resolved.stored_targets is None
    assert resolve_profile(saved, date(2026, 1, 1)).stored_targets == targets


def test_resolve_ignores_malformed_stored_targets(
    stored_profile: UserProfile,
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(logging.getLogger("nutritrack"), "propagate", True)
    saved = replace(
        stored_profile,
        daily_targets={"calories": {"min": None, "max": 2000}, "water": 2000},
    )

    with caplog.at_level(logging.WARNING, logger="nutritrack"):
        resolved = resolve_profile(saved, date(2026, 1, 1))

    assert resolved.stored_targets is None
    assert "malformed stored targets" in caplog.text
