"""Domain models for exercise and energy balance."""

from dataclasses import dataclass
from enum import StrEnum


class ExerciseType(StrEnum):
    """Exercise types that can be logged."""

    WALKING = "walking"
    RUNNING = "running"
    CYCLING = "cycling"
    SWIMMING = "swimming"
    STRENGTH_TRAINING = "strength_training"
    YOGA = "yoga"
    HIIT = "hiit"
    PILATES = "pilates"
    DANCING = "dancing"
    HIKING = "hiking"
    TEAM_SPORTS = "team_sports"
    MARTIAL_ARTS = "martial_arts"
    CLIMBING = "climbing"
    ROWING = "rowing"
    ELLIPTICAL = "elliptical"
    STAIR_CLIMBING = "stair_climbing"
    STRETCHING = "stretching"
    OTHER = "other"


@dataclass(frozen=True)
class ExerciseEntry:
    """A single logged exercise session."""

    exercise_type: ExerciseType | str
    duration_minutes: float


@dataclass(frozen=True)
class ExerciseLogRow:
    """Stored exercise log with an optional step count."""

    exercise_type: str
    duration_minutes: float
    steps: int = 0


@dataclass(frozen=True)
class EnergyBalance:
    """Same-day energy balance, rounded for display."""

    bmr: int
    tdee: int
    intake: int
    activity_burn: int
    total_burn: int
    net_balance: int
    remaining_quota: int
