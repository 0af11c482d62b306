"""Derived metric models consumed by the dashboard."""

from dataclasses import dataclass
from enum import StrEnum


class ProgressStatus(StrEnum):
    """Position of a value relative to its target band."""

    UNDER = "under"
    OPTIMAL = "optimal"
    OVER = "over"


class BmiCategory(StrEnum):
    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


@dataclass(frozen=True)
class Progress:
    """Progress of a current value against a target band."""

    percentage: int
    status: ProgressStatus


@dataclass(frozen=True)
class BmiResult:
    value: float
    category: BmiCategory


@dataclass(frozen=True)
class WeightRange:
    """Healthy weight band in kilograms."""

    min: int
    max: int
