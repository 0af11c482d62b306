"""Pydantic models for calculation requests."""

from pydantic import BaseModel, Field, model_validator

from nutritrack.domain.energy import ExerciseEntry
from nutritrack.domain.nutrition import DailyTargets, NutrientRange, NutritionData
from nutritrack.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    Gender,
    GoalContext,
    HealthGoal,
    MedicalCondition,
    UserGoal,
)
from nutritrack.services.energy import BmrFormula
from nutritrack.services.profiles import DEFAULT_AGE


class BodyMetrics(BaseModel):
    """Body metrics shared by BMR-based requests."""

    weight_kg: float = Field(gt=0)
    height_cm: float = Field(gt=0)
    age: int = Field(default=DEFAULT_AGE, ge=0)
    gender: Gender = Gender.PREFER_NOT_TO_SAY


class ProfilePayload(BodyMetrics):
    """Body metrics plus activity level."""

    activity_level: ActivityLevel = ActivityLevel.MODERATE

    def to_domain(self) -> BiometricProfile:
        return BiometricProfile(
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            age=self.age,
            gender=self.gender,
            activity_level=self.activity_level,
        )


class TdeeRequest(BaseModel):
    bmr: float = Field(ge=0)
    activity_level: ActivityLevel = ActivityLevel.MODERATE


class TargetsRequest(ProfilePayload):
    """Profile and goal context for target calculation."""

    goal: UserGoal = UserGoal.MAINTAIN
    health_goals: list[HealthGoal] = Field(default_factory=list)
    conditions: list[MedicalCondition] = Field(default_factory=list)

    def to_goals(self) -> GoalContext:
        return GoalContext(
            goal=self.goal,
            health_goals=frozenset(self.health_goals),
            conditions=frozenset(self.conditions) - {MedicalCondition.NONE},
        )


class RangePayload(BaseModel):
    """Inclusive nutrient range."""

    min: float = Field(ge=0)
    max: float = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "RangePayload":
        if self.min > self.max:
            raise ValueError("min must not exceed max")
        return self

    def to_domain(self) -> NutrientRange:
        return NutrientRange(min=self.min, max=self.max)


class ExercisePayload(BaseModel):
    """Logged exercise; unknown types use the default MET value."""

    exercise_type: str
    duration_minutes: float = Field(ge=0)

    def to_domain(self) -> ExerciseEntry:
        return ExerciseEntry(
            exercise_type=self.exercise_type, duration_minutes=self.duration_minutes
        )


class EnergyBalanceRequest(ProfilePayload):
    """Profile with today's intake, exercise and steps."""

    calories_consumed: float = Field(ge=0)
    exercises: list[ExercisePayload] = Field(default_factory=list)
    steps: int = Field(default=0, ge=0)
    calorie_target: RangePayload

    def to_targets(self) -> DailyTargets:
        # Only the calorie band feeds the balance; other fields stay empty.
        empty = NutrientRange(min=0, max=0)
        return DailyTargets(
            calories=self.calorie_target.to_domain(),
            protein=empty,
            carbs=empty,
            fat=empty,
            fiber=empty,
            sodium=empty,
            water=0.0,
        )


class NutritionPayload(BaseModel):
    calories: float = Field(default=0, ge=0)
    protein: float = Field(default=0, ge=0)
    carbs: float = Field(default=0, ge=0)
    fat: float = Field(default=0, ge=0)
    fiber: float = Field(default=0, ge=0)
    sodium: float = Field(default=0, ge=0)

    def to_domain(self) -> NutritionData:
        return NutritionData(**self.model_dump())


class ProgressRequest(BaseModel):
    current: float
    target: RangePayload


class BmiRequest(BaseModel):
    weight_kg: float = Field(gt=0)
    height_cm: float = Field(gt=0)


class IdealWeightRequest(BaseModel):
    height_cm: float = Field(gt=0)


class BmrRequest(BodyMetrics):
    formula: BmrFormula = BmrFormula.MIFFLIN_ST_JEOR
