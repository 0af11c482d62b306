"""Domain models for user biometrics and goals."""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum


class Gender(StrEnum):
    """Gender values accepted by the profile forms."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"


class ActivityLevel(StrEnum):
    """Qualitative activity level used to scale BMR."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class UserGoal(StrEnum):
    """Primary goal driving the calorie offset."""

    LOSE_WEIGHT = "lose_weight"
    GAIN_WEIGHT = "gain_weight"
    MAINTAIN = "maintain"
    BUILD_MUSCLE = "build_muscle"


class HealthGoal(StrEnum):
    """Secondary health goals selected during onboarding."""

    HEALTHY_BALANCED_EATING = "healthy_balanced_eating"
    WEIGHT_LOSS = "weight_loss"
    WEIGHT_GAIN = "weight_gain"
    HEALTHY_BOWELS = "healthy_bowels"
    MUSCLE_GAIN = "muscle_gain"
    IMPROVE_HYDRATION = "improve_hydration"
    BLOOD_SUGAR_CONTROL = "blood_sugar_control"
    FIX_MICROS = "fix_micros"
    IMPROVE_SLEEP = "improve_sleep"
    IMPROVE_BREATHING = "improve_breathing"
    REDUCE_ALCOHOL = "reduce_alcohol"
    REDUCE_SMOKING = "reduce_smoking"
    ACHIEVE_10K_STEPS = "achieve_10k_steps"
    IMPROVE_MENTAL_HEALTH = "improve_mental_health"


class MedicalCondition(StrEnum):
    """Medical conditions that may adjust nutrient targets."""

    NONE = "none"
    DIABETES = "diabetes"
    T1DM = "t1dm"
    T2DM = "t2dm"
    HYPERTENSION = "hypertension"
    HEART_DISEASE = "heart_disease"
    CORONARY_HEART_DISEASE = "coronary_heart_disease"
    HIGH_CHOLESTEROL = "high_cholesterol"
    KIDNEY_DISEASE = "kidney_disease"
    CELIAC_DISEASE = "celiac_disease"
    LACTOSE_INTOLERANCE = "lactose_intolerance"
    COPD = "copd"
    ASTHMA = "asthma"
    CANCER = "cancer"
    PCOS = "pcos"
    THYROID_DISORDERS = "thyroid_disorders"
    IBS = "ibs"
    CROHNS_DISEASE = "crohns_disease"
    ULCERATIVE_COLITIS = "ulcerative_colitis"


@dataclass(frozen=True)
class BiometricProfile:
    """Fully resolved body metrics used by the calculators."""

    weight_kg: float
    height_cm: float
    age: int = 30
    gender: Gender = Gender.PREFER_NOT_TO_SAY
    activity_level: ActivityLevel = ActivityLevel.MODERATE


@dataclass(frozen=True)
class GoalContext:
    """Goal, health goals and conditions for target calculation."""

    goal: UserGoal = UserGoal.MAINTAIN
    health_goals: frozenset[HealthGoal] = frozenset()
    conditions: frozenset[MedicalCondition] = frozenset()


@dataclass(frozen=True)
class UserProfile:
    """Profile row as stored, before defaults are applied."""

    weight_kg: float
    height_cm: float
    gender: str | None = None
    date_of_birth: date | None = None
    activity_level: str | None = None
    goal: str | None = None
    health_goals: list[str] = field(default_factory=list)
    medical_conditions: list[str] = field(default_factory=list)
    daily_targets: dict[str, object] | None = None
