"""Daily nutrient target calculation."""

import logging
from dataclasses import dataclass
from enum import StrEnum

from nutritrack.domain.nutrition import DailyTargets, NutrientRange
from nutritrack.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    Gender,
    GoalContext,
    HealthGoal,
    MedicalCondition,
    UserGoal,
)
from nutritrack.rounding import round_int
from nutritrack.services.cache import Cache
from nutritrack.services.energy import BmrFormula, calculate_tdee, estimate_bmr

_logger = logging.getLogger(__name__)

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9
CALCIUM_AGE_THRESHOLD = 50


class TargetAdjustment(StrEnum):
    """Modifiers that conditions and health goals apply to targets."""

    RESTRICT_SODIUM = "restrict_sodium"
    RENAL_PROTEIN = "renal_protein"
    LOWER_CARBS = "lower_carbs"
    RAISE_PROTEIN = "raise_protein"
    RAISE_FIBER = "raise_fiber"
    EXTRA_HYDRATION = "extra_hydration"


# Every condition is listed so that a new member fails the coverage test
# instead of silently having no effect.
CONDITION_ADJUSTMENTS: dict[MedicalCondition, frozenset[TargetAdjustment]] = {
    MedicalCondition.NONE: frozenset(),
    MedicalCondition.DIABETES: frozenset({TargetAdjustment.LOWER_CARBS}),
    MedicalCondition.T1DM: frozenset({TargetAdjustment.LOWER_CARBS}),
    MedicalCondition.T2DM: frozenset({TargetAdjustment.LOWER_CARBS}),
    MedicalCondition.HYPERTENSION: frozenset({TargetAdjustment.RESTRICT_SODIUM}),
    MedicalCondition.HEART_DISEASE: frozenset({TargetAdjustment.RESTRICT_SODIUM}),
    MedicalCondition.CORONARY_HEART_DISEASE: frozenset(
        {TargetAdjustment.RESTRICT_SODIUM}
    ),
    MedicalCondition.HIGH_CHOLESTEROL: frozenset(),
    MedicalCondition.KIDNEY_DISEASE: frozenset(
        {TargetAdjustment.RESTRICT_SODIUM, TargetAdjustment.RENAL_PROTEIN}
    ),
    MedicalCondition.CELIAC_DISEASE: frozenset(),
    MedicalCondition.LACTOSE_INTOLERANCE: frozenset(),
    MedicalCondition.COPD: frozenset(),
    MedicalCondition.ASTHMA: frozenset(),
    MedicalCondition.CANCER: frozenset(),
    MedicalCondition.PCOS: frozenset(),
    MedicalCondition.THYROID_DISORDERS: frozenset(),
    MedicalCondition.IBS: frozenset(),
    MedicalCondition.CROHNS_DISEASE: frozenset(),
    MedicalCondition.ULCERATIVE_COLITIS: frozenset(),
}

HEALTH_GOAL_ADJUSTMENTS: dict[HealthGoal, frozenset[TargetAdjustment]] = {
    HealthGoal.HEALTHY_BALANCED_EATING: frozenset(),
    HealthGoal.WEIGHT_LOSS: frozenset(),
    HealthGoal.WEIGHT_GAIN: frozenset(),
    HealthGoal.HEALTHY_BOWELS: frozenset({TargetAdjustment.RAISE_FIBER}),
    HealthGoal.MUSCLE_GAIN: frozenset({TargetAdjustment.RAISE_PROTEIN}),
    HealthGoal.IMPROVE_HYDRATION: frozenset({TargetAdjustment.EXTRA_HYDRATION}),
    HealthGoal.BLOOD_SUGAR_CONTROL: frozenset({TargetAdjustment.RAISE_FIBER}),
    HealthGoal.FIX_MICROS: frozenset(),
    HealthGoal.IMPROVE_SLEEP: frozenset(),
    HealthGoal.IMPROVE_BREATHING: frozenset(),
    HealthGoal.REDUCE_ALCOHOL: frozenset(),
    HealthGoal.REDUCE_SMOKING: frozenset(),
    HealthGoal.ACHIEVE_10K_STEPS: frozenset(),
    HealthGoal.IMPROVE_MENTAL_HEALTH: frozenset(),
}

# kcal offsets from TDEE as (low, high).
CALORIE_OFFSETS: dict[UserGoal, tuple[float, float]] = {
    UserGoal.LOSE_WEIGHT: (-750, -500),
    UserGoal.GAIN_WEIGHT: (300, 500),
    UserGoal.BUILD_MUSCLE: (300, 500),
    UserGoal.MAINTAIN: (-200, 200),
}

# Grams of protein per kg of body weight.
PROTEIN_BASELINE = (1.6, 2.2)
PROTEIN_MUSCLE = (1.8, 2.4)
PROTEIN_RENAL = (0.6, 0.8)

# Share of average target calories.
CARB_SHARE_BASELINE = (0.40, 0.50)
CARB_SHARE_LOWERED = (0.35, 0.45)
FAT_SHARE = (0.20, 0.30)

FIBER_BASELINE = (25, 35)
FIBER_RAISED = (30, 40)
SODIUM_BASELINE = (1500, 2300)
SODIUM_RESTRICTED = (1000, 1500)

WATER_ML_PER_KG = 35
WATER_ML_PER_KG_ACTIVE = 40
WATER_HYDRATION_BONUS_ML_PER_KG = 5

IRON_FEMALE = (18, 27)
IRON_DEFAULT = (8, 11)
CALCIUM_OVER_50 = (1200, 1500)
CALCIUM_DEFAULT = (1000, 1200)


def collect_adjustments(goals: GoalContext) -> frozenset[TargetAdjustment]:
    """Return the union of adjustments implied by goals and conditions."""
    adjustments: set[TargetAdjustment] = set()
    for condition in goals.conditions:
        adjustments |= CONDITION_ADJUSTMENTS[condition]
    for health_goal in goals.health_goals:
        adjustments |= HEALTH_GOAL_ADJUSTMENTS[health_goal]
    if goals.goal == UserGoal.BUILD_MUSCLE:
        adjustments.add(TargetAdjustment.RAISE_PROTEIN)
    return frozenset(adjustments)


def calculate_daily_targets(
    profile: BiometricProfile,
    goals: GoalContext,
    formula: BmrFormula = BmrFormula.MIFFLIN_ST_JEOR,
) -> DailyTargets:
    """Derive calorie, macro and micronutrient targets for a profile.

    Condition overrides run in a fixed order: sodium restriction first, then
    the renal protein cap (which wins over any muscle-gain increase), then
    the lower carbohydrate share for diabetes.
    """
    bmr = estimate_bmr(profile, formula)
    tdee = calculate_tdee(bmr, profile.activity_level)
    adjustments = collect_adjustments(goals)

    low_offset, high_offset = CALORIE_OFFSETS.get(
        goals.goal, CALORIE_OFFSETS[UserGoal.MAINTAIN]
    )
    calories = (tdee + low_offset, tdee + high_offset)
    avg_calories = (calories[0] + calories[1]) / 2

    protein_per_kg = PROTEIN_BASELINE
    if TargetAdjustment.RAISE_PROTEIN in adjustments:
        protein_per_kg = PROTEIN_MUSCLE
    carb_share = CARB_SHARE_BASELINE

    sodium = SODIUM_BASELINE
    if TargetAdjustment.RESTRICT_SODIUM in adjustments:
        sodium = SODIUM_RESTRICTED
    if TargetAdjustment.RENAL_PROTEIN in adjustments:
        protein_per_kg = PROTEIN_RENAL
    if TargetAdjustment.LOWER_CARBS in adjustments:
        carb_share = CARB_SHARE_LOWERED

    fiber = FIBER_BASELINE
    if TargetAdjustment.RAISE_FIBER in adjustments:
        fiber = FIBER_RAISED

    iron = IRON_FEMALE if profile.gender == Gender.FEMALE else IRON_DEFAULT
    calcium = (
        CALCIUM_OVER_50 if profile.age > CALCIUM_AGE_THRESHOLD else CALCIUM_DEFAULT
    )

    return DailyTargets(
        calories=_range(*calories),
        protein=_range(
            profile.weight_kg * protein_per_kg[0],
            profile.weight_kg * protein_per_kg[1],
        ),
        carbs=_range(
            avg_calories * carb_share[0] / KCAL_PER_G_CARBS,
            avg_calories * carb_share[1] / KCAL_PER_G_CARBS,
        ),
        fat=_range(
            avg_calories * FAT_SHARE[0] / KCAL_PER_G_FAT,
            avg_calories * FAT_SHARE[1] / KCAL_PER_G_FAT,
        ),
        fiber=_range(*fiber),
        sodium=_range(*sodium),
        water=calculate_water_target(profile, adjustments),
        iron=_range(*iron),
        calcium=_range(*calcium),
    )


def calculate_water_target(
    profile: BiometricProfile, adjustments: frozenset[TargetAdjustment]
) -> float:
    """Return the daily water target in ml."""
    ml_per_kg = WATER_ML_PER_KG
    if profile.activity_level in {ActivityLevel.ACTIVE, ActivityLevel.VERY_ACTIVE}:
        ml_per_kg = WATER_ML_PER_KG_ACTIVE
    if TargetAdjustment.EXTRA_HYDRATION in adjustments:
        ml_per_kg += WATER_HYDRATION_BONUS_ML_PER_KG
    return max(profile.weight_kg * ml_per_kg, 0.0)


def _range(low: float, high: float) -> NutrientRange:
    return NutrientRange(min=max(round_int(low), 0), max=max(round_int(high), 0))


@dataclass
class TargetsService:
    """Caches daily targets per profile state."""

    cache: Cache
    formula: BmrFormula = BmrFormula.MIFFLIN_ST_JEOR
    ttl_seconds: int = 86400
    debug: bool = False

    def get_targets(
        self, profile: BiometricProfile, goals: GoalContext
    ) -> DailyTargets:
        """Return targets for the profile, computing them on a cache miss."""
        cache_key = targets_cache_key(profile, goals, self.formula)
        cached = self.cache.get(cache_key)
        if isinstance(cached, DailyTargets):
            return cached
        return self.refresh_targets(profile, goals)

    def refresh_targets(
        self, profile: BiometricProfile, goals: GoalContext
    ) -> DailyTargets:
        """Recompute targets and replace any cached value."""
        targets = calculate_daily_targets(profile, goals, self.formula)
        cache_key = targets_cache_key(profile, goals, self.formula)
        self.cache.set(cache_key, targets, ttl_seconds=self.ttl_seconds)
        if self.debug:
            _logger.info(
                "Targets computed: key=%s calories=%s-%s",
                cache_key,
                targets.calories.min,
                targets.calories.max,
            )
        return targets


def targets_cache_key(
    profile: BiometricProfile, goals: GoalContext, formula: BmrFormula
) -> str:
    """Build a cache key that is stable for equal inputs."""
    health_goals = ",".join(sorted(goals.health_goals))
    conditions = ",".join(sorted(goals.conditions))
    return (
        f"targets:{formula}:{profile.weight_kg}:{profile.height_cm}:{profile.age}:"
        f"{profile.gender}:{profile.activity_level}:{goals.goal}:"
        f"{health_goals}:{conditions}"
    )
