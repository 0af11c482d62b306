"""BMR, TDEE and daily energy balance calculations."""

from collections.abc import Iterable
from enum import StrEnum

from nutritrack.domain.energy import EnergyBalance, ExerciseEntry, ExerciseType
from nutritrack.domain.nutrition import DailyTargets
from nutritrack.domain.profile import ActivityLevel, BiometricProfile, Gender
from nutritrack.rounding import round_int

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = ACTIVITY_MULTIPLIERS[ActivityLevel.MODERATE]

# Metabolic equivalents per exercise type.
EXERCISE_MET_VALUES: dict[ExerciseType, float] = {
    ExerciseType.WALKING: 3.5,
    ExerciseType.RUNNING: 9.8,
    ExerciseType.CYCLING: 7.5,
    ExerciseType.SWIMMING: 8.0,
    ExerciseType.STRENGTH_TRAINING: 6.0,
    ExerciseType.YOGA: 3.0,
    ExerciseType.HIIT: 10.0,
    ExerciseType.PILATES: 3.5,
    ExerciseType.DANCING: 5.5,
    ExerciseType.HIKING: 6.0,
    ExerciseType.TEAM_SPORTS: 7.0,
    ExerciseType.MARTIAL_ARTS: 7.5,
    ExerciseType.CLIMBING: 8.0,
    ExerciseType.ROWING: 7.0,
    ExerciseType.ELLIPTICAL: 5.0,
    ExerciseType.STAIR_CLIMBING: 8.0,
    ExerciseType.STRETCHING: 2.5,
    ExerciseType.OTHER: 4.0,
}
DEFAULT_MET_VALUE = 4.0

STEP_CALORIES = 0.04
STEP_REFERENCE_WEIGHT_KG = 70.0


class BmrFormula(StrEnum):
    """Supported BMR equations."""

    MIFFLIN_ST_JEOR = "mifflin_st_jeor"
    HARRIS_BENEDICT = "harris_benedict"


def calculate_bmr(
    weight_kg: float, height_cm: float, age: float, gender: Gender | str | None
) -> float:
    """Return BMR in kcal/day using the Mifflin-St Jeor equation.

    Genders other than male and female use the average of the two sex
    offsets (-78).
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == Gender.MALE:
        return base + 5
    if gender == Gender.FEMALE:
        return base - 161
    return base - 78


def calculate_bmr_harris_benedict(
    weight_kg: float, height_cm: float, age: float, gender: Gender | str | None
) -> float:
    """Return BMR in kcal/day using the revised Harris-Benedict equation."""
    male = 88.362 + 13.397 * weight_kg + 4.799 * height_cm - 5.677 * age
    female = 447.593 + 9.247 * weight_kg + 3.098 * height_cm - 4.330 * age
    if gender == Gender.MALE:
        return male
    if gender == Gender.FEMALE:
        return female
    return (male + female) / 2


def estimate_bmr(
    profile: BiometricProfile, formula: BmrFormula = BmrFormula.MIFFLIN_ST_JEOR
) -> float:
    """Return BMR for a resolved profile with the selected formula."""
    if formula == BmrFormula.HARRIS_BENEDICT:
        return calculate_bmr_harris_benedict(
            profile.weight_kg, profile.height_cm, profile.age, profile.gender
        )
    return calculate_bmr(
        profile.weight_kg, profile.height_cm, profile.age, profile.gender
    )


def get_activity_multiplier(activity_level: ActivityLevel | str | None) -> float:
    """Return the TDEE multiplier, falling back to moderate activity."""
    try:
        level = ActivityLevel(activity_level)
    except ValueError:
        return DEFAULT_ACTIVITY_MULTIPLIER
    return ACTIVITY_MULTIPLIERS[level]


def calculate_tdee(bmr: float, activity_level: ActivityLevel | str | None) -> float:
    """Return total daily energy expenditure."""
    return bmr * get_activity_multiplier(activity_level)


def get_met_value(exercise_type: ExerciseType | str | None) -> float:
    try:
        return EXERCISE_MET_VALUES[ExerciseType(exercise_type)]
    except ValueError:
        return DEFAULT_MET_VALUE


def estimate_exercise_calories(entry: ExerciseEntry, weight_kg: float) -> float:
    """Return kcal burned in one session: MET x weight x hours."""
    hours = entry.duration_minutes / 60
    return get_met_value(entry.exercise_type) * weight_kg * hours


def calculate_exercise_calories(
    exercises: Iterable[ExerciseEntry], weight_kg: float
) -> float:
    """Return kcal burned across all sessions."""
    return sum(
        (estimate_exercise_calories(entry, weight_kg) for entry in exercises), 0.0
    )


def calculate_step_calories(steps: float, weight_kg: float) -> float:
    """Return kcal burned by walking steps, scaled to body weight."""
    return steps * STEP_CALORIES * (weight_kg / STEP_REFERENCE_WEIGHT_KG)


def calculate_energy_balance(  # noqa: PLR0913
    profile: BiometricProfile,
    *,
    calories_consumed: float,
    targets: DailyTargets,
    exercises: Iterable[ExerciseEntry] | None = None,
    steps: float = 0,
    formula: BmrFormula = BmrFormula.MIFFLIN_ST_JEOR,
) -> EnergyBalance:
    """Combine expenditure, tracked activity and intake for one day.

    Activity burn is tracked exercise plus steps on top of TDEE. The
    remaining quota credits that activity back against the calorie target
    midpoint.
    """
    bmr = estimate_bmr(profile, formula)
    tdee = calculate_tdee(bmr, profile.activity_level)
    exercise_calories = calculate_exercise_calories(exercises or (), profile.weight_kg)
    step_calories = calculate_step_calories(steps, profile.weight_kg)

    activity_burn = exercise_calories + step_calories
    total_burn = tdee + activity_burn
    net_balance = calories_consumed - total_burn
    remaining_quota = targets.calories.midpoint - calories_consumed + activity_burn

    return EnergyBalance(
        bmr=round_int(bmr),
        tdee=round_int(tdee),
        intake=round_int(calories_consumed),
        activity_burn=round_int(activity_burn),
        total_burn=round_int(total_burn),
        net_balance=round_int(net_balance),
        remaining_quota=round_int(remaining_quota),
    )
