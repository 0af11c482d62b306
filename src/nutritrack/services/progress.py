"""Derived metrics shown next to the daily totals."""

from nutritrack.domain.nutrition import MacroSplit, NutrientRange, NutritionData
from nutritrack.domain.profile import UserGoal
from nutritrack.domain.progress import (
    BmiCategory,
    BmiResult,
    Progress,
    ProgressStatus,
    WeightRange,
)
from nutritrack.rounding import round_half_up, round_int
from nutritrack.services.targets import (
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    KCAL_PER_G_PROTEIN,
)

BMI_UNDERWEIGHT = 18.5
BMI_OVERWEIGHT = 25.0
BMI_OBESE = 30.0
HEALTHY_BMI_RANGE = (18.5, 24.9)

LOSE_IDEAL_DEFICIT = -500
GAIN_IDEAL_SURPLUS = 300
MAINTAIN_TOLERANCE = 200
THOUSAND = 1000


def calculate_macro_percentages(nutrition: NutritionData) -> MacroSplit:
    """Return each macro's share of macro calories in whole percent."""
    protein_kcal = nutrition.protein * KCAL_PER_G_PROTEIN
    carbs_kcal = nutrition.carbs * KCAL_PER_G_CARBS
    fat_kcal = nutrition.fat * KCAL_PER_G_FAT
    total_kcal = protein_kcal + carbs_kcal + fat_kcal
    if total_kcal == 0:
        return MacroSplit(protein=0, carbs=0, fat=0)
    return MacroSplit(
        protein=round_int(protein_kcal / total_kcal * 100),
        carbs=round_int(carbs_kcal / total_kcal * 100),
        fat=round_int(fat_kcal / total_kcal * 100),
    )


def calculate_progress(current: float, target: NutrientRange) -> Progress:
    """Classify a value against a target band.

    The percentage is relative to the band midpoint and is 0 when the
    midpoint is 0.
    """
    midpoint = target.midpoint
    percentage = round_int(current / midpoint * 100) if midpoint else 0
    if current < target.min:
        status = ProgressStatus.UNDER
    elif current > target.max:
        status = ProgressStatus.OVER
    else:
        status = ProgressStatus.OPTIMAL
    return Progress(percentage=percentage, status=status)


def calculate_bmi(weight_kg: float, height_cm: float) -> BmiResult:
    """Return BMI rounded to one decimal with its category."""
    height_m = height_cm / 100
    bmi = weight_kg / (height_m * height_m)
    if bmi < BMI_UNDERWEIGHT:
        category = BmiCategory.UNDERWEIGHT
    elif bmi < BMI_OVERWEIGHT:
        category = BmiCategory.NORMAL
    elif bmi < BMI_OBESE:
        category = BmiCategory.OVERWEIGHT
    else:
        category = BmiCategory.OBESE
    return BmiResult(value=round_half_up(bmi, 1), category=category)


def calculate_ideal_weight_range(height_cm: float) -> WeightRange:
    """Return the weight band matching a healthy BMI at this height."""
    height_m = height_cm / 100
    low_bmi, high_bmi = HEALTHY_BMI_RANGE
    return WeightRange(
        min=round_int(low_bmi * height_m * height_m),
        max=round_int(high_bmi * height_m * height_m),
    )


def describe_calorie_balance(net_balance: float, goal: UserGoal | str | None) -> str:
    """Return a short goal-aware description of the day's balance."""
    if goal == UserGoal.LOSE_WEIGHT:
        if net_balance < LOSE_IDEAL_DEFICIT:
            return "Ideal weight-loss range"
        if net_balance < 0:
            return "Mild calorie deficit"
        return "Reduce intake or add exercise"
    if goal in {UserGoal.GAIN_WEIGHT, UserGoal.BUILD_MUSCLE}:
        if net_balance > GAIN_IDEAL_SURPLUS:
            return "Ideal weight-gain range"
        if net_balance > 0:
            return "Mild calorie surplus"
        return "Increase intake"
    if abs(net_balance) < MAINTAIN_TOLERANCE:
        return "Well balanced"
    if net_balance > 0:
        return "Slight surplus"
    return "Slight deficit"


def format_calories(calories: float) -> str:
    """Format calories compactly, e.g. 1500 -> '1.5k'."""
    if abs(calories) >= THOUSAND:
        # Halves round away from zero on both signs.
        sign = "-" if calories < 0 else ""
        return f"{sign}{round_half_up(abs(calories) / THOUSAND, 1):.1f}k"
    if float(calories).is_integer():
        return str(int(calories))
    return str(calories)
