"""Body-metric calculators: BMI, calories, water, heart rate, waist, steps.

All functions are deterministic arithmetic over their arguments. Numeric
inputs are trusted: callers validate ranges (see ``validation.py``).
Unrecognised categorical values fall back to the neutral multiplier.
"""

from __future__ import annotations

import logging

from clinic_health.domains.calculators.content import load_content
from clinic_health.domains.calculators.domain_logic.result_models import (
    BMIResult,
    CalorieResult,
    HeartRateResult,
    HeartRateZones,
    Macros,
    Range,
    StepsCaloriesResult,
    WaistResult,
    WaterResult,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

IDEAL_BMI_MIN = 18.5
IDEAL_BMI_MAX = 24.9

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "veryActive": 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.2

GOAL_MULTIPLIERS = {"lose": 0.85, "maintain": 1.0, "gain": 1.15}

# Macro split as share of target kcal, and kcal per gram
MACRO_SHARES = {"protein": 0.30, "carbs": 0.40, "fats": 0.30}
KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fats": 9}

WATER_ML_PER_KG = 35
WATER_YOUTH_MULTIPLIER = 1.1
WATER_ACTIVITY_MULTIPLIERS = {"light": 1.2, "moderate": 1.3, "active": 1.4, "veryActive": 1.5}
WATER_CLIMATE_MULTIPLIERS = {"hot": 1.2, "humid": 1.1}
WATER_PREGNANCY_ML = {"pregnant": 300, "breastfeeding": 700}
WATER_CONDITION_ML = {"fever": 500, "diabetes": 400, "kidney": -300, "heart": -200}

FITNESS_MULTIPLIERS = {"beginner": 0.9, "intermediate": 0.95, "advanced": 1.0, "athlete": 1.05}
MEDICATION_MULTIPLIERS = {"betaBlockers": 0.8, "stimulants": 1.1}
DEFAULT_RESTING_HR = 60

# Karvonen intensity bands (fraction of heart-rate reserve)
FAT_BURN_BAND = (0.50, 0.70)
CARDIO_BAND = (0.70, 0.85)
PEAK_BAND = (0.85, 0.95)

WAIST_RATIO_THRESHOLDS = ((0.4, "low"), (0.5, "moderate"), (0.6, "high"))
WAIST_IDEAL_MIN_RATIO = 0.35
WAIST_IDEAL_MAX_RATIO = 0.45

STRIDE_FACTOR_MALE = 0.415
STRIDE_FACTOR_OTHER = 0.413
KCAL_PER_STEP = {"slow": 0.04, "moderate": 0.05, "fast": 0.06, "veryFast": 0.08}
REFERENCE_WEIGHT_KG = 70
STEPS_PER_ACTIVE_MINUTE = 100


# ---------------------------------------------------------------------------
# BMI
# ---------------------------------------------------------------------------

def calculate_bmi(weight: float, height: float) -> BMIResult:
    """Body mass index from weight (kg) and height (cm).

    The category is decided on the unrounded value, so 24.99 is still
    "وزن طبيعي" even though it displays as 25.0.
    """
    height_m = height / 100
    bmi = weight / (height_m * height_m)

    if bmi < 18.5:
        key, category = "underweight", "نقص في الوزن"
    elif bmi < 25:
        key, category = "normal", "وزن طبيعي"
    elif bmi < 30:
        key, category = "overweight", "زيادة في الوزن"
    else:
        key, category = "obese", "سمنة"

    recommendations = load_content("body_metrics")["bmi"]["recommendations"][key]

    return BMIResult(
        bmi=round(bmi, 1),
        category=category,
        ideal_weight=Range(
            min=round(IDEAL_BMI_MIN * height_m * height_m, 1),
            max=round(IDEAL_BMI_MAX * height_m * height_m, 1),
        ),
        recommendations=list(recommendations),
    )


# ---------------------------------------------------------------------------
# Calories
# ---------------------------------------------------------------------------

def calculate_calories(
    weight: float,
    height: float,
    age: float,
    gender: str,
    activity_level: str,
    goal: str,
) -> CalorieResult:
    """Daily energy needs via Mifflin-St Jeor, with a fixed 30/40/30 macro split."""
    bmr = 10 * weight + 6.25 * height - 5 * age
    bmr += 5 if gender == "male" else -161

    tdee = bmr * ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_MULTIPLIER)
    target = tdee * GOAL_MULTIPLIERS.get(goal, 1.0)

    protein = round(target * MACRO_SHARES["protein"] / KCAL_PER_GRAM["protein"])
    fats = round(target * MACRO_SHARES["fats"] / KCAL_PER_GRAM["fats"])
    # Carbs take the remainder so the grams add back up to the target within 2 kcal
    remainder = round(target) - protein * KCAL_PER_GRAM["protein"] - fats * KCAL_PER_GRAM["fats"]
    macros = Macros(protein=protein, carbs=round(remainder / KCAL_PER_GRAM["carbs"]), fats=fats)

    return CalorieResult(
        bmr=round(bmr),
        tdee=round(tdee),
        target_calories=round(target),
        macros=macros,
        meal_plan=list(load_content("body_metrics")["calories"]["meal_plan"]),
    )


# ---------------------------------------------------------------------------
# Water
# ---------------------------------------------------------------------------

def calculate_water_needs(
    weight: float,
    age: float,
    activity_level: str,
    climate: str,
    pregnancy: str = "none",
    medical_condition: str = "none",
) -> WaterResult:
    """Daily fluid target in ml.

    Adjustments are applied in a fixed order: age, activity and climate
    multiply; pregnancy and medical condition add or subtract afterwards.
    """
    text = load_content("body_metrics")["water"]
    templates = text["factors"]
    labels = text["labels"]

    daily = weight * WATER_ML_PER_KG
    factors = [templates["base"].format(weight=_fmt(weight))]

    if age < 18:
        daily *= WATER_YOUTH_MULTIPLIER
        factors.append(templates["young"])

    if activity_level in WATER_ACTIVITY_MULTIPLIERS:
        multiplier = WATER_ACTIVITY_MULTIPLIERS[activity_level]
        daily *= multiplier
        factors.append(templates["activity"].format(label=labels[activity_level], multiplier=multiplier))

    if climate in WATER_CLIMATE_MULTIPLIERS:
        multiplier = WATER_CLIMATE_MULTIPLIERS[climate]
        daily *= multiplier
        factors.append(templates["climate"].format(label=labels[climate], multiplier=multiplier))

    if pregnancy in WATER_PREGNANCY_ML:
        amount = WATER_PREGNANCY_ML[pregnancy]
        daily += amount
        factors.append(templates["pregnancy"].format(label=labels[pregnancy], amount=amount))

    if medical_condition in WATER_CONDITION_ML:
        amount = WATER_CONDITION_ML[medical_condition]
        daily += amount
        factors.append(templates["condition"].format(label=labels[medical_condition], amount=amount))

    return WaterResult(
        daily_water=round(daily),
        schedule=list(text["schedule"]),
        factors=factors,
    )


# ---------------------------------------------------------------------------
# Heart rate
# ---------------------------------------------------------------------------

def max_heart_rate(age: float, fitness_level: str, medication: str = "none") -> float:
    """Age-predicted maximum heart rate adjusted for fitness and medication."""
    max_hr = (220 - age) * FITNESS_MULTIPLIERS.get(fitness_level, 1.0)
    return max_hr * MEDICATION_MULTIPLIERS.get(medication, 1.0)


def calculate_heart_rate(
    age: float,
    fitness_level: str,
    resting_hr: float | None = None,
    medication: str = "none",
) -> HeartRateResult:
    """Training zones via the Karvonen method.

    ``resting_hr`` of ``None`` (or 0) falls back to 60 bpm.
    """
    text = load_content("body_metrics")["heart_rate"]

    max_hr = max_heart_rate(age, fitness_level, medication)

    resting = resting_hr if resting_hr else DEFAULT_RESTING_HR
    reserve = max_hr - resting

    def _zone(band: tuple[float, float]) -> Range:
        lo, hi = band
        return Range(min=round(resting + lo * reserve), max=round(resting + hi * reserve))

    zones = HeartRateZones(
        fat_burn=_zone(FAT_BURN_BAND),
        cardio=_zone(CARDIO_BAND),
        peak=_zone(PEAK_BAND),
    )

    recommendations = [line.format(max_hr=round(max_hr)) for line in text["recommendations"]]
    if resting_hr:
        display = text["resting_categories"][_resting_category(resting_hr)]
        recommendations.insert(0, f"معدل النبض أثناء الراحة: {display}")
    else:
        display = text["resting_default"]
    if medication in text["medication_notes"]:
        recommendations.append(text["medication_notes"][medication])

    return HeartRateResult(
        resting_hr=display,
        max_heart_rate=round(max_hr),
        target_zones=zones,
        recommendations=recommendations,
    )


def _resting_category(resting_hr: float) -> str:
    if resting_hr < 60:
        return "excellent"
    if resting_hr < 70:
        return "very_good"
    if resting_hr < 80:
        return "good"
    if resting_hr < 90:
        return "average"
    return "needs_work"


# ---------------------------------------------------------------------------
# Waist-to-height
# ---------------------------------------------------------------------------

def calculate_waist_risk(waist: float, height: float, age: float, gender: str) -> WaistResult:
    """Central-obesity risk from the waist-to-height ratio.

    Age and gender are accepted for later refinement; thresholds are
    currently ratio-only.
    """
    ratio = waist / height
    risk_level = "very-high"
    for threshold, level in WAIST_RATIO_THRESHOLDS:
        if ratio < threshold:
            risk_level = level
            break

    text = load_content("body_metrics")["waist"]
    return WaistResult(
        waist_to_height_ratio=round(ratio, 3),
        risk_level=risk_level,
        category=text["categories"][risk_level],
        ideal_range=Range(
            min=round(height * WAIST_IDEAL_MIN_RATIO, 1),
            max=round(height * WAIST_IDEAL_MAX_RATIO, 1),
        ),
        recommendations=list(text["recommendations"][risk_level]),
    )


# ---------------------------------------------------------------------------
# Steps to calories
# ---------------------------------------------------------------------------

def calculate_steps_calories(
    steps: int,
    weight: float,
    height: float,
    age: float,
    gender: str,
    intensity: str = "moderate",
) -> StepsCaloriesResult:
    """Walking energy expenditure, distance and a synthetic weekly plan."""
    stride_cm = height * (STRIDE_FACTOR_MALE if gender == "male" else STRIDE_FACTOR_OTHER)
    distance_km = steps * stride_cm / 100000
    per_step = KCAL_PER_STEP.get(intensity, KCAL_PER_STEP["moderate"])
    calories = round(steps * per_step * (weight / REFERENCE_WEIGHT_KG))

    text = load_content("body_metrics")["steps"]
    if steps < 5000:
        key = "sedentary"
    elif steps < 7500:
        key = "low_active"
    elif steps < 10000:
        key = "somewhat_active"
    else:
        key = "active"

    weekly = [
        text["weekly_line"].format(day=entry["day"], steps=round(steps * entry["multiplier"]))
        for entry in text["weekly_plan"]
    ]

    return StepsCaloriesResult(
        calories_burned=calories,
        distance=round(distance_km, 2),
        active_minutes=round(steps / STEPS_PER_ACTIVE_MINUTE),
        recommendations=list(text["recommendations"][key]),
        weekly_progress=weekly,
    )


def _fmt(value: float) -> str:
    """Drop a trailing ``.0`` for display."""
    return str(int(value)) if float(value).is_integer() else str(value)
