"""MCP tools exposing the health calculators.

Each tool validates its inputs, calls the pure calculation, records the
call with the usage tracker and returns the result as a JSON string.
Invalid input comes back as ``{"status": "error", "message": ...}``.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import date
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from fastmcp import Context, FastMCP

from clinic_health.domains.calculators.domain_logic.body_metrics import (
    calculate_bmi,
    calculate_calories,
    DEFAULT_RESTING_HR,
    calculate_heart_rate,
    calculate_steps_calories,
    calculate_waist_risk,
    calculate_water_needs,
    max_heart_rate,
)
from clinic_health.domains.calculators.domain_logic.pediatrics import (
    calculate_safe_dosage,
    calculate_vaccination_schedule,
    predict_blood_type,
)
from clinic_health.domains.calculators.domain_logic.reproductive import (
    calculate_ovulation,
    calculate_pregnancy,
)
from clinic_health.domains.calculators.domain_logic.screenings import (
    assess_anxiety,
    assess_dental_decay_risk,
    assess_depression,
    assess_diabetes_risk,
)
from clinic_health.domains.calculators.domain_logic.triage import assess_medical_specialty
from clinic_health.domains.calculators.domain_logic.validation import (
    InvalidInputError,
    parse_iso_date,
    require_choice,
    require_non_negative,
    require_positive,
    require_range,
)

if TYPE_CHECKING:
    from clinic_health.core.usage.tracker import UsageTracker

logger = logging.getLogger(__name__)

MAX_WEIGHT_KG = 400
MAX_HEIGHT_CM = 260
MAX_AGE_YEARS = 120
CYCLE_RANGE = (15, 60)
GENDERS = ("male", "female")


def _run_calculation(
    tracker: UsageTracker | None,
    tool_name: str,
    tool_input: dict[str, Any],
    compute: Callable[[], Any],
) -> str:
    """Run ``compute`` and serialise its result; input errors become error payloads."""
    start = time.perf_counter()
    try:
        result = compute()
    except InvalidInputError as exc:
        logger.warning("%s rejected input: %s", tool_name, exc)
        if tracker is not None:
            tracker.record(
                tool_name, tool_input, status="failure", error_type=type(exc).__name__,
                duration_ms=(time.perf_counter() - start) * 1000,
            )
        return json.dumps({"status": "error", "message": str(exc)}, ensure_ascii=False)

    if tracker is not None:
        tracker.record(tool_name, tool_input, duration_ms=(time.perf_counter() - start) * 1000)
    return json.dumps({"status": "ok", "result": result.to_dict()}, ensure_ascii=False)


def register_calculator_tools(
    mcp: FastMCP,
    tracker: UsageTracker | None = None,
    *,
    due_window_days: int = 30,
    catch_up_days: int = 30,
) -> None:
    """Register the health calculator tools on the MCP server."""

    # --- Body metrics ---

    @mcp.tool
    async def bmi_calculator(ctx: Context, weight: float, height: float) -> str:
        """Calculate body mass index with category, ideal weight range and advice.

        Args:
            weight: Body weight in kilograms.
            height: Height in centimetres.
        """
        def compute():
            return calculate_bmi(
                require_range("weight", weight, 0.1, MAX_WEIGHT_KG),
                require_range("height", height, 30, MAX_HEIGHT_CM),
            )
        return _run_calculation(tracker, "bmi_calculator", {"weight": weight, "height": height}, compute)

    @mcp.tool
    async def calorie_calculator(
        ctx: Context,
        weight: float,
        height: float,
        age: int,
        gender: str,
        activity_level: str = "sedentary",
        goal: str = "maintain",
    ) -> str:
        """Estimate BMR, TDEE, a goal-adjusted calorie target and macro split.

        Args:
            weight: Body weight in kilograms.
            height: Height in centimetres.
            age: Age in years.
            gender: 'male' or 'female'.
            activity_level: sedentary | light | moderate | active | veryActive.
            goal: lose | maintain | gain.
        """
        def compute():
            return calculate_calories(
                require_range("weight", weight, 0.1, MAX_WEIGHT_KG),
                require_range("height", height, 30, MAX_HEIGHT_CM),
                require_range("age", age, 0, MAX_AGE_YEARS),
                require_choice("gender", gender, GENDERS), activity_level, goal,
            )
        return _run_calculation(tracker, "calorie_calculator", {
            "weight": weight, "height": height, "age": age, "gender": gender,
            "activity_level": activity_level, "goal": goal,
        }, compute)

    @mcp.tool
    async def water_calculator(
        ctx: Context,
        weight: float,
        age: int,
        activity_level: str = "sedentary",
        climate: str = "temperate",
        pregnancy: str = "none",
        medical_condition: str = "none",
    ) -> str:
        """Daily water intake target with a drinking schedule.

        Args:
            weight: Body weight in kilograms.
            age: Age in years.
            activity_level: sedentary | light | moderate | active | veryActive.
            climate: temperate | hot | humid | cold.
            pregnancy: none | pregnant | breastfeeding.
            medical_condition: none | fever | diabetes | kidney | heart.
        """
        def compute():
            return calculate_water_needs(
                require_range("weight", weight, 0.1, MAX_WEIGHT_KG),
                require_range("age", age, 0, MAX_AGE_YEARS),
                activity_level, climate, pregnancy, medical_condition,
            )
        return _run_calculation(tracker, "water_calculator", {
            "weight": weight, "age": age, "activity_level": activity_level,
            "climate": climate, "pregnancy": pregnancy, "medical_condition": medical_condition,
        }, compute)

    @mcp.tool
    async def heart_rate_calculator(
        ctx: Context,
        age: int,
        fitness_level: str = "beginner",
        resting_hr: int | None = None,
        medication: str = "none",
    ) -> str:
        """Fat-burn, cardio and peak heart-rate zones (Karvonen method).

        Args:
            age: Age in years.
            fitness_level: beginner | intermediate | advanced | athlete.
            resting_hr: Resting heart rate in bpm (defaults to 60 when omitted).
            medication: none | betaBlockers | stimulants | other.
        """
        def compute():
            years = require_range("age", age, 1, MAX_AGE_YEARS)
            if resting_hr is not None:
                require_range("resting_hr", resting_hr, 25, 150)
            # Zones only exist while the resting rate is below the maximum
            ceiling = max_heart_rate(years, fitness_level, medication)
            if (resting_hr or DEFAULT_RESTING_HR) >= ceiling:
                raise InvalidInputError(
                    f"resting_hr must be below the maximum heart rate of {round(ceiling)} bpm "
                    f"(got {resting_hr or DEFAULT_RESTING_HR})"
                )
            return calculate_heart_rate(years, fitness_level, resting_hr, medication)
        return _run_calculation(tracker, "heart_rate_calculator", {
            "age": age, "fitness_level": fitness_level,
            "resting_hr": resting_hr, "medication": medication,
        }, compute)

    @mcp.tool
    async def waist_calculator(
        ctx: Context,
        waist: float,
        height: float,
        age: int,
        gender: str,
    ) -> str:
        """Central-obesity risk from the waist-to-height ratio.

        Args:
            waist: Waist circumference in centimetres.
            height: Height in centimetres.
            age: Age in years.
            gender: 'male' or 'female'.
        """
        def compute():
            return calculate_waist_risk(
                require_positive("waist", waist),
                require_range("height", height, 30, MAX_HEIGHT_CM),
                require_range("age", age, 0, MAX_AGE_YEARS),
                require_choice("gender", gender, GENDERS),
            )
        return _run_calculation(tracker, "waist_calculator", {
            "waist": waist, "height": height, "age": age, "gender": gender,
        }, compute)

    @mcp.tool
    async def steps_calories(
        ctx: Context,
        steps: int,
        weight: float,
        height: float,
        age: int,
        gender: str,
        intensity: str = "moderate",
    ) -> str:
        """Convert a step count to calories burned, distance and active minutes.

        Args:
            steps: Number of steps walked.
            weight: Body weight in kilograms.
            height: Height in centimetres.
            age: Age in years.
            gender: 'male' or 'female'.
            intensity: slow | moderate | fast | veryFast.
        """
        def compute():
            return calculate_steps_calories(
                int(require_non_negative("steps", steps)),
                require_range("weight", weight, 0.1, MAX_WEIGHT_KG),
                require_range("height", height, 30, MAX_HEIGHT_CM),
                require_range("age", age, 0, MAX_AGE_YEARS),
                require_choice("gender", gender, GENDERS), intensity,
            )
        return _run_calculation(tracker, "steps_calories", {
            "steps": steps, "weight": weight, "height": height, "age": age,
            "gender": gender, "intensity": intensity,
        }, compute)

    # --- Pediatrics ---

    @mcp.tool
    async def blood_type_predictor(ctx: Context, mother_type: str, father_type: str) -> str:
        """Predict a child's possible blood types from both parents' types.

        Args:
            mother_type: One of A+, A-, B+, B-, AB+, AB-, O+, O-.
            father_type: One of A+, A-, B+, B-, AB+, AB-, O+, O-.
        """
        return _run_calculation(
            tracker, "blood_type_predictor",
            {"mother_type": mother_type, "father_type": father_type},
            lambda: predict_blood_type(mother_type, father_type),
        )

    @mcp.tool
    async def medication_dosage(
        ctx: Context,
        weight: float,
        age_months: int,
        drug: str = "paracetamol",
    ) -> str:
        """Safe pediatric paracetamol and ibuprofen doses by weight and age.

        Args:
            weight: Child's weight in kilograms.
            age_months: Child's age in months.
            drug: paracetamol | ibuprofen (both are always calculated).
        """
        def compute():
            return calculate_safe_dosage(
                require_range("weight", weight, 1, 150),
                int(require_range("age_months", age_months, 0, 216)),
                drug,
            )
        return _run_calculation(tracker, "medication_dosage", {
            "weight": weight, "age_months": age_months, "drug": drug,
        }, compute)

    @mcp.tool
    async def vaccination_schedule(
        ctx: Context,
        birth_date: str,
        completed_vaccines: list[str] | None = None,
    ) -> str:
        """Child immunisation timetable with due, overdue and next vaccines.

        Args:
            birth_date: Date of birth (ISO 8601, e.g., '2025-03-01').
            completed_vaccines: Optional ids of vaccines already given.
        """
        def compute():
            return calculate_vaccination_schedule(
                parse_iso_date("birth_date", birth_date),
                completed=completed_vaccines,
                due_window_days=due_window_days,
                catch_up_days=catch_up_days,
            )
        return _run_calculation(tracker, "vaccination_schedule", {
            "birth_date": birth_date, "completed_vaccines": completed_vaccines,
        }, compute)

    # --- Screenings ---

    @mcp.tool
    async def diabetes_risk_test(
        ctx: Context,
        age: int,
        bmi: float,
        family_history: bool = False,
        physical_activity: bool = True,
        previous_high_blood_sugar: bool = False,
        high_blood_pressure: bool = False,
        gestational_diabetes: bool = False,
        large_infant: bool = False,
    ) -> str:
        """Type-2 diabetes risk questionnaire.

        Args:
            age: Age in years.
            bmi: Body mass index (approximate values like 22, 27.5, 32 are fine).
            family_history: First-degree relative with diabetes.
            physical_activity: At least 150 minutes of activity per week.
            previous_high_blood_sugar: A past test showed high blood sugar.
            high_blood_pressure: Diagnosed or treated high blood pressure.
            gestational_diabetes: Diabetes during a previous pregnancy.
            large_infant: Previously delivered a baby over 4 kg.
        """
        answers = {
            "age": age,
            "bmi": bmi,
            "familyHistory": family_history,
            "physicalActivity": physical_activity,
            "previousHighBloodSugar": previous_high_blood_sugar,
            "highBloodPressure": high_blood_pressure,
            "gestationalDiabetes": gestational_diabetes,
            "largeInfant": large_infant,
        }

        def compute():
            require_range("age", age, 0, MAX_AGE_YEARS)
            require_range("bmi", bmi, 5, 100)
            return assess_diabetes_risk(answers)
        return _run_calculation(tracker, "diabetes_risk_test", answers, compute)

    @mcp.tool
    async def anxiety_test(ctx: Context, answers: list[int]) -> str:
        """Seven-question anxiety screener.

        Args:
            answers: Seven values, each 0 (not at all) to 3 (nearly every day).
        """
        return _run_calculation(
            tracker, "anxiety_test", {"answers": answers}, lambda: assess_anxiety(answers),
        )

    @mcp.tool
    async def depression_test(ctx: Context, answers: list[int]) -> str:
        """Nine-question depression screener.

        Args:
            answers: Nine values, each 0 (not at all) to 3 (nearly every day).
        """
        return _run_calculation(
            tracker, "depression_test", {"answers": answers}, lambda: assess_depression(answers),
        )

    @mcp.tool
    async def dental_decay_risk(
        ctx: Context,
        brushing_frequency: str | None = None,
        flossing: str | None = None,
        sugar_intake: str | None = None,
        dental_visits: str | None = None,
        fluoride: str | None = None,
        dry_mouth: str | None = None,
        previous_cavities: str | None = None,
        smoking: str | None = None,
    ) -> str:
        """Tooth-decay risk questionnaire.

        Args:
            brushing_frequency: never | once | twice | moreThanTwice.
            flossing: never | sometimes | regularly.
            sugar_intake: rarely | once | twiceThree | moreThanThree.
            dental_visits: sixMonths | year | twoYears | moreThanTwo.
            fluoride: yes | no | dontKnow.
            dry_mouth: no | sometimes | often.
            previous_cavities: never | few | several | many.
            smoking: no | occasionally | regularly.
        """
        answers = {
            key: value
            for key, value in {
                "brushingFrequency": brushing_frequency,
                "flossing": flossing,
                "sugarIntake": sugar_intake,
                "dentalVisits": dental_visits,
                "fluoride": fluoride,
                "dryMouth": dry_mouth,
                "previousCavities": previous_cavities,
                "smoking": smoking,
            }.items()
            if value is not None
        }
        return _run_calculation(
            tracker, "dental_decay_risk", answers, lambda: assess_dental_decay_risk(answers),
        )

    # --- Reproductive health ---

    @mcp.tool
    async def pregnancy_calculator(
        ctx: Context,
        last_period: str,
        cycle_length: int = 28,
    ) -> str:
        """Due date, weeks pregnant and trimester from the last menstrual period.

        Args:
            last_period: First day of the last period (ISO 8601).
            cycle_length: Usual cycle length in days.
        """
        def compute():
            lmp = parse_iso_date("last_period", last_period)
            if lmp > date.today():
                raise InvalidInputError(f"last_period {lmp.isoformat()} is in the future")
            return calculate_pregnancy(lmp, int(require_range("cycle_length", cycle_length, *CYCLE_RANGE)))
        return _run_calculation(tracker, "pregnancy_calculator", {
            "last_period": last_period, "cycle_length": cycle_length,
        }, compute)

    @mcp.tool
    async def ovulation_calculator(
        ctx: Context,
        last_period: str,
        cycle_length: int = 28,
        period_length: int = 5,
    ) -> str:
        """Ovulation day, fertile window and next period date.

        Args:
            last_period: First day of the last period (ISO 8601).
            cycle_length: Usual cycle length in days.
            period_length: Usual bleeding length in days.
        """
        def compute():
            return calculate_ovulation(
                parse_iso_date("last_period", last_period),
                int(require_range("cycle_length", cycle_length, *CYCLE_RANGE)),
                int(require_range("period_length", period_length, 1, 14)),
            )
        return _run_calculation(tracker, "ovulation_calculator", {
            "last_period": last_period, "cycle_length": cycle_length,
            "period_length": period_length,
        }, compute)

    # --- Guidance ---

    @mcp.tool
    async def medical_specialty_guide(
        ctx: Context,
        primary_symptom: str,
        duration: str,
        severity: str,
        body_part: str = "",
        additional_symptoms: str = "",
        age: int | None = None,
    ) -> str:
        """Suggest the clinic specialty to book and how urgent the visit is.

        Args:
            primary_symptom: pain | fever | breathing | headache | digestive | skin |
                vision | hearing | mental | other.
            duration: hours | days | weeks | months | chronic.
            severity: mild | moderate | severe | unbearable.
            body_part: head | chest | abdomen | back | extremities | joints | skin | general.
            additional_symptoms: Free text describing other symptoms.
            age: Patient age in years (children are routed to pediatrics).
        """
        def compute():
            if age is not None:
                require_range("age", age, 0, MAX_AGE_YEARS)
            return assess_medical_specialty(
                primary_symptom, duration, severity, body_part, additional_symptoms, age,
            )
        return _run_calculation(tracker, "medical_specialty_guide", {
            "primary_symptom": primary_symptom, "duration": duration, "severity": severity,
            "body_part": body_part, "additional_symptoms": additional_symptoms, "age": age,
        }, compute)
