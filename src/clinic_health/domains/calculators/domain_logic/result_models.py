"""Result types returned by the health calculators.

Every result is built once inside a single calculator call and handed to
the caller. ``to_dict()`` produces JSON-ready primitives (dates become ISO
strings) for the MCP tool layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date
from typing import Any, Literal

RiskLevel = Literal["low", "moderate", "high", "very-high"]
Urgency = Literal["low", "moderate", "high", "emergency"]
VaccineCategory = Literal["mandatory", "optional"]

RISK_LEVELS: tuple[str, ...] = ("low", "moderate", "high", "very-high")

# Arabic display labels for risk levels
RISK_LEVEL_LABELS = {
    "low": "منخفضة",
    "moderate": "متوسطة",
    "high": "عالية",
    "very-high": "عالية جداً",
}


def _to_primitive(value: Any) -> Any:
    if isinstance(value, _Serializable):
        return value.to_dict()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _to_primitive(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_primitive(v) for v in value]
    return value


class _Serializable:
    def to_dict(self) -> dict[str, Any]:
        return {f.name: _to_primitive(getattr(self, f.name)) for f in fields(self)}


# ---------------------------------------------------------------------------
# Shared building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Range(_Serializable):
    """Inclusive numeric range (kg, cm or bpm depending on the result)."""

    min: float
    max: float


@dataclass(frozen=True)
class DateRange(_Serializable):
    start: date
    end: date


# ---------------------------------------------------------------------------
# Body metrics
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BMIResult(_Serializable):
    bmi: float                      # 1 decimal
    category: str
    ideal_weight: Range             # kg, 1 decimal
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Macros(_Serializable):
    protein: int                    # grams
    carbs: int
    fats: int


@dataclass(frozen=True)
class CalorieResult(_Serializable):
    bmr: int
    tdee: int
    target_calories: int
    macros: Macros
    meal_plan: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class WaterResult(_Serializable):
    daily_water: int                # ml
    schedule: list[str] = field(default_factory=list)
    factors: list[str] = field(default_factory=list)

    @property
    def cups(self) -> int:
        """Daily target expressed in 250 ml cups."""
        return round(self.daily_water / 250)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["cups"] = self.cups
        return data


@dataclass(frozen=True)
class HeartRateZones(_Serializable):
    fat_burn: Range
    cardio: Range
    peak: Range


@dataclass(frozen=True)
class HeartRateResult(_Serializable):
    resting_hr: str                 # display string
    max_heart_rate: int
    target_zones: HeartRateZones
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class WaistResult(_Serializable):
    waist_to_height_ratio: float    # 3 decimals
    risk_level: RiskLevel
    category: str
    ideal_range: Range              # cm
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class StepsCaloriesResult(_Serializable):
    calories_burned: int
    distance: float                 # km, 2 decimals
    active_minutes: int
    recommendations: list[str] = field(default_factory=list)
    weekly_progress: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Pediatrics
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BloodTypeProbability(_Serializable):
    blood_type: str
    probability: float              # percent, 1 decimal


@dataclass(frozen=True)
class BloodTypeResult(_Serializable):
    most_likely: str
    possible_types: list[BloodTypeProbability]
    explanation: str
    genetics: str
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DrugDose(_Serializable):
    single_dose: int | None         # mg, None when withheld
    max_daily_dose: int | None
    doses_per_day: int
    age_restriction: bool = False


@dataclass(frozen=True)
class MedicationDosageResult(_Serializable):
    requested_drug: str
    paracetamol: DrugDose
    ibuprofen: DrugDose
    warnings: list[str]
    recommendations: list[str]
    emergency_info: list[str]


@dataclass(frozen=True)
class VaccineEntry(_Serializable):
    id: str
    arabic_name: str
    description: str
    age_display: str
    due_date: date
    category: VaccineCategory
    is_due: bool
    is_overdue: bool


@dataclass(frozen=True)
class VaccinationResult(_Serializable):
    schedule: list[VaccineEntry]
    completed_count: int
    total_count: int
    next_due: VaccineEntry | None
    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @property
    def mandatory(self) -> list[VaccineEntry]:
        return [v for v in self.schedule if v.category == "mandatory"]

    @property
    def optional(self) -> list[VaccineEntry]:
        return [v for v in self.schedule if v.category == "optional"]


# ---------------------------------------------------------------------------
# Screenings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HealthToolResult(_Serializable):
    """Outcome of a questionnaire-style screener (diabetes, anxiety, depression)."""

    score: int
    level: RiskLevel
    category: str
    recommendations: list[str]
    details: str
    needs_attention: bool = False


@dataclass(frozen=True)
class DentalResult(_Serializable):
    score: int
    risk_level: RiskLevel
    category: str
    recommendations: list[str]
    details: str
    warning_sign: bool = False


# ---------------------------------------------------------------------------
# Reproductive health
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PregnancyResult(_Serializable):
    due_date: date
    weeks_pregnant: int
    days_remaining: int
    trimester: int
    milestones: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class OvulationResult(_Serializable):
    ovulation_date: date
    fertility_window: DateRange
    next_period: date
    period_end: date
    is_regular: bool
    cycle: str
    tips: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Triage
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MedicalSpecialtyResult(_Serializable):
    recommended_specialty: str
    urgency: Urgency
    reasoning: str
    questions_for_doctor: list[str] = field(default_factory=list)
    first_aid: list[str] | None = None
