"""Pediatric tools: blood-type prediction, safe dosage, vaccination timetable."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from datetime import date, timedelta

from clinic_health.domains.calculators.content import load_content
from clinic_health.domains.calculators.domain_logic.result_models import (
    BloodTypeProbability,
    BloodTypeResult,
    DrugDose,
    MedicationDosageResult,
    VaccinationResult,
    VaccineEntry,
)
from clinic_health.domains.calculators.domain_logic.validation import InvalidInputError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Blood type
# ---------------------------------------------------------------------------

BLOOD_TYPES = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")

# Phenotype -> genotypes it can come from. Each genotype gets equal weight.
ABO_GENOTYPES = {
    "A": ("AA", "AO"),
    "B": ("BB", "BO"),
    "AB": ("AB",),
    "O": ("OO",),
}
RH_GENOTYPES = {
    "+": ("DD", "Dd"),
    "-": ("dd",),
}


def _parse_blood_type(name: str, value: str) -> tuple[str, str]:
    normalized = (value or "").strip().upper().replace("−", "-")
    if normalized not in BLOOD_TYPES:
        raise InvalidInputError(
            f"{name} must be one of: {' | '.join(BLOOD_TYPES)} (got {value!r})"
        )
    return normalized[:-1], normalized[-1]


def _gametes(genotypes: tuple[str, ...]) -> dict[str, float]:
    """Probability of passing on each allele, averaging over genotypes."""
    probs: dict[str, float] = defaultdict(float)
    share = 1 / len(genotypes)
    for genotype in genotypes:
        for allele in genotype:
            probs[allele] += share / 2
    return dict(probs)


def _abo_phenotype(a: str, b: str) -> str:
    alleles = {a, b}
    if alleles == {"A", "B"}:
        return "AB"
    if "A" in alleles:
        return "A"
    if "B" in alleles:
        return "B"
    return "O"


def _cross(mother: dict[str, float], father: dict[str, float], phenotype) -> dict[str, float]:
    out: dict[str, float] = defaultdict(float)
    for m_allele, m_p in mother.items():
        for f_allele, f_p in father.items():
            out[phenotype(m_allele, f_allele)] += m_p * f_p
    return dict(out)


def predict_blood_type(mother: str, father: str) -> BloodTypeResult:
    """Mendelian prediction of a child's ABO/Rh blood type.

    ABO and Rh are inherited independently, so the two crosses are computed
    separately and multiplied.

    Raises:
        InvalidInputError: If either parent type is not one of the 8 types.
    """
    m_abo, m_rh = _parse_blood_type("mother", mother)
    f_abo, f_rh = _parse_blood_type("father", father)

    abo = _cross(
        _gametes(ABO_GENOTYPES[m_abo]), _gametes(ABO_GENOTYPES[f_abo]), _abo_phenotype,
    )
    rh = _cross(
        _gametes(RH_GENOTYPES[m_rh]), _gametes(RH_GENOTYPES[f_rh]),
        lambda a, b: "+" if "D" in (a, b) else "-",
    )

    possible = []
    for blood_type in BLOOD_TYPES:
        p = abo.get(blood_type[:-1], 0.0) * rh.get(blood_type[-1], 0.0)
        if p > 0:
            possible.append(BloodTypeProbability(blood_type=blood_type, probability=round(p * 100, 1)))
    # Stable sort keeps canonical order among ties
    possible.sort(key=lambda item: -item.probability)

    text = load_content("pediatrics")["blood_type"]
    recommendations = list(text["recommendations"])
    if m_rh == "-" and rh.get("+", 0) > 0:
        recommendations.insert(0, text["rh_incompatibility"])

    return BloodTypeResult(
        most_likely=possible[0].blood_type,
        possible_types=possible,
        explanation=text["explanation"],
        genetics=text["genetics"],
        recommendations=recommendations,
    )


# ---------------------------------------------------------------------------
# Medication dosage
# ---------------------------------------------------------------------------

# mg/kg per dose, max single dose (mg), doses per day, daily ceiling (mg)
DRUG_RULES = {
    "paracetamol": {"mg_per_kg": 15, "max_single": 1000, "doses_per_day": 4, "max_daily": 4000},
    "ibuprofen": {"mg_per_kg": 10, "max_single": 400, "doses_per_day": 3, "max_daily": 1200},
}
IBUPROFEN_MIN_AGE_MONTHS = 6
INFANT_AGE_MONTHS = 3


def _dose(drug: str, weight: float) -> tuple[DrugDose, bool]:
    """Weight-based dose for ``drug``; the flag reports whether a ceiling applied."""
    rule = DRUG_RULES[drug]
    raw_single = weight * rule["mg_per_kg"]
    single = min(raw_single, rule["max_single"])
    daily = min(single * rule["doses_per_day"], rule["max_daily"])
    clamped = raw_single > rule["max_single"]
    return DrugDose(
        single_dose=round(single),
        max_daily_dose=round(daily),
        doses_per_day=rule["doses_per_day"],
    ), clamped


def calculate_safe_dosage(
    weight: float,
    age_months: int,
    drug: str = "paracetamol",
) -> MedicationDosageResult:
    """Pediatric paracetamol and ibuprofen doses by weight.

    Both drugs are always computed; ``drug`` records which one the caller
    asked about. Ibuprofen doses are withheld below 6 months of age.
    Warnings, recommendations and emergency info are never empty.
    """
    if drug not in DRUG_RULES:
        raise InvalidInputError(
            f"drug must be one of: {' | '.join(DRUG_RULES)} (got {drug!r})"
        )

    text = load_content("pediatrics")["dosage"]
    warnings = list(text["warnings"])

    paracetamol, para_clamped = _dose("paracetamol", weight)

    if age_months < IBUPROFEN_MIN_AGE_MONTHS:
        ibuprofen = DrugDose(
            single_dose=None,
            max_daily_dose=None,
            doses_per_day=DRUG_RULES["ibuprofen"]["doses_per_day"],
            age_restriction=True,
        )
        ibu_clamped = False
        warnings.insert(0, text["ibuprofen_restricted"])
    else:
        ibuprofen, ibu_clamped = _dose("ibuprofen", weight)

    if age_months < INFANT_AGE_MONTHS:
        warnings.insert(0, text["infant_warning"])
    if para_clamped or ibu_clamped:
        warnings.append(text["ceiling_warning"])

    recommendations = [
        line.format(
            paracetamol_doses=DRUG_RULES["paracetamol"]["doses_per_day"],
            ibuprofen_doses=DRUG_RULES["ibuprofen"]["doses_per_day"],
        )
        for line in text["recommendations"]
    ]

    return MedicationDosageResult(
        requested_drug=drug,
        paracetamol=paracetamol,
        ibuprofen=ibuprofen,
        warnings=warnings,
        recommendations=recommendations,
        emergency_info=list(text["emergency_info"]),
    )


# ---------------------------------------------------------------------------
# Vaccination schedule
# ---------------------------------------------------------------------------

DEFAULT_DUE_WINDOW_DAYS = 30
DEFAULT_CATCH_UP_DAYS = 30


def calculate_vaccination_schedule(
    birth_date: date,
    today: date | None = None,
    completed: Iterable[str] | None = None,
    due_window_days: int = DEFAULT_DUE_WINDOW_DAYS,
    catch_up_days: int = DEFAULT_CATCH_UP_DAYS,
) -> VaccinationResult:
    """Build a child's immunisation timetable from the birth date.

    Args:
        birth_date: Date of birth; must not be after ``today``.
        today: Reference date (defaults to ``date.today()``).
        completed: Vaccine ids the caller knows were given. When omitted,
            vaccines more than ``catch_up_days`` past due are assumed given.
        due_window_days: Look-ahead window for flagging a vaccine as due.
        catch_up_days: Grace period used only when ``completed`` is omitted.

    Raises:
        InvalidInputError: If ``birth_date`` is in the future.
    """
    today = today or date.today()
    if birth_date > today:
        raise InvalidInputError(f"birth_date {birth_date.isoformat()} is in the future")

    text = load_content("pediatrics")["vaccination"]
    done = set(completed) if completed is not None else None
    window_end = today + timedelta(days=due_window_days)

    schedule: list[VaccineEntry] = []
    for definition in text["vaccines"]:
        due = birth_date + timedelta(days=definition["offset_days"])
        if done is not None:
            given = definition["id"] in done
        else:
            given = (today - due).days > catch_up_days
        schedule.append(VaccineEntry(
            id=definition["id"],
            arabic_name=definition["arabic_name"],
            description=definition["description"],
            age_display=definition["age_display"],
            due_date=due,
            category=definition["category"],
            is_due=today <= due <= window_end,
            is_overdue=due < today and not given,
        ))

    upcoming = [v for v in schedule if v.due_date > today]
    next_due = min(upcoming, key=lambda v: v.due_date) if upcoming else None

    warnings = [
        text[f"overdue_{v.category}"].format(name=v.arabic_name, due=v.due_date.isoformat())
        for v in sorted(schedule, key=lambda v: v.category != "mandatory")
        if v.is_overdue
    ]
    logger.debug(
        "Vaccination schedule: %d entries, %d overdue", len(schedule), len(warnings)
    )

    return VaccinationResult(
        schedule=schedule,
        completed_count=sum(1 for v in schedule if v.due_date <= today),
        total_count=len(schedule),
        next_due=next_due,
        warnings=warnings,
        recommendations=list(text["recommendations"]),
    )
