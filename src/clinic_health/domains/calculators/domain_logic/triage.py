"""Symptom-to-specialty triage.

Emergency combinations short-circuit before any routing. Otherwise the
(symptom, body part) table picks a specialty and urgency is derived
separately from severity and duration.
"""

from __future__ import annotations

import logging

from clinic_health.domains.calculators.content import load_content
from clinic_health.domains.calculators.domain_logic.result_models import MedicalSpecialtyResult

logger = logging.getLogger(__name__)

PEDIATRIC_AGE_LIMIT = 14

# (primary symptom, body part) -> specialty key; checked before SYMPTOM_ROUTES
SYMPTOM_BODY_ROUTES = {
    ("pain", "chest"): "cardiology",
    ("pain", "abdomen"): "gastroenterology",
    ("pain", "back"): "orthopedics",
    ("pain", "joints"): "orthopedics",
    ("pain", "extremities"): "orthopedics",
    ("pain", "head"): "neurology",
    ("pain", "skin"): "dermatology",
}

SYMPTOM_ROUTES = {
    "pain": "internal_medicine",
    "fever": "internal_medicine",
    "breathing": "pulmonology",
    "headache": "neurology",
    "digestive": "gastroenterology",
    "skin": "dermatology",
    "vision": "ophthalmology",
    "hearing": "ent",
    "mental": "psychiatry",
}
DEFAULT_ROUTE = "family_medicine"


def _is_emergency(primary_symptom: str, severity: str, body_part: str, additional: str) -> bool:
    if severity == "unbearable":
        return True
    if primary_symptom == "breathing" and severity == "severe":
        return True
    if primary_symptom == "pain" and body_part == "chest" and severity == "severe":
        return True
    keywords = load_content("triage")["loss_of_consciousness_keywords"]
    return any(keyword in additional for keyword in keywords)


def _urgency(severity: str, duration: str) -> str:
    if severity == "severe":
        return "high"
    if severity == "moderate" or duration == "weeks":
        return "moderate"
    return "low"


def assess_medical_specialty(
    primary_symptom: str,
    duration: str,
    severity: str,
    body_part: str = "",
    additional_symptoms: str = "",
    age: float | None = None,
) -> MedicalSpecialtyResult:
    """Suggest which clinic specialty to book and how urgently.

    Emergencies return ``first_aid`` and no doctor questions; every other
    path returns the five fixed questions and no first aid.
    """
    text = load_content("triage")
    specialties = text["specialties"]
    reasoning = text["reasoning"]

    if _is_emergency(primary_symptom, severity, body_part, additional_symptoms or ""):
        logger.info(
            "Triage emergency: symptom=%s severity=%s body_part=%s",
            primary_symptom, severity, body_part,
        )
        return MedicalSpecialtyResult(
            recommended_specialty=specialties["emergency"],
            urgency="emergency",
            reasoning=reasoning["emergency"],
            questions_for_doctor=[],
            first_aid=list(text["first_aid"]),
        )

    route = SYMPTOM_BODY_ROUTES.get(
        (primary_symptom, body_part),
        SYMPTOM_ROUTES.get(primary_symptom, DEFAULT_ROUTE),
    )
    specialty = specialties[route]
    why = reasoning[route]

    if age is not None and age < PEDIATRIC_AGE_LIMIT:
        why = reasoning["pediatrics"].format(specialty=specialty)
        specialty = specialties["pediatrics"]

    return MedicalSpecialtyResult(
        recommended_specialty=specialty,
        urgency=_urgency(severity, duration),
        reasoning=why,
        questions_for_doctor=list(text["questions_for_doctor"]),
    )
