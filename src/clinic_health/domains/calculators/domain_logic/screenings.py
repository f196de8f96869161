"""Questionnaire screeners: diabetes risk, dental decay, anxiety, depression.

Each screener is a weighted sum over fixed answer tables mapped to one of
four ordinal levels (low / moderate / high / very-high). The weights and
thresholds below are the only domain knowledge in this module.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from clinic_health.domains.calculators.content import load_content
from clinic_health.domains.calculators.domain_logic.result_models import (
    RISK_LEVEL_LABELS,
    DentalResult,
    HealthToolResult,
)
from clinic_health.domains.calculators.domain_logic.validation import InvalidInputError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Diabetes
# ---------------------------------------------------------------------------

# (answer key, points) for boolean risk factors
DIABETES_FLAG_POINTS = (
    ("familyHistory", 2),
    ("previousHighBloodSugar", 2),
    ("highBloodPressure", 1),
    ("gestationalDiabetes", 2),
    ("largeInfant", 1),
)
DIABETES_INACTIVITY_POINTS = 2
DIABETES_MAX_SCORE = 15
# Upper bounds (exclusive) for low / moderate / high
DIABETES_THRESHOLDS = (3, 6, 9)

# ---------------------------------------------------------------------------
# Likert screeners (0-3 per item)
# ---------------------------------------------------------------------------

LIKERT_MAX = 3
ANXIETY_ITEMS = 7
DEPRESSION_ITEMS = 9
# Upper bounds (inclusive) for low / moderate / high
ANXIETY_THRESHOLDS = (4, 9, 14)
DEPRESSION_THRESHOLDS = (4, 9, 14)
# Zero-based index of the self-harm question
DEPRESSION_SELF_HARM_ITEM = 8

# ---------------------------------------------------------------------------
# Dental decay
# ---------------------------------------------------------------------------

DENTAL_POINTS: dict[str, dict[str, int]] = {
    "brushingFrequency": {"never": 3, "once": 2, "twice": 0, "moreThanTwice": 0},
    "flossing": {"never": 2, "sometimes": 1, "regularly": 0},
    "sugarIntake": {"rarely": 0, "once": 1, "twiceThree": 2, "moreThanThree": 3},
    "dentalVisits": {"sixMonths": 0, "year": 1, "twoYears": 2, "moreThanTwo": 3},
    "fluoride": {"yes": 0, "no": 2, "dontKnow": 1},
    "dryMouth": {"no": 0, "sometimes": 1, "often": 2},
    "previousCavities": {"never": 0, "few": 1, "several": 2, "many": 3},
    "smoking": {"no": 0, "occasionally": 1, "regularly": 2},
}
DENTAL_MAX_SCORE = sum(max(options.values()) for options in DENTAL_POINTS.values())
DENTAL_THRESHOLDS = (4, 9, 14)


def _level_inclusive(score: int, thresholds: tuple[int, int, int]) -> str:
    low, moderate, high = thresholds
    if score <= low:
        return "low"
    if score <= moderate:
        return "moderate"
    if score <= high:
        return "high"
    return "very-high"


def _details(score: int, max_score: int) -> str:
    return load_content("screenings")["details"].format(score=score, max_score=max_score)


def _likert_total(name: str, answers: Sequence[int], expected: int) -> int:
    if len(answers) != expected:
        raise InvalidInputError(f"{name} expects {expected} answers (got {len(answers)})")
    total = 0
    for i, value in enumerate(answers):
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= LIKERT_MAX:
            raise InvalidInputError(
                f"{name} answer {i + 1} must be an integer 0-{LIKERT_MAX} (got {value!r})"
            )
        total += value
    return total


# ---------------------------------------------------------------------------
# Public screeners
# ---------------------------------------------------------------------------

def assess_diabetes_risk(answers: Mapping[str, Any]) -> HealthToolResult:
    """Score type-2 diabetes risk from keyed questionnaire answers.

    Expected keys: ``age`` (years), ``bmi``, ``physicalActivity`` (bool) and
    the boolean flags in ``DIABETES_FLAG_POINTS``. Missing keys add no points,
    except ``physicalActivity`` whose absence counts as inactive.
    """
    score = 0

    age = answers.get("age") or 0
    if age >= 45:
        score += 2
    elif age >= 35:
        score += 1

    bmi = answers.get("bmi") or 0
    if bmi >= 30:
        score += 3
    elif bmi >= 25:
        score += 1

    if not answers.get("physicalActivity"):
        score += DIABETES_INACTIVITY_POINTS

    for key, points in DIABETES_FLAG_POINTS:
        if answers.get(key):
            score += points

    low, moderate, high = DIABETES_THRESHOLDS
    if score < low:
        level = "low"
    elif score < moderate:
        level = "moderate"
    elif score < high:
        level = "high"
    else:
        level = "very-high"

    text = load_content("screenings")["diabetes"]
    return HealthToolResult(
        score=score,
        level=level,
        category=text["category"].format(label=RISK_LEVEL_LABELS[level]),
        recommendations=list(text["recommendations"][level]),
        details=_details(score, DIABETES_MAX_SCORE),
        needs_attention=level in ("high", "very-high"),
    )


def assess_anxiety(answers: Sequence[int]) -> HealthToolResult:
    """Seven-item anxiety screener, each item scored 0-3."""
    score = _likert_total("anxiety", answers, ANXIETY_ITEMS)
    level = _level_inclusive(score, ANXIETY_THRESHOLDS)
    text = load_content("screenings")["anxiety"]
    return HealthToolResult(
        score=score,
        level=level,
        category=text["categories"][level],
        recommendations=list(text["recommendations"][level]),
        details=_details(score, ANXIETY_ITEMS * LIKERT_MAX),
        needs_attention=level in ("high", "very-high"),
    )


def assess_depression(answers: Sequence[int]) -> HealthToolResult:
    """Nine-item depression screener, each item scored 0-3.

    Any positive answer to the self-harm item raises ``needs_attention``
    regardless of the total.
    """
    score = _likert_total("depression", answers, DEPRESSION_ITEMS)
    level = _level_inclusive(score, DEPRESSION_THRESHOLDS)
    text = load_content("screenings")["depression"]

    recommendations = list(text["recommendations"][level])
    self_harm = answers[DEPRESSION_SELF_HARM_ITEM] > 0
    if self_harm:
        recommendations.insert(0, text["self_harm"])
        logger.info("Depression screener: self-harm item answered positively")

    return HealthToolResult(
        score=score,
        level=level,
        category=text["categories"][level],
        recommendations=recommendations,
        details=_details(score, DEPRESSION_ITEMS * LIKERT_MAX),
        needs_attention=self_harm or level in ("high", "very-high"),
    )


def assess_dental_decay_risk(answers: Mapping[str, str]) -> DentalResult:
    """Tooth-decay risk from eight lifestyle questions.

    Unanswered questions score zero; an unknown option raises.
    """
    score = 0
    for question, options in DENTAL_POINTS.items():
        answer = answers.get(question)
        if answer is None:
            continue
        if answer not in options:
            raise InvalidInputError(
                f"{question} must be one of: {' | '.join(options)} (got {answer!r})"
            )
        score += options[answer]

    level = _level_inclusive(score, DENTAL_THRESHOLDS)
    text = load_content("screenings")["dental"]
    return DentalResult(
        score=score,
        risk_level=level,
        category=text["categories"][level],
        recommendations=list(text["recommendations"][level]),
        details=_details(score, DENTAL_MAX_SCORE),
        warning_sign=level in ("high", "very-high"),
    )
