"""Pregnancy and ovulation date projections."""

from __future__ import annotations

from datetime import date, timedelta

from clinic_health.domains.calculators.content import load_content
from clinic_health.domains.calculators.domain_logic.result_models import (
    DateRange,
    OvulationResult,
    PregnancyResult,
)

GESTATION_DAYS = 280
LUTEAL_PHASE_DAYS = 14
FERTILE_DAYS_BEFORE = 5
FERTILE_DAYS_AFTER = 1
REGULAR_CYCLE = (21, 35)


def calculate_pregnancy(
    last_period: date,
    cycle_length: int = 28,
    today: date | None = None,
) -> PregnancyResult:
    """Due date (Naegele's rule), gestational age and trimester.

    ``cycle_length`` is accepted for parity with the ovulation calculator;
    the due date is always last period + 280 days.
    """
    today = today or date.today()
    due = last_period + timedelta(days=GESTATION_DAYS)
    weeks = (today - last_period).days // 7

    if weeks <= 13:
        trimester = 1
    elif weeks <= 27:
        trimester = 2
    else:
        trimester = 3

    text = load_content("reproductive")["pregnancy"]["trimesters"][trimester]
    return PregnancyResult(
        due_date=due,
        weeks_pregnant=weeks,
        days_remaining=(due - today).days,
        trimester=trimester,
        milestones=list(text["milestones"]),
        recommendations=list(text["recommendations"]),
    )


def calculate_ovulation(
    last_period: date,
    cycle_length: int = 28,
    period_length: int = 5,
) -> OvulationResult:
    """Ovulation day, fertile window and next period for one cycle."""
    ovulation = last_period + timedelta(days=cycle_length - LUTEAL_PHASE_DAYS)
    lo, hi = REGULAR_CYCLE
    regular = lo <= cycle_length <= hi

    text = load_content("reproductive")["ovulation"]
    tips = list(text["tips"])
    if not regular:
        tips.insert(0, text["irregular_tip"])

    return OvulationResult(
        ovulation_date=ovulation,
        fertility_window=DateRange(
            start=ovulation - timedelta(days=FERTILE_DAYS_BEFORE),
            end=ovulation + timedelta(days=FERTILE_DAYS_AFTER),
        ),
        next_period=last_period + timedelta(days=cycle_length),
        period_end=last_period + timedelta(days=period_length - 1),
        is_regular=regular,
        cycle=text["regular" if regular else "irregular"].format(length=cycle_length),
        tips=tips,
    )
