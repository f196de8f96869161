"""Tests for the symptom-to-specialty guide."""

from __future__ import annotations

import pytest

from clinic_health.domains.calculators.content import load_content
from clinic_health.domains.calculators.domain_logic.triage import assess_medical_specialty


@pytest.fixture
def triage_text():
    return load_content("triage")


class TestEmergency:
    @pytest.mark.parametrize(
        "symptom, severity, body_part",
        [
            ("pain", "unbearable", "back"),
            ("breathing", "severe", ""),
            ("pain", "severe", "chest"),
        ],
    )
    def test_emergency_combinations(self, triage_text, symptom, severity, body_part):
        result = assess_medical_specialty(symptom, "hours", severity, body_part)
        assert result.urgency == "emergency"
        assert result.recommended_specialty == triage_text["specialties"]["emergency"]
        assert result.first_aid == triage_text["first_aid"]
        assert result.questions_for_doctor == []

    def test_loss_of_consciousness_mention(self):
        result = assess_medical_specialty(
            "headache", "hours", "mild", "head", additional_symptoms="حصل إغماء لمدة دقيقة",
        )
        assert result.urgency == "emergency"

    def test_emergency_beats_pediatric_routing(self, triage_text):
        result = assess_medical_specialty("breathing", "hours", "severe", age=5)
        assert result.recommended_specialty == triage_text["specialties"]["emergency"]


class TestRouting:
    @pytest.mark.parametrize(
        "symptom, body_part, route",
        [
            ("pain", "chest", "cardiology"),
            ("pain", "abdomen", "gastroenterology"),
            ("pain", "joints", "orthopedics"),
            ("pain", "general", "internal_medicine"),
            ("breathing", "", "pulmonology"),
            ("vision", "", "ophthalmology"),
            ("mental", "", "psychiatry"),
            ("other", "", "family_medicine"),
        ],
    )
    def test_specialty_routes(self, triage_text, symptom, body_part, route):
        result = assess_medical_specialty(symptom, "days", "mild", body_part)
        assert result.recommended_specialty == triage_text["specialties"][route]
        assert result.reasoning == triage_text["reasoning"][route]
        assert result.first_aid is None
        assert len(result.questions_for_doctor) == 5

    def test_children_go_to_pediatrics(self, triage_text):
        result = assess_medical_specialty("skin", "days", "mild", age=6)
        assert result.recommended_specialty == triage_text["specialties"]["pediatrics"]
        assert triage_text["specialties"]["dermatology"] in result.reasoning

    def test_fourteen_is_not_pediatric(self, triage_text):
        result = assess_medical_specialty("skin", "days", "mild", age=14)
        assert result.recommended_specialty == triage_text["specialties"]["dermatology"]


class TestUrgency:
    @pytest.mark.parametrize(
        "severity, duration, urgency",
        [
            ("severe", "days", "high"),
            ("moderate", "days", "moderate"),
            ("mild", "weeks", "moderate"),
            ("mild", "months", "low"),
            ("mild", "hours", "low"),
        ],
    )
    def test_urgency(self, severity, duration, urgency):
        assert assess_medical_specialty("skin", duration, severity).urgency == urgency
