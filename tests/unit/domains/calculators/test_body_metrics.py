"""Tests for the body-metric calculators."""

from __future__ import annotations

import pytest

from clinic_health.domains.calculators.domain_logic.body_metrics import (
    calculate_bmi,
    calculate_calories,
    calculate_heart_rate,
    calculate_steps_calories,
    calculate_waist_risk,
    calculate_water_needs,
    max_heart_rate,
)


# ---------------------------------------------------------------------------
# BMI
# ---------------------------------------------------------------------------

class TestBMI:
    def test_typical_adult(self):
        result = calculate_bmi(70, 175)
        assert result.bmi == pytest.approx(22.9, abs=0.05)
        assert result.category == "وزن طبيعي"
        assert result.ideal_weight.min == pytest.approx(56.7, abs=0.1)
        assert result.ideal_weight.max == pytest.approx(76.2, abs=0.15)
        assert len(result.recommendations) == 4

    @pytest.mark.parametrize(
        "weight, category",
        [
            (18.4, "نقص في الوزن"),
            (18.5, "وزن طبيعي"),
            (24.9, "وزن طبيعي"),
            (25, "زيادة في الوزن"),
            (29.9, "زيادة في الوزن"),
            (30, "سمنة"),
        ],
    )
    def test_category_boundaries(self, weight, category):
        # At 100 cm the BMI equals the weight
        assert calculate_bmi(weight, 100).category == category

    def test_category_uses_unrounded_value(self):
        result = calculate_bmi(24.99, 100)
        assert result.bmi == 25.0
        assert result.category == "وزن طبيعي"

    def test_ideal_weight_bounds_contain_healthy_bmi(self):
        result = calculate_bmi(90, 180)
        assert result.ideal_weight.min < result.ideal_weight.max
        assert result.category == "زيادة في الوزن"

    @pytest.mark.parametrize("height", [150, 175, 200])
    def test_strictly_increasing_in_weight(self, height):
        values = [calculate_bmi(weight, height).bmi for weight in range(40, 151, 2)]
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_zero_height_is_not_validated(self):
        with pytest.raises(ZeroDivisionError):
            calculate_bmi(70, 0)

    def test_to_dict_is_json_ready(self):
        data = calculate_bmi(70, 175).to_dict()
        assert set(data) == {"bmi", "category", "ideal_weight", "recommendations"}
        assert set(data["ideal_weight"]) == {"min", "max"}


# ---------------------------------------------------------------------------
# Calories
# ---------------------------------------------------------------------------

class TestCalories:
    def test_male_moderate_maintain(self):
        result = calculate_calories(70, 175, 30, "male", "moderate", "maintain")
        assert result.bmr == 1649
        assert result.tdee == 2556
        assert result.target_calories == 2556
        assert result.macros.protein == 192
        assert result.macros.carbs == 256
        assert result.macros.fats == 85

    def test_female_sedentary_lose(self):
        result = calculate_calories(60, 165, 25, "female", "sedentary", "lose")
        assert result.bmr == 1345
        assert result.tdee == 1614
        assert result.target_calories == 1372

    def test_gain_goal_raises_target(self):
        maintain = calculate_calories(70, 175, 30, "male", "light", "maintain")
        gain = calculate_calories(70, 175, 30, "male", "light", "gain")
        assert gain.target_calories > maintain.target_calories

    def test_unknown_activity_falls_back_to_sedentary(self):
        unknown = calculate_calories(70, 175, 30, "male", "couch", "maintain")
        sedentary = calculate_calories(70, 175, 30, "male", "sedentary", "maintain")
        assert unknown.tdee == sedentary.tdee

    @pytest.mark.parametrize("weight, height, age", [(45, 150, 18), (70, 175, 30), (95, 182, 52), (130, 195, 70)])
    @pytest.mark.parametrize("gender", ["male", "female"])
    @pytest.mark.parametrize("activity_level", ["sedentary", "light", "moderate", "active", "veryActive"])
    @pytest.mark.parametrize("goal", ["lose", "maintain", "gain"])
    def test_macros_add_back_to_target(self, weight, height, age, gender, activity_level, goal):
        result = calculate_calories(weight, height, age, gender, activity_level, goal)
        macros = result.macros
        kcal = macros.protein * 4 + macros.carbs * 4 + macros.fats * 9
        assert abs(kcal - result.target_calories) <= 3

    def test_meal_plan_has_four_meals(self):
        result = calculate_calories(70, 175, 30, "male", "moderate", "maintain")
        assert len(result.meal_plan) == 4


# ---------------------------------------------------------------------------
# Water
# ---------------------------------------------------------------------------

class TestWater:
    def test_adult_baseline(self):
        result = calculate_water_needs(70, 30, "sedentary", "temperate")
        assert result.daily_water == 2450
        assert result.cups == 10
        assert result.to_dict()["cups"] == 10
        assert len(result.factors) == 1

    def test_activity_and_climate_multiply(self):
        result = calculate_water_needs(60, 30, "moderate", "hot")
        assert result.daily_water == 3276
        assert len(result.factors) == 3

    def test_youth_bonus(self):
        assert calculate_water_needs(50, 16, "sedentary", "temperate").daily_water == 1925

    def test_pregnancy_and_condition_are_additive(self):
        pregnant = calculate_water_needs(60, 30, "sedentary", "temperate", pregnancy="pregnant")
        kidney = calculate_water_needs(60, 30, "sedentary", "temperate", medical_condition="kidney")
        assert pregnant.daily_water == 2100 + 300
        assert kidney.daily_water == 2100 - 300
        assert "-300" in kidney.factors[-1]

    def test_schedule_is_static(self):
        result = calculate_water_needs(60, 30, "sedentary", "temperate")
        assert len(result.schedule) == 6


# ---------------------------------------------------------------------------
# Heart rate
# ---------------------------------------------------------------------------

class TestHeartRate:
    def test_karvonen_zones(self):
        result = calculate_heart_rate(30, "advanced", resting_hr=70)
        assert result.max_heart_rate == 190
        assert (result.target_zones.fat_burn.min, result.target_zones.fat_burn.max) == (130, 154)
        assert (result.target_zones.cardio.min, result.target_zones.cardio.max) == (154, 172)
        assert (result.target_zones.peak.min, result.target_zones.peak.max) == (172, 184)
        assert result.resting_hr == "جيد"

    def test_missing_resting_rate_defaults_to_60(self):
        result = calculate_heart_rate(40, "advanced")
        assert result.target_zones.fat_burn.min == 120
        assert "60" in result.resting_hr

    def test_zones_are_ordered(self):
        zones = calculate_heart_rate(55, "beginner", resting_hr=65).target_zones
        assert zones.fat_burn.min < zones.fat_burn.max <= zones.cardio.min
        assert zones.cardio.max <= zones.peak.min < zones.peak.max

    def test_beta_blockers_lower_max(self):
        plain = calculate_heart_rate(40, "advanced")
        blocked = calculate_heart_rate(40, "advanced", medication="betaBlockers")
        assert blocked.max_heart_rate == 144
        assert blocked.max_heart_rate < plain.max_heart_rate
        assert len(blocked.recommendations) == len(plain.recommendations) + 1

    def test_max_heart_rate_helper_matches_result(self):
        assert max_heart_rate(60, "beginner", "betaBlockers") == pytest.approx(115.2)
        result = calculate_heart_rate(60, "beginner", medication="betaBlockers")
        assert result.max_heart_rate == 115

    def test_max_rate_in_recommendations(self):
        result = calculate_heart_rate(30, "advanced")
        assert "190" in result.recommendations[0]


# ---------------------------------------------------------------------------
# Waist
# ---------------------------------------------------------------------------

class TestWaist:
    def test_high_ratio(self):
        result = calculate_waist_risk(90, 170, 40, "male")
        assert result.waist_to_height_ratio == pytest.approx(0.529, abs=0.001)
        assert result.risk_level == "high"

    def test_half_is_high_not_moderate(self):
        assert calculate_waist_risk(85, 170, 40, "female").risk_level == "high"

    @pytest.mark.parametrize(
        "waist, level",
        [(60, "low"), (75, "moderate"), (110, "very-high")],
    )
    def test_levels(self, waist, level):
        assert calculate_waist_risk(waist, 170, 40, "male").risk_level == level

    def test_ideal_range(self):
        result = calculate_waist_risk(80, 170, 40, "male")
        assert result.ideal_range.min == 59.5
        assert result.ideal_range.max == 76.5

    def test_age_and_gender_do_not_change_level(self):
        a = calculate_waist_risk(80, 170, 25, "male")
        b = calculate_waist_risk(80, 170, 65, "female")
        assert a.risk_level == b.risk_level


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

class TestSteps:
    def test_ten_thousand_moderate_steps(self):
        result = calculate_steps_calories(10000, 70, 175, 30, "male")
        assert result.calories_burned == 500
        assert result.distance == pytest.approx(7.26, abs=0.01)
        assert result.active_minutes == 100

    def test_intensity_and_weight_scale_calories(self):
        result = calculate_steps_calories(5000, 35, 165, 30, "female", intensity="veryFast")
        assert result.calories_burned == 200

    def test_weekly_progress_has_seven_days(self):
        result = calculate_steps_calories(10000, 70, 175, 30, "male")
        assert len(result.weekly_progress) == 7
        assert "10000" in result.weekly_progress[0]

    def test_zero_steps(self):
        result = calculate_steps_calories(0, 70, 175, 30, "male")
        assert result.calories_burned == 0
        assert result.distance == 0
        assert result.active_minutes == 0
