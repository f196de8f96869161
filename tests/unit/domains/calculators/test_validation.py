"""Tests for the shared input validation helpers."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from clinic_health.domains.calculators.domain_logic.validation import (
    InvalidInputError,
    parse_iso_date,
    require_choice,
    require_non_negative,
    require_positive,
    require_range,
)


class TestNumbers:
    def test_positive_accepts_numeric_strings(self):
        assert require_positive("weight", "70.5") == 70.5

    @pytest.mark.parametrize("bad", [0, -1, "abc", None])
    def test_positive_rejects(self, bad):
        with pytest.raises(InvalidInputError):
            require_positive("weight", bad)

    def test_non_negative_allows_zero(self):
        assert require_non_negative("steps", 0) == 0

    def test_range_is_inclusive(self):
        assert require_range("cycle_length", 15, 15, 60) == 15
        assert require_range("cycle_length", 60, 15, 60) == 60
        with pytest.raises(InvalidInputError, match="cycle_length"):
            require_range("cycle_length", 61, 15, 60)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            require_positive("height", -5)


class TestChoice:
    def test_accepts_listed_value(self):
        assert require_choice("gender", "female", ("male", "female")) == "female"

    def test_rejects_unknown_value(self):
        with pytest.raises(InvalidInputError, match="gender"):
            require_choice("gender", "other", ("male", "female"))


class TestParseIsoDate:
    def test_string(self):
        assert parse_iso_date("d", "2024-02-29") == date(2024, 2, 29)

    def test_datetime_string_is_truncated(self):
        assert parse_iso_date("d", "2024-02-29T10:30:00Z") == date(2024, 2, 29)

    def test_date_and_datetime_objects(self):
        assert parse_iso_date("d", date(2024, 1, 1)) == date(2024, 1, 1)
        assert parse_iso_date("d", datetime(2024, 1, 1, 9, 0)) == date(2024, 1, 1)

    @pytest.mark.parametrize("bad", ["", "01/02/2024", "2023-02-29", "yesterday"])
    def test_rejects_bad_dates(self, bad):
        with pytest.raises(InvalidInputError):
            parse_iso_date("last_period", bad)
