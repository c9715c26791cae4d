"""
Input normalization and validation (models/property.py).
"""

from dataclasses import replace

import pytest

from lima_appraisal.models.property import (
    ConditionGrade,
    Currency,
    EnergyGrade,
    PropertyInput,
    PropertyType,
    validate_property,
)


class TestPropertyTypeParsing:
    @pytest.mark.parametrize("raw,expected", [
        ("apartment", PropertyType.APARTMENT),
        ("Departamento", PropertyType.APARTMENT),
        ("departamento dúplex", PropertyType.APARTMENT),
        ("CASA", PropertyType.HOUSE),
        ("house", PropertyType.HOUSE),
        ("Terreno", PropertyType.LAND),
        ("land", PropertyType.LAND),
        ("Oficina", PropertyType.OFFICE),
        ("Local comercial", PropertyType.RETAIL),
        ("retail", PropertyType.RETAIL),
    ])
    def test_known_names(self, raw, expected):
        assert PropertyType.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["", None, "castle", "   "])
    def test_unknown_or_empty(self, raw):
        assert PropertyType.parse(raw) is None


class TestGradeParsing:
    def test_energy_grade_is_case_insensitive(self):
        assert EnergyGrade.parse(" b ") is EnergyGrade.B
        assert EnergyGrade.parse("F") is EnergyGrade.F

    @pytest.mark.parametrize("raw", ["G", "", None, "AA"])
    def test_unknown_energy_grade(self, raw):
        assert EnergyGrade.parse(raw) is None

    @pytest.mark.parametrize("raw,expected", [
        ("excellent", ConditionGrade.EXCELLENT),
        ("Excelente", ConditionGrade.EXCELLENT),
        ("bueno", ConditionGrade.GOOD),
        ("regular", ConditionGrade.REGULAR),
        ("needs-remodel", ConditionGrade.NEEDS_REMODEL),
        ("needs remodel", ConditionGrade.NEEDS_REMODEL),
        ("remodelar", ConditionGrade.NEEDS_REMODEL),
    ])
    def test_condition_names(self, raw, expected):
        assert ConditionGrade.parse(raw) is expected

    def test_unknown_condition(self):
        assert ConditionGrade.parse("ruined") is None

    def test_currency_labels(self):
        assert Currency.PEN.label == "S/"
        assert Currency.USD.label == "USD"


class TestValidateProperty:
    def test_valid_input(self, kennedy_apartment):
        assert validate_property(kennedy_apartment) == []

    def test_zero_free_area_and_new_build_are_valid(self, kennedy_apartment):
        assert validate_property(replace(kennedy_apartment, free_area=0, age_years=0)) == []

    def test_missing_zone(self, kennedy_apartment):
        assert validate_property(replace(kennedy_apartment, zone="")) == ["District and zone are required"]

    def test_every_violation_reported_together(self):
        prop = PropertyInput(
            district="", zone="", property_type=None, covered_area=0, free_area=-5,
            bedrooms=0, bathrooms=0, age_years=-1,
        )
        assert validate_property(prop) == [
            "District and zone are required",
            "Property type is required",
            "Covered area must be greater than 0",
            "Free area cannot be negative",
            "At least 1 bedroom is required",
            "At least 1 bathroom is required",
            "Age cannot be negative",
        ]

    def test_negative_covered_area(self, kennedy_apartment):
        assert validate_property(replace(kennedy_apartment, covered_area=-10)) == [
            "Covered area must be greater than 0",
        ]

    @pytest.mark.parametrize("area", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_covered_area(self, kennedy_apartment, area):
        assert validate_property(replace(kennedy_apartment, covered_area=area)) == [
            "Covered area must be a finite number",
        ]

    def test_non_finite_free_area(self, kennedy_apartment):
        assert validate_property(replace(kennedy_apartment, free_area=float("nan"))) == [
            "Free area must be a finite number",
        ]

    def test_input_is_immutable(self, kennedy_apartment):
        with pytest.raises(AttributeError):
            kennedy_apartment.bedrooms = 4
