"""
Level Schema Tests

Tests for the save-wizard level registry: level lookup, rule merging and
field-level payload validation.

Test Classes:
- TestRegistry: Level names and lookup
- TestRuleMerge: Least-restrictive merge of rules
- TestInitialSave: The create-time level
- TestConditionalRules: Rules that depend on other payload fields
- TestFieldShapes: Months, percentages, lists and habitat quantities
- TestUndeclaredFields: Fields outside the requested levels

Author: PAFS Project
License: AGPL-3.0
"""

from decimal import Decimal

import pytest
from app.core.errors import InvalidLevelError
from app.services.levels import (
    LevelSchemaRegistry,
    FieldRule,
    RuleKind,
    VALIDATION_LEVELS,
    registry,
)

REFERENCE = "ANC501E/000A/001A"


def codes(failures):
    return [(failure.field, failure.error_code) for failure in failures]


class TestRegistry:
    """Test level names and lookup."""

    def test_core_levels_are_registered(self):
        for level in (
            "INITIAL_SAVE", "PROJECT_NAME", "PROJECT_AREA", "PROJECT_TYPE",
            "FINANCIAL_START_YEAR", "FINANCIAL_END_YEAR",
            "START_OUTLINE_BUSINESS_CASE", "COMPLETE_OUTLINE_BUSINESS_CASE",
            "AWARD_CONTRACT", "START_CONSTRUCTION", "READY_FOR_SERVICE",
            "COULD_START_EARLY", "EARLIEST_WITH_GIA", "RISK", "MAIN_RISK",
            "PROPERTY_AFFECTED_FLOODING", "PROPERTY_AFFECTED_COASTAL_EROSION",
            "TWENTY_PERCENT_DEPRIVED", "FORTY_PERCENT_DEPRIVED", "APPROACH",
            "URGENCY_REASON", "URGENCY_DETAILS", "ENVIRONMENTAL_BENEFITS",
            "CONFIDENCE_HOMES_BETTER_PROTECTED", "CONFIDENCE_HOMES_BY_GATEWAY_FOUR",
            "CONFIDENCE_SECURED_PARTNERSHIP_FUNDING", "WOODLAND",
            "HECTARES_OF_WOODLAND_HABITAT_CREATED_OR_ENHANCED",
        ):
            assert level in VALIDATION_LEVELS

    def test_unknown_level_raises(self):
        with pytest.raises(InvalidLevelError, match="Invalid validation level: NOPE"):
            registry.get("NOPE")

    def test_unknown_level_in_list_raises(self):
        with pytest.raises(InvalidLevelError):
            registry.validate_payload(["PROJECT_NAME", "NOPE"], {})

    def test_empty_level_list_raises(self):
        with pytest.raises(InvalidLevelError):
            registry.merge([])

    def test_every_level_but_initial_save_needs_a_reference(self):
        for level in VALIDATION_LEVELS:
            rules = registry.merge(level)
            assert ("referenceNumber" in rules) is (level != "INITIAL_SAVE"), level

    def test_missing_reference_number(self):
        failures = registry.validate_payload("PROJECT_NAME", {"name": "Flood Wall"})
        assert codes(failures) == [("referenceNumber", "REFERENCE_NUMBER_REQUIRED")]

    def test_malformed_reference_number(self):
        failures = registry.validate_payload("PROJECT_NAME", {"referenceNumber": "AN/1/2", "name": "Flood Wall"})
        assert codes(failures) == [("referenceNumber", "REFERENCE_NUMBER_INVALID")]


class TestRuleMerge:
    """Test least-restrictive merging."""

    def test_bounds_widen_and_required_needs_both(self):
        left = FieldRule("x", RuleKind.INTEGER, "X", minimum=1, maximum=5)
        right = FieldRule("x", RuleKind.INTEGER, "X", required=False, minimum=0, maximum=10)
        merged = left.merge(right)
        assert merged.required is False
        assert merged.minimum == 0
        assert merged.maximum == 10

    def test_missing_bound_removes_it(self):
        left = FieldRule("x", RuleKind.STRING, "X", max_length=10)
        right = FieldRule("x", RuleKind.STRING, "X")
        assert left.merge(right).max_length is None

    def test_choices_are_unioned(self):
        left = FieldRule("x", RuleKind.STRING, "X", choices=("a", "b"))
        right = FieldRule("x", RuleKind.STRING, "X", choices=("b", "c"))
        assert left.merge(right).choices == ("a", "b", "c")

    def test_identical_rules(self):
        rule = FieldRule("x", RuleKind.BOOLEAN, "X")
        assert rule.merge(rule) is rule

    def test_optional_in_one_level_is_optional_in_merge(self):
        rules = registry.merge(["RISK", "PROPERTY_AFFECTED_FLOODING"])
        assert rules["noPropertiesAtRisk"].required is False

    def test_required_in_every_level_stays_required(self):
        rules = registry.merge(["START_OUTLINE_BUSINESS_CASE", "COMPLETE_OUTLINE_BUSINESS_CASE"])
        assert rules["startOutlineBusinessCaseMonth"].required is True

    def test_merged_levels_validate_together(self):
        failures = registry.validate_payload(
            ["PROJECT_NAME", "FINANCIAL_START_YEAR"],
            {"referenceNumber": REFERENCE, "name": "Flood Wall"},
        )
        assert codes(failures) == [("financialStartYear", "FINANCIAL_START_YEAR_REQUIRED")]


class TestInitialSave:
    """Test the create-time level."""

    @pytest.fixture
    def payload(self):
        return {
            "name": "Flood Wall",
            "areaId": 3,
            "projectType": "DEF",
            "projectInterventionTypes": ["NFM", "PFR"],
            "mainInterventionType": "PFR",
            "financialStartYear": 2025,
            "financialEndYear": 2030,
        }

    def test_valid_payload(self, payload):
        assert registry.validate_payload("INITIAL_SAVE", payload) == []

    def test_unknown_fields_are_rejected(self, payload):
        payload["somethingElse"] = "value"
        assert codes(registry.validate_payload("INITIAL_SAVE", payload)) == [
            ("somethingElse", "SOMETHING_ELSE_NOT_ALLOWED")
        ]

    def test_reference_number_not_allowed_on_create(self, payload):
        payload["referenceNumber"] = REFERENCE
        assert codes(registry.validate_payload("INITIAL_SAVE", payload)) == [
            ("referenceNumber", "REFERENCE_NUMBER_NOT_ALLOWED")
        ]

    def test_missing_name(self, payload):
        del payload["name"]
        failures = registry.validate_payload("INITIAL_SAVE", payload)
        assert codes(failures) == [("name", "NAME_REQUIRED")]
        assert failures[0].status_code == 400

    def test_blank_name_is_missing(self, payload):
        payload["name"] = "   "
        assert codes(registry.validate_payload("INITIAL_SAVE", payload)) == [("name", "NAME_REQUIRED")]

    def test_name_with_symbols(self, payload):
        payload["name"] = "Flood Wall!"
        assert codes(registry.validate_payload("INITIAL_SAVE", payload)) == [("name", "NAME_INVALID")]

    def test_numeric_strings_are_accepted(self, payload):
        payload["areaId"] = "3"
        payload["financialStartYear"] = "2025"
        assert registry.validate_payload("INITIAL_SAVE", payload) == []

    def test_every_bad_field_is_reported(self, payload):
        payload["financialStartYear"] = 1999
        payload["projectType"] = "XYZ"
        failures = registry.validate_payload("INITIAL_SAVE", payload)
        assert ("projectType", "PROJECT_TYPE_INVALID") in codes(failures)
        assert ("financialStartYear", "FINANCIAL_START_YEAR_INVALID") in codes(failures)

    def test_main_intervention_must_be_selected(self, payload):
        payload["mainInterventionType"] = "SUDS"
        failures = registry.validate_payload("INITIAL_SAVE", payload)
        assert codes(failures) == [("mainInterventionType", "PROJECT_MAIN_INTERVENTION_TYPE_INVALID")]


class TestConditionalRules:
    """Test rules that depend on other payload fields."""

    def test_interventions_required_for_defence_types(self):
        failures = registry.validate_payload("PROJECT_TYPE", {"referenceNumber": REFERENCE, "projectType": "REP"})
        assert ("projectInterventionTypes", "PROJECT_INTERVENTION_TYPE_REQUIRED") in codes(failures)
        assert ("mainInterventionType", "PROJECT_MAIN_INTERVENTION_TYPE_REQUIRED") in codes(failures)

    def test_interventions_not_allowed_for_other_types(self):
        failures = registry.validate_payload(
            "PROJECT_TYPE",
            {"referenceNumber": REFERENCE, "projectType": "STU", "projectInterventionTypes": ["NFM"]},
        )
        assert codes(failures) == [("projectInterventionTypes", "PROJECT_INTERVENTION_TYPE_NOT_ALLOWED")]

    def test_other_types_without_interventions(self):
        assert registry.validate_payload("PROJECT_TYPE", {"referenceNumber": REFERENCE, "projectType": "STR"}) == []

    def test_earliest_with_gia_required_when_starting_early(self):
        failures = registry.validate_payload(
            "EARLIEST_WITH_GIA", {"referenceNumber": REFERENCE, "couldStartEarly": True}
        )
        assert codes(failures) == [
            ("earliestWithGiaMonth", "MONTH_REQUIRED"),
            ("earliestWithGiaYear", "YEAR_REQUIRED"),
        ]

    def test_earliest_with_gia_not_allowed_otherwise(self):
        failures = registry.validate_payload(
            "EARLIEST_WITH_GIA",
            {"referenceNumber": REFERENCE, "couldStartEarly": False, "earliestWithGiaMonth": 3},
        )
        assert codes(failures) == [("earliestWithGiaMonth", "MONTH_NOT_ALLOWED")]

    def test_urgency_details_required_when_urgent(self):
        failures = registry.validate_payload(
            "URGENCY_DETAILS", {"referenceNumber": REFERENCE, "urgencyReason": "legal_need"}
        )
        assert codes(failures) == [("urgencyDetails", "URGENCY_DETAILS_REQUIRED")]

    def test_urgency_details_not_allowed_when_not_urgent(self):
        failures = registry.validate_payload(
            "URGENCY_DETAILS",
            {"referenceNumber": REFERENCE, "urgencyReason": "not_urgent", "urgencyDetails": "because"},
        )
        assert codes(failures) == [("urgencyDetails", "URGENCY_DETAILS_NOT_ALLOWED")]

    def test_urgency_details_too_long(self):
        failures = registry.validate_payload(
            "URGENCY_DETAILS",
            {"referenceNumber": REFERENCE, "urgencyReason": "legal_need", "urgencyDetails": "x" * 701},
        )
        assert codes(failures) == [("urgencyDetails", "URGENCY_DETAILS_INVALID")]


class TestFieldShapes:
    """Test months, percentages, lists and habitat quantities."""

    @pytest.mark.parametrize("month", [0, 13, "thirteen"])
    def test_month_out_of_range(self, month):
        failures = registry.validate_payload(
            "AWARD_CONTRACT",
            {
                "referenceNumber": REFERENCE,
                "awardContractMonth": month,
                "awardContractYear": 2027,
                "completeOutlineBusinessCaseMonth": 1,
                "completeOutlineBusinessCaseYear": 2027,
            },
        )
        assert codes(failures) == [("awardContractMonth", "MONTH_INVALID")]

    @pytest.mark.parametrize("value", [None, 0, "12.5", 100, Decimal("33.33")])
    def test_valid_percentages(self, value):
        payload = {"referenceNumber": REFERENCE, "percentProperties20PercentDeprived": value}
        assert registry.validate_payload("TWENTY_PERCENT_DEPRIVED", payload) == []

    @pytest.mark.parametrize("value", [-1, "100.5", "12.345", "lots"])
    def test_invalid_percentages(self, value):
        payload = {"referenceNumber": REFERENCE, "percentProperties40PercentDeprived": value}
        assert codes(registry.validate_payload("FORTY_PERCENT_DEPRIVED", payload)) == [
            ("percentProperties40PercentDeprived", "PERCENT_PROPERTIES_40_PERCENT_DEPRIVED_INVALID")
        ]

    def test_risks_need_at_least_one_known_risk(self):
        for risks in ([], ["volcano"]):
            failures = registry.validate_payload("RISK", {"referenceNumber": REFERENCE, "risks": risks})
            assert codes(failures) == [("risks", "RISKS_INVALID")]

    def test_risk_with_property_counts(self):
        payload = {
            "referenceNumber": REFERENCE,
            "risks": ["fluvial_flooding", "coastal_erosion"],
            "maintainingExistingAssets": 12,
            "propertiesBenefitInvestmentCoastalErosion": 0,
        }
        assert registry.validate_payload("RISK", payload) == []

    def test_negative_property_count(self):
        payload = {"referenceNumber": REFERENCE, "noPropertiesAtRisk": False, "reducingFloodRisk50Plus": -3}
        failures = registry.validate_payload("PROPERTY_AFFECTED_FLOODING", payload)
        assert codes(failures) == [("reducingFloodRisk50Plus", "PROPERTY_VALUE_INVALID")]

    def test_current_flood_fluvial_risk_choices(self):
        ok = {"referenceNumber": REFERENCE, "currentFloodFluvialRisk": "very_low"}
        bad = {"referenceNumber": REFERENCE, "currentFloodFluvialRisk": "extreme"}
        assert registry.validate_payload("CURRENT_FLOOD_FLUVIAL_RISK", ok) == []
        assert codes(registry.validate_payload("CURRENT_FLOOD_FLUVIAL_RISK", bad)) == [
            ("currentFloodFluvialRisk", "CURRENT_FLOOD_FLUVIAL_RISK_INVALID")
        ]

    def test_habitat_quantity_required_when_gate_open(self):
        failures = registry.validate_payload(
            "HECTARES_OF_WOODLAND_HABITAT_CREATED_OR_ENHANCED",
            {"referenceNumber": REFERENCE, "woodland": True},
        )
        assert codes(failures) == [
            ("hectaresOfWoodlandHabitatCreatedOrEnhanced", "ENVIRONMENTAL_BENEFITS_QUANTITY_REQUIRED")
        ]

    def test_habitat_quantity_must_be_positive(self):
        failures = registry.validate_payload(
            "HECTARES_OF_WOODLAND_HABITAT_CREATED_OR_ENHANCED",
            {"referenceNumber": REFERENCE, "woodland": True, "hectaresOfWoodlandHabitatCreatedOrEnhanced": 0},
        )
        assert codes(failures) == [
            ("hectaresOfWoodlandHabitatCreatedOrEnhanced", "ENVIRONMENTAL_BENEFITS_QUANTITY_INVALID")
        ]

    def test_habitat_quantity_ignored_when_gate_closed(self):
        failures = registry.validate_payload(
            "HECTARES_OF_WOODLAND_HABITAT_CREATED_OR_ENHANCED",
            {"referenceNumber": REFERENCE, "woodland": False},
        )
        assert failures == []

    def test_custom_registry(self):
        from app.services.levels import LevelSchema
        custom = LevelSchemaRegistry({"ONLY": LevelSchema("ONLY", (FieldRule("flag", RuleKind.BOOLEAN, "FLAG"),))})
        assert custom.names == ("ONLY",)
        assert codes(custom.validate_payload("ONLY", {})) == [("flag", "FLAG_REQUIRED")]


class TestUndeclaredFields:
    """Test that only fields of the requested levels get through."""

    def test_other_level_fields_are_rejected_with_their_names(self):
        payload = {
            "referenceNumber": REFERENCE,
            "name": "Renamed Scheme",
            "awardContractMonth": 99,
            "awardContractYear": 2045,
            "financialStartYear": 1500,
        }
        assert codes(registry.validate_payload("PROJECT_NAME", payload)) == [
            ("awardContractMonth", "AWARD_CONTRACT_MONTH_NOT_ALLOWED"),
            ("awardContractYear", "AWARD_CONTRACT_YEAR_NOT_ALLOWED"),
            ("financialStartYear", "FINANCIAL_START_YEAR_NOT_ALLOWED"),
        ]

    def test_fields_of_any_requested_level_are_allowed(self):
        payload = {"referenceNumber": REFERENCE, "name": "Renamed Scheme", "financialStartYear": 2026}
        assert registry.validate_payload(["PROJECT_NAME", "FINANCIAL_START_YEAR"], payload) == []

    def test_strip_keeps_declared_fields(self):
        payload = {"referenceNumber": REFERENCE, "name": "Renamed Scheme"}
        assert registry.strip_payload("PROJECT_NAME", payload) == payload

    def test_strip_drops_closed_habitat_quantity(self):
        payload = {
            "referenceNumber": REFERENCE,
            "woodland": False,
            "hectaresOfWoodlandHabitatCreatedOrEnhanced": 4,
        }
        assert registry.strip_payload("HECTARES_OF_WOODLAND_HABITAT_CREATED_OR_ENHANCED", payload) == {
            "referenceNumber": REFERENCE,
            "woodland": False,
        }

    def test_strip_keeps_open_habitat_quantity(self):
        payload = {
            "referenceNumber": REFERENCE,
            "woodland": True,
            "hectaresOfWoodlandHabitatCreatedOrEnhanced": 4,
        }
        assert registry.strip_payload("HECTARES_OF_WOODLAND_HABITAT_CREATED_OR_ENHANCED", payload) == payload
