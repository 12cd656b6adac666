"""
@file levels.py
@brief Validation levels of the project save wizard and their field rules

@details
Each wizard step ("level") activates a set of FieldRules. Requesting
several levels merges their rules; a field declared by more than one
level keeps the least restrictive combination:

- required only if every declaring level requires it
- numeric and length bounds widen to cover both
- allowed choices are unioned

Merged rules are turned into a pydantic model (cached per rule set) and
pydantic errors are translated into field-level ValidationFailures with
<FIELD>_REQUIRED / <FIELD>_INVALID / <FIELD>_NOT_ALLOWED codes.

Conditional rules (e.g. earliestWithGia* only when couldStartEarly is
true) are resolved against the payload before the model is built.
Keys that none of the requested levels declare are rejected, and
strip_payload() drops declared fields whose condition does not hold, so
only checked values reach storage.

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

import logging
import re
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, Dict, Iterable, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import ConfigDict, Field, StringConstraints, ValidationError, create_model

from app.core.errors import InvalidLevelError, ValidationFailure

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------------
# Allowed values
# ----------------------------------------------------------------------------

PROJECT_TYPES = ("DEF", "REP", "REF", "HCR", "STR", "STU", "ELO")
INTERVENTION_PROJECT_TYPES = ("DEF", "REP", "REF")
INTERVENTION_TYPES = ("NFM", "PFR", "SUDS", "OTHER")
RISK_TYPES = (
    "fluvial_flooding",
    "tidal_flooding",
    "groundwater_flooding",
    "surface_water_flooding",
    "sea_flooding",
    "reservoir_flooding",
    "coastal_erosion",
)
FLOOD_RISK_LEVELS = ("high", "medium", "low", "very_low")
COASTAL_EROSION_RISK_LEVELS = ("medium_term", "longer_term")
URGENCY_NOT_URGENT = "not_urgent"
URGENCY_REASONS = (
    URGENCY_NOT_URGENT,
    "statutory_need",
    "legal_need",
    "health_and_safety",
    "emergency_works",
    "time_limited",
)
CONFIDENCE_LEVELS = ("high", "medium_high", "medium_low", "low", "not_applicable")

NAME_PATTERN = r"^[A-Za-z0-9 _-]+$"
REFERENCE_NUMBER_PATTERN = r"^[A-Z]{2}C501E/[0-9]{3}A/[0-9]{3}A$"

MIN_YEAR = 2000
MAX_YEAR = 2100
MAX_TEXT_LENGTH = 700


# ----------------------------------------------------------------------------
# Rules
# ----------------------------------------------------------------------------

class RuleKind(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    STRING_LIST = "string_list"
    DECIMAL = "decimal"


@dataclass(frozen=True)
class When:
    """Condition on another payload field: its value is (not) one of `values`"""

    field: str
    values: Tuple[Any, ...]
    negate: bool = False

    def holds(self, payload: Mapping[str, Any]) -> bool:
        matched = payload.get(self.field) in self.values
        return not matched if self.negate else matched


@dataclass(frozen=True)
class FieldRule:
    """
    Constraints on one wire field.

    `code` is the prefix of the error codes produced for the field.
    When `condition` is set the rule only applies while it holds; if
    `forbidden_otherwise` is also set the field must then be absent.
    """

    name: str
    kind: RuleKind
    code: str
    required: bool = True
    minimum: Optional[Union[int, Decimal]] = None
    maximum: Optional[Union[int, Decimal]] = None
    max_length: Optional[int] = None
    min_items: Optional[int] = None
    decimal_places: Optional[int] = None
    choices: Optional[Tuple[str, ...]] = None
    pattern: Optional[str] = None
    condition: Optional[When] = None
    forbidden_otherwise: bool = False

    def optional(self) -> "FieldRule":
        return replace(self, required=False)

    def merge(self, other: "FieldRule") -> "FieldRule":
        """Least restrictive combination of two rules for the same field"""
        if self == other:
            return self

        merged = replace(
            self,
            required=self.required and other.required,
            minimum=_widen(min, self.minimum, other.minimum),
            maximum=_widen(max, self.maximum, other.maximum),
            max_length=_widen(max, self.max_length, other.max_length),
            min_items=_widen(min, self.min_items, other.min_items),
            decimal_places=_widen(max, self.decimal_places, other.decimal_places),
            choices=(
                None
                if self.choices is None or other.choices is None
                else tuple(dict.fromkeys(self.choices + other.choices))
            ),
            pattern=self.pattern if self.pattern == other.pattern else None,
        )
        if self.condition != other.condition:
            merged = replace(merged, condition=None, required=False, forbidden_otherwise=False)
        else:
            merged = replace(merged, forbidden_otherwise=self.forbidden_otherwise and other.forbidden_otherwise)
        return merged


def _widen(pick, left, right):
    if left is None or right is None:
        return None
    return pick(left, right)


def _month(name: str, code: str = "MONTH", **kwargs) -> FieldRule:
    return FieldRule(name, RuleKind.INTEGER, code, minimum=1, maximum=12, **kwargs)


def _year(name: str, code: str = "YEAR", **kwargs) -> FieldRule:
    return FieldRule(name, RuleKind.INTEGER, code, minimum=MIN_YEAR, maximum=MAX_YEAR, **kwargs)


def _count(name: str) -> FieldRule:
    return FieldRule(name, RuleKind.INTEGER, "PROPERTY_VALUE", required=False, minimum=0)


def _choice(name: str, code: str, choices: Tuple[str, ...], **kwargs) -> FieldRule:
    return FieldRule(name, RuleKind.STRING, code, choices=choices, **kwargs)


def _percentage(name: str, code: str) -> FieldRule:
    return FieldRule(
        name,
        RuleKind.DECIMAL,
        code,
        required=False,
        minimum=Decimal("0"),
        maximum=Decimal("100"),
        decimal_places=2,
    )


REFERENCE_NUMBER = FieldRule("referenceNumber", RuleKind.STRING, "REFERENCE_NUMBER", pattern=REFERENCE_NUMBER_PATTERN)
NAME = FieldRule("name", RuleKind.STRING, "NAME", pattern=NAME_PATTERN, max_length=255)
AREA_ID = FieldRule("areaId", RuleKind.INTEGER, "AREA_ID", minimum=1)
PROJECT_TYPE = _choice("projectType", "PROJECT_TYPE", PROJECT_TYPES)
INTERVENTION_CONDITION = When("projectType", INTERVENTION_PROJECT_TYPES)
PROJECT_INTERVENTION_TYPES = FieldRule(
    "projectInterventionTypes",
    RuleKind.STRING_LIST,
    "PROJECT_INTERVENTION_TYPE",
    choices=INTERVENTION_TYPES,
    min_items=1,
    condition=INTERVENTION_CONDITION,
    forbidden_otherwise=True,
)
MAIN_INTERVENTION_TYPE = _choice(
    "mainInterventionType",
    "PROJECT_MAIN_INTERVENTION_TYPE",
    INTERVENTION_TYPES,
    condition=INTERVENTION_CONDITION,
    forbidden_otherwise=True,
)
FINANCIAL_START_YEAR = _year("financialStartYear", "FINANCIAL_START_YEAR")
FINANCIAL_END_YEAR = _year("financialEndYear", "FINANCIAL_END_YEAR")

COULD_START_EARLY = FieldRule("couldStartEarly", RuleKind.BOOLEAN, "COULD_START_EARLY")
EARLY_START_CONDITION = When("couldStartEarly", (True,))

URGENCY_REASON = _choice("urgencyReason", "URGENCY_REASON", URGENCY_REASONS)
URGENCY_DETAILS = FieldRule(
    "urgencyDetails",
    RuleKind.STRING,
    "URGENCY_DETAILS",
    max_length=MAX_TEXT_LENGTH,
    condition=When("urgencyReason", (URGENCY_NOT_URGENT,), negate=True),
    forbidden_otherwise=True,
)

RISKS = FieldRule("risks", RuleKind.STRING_LIST, "RISKS", choices=RISK_TYPES, min_items=1)
NO_PROPERTIES_AT_FLOOD_RISK = FieldRule("noPropertiesAtRisk", RuleKind.BOOLEAN, "NO_PROPERTIES_AT_FLOOD_RISK")
NO_PROPERTIES_AT_COASTAL_EROSION_RISK = FieldRule(
    "noPropertiesAtCoastalErosionRisk", RuleKind.BOOLEAN, "NO_PROPERTIES_AT_COASTAL_EROSION_RISK"
)
FLOOD_PROPERTY_COUNTS = tuple(
    _count(name)
    for name in (
        "maintainingExistingAssets",
        "reducingFloodRisk50Plus",
        "reducingFloodRiskLess50",
        "increasingFloodResilience",
    )
)
COASTAL_PROPERTY_COUNTS = tuple(
    _count(name)
    for name in ("propertiesBenefitMaintainingAssetsCoastal", "propertiesBenefitInvestmentCoastalErosion")
)

## @brief (gate field, gate level, quantity field, quantity level) per habitat benefit
ENVIRONMENTAL_BENEFITS_FIELDS = (
    ("intertidalHabitat", "INTERTIDAL_HABITAT",
     "hectaresOfIntertidalHabitatCreatedOrEnhanced",
     "HECTARES_OF_INTERTIDAL_HABITAT_CREATED_OR_ENHANCED"),
    ("woodland", "WOODLAND",
     "hectaresOfWoodlandHabitatCreatedOrEnhanced",
     "HECTARES_OF_WOODLAND_HABITAT_CREATED_OR_ENHANCED"),
    ("wetWoodland", "WET_WOODLAND",
     "hectaresOfWetWoodlandHabitatCreatedOrEnhanced",
     "HECTARES_OF_WET_WOODLAND_HABITAT_CREATED_OR_ENHANCED"),
    ("wetlandOrWetGrassland", "WETLAND_OR_WET_GRASSLAND",
     "hectaresOfWetlandOrWetGrasslandCreatedOrEnhanced",
     "HECTARES_OF_WETLAND_OR_WET_GRASSLAND_CREATED_OR_ENHANCED"),
    ("grassland", "GRASSLAND",
     "hectaresOfGrasslandHabitatCreatedOrEnhanced",
     "HECTARES_OF_GRASSLAND_HABITAT_CREATED_OR_ENHANCED"),
    ("heathland", "HEATHLAND",
     "hectaresOfHeathlandCreatedOrEnhanced",
     "HECTARES_OF_HEATHLAND_CREATED_OR_ENHANCED"),
    ("pondsLakes", "PONDS_LAKES",
     "hectaresOfPondOrLakeHabitatCreatedOrEnhanced",
     "HECTARES_OF_POND_OR_LAKE_HABITAT_CREATED_OR_ENHANCED"),
    ("arableLand", "ARABLE_LAND",
     "hectaresOfArableLandLakeHabitatCreatedOrEnhanced",
     "HECTARES_OF_ARABLE_LAND_LAKE_HABITAT_CREATED_OR_ENHANCED"),
    ("comprehensiveRestoration", "COMPREHENSIVE_RESTORATION",
     "kilometresOfWatercourseEnhancedOrCreatedComprehensive",
     "KILOMETRES_OF_WATERCOURSE_ENHANCED_OR_CREATED_COMPREHENSIVE"),
    ("partialRestoration", "PARTIAL_RESTORATION",
     "kilometresOfWatercourseEnhancedOrCreatedPartial",
     "KILOMETRES_OF_WATERCOURSE_ENHANCED_OR_CREATED_PARTIAL"),
    ("createHabitatWatercourse", "CREATE_HABITAT_WATERCOURSE",
     "kilometresOfWatercourseEnhancedOrCreatedSingle",
     "KILOMETRES_OF_WATERCOURSE_ENHANCED_OR_CREATED_SINGLE"),
)


# ----------------------------------------------------------------------------
# Levels
# ----------------------------------------------------------------------------

@dataclass(frozen=True)
class LevelSchema:
    name: str
    rules: Tuple[FieldRule, ...]


def _level(name: str, *rules: FieldRule, with_reference: bool = True) -> LevelSchema:
    if with_reference:
        rules = (REFERENCE_NUMBER,) + rules
    return LevelSchema(name, rules)


def _environmental_benefit_levels() -> List[LevelSchema]:
    levels = [
        _level(
            "ENVIRONMENTAL_BENEFITS",
            FieldRule("environmentalBenefits", RuleKind.BOOLEAN, "ENVIRONMENTAL_BENEFITS"),
        )
    ]
    for gate, gate_level, quantity, quantity_level in ENVIRONMENTAL_BENEFITS_FIELDS:
        gate_rule = FieldRule(gate, RuleKind.BOOLEAN, "ENVIRONMENTAL_BENEFITS_GATE")
        quantity_rule = FieldRule(
            quantity,
            RuleKind.DECIMAL,
            "ENVIRONMENTAL_BENEFITS_QUANTITY",
            minimum=Decimal("0.01"),
            decimal_places=2,
            condition=When(gate, (True,)),
        )
        levels.append(_level(gate_level, gate_rule))
        levels.append(_level(quantity_level, gate_rule, quantity_rule))
    return levels


def _build_levels() -> Dict[str, LevelSchema]:
    start_obc = (_month("startOutlineBusinessCaseMonth"), _year("startOutlineBusinessCaseYear"))
    complete_obc = (_month("completeOutlineBusinessCaseMonth"), _year("completeOutlineBusinessCaseYear"))
    award_contract = (_month("awardContractMonth"), _year("awardContractYear"))
    start_construction = (_month("startConstructionMonth"), _year("startConstructionYear"))
    ready_for_service = (_month("readyForServiceMonth"), _year("readyForServiceYear"))
    earliest_with_gia = (
        _month("earliestWithGiaMonth", condition=EARLY_START_CONDITION, forbidden_otherwise=True),
        _year("earliestWithGiaYear", condition=EARLY_START_CONDITION, forbidden_otherwise=True),
    )

    levels = [
        _level(
            "INITIAL_SAVE",
            NAME,
            AREA_ID,
            PROJECT_TYPE,
            PROJECT_INTERVENTION_TYPES,
            MAIN_INTERVENTION_TYPE,
            FINANCIAL_START_YEAR,
            FINANCIAL_END_YEAR,
            with_reference=False,
        ),
        _level("PROJECT_NAME", NAME),
        _level("PROJECT_AREA", AREA_ID),
        _level("PROJECT_TYPE", PROJECT_TYPE, PROJECT_INTERVENTION_TYPES, MAIN_INTERVENTION_TYPE),
        _level("FINANCIAL_START_YEAR", FINANCIAL_START_YEAR),
        _level("FINANCIAL_END_YEAR", FINANCIAL_END_YEAR),
        _level("START_OUTLINE_BUSINESS_CASE", *start_obc),
        _level("COMPLETE_OUTLINE_BUSINESS_CASE", *complete_obc, *start_obc),
        _level("AWARD_CONTRACT", *award_contract, *complete_obc),
        _level("START_CONSTRUCTION", *start_construction, *award_contract),
        _level("READY_FOR_SERVICE", *ready_for_service, *start_construction),
        _level("COULD_START_EARLY", COULD_START_EARLY),
        _level("EARLIEST_WITH_GIA", COULD_START_EARLY, *earliest_with_gia),
        _level(
            "RISK",
            RISKS,
            NO_PROPERTIES_AT_FLOOD_RISK.optional(),
            *FLOOD_PROPERTY_COUNTS,
            NO_PROPERTIES_AT_COASTAL_EROSION_RISK.optional(),
            *COASTAL_PROPERTY_COUNTS,
        ),
        _level("MAIN_RISK", _choice("mainRisk", "MAIN_RISK", RISK_TYPES)),
        _level("PROPERTY_AFFECTED_FLOODING", NO_PROPERTIES_AT_FLOOD_RISK, *FLOOD_PROPERTY_COUNTS),
        _level(
            "PROPERTY_AFFECTED_COASTAL_EROSION",
            NO_PROPERTIES_AT_COASTAL_EROSION_RISK,
            *COASTAL_PROPERTY_COUNTS,
        ),
        _level(
            "TWENTY_PERCENT_DEPRIVED",
            _percentage("percentProperties20PercentDeprived", "PERCENT_PROPERTIES_20_PERCENT_DEPRIVED"),
        ),
        _level(
            "FORTY_PERCENT_DEPRIVED",
            _percentage("percentProperties40PercentDeprived", "PERCENT_PROPERTIES_40_PERCENT_DEPRIVED"),
        ),
        _level(
            "CURRENT_FLOOD_FLUVIAL_RISK",
            _choice("currentFloodFluvialRisk", "CURRENT_FLOOD_FLUVIAL_RISK", FLOOD_RISK_LEVELS),
        ),
        _level(
            "CURRENT_FLOOD_SURFACE_WATER_RISK",
            _choice("currentFloodSurfaceWaterRisk", "CURRENT_FLOOD_SURFACE_WATER_RISK", FLOOD_RISK_LEVELS),
        ),
        _level(
            "CURRENT_COASTAL_EROSION_RISK",
            _choice("currentCoastalErosionRisk", "CURRENT_COASTAL_EROSION_RISK", COASTAL_EROSION_RISK_LEVELS),
        ),
        _level("APPROACH", FieldRule("approach", RuleKind.STRING, "APPROACH", max_length=MAX_TEXT_LENGTH)),
        _level("URGENCY_REASON", URGENCY_REASON),
        _level("URGENCY_DETAILS", URGENCY_REASON, URGENCY_DETAILS),
        _level(
            "CONFIDENCE_HOMES_BETTER_PROTECTED",
            _choice("confidenceHomesBetterProtected", "CONFIDENCE_HOMES_BETTER_PROTECTED", CONFIDENCE_LEVELS),
        ),
        _level(
            "CONFIDENCE_HOMES_BY_GATEWAY_FOUR",
            _choice("confidenceHomesByGatewayFour", "CONFIDENCE_HOMES_BY_GATEWAY_FOUR", CONFIDENCE_LEVELS),
        ),
        _level(
            "CONFIDENCE_SECURED_PARTNERSHIP_FUNDING",
            _choice(
                "confidenceSecuredPartnershipFunding",
                "CONFIDENCE_SECURED_PARTNERSHIP_FUNDING",
                CONFIDENCE_LEVELS,
            ),
        ),
        *_environmental_benefit_levels(),
    ]
    return {level.name: level for level in levels}


# ----------------------------------------------------------------------------
# Pydantic model construction
# ----------------------------------------------------------------------------

def _annotation(rule: FieldRule) -> Any:
    if rule.kind == RuleKind.STRING:
        if rule.choices:
            return Literal[rule.choices]
        return Annotated[
            str,
            StringConstraints(
                strip_whitespace=True,
                min_length=1,
                max_length=rule.max_length,
                pattern=rule.pattern,
            ),
        ]
    if rule.kind == RuleKind.INTEGER:
        return Annotated[int, Field(ge=rule.minimum, le=rule.maximum)]
    if rule.kind == RuleKind.BOOLEAN:
        return bool
    if rule.kind == RuleKind.STRING_LIST:
        item = Literal[rule.choices] if rule.choices else str
        return Annotated[List[item], Field(min_length=rule.min_items)]
    if rule.kind == RuleKind.DECIMAL:
        return Annotated[
            Decimal,
            Field(ge=rule.minimum, le=rule.maximum, decimal_places=rule.decimal_places),
        ]
    raise ValueError(f"Unsupported rule kind: {rule.kind}")


@lru_cache(maxsize=256)
def build_model(rules: Tuple[FieldRule, ...]) -> type:
    """Pydantic model enforcing a set of (already merged, active) rules"""
    fields = {}
    for rule in rules:
        annotation = _annotation(rule)
        if rule.required:
            fields[rule.name] = (annotation, ...)
        else:
            fields[rule.name] = (Optional[annotation], None)
    # undeclared keys are reported by validate_payload with their own codes
    return create_model(
        "ProjectLevelPayload",
        __config__=ConfigDict(extra="ignore"),
        **fields,
    )


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _error_prefix(name: str) -> str:
    """awardContractMonth -> AWARD_CONTRACT_MONTH"""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).upper()


def _failure_for(rule: FieldRule, error: Dict[str, Any], payload: Mapping[str, Any]) -> ValidationFailure:
    if error["type"] == "missing" or (rule.required and _is_blank(payload.get(rule.name))):
        return ValidationFailure.invalid(f"{rule.code}_REQUIRED", f"{rule.name} is required", field=rule.name)
    return ValidationFailure.invalid(f"{rule.code}_INVALID", f"{rule.name}: {error['msg']}", field=rule.name)


class LevelSchemaRegistry:
    """
    @brief Maps validation level names to field rules and validates payloads

    @details
    Unknown level names raise InvalidLevelError immediately.
    """

    def __init__(self, levels: Optional[Dict[str, LevelSchema]] = None):
        self.levels = levels if levels is not None else _build_levels()

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self.levels)

    def get(self, level: str) -> LevelSchema:
        try:
            return self.levels[level]
        except (KeyError, TypeError):
            raise InvalidLevelError(level) from None

    def merge(self, levels: Union[str, Iterable[str]]) -> Dict[str, FieldRule]:
        """
        @brief Merge the rules of one or more levels

        @throws InvalidLevelError for an unknown level name, or when no level is given
        """
        if isinstance(levels, str):
            levels = [levels]
        schemas = [self.get(level) for level in levels]
        if not schemas:
            raise InvalidLevelError(None)

        merged: Dict[str, FieldRule] = {}
        for schema in schemas:
            for rule in schema.rules:
                merged[rule.name] = merged[rule.name].merge(rule) if rule.name in merged else rule
        return merged

    def validate_payload(
        self,
        levels: Union[str, Iterable[str]],
        payload: Mapping[str, Any],
    ) -> List[ValidationFailure]:
        """
        @brief Validate a wire payload against the merged rules of `levels`

        @return Field-level failures in rule order, empty when valid
        """
        rules = self.merge(levels)
        failures: List[ValidationFailure] = []
        active: List[FieldRule] = []

        for rule in rules.values():
            if rule.condition is None or rule.condition.holds(payload):
                active.append(rule)
            elif rule.forbidden_otherwise and not _is_blank(payload.get(rule.name)):
                failures.append(
                    ValidationFailure.invalid(
                        f"{rule.code}_NOT_ALLOWED",
                        f"{rule.name} should not be provided for this selection",
                        field=rule.name,
                    )
                )

        for name in payload:
            if name not in rules:
                failures.append(
                    ValidationFailure.invalid(
                        f"{_error_prefix(name)}_NOT_ALLOWED",
                        f"{name} is not allowed at this level",
                        field=name,
                    )
                )

        model = build_model(tuple(active))
        try:
            model.model_validate(dict(payload))
        except ValidationError as exc:
            by_name = {rule.name: rule for rule in active}
            reported = set()
            for error in exc.errors():
                name = error["loc"][0] if error["loc"] else None
                rule = by_name.get(name)
                if rule is None or name in reported:
                    continue
                reported.add(name)
                failures.append(_failure_for(rule, error, payload))

        reported_fields = {failure.field for failure in failures}
        failures.extend(
            failure
            for failure in self._cross_field_failures(rules, payload)
            if failure.field not in reported_fields
        )
        if failures:
            logger.debug(f"Payload failed level rules {list(rules)}: {[f.error_code for f in failures]}")
        return failures

    def strip_payload(self, levels: Union[str, Iterable[str]], payload: Mapping[str, Any]) -> Dict[str, Any]:
        """
        @brief Keep only the payload fields whose rules are active for `levels`

        @details
        Run after validate_payload; a habitat quantity sent while its gate
        is false, for example, is dropped rather than stored.
        """
        rules = self.merge(levels)
        return {
            name: value
            for name, value in payload.items()
            if name in rules and (rules[name].condition is None or rules[name].condition.holds(payload))
        }

    @staticmethod
    def _cross_field_failures(rules: Dict[str, FieldRule], payload: Mapping[str, Any]) -> List[ValidationFailure]:
        main_type = payload.get("mainInterventionType")
        selected = payload.get("projectInterventionTypes")
        if (
            "mainInterventionType" in rules
            and isinstance(selected, list)
            and not _is_blank(main_type)
            and main_type not in selected
        ):
            return [
                ValidationFailure.invalid(
                    f"{MAIN_INTERVENTION_TYPE.code}_INVALID",
                    "mainInterventionType must be one of the selected projectInterventionTypes",
                    field="mainInterventionType",
                )
            ]
        return []


## @brief Default registry shared by the API layer
registry = LevelSchemaRegistry()

## @brief Names of all registered levels
VALIDATION_LEVELS = registry.names
