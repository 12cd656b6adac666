"""
@file field_mapper.py
@brief Table-driven conversion between wire and storage field names

@details
PROJECT_FIELDS is the single source of truth for how a project field is
named on the wire, which column stores it, and how its value is converted
in each direction. Nothing else in the code base decides a field's type.

Conversion kinds:
- PASSTHROUGH: value copied unchanged
- ARRAY: list <-> comma-delimited string
- NUMBER: numeric string -> int/float, Decimal -> int/float
- PERCENTAGE: string -> Decimal on the way in, number -> string on the way
  out; a Decimal keeps its scale so "12.50" comes back as "12.50"

Fields are presence-checked, not truth-checked: a field explicitly sent as
None, 0 or False is still written.

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class FieldKind(str, Enum):
    PASSTHROUGH = "passthrough"
    ARRAY = "array"
    NUMBER = "number"
    PERCENTAGE = "percentage"


@dataclass(frozen=True)
class FieldSpec:
    wire: str
    column: str
    kind: FieldKind = FieldKind.PASSTHROUGH


_A = FieldKind.ARRAY
_N = FieldKind.NUMBER
_P = FieldKind.PERCENTAGE

## @brief Writable project fields: wire name, column, conversion kind
PROJECT_FIELDS = (
    FieldSpec("name", "name"),
    FieldSpec("rmaName", "rma_name"),
    FieldSpec("projectType", "project_type"),
    FieldSpec("projectInterventionTypes", "project_intervention_types", _A),
    FieldSpec("mainInterventionType", "main_intervention_type"),
    FieldSpec("financialStartYear", "earliest_start_year", _N),
    FieldSpec("financialEndYear", "project_end_financial_year", _N),
    FieldSpec("startOutlineBusinessCaseMonth", "start_outline_business_case_month", _N),
    FieldSpec("startOutlineBusinessCaseYear", "start_outline_business_case_year", _N),
    FieldSpec("completeOutlineBusinessCaseMonth", "complete_outline_business_case_month", _N),
    FieldSpec("completeOutlineBusinessCaseYear", "complete_outline_business_case_year", _N),
    FieldSpec("awardContractMonth", "award_contract_month", _N),
    FieldSpec("awardContractYear", "award_contract_year", _N),
    FieldSpec("startConstructionMonth", "start_construction_month", _N),
    FieldSpec("startConstructionYear", "start_construction_year", _N),
    FieldSpec("readyForServiceMonth", "ready_for_service_month", _N),
    FieldSpec("readyForServiceYear", "ready_for_service_year", _N),
    FieldSpec("couldStartEarly", "could_start_early"),
    FieldSpec("earliestWithGiaMonth", "earliest_with_gia_month", _N),
    FieldSpec("earliestWithGiaYear", "earliest_with_gia_year", _N),
    FieldSpec("risks", "project_risks_protected_against", _A),
    FieldSpec("mainRisk", "main_source_of_risk"),
    FieldSpec("noPropertiesAtRisk", "no_properties_at_flood_risk"),
    FieldSpec("maintainingExistingAssets", "properties_benefit_maintaining_assets", _N),
    FieldSpec("reducingFloodRisk50Plus", "properties_benefit_50_percent_reduction", _N),
    FieldSpec("reducingFloodRiskLess50", "properties_benefit_less_50_percent_reduction", _N),
    FieldSpec("increasingFloodResilience", "properties_benefit_individual_intervention", _N),
    FieldSpec("noPropertiesAtCoastalErosionRisk", "no_properties_at_coastal_erosion_risk"),
    FieldSpec("propertiesBenefitMaintainingAssetsCoastal", "properties_benefit_maintaining_assets_coastal", _N),
    FieldSpec("propertiesBenefitInvestmentCoastalErosion", "properties_benefit_investment_coastal_erosion", _N),
    FieldSpec("percentProperties20PercentDeprived", "percent_properties_20_percent_deprived", _P),
    FieldSpec("percentProperties40PercentDeprived", "percent_properties_40_percent_deprived", _P),
    FieldSpec("currentFloodFluvialRisk", "current_flood_fluvial_risk"),
    FieldSpec("currentFloodSurfaceWaterRisk", "current_flood_surface_water_risk"),
    FieldSpec("currentCoastalErosionRisk", "current_coastal_erosion_risk"),
    FieldSpec("approach", "approach"),
    FieldSpec("urgencyReason", "urgency_reason"),
    FieldSpec("urgencyDetails", "urgency_details"),
    FieldSpec("confidenceHomesBetterProtected", "confidence_homes_better_protected"),
    FieldSpec("confidenceHomesByGatewayFour", "confidence_homes_by_gateway_four"),
    FieldSpec("confidenceSecuredPartnershipFunding", "confidence_secured_partnership_funding"),
    FieldSpec("environmentalBenefits", "environmental_benefits"),
    FieldSpec("intertidalHabitat", "intertidal_habitat"),
    FieldSpec("hectaresOfIntertidalHabitatCreatedOrEnhanced", "hectares_of_intertidal_habitat_created_or_enhanced", _N),
    FieldSpec("woodland", "woodland"),
    FieldSpec("hectaresOfWoodlandHabitatCreatedOrEnhanced", "hectares_of_woodland_habitat_created_or_enhanced", _N),
    FieldSpec("wetWoodland", "wet_woodland"),
    FieldSpec("hectaresOfWetWoodlandHabitatCreatedOrEnhanced", "hectares_of_wet_woodland_habitat_created_or_enhanced", _N),
    FieldSpec("wetlandOrWetGrassland", "wetland_or_wet_grassland"),
    FieldSpec(
        "hectaresOfWetlandOrWetGrasslandCreatedOrEnhanced",
        "hectares_of_wetland_or_wet_grassland_created_or_enhanced",
        _N,
    ),
    FieldSpec("grassland", "grassland"),
    FieldSpec("hectaresOfGrasslandHabitatCreatedOrEnhanced", "hectares_of_grassland_habitat_created_or_enhanced", _N),
    FieldSpec("heathland", "heathland"),
    FieldSpec("hectaresOfHeathlandCreatedOrEnhanced", "hectares_of_heathland_created_or_enhanced", _N),
    FieldSpec("pondsLakes", "ponds_lakes"),
    FieldSpec("hectaresOfPondOrLakeHabitatCreatedOrEnhanced", "hectares_of_pond_or_lake_habitat_created_or_enhanced", _N),
    FieldSpec("arableLand", "arable_land"),
    FieldSpec(
        "hectaresOfArableLandLakeHabitatCreatedOrEnhanced",
        "hectares_of_arable_land_lake_habitat_created_or_enhanced",
        _N,
    ),
    FieldSpec("comprehensiveRestoration", "comprehensive_restoration"),
    FieldSpec(
        "kilometresOfWatercourseEnhancedOrCreatedComprehensive",
        "kilometres_of_watercourse_enhanced_or_created_comprehensive",
        _N,
    ),
    FieldSpec("partialRestoration", "partial_restoration"),
    FieldSpec(
        "kilometresOfWatercourseEnhancedOrCreatedPartial",
        "kilometres_of_watercourse_enhanced_or_created_partial",
        _N,
    ),
    FieldSpec("createHabitatWatercourse", "create_habitat_watercourse"),
    FieldSpec(
        "kilometresOfWatercourseEnhancedOrCreatedSingle",
        "kilometres_of_watercourse_enhanced_or_created_single",
        _N,
    ),
)

## @brief Read-only fields added when a stored project is returned
PROJECT_SELECT_FIELDS = PROJECT_FIELDS + (
    FieldSpec("id", "id", _N),
    FieldSpec("referenceNumber", "reference_number"),
    FieldSpec("slug", "slug"),
    FieldSpec("urgencyDetailsUpdatedAt", "urgency_details_updated_at"),
    FieldSpec("createdAt", "created_at"),
    FieldSpec("updatedAt", "updated_at"),
)

## @brief One-to-one side tables flattened into the wire object, keyed by table name
PROJECT_JOIN_TABLES = {
    "pafs_core_states": (FieldSpec("projectState", "state"),),
    "pafs_core_area_projects": (FieldSpec("areaId", "area_id", _N), FieldSpec("isOwner", "owner")),
}

def _parse_number(value: str) -> Any:
    """Parse a numeric string; empty becomes None, unparsable text is kept"""
    text = value.strip()
    if text == "":
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return value


def _format_number(value: Any) -> str:
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _array_to_storage(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return value


def _array_to_wire(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",")] if value else []
    return value


def _number_to_storage(value: Any) -> Any:
    if isinstance(value, str):
        return _parse_number(value)
    return value


def _number_to_wire(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, str):
        return _parse_number(value)
    return value


def _percentage_to_storage(value: Any) -> Any:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        # Decimal keeps the sent scale, "12.50" stays 12.50
        try:
            return Decimal(value.strip())
        except InvalidOperation:
            return value
    return value


def _percentage_to_wire(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _format_number(value)
    return value


_TO_STORAGE = {
    FieldKind.PASSTHROUGH: lambda value: value,
    FieldKind.ARRAY: _array_to_storage,
    FieldKind.NUMBER: _number_to_storage,
    FieldKind.PERCENTAGE: _percentage_to_storage,
}

_TO_WIRE = {
    FieldKind.PASSTHROUGH: lambda value: value,
    FieldKind.ARRAY: _array_to_wire,
    FieldKind.NUMBER: _number_to_wire,
    FieldKind.PERCENTAGE: _percentage_to_wire,
}


class FieldMapper:
    """
    @brief Converts project payloads between wire and storage form
    """

    @staticmethod
    def to_storage(wire: Mapping[str, Any]) -> Dict[str, Any]:
        """
        @brief Map a wire payload to column values

        @details
        Only writable fields present in `wire` are mapped; read-only and
        unknown keys (referenceNumber, areaId, ...) are ignored.
        """
        return {
            spec.column: _TO_STORAGE[spec.kind](wire[spec.wire])
            for spec in PROJECT_FIELDS
            if spec.wire in wire
        }

    @staticmethod
    def to_wire(row: Mapping[str, Any]) -> Dict[str, Any]:
        """
        @brief Map a storage row to a flat wire object

        @details
        Joined side tables are looked up under their table name and may be
        a single mapping or a list of mappings, of which the first is used.
        """
        wire = FieldMapper._map_row(row, PROJECT_SELECT_FIELDS)
        for table, specs in PROJECT_JOIN_TABLES.items():
            joined = row.get(table)
            if isinstance(joined, (list, tuple)):
                joined = joined[0] if joined else None
            if joined:
                wire.update(FieldMapper._map_row(joined, specs))
        return wire

    @staticmethod
    def _map_row(row: Mapping[str, Any], specs) -> Dict[str, Any]:
        return {
            spec.wire: _TO_WIRE[spec.kind](row[spec.column])
            for spec in specs
            if spec.column in row
        }
