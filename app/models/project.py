"""
Project Data Model

This module defines the SQLAlchemy ORM models for capital flood-defence
projects and their one-to-one side tables.

Models:
- Project: the proposal itself, refined step by step through the save wizard
- ProjectState: lifecycle state row (draft, submitted, ...)
- AreaProject: ownership link between a project and its RMA
- ReferenceCounter: per-RFCC counters used to mint reference numbers

Record: ProjectRecord (detached view used by the validation services)

Key Attributes:
- reference_number: {RFCC}C501E/{high}A/{low}A, assigned once at creation
- earliest_start_year / project_end_financial_year: the financial year window
- *_month / *_year: lifecycle milestones checked against that window

Author: PAFS Project
License: AGPL-3.0
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from app.db.base import Base


class Project(Base):
    """
    SQLAlchemy ORM model for a flood-defence project proposal.

    Column names match the storage side of the field mapping table in
    app.services.field_mapper, which is the only place wire names live.
    """

    __tablename__ = "pafs_core_projects"
    __table_args__ = (UniqueConstraint("reference_number", "version", name="uq_project_reference_version"),)

    # Identity
    id = Column(BigInteger, primary_key=True, index=True)
    reference_number = Column(String(50), nullable=False, index=True)
    version = Column(Integer, nullable=False, default=1)
    slug = Column(String(50), nullable=False, index=True)
    creator_id = Column(BigInteger, ForeignKey("pafs_core_users.id"), nullable=True)

    # Basic details
    name = Column(String(255), nullable=False, index=True)
    rma_name = Column(String(255), nullable=True)
    project_type = Column(String(20), nullable=True)
    project_intervention_types = Column(String(255), nullable=True)  # comma-delimited
    main_intervention_type = Column(String(20), nullable=True)

    # Financial year window
    earliest_start_year = Column(Integer, nullable=True)
    project_end_financial_year = Column(Integer, nullable=True)

    # Milestones
    start_outline_business_case_month = Column(Integer, nullable=True)
    start_outline_business_case_year = Column(Integer, nullable=True)
    complete_outline_business_case_month = Column(Integer, nullable=True)
    complete_outline_business_case_year = Column(Integer, nullable=True)
    award_contract_month = Column(Integer, nullable=True)
    award_contract_year = Column(Integer, nullable=True)
    start_construction_month = Column(Integer, nullable=True)
    start_construction_year = Column(Integer, nullable=True)
    ready_for_service_month = Column(Integer, nullable=True)
    ready_for_service_year = Column(Integer, nullable=True)
    could_start_early = Column(Boolean, nullable=True)
    earliest_with_gia_month = Column(Integer, nullable=True)
    earliest_with_gia_year = Column(Integer, nullable=True)

    # Risks and properties
    project_risks_protected_against = Column(String(255), nullable=True)  # comma-delimited
    main_source_of_risk = Column(String(50), nullable=True)
    no_properties_at_flood_risk = Column(Boolean, nullable=True)
    properties_benefit_maintaining_assets = Column(Integer, nullable=True)
    properties_benefit_50_percent_reduction = Column(Integer, nullable=True)
    properties_benefit_less_50_percent_reduction = Column(Integer, nullable=True)
    properties_benefit_individual_intervention = Column(Integer, nullable=True)
    no_properties_at_coastal_erosion_risk = Column(Boolean, nullable=True)
    properties_benefit_maintaining_assets_coastal = Column(Integer, nullable=True)
    properties_benefit_investment_coastal_erosion = Column(Integer, nullable=True)
    percent_properties_20_percent_deprived = Column(Numeric(5, 2), nullable=True)
    percent_properties_40_percent_deprived = Column(Numeric(5, 2), nullable=True)
    current_flood_fluvial_risk = Column(String(20), nullable=True)
    current_flood_surface_water_risk = Column(String(20), nullable=True)
    current_coastal_erosion_risk = Column(String(20), nullable=True)

    # Goals, urgency and confidence
    approach = Column(Text, nullable=True)
    urgency_reason = Column(String(50), nullable=True)
    urgency_details = Column(Text, nullable=True)
    urgency_details_updated_at = Column(DateTime, nullable=True)
    confidence_homes_better_protected = Column(String(20), nullable=True)
    confidence_homes_by_gateway_four = Column(String(20), nullable=True)
    confidence_secured_partnership_funding = Column(String(20), nullable=True)

    # Environmental benefits (gate flag plus quantity per habitat)
    environmental_benefits = Column(Boolean, nullable=True)
    intertidal_habitat = Column(Boolean, nullable=True)
    hectares_of_intertidal_habitat_created_or_enhanced = Column(Numeric(10, 2), nullable=True)
    woodland = Column(Boolean, nullable=True)
    hectares_of_woodland_habitat_created_or_enhanced = Column(Numeric(10, 2), nullable=True)
    wet_woodland = Column(Boolean, nullable=True)
    hectares_of_wet_woodland_habitat_created_or_enhanced = Column(Numeric(10, 2), nullable=True)
    wetland_or_wet_grassland = Column(Boolean, nullable=True)
    hectares_of_wetland_or_wet_grassland_created_or_enhanced = Column(Numeric(10, 2), nullable=True)
    grassland = Column(Boolean, nullable=True)
    hectares_of_grassland_habitat_created_or_enhanced = Column(Numeric(10, 2), nullable=True)
    heathland = Column(Boolean, nullable=True)
    hectares_of_heathland_created_or_enhanced = Column(Numeric(10, 2), nullable=True)
    ponds_lakes = Column(Boolean, nullable=True)
    hectares_of_pond_or_lake_habitat_created_or_enhanced = Column(Numeric(10, 2), nullable=True)
    arable_land = Column(Boolean, nullable=True)
    hectares_of_arable_land_lake_habitat_created_or_enhanced = Column(Numeric(10, 2), nullable=True)
    comprehensive_restoration = Column(Boolean, nullable=True)
    kilometres_of_watercourse_enhanced_or_created_comprehensive = Column(Numeric(10, 2), nullable=True)
    partial_restoration = Column(Boolean, nullable=True)
    kilometres_of_watercourse_enhanced_or_created_partial = Column(Numeric(10, 2), nullable=True)
    create_habitat_watercourse = Column(Boolean, nullable=True)
    kilometres_of_watercourse_enhanced_or_created_single = Column(Numeric(10, 2), nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    def to_row(self) -> Dict[str, Any]:
        """Return the loaded column values keyed by column name"""
        return {column.name: getattr(self, column.key) for column in self.__table__.columns}


class ProjectState(Base):
    """Lifecycle state of a project; one row per project"""

    __tablename__ = "pafs_core_states"

    id = Column(BigInteger, primary_key=True, index=True)
    project_id = Column(BigInteger, ForeignKey("pafs_core_projects.id"), nullable=False, unique=True)
    state = Column(String(30), nullable=False, default="draft")

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class AreaProject(Base):
    """Link between a project and the RMA that owns it"""

    __tablename__ = "pafs_core_area_projects"

    id = Column(BigInteger, primary_key=True, index=True)
    project_id = Column(BigInteger, ForeignKey("pafs_core_projects.id"), nullable=False, index=True)
    area_id = Column(BigInteger, ForeignKey("pafs_core_areas.id"), nullable=False, index=True)
    owner = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class ReferenceCounter(Base):
    """
    Reference number counters for one RFCC code.

    The low counter runs 1..999; when it passes 999 the high counter is
    incremented and the low counter restarts at 1.
    """

    __tablename__ = "pafs_core_reference_counters"

    id = Column(BigInteger, primary_key=True, index=True)
    rfcc_code = Column(String(10), nullable=False, unique=True)
    high_counter = Column(Integer, nullable=False, default=0)
    low_counter = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


@dataclass(frozen=True)
class ProjectRecord:
    """Fields of a stored project the validation rules depend on"""

    id: int
    reference_number: str
    name: str
    area_id: Optional[int] = None
    financial_start_year: Optional[int] = None
    financial_end_year: Optional[int] = None
    state: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "referenceNumber": self.reference_number,
            "name": self.name,
            "areaId": self.area_id,
            "financialStartYear": self.financial_start_year,
            "financialEndYear": self.financial_end_year,
            "projectState": self.state,
        }


## @brief Case-insensitive uniqueness of project names, the authoritative duplicate guard
Index("uq_project_name_lower", func.lower(Project.name), unique=True)
