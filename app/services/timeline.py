"""
@file timeline.py
@brief Milestone dates checked against a project's financial year window

@details
A financial year Y runs from April of Y to March of Y+1, so April is the
pivot month for both boundaries. With (year, month) compared
lexicographically:

- regular milestones must satisfy
  (start_year, 4) <= (year, month) < (end_year, 4)
- the "earliest with GIA" milestone (an optional early start) must satisfy
  (year, month) < (start_year, 4)

Checks are skipped when the milestone month or year was not sent, or
when the corresponding financial year is unknown.

@author PAFS Project
@date 2026-01-12
@version 1.0
@license AGPL-3.0
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from app.core.errors import ErrorCodes, ValidationFailure

## @brief Month in which the financial year starts
FINANCIAL_YEAR_START_MONTH = 4


@dataclass(frozen=True)
class Milestone:
    level: str
    label: str
    month_field: str
    year_field: str
    early_start: bool = False


## @brief Milestone checked for each timeline-bearing validation level
MILESTONES = {
    milestone.level: milestone
    for milestone in (
        Milestone(
            "START_OUTLINE_BUSINESS_CASE",
            "Start Outline Business Case",
            "startOutlineBusinessCaseMonth",
            "startOutlineBusinessCaseYear",
        ),
        Milestone(
            "COMPLETE_OUTLINE_BUSINESS_CASE",
            "Complete Outline Business Case",
            "completeOutlineBusinessCaseMonth",
            "completeOutlineBusinessCaseYear",
        ),
        Milestone("AWARD_CONTRACT", "Award Contract", "awardContractMonth", "awardContractYear"),
        Milestone("START_CONSTRUCTION", "Start Construction", "startConstructionMonth", "startConstructionYear"),
        Milestone("READY_FOR_SERVICE", "Ready for Service", "readyForServiceMonth", "readyForServiceYear"),
        Milestone(
            "EARLIEST_WITH_GIA",
            "Earliest With GIA",
            "earliestWithGiaMonth",
            "earliestWithGiaYear",
            early_start=True,
        ),
    )
}


def is_timeline_level(level: Optional[str]) -> bool:
    return level in MILESTONES


def _as_int(value: Any) -> Optional[int]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def is_before_financial_start(month: int, year: int, start_year: int) -> bool:
    return (year, month) < (start_year, FINANCIAL_YEAR_START_MONTH)


def is_after_financial_end(month: int, year: int, end_year: int) -> bool:
    return (year, month) >= (end_year, FINANCIAL_YEAR_START_MONTH)


def check_milestone(
    month: Any,
    year: Any,
    level: str,
    financial_start_year: Any,
    financial_end_year: Any,
) -> Optional[ValidationFailure]:
    """
    @brief Check one milestone date against the financial year window

    @param month Milestone month, 1-12
    @param year Milestone year
    @param level Validation level selecting the milestone
    @param financial_start_year Stored first financial year
    @param financial_end_year Stored last financial year
    @return None when valid or not checkable, else a field-level failure
    """
    milestone = MILESTONES.get(level)
    month, year = _as_int(month), _as_int(year)
    if milestone is None or month is None or year is None:
        return None

    start_year = _as_int(financial_start_year)
    end_year = _as_int(financial_end_year)

    if milestone.early_start:
        if start_year is not None and not is_before_financial_start(month, year, start_year):
            return ValidationFailure.invalid(
                ErrorCodes.DATE_AFTER_FINANCIAL_START,
                f"{milestone.label} must be before the financial start year (before April {start_year})",
                field=milestone.month_field,
            )
        return None

    if start_year is not None and is_before_financial_start(month, year, start_year):
        return ValidationFailure.invalid(
            ErrorCodes.DATE_BEFORE_FINANCIAL_START,
            f"{milestone.label} must be within the financial year range (starts April {start_year})",
            field=milestone.month_field,
        )
    if end_year is not None and is_after_financial_end(month, year, end_year):
        return ValidationFailure.invalid(
            ErrorCodes.DATE_AFTER_FINANCIAL_END,
            f"{milestone.label} must be within the financial year range (ends March {end_year})",
            field=milestone.month_field,
        )
    return None


def validate_timeline(
    payload: Mapping[str, Any],
    level: str,
    financial_start_year: Any,
    financial_end_year: Any,
) -> Optional[ValidationFailure]:
    """Check the milestone selected by `level` using the values in `payload`"""
    milestone = MILESTONES.get(level)
    if milestone is None:
        return None
    return check_milestone(
        payload.get(milestone.month_field),
        payload.get(milestone.year_field),
        level,
        financial_start_year,
        financial_end_year,
    )
