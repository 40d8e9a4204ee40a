"""
Field Validator
Decides whether an inquiry carries enough information to search inventory

Required (inquiry is invalid without them):
- destination
- travel dates (start and end)
- number of adult travelers (>= 1)

Optional but flagged (suggested to the customer, never blocking):
- budget amount
- hotel type
- meal plan

Completeness is the share of a fixed checklist that is present and is
reported for valid and invalid inquiries alike.
"""

from typing import Dict, List, Optional

from loguru import logger

from ..schemas.matching_schemas import (
    FieldPriority,
    Inquiry,
    MissingField,
    ValidationResult,
)


COMPLETENESS_CHECKLIST = (
    "destination",
    "dates",
    "travelers",
    "budget",
    "accommodation",
    "meal_plan",
    "room_category",
)


# ============================================
# Clarifying questions
# ============================================

DESTINATION_FIELD = MissingField(
    field="destination",
    label="Destination (where they want to go)",
    question="Which destination would you like to visit?",
    priority=FieldPriority.CRITICAL
)

DATES_FIELD = MissingField(
    field="dateRange",
    label="Travel start date and Travel end date",
    question="When would you like to travel? Please provide your preferred travel dates.",
    priority=FieldPriority.CRITICAL
)

TRAVELERS_FIELD = MissingField(
    field="travelers",
    label="Number of adult travelers",
    question="How many adults will be traveling?",
    priority=FieldPriority.CRITICAL
)

BUDGET_FIELD = MissingField(
    field="budget",
    label="Budget amount",
    question="What is your budget for this trip?",
    priority=FieldPriority.HIGH
)

HOTEL_TYPE_FIELD = MissingField(
    field="accommodation.hotelType",
    label="Hotel preference (budget/standard/premium/luxury)",
    question="What type of accommodation would you prefer?",
    priority=FieldPriority.OPTIONAL
)

MEAL_PLAN_FIELD = MissingField(
    field="mealPlan",
    label="Meal plan preference",
    question="Would you like meals included in your package?",
    priority=FieldPriority.OPTIONAL
)


class FieldValidator:
    """
    Validates inquiries before retrieval
    
    Usage:
        validator = FieldValidator()
        result = validator.validate(inquiry)
        if not result.is_valid:
            ask(result.missing_fields)
    """
    
    def validate(self, inquiry: Inquiry) -> ValidationResult:
        """
        Check required and optional fields of an inquiry
        
        Never raises for bad content: unparsable dates are treated as
        absent and reported as warnings.
        
        Args:
            inquiry: Structured customer inquiry
        
        Returns:
            ValidationResult: Missing fields, suggestions, warnings, completeness
        """
        missing_fields: List[MissingField] = []
        optional_fields: List[MissingField] = []
        warnings = self._collect_warnings(inquiry)
        
        present = self._checklist(inquiry)
        
        if not present["destination"]:
            missing_fields.append(DESTINATION_FIELD)
        if not present["dates"]:
            missing_fields.append(DATES_FIELD)
        if not present["travelers"]:
            missing_fields.append(TRAVELERS_FIELD)
        
        if not present["budget"]:
            optional_fields.append(BUDGET_FIELD)
        if not present["accommodation"]:
            optional_fields.append(HOTEL_TYPE_FIELD)
        if not present["meal_plan"]:
            optional_fields.append(MEAL_PLAN_FIELD)
        
        completeness = sum(present.values()) / len(COMPLETENESS_CHECKLIST)
        
        result = ValidationResult(
            is_valid=not missing_fields,
            missing_fields=missing_fields,
            optional_fields=optional_fields,
            warnings=warnings,
            completeness=round(completeness, 4),
            has_required_fields={
                "destination": present["destination"],
                "dateRange": present["dates"],
                "travelers": present["travelers"]
            }
        )
        
        logger.debug(
            f"Inquiry validated: valid={result.is_valid}, "
            f"missing={[f.field for f in missing_fields]}, "
            f"completeness={result.completeness:.0%}"
        )
        
        return result
    
    def _checklist(self, inquiry: Inquiry) -> Dict[str, bool]:
        accommodation = inquiry.accommodation
        return {
            "destination": bool(inquiry.destination and inquiry.destination.strip()),
            "dates": inquiry.travel_dates is not None,
            "travelers": inquiry.adults is not None and inquiry.adults >= 1,
            "budget": inquiry.budget_amount is not None,
            "accommodation": bool(accommodation and accommodation.hotel_type),
            "meal_plan": bool(inquiry.meal_plan),
            "room_category": bool(accommodation and accommodation.room_category),
        }
    
    def _collect_warnings(self, inquiry: Inquiry) -> List[str]:
        warnings = []
        
        date_range = inquiry.date_range
        if date_range is not None:
            start_warning = _date_warning("start", date_range.start, date_range.start_date)
            end_warning = _date_warning("end", date_range.end, date_range.end_date)
            warnings.extend(w for w in (start_warning, end_warning) if w)
            
            start, end = date_range.start_date, date_range.end_date
            if start and end and end < start:
                warnings.append(f"Travel end date {end.isoformat()} is before start date {start.isoformat()}")
        
        travelers = inquiry.travelers
        if travelers is not None:
            if travelers.children and len(travelers.child_ages) != travelers.children:
                warnings.append(
                    f"Child ages provided for {len(travelers.child_ages)} of "
                    f"{travelers.children} children"
                )
            elif not travelers.children and travelers.child_ages:
                warnings.append("Child ages provided but no children listed")
            if travelers.adults is not None and travelers.adults < 0:
                warnings.append(f"Adult count cannot be negative: {travelers.adults}")
        
        if inquiry.budget is not None and inquiry.budget.amount is not None and inquiry.budget.amount <= 0:
            warnings.append(f"Budget amount must be positive: {inquiry.budget.amount}")
        
        for warning in warnings:
            logger.warning(f"Inquiry warning: {warning}")
        
        return warnings


def _date_warning(name: str, raw, parsed) -> Optional[str]:
    if raw is None or parsed is not None:
        return None
    if isinstance(raw, str) and not raw.strip():
        return None
    return f"Could not read travel {name} date: {raw!r}"


# ============================================
# Convenience Function
# ============================================

def validate_inquiry(inquiry: Inquiry) -> ValidationResult:
    """Validate an inquiry with the default validator"""
    return FieldValidator().validate(inquiry)
