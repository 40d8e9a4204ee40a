# schemas/__init__.py
"""
Pydantic Schemas Package

Contains all Pydantic v2 models for:
- Inquiries and inventory projections
- Match results and validation results
- Workflow decisions
"""

from .matching_schemas import (
    # Enums
    ItineraryStatus, FieldPriority, WorkflowAction, ELIGIBLE_STATUSES,
    # Inquiry
    Inquiry, DateRange, Travelers, Budget, Accommodation, parse_travel_date,
    # Inventory
    InventoryItem, Place, Money, Capacity,
    # Matching output
    Subscores, MatchResult, MissingField, ValidationResult,
    # Workflow
    AskCustomer, SendItineraries, SendItinerariesWithCaveat, ForwardToSupplier,
    WorkflowDecision, MatchingOutcome
)

__all__ = [
    # Enums
    "ItineraryStatus", "FieldPriority", "WorkflowAction", "ELIGIBLE_STATUSES",
    # Inquiry
    "Inquiry", "DateRange", "Travelers", "Budget", "Accommodation", "parse_travel_date",
    # Inventory
    "InventoryItem", "Place", "Money", "Capacity",
    # Matching output
    "Subscores", "MatchResult", "MissingField", "ValidationResult",
    # Workflow
    "AskCustomer", "SendItineraries", "SendItinerariesWithCaveat", "ForwardToSupplier",
    "WorkflowDecision", "MatchingOutcome"
]
