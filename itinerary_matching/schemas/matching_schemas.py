# schemas/matching_schemas.py
"""
Pydantic v2 schemas for the Itinerary Matching engine
Inquiry in, inventory projection, per-candidate match results,
validation results and the tagged workflow decision out.

Field names are snake_case; camelCase aliases are accepted and emitted
so CRM documents and front-end payloads validate without translation.
"""

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting both snake_case and camelCase keys"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================
# Enums
# ============================================

class ItineraryStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    PUBLISHED = "published"
    ARCHIVED = "archived"


ELIGIBLE_STATUSES = frozenset({ItineraryStatus.ACTIVE, ItineraryStatus.PUBLISHED})


class FieldPriority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    OPTIONAL = "optional"


class WorkflowAction(str, Enum):
    ASK_CUSTOMER = "ASK_CUSTOMER"
    SEND_ITINERARIES = "SEND_ITINERARIES"
    SEND_ITINERARIES_WITH_NOTE = "SEND_ITINERARIES_WITH_NOTE"
    FORWARD_TO_SUPPLIER = "FORWARD_TO_SUPPLIER"


# ============================================
# Inquiry
# ============================================

DateInput = Union[datetime, date, str]


def parse_travel_date(value: Optional[DateInput]) -> Optional[date]:
    """
    Coerce a date-like value into a date

    Unparsable or empty values come back as None; they are never an error.

    Example:
        >>> parse_travel_date("2025-06-01T00:00:00Z")
        datetime.date(2025, 6, 1)
        >>> parse_travel_date("next summer") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


class DateRange(CamelModel):
    start: Optional[DateInput] = None
    end: Optional[DateInput] = None

    @property
    def start_date(self) -> Optional[date]:
        return parse_travel_date(self.start)

    @property
    def end_date(self) -> Optional[date]:
        return parse_travel_date(self.end)


class Travelers(CamelModel):
    adults: Optional[int] = None
    children: int = 0
    child_ages: List[int] = Field(default_factory=list)
    infants: int = 0

    @field_validator("children", "infants", mode="before")
    @classmethod
    def _null_count(cls, value):
        return 0 if value is None else value

    @field_validator("child_ages", mode="before")
    @classmethod
    def _null_ages(cls, value):
        return [] if value is None else value

    @property
    def total(self) -> int:
        return (self.adults or 0) + self.children + self.infants


class Budget(CamelModel):
    amount: Optional[float] = None
    currency: str = "USD"
    flexible: bool = False

    @field_validator("currency", mode="before")
    @classmethod
    def _null_currency(cls, value):
        return value or "USD"

    @field_validator("flexible", mode="before")
    @classmethod
    def _null_flexible(cls, value):
        return False if value is None else value


class Accommodation(CamelModel):
    hotel_type: Optional[str] = None
    star_rating: Optional[int] = None
    room_category: Optional[str] = None


class Inquiry(CamelModel):
    """Structured (possibly incomplete) travel inquiry"""
    destination: Optional[str] = None
    additional_destinations: List[str] = Field(default_factory=list)
    date_range: Optional[DateRange] = None
    travelers: Optional[Travelers] = None
    budget: Optional[Budget] = None
    package_type: Optional[str] = None
    accommodation: Optional[Accommodation] = None
    meal_plan: Optional[str] = None
    activities: List[str] = Field(default_factory=list)

    @field_validator("additional_destinations", "activities", mode="before")
    @classmethod
    def _null_list(cls, value):
        # extractors send null for unknowns
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [entry for entry in value if entry is not None]
        return value

    @property
    def travel_dates(self) -> Optional[tuple]:
        """(start, end) when both dates parse and end is not before start"""
        if self.date_range is None:
            return None
        start, end = self.date_range.start_date, self.date_range.end_date
        if start is None or end is None or end < start:
            return None
        return start, end

    @property
    def duration_days(self) -> Optional[int]:
        dates = self.travel_dates
        if dates is None:
            return None
        return (dates[1] - dates[0]).days

    @property
    def adults(self) -> Optional[int]:
        if self.travelers is None or not self.travelers.adults:
            return None
        return self.travelers.adults

    @property
    def budget_amount(self) -> Optional[float]:
        if self.budget is None or not self.budget.amount or self.budget.amount <= 0:
            return None
        return self.budget.amount


# ============================================
# Inventory
# ============================================

class Place(CamelModel):
    country: Optional[str] = None
    city: Optional[str] = None

    def names(self) -> List[str]:
        return [name for name in (self.city, self.country) if name]

    def label(self) -> str:
        return ", ".join(self.names()) or "unknown destination"


class Money(CamelModel):
    amount: float
    currency: str = "USD"


class Capacity(CamelModel):
    min: Optional[int] = None
    max: Optional[int] = None


class InventoryItem(CamelModel):
    """Read-only projection of a stored itinerary"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    title: str = ""
    destination: Place = Field(default_factory=Place)
    additional_destinations: List[Place] = Field(default_factory=list)
    duration_days: Optional[int] = None
    estimated_cost: Optional[Money] = None
    travel_style: Optional[str] = None
    themes: List[str] = Field(default_factory=list)
    highlights: List[str] = Field(default_factory=list)
    capacity: Optional[Capacity] = None
    status: ItineraryStatus = ItineraryStatus.DRAFT

    @property
    def is_eligible(self) -> bool:
        return self.status in ELIGIBLE_STATUSES

    def place_names(self) -> List[str]:
        """Country and city names of the primary and additional destinations"""
        names = self.destination.names()
        for place in self.additional_destinations:
            names.extend(place.names())
        return names

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "InventoryItem":
        """
        Build a projection from a stored itinerary document

        Args:
            doc: Itinerary document as stored by the CRM (camelCase,
                nested duration / estimatedCost, group sizes)

        Returns:
            InventoryItem
        """
        duration = doc.get("duration") or {}
        duration_days = duration.get("days") or duration.get("nights")

        cost = doc.get("estimatedCost") or {}
        amount = cost.get("totalCost") or cost.get("baseCost") or 0
        estimated_cost = None
        if amount:
            estimated_cost = Money(amount=float(amount), currency=cost.get("currency") or "USD")

        capacity = None
        if doc.get("minGroupSize") is not None or doc.get("maxGroupSize") is not None:
            capacity = Capacity(min=doc.get("minGroupSize"), max=doc.get("maxGroupSize"))

        destination = doc.get("destination") or {}

        return cls(
            id=str(doc.get("_id") or doc.get("id") or ""),
            title=doc.get("title") or "",
            destination=Place(country=destination.get("country"), city=destination.get("city")),
            additional_destinations=[
                Place(country=d.get("country"), city=d.get("city"))
                for d in doc.get("destinations") or []
            ],
            duration_days=int(duration_days) if duration_days else None,
            estimated_cost=estimated_cost,
            travel_style=doc.get("travelStyle"),
            themes=list(doc.get("themes") or []),
            highlights=list(doc.get("highlights") or []),
            capacity=capacity,
            status=doc.get("status") or ItineraryStatus.DRAFT,
        )


# ============================================
# Matching Output
# ============================================

class Subscores(CamelModel):
    """Per-factor scores on a 0-100 scale; None means not evaluated"""
    destination: Optional[float] = None
    duration: Optional[float] = None
    budget: Optional[float] = None
    capacity: Optional[float] = None
    activities: Optional[float] = None


class MatchResult(CamelModel):
    item: InventoryItem
    score: int = Field(..., ge=0, le=100)
    subscores: Subscores
    match_reasons: List[str] = Field(default_factory=list)
    gaps: List[str] = Field(default_factory=list)


class MissingField(CamelModel):
    field: str
    label: str
    question: str
    priority: FieldPriority


class ValidationResult(CamelModel):
    is_valid: bool
    missing_fields: List[MissingField] = Field(default_factory=list)
    optional_fields: List[MissingField] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    completeness: float = Field(..., ge=0.0, le=1.0)
    has_required_fields: Dict[str, bool] = Field(default_factory=dict)


# ============================================
# Workflow Decision (tagged union on `action`)
# ============================================

class AskCustomer(CamelModel):
    action: Literal["ASK_CUSTOMER"] = "ASK_CUSTOMER"
    reason: str = "missing_required_fields"
    missing_fields: List[MissingField]
    priority: FieldPriority = FieldPriority.HIGH


class SendItineraries(CamelModel):
    action: Literal["SEND_ITINERARIES"] = "SEND_ITINERARIES"
    reason: str = "good_matches_found"
    matches: List[MatchResult]
    best_score: int


class SendItinerariesWithCaveat(CamelModel):
    action: Literal["SEND_ITINERARIES_WITH_NOTE"] = "SEND_ITINERARIES_WITH_NOTE"
    reason: str = "moderate_matches_found"
    matches: List[MatchResult]
    best_score: int
    note: str


class ForwardToSupplier(CamelModel):
    action: Literal["FORWARD_TO_SUPPLIER"] = "FORWARD_TO_SUPPLIER"
    reason: str = "no_matching_itineraries"
    optional_fields: List[MissingField] = Field(default_factory=list)
    note: str


WorkflowDecision = Annotated[
    Union[AskCustomer, SendItineraries, SendItinerariesWithCaveat, ForwardToSupplier],
    Field(discriminator="action"),
]


class MatchingOutcome(CamelModel):
    """Result of one pass through the matching pipeline"""
    validation: ValidationResult
    matches: List[MatchResult] = Field(default_factory=list)
    workflow: WorkflowDecision
