"""Builders for inquiries and inventory items used across tests"""

from itinerary_matching.schemas.matching_schemas import Inquiry, InventoryItem

TENANT = "tenant-a"


def make_item(item_id: str = "itin-001", **overrides) -> InventoryItem:
    """Active Paris itinerary, 10 days, USD 4,500 unless overridden"""
    data = {
        "id": item_id,
        "title": "Classic Paris",
        "destination": {"country": "France", "city": "Paris"},
        "durationDays": 10,
        "estimatedCost": {"amount": 4500, "currency": "USD"},
        "themes": ["city", "cultural"],
        "highlights": ["Eiffel Tower", "Louvre Museum", "Seine river cruise"],
        "status": "active",
    }
    data.update(overrides)
    return InventoryItem.model_validate(data)


def make_inquiry(**overrides) -> Inquiry:
    """Complete Paris inquiry: 10 days, 2 adults, USD 4,500"""
    data = {
        "destination": "Paris",
        "dateRange": {"start": "2025-06-01", "end": "2025-06-11"},
        "travelers": {"adults": 2},
        "budget": {"amount": 4500, "currency": "USD"},
    }
    data.update(overrides)
    return Inquiry.model_validate(data)
