"""Shared fixtures for matching tests"""

import pytest

from itinerary_matching.interfaces.memory_inventory import InMemoryInventoryStore
from itinerary_matching.schemas.matching_schemas import Inquiry, InventoryItem

from .factories import TENANT, make_inquiry, make_item


@pytest.fixture
def paris_inquiry() -> Inquiry:
    return make_inquiry()


@pytest.fixture
def paris_item() -> InventoryItem:
    return make_item()


@pytest.fixture
def store() -> InMemoryInventoryStore:
    return InMemoryInventoryStore({
        TENANT: [
            make_item("paris-10"),
            make_item("paris-11", durationDays=11, estimatedCost={"amount": 5200}),
            make_item("paris-draft", status="draft"),
            make_item(
                "bali-7",
                title="Bali Escape",
                destination={"country": "Indonesia", "city": "Ubud"},
                durationDays=7,
                estimatedCost={"amount": 2500},
                themes=["beach", "wellness"],
                highlights=["Rice terraces", "Snorkeling"],
            ),
        ],
        "tenant-b": [make_item("other-tenant-paris")],
    })
