from unittest.mock import MagicMock

import pytest

from itinerary_matching.agents.matching_agent import InquiryMatchingAgent, process_inquiry
from itinerary_matching.interfaces.inventory_store import InventoryStore, RetrievalFailed
from itinerary_matching.schemas.matching_schemas import (
    AskCustomer,
    ForwardToSupplier,
    SendItineraries,
)

from .factories import TENANT, make_inquiry


class FailingStore(InventoryStore):
    """Store whose every read fails"""

    def find_items(self, query):
        raise ConnectionError("connection refused")

    def health_check(self):
        return False


def test_empty_inquiry_asks_customer_without_touching_store():
    store = MagicMock(spec=InventoryStore)

    outcome = InquiryMatchingAgent(store=store).process({}, TENANT)

    assert isinstance(outcome.workflow, AskCustomer)
    assert [f.field for f in outcome.workflow.missing_fields] == ["destination", "dateRange", "travelers"]
    assert outcome.matches == []
    store.find_items.assert_not_called()


def test_ideal_inventory_sends_itineraries(store):
    outcome = InquiryMatchingAgent(store=store).process(make_inquiry(), TENANT)

    assert isinstance(outcome.workflow, SendItineraries)
    assert outcome.workflow.best_score >= 70
    assert [m.item.id for m in outcome.matches] == ["paris-10", "paris-11"]
    assert outcome.workflow.matches == outcome.matches


def test_unmatched_destination_forwards_to_supplier(store):
    outcome = InquiryMatchingAgent(store=store).process(make_inquiry(destination="Atlantis"), TENANT)

    assert outcome.matches == []
    assert isinstance(outcome.workflow, ForwardToSupplier)
    assert outcome.workflow.note == "We will create a custom itinerary for your requirements."


def test_accepts_camel_case_dict(store):
    payload = {
        "destination": "paris",
        "dateRange": {"start": "2025-06-01T00:00:00Z", "end": "2025-06-11T00:00:00Z"},
        "travelers": {"adults": 2, "children": 0},
        "budget": {"amount": 4500},
    }

    outcome = process_inquiry(payload, TENANT, store)

    assert outcome.workflow.action == "SEND_ITINERARIES"


def test_other_tenants_inventory_is_invisible(store):
    outcome = InquiryMatchingAgent(store=store).process(make_inquiry(), "tenant-b")
    assert [m.item.id for m in outcome.matches] == ["other-tenant-paris"]


def test_retrieval_failure_propagates_instead_of_forwarding():
    agent = InquiryMatchingAgent(store=FailingStore())

    with pytest.raises(RetrievalFailed) as exc_info:
        agent.process(make_inquiry(), TENANT)

    assert "connection refused" in exc_info.value.reason


def test_invalid_inquiry_does_not_hit_failing_store():
    outcome = InquiryMatchingAgent(store=FailingStore()).process(make_inquiry(destination=None), TENANT)
    assert outcome.workflow.action == "ASK_CUSTOMER"


def test_requires_store_or_retriever():
    with pytest.raises(ValueError):
        InquiryMatchingAgent()


def test_outcome_is_repeatable(store):
    agent = InquiryMatchingAgent(store=store)
    assert agent.process(make_inquiry(), TENANT) == agent.process(make_inquiry(), TENANT)


def test_inquiry_naming_city_and_country_finds_city_itineraries(store):
    outcome = InquiryMatchingAgent(store=store).process(make_inquiry(destination="Paris, France"), TENANT)

    assert isinstance(outcome.workflow, SendItineraries)
    assert [m.item.id for m in outcome.matches] == ["paris-10", "paris-11"]


def test_explicit_nulls_do_not_break_processing(store):
    payload = {
        "destination": "Paris",
        "additionalDestinations": None,
        "dateRange": {"start": "2025-06-01", "end": "2025-06-11"},
        "travelers": {"adults": 2, "children": None, "childAges": None, "infants": None},
        "budget": {"amount": 4500, "currency": None, "flexible": None},
        "activities": None,
    }

    outcome = InquiryMatchingAgent(store=store).process(payload, TENANT)

    assert outcome.validation.is_valid
    assert outcome.validation.warnings == []
    assert outcome.workflow.action == "SEND_ITINERARIES"
