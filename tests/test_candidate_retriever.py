from unittest.mock import MagicMock

import pytest

from itinerary_matching.interfaces.candidate_retriever import CandidateRetriever
from itinerary_matching.interfaces.inventory_store import InventoryQuery, RetrievalFailed
from itinerary_matching.interfaces.memory_inventory import InMemoryInventoryStore
from itinerary_matching.schemas.matching_schemas import ELIGIBLE_STATUSES, Inquiry

from .factories import TENANT, make_inquiry, make_item


def ids(items):
    return [item.id for item in items]


def test_query_carries_destination_and_duration_window():
    retriever = CandidateRetriever(MagicMock())

    query = retriever.build_query(make_inquiry(), TENANT)

    assert query == InventoryQuery(
        tenant_id=TENANT,
        statuses=ELIGIBLE_STATUSES,
        destination="Paris",
        min_days=8,
        max_days=12,
        limit=50,
    )


def test_query_without_criteria_is_unfiltered():
    query = CandidateRetriever(MagicMock()).build_query(Inquiry(), TENANT)

    assert query.destination is None
    assert query.min_days is None and query.max_days is None


def test_filters_by_destination_status_duration_and_tenant(store):
    candidates = CandidateRetriever(store).retrieve(make_inquiry(), TENANT)

    assert ids(candidates) == ["paris-10", "paris-11"]


def test_destination_matches_case_insensitive_substring(store):
    candidates = CandidateRetriever(store).retrieve(make_inquiry(destination="indo", dateRange=None), TENANT)
    assert ids(candidates) == ["bali-7"]


def test_duration_window_excludes_far_durations(store):
    inquiry = make_inquiry(destination=None, dateRange={"start": "2025-06-01", "end": "2025-06-08"})

    candidates = CandidateRetriever(store).retrieve(inquiry, TENANT)

    assert ids(candidates) == ["bali-7"]


def test_no_criteria_returns_scoped_inventory(store):
    candidates = CandidateRetriever(store).retrieve(Inquiry(), TENANT)
    assert ids(candidates) == ["paris-10", "paris-11", "bali-7"]


def test_unknown_destination_returns_nothing(store):
    assert CandidateRetriever(store).retrieve(make_inquiry(destination="Atlantis"), TENANT) == []


def test_result_is_capped():
    store = InMemoryInventoryStore({TENANT: [make_item(f"p{i}") for i in range(80)]})

    candidates = CandidateRetriever(store).retrieve(make_inquiry(), TENANT)

    assert len(candidates) == 50


def test_ineligible_items_from_store_are_dropped():
    store = MagicMock()
    store.find_items.return_value = [make_item("ok"), make_item("old", status="archived")]

    candidates = CandidateRetriever(store, max_candidates=10).retrieve(make_inquiry(), TENANT)

    assert ids(candidates) == ["ok"]


def test_store_errors_become_retrieval_failed():
    store = MagicMock()
    store.find_items.side_effect = TimeoutError("inventory query timed out")

    with pytest.raises(RetrievalFailed) as exc_info:
        CandidateRetriever(store).retrieve(make_inquiry(), TENANT)

    assert exc_info.value.tenant_id == TENANT
    assert "timed out" in exc_info.value.reason
    assert isinstance(exc_info.value.__cause__, TimeoutError)


def test_retrieval_failed_passes_through_unchanged():
    original = RetrievalFailed(TENANT, "down")
    store = MagicMock()
    store.find_items.side_effect = original

    with pytest.raises(RetrievalFailed) as exc_info:
        CandidateRetriever(store).retrieve(make_inquiry(), TENANT)

    assert exc_info.value is original


def test_inquiry_containing_item_city_is_retrieved(store):
    candidates = CandidateRetriever(store).retrieve(make_inquiry(destination="Paris, France"), TENANT)
    assert ids(candidates) == ["paris-10", "paris-11"]


def test_additional_destinations_are_searched():
    tour = make_item(
        "france-tour",
        destination={"country": "France", "city": "Paris"},
        additionalDestinations=[{"country": "France", "city": "Nice"}, {"country": "Monaco"}],
    )
    store = InMemoryInventoryStore({TENANT: [tour, make_item("paris-only")]})

    assert ids(CandidateRetriever(store).retrieve(make_inquiry(destination="nice"), TENANT)) == ["france-tour"]
    assert ids(CandidateRetriever(store).retrieve(make_inquiry(destination="MONACO"), TENANT)) == ["france-tour"]


def test_destination_ignores_accents():
    riviera = make_item("riviera", destination={"country": "France", "city": "Côte d'Azur"})
    store = InMemoryInventoryStore({TENANT: [riviera]})

    candidates = CandidateRetriever(store).retrieve(make_inquiry(destination="Cote d'Azur"), TENANT)

    assert ids(candidates) == ["riviera"]
