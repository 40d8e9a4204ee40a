from unittest.mock import patch

import pytest

from itinerary_matching.algorithms.match_scorer import MatchScorer, calculate_match_score
from itinerary_matching.algorithms.weights import MatchWeights
from itinerary_matching.schemas.matching_schemas import Inquiry

from .factories import make_inquiry, make_item


@pytest.fixture
def scorer():
    return MatchScorer()


def test_ideal_candidate_scores_97_to_98(scorer, paris_item, paris_inquiry):
    result = scorer.score(paris_item, paris_inquiry)

    assert result.subscores.destination == 100
    assert result.subscores.duration == 100
    assert result.subscores.budget == 100
    assert result.subscores.capacity == 100
    assert result.subscores.activities == 50
    assert 97 <= result.score <= 98
    assert "Destination matches: Paris" in result.match_reasons
    assert result.gaps == []


def test_double_cost_and_six_days_off_lands_in_caveat_band(scorer, paris_inquiry):
    item = make_item(durationDays=16, estimatedCost={"amount": 9000})

    result = scorer.score(item, paris_inquiry)

    assert result.subscores.budget == 30
    assert result.subscores.duration == 20
    # 40 + 4 + 7.5 + 10 + 2.5
    assert result.score == 64
    assert "Budget mismatch: USD 9,000 vs USD 4,500 (100% over)" in result.gaps
    assert "Duration mismatch: 16 days vs 10 requested" in result.gaps


@pytest.mark.parametrize("days, expected", [
    (10, 100), (9, 90), (12, 75), (7, 60), (15, 40), (5, 40), (4, 20), (30, 20),
])
def test_duration_tiers(scorer, paris_inquiry, days, expected):
    result = scorer.score(make_item(durationDays=days), paris_inquiry)
    assert result.subscores.duration == expected


@pytest.mark.parametrize("cost, expected", [
    (4500, 100), (4800, 100), (3700, 85), (5800, 70), (2300, 50), (6750, 50), (7000, 30), (1000, 30),
])
def test_budget_tiers(scorer, paris_inquiry, cost, expected):
    result = scorer.score(make_item(estimatedCost={"amount": cost}), paris_inquiry)
    assert result.subscores.budget == expected


def test_missing_inquiry_fields_skip_factors_without_renormalizing(scorer, paris_item):
    inquiry = Inquiry(destination="Paris")

    result = scorer.score(paris_item, inquiry)

    assert result.subscores.duration is None
    assert result.subscores.budget is None
    assert result.subscores.capacity is None
    # destination 40 + activities default 2.5
    assert result.score == 43


def test_missing_candidate_data_uses_neutral_defaults(scorer, paris_inquiry):
    item = make_item(durationDays=None, estimatedCost=None, highlights=[], themes=[])

    result = scorer.score(item, paris_inquiry.model_copy(update={"activities": ["wine tasting"]}))

    assert result.subscores.duration == 50
    assert result.subscores.budget == 50
    assert result.subscores.activities == 50
    assert "Itinerary cost unknown" in result.gaps


def test_destination_matches_additional_destinations(scorer):
    item = make_item(
        destination={"country": "France", "city": "Paris"},
        additionalDestinations=[{"country": "France", "city": "Nice"}],
    )

    result = scorer.score(item, make_inquiry(destination="Nice"))

    assert result.subscores.destination == 100


def test_destination_matches_in_either_direction(scorer, paris_item):
    result = scorer.score(paris_item, make_inquiry(destination="Paris, France"))
    assert result.subscores.destination == 100


def test_destination_mismatch_scores_zero(scorer, paris_item):
    result = scorer.score(paris_item, make_inquiry(destination="Kyoto"))

    assert result.subscores.destination == 0
    assert any(gap.startswith("Destination mismatch: looking for Kyoto") for gap in result.gaps)


def test_activities_are_proportional(scorer, paris_item):
    inquiry = make_inquiry(activities=["Louvre", "river cruise", "skiing", "cultural"])

    result = scorer.score(paris_item, inquiry)

    assert result.subscores.activities == 75
    assert "Activities not covered: skiing" in result.gaps


def test_capacity_limits_are_narrated_not_scored(scorer):
    item = make_item(capacity={"min": 2, "max": 8})
    inquiry = make_inquiry(travelers={"adults": 10, "children": 2, "childAges": [5, 9]})

    result = scorer.score(item, inquiry)

    assert result.subscores.capacity == 100
    assert "Group of 12 exceeds maximum group size of 8" in result.gaps


def test_currency_difference_is_flagged(scorer, paris_inquiry):
    result = scorer.score(make_item(estimatedCost={"amount": 4500, "currency": "EUR"}), paris_inquiry)
    assert "Itinerary priced in EUR, budget given in USD" in result.gaps


def test_score_is_deterministic(scorer, paris_item, paris_inquiry):
    assert scorer.score(paris_item, paris_inquiry) == scorer.score(paris_item, paris_inquiry)


@pytest.mark.parametrize("item, inquiry", [
    (make_item(), make_inquiry()),
    (make_item(estimatedCost=None, durationDays=None), Inquiry()),
    (make_item(destination={"country": "Peru"}), make_inquiry(activities=["x", "y"])),
    (make_item(estimatedCost={"amount": 1}), make_inquiry(budget={"amount": 1_000_000})),
])
def test_score_stays_within_bounds(scorer, item, inquiry):
    assert 0 <= scorer.score(item, inquiry).score <= 100


def test_custom_weight_table(paris_item):
    destination_only = MatchWeights(
        version="destination-only", destination=1.0, duration=0, budget=0, capacity=0, activities=0
    )

    result = calculate_match_score(paris_item, make_inquiry(destination="Lyon"), destination_only)

    assert result.score == 0


def test_weights_must_sum_to_one():
    with pytest.raises(ValueError, match="sum to 1.0"):
        MatchWeights(destination=0.3, duration=0.2, budget=0.15, capacity=0.15, activities=0.1)


def test_weights_must_be_non_negative():
    with pytest.raises(ValueError, match="non-negative"):
        MatchWeights(destination=0.6, duration=-0.2, budget=0.25, capacity=0.3, activities=0.05)


def test_activities_match_word_forms(scorer):
    item = make_item(
        destination={"country": "Indonesia", "city": "Ubud"},
        themes=["beach", "wellness"],
        highlights=["Snorkeling trips", "Rice terraces"],
    )

    result = scorer.score(item, make_inquiry(destination="Bali", activities=["beaches", "snorkel"]))

    assert result.subscores.activities == 100
    assert not any(gap.startswith("Activities not covered") for gap in result.gaps)


def test_destination_matches_inside_longer_place_name(scorer):
    item = make_item(destination={"country": "Indonesia", "city": "Balinese Highlands"})

    result = scorer.score(item, make_inquiry(destination="Bali"))

    assert result.subscores.destination == 100


def test_weight_table_is_read_once_per_score(scorer, paris_item, paris_inquiry):
    original = MatchWeights.as_dict

    with patch.object(MatchWeights, "as_dict", autospec=True, side_effect=original) as as_dict:
        result = scorer.score(paris_item, paris_inquiry)

    assert as_dict.call_count == 1
    assert result.score == 98
