"""
Match Score Algorithm
Calculates how well a stored itinerary fits a customer inquiry (0-100)

Algorithm Components (weights from MatchWeights, defaults shown):
1. Destination (40%) - Itinerary covers the requested place
2. Duration (20%) - Day difference from the requested trip length
3. Budget (25%) - Percentage difference from the requested budget
4. Capacity (10%) - Traveler count supplied (group size treated as flexible)
5. Activities (5%) - Share of requested activities found in highlights/themes

Each factor is scored 0-100 before weighting. A factor whose inquiry field
is missing is not evaluated and contributes 0; missing itinerary data
falls back to a neutral 50.

Total: 0-100, clamped and rounded half up
"""

import math
from typing import List, NamedTuple, Optional

from loguru import logger

from ..schemas.matching_schemas import Inquiry, InventoryItem, MatchResult, Subscores
from .text_match import first_match, matches_any
from .weights import DEFAULT_WEIGHTS, MatchWeights


NEUTRAL_SCORE = 50

# (max absolute day difference, score)
DURATION_TIERS = ((0, 100), (1, 90), (2, 75), (3, 60), (5, 40))
DURATION_FLOOR_SCORE = 20

# (max percent difference from budget, score)
BUDGET_TIERS = ((10, 100), (20, 85), (30, 70), (50, 50))
BUDGET_FLOOR_SCORE = 30


class FactorScore(NamedTuple):
    """Single factor result with its narration"""
    score: Optional[float]   # 0-100, None when not evaluated
    reasons: List[str]
    gaps: List[str]


class MatchScorer:
    """
    Weighted multi-factor scorer for itinerary candidates
    
    Usage:
        scorer = MatchScorer()
        result = scorer.score(item, inquiry)
        print(result.score, result.subscores)
    """
    
    def __init__(self, weights: MatchWeights = DEFAULT_WEIGHTS):
        """
        Initialize Match Scorer
        
        Args:
            weights: Weight table applied to the five factor scores
        """
        self.weights = weights
    
    def score(self, item: InventoryItem, inquiry: Inquiry) -> MatchResult:
        """
        Score one inventory item against an inquiry
        
        Args:
            item: Candidate itinerary (treated as read-only)
            inquiry: Customer inquiry
        
        Returns:
            MatchResult: Total score, per-factor subscores and narration
        
        Example:
            >>> result = MatchScorer().score(paris_10_days, paris_inquiry)
            >>> result.score
            98
        """
        factors = {
            "destination": _score_destination(item, inquiry),
            "duration": _score_duration(item, inquiry),
            "budget": _score_budget(item, inquiry),
            "capacity": _score_capacity(item, inquiry),
            "activities": _score_activities(item, inquiry),
        }
        
        weights = self.weights.as_dict()
        weighted = sum(
            weights[name] * factor.score
            for name, factor in factors.items()
            if factor.score is not None
        )
        total = int(math.floor(min(max(weighted, 0.0), 100.0) + 0.5))
        
        result = MatchResult(
            item=item,
            score=total,
            subscores=Subscores(**{name: factor.score for name, factor in factors.items()}),
            match_reasons=[reason for factor in factors.values() for reason in factor.reasons],
            gaps=[gap for factor in factors.values() for gap in factor.gaps]
        )
        
        logger.debug(
            f"Match score calculated: item={item.id}, total={total}, "
            f"weights={self.weights.version}, subscores={result.subscores.model_dump()}"
        )
        
        return result


# ============================================
# Factor Scores
# ============================================

def _score_destination(item: InventoryItem, inquiry: Inquiry) -> FactorScore:
    """
    Destination score (0 or 100)
    
    Matches the requested destination against the itinerary's primary and
    additional destinations (country or city) in either direction.
    """
    if not inquiry.destination:
        return FactorScore(0, [], ["No destination requested"])
    
    matched = first_match(inquiry.destination, item.place_names())
    if matched:
        return FactorScore(100, [f"Destination matches: {matched}"], [])
    
    return FactorScore(
        0,
        [],
        [f"Destination mismatch: looking for {inquiry.destination}, itinerary covers {item.destination.label()}"]
    )


def _score_duration(item: InventoryItem, inquiry: Inquiry) -> FactorScore:
    """
    Duration score (tiered by absolute day difference)
    
    Logic:
    - 0 days: 100
    - 1 day: 90
    - 2 days: 75
    - 3 days: 60
    - 4-5 days: 40
    - More: 20
    - Inquiry without both dates: not evaluated
    - Itinerary without a duration: 50 (neutral)
    """
    requested = inquiry.duration_days
    if requested is None:
        return FactorScore(None, [], [])
    
    if not item.duration_days:
        return FactorScore(NEUTRAL_SCORE, [], ["Itinerary duration unknown"])
    
    difference = abs(requested - item.duration_days)
    score = DURATION_FLOOR_SCORE
    for max_difference, tier_score in DURATION_TIERS:
        if difference <= max_difference:
            score = tier_score
            break
    
    if difference == 0:
        return FactorScore(score, [f"Duration matches: {item.duration_days} days"], [])
    if difference <= 2:
        return FactorScore(score, [f"Duration close: {item.duration_days} days vs {requested} requested"], [])
    return FactorScore(score, [], [f"Duration mismatch: {item.duration_days} days vs {requested} requested"])


def _score_budget(item: InventoryItem, inquiry: Inquiry) -> FactorScore:
    """
    Budget score (tiered by percentage difference)
    
    Logic:
    - Within 10%: 100
    - Within 20%: 85
    - Within 30%: 70
    - Within 50%: 50
    - Further off: 30
    - Inquiry without budget: not evaluated
    - Itinerary without a cost: 50 (neutral)
    """
    budget = inquiry.budget_amount
    if budget is None:
        return FactorScore(None, [], [])
    
    currency = inquiry.budget.currency
    cost = item.estimated_cost
    if cost is None or cost.amount <= 0:
        return FactorScore(NEUTRAL_SCORE, [], ["Itinerary cost unknown"])
    
    gaps = []
    if cost.currency and currency and cost.currency.upper() != currency.upper():
        gaps.append(f"Itinerary priced in {cost.currency}, budget given in {currency}")
    
    percent_difference = abs(cost.amount - budget) / budget * 100
    score = BUDGET_FLOOR_SCORE
    for max_percent, tier_score in BUDGET_TIERS:
        if percent_difference <= max_percent:
            score = tier_score
            break
    
    comparison = f"{_money(cost.amount, cost.currency)} vs {_money(budget, currency)}"
    if score >= 70:
        return FactorScore(score, [f"Within budget range: {comparison}"], gaps)
    
    direction = "over" if cost.amount > budget else "under"
    gaps.append(f"Budget mismatch: {comparison} ({percent_difference:.0f}% {direction})")
    return FactorScore(score, [], gaps)


def _score_capacity(item: InventoryItem, inquiry: Inquiry) -> FactorScore:
    """
    Capacity score (100 when adults are given, else not evaluated)
    
    Group size limits are treated as flexible and only narrated.
    """
    adults = inquiry.adults
    if adults is None:
        return FactorScore(None, [], [])
    
    group = inquiry.travelers.total
    gaps = []
    capacity = item.capacity
    if capacity is not None:
        if capacity.max and group > capacity.max:
            gaps.append(f"Group of {group} exceeds maximum group size of {capacity.max}")
        elif capacity.min and group < capacity.min:
            gaps.append(f"Group of {group} is below minimum group size of {capacity.min}")
    
    return FactorScore(100, [f"Suitable for {group} travelers"] if not gaps else [], gaps)


def _score_activities(item: InventoryItem, inquiry: Inquiry) -> FactorScore:
    """
    Activity score (proportional)
    
    Logic:
    - matched activities / requested activities * 100
    - No activities requested: 50 (neutral)
    - Itinerary lists no highlights or themes: 50 (neutral)
    """
    requested = [a for a in inquiry.activities if a and a.strip()]
    if not requested:
        return FactorScore(NEUTRAL_SCORE, [], [])
    
    offered = list(item.highlights) + list(item.themes)
    if not offered:
        return FactorScore(NEUTRAL_SCORE, [], ["Itinerary lists no highlights or themes"])
    
    matched = [a for a in requested if matches_any(a, offered)]
    missing = [a for a in requested if a not in matched]
    score = min(100.0, len(matched) / len(requested) * 100)
    
    reasons = [f"Activities matched: {', '.join(matched)}"] if matched else []
    gaps = [f"Activities not covered: {', '.join(missing)}"] if missing else []
    return FactorScore(round(score, 2), reasons, gaps)


def _money(amount: float, currency: Optional[str]) -> str:
    return f"{currency or 'USD'} {amount:,.0f}"


# ============================================
# Convenience Function
# ============================================

def calculate_match_score(
    item: InventoryItem,
    inquiry: Inquiry,
    weights: MatchWeights = DEFAULT_WEIGHTS
) -> MatchResult:
    """Score one item with the given (default) weight table"""
    return MatchScorer(weights).score(item, inquiry)
