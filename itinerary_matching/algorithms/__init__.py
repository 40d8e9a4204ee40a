"""
Matching Algorithms Module
Core algorithms for inquiry validation, itinerary scoring, ranking and workflow decisions
"""

from .weights import MatchWeights, DEFAULT_WEIGHTS
from .text_match import normalize, text_matches, matches_any
from .field_validator import FieldValidator, validate_inquiry
from .match_scorer import MatchScorer, calculate_match_score
from .ranker import Ranker, rank_matches, ACCEPTANCE_FLOOR
from .workflow_decider import (
    WorkflowDecider,
    decide_workflow_action,
    SEND_THRESHOLD,
    MAX_PRESENTED_MATCHES,
    CUSTOMIZATION_NOTE,
    CUSTOM_ITINERARY_NOTE
)

__all__ = [
    "MatchWeights",
    "DEFAULT_WEIGHTS",
    "normalize",
    "text_matches",
    "matches_any",
    "FieldValidator",
    "validate_inquiry",
    "MatchScorer",
    "calculate_match_score",
    "Ranker",
    "rank_matches",
    "ACCEPTANCE_FLOOR",
    "WorkflowDecider",
    "decide_workflow_action",
    "SEND_THRESHOLD",
    "MAX_PRESENTED_MATCHES",
    "CUSTOMIZATION_NOTE",
    "CUSTOM_ITINERARY_NOTE"
]
