"""
Workflow Decider
Maps a validation result and ranked matches to the next workflow action

Decision table (first match wins):
1. Inquiry invalid                 -> ASK_CUSTOMER
2. Best score >= 70                -> SEND_ITINERARIES (top 3)
3. Best score in [50, 70)          -> SEND_ITINERARIES_WITH_NOTE (top 3)
4. No matches / best below floor   -> FORWARD_TO_SUPPLIER
"""

from typing import List, Sequence

from loguru import logger

from ..schemas.matching_schemas import (
    AskCustomer,
    ForwardToSupplier,
    MatchResult,
    SendItineraries,
    SendItinerariesWithCaveat,
    ValidationResult,
    WorkflowDecision,
)
from .ranker import ACCEPTANCE_FLOOR


SEND_THRESHOLD = 70
MAX_PRESENTED_MATCHES = 3

CUSTOMIZATION_NOTE = (
    "We found some options that partially match your requirements. "
    "We can customize them to better fit your needs."
)
CUSTOM_ITINERARY_NOTE = "We will create a custom itinerary for your requirements."


class WorkflowDecider:
    """
    Stateless four-way decision over validation + ranked matches
    
    Usage:
        decider = WorkflowDecider()
        decision = decider.decide(validation, ranked)
    """
    
    def __init__(
        self,
        send_threshold: int = SEND_THRESHOLD,
        acceptance_floor: int = ACCEPTANCE_FLOOR,
        max_matches: int = MAX_PRESENTED_MATCHES
    ):
        """
        Initialize Workflow Decider
        
        Args:
            send_threshold: Best score needed to send itineraries as-is (default: 70)
            acceptance_floor: Best score needed to send with a caveat (default: 50)
            max_matches: Matches attached to a send decision (default: 3)
        """
        if acceptance_floor > send_threshold:
            raise ValueError(
                f"acceptance_floor ({acceptance_floor}) cannot exceed send_threshold ({send_threshold})"
            )
        self.send_threshold = send_threshold
        self.acceptance_floor = acceptance_floor
        self.max_matches = max_matches
    
    def decide(self, validation: ValidationResult, ranked: Sequence[MatchResult]) -> WorkflowDecision:
        """
        Decide what happens next with an inquiry
        
        Args:
            validation: FieldValidator output
            ranked: Ranker output, best first (ignored when validation failed)
        
        Returns:
            WorkflowDecision: Exactly one of the four actions
        """
        decision = self._decide(validation, list(ranked))
        logger.debug(f"Workflow decision: {decision.action} ({decision.reason})")
        return decision
    
    def _decide(self, validation: ValidationResult, ranked: List[MatchResult]) -> WorkflowDecision:
        if not validation.is_valid:
            return AskCustomer(missing_fields=validation.missing_fields)
        
        best_score = ranked[0].score if ranked else None
        
        if best_score is not None and best_score >= self.send_threshold:
            return SendItineraries(
                matches=ranked[:self.max_matches],
                best_score=best_score
            )
        
        if best_score is not None and best_score >= self.acceptance_floor:
            return SendItinerariesWithCaveat(
                matches=ranked[:self.max_matches],
                best_score=best_score,
                note=CUSTOMIZATION_NOTE
            )
        
        return ForwardToSupplier(
            optional_fields=validation.optional_fields,
            note=CUSTOM_ITINERARY_NOTE
        )


def decide_workflow_action(validation: ValidationResult, ranked: Sequence[MatchResult]) -> WorkflowDecision:
    """Decide with the default thresholds"""
    return WorkflowDecider().decide(validation, ranked)
