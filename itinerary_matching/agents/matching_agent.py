"""
Inquiry Matching Agent
Runs one inquiry through the full pipeline:

    validate -> (if valid) retrieve -> score -> rank -> decide

Invalid inquiries skip retrieval and scoring entirely. A store failure
propagates as RetrievalFailed; it is never turned into an empty match list.
"""

from typing import Any, Dict, Optional, Union

from loguru import logger

from ..algorithms.field_validator import FieldValidator
from ..algorithms.match_scorer import MatchScorer
from ..algorithms.ranker import Ranker
from ..algorithms.workflow_decider import WorkflowDecider
from ..config import settings
from ..interfaces.candidate_retriever import CandidateRetriever
from ..interfaces.inventory_store import InventoryStore, RetrievalFailed
from ..schemas.matching_schemas import Inquiry, MatchingOutcome


class InquiryMatchingAgent:
    """
    Itinerary matching pipeline
    
    Usage:
        agent = InquiryMatchingAgent(store=MongoInventoryStore())
        outcome = agent.process(inquiry, tenant_id="64f1...")
        outcome.workflow.action  # "SEND_ITINERARIES", ...
    """
    
    def __init__(
        self,
        store: Optional[InventoryStore] = None,
        retriever: Optional[CandidateRetriever] = None,
        validator: Optional[FieldValidator] = None,
        scorer: Optional[MatchScorer] = None,
        ranker: Optional[Ranker] = None,
        decider: Optional[WorkflowDecider] = None
    ):
        """
        Initialize the agent
        
        Components not supplied are built from settings. Either `store` or
        `retriever` is required.
        """
        if retriever is None:
            if store is None:
                raise ValueError("InquiryMatchingAgent needs an inventory store or a retriever")
            retriever = CandidateRetriever(
                store,
                max_candidates=settings.MAX_CANDIDATES,
                duration_tolerance_days=settings.DURATION_TOLERANCE_DAYS
            )
        
        self.retriever = retriever
        self.validator = validator or FieldValidator()
        self.scorer = scorer or MatchScorer(settings.match_weights())
        self.ranker = ranker or Ranker(settings.ACCEPTANCE_FLOOR)
        self.decider = decider or WorkflowDecider(
            send_threshold=settings.SEND_THRESHOLD,
            acceptance_floor=settings.ACCEPTANCE_FLOOR,
            max_matches=settings.MAX_PRESENTED_MATCHES
        )
        
        logger.info(
            f"InquiryMatchingAgent initialized: weights={self.scorer.weights.version}, "
            f"floor={self.ranker.acceptance_floor}, send_threshold={self.decider.send_threshold}"
        )
    
    def process(self, inquiry: Union[Inquiry, Dict[str, Any]], tenant_id: str) -> MatchingOutcome:
        """
        Match one inquiry against a tenant's inventory
        
        Args:
            inquiry: Inquiry model or raw dict (camelCase or snake_case keys)
            tenant_id: Tenant whose inventory is searched
        
        Returns:
            MatchingOutcome: Validation, ranked matches and workflow decision
        
        Raises:
            RetrievalFailed: If the inventory store cannot be read
            pydantic.ValidationError: If a raw dict is structurally invalid
        """
        if not isinstance(inquiry, Inquiry):
            inquiry = Inquiry.model_validate(inquiry)
        
        validation = self.validator.validate(inquiry)
        logger.info(f"Itinerary matching: validation completeness {validation.completeness:.0%}")
        
        ranked = []
        if validation.is_valid:
            try:
                candidates = self.retriever.retrieve(inquiry, tenant_id)
            except RetrievalFailed as e:
                logger.error(f"Itinerary matching aborted: {e}")
                raise
            
            scored = [self.scorer.score(item, inquiry) for item in candidates]
            ranked = self.ranker.rank(scored)
            logger.info(f"Itinerary matching: {len(ranked)} of {len(candidates)} candidates above floor")
        
        workflow = self.decider.decide(validation, ranked)
        logger.info(f"Itinerary matching: action determined - {workflow.action}")
        
        return MatchingOutcome(validation=validation, matches=ranked, workflow=workflow)


# ============================================
# Convenience Function
# ============================================

def process_inquiry(
    inquiry: Union[Inquiry, Dict[str, Any]],
    tenant_id: str,
    store: InventoryStore
) -> MatchingOutcome:
    """Run the pipeline once with settings-driven components"""
    return InquiryMatchingAgent(store=store).process(inquiry, tenant_id)
