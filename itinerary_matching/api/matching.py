# api/matching.py
"""
/matching HTTP API Endpoints
Thin HTTP surface over the matching pipeline.

POST /api/matching/validate - Check an inquiry for missing fields
POST /api/matching/score    - Run the pipeline against supplied itineraries
POST /api/matching/process  - Run the pipeline against a tenant's stored inventory
"""

from datetime import datetime, timezone
from functools import lru_cache
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import Field

from ..agents.matching_agent import InquiryMatchingAgent
from ..algorithms.field_validator import FieldValidator
from ..interfaces.inventory_store import RetrievalFailed
from ..interfaces.memory_inventory import InMemoryInventoryStore
from ..interfaces.mongo_inventory import MongoInventoryStore
from ..schemas.matching_schemas import (
    CamelModel,
    Inquiry,
    InventoryItem,
    MatchingOutcome,
    ValidationResult,
)


router = APIRouter(prefix="/api/matching", tags=["matching"])

SUPPLIED_TENANT = "supplied"


# ============================================
# Request/Response Models
# ============================================

class ProcessRequest(CamelModel):
    """Match an inquiry against stored inventory"""
    tenant_id: str = Field(..., min_length=1, description="Tenant whose inventory is searched")
    inquiry: Inquiry


class ScoreRequest(CamelModel):
    """Match an inquiry against caller-supplied itineraries"""
    inquiry: Inquiry
    items: List[InventoryItem] = Field(default_factory=list)


class MatchingResponse(MatchingOutcome):
    """Pipeline outcome with processing metadata"""
    success: bool = True
    timestamp: str


# ============================================
# Dependencies
# ============================================

@lru_cache(maxsize=1)
def get_matching_agent() -> InquiryMatchingAgent:
    """Shared agent reading the MongoDB inventory"""
    return InquiryMatchingAgent(store=MongoInventoryStore())


def _response(outcome: MatchingOutcome) -> MatchingResponse:
    return MatchingResponse(
        validation=outcome.validation,
        matches=outcome.matches,
        workflow=outcome.workflow,
        timestamp=datetime.now(timezone.utc).isoformat()
    )


# ============================================
# Endpoints
# ============================================

@router.post("/validate", response_model=ValidationResult)
def validate_inquiry(inquiry: Inquiry):
    """Report missing/optional fields and completeness for an inquiry"""
    return FieldValidator().validate(inquiry)


@router.post("/score", response_model=MatchingResponse)
def score_matching(request: ScoreRequest):
    """
    Run validation, scoring, ranking and the workflow decision against the
    itineraries in the request body. Nothing is read from the store.
    """
    store = InMemoryInventoryStore({SUPPLIED_TENANT: request.items})
    agent = InquiryMatchingAgent(store=store)
    return _response(agent.process(request.inquiry, SUPPLIED_TENANT))


@router.post("/process", response_model=MatchingResponse)
def process_matching(
    request: ProcessRequest,
    agent: InquiryMatchingAgent = Depends(get_matching_agent)
):
    """
    Match an inquiry against a tenant's stored itineraries
    
    A store failure is reported as 503 with a FORWARD_TO_AGENT hint, so the
    caller routes the inquiry to manual review instead of a supplier.
    """
    try:
        outcome = agent.process(request.inquiry, request.tenant_id)
    except RetrievalFailed as e:
        logger.error(f"Matching failed for tenant {request.tenant_id}: {e.reason}")
        raise HTTPException(
            status_code=503,
            detail={
                "action": "FORWARD_TO_AGENT",
                "reason": "retrieval_failed",
                "note": "Unable to automatically process this request. An agent will review it manually.",
                "error": e.reason
            }
        )
    
    return _response(outcome)
