"""
Candidate Retriever
Turns inquiry criteria into a tenant-scoped inventory query

Narrows the pool for scoring only; it never ranks.
- Status: active / published only
- Destination: shared text matcher against country/city (primary or additional)
- Duration: +/- tolerance days around the requested trip length
- At most `max_candidates` items
"""

from typing import List

from loguru import logger

from ..schemas.matching_schemas import ELIGIBLE_STATUSES, Inquiry, InventoryItem
from .inventory_store import (
    DEFAULT_MAX_CANDIDATES,
    InventoryQuery,
    InventoryStore,
    RetrievalFailed,
)


DEFAULT_DURATION_TOLERANCE_DAYS = 2


class CandidateRetriever:
    """
    Builds InventoryQuery objects and reads candidates from a store
    
    Usage:
        retriever = CandidateRetriever(MongoInventoryStore())
        candidates = retriever.retrieve(inquiry, tenant_id)
    """
    
    def __init__(
        self,
        store: InventoryStore,
        max_candidates: int = DEFAULT_MAX_CANDIDATES,
        duration_tolerance_days: int = DEFAULT_DURATION_TOLERANCE_DAYS
    ):
        """
        Initialize Candidate Retriever
        
        Args:
            store: Inventory backend
            max_candidates: Cap on returned items (default: 50)
            duration_tolerance_days: Allowed +/- days around requested duration (default: 2)
        """
        self.store = store
        self.max_candidates = max_candidates
        self.duration_tolerance_days = duration_tolerance_days
    
    def build_query(self, inquiry: Inquiry, tenant_id: str) -> InventoryQuery:
        """
        Build the inventory query for an inquiry
        
        Without destination and dates this is the whole scoped inventory
        (up to the cap).
        """
        destination = inquiry.destination.strip() if inquiry.destination else None
        
        min_days = max_days = None
        duration = inquiry.duration_days
        if duration is not None:
            min_days = max(0, duration - self.duration_tolerance_days)
            max_days = duration + self.duration_tolerance_days
        
        return InventoryQuery(
            tenant_id=tenant_id,
            statuses=ELIGIBLE_STATUSES,
            destination=destination or None,
            min_days=min_days,
            max_days=max_days,
            limit=self.max_candidates
        )
    
    def retrieve(self, inquiry: Inquiry, tenant_id: str) -> List[InventoryItem]:
        """
        Fetch candidate itineraries for an inquiry
        
        Args:
            inquiry: Customer inquiry
            tenant_id: Tenant whose inventory is searched
        
        Returns:
            List[InventoryItem]: Eligible candidates in store order
        
        Raises:
            RetrievalFailed: If the store cannot be read
        """
        query = self.build_query(inquiry, tenant_id)
        
        try:
            items = self.store.find_items(query)
        except RetrievalFailed:
            raise
        except Exception as e:
            logger.error(f"Inventory store error for tenant {tenant_id}: {e}")
            raise RetrievalFailed(tenant_id, str(e) or type(e).__name__) from e
        
        # Eligibility and the cap hold regardless of the store
        candidates = [item for item in items if item.status in query.statuses][:self.max_candidates]
        
        logger.info(
            f"Retrieved {len(candidates)} candidates for tenant {tenant_id} "
            f"(destination={query.destination}, days={query.min_days}-{query.max_days})"
        )
        
        return candidates
