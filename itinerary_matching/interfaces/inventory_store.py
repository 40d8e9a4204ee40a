"""
Inventory Store Interface - Abstract Base Class
Defines the contract for reading tenant-scoped itinerary inventory
Local runs and tests: InMemoryInventoryStore
Production: MongoInventoryStore
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import FrozenSet, List, Optional

from ..algorithms.text_match import matches_any
from ..schemas.matching_schemas import ELIGIBLE_STATUSES, InventoryItem, ItineraryStatus


DEFAULT_MAX_CANDIDATES = 50


class RetrievalFailed(Exception):
    """
    Inventory could not be read for a tenant
    
    Raised instead of returning an empty candidate list, so callers can
    tell a store outage apart from "no matching itineraries".
    """
    
    def __init__(self, tenant_id: str, reason: str):
        self.tenant_id = tenant_id
        self.reason = reason
        super().__init__(f"Inventory retrieval failed for tenant {tenant_id}: {reason}")


@dataclass(frozen=True)
class InventoryQuery:
    """Tenant-scoped candidate query"""
    tenant_id: str
    statuses: FrozenSet[ItineraryStatus] = ELIGIBLE_STATUSES
    destination: Optional[str] = None
    min_days: Optional[int] = None
    max_days: Optional[int] = None
    limit: int = DEFAULT_MAX_CANDIDATES
    
    def matches_destination(self, item: InventoryItem) -> bool:
        """
        Destination rule shared by every store
        
        Uses the destination scorer's matcher, in either direction:
        "Paris, France" finds city "Paris", "indo" finds "Indonesia".
        """
        if not self.destination:
            return True
        return matches_any(self.destination, item.place_names())


class InventoryStore(ABC):
    """
    Abstract interface for inventory reads
    
    Implementations must stay read-only and tenant-scoped.
    """
    
    @abstractmethod
    def find_items(self, query: InventoryQuery) -> List[InventoryItem]:
        """
        Fetch candidate itineraries matching a query
        
        Args:
            query: Tenant, status, destination and duration filters plus a limit
        
        Returns:
            List[InventoryItem]: At most `query.limit` items
        
        Raises:
            RetrievalFailed: If the store cannot be read
        """
        pass
    
    @abstractmethod
    def health_check(self) -> bool:
        """
        Check if the store is reachable
        
        Returns:
            bool: True if healthy, False otherwise
        """
        pass
    
    def close(self) -> None:
        """Release connections held by the store"""
