"""
In-Memory Inventory Store
Tenant-keyed item lists; filters on status, destination and duration
"""

from typing import Dict, Iterable, List, Optional

from loguru import logger

from ..schemas.matching_schemas import InventoryItem
from .inventory_store import InventoryQuery, InventoryStore


class InMemoryInventoryStore(InventoryStore):
    """
    Inventory held in process memory
    
    Items keep insertion order, which plays the role of the store's
    natural order for ranking ties.
    """
    
    def __init__(self, items_by_tenant: Optional[Dict[str, Iterable[InventoryItem]]] = None):
        self._items: Dict[str, List[InventoryItem]] = {}
        for tenant_id, items in (items_by_tenant or {}).items():
            self.add_items(tenant_id, items)
    
    def add_items(self, tenant_id: str, items: Iterable[InventoryItem]) -> None:
        """Append items to a tenant's inventory"""
        self._items.setdefault(tenant_id, []).extend(items)
    
    def find_items(self, query: InventoryQuery) -> List[InventoryItem]:
        found = []
        for item in self._items.get(query.tenant_id, []):
            if item.status not in query.statuses:
                continue
            if not query.matches_destination(item):
                continue
            if query.min_days is not None or query.max_days is not None:
                if item.duration_days is None:
                    continue
                if query.min_days is not None and item.duration_days < query.min_days:
                    continue
                if query.max_days is not None and item.duration_days > query.max_days:
                    continue
            found.append(item)
            if len(found) >= query.limit:
                break
        
        logger.debug(f"Found {len(found)} in-memory itineraries for tenant {query.tenant_id}")
        return found
    
    def health_check(self) -> bool:
        return True
