"""
MongoDB Inventory Store
Reads itinerary documents for a tenant and projects them to InventoryItem
"""

from typing import Any, Dict, List, Optional

from bson import ObjectId
from loguru import logger
from pydantic import ValidationError
from pymongo import ASCENDING, MongoClient
from pymongo.errors import PyMongoError

from ..config import settings
from ..schemas.matching_schemas import InventoryItem
from .inventory_store import InventoryQuery, InventoryStore, RetrievalFailed


# Fields needed to build an InventoryItem
ITINERARY_PROJECTION = {
    "title": 1,
    "destination": 1,
    "destinations": 1,
    "duration": 1,
    "estimatedCost": 1,
    "travelStyle": 1,
    "themes": 1,
    "highlights": 1,
    "minGroupSize": 1,
    "maxGroupSize": 1,
    "status": 1,
}


class MongoInventoryStore(InventoryStore):
    """
    Inventory store backed by the CRM's `itineraries` collection
    
    Every query is bounded by `limit` and a server-side time limit.
    Destination matching runs client-side with the shared matcher, so
    accents and either-direction containment behave as in scoring.
    """
    
    def __init__(
        self,
        mongo_uri: str = settings.MONGO_URI,
        mongo_db: str = settings.MONGO_DB,
        collection_name: str = settings.ITINERARY_COLLECTION,
        query_timeout_ms: int = settings.INVENTORY_QUERY_TIMEOUT_MS,
        collection=None
    ):
        """
        Initialize the store
        
        Args:
            mongo_uri: MongoDB connection string
            mongo_db: Database name
            collection_name: Itinerary collection name
            query_timeout_ms: Server-side bound for each query
            collection: Pre-built collection (skips client creation)
        """
        self.query_timeout_ms = query_timeout_ms
        self.mongo_client: Optional[MongoClient] = None
        
        if collection is not None:
            self.collection = collection
        else:
            # MongoClient connects lazily; no I/O happens here
            self.mongo_client = MongoClient(
                mongo_uri,
                serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS
            )
            self.collection = self.mongo_client[mongo_db][collection_name]
            logger.info(f"MongoInventoryStore using {mongo_db}.{collection_name}")
    
    def build_filter(self, query: InventoryQuery) -> Dict[str, Any]:
        """
        Translate an InventoryQuery into a MongoDB filter
        
        The destination is not part of the filter; it is checked with
        `InventoryQuery.matches_destination` while the cursor is read.
        
        Example:
            >>> store.build_filter(InventoryQuery(tenant_id="t1", min_days=5, max_days=9))
            {'tenantId': 't1', 'status': {'$in': ['active', 'published']},
             'duration.days': {'$gte': 5, '$lte': 9}}
        """
        mongo_filter: Dict[str, Any] = {
            "tenantId": _tenant_key(query.tenant_id),
            "status": {"$in": sorted(status.value for status in query.statuses)},
        }
        
        duration_range = {}
        if query.min_days is not None:
            duration_range["$gte"] = query.min_days
        if query.max_days is not None:
            duration_range["$lte"] = query.max_days
        if duration_range:
            mongo_filter["duration.days"] = duration_range
        
        return mongo_filter
    
    def find_items(self, query: InventoryQuery) -> List[InventoryItem]:
        mongo_filter = self.build_filter(query)
        
        items = []
        try:
            cursor = (
                self.collection.find(mongo_filter, ITINERARY_PROJECTION)
                .sort([("_id", ASCENDING)])
                .max_time_ms(self.query_timeout_ms)
            )
            if not query.destination:
                cursor = cursor.limit(query.limit)
            
            try:
                for doc in cursor:
                    item = _to_item(doc)
                    if item is None or not query.matches_destination(item):
                        continue
                    items.append(item)
                    if len(items) >= query.limit:
                        break
            finally:
                cursor.close()
        except PyMongoError as e:
            logger.error(f"Itinerary query failed for tenant {query.tenant_id}: {e}")
            raise RetrievalFailed(query.tenant_id, str(e)) from e
        
        logger.debug(f"Loaded {len(items)} itineraries for tenant {query.tenant_id}")
        return items
    
    def health_check(self) -> bool:
        if self.mongo_client is None:
            return True
        try:
            self.mongo_client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB health check failed: {e}")
            return False
    
    def close(self) -> None:
        if self.mongo_client is not None:
            self.mongo_client.close()
            logger.info("MongoInventoryStore connection closed")


def _to_item(doc: Dict[str, Any]) -> Optional[InventoryItem]:
    """Project a document, or None when it cannot be read as an itinerary"""
    try:
        return InventoryItem.from_document(doc)
    except (ValidationError, AttributeError, TypeError, ValueError) as e:
        logger.warning(f"Skipping malformed itinerary {doc.get('_id')}: {e}")
        return None


def _tenant_key(tenant_id: str):
    """Tenant ids stored as ObjectIds are queried as ObjectIds"""
    if ObjectId.is_valid(tenant_id):
        return ObjectId(tenant_id)
    return tenant_id
