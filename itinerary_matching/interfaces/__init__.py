# interfaces/__init__.py
"""
Interfaces Package

Contains inventory access:
- inventory_store: Store contract, query object and RetrievalFailed
- mongo_inventory: MongoDB-backed store
- memory_inventory: In-process store
- candidate_retriever: Inquiry -> candidate list
"""

from .inventory_store import InventoryStore, InventoryQuery, RetrievalFailed, DEFAULT_MAX_CANDIDATES
from .memory_inventory import InMemoryInventoryStore
from .mongo_inventory import MongoInventoryStore
from .candidate_retriever import CandidateRetriever, DEFAULT_DURATION_TOLERANCE_DAYS

__all__ = [
    "InventoryStore",
    "InventoryQuery",
    "RetrievalFailed",
    "DEFAULT_MAX_CANDIDATES",
    "InMemoryInventoryStore",
    "MongoInventoryStore",
    "CandidateRetriever",
    "DEFAULT_DURATION_TOLERANCE_DAYS"
]
