# api/__init__.py
"""
API Endpoints Package

Contains the FastAPI routers for the matching service:
- matching: Inquiry validation, scoring against supplied items and processing
"""

from .matching import router as matching_router, get_matching_agent

__all__ = [
    "matching_router",
    "get_matching_agent"
]
