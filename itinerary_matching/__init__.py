# itinerary_matching/__init__.py
"""
Itinerary Matching Service Package

Matching core of the travel-agency CRM:
- Inquiry validation (what is missing, what to ask)
- Candidate retrieval from tenant itinerary inventory
- Weighted multi-factor match scoring
- Ranking with an acceptance floor
- Workflow decisions (ask customer / send itineraries / forward to supplier)
"""

__version__ = "1.0.0"

# Package structure:
# itinerary_matching/
# ├── __init__.py           <- This file
# ├── main.py               <- FastAPI application entry
# ├── config.py             <- Configuration settings
# │
# ├── agents/               <- Pipeline orchestration
# │   └── matching_agent.py <- validate -> retrieve -> score -> rank -> decide
# │
# ├── algorithms/           <- Pure matching algorithms
# │   ├── field_validator.py
# │   ├── match_scorer.py
# │   ├── ranker.py
# │   ├── workflow_decider.py
# │   ├── text_match.py
# │   └── weights.py
# │
# ├── interfaces/           <- Inventory access
# │   ├── inventory_store.py
# │   ├── mongo_inventory.py
# │   ├── memory_inventory.py
# │   └── candidate_retriever.py
# │
# ├── api/                  <- FastAPI Routers
# │   └── matching.py       <- /api/matching/*
# │
# └── schemas/              <- Pydantic Models
#     └── matching_schemas.py
