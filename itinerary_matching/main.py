"""
Itinerary Matching Service - FastAPI Application
Validates travel inquiries, matches them against tenant itinerary
inventory and returns the next workflow action.
"""

import sys
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from . import __version__
from .agents.matching_agent import InquiryMatchingAgent
from .api.matching import get_matching_agent, router as matching_router
from .config import settings


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    """Route loguru output to stderr at the configured level"""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss} - {name} - {level} - {message}"
    )


# ============================================
# Application Lifespan
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    configure_logging()
    logger.info("=" * 50)
    logger.info("Starting Itinerary Matching Service")
    logger.info("=" * 50)
    logger.info(f"Environment: {settings.API_ENV}")
    logger.info(f"Inventory: {settings.MONGO_DB}.{settings.ITINERARY_COLLECTION}")
    logger.info(f"Weights: {settings.match_weights().version}")
    
    yield
    
    if get_matching_agent.cache_info().currsize:
        get_matching_agent().retriever.store.close()
    logger.info("Matching service shutdown complete")


# ============================================
# FastAPI Application
# ============================================

app = FastAPI(
    title="Itinerary Matching Service",
    description="Inquiry validation, itinerary matching and workflow decisions for the travel CRM.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(matching_router)


# ============================================
# REST Endpoints
# ============================================

@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Itinerary Matching Service",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
        "endpoints": [
            "/health",
            "/api/matching/validate",
            "/api/matching/score",
            "/api/matching/process"
        ]
    }


@app.get("/health")
def health_check(agent: InquiryMatchingAgent = Depends(get_matching_agent)):
    """Health check including the inventory store"""
    store_healthy = agent.retriever.store.health_check()
    return {
        "status": "healthy" if store_healthy else "degraded",
        "service": "itinerary-matching-service",
        "version": __version__,
        "components": {
            "inventory_store": "connected" if store_healthy else "unavailable"
        },
        "timestamp": datetime.now().isoformat()
    }


# ============================================
# Main
# ============================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "itinerary_matching.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_ENV == "development"
    )
