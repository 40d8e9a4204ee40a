"""
Matching Service Configuration
Loads settings from environment variables
"""

import os
from typing import List
from dotenv import load_dotenv

from .algorithms.weights import MatchWeights

# Load environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment"""
    
    # MongoDB Configuration (itinerary inventory)
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DB: str = os.getenv("MONGO_DB", "travel_crm")
    ITINERARY_COLLECTION: str = os.getenv("ITINERARY_COLLECTION", "itineraries")
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = int(os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "3000"))
    INVENTORY_QUERY_TIMEOUT_MS: int = int(os.getenv("INVENTORY_QUERY_TIMEOUT_MS", "5000"))
    
    # Retrieval
    MAX_CANDIDATES: int = int(os.getenv("MAX_CANDIDATES", "50"))
    DURATION_TOLERANCE_DAYS: int = int(os.getenv("DURATION_TOLERANCE_DAYS", "2"))
    
    # Ranking & workflow thresholds
    ACCEPTANCE_FLOOR: int = int(os.getenv("ACCEPTANCE_FLOOR", "50"))
    SEND_THRESHOLD: int = int(os.getenv("SEND_THRESHOLD", "70"))
    MAX_PRESENTED_MATCHES: int = int(os.getenv("MAX_PRESENTED_MATCHES", "3"))
    
    # Scoring weights (must sum to 1.0)
    MATCH_WEIGHTS_VERSION: str = os.getenv("MATCH_WEIGHTS_VERSION", "itinerary-v1")
    MATCH_WEIGHT_DESTINATION: float = float(os.getenv("MATCH_WEIGHT_DESTINATION", "0.40"))
    MATCH_WEIGHT_DURATION: float = float(os.getenv("MATCH_WEIGHT_DURATION", "0.20"))
    MATCH_WEIGHT_BUDGET: float = float(os.getenv("MATCH_WEIGHT_BUDGET", "0.25"))
    MATCH_WEIGHT_CAPACITY: float = float(os.getenv("MATCH_WEIGHT_CAPACITY", "0.10"))
    MATCH_WEIGHT_ACTIVITIES: float = float(os.getenv("MATCH_WEIGHT_ACTIVITIES", "0.05"))
    
    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    
    # API Configuration
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))
    API_ENV: str = os.getenv("API_ENV", "development")
    
    # CORS Configuration
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
    
    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]
    
    def match_weights(self) -> MatchWeights:
        """
        Build the scoring weight table from environment overrides
        
        Raises:
            ValueError: If the configured weights are negative or do not sum to 1.0
        """
        return MatchWeights(
            version=self.MATCH_WEIGHTS_VERSION,
            destination=self.MATCH_WEIGHT_DESTINATION,
            duration=self.MATCH_WEIGHT_DURATION,
            budget=self.MATCH_WEIGHT_BUDGET,
            capacity=self.MATCH_WEIGHT_CAPACITY,
            activities=self.MATCH_WEIGHT_ACTIVITIES
        )


# Global settings instance
settings = Settings()
