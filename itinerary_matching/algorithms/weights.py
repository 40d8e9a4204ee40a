"""Match weight table: single source for the scoring weights."""

import math
from dataclasses import dataclass, fields
from typing import Dict


@dataclass(frozen=True)
class MatchWeights:
    """
    Versioned weight table for the five match factors.
    Each factor is scored 0-100 and multiplied by its weight; weights sum to 1.0.
    """
    version: str = "itinerary-v1"
    destination: float = 0.40
    duration: float = 0.20
    budget: float = 0.25
    capacity: float = 0.10
    activities: float = 0.05

    def __post_init__(self):
        weights = self.as_dict()
        negative = [name for name, value in weights.items() if value < 0]
        if negative:
            raise ValueError(f"Match weights must be non-negative: {', '.join(negative)}")
        total = sum(weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-6):
            raise ValueError(f"Match weights ({self.version}) must sum to 1.0, got {total:.4f}")

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != "version"}


DEFAULT_WEIGHTS = MatchWeights()
