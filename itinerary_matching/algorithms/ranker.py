"""
Match Ranker
Orders scored candidates and drops those below the acceptance floor.
"""

from typing import Iterable, List

from loguru import logger

from ..schemas.matching_schemas import MatchResult


# Minimum score for a candidate to count as a viable match
ACCEPTANCE_FLOOR = 50


class Ranker:
    """
    Floor filter + stable descending sort
    
    Equal scores keep their retrieval order; nothing is truncated here.
    """
    
    def __init__(self, acceptance_floor: int = ACCEPTANCE_FLOOR):
        self.acceptance_floor = acceptance_floor
    
    def rank(self, results: Iterable[MatchResult]) -> List[MatchResult]:
        """
        Rank match results
        
        Args:
            results: Scored candidates in retrieval order
        
        Returns:
            List[MatchResult]: Candidates scoring >= floor, best first
        """
        results = list(results)
        accepted = [r for r in results if r.score >= self.acceptance_floor]
        ranked = sorted(accepted, key=lambda r: r.score, reverse=True)
        
        logger.debug(
            f"Ranked {len(ranked)}/{len(results)} candidates "
            f"(floor={self.acceptance_floor}, scores={[r.score for r in ranked]})"
        )
        
        return ranked


def rank_matches(results: Iterable[MatchResult], acceptance_floor: int = ACCEPTANCE_FLOOR) -> List[MatchResult]:
    """Rank with the default acceptance floor"""
    return Ranker(acceptance_floor).rank(results)
