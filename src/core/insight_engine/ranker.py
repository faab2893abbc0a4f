import time
from typing import Callable, Dict, List, Optional

from src.data.schemas import InsightCandidate, InsightCard

Clock = Callable[[], int]

# Ranking weights
RANKING_WEIGHTS: Dict[str, float] = {
    'impact': 0.40,
    'confidence': 0.25,
    'recurrence': 0.15,
    'scope': 0.20,
}

# Scope weights (higher = more important)
SCOPE_WEIGHTS: Dict[str, float] = {
    'NETWORK': 1.0,
    'SITE': 0.75,
    'AP': 0.5,
    'CLIENT': 0.25,
}


# Re-ranking existing cards must not carry over their previous score or identity
_CANDIDATE_FIELDS = set(InsightCandidate.model_fields)


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


def calculate_rank_score(candidate: InsightCandidate) -> float:
    """
    Weighted rank score in [0, 1].
    Score = 0.40*impact + 0.25*confidence + 0.15*recurrence + 0.20*scope_weight
    """
    return (
        RANKING_WEIGHTS['impact'] * candidate.impact
        + RANKING_WEIGHTS['confidence'] * candidate.confidence
        + RANKING_WEIGHTS['recurrence'] * candidate.recurrence
        + RANKING_WEIGHTS['scope'] * SCOPE_WEIGHTS[candidate.scope]
    )


class InsightRanker:
    def __init__(self, clock: Optional[Clock] = None, ttl_ms: Optional[int] = None):
        """
        Args:
            clock: Returns the current time in epoch ms; used only for card
                identity and timestamps, never for scoring
            ttl_ms: Lifetime of generated cards; None means they do not expire
        """
        self.clock = clock or wall_clock_ms
        self.ttl_ms = ttl_ms

    def rank(self, candidates: List[InsightCandidate]) -> List[InsightCard]:
        """Score candidates and return cards sorted by score, highest first (stable)."""
        now = self.clock()
        expires_at = now + self.ttl_ms if self.ttl_ms is not None else None

        cards = [
            InsightCard(
                **candidate.model_dump(include=_CANDIDATE_FIELDS),
                id=f"{candidate.rule_id}-{now}",
                rank_score=calculate_rank_score(candidate),
                created_at=now,
                expires_at=expires_at,
            )
            for candidate in candidates
        ]
        # sorted() is stable, ties keep rule evaluation order
        return sorted(cards, key=lambda card: card.rank_score, reverse=True)
