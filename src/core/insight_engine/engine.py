"""
Insight Engine

Evaluates the rule set for a named environment profile and ranks the result.
Each call is an independent recomputation over the supplied snapshot.
"""

import logging
from typing import Any, Dict, List, Optional

from src.config.environment_profiles import get_environment_profile
from src.core.insight_engine.ranker import Clock, InsightRanker
from src.core.insight_engine.rules import InsightRuleEvaluator
from src.data.schemas import InsightCard, MetricsSnapshot

logger = logging.getLogger(__name__)


class InsightEngine:
    def __init__(
        self,
        evaluator: Optional[InsightRuleEvaluator] = None,
        clock: Optional[Clock] = None,
        ttl_ms: Optional[int] = None
    ):
        self.evaluator = evaluator or InsightRuleEvaluator()
        self.ranker = InsightRanker(clock=clock, ttl_ms=ttl_ms)

    def generate_insights(self, metrics: MetricsSnapshot, profile_name: str) -> List[InsightCard]:
        """
        Generate ranked insight cards for a snapshot.

        Raises:
            UnknownProfileError: profile_name is not in the catalog
        """
        profile = get_environment_profile(profile_name)
        candidates = self.evaluator.evaluate(metrics, profile.thresholds, profile.name)
        cards = self.ranker.rank(candidates)

        logger.info(f"Generated {len(cards)} insights for profile '{profile.id}'")
        for card in cards:
            logger.debug(f"  {card.id} severity={card.severity} score={card.rank_score:.4f}")
        return cards


def summarize_insights(insights: List[InsightCard]) -> Dict[str, Any]:
    """Counts per severity plus the highest ranked insight."""
    return {
        'total': len(insights),
        'critical': sum(1 for i in insights if i.severity == 'critical'),
        'warning': sum(1 for i in insights if i.severity == 'warning'),
        'info': sum(1 for i in insights if i.severity == 'info'),
        'top_insight': insights[0] if insights else None,
    }
