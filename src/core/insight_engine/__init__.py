"""Insight engine package initialization"""

from src.core.insight_engine.rules import InsightRule, InsightRuleEvaluator, INSIGHT_RULES
from src.core.insight_engine.ranker import (
    InsightRanker,
    calculate_rank_score,
    RANKING_WEIGHTS,
    SCOPE_WEIGHTS
)
from src.core.insight_engine.engine import InsightEngine, summarize_insights
from src.core.insight_engine.explainer import InsightExplainer

__all__ = [
    # Rules
    'InsightRule',
    'InsightRuleEvaluator',
    'INSIGHT_RULES',
    # Ranking
    'InsightRanker',
    'calculate_rank_score',
    'RANKING_WEIGHTS',
    'SCOPE_WEIGHTS',
    # Engine
    'InsightEngine',
    'summarize_insights',
    'InsightExplainer',
]
