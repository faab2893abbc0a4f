import logging
from typing import Any, Dict, List, Optional

from src.config.environment_profiles import get_environment_profile
from src.config.logging_config import setup_logging
from src.config.settings import EngineSettings, get_settings
from src.core.insight_engine.engine import InsightEngine, summarize_insights
from src.core.insight_engine.explainer import InsightExplainer
from src.core.insight_engine.ranker import Clock
from src.core.mobility.roaming_trail import RoamingTrailBuilder, summarize_trail
from src.data.loader import load_metrics_snapshot, load_station_events
from src.data.schemas import InsightCard, MetricsSnapshot, RawStationEvent, RoamingEvent

logger = logging.getLogger(__name__)


class Orchestrator:
    def __init__(
        self,
        profile_name: Optional[str] = None,
        clock: Optional[Clock] = None,
        settings: Optional[EngineSettings] = None
    ):
        self.settings = settings or get_settings()
        self.profile_name = profile_name or self.settings.default_profile
        # Fail fast on a misconfigured profile
        self.profile = get_environment_profile(self.profile_name)

        self.insight_engine = InsightEngine(clock=clock, ttl_ms=self.settings.insight_ttl_ms)
        self.explainer = InsightExplainer()
        self.trail_builder = RoamingTrailBuilder()

        self.metrics: Optional[MetricsSnapshot] = None
        self.raw_events: List[RawStationEvent] = []
        self.latest_insights: List[InsightCard] = []
        self.latest_trail: List[RoamingEvent] = []

    def load_data(self, metrics_file: Optional[str] = None, events_file: Optional[str] = None):
        if metrics_file:
            self.metrics = load_metrics_snapshot(metrics_file)
        if events_file:
            self.raw_events = load_station_events(events_file)

    def run_insight_pipeline(self, metrics: Optional[MetricsSnapshot] = None) -> List[InsightCard]:
        """
        Evaluate and rank insights for the configured profile.
        """
        snapshot = metrics if metrics is not None else self.metrics
        if snapshot is None:
            logger.warning("No metrics snapshot loaded, skipping insights")
            self.latest_insights = []
            return []

        self.latest_insights = self.insight_engine.generate_insights(snapshot, self.profile.id)
        return self.latest_insights

    def run_roaming_pipeline(self, events: Optional[List[RawStationEvent]] = None) -> List[RoamingEvent]:
        """
        Reconstruct the roaming trail from raw station events.
        """
        raw = events if events is not None else self.raw_events
        self.latest_trail = self.trail_builder.build(raw)
        return self.latest_trail

    def run(self) -> Dict[str, Any]:
        insights = self.run_insight_pipeline()
        trail = self.run_roaming_pipeline()

        return {
            'profile': self.profile.id,
            'insights': insights,
            'insight_summary': summarize_insights(insights),
            'explanations': [self.explainer.explain(card) for card in insights],
            'roaming_trail': trail,
            'trail_summary': summarize_trail(trail),
        }


def run_pipeline(
    metrics_file: Optional[str] = None,
    events_file: Optional[str] = None,
    profile_name: Optional[str] = None
) -> Dict[str, Any]:
    """
    Convenience function: configure logging from settings, load both inputs
    and run the insight and roaming pipelines once.
    """
    settings = get_settings()
    setup_logging(settings.log_level)

    orch = Orchestrator(profile_name=profile_name, settings=settings)
    orch.load_data(metrics_file, events_file)
    return orch.run()
