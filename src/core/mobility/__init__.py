"""Mobility package initialization"""

from src.core.mobility.details_parser import DetailsTokenizer, EventAttributes
from src.core.mobility.status_classifier import classify_status
from src.core.mobility.event_normalizer import (
    EventNormalizer,
    ROAMING_EVENT_TYPES,
    parse_event_timestamp
)
from src.core.mobility.band_steering import detect_band_steering, is_band_steering
from src.core.mobility.roaming_trail import (
    RoamingTrailBuilder,
    summarize_trail,
    trail_to_dataframe
)

__all__ = [
    # Parsing
    'DetailsTokenizer',
    'EventAttributes',
    'EventNormalizer',
    'ROAMING_EVENT_TYPES',
    'parse_event_timestamp',
    # Classification
    'classify_status',
    'detect_band_steering',
    'is_band_steering',
    # Trail
    'RoamingTrailBuilder',
    'summarize_trail',
    'trail_to_dataframe',
]
