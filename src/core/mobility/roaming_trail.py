"""
Roaming Trail

Reconstructs a client's time-ordered roaming trail from raw controller events:
filter -> normalize/classify -> sort by time -> band steering detection.
"""

import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from src.core.mobility.band_steering import detect_band_steering
from src.core.mobility.event_normalizer import EventNormalizer, is_roaming_event
from src.data.schemas import RawStationEvent, RoamingEvent

logger = logging.getLogger(__name__)

# Display fallbacks, applied only when presenting a trail
UNKNOWN_AP = 'Unknown AP'
NOT_AVAILABLE = 'N/A'

TRAIL_COLUMNS = [
    'timestamp', 'time', 'event_type', 'ap_name', 'ap_serial', 'ssid',
    'band', 'channel', 'rssi', 'status', 'is_band_steering',
    'cause', 'reason', 'code', 'status_code', 'auth_method',
    'ip_address', 'ipv6_address',
]


class RoamingTrailBuilder:
    def __init__(self, normalizer: Optional[EventNormalizer] = None):
        self.normalizer = normalizer or EventNormalizer()

    def build(self, raw_events: List[RawStationEvent]) -> List[RoamingEvent]:
        """
        Build the roaming trail for one client.
        Non-roaming event types are dropped, as are events whose timestamp
        cannot be parsed. The result is sorted by timestamp ascending.
        """
        normalized = []
        skipped = 0
        for raw in raw_events:
            if not is_roaming_event(raw):
                skipped += 1
                continue
            try:
                normalized.append(self.normalizer.normalize(raw))
            except ValueError as e:
                logger.warning(f"Dropping {raw.event_type} event with bad timestamp {raw.timestamp!r}: {e}")

        if skipped:
            logger.debug(f"Ignored {skipped} non-roaming events")

        normalized.sort(key=lambda e: e.timestamp)
        trail = detect_band_steering(normalized)

        logger.info(
            f"Built roaming trail: {len(trail)} events, "
            f"{sum(1 for e in trail if e.is_band_steering)} band steering"
        )
        return trail


def summarize_trail(trail: List[RoamingEvent]) -> Dict[str, Any]:
    """
    Timeline summary: access points in first-seen order, time range,
    events per AP and number of band steering transitions.
    """
    events_per_ap: Dict[str, int] = {}
    for event in trail:
        ap = event.ap_name or UNKNOWN_AP
        events_per_ap[ap] = events_per_ap.get(ap, 0) + 1

    return {
        'unique_aps': list(events_per_ap),
        'events_per_ap': events_per_ap,
        'time_range': {
            'min': min(e.timestamp for e in trail) if trail else None,
            'max': max(e.timestamp for e in trail) if trail else None,
        },
        'total_events': len(trail),
        'band_steering_count': sum(1 for e in trail if e.is_band_steering),
    }


def trail_to_dataframe(trail: List[RoamingEvent]) -> pd.DataFrame:
    """
    Tabular trail for timeline views, with display fallbacks for missing
    AP name, serial and SSID.
    """
    if not trail:
        return pd.DataFrame(columns=TRAIL_COLUMNS)

    df = pd.DataFrame([e.model_dump() for e in trail])
    # Epochs beyond the pandas datetime range show as NaT
    df['time'] = pd.to_datetime(df['timestamp'], unit='ms', utc=True, errors='coerce')
    df['ap_name'] = df['ap_name'].fillna(UNKNOWN_AP)
    df['ap_serial'] = df['ap_serial'].fillna(NOT_AVAILABLE)
    df['ssid'] = df['ssid'].fillna(NOT_AVAILABLE)
    df['rssi'] = df['rssi'].astype('Int64')
    return df[TRAIL_COLUMNS]
