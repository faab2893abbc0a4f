"""
Band Steering Detection

A client that moves between radios of the same access point (2.4GHz <-> 5GHz,
or a channel change on the same AP) is being band steered, not roaming.
Detection compares each event only with its immediate predecessor.
"""

from typing import List, Optional

from src.data.schemas import RoamingEvent


def _both_equal(a: Optional[str], b: Optional[str]) -> bool:
    return a is not None and b is not None and a == b


def _both_differ(a: Optional[str], b: Optional[str]) -> bool:
    return a is not None and b is not None and a != b


def same_access_point(prev: RoamingEvent, curr: RoamingEvent) -> bool:
    """Matched by AP name or by AP serial; a missing identifier never matches."""
    return _both_equal(prev.ap_name, curr.ap_name) or _both_equal(prev.ap_serial, curr.ap_serial)


def is_band_steering(prev: RoamingEvent, curr: RoamingEvent) -> bool:
    if not same_access_point(prev, curr):
        return False
    return _both_differ(prev.band, curr.band) or _both_differ(prev.channel, curr.channel)


def detect_band_steering(events: List[RoamingEvent]) -> List[RoamingEvent]:
    """
    Annotate a timestamp-ascending event list.

    Returns new event objects with `is_band_steering` set; the input list and
    its events are left untouched. The first event is never marked.
    """
    annotated = []
    for i, event in enumerate(events):
        steered = i > 0 and is_band_steering(events[i - 1], event)
        annotated.append(event.model_copy(update={'is_band_steering': steered}))
    return annotated
