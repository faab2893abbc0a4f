from typing import Optional

DISCONNECT_EVENT_TYPES = frozenset({'De-registration', 'Disassociate'})

GOOD_RSSI_DBM = -60
WARNING_RSSI_DBM = -70


def classify_status(event_type: str, rssi: Optional[int]) -> str:
    """
    Qualitative status of a roaming event.

    Disconnects are always 'bad'. Otherwise RSSI >= -60 is 'good',
    -70 <= RSSI < -60 is 'warning' and anything weaker is 'bad'.
    Without an RSSI reading the event is 'good'.
    """
    if event_type in DISCONNECT_EVENT_TYPES:
        return 'bad'
    if rssi is None:
        return 'good'
    if rssi >= GOOD_RSSI_DBM:
        return 'good'
    if rssi >= WARNING_RSSI_DBM:
        return 'warning'
    return 'bad'
