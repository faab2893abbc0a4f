from datetime import datetime, timezone
from typing import Optional

from src.core.mobility.details_parser import DetailsTokenizer
from src.core.mobility.status_classifier import classify_status
from src.data.schemas import RawStationEvent, RoamingEvent

ROAMING_EVENT_TYPES = frozenset({
    'Roam',
    'Registration',
    'De-registration',
    'Associate',
    'Disassociate',
    'State Change',
})


def is_roaming_event(raw: RawStationEvent) -> bool:
    return raw.event_type in ROAMING_EVENT_TYPES


# Representable range of datetime (years 1-9999)
MIN_EPOCH_MS = int(datetime.min.replace(tzinfo=timezone.utc).timestamp() * 1000)
MAX_EPOCH_MS = int(datetime.max.replace(tzinfo=timezone.utc).timestamp() * 1000)


def _parse_epoch_ms(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return None


def parse_event_timestamp(value: str) -> int:
    """
    Epoch milliseconds from a controller timestamp.
    Accepts epoch-ms numbers ("1700000000000") and ISO-8601 strings; naive
    ISO times are taken as UTC.

    Raises:
        ValueError: the value is neither, or the epoch is out of range
    """
    text = value.strip()
    millis = _parse_epoch_ms(text)
    if millis is not None:
        if not MIN_EPOCH_MS <= millis <= MAX_EPOCH_MS:
            raise ValueError(f"epoch ms {millis} out of range")
        return millis

    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    parsed = datetime.fromisoformat(text)  # raises ValueError
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


class EventNormalizer:
    def __init__(self, tokenizer: DetailsTokenizer = None):
        self.tokenizer = tokenizer or DetailsTokenizer()

    def normalize(self, raw: RawStationEvent) -> RoamingEvent:
        """
        Build a RoamingEvent from a raw controller record.

        Raises:
            ValueError: the timestamp cannot be parsed or is out of range
        """
        attrs = self.tokenizer.parse(raw.details)
        return RoamingEvent(
            timestamp=parse_event_timestamp(raw.timestamp),
            event_type=raw.event_type,
            ap_name=raw.ap_name,
            ap_serial=raw.ap_serial,
            ssid=raw.ssid,
            details=raw.details,
            cause=attrs.cause,
            reason=attrs.reason,
            code=attrs.code,
            status_code=attrs.status_code,
            channel=attrs.channel,
            band=attrs.band,
            auth_method=attrs.auth_method,
            ip_address=raw.ip_address,
            ipv6_address=raw.ipv6_address,
            rssi=attrs.rssi,
            status=classify_status(raw.event_type, attrs.rssi),
        )
