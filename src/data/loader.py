import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

import pandas as pd
from pydantic import ValidationError

from .schemas import MetricsSnapshot, RawStationEvent

logger = logging.getLogger(__name__)


def load_metrics_snapshot(file_path: str) -> MetricsSnapshot:
    """
    Load a metrics snapshot from a JSON object file.
    Keys may be camelCase (controller API) or snake_case.
    """
    with open(file_path, 'r') as f:
        data = json.load(f)
    return MetricsSnapshot.model_validate(data)


def parse_station_events(records: Iterable[Dict[str, Any]]) -> List[RawStationEvent]:
    """
    Validate raw controller records. Invalid records are logged and skipped.
    """
    events = []
    for record in records:
        try:
            events.append(RawStationEvent.model_validate(record))
        except ValidationError as e:
            logger.warning(f"Skipping invalid station event {record}: {e.error_count()} error(s)")
    return events


def load_station_events(file_path: str) -> List[RawStationEvent]:
    """
    Load raw station events from a JSON array or a CSV file.
    Expected CSV columns: timestamp, eventType, apName, apSerial, ssid, details,
    ipAddress, ipv6Address (all but timestamp and eventType optional).
    """
    path = Path(file_path)
    if path.suffix.lower() == '.csv':
        # Keep every cell as text; empty cells become absent fields
        df = pd.read_csv(path, dtype=str)
        records = [
            {k: v for k, v in row.items() if pd.notna(v)}
            for row in df.to_dict(orient='records')
        ]
    else:
        with open(path, 'r') as f:
            records = json.load(f)
        if isinstance(records, dict):
            # Controller responses wrap the list, e.g. {"events": [...]}
            if 'events' not in records:
                logger.warning(f"No 'events' key in {path.name}, found keys {sorted(records)}")
            records = records.get('events') or []

    events = parse_station_events(records)
    logger.info(f"Loaded {len(events)} station events from {path.name}")
    return events
