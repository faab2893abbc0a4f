import math
from typing import List, Optional, Union, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator

InsightScope = Literal['NETWORK', 'SITE', 'AP', 'CLIENT']
InsightSeverity = Literal['critical', 'warning', 'info']
InsightCategory = Literal[
    'rf_quality',
    'interference',
    'channel_utilization',
    'client_performance',
    'connectivity',
    'capacity',
    'anomaly',
]
RoamingStatus = Literal['good', 'warning', 'bad']


class CamelModel(BaseModel):
    """Accepts the controller's camelCase keys as well as snake_case names."""
    model_config = ConfigDict(populate_by_name=True)


class MetricsSnapshot(CamelModel):
    """Current network metrics. Every field is optional; absent means unknown."""
    rfqi: Optional[float] = None  # 0-100
    channel_utilization: Optional[float] = Field(default=None, alias='channelUtilization')  # %
    interference: Optional[float] = None  # 0-1 fraction
    noise_floor_dbm: Optional[float] = Field(default=None, alias='noiseFloorDbm')
    retry_rate: Optional[float] = Field(default=None, alias='retryRate')  # %
    client_count: Optional[float] = Field(default=None, alias='clientCount')  # may be averaged
    ap_count: Optional[float] = Field(default=None, alias='apCount')
    ap_online_count: Optional[float] = Field(default=None, alias='apOnlineCount')
    throughput_bps: Optional[float] = Field(default=None, alias='throughputBps')
    avg_rssi: Optional[float] = Field(default=None, alias='avgRssi')  # dBm
    avg_snr: Optional[float] = Field(default=None, alias='avgSnr')  # dB
    latency_ms: Optional[float] = Field(default=None, alias='latencyMs')
    timestamp: Optional[int] = None  # epoch ms

    @field_validator('timestamp', mode='before')
    @classmethod
    def truncate_timestamp(cls, value):
        # Sub-millisecond precision is dropped
        if isinstance(value, float) and math.isfinite(value):
            return int(value)
        return value


class Thresholds(CamelModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    rfqi_poor: float = Field(alias='rfqiPoor')
    rfqi_target: float = Field(alias='rfqiTarget')
    channel_utilization_pct: float = Field(alias='channelUtilizationPct')
    interference_high: float = Field(alias='interferenceHigh')  # 0-1 fraction
    retry_rate_pct: float = Field(alias='retryRatePct')
    client_density: float = Field(alias='clientDensity')  # target clients per AP


class EnvironmentProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    thresholds: Thresholds


class InsightEvidence(BaseModel):
    """A labeled fact backing an insight"""
    label: str
    value: Optional[Union[float, int, str]] = None
    unit: Optional[str] = None
    metric: Optional[str] = None
    timestamp: Optional[int] = None  # snapshot clock position, epoch ms
    source: Optional[str] = None


class InsightCandidate(BaseModel):
    """Unscored output of a single insight rule"""
    rule_id: str
    title: str  # what happened
    why_it_matters: str
    evidence: List[InsightEvidence] = Field(default_factory=list)
    recommended_action: str
    category: InsightCategory
    severity: InsightSeverity
    scope: InsightScope
    # Ranking inputs
    impact: float = Field(ge=0.0, le=1.0)
    confidence: float = Field(ge=0.0, le=1.0)
    recurrence: float = Field(ge=0.0, le=1.0)


class InsightCard(InsightCandidate):
    """Ranked insight, built only by the ranker"""
    id: str
    rank_score: float
    created_at: int  # epoch ms
    expires_at: Optional[int] = None


class RawStationEvent(CamelModel):
    """Per-client event record as reported by the wireless controller"""
    timestamp: str
    event_type: str = Field(alias='eventType')
    ap_name: Optional[str] = Field(default=None, alias='apName')
    ap_serial: Optional[str] = Field(default=None, alias='apSerial')
    ssid: Optional[str] = None
    details: Optional[str] = None
    ip_address: Optional[str] = Field(default=None, alias='ipAddress')
    ipv6_address: Optional[str] = Field(default=None, alias='ipv6Address')

    @field_validator('timestamp', mode='before')
    @classmethod
    def coerce_timestamp(cls, value):
        # Controllers emit epoch ms either as a string or as a bare number
        if isinstance(value, bool):
            raise ValueError("timestamp must be a string or number")
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (int, float)):
            return str(value)
        return value


class RoamingEvent(BaseModel):
    """One normalized step of a client's roaming trail"""
    timestamp: int  # epoch ms
    event_type: str
    ap_name: Optional[str] = None
    ap_serial: Optional[str] = None
    ssid: Optional[str] = None
    details: Optional[str] = None
    cause: Optional[str] = None
    reason: Optional[str] = None
    code: Optional[str] = None
    status_code: Optional[str] = None
    channel: Optional[str] = None
    band: Optional[str] = None
    auth_method: Optional[str] = None
    ip_address: Optional[str] = None
    ipv6_address: Optional[str] = None
    rssi: Optional[int] = None
    status: RoamingStatus = 'good'
    is_band_steering: bool = False
