"""
Insight Rules

Threshold rules that turn a metrics snapshot into unscored insight candidates.
Each rule is a (predicate, factory) pair; a rule fires only when every metric
it reads is present and its condition holds.
"""

from dataclasses import dataclass
from typing import Callable, List

from src.data.schemas import InsightCandidate, InsightEvidence, MetricsSnapshot, Thresholds

WEAK_RSSI_DBM = -75
VERY_WEAK_RSSI_DBM = -80


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def _pct(fraction: float, digits: int) -> str:
    return f"{fraction * 100:.{digits}f}%"


@dataclass(frozen=True)
class RuleContext:
    metrics: MetricsSnapshot
    thresholds: Thresholds
    profile_name: str


@dataclass(frozen=True)
class InsightRule:
    rule_id: str
    predicate: Callable[[RuleContext], bool]
    factory: Callable[[RuleContext], InsightCandidate]


# 1. RF quality
def _rfqi_low_applies(ctx: RuleContext) -> bool:
    return ctx.metrics.rfqi is not None and ctx.metrics.rfqi < ctx.thresholds.rfqi_poor


def _rfqi_low(ctx: RuleContext) -> InsightCandidate:
    m, t = ctx.metrics, ctx.thresholds
    return InsightCandidate(
        rule_id='rfqi-low',
        title='RF Quality Below Threshold',
        why_it_matters=(
            f"In a {ctx.profile_name} environment, RF quality below {t.rfqi_poor:g}% "
            f"impacts client connectivity and user experience."
        ),
        evidence=[
            InsightEvidence(label='Current RFQI', value=m.rfqi, unit='%', metric='rfqi', timestamp=m.timestamp),
            InsightEvidence(label='Target', value=t.rfqi_target, unit='%'),
            InsightEvidence(label='Profile', value=ctx.profile_name),
        ],
        recommended_action=(
            'Review RF environment for interference sources. '
            'Consider channel optimization or AP power adjustments.'
        ),
        category='rf_quality',
        severity='critical' if m.rfqi < t.rfqi_poor * 0.7 else 'warning',
        scope='SITE',
        impact=_clamp(1 - m.rfqi / 100),
        confidence=0.9,
        recurrence=0.5,
    )


# 2. Channel utilization
def _channel_util_applies(ctx: RuleContext) -> bool:
    util = ctx.metrics.channel_utilization
    return util is not None and util > ctx.thresholds.channel_utilization_pct


def _channel_util_high(ctx: RuleContext) -> InsightCandidate:
    m, t = ctx.metrics, ctx.thresholds
    headroom = 100 - t.channel_utilization_pct
    impact = (m.channel_utilization - t.channel_utilization_pct) / headroom if headroom > 0 else 1.0
    return InsightCandidate(
        rule_id='channel-util-high',
        title='High Channel Utilization Detected',
        why_it_matters=(
            f"Channel utilization above {t.channel_utilization_pct:g}% in {ctx.profile_name} "
            f"environments can cause client contention and reduced throughput."
        ),
        evidence=[
            InsightEvidence(
                label='Channel Utilization', value=m.channel_utilization, unit='%',
                metric='channelUtilization', timestamp=m.timestamp,
            ),
            InsightEvidence(label='Threshold', value=t.channel_utilization_pct, unit='%'),
        ],
        recommended_action='Consider load balancing clients across APs or adding capacity in high-density areas.',
        category='channel_utilization',
        severity='warning',
        scope='SITE',
        impact=_clamp(impact),
        confidence=0.85,
        recurrence=0.6,
    )


# 3. Interference
def _interference_applies(ctx: RuleContext) -> bool:
    i = ctx.metrics.interference
    return i is not None and i > ctx.thresholds.interference_high


def _interference_high(ctx: RuleContext) -> InsightCandidate:
    m, t = ctx.metrics, ctx.thresholds
    return InsightCandidate(
        rule_id='interference-high',
        title='RF Interference Elevated',
        why_it_matters=(
            f"Interference above {_pct(t.interference_high, 0)} degrades signal quality "
            f"and increases retries in {ctx.profile_name} deployments."
        ),
        evidence=[
            InsightEvidence(
                label='Interference Level', value=_pct(m.interference, 1),
                metric='interference', timestamp=m.timestamp,
            ),
            InsightEvidence(label='Threshold', value=_pct(t.interference_high, 0)),
        ],
        recommended_action=(
            'Identify interference sources (microwaves, Bluetooth, neighboring networks). '
            'Consider dynamic channel selection.'
        ),
        category='interference',
        severity='warning',
        scope='SITE',
        impact=_clamp((m.interference - t.interference_high) / 0.3),
        confidence=0.8,
        recurrence=0.4,
    )


# 4. Retry rate
def _retry_rate_applies(ctx: RuleContext) -> bool:
    r = ctx.metrics.retry_rate
    return r is not None and r > ctx.thresholds.retry_rate_pct


def _retry_rate_high(ctx: RuleContext) -> InsightCandidate:
    m, t = ctx.metrics, ctx.thresholds
    return InsightCandidate(
        rule_id='retry-rate-high',
        title='Elevated Wireless Retry Rate',
        why_it_matters=(
            f"Retry rates above {t.retry_rate_pct:g}% indicate RF issues or interference "
            f"affecting {ctx.profile_name} operations."
        ),
        evidence=[
            InsightEvidence(label='Retry Rate', value=m.retry_rate, unit='%', metric='retryRate', timestamp=m.timestamp),
            InsightEvidence(label='Acceptable Limit', value=t.retry_rate_pct, unit='%'),
        ],
        recommended_action='Check for co-channel interference, adjust AP transmit power, or relocate affected clients.',
        category='rf_quality',
        severity='warning',
        scope='AP',
        impact=_clamp((m.retry_rate - t.retry_rate_pct) / 20),
        confidence=0.75,
        recurrence=0.5,
    )


# 5. AP connectivity
def _offline_aps(m: MetricsSnapshot):
    """Returns (offline count, offline percent) or None when counts are missing"""
    if m.ap_count is None or m.ap_online_count is None or m.ap_count <= 0:
        return None
    offline = m.ap_count - m.ap_online_count
    return offline, offline / m.ap_count * 100


def _ap_offline_applies(ctx: RuleContext) -> bool:
    counts = _offline_aps(ctx.metrics)
    if counts is None:
        return False
    offline, offline_pct = counts
    return offline > 0 and offline_pct > 5


def _ap_offline(ctx: RuleContext) -> InsightCandidate:
    m = ctx.metrics
    offline, offline_pct = _offline_aps(m)
    return InsightCandidate(
        rule_id='ap-offline',
        title=f"{offline:g} Access Points Offline",
        why_it_matters=f"{offline_pct:.0f}% of APs offline creates coverage gaps in {ctx.profile_name} deployment.",
        evidence=[
            InsightEvidence(label='Offline APs', value=offline, timestamp=m.timestamp),
            InsightEvidence(label='Total APs', value=m.ap_count),
            InsightEvidence(label='Online', value=m.ap_online_count),
        ],
        recommended_action='Check network connectivity to offline APs. Verify power and physical connections.',
        category='connectivity',
        severity='critical' if offline_pct > 20 else 'warning',
        scope='SITE',
        impact=_clamp(offline_pct / 30),
        confidence=1.0,
        recurrence=0.3,
    )


# 6. Client density
def _clients_per_ap(m: MetricsSnapshot):
    if m.client_count is None or m.ap_online_count is None or m.ap_online_count <= 0:
        return None
    return m.client_count / m.ap_online_count


def _client_density_applies(ctx: RuleContext) -> bool:
    per_ap = _clients_per_ap(ctx.metrics)
    return per_ap is not None and per_ap > ctx.thresholds.client_density * 1.2


def _client_density_high(ctx: RuleContext) -> InsightCandidate:
    m, t = ctx.metrics, ctx.thresholds
    per_ap = _clients_per_ap(m)
    target = t.client_density
    impact = (per_ap - target) / target if target > 0 else 1.0
    return InsightCandidate(
        rule_id='client-density',
        title='High Client Density Per AP',
        why_it_matters=(
            f"{per_ap:.0f} clients per AP exceeds {ctx.profile_name} capacity planning "
            f"threshold of {t.client_density:g}."
        ),
        evidence=[
            InsightEvidence(label='Clients/AP', value=f"{per_ap:.1f}", timestamp=m.timestamp),
            InsightEvidence(label='Total Clients', value=m.client_count),
            InsightEvidence(label='Online APs', value=m.ap_online_count),
        ],
        recommended_action='Consider adding access points to high-density areas or enabling band steering.',
        category='capacity',
        severity='info',
        scope='SITE',
        impact=_clamp(impact),
        confidence=0.9,
        recurrence=0.7,
    )


# 7. Client signal
def _weak_signal_applies(ctx: RuleContext) -> bool:
    return ctx.metrics.avg_rssi is not None and ctx.metrics.avg_rssi < WEAK_RSSI_DBM


def _weak_signal(ctx: RuleContext) -> InsightCandidate:
    m = ctx.metrics
    return InsightCandidate(
        rule_id='rssi-low',
        title='Clients Experiencing Weak Signal',
        why_it_matters=(
            f"Average RSSI of {m.avg_rssi:g} dBm is below {WEAK_RSSI_DBM} dBm "
            f"threshold for reliable connectivity."
        ),
        evidence=[
            InsightEvidence(label='Average RSSI', value=m.avg_rssi, unit='dBm', metric='rssi', timestamp=m.timestamp),
            InsightEvidence(label='Recommended', value='-65 to -70', unit='dBm'),
        ],
        recommended_action=(
            'Review AP placement. Clients may be too far from access points '
            'or experiencing physical obstructions.'
        ),
        category='client_performance',
        severity='warning' if m.avg_rssi < VERY_WEAK_RSSI_DBM else 'info',
        scope='CLIENT',
        impact=_clamp((WEAK_RSSI_DBM - m.avg_rssi) / 15),
        confidence=0.7,
        recurrence=0.6,
    )


INSIGHT_RULES: List[InsightRule] = [
    InsightRule('rfqi-low', _rfqi_low_applies, _rfqi_low),
    InsightRule('channel-util-high', _channel_util_applies, _channel_util_high),
    InsightRule('interference-high', _interference_applies, _interference_high),
    InsightRule('retry-rate-high', _retry_rate_applies, _retry_rate_high),
    InsightRule('ap-offline', _ap_offline_applies, _ap_offline),
    InsightRule('client-density', _client_density_applies, _client_density_high),
    InsightRule('rssi-low', _weak_signal_applies, _weak_signal),
]


class InsightRuleEvaluator:
    """Runs every rule against a snapshot, in declaration order."""

    def __init__(self, rules: List[InsightRule] = None):
        self.rules = list(rules) if rules is not None else list(INSIGHT_RULES)

    def evaluate(
        self,
        metrics: MetricsSnapshot,
        thresholds: Thresholds,
        profile_name: str
    ) -> List[InsightCandidate]:
        ctx = RuleContext(metrics=metrics, thresholds=thresholds, profile_name=profile_name)
        return [rule.factory(ctx) for rule in self.rules if rule.predicate(ctx)]
