"""
Environment Profiles

Fixed catalog of deployment contexts. Each profile carries the thresholds that
tune what the insight rules consider abnormal for that environment.
"""

from typing import Dict, List

from src.data.schemas import EnvironmentProfile, Thresholds


class UnknownProfileError(ValueError):
    """Raised when a profile name is not in the catalog"""

    def __init__(self, profile_name: str):
        self.profile_name = profile_name
        known = ", ".join(sorted(ENVIRONMENT_PROFILES))
        super().__init__(f"Unknown environment profile '{profile_name}' (known: {known})")


ENVIRONMENT_PROFILES: Dict[str, EnvironmentProfile] = {
    'retail': EnvironmentProfile(
        id='retail',
        name='Retail',
        description='Stores with POS terminals, handheld scanners and guest Wi-Fi',
        thresholds=Thresholds(
            rfqi_poor=65,
            rfqi_target=80,
            channel_utilization_pct=70,
            interference_high=0.3,
            retry_rate_pct=15,
            client_density=30,
        ),
    ),
    'warehouse': EnvironmentProfile(
        id='warehouse',
        name='Warehouse',
        description='High ceilings, metal racking and roaming handheld/vehicle clients',
        thresholds=Thresholds(
            rfqi_poor=60,
            rfqi_target=75,
            channel_utilization_pct=60,
            interference_high=0.35,
            retry_rate_pct=20,
            client_density=15,
        ),
    ),
    'campus': EnvironmentProfile(
        id='campus',
        name='Campus',
        description='Offices and classrooms with dense laptop and phone usage',
        thresholds=Thresholds(
            rfqi_poor=70,
            rfqi_target=85,
            channel_utilization_pct=80,
            interference_high=0.25,
            retry_rate_pct=12,
            client_density=40,
        ),
    ),
    'healthcare': EnvironmentProfile(
        id='healthcare',
        name='Healthcare',
        description='Clinical devices and voice badges that need low-latency roaming',
        thresholds=Thresholds(
            rfqi_poor=75,
            rfqi_target=90,
            channel_utilization_pct=60,
            interference_high=0.2,
            retry_rate_pct=10,
            client_density=25,
        ),
    ),
    'hospitality': EnvironmentProfile(
        id='hospitality',
        name='Hospitality',
        description='Hotels and venues dominated by guest streaming traffic',
        thresholds=Thresholds(
            rfqi_poor=65,
            rfqi_target=80,
            channel_utilization_pct=75,
            interference_high=0.3,
            retry_rate_pct=15,
            client_density=35,
        ),
    ),
}

# Lower-is-better metrics and the threshold that limits them
_LIMITED_METRICS = {
    'channel_utilization': 'channel_utilization_pct',
    'retry_rate': 'retry_rate_pct',
    'interference': 'interference_high',
}

WARNING_MARGIN = 1.25


def get_environment_profile(profile_name: str) -> EnvironmentProfile:
    """
    Look up a profile by id (case-insensitive).

    Raises:
        UnknownProfileError: if the name is not in the catalog. There is no
        fallback profile.
    """
    key = (profile_name or "").strip().lower()
    try:
        return ENVIRONMENT_PROFILES[key]
    except KeyError:
        raise UnknownProfileError(profile_name) from None


def list_environment_profiles() -> List[EnvironmentProfile]:
    return list(ENVIRONMENT_PROFILES.values())


def evaluate_metric(profile: EnvironmentProfile, metric: str, value: float) -> str:
    """
    Grade a single metric reading against a profile.

    Returns 'good', 'warning' or 'poor'.
    RFQI is graded against target/poor; lower-is-better metrics are good up to
    their limit and warning up to WARNING_MARGIN times the limit.
    """
    t = profile.thresholds
    if metric == 'rfqi':
        if value >= t.rfqi_target:
            return 'good'
        if value >= t.rfqi_poor:
            return 'warning'
        return 'poor'

    if metric not in _LIMITED_METRICS:
        raise ValueError(f"Metric '{metric}' has no profile threshold")

    limit = getattr(t, _LIMITED_METRICS[metric])
    if value <= limit:
        return 'good'
    if value <= limit * WARNING_MARGIN:
        return 'warning'
    return 'poor'
