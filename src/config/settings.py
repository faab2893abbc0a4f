"""
Engine Settings

Runtime configuration read from environment variables.
"""

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class EngineSettings(BaseModel):
    """Settings shared by the insight and roaming pipelines"""
    default_profile: str = 'campus'
    insight_ttl_minutes: Optional[int] = Field(default=None, gt=0)
    log_level: str = 'INFO'

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Invalid log level: {value}")
        return level

    @property
    def insight_ttl_ms(self) -> Optional[int]:
        if self.insight_ttl_minutes is None:
            return None
        return self.insight_ttl_minutes * 60 * 1000


def get_settings() -> EngineSettings:
    """
    Build settings from the environment.

    WLAN_INSIGHTS_PROFILE      default environment profile id
    WLAN_INSIGHTS_TTL_MINUTES  insight expiry, unset for no expiry
    WLAN_INSIGHTS_LOG_LEVEL    logging level name
    """
    ttl = os.getenv('WLAN_INSIGHTS_TTL_MINUTES')
    return EngineSettings(
        default_profile=os.getenv('WLAN_INSIGHTS_PROFILE', 'campus'),
        insight_ttl_minutes=ttl if ttl else None,
        log_level=os.getenv('WLAN_INSIGHTS_LOG_LEVEL', 'INFO'),
    )
