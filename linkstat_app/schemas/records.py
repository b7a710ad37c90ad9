"""
Domain records shared by the stores, the service and the aggregator.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


UNKNOWN = "Unknown"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_now().isoformat()


class AnalyticsEvent(BaseModel):
    """
    One resolution of an alias.

    Created as a side effect of a successful redirect and never changed
    afterwards. ``timestamp`` is an ISO-8601 string so date bucketing can
    compare the ``YYYY-MM-DD`` prefix directly.
    """

    timestamp: str = Field(default_factory=utc_now_iso, description="When the click happened (ISO-8601, UTC)")
    ip: str = Field(UNKNOWN, description="Client IP address")
    os: str = Field(UNKNOWN, description="Operating system, e.g. 'Windows 10'")
    device: str = Field(UNKNOWN, description="Device category, e.g. 'Desktop'")
    browser: str = Field(UNKNOWN, description="Browser label, e.g. 'Chrome 120.0'")

    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "timestamp": "2025-01-22T10:30:00+00:00",
                "ip": "192.168.1.1",
                "os": "Windows 10",
                "device": "Desktop",
                "browser": "Chrome 120.0.0",
            }
        },
    )


class UrlRecord(BaseModel):
    """A short URL entry as held by a store"""

    id: Optional[int] = None
    long_url: str
    alias: str
    topic: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    click_events: List[AnalyticsEvent] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite drops the offset on the way back
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class RequestContext(BaseModel):
    """Client metadata captured from the inbound redirect request"""

    ip: Optional[str] = None
    user_agent: Optional[str] = None
