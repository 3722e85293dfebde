"""
Click document model.

Maps to the `clicks` MongoDB collection. One document per tracked visit,
written once at ingestion and never updated afterwards.

hour_of_day / day_of_week are derived from created_at under the UTC clock
when the document is built (day_of_week: 0 = Sunday to 6 = Saturday).
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from schemas.models.base import MongoBaseModel, PyObjectId, as_utc, utc_now

UNKNOWN = "Unknown"
DIRECT_REFERRER = "Direct"


class DeviceType(str, Enum):
    DESKTOP = "Desktop"
    MOBILE = "Mobile"
    TABLET = "Tablet"
    UNKNOWN = "Unknown"


class Weekday(Enum):
    """Day-of-week as stored on clicks: 0 = Sunday to 6 = Saturday."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_datetime(cls, value: datetime) -> "Weekday":
        # datetime.weekday() is Monday-based
        return cls((value.weekday() + 1) % 7)


class ClickDoc(MongoBaseModel):
    """Document model for the `clicks` collection."""

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        frozen=True,
    )

    link: PyObjectId
    clicker_user_id: Optional[PyObjectId] = None
    clicker_email: Optional[str] = None

    # Visitor network / geolocation
    ip: str
    country: str = UNKNOWN
    city: Optional[str] = UNKNOWN
    region: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    isp: Optional[str] = UNKNOWN

    # User-agent classification
    device: DeviceType = DeviceType.UNKNOWN
    browser: str = UNKNOWN
    os: str = UNKNOWN
    user_agent: Optional[str] = None

    referrer: Optional[str] = DIRECT_REFERRER

    # Client-declared context
    screen_resolution: Optional[str] = UNKNOWN
    viewport_size: Optional[str] = UNKNOWN
    language: Optional[str] = UNKNOWN
    timezone: Optional[str] = UNKNOWN

    # Marketing attribution
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    session_id: Optional[str] = None

    hour_of_day: Optional[int] = Field(default=None, ge=0, le=23)
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)

    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @property
    def weekday(self) -> Optional[Weekday]:
        if self.day_of_week is None:
            return None
        return Weekday(self.day_of_week)


def temporal_fields(created_at: datetime) -> dict[str, int]:
    """hour_of_day / day_of_week for a click created at *created_at*."""
    created_at = as_utc(created_at)
    return {
        "hour_of_day": created_at.hour,
        "day_of_week": Weekday.from_datetime(created_at).value,
    }
