"""
Response DTOs for the link analytics endpoints.

LinkAnalyticsResponse: GET /api/links/{link_id}/analytics
                        GET /api/links/analytics/{slug}

Field names are snake_case in Python and camelCase on the wire (aliases).
The ``clicks_by_*`` mappings are plain ``{category: count}`` objects with no
ordering guarantee; ``clicks_over_time`` holds hourly entries for a single-day
series and daily entries otherwise.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from schemas.models.base import PyObjectId
from schemas.models.click import ClickDoc
from schemas.models.link import LinkDoc


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)


class RankedEntry(_CamelModel):
    """One row of topCountries / topCities."""

    name: str
    count: int


class HourlyBucket(_CamelModel):
    date: str
    hour: int
    count: int
    label: str  # "HH:00"


class DailyBucket(_CamelModel):
    date: str
    count: int


class TimeBucketInfo(_CamelModel):
    mode: str
    description: str


class RecentClickView(_CamelModel):
    """Projection of a stored click exposed in ``recentClicks``."""

    id: PyObjectId
    timestamp: datetime
    ip: str
    country: str
    city: Optional[str] = None
    region: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = Field(default=None, alias="postalCode")
    clicker_user_id: Optional[PyObjectId] = Field(default=None, alias="clickerUserId")
    clicker_email: Optional[str] = Field(default=None, alias="clickerEmail")
    device: str
    browser: str
    os: str
    referrer: Optional[str] = None
    language: Optional[str] = None
    screen_resolution: Optional[str] = Field(default=None, alias="screenResolution")
    utm_source: Optional[str] = Field(default=None, alias="utmSource")
    hour_of_day: Optional[int] = Field(default=None, alias="hourOfDay")
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    isp: Optional[str] = None

    @classmethod
    def from_click(cls, click: ClickDoc) -> "RecentClickView":
        return cls(
            id=click.id,
            timestamp=click.created_at,
            ip=click.ip,
            country=click.country,
            city=click.city,
            region=click.region,
            state=click.state,
            postal_code=click.postal_code,
            clicker_user_id=click.clicker_user_id,
            clicker_email=click.clicker_email,
            device=click.device.value,
            browser=click.browser,
            os=click.os,
            referrer=click.referrer,
            language=click.language,
            screen_resolution=click.screen_resolution,
            utm_source=click.utm_source,
            hour_of_day=click.hour_of_day,
            latitude=click.latitude,
            longitude=click.longitude,
            isp=click.isp,
        )


class LinkSummary(_CamelModel):
    """Link metadata shown above the analytics."""

    id: PyObjectId = Field(alias="_id")
    title: str
    slug: str
    destination_url: str = Field(alias="destinationUrl")
    clicks: int
    expiry: Optional[datetime] = None
    is_active: bool = Field(alias="isActive")
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_link(cls, link: LinkDoc) -> "LinkSummary":
        return cls(
            id=link.id,
            title=link.title,
            slug=link.slug,
            destination_url=link.destination_url,
            clicks=link.clicks,
            expiry=link.expiry,
            is_active=link.is_active,
            created_at=link.created_at,
        )


class LinkAnalytics(_CamelModel):
    """Aggregated analytics for one link, recomputed on every request."""

    total_clicks: int = Field(alias="totalClicks")
    clicks_by_country: dict[str, int] = Field(alias="clicksByCountry")
    clicks_by_device: dict[str, int] = Field(alias="clicksByDevice")
    clicks_by_browser: dict[str, int] = Field(alias="clicksByBrowser")
    clicks_by_os: dict[str, int] = Field(alias="clicksByOS")
    clicks_by_language: dict[str, int] = Field(alias="clicksByLanguage")
    clicks_by_hour: dict[str, int] = Field(alias="clicksByHour")
    clicks_by_day_of_week: dict[str, int] = Field(alias="clicksByDayOfWeek")
    clicks_by_screen_resolution: dict[str, int] = Field(
        alias="clicksByScreenResolution"
    )
    clicks_by_referrer: dict[str, int] = Field(alias="clicksByReferrer")
    clicks_by_utm_source: dict[str, int] = Field(alias="clicksByUTMSource")
    top_countries: list[RankedEntry] = Field(alias="topCountries")
    top_cities: list[RankedEntry] = Field(alias="topCities")
    clicks_over_time: list[Union[HourlyBucket, DailyBucket]] = Field(
        alias="clicksOverTime"
    )
    recent_clicks: list[RecentClickView] = Field(alias="recentClicks")
    time_bucket_info: Optional[TimeBucketInfo] = Field(
        default=None, alias="timeBucketInfo"
    )


class LinkAnalyticsData(_CamelModel):
    link: LinkSummary
    analytics: LinkAnalytics


class LinkAnalyticsResponse(_CamelModel):
    success: bool = True
    data: LinkAnalyticsData
