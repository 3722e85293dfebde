"""
Link analytics service.

Computes a link's analytics on demand from its raw clicks: one store read,
then a single aggregation pass, two top-10 rankings and the adaptive
clicks-over-time series. Nothing is cached or persisted; every call builds
its own accumulators.

Lookup by id and by slug share build_link_analytics(); only the link
resolution differs.
"""

from __future__ import annotations

import time
from typing import Optional, Sequence

from bson import ObjectId

from errors import NotFoundError
from repositories.click_repository import ClickRepository
from repositories.link_repository import LinkRepository
from schemas.dto.responses.analytics import (
    DailyBucket,
    HourlyBucket,
    LinkAnalytics,
    LinkAnalyticsData,
    LinkSummary,
    RecentClickView,
    TimeBucketInfo,
)
from schemas.models.click import ClickDoc
from schemas.models.link import LinkDoc
from shared.distributions import aggregate_distributions
from shared.logging import get_logger, should_sample
from shared.ranking import DEFAULT_TOP_N, rank_top
from shared.time_bucket_utils import (
    BucketMode,
    bucket_clicks_with_mode,
    describe_bucket_mode,
)

log = get_logger(__name__)

RECENT_CLICKS_LIMIT = 100


def build_link_analytics(
    clicks: Sequence[ClickDoc],
    *,
    top_n: int = DEFAULT_TOP_N,
    recent_limit: int = RECENT_CLICKS_LIMIT,
    strict_referrers: bool = False,
) -> LinkAnalytics:
    """Aggregate *clicks* (newest first) into a LinkAnalytics result."""
    dist = aggregate_distributions(clicks, strict_referrers=strict_referrers)
    series, mode = bucket_clicks_with_mode(clicks)
    bucket_model = HourlyBucket if mode is BucketMode.HOURLY else DailyBucket

    return LinkAnalytics(
        total_clicks=dist.total,
        clicks_by_country=dict(dist.by_country),
        clicks_by_device=dict(dist.by_device),
        clicks_by_browser=dict(dist.by_browser),
        clicks_by_os=dict(dist.by_os),
        clicks_by_language=dict(dist.by_language),
        clicks_by_hour=dict(dist.by_hour),
        clicks_by_day_of_week=dict(dist.by_day_of_week),
        clicks_by_screen_resolution=dict(dist.by_screen_resolution),
        clicks_by_referrer=dict(dist.by_referrer),
        clicks_by_utm_source=dict(dist.by_utm_source),
        top_countries=rank_top(dist.country_counts, top_n),
        top_cities=rank_top(dist.city_counts, top_n),
        clicks_over_time=[bucket_model(**entry) for entry in series],
        recent_clicks=[
            RecentClickView.from_click(click) for click in clicks[:recent_limit]
        ],
        time_bucket_info=TimeBucketInfo(
            mode=mode.value, description=describe_bucket_mode(mode)
        ),
    )


class LinkAnalyticsService:
    def __init__(
        self,
        link_repo: LinkRepository,
        click_repo: ClickRepository,
        *,
        top_n: int = DEFAULT_TOP_N,
        recent_limit: int = RECENT_CLICKS_LIMIT,
        strict_referrers: bool = False,
    ) -> None:
        self._links = link_repo
        self._clicks = click_repo
        self._top_n = top_n
        self._recent_limit = recent_limit
        self._strict_referrers = strict_referrers

    async def get_link_analytics(
        self, link_id: str, owner_id: ObjectId
    ) -> LinkAnalyticsData:
        link = await self._links.find_owned_by_id(link_id, owner_id)
        return await self._analyze(link, lookup=link_id)

    async def get_link_analytics_by_slug(
        self, slug: str, owner_id: ObjectId
    ) -> LinkAnalyticsData:
        link = await self._links.find_owned_by_slug(slug, owner_id)
        return await self._analyze(link, lookup=slug)

    async def _analyze(
        self, link: Optional[LinkDoc], *, lookup: str
    ) -> LinkAnalyticsData:
        if link is None:
            log.info("link_analytics_not_found", lookup=lookup)
            raise NotFoundError("Link not found")

        started = time.perf_counter()
        clicks = await self._clicks.find_for_link(link.id)
        analytics = build_link_analytics(
            clicks,
            top_n=self._top_n,
            recent_limit=self._recent_limit,
            strict_referrers=self._strict_referrers,
        )

        if should_sample("link_analytics"):
            log.info(
                "link_analytics_computed",
                link_id=str(link.id),
                total_clicks=analytics.total_clicks,
                bucket_mode=analytics.time_bucket_info.mode,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )

        return LinkAnalyticsData(link=LinkSummary.from_link(link), analytics=analytics)
