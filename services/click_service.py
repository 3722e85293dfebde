"""
Click tracking service.

Builds one immutable ClickDoc per visit: the link must exist, be active and
not expired; the User-Agent is classified, the IP geolocated, the referrer
normalised, and hour/day-of-week derived from the creation time. The link's
cumulative click counter is bumped after the insert.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from errors import ForbiddenError, NotFoundError
from infrastructure.geoip import GeoIPService
from repositories.click_repository import ClickRepository
from repositories.link_repository import LinkRepository
from schemas.dto.requests.click import TrackClickRequest
from schemas.models.base import utc_now
from schemas.models.click import UNKNOWN, ClickDoc, temporal_fields
from shared.logging import get_logger, hash_ip, should_sample
from shared.user_agent import classify_user_agent
from shared.validators import normalize_referrer

log = get_logger(__name__)


@dataclass(frozen=True)
class ClientContext:
    """What the HTTP layer knows about the visitor."""

    ip: str
    user_agent: Optional[str] = None
    referrer: Optional[str] = None


class ClickService:
    def __init__(
        self,
        link_repo: LinkRepository,
        click_repo: ClickRepository,
        geoip: GeoIPService,
    ) -> None:
        self._links = link_repo
        self._clicks = click_repo
        self._geoip = geoip

    async def track_click(
        self,
        payload: TrackClickRequest,
        client: ClientContext,
        *,
        now: Optional[datetime] = None,
    ) -> ClickDoc:
        link = await self._links.find_by_id(payload.link_id)
        if link is None:
            raise NotFoundError("Link not found")

        now = now or utc_now()
        if not link.is_active:
            raise ForbiddenError("Link is not active")
        if link.is_expired(now):
            raise ForbiddenError("Link has expired")

        agent = classify_user_agent(client.user_agent)
        location = await self._geoip.locate(client.ip)

        click = ClickDoc(
            link=link.id,
            ip=client.ip,
            country=location.country,
            city=location.city,
            region=location.region,
            state=location.state,
            postal_code=location.postal_code,
            latitude=location.latitude,
            longitude=location.longitude,
            isp=location.isp,
            device=agent.device,
            browser=agent.browser,
            os=agent.os,
            user_agent=client.user_agent,
            referrer=normalize_referrer(client.referrer),
            screen_resolution=payload.screen_resolution or UNKNOWN,
            viewport_size=payload.viewport_size or UNKNOWN,
            language=payload.language or UNKNOWN,
            timezone=payload.timezone or UNKNOWN,
            utm_source=payload.utm_source,
            utm_medium=payload.utm_medium,
            utm_campaign=payload.utm_campaign,
            session_id=payload.session_id,
            created_at=now,
            **temporal_fields(now),
        )

        stored = await self._clicks.insert(click)
        await self._links.increment_clicks(link.id)

        if should_sample("click_tracked"):
            log.info(
                "click_tracked",
                link_id=str(link.id),
                ip_hash=hash_ip(client.ip),
                country=stored.country,
                device=stored.device.value,
            )
        return stored
