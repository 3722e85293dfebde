"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain functions used with
FastAPI's Depends() system. Shared clients live on app.state (set up in the
lifespan); repositories and services are built per request.
"""

from __future__ import annotations

from typing import Optional

from bson import ObjectId
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import AppSettings
from errors import AuthenticationError
from infrastructure.geoip import GeoIPService
from repositories.click_repository import ClickRepository
from repositories.link_repository import LinkRepository
from services.analytics_service import LinkAnalyticsService
from services.click_service import ClickService
from shared.tokens import owner_id_from_token

_bearer = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


async def get_db(request: Request):
    """Return the async MongoDB database from app.state."""
    return request.app.state.db


def get_geoip(request: Request) -> GeoIPService:
    return request.app.state.geoip


async def get_link_repository(db=Depends(get_db)) -> LinkRepository:
    return LinkRepository(db["links"])


async def get_click_repository(db=Depends(get_db)) -> ClickRepository:
    return ClickRepository(db["clicks"])


async def get_current_owner_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    settings: AppSettings = Depends(get_settings),
) -> ObjectId:
    """Resolve the authenticated principal from a Bearer access token."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required")
    return owner_id_from_token(credentials.credentials, settings.jwt)


async def get_analytics_service(
    link_repo: LinkRepository = Depends(get_link_repository),
    click_repo: ClickRepository = Depends(get_click_repository),
    settings: AppSettings = Depends(get_settings),
) -> LinkAnalyticsService:
    return LinkAnalyticsService(
        link_repo,
        click_repo,
        top_n=settings.analytics.top_n,
        recent_limit=settings.analytics.recent_clicks_limit,
        strict_referrers=settings.analytics.strict_referrers,
    )


async def get_click_service(
    link_repo: LinkRepository = Depends(get_link_repository),
    click_repo: ClickRepository = Depends(get_click_repository),
    geoip: GeoIPService = Depends(get_geoip),
) -> ClickService:
    return ClickService(link_repo, click_repo, geoip)
