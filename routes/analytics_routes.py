"""
Link analytics endpoints.

GET /api/links/{link_id}/analytics: analytics for a link, by id
GET /api/links/analytics/{slug}   : analytics for a link, by slug

Both require a Bearer token and only resolve links owned by its subject;
anything else is a 404.
"""

from __future__ import annotations

from bson import ObjectId
from fastapi import APIRouter, Depends

from dependencies import get_analytics_service, get_current_owner_id
from schemas.dto.responses.analytics import LinkAnalyticsResponse
from schemas.dto.responses.common import ErrorResponse
from services.analytics_service import LinkAnalyticsService

router = APIRouter(prefix="/api/links", tags=["analytics"])

_ERRORS = {
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.get(
    "/analytics/{slug}",
    response_model=LinkAnalyticsResponse,
    responses=_ERRORS,
)
async def link_analytics_by_slug(
    slug: str,
    owner_id: ObjectId = Depends(get_current_owner_id),
    service: LinkAnalyticsService = Depends(get_analytics_service),
) -> LinkAnalyticsResponse:
    data = await service.get_link_analytics_by_slug(slug, owner_id)
    return LinkAnalyticsResponse(data=data)


@router.get(
    "/{link_id}/analytics",
    response_model=LinkAnalyticsResponse,
    responses=_ERRORS,
)
async def link_analytics(
    link_id: str,
    owner_id: ObjectId = Depends(get_current_owner_id),
    service: LinkAnalyticsService = Depends(get_analytics_service),
) -> LinkAnalyticsResponse:
    data = await service.get_link_analytics(link_id, owner_id)
    return LinkAnalyticsResponse(data=data)
