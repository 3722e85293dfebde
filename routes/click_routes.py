"""
Click tracking endpoint.

POST /api/clicks: record a visit to a short link (public, no auth).
IP, User-Agent and Referer (falling back to a "Referrer" header) are read
from the request; the body carries the link id plus optional client context
and UTM tags.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from dependencies import get_click_service
from schemas.dto.requests.click import TrackClickRequest
from schemas.dto.responses.analytics import RecentClickView
from schemas.dto.responses.click import TrackClickResponse
from schemas.dto.responses.common import ErrorResponse
from services.click_service import ClickService, ClientContext
from shared.ip_utils import get_client_ip

router = APIRouter(prefix="/api/clicks", tags=["clicks"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=TrackClickResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def track_click(
    payload: TrackClickRequest,
    request: Request,
    service: ClickService = Depends(get_click_service),
) -> TrackClickResponse:
    client = ClientContext(
        ip=get_client_ip(request),
        user_agent=request.headers.get("User-Agent"),
        referrer=request.headers.get("Referer") or request.headers.get("Referrer"),
    )
    click = await service.track_click(payload, client)
    return TrackClickResponse(data=RecentClickView.from_click(click))
