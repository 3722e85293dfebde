"""
Response DTO for click tracking.

TrackClickResponse: POST /api/clicks  (201)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from schemas.dto.responses.analytics import RecentClickView


class TrackClickResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: RecentClickView
