"""
Request DTO for click tracking.

TrackClickRequest: POST /api/clicks

Client-declared context (screen, viewport, language, timezone) is optional
and falls back to "Unknown"; UTM fields and the session id stay null when
absent. Blank strings count as absent.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.models.base import PyObjectId


class TrackClickRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    link_id: PyObjectId = Field(alias="linkId")
    screen_resolution: Optional[str] = Field(default=None, alias="screenResolution")
    viewport_size: Optional[str] = Field(default=None, alias="viewportSize")
    language: Optional[str] = None
    timezone: Optional[str] = None
    utm_source: Optional[str] = Field(default=None, alias="utmSource")
    utm_medium: Optional[str] = Field(default=None, alias="utmMedium")
    utm_campaign: Optional[str] = Field(default=None, alias="utmCampaign")
    session_id: Optional[str] = Field(default=None, alias="sessionId")

    @field_validator(
        "screen_resolution",
        "viewport_size",
        "language",
        "timezone",
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "session_id",
    )
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None
