"""
Link document model.

Maps to the `links` collection. Links are created and edited elsewhere;
this service only reads them (ownership checks, analytics header) and
bumps the cumulative `clicks` counter when a click is tracked.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.models.base import MongoBaseModel, PyObjectId, as_utc, utc_now


class LinkDoc(MongoBaseModel):
    """Document model for the `links` collection."""

    user: PyObjectId
    title: str = "Untitled Link"
    destination_url: str
    slug: str
    clicks: int = 0
    expiry: Optional[datetime] = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expiry is None:
            return False
        now = now or utc_now()
        return as_utc(self.expiry) < now
