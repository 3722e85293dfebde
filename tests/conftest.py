"""Fixtures shared by unit and integration tests."""

from datetime import datetime, timezone

import pytest
from bson import ObjectId

from schemas.models.click import ClickDoc, temporal_fields
from schemas.models.link import LinkDoc


@pytest.fixture
def owner_id():
    return ObjectId()


@pytest.fixture
def make_link(owner_id):
    def _make(**overrides) -> LinkDoc:
        base = {
            "_id": ObjectId(),
            "user": owner_id,
            "title": "Launch post",
            "destination_url": "https://example.com/launch",
            "slug": "launch",
            "clicks": 0,
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        base.update(overrides)
        return LinkDoc.model_validate(base)

    return _make


@pytest.fixture
def make_click():
    """Build a stored-looking ClickDoc; temporal fields follow created_at."""
    link_id = ObjectId()

    def _make(created_at: datetime = None, **overrides) -> ClickDoc:
        created_at = created_at or datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        base = {
            "_id": ObjectId(),
            "link": link_id,
            "ip": "203.0.113.7",
            "created_at": created_at,
            **temporal_fields(created_at),
        }
        base.update(overrides)
        return ClickDoc.model_validate(base)

    return _make
