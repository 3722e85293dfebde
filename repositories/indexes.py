"""
MongoDB index definitions, applied once at startup.

clicks(link, created_at desc) serves the newest-first analytics read; the
per-dimension compound indexes support ad hoc queries against the raw events.
"""

from __future__ import annotations

from pymongo import ASCENDING, DESCENDING, IndexModel
from pymongo.asynchronous.database import AsyncDatabase

from shared.logging import get_logger

log = get_logger(__name__)

LINK_INDEXES = [
    IndexModel([("slug", ASCENDING)], unique=True),
    IndexModel([("user", ASCENDING), ("created_at", DESCENDING)]),
    IndexModel([("expiry", ASCENDING), ("is_active", ASCENDING)]),
]

CLICK_INDEXES = [
    IndexModel([("link", ASCENDING), ("created_at", DESCENDING)]),
    IndexModel([("created_at", DESCENDING)]),
    IndexModel([("clicker_user_id", ASCENDING)]),
] + [
    IndexModel([("link", ASCENDING), (field, ASCENDING)])
    for field in (
        "country",
        "device",
        "hour_of_day",
        "day_of_week",
        "utm_source",
        "language",
    )
]


async def ensure_indexes(db: AsyncDatabase) -> None:
    await db["links"].create_indexes(LINK_INDEXES)
    await db["clicks"].create_indexes(CLICK_INDEXES)
    log.info(
        "indexes_ensured",
        links=len(LINK_INDEXES),
        clicks=len(CLICK_INDEXES),
    )
