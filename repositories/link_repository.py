"""
Repository for the `links` collection.

Every lookup made on behalf of a caller is scoped by owner so a link the
caller does not own is indistinguishable from a missing one.
"""

from __future__ import annotations

from typing import Optional

from bson import ObjectId
from pymongo.asynchronous.collection import AsyncCollection

from schemas.models.base import utc_now
from schemas.models.link import LinkDoc


def parse_object_id(value: str) -> Optional[ObjectId]:
    """ObjectId for *value*, or None when it is not a valid id string."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


class LinkRepository:
    def __init__(self, collection: AsyncCollection) -> None:
        self._col = collection

    async def find_by_id(self, link_id: ObjectId) -> Optional[LinkDoc]:
        doc = await self._col.find_one({"_id": link_id})
        return LinkDoc.from_mongo(doc)

    async def find_owned_by_id(
        self, link_id: str, owner_id: ObjectId
    ) -> Optional[LinkDoc]:
        oid = parse_object_id(link_id)
        if oid is None:
            return None
        doc = await self._col.find_one({"_id": oid, "user": owner_id})
        return LinkDoc.from_mongo(doc)

    async def find_owned_by_slug(
        self, slug: str, owner_id: ObjectId
    ) -> Optional[LinkDoc]:
        doc = await self._col.find_one({"slug": slug, "user": owner_id})
        return LinkDoc.from_mongo(doc)

    async def increment_clicks(self, link_id: ObjectId) -> None:
        await self._col.update_one(
            {"_id": link_id},
            {"$inc": {"clicks": 1}, "$set": {"updated_at": utc_now()}},
        )
