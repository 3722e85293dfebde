"""
Repository for the `clicks` collection.

Clicks are append-only: this repository inserts and reads, never updates
or deletes.
"""

from __future__ import annotations

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.asynchronous.collection import AsyncCollection

from schemas.models.click import ClickDoc


class ClickRepository:
    def __init__(self, collection: AsyncCollection) -> None:
        self._col = collection

    async def find_for_link(self, link_id: ObjectId) -> list[ClickDoc]:
        """All clicks recorded for *link_id*, newest first."""
        cursor = self._col.find({"link": link_id}).sort("created_at", DESCENDING)
        return [ClickDoc.from_mongo(doc) async for doc in cursor]

    async def insert(self, click: ClickDoc) -> ClickDoc:
        result = await self._col.insert_one(click.to_mongo())
        return click.model_copy(update={"id": result.inserted_id})
