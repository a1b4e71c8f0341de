# record store — create/find/update/delete/count for one resource collection
# records carry an auto-incrementing integer id drawn from the counters collection
# any driver or validation failure surfaces as StorageError

import logging
from datetime import datetime
from typing import Any, Optional

from pymongo import ReturnDocument

from mindmate.models.common import utcnow
from mindmate.resources import Resource
from mindmate.services.db import Database

logger = logging.getLogger(__name__)


class RecordNotFound(Exception):
    """the identifier does not resolve to a stored record"""


class StorageError(Exception):
    """a storage call or payload validation failed"""


def parse_record_id(raw: Any) -> Optional[int]:
    """ids are positive integers; anything else can never match a record"""
    try:
        record_id = int(raw)
    except (TypeError, ValueError):
        return None
    return record_id if record_id > 0 else None


def serialize_record(doc: dict) -> dict:
    """strip the mongodb _id and expose timestamps in camelCase"""
    record = {k: v for k, v in doc.items() if k not in ("_id", "created_at", "updated_at")}
    record["createdAt"] = doc.get("created_at")
    record["updatedAt"] = doc.get("updated_at")
    return record


class RecordStore:
    """storage operations for a single resource kind"""

    def __init__(self, db: Database, resource: Resource):
        self.db = db
        self.resource = resource
        self.collection = db.collection(resource.name)

    async def _next_id(self) -> int:
        counter = await self.db.counters.find_one_and_update(
            {"_id": self.resource.name},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return counter["seq"]

    async def create(self, payload: Any) -> dict:
        try:
            fields = self.resource.create_model.model_validate(payload).model_dump()
            now = utcnow()
            doc = {
                "id": await self._next_id(),
                **fields,
                "created_at": now,
                "updated_at": now,
            }
            await self.collection.insert_one(doc)
        except Exception as e:
            raise StorageError(f"could not create {self.resource.name} record") from e

        logger.info(f"Created {self.resource.name} record {doc['id']}")
        return serialize_record(doc)

    async def find_all(self) -> list[dict]:
        """every record of this kind, newest id first"""
        try:
            cursor = self.collection.find({}).sort("id", -1)
            return [serialize_record(doc) async for doc in cursor]
        except Exception as e:
            raise StorageError(f"could not list {self.resource.name} records") from e

    async def _find_doc(self, raw_id: Any) -> dict:
        record_id = parse_record_id(raw_id)
        if record_id is None:
            raise RecordNotFound(f"{self.resource.name} {raw_id} not found")
        try:
            doc = await self.collection.find_one({"id": record_id})
        except Exception as e:
            raise StorageError(f"could not fetch {self.resource.name} record {record_id}") from e
        if doc is None:
            raise RecordNotFound(f"{self.resource.name} {raw_id} not found")
        return doc

    async def find_by_id(self, raw_id: Any) -> dict:
        return serialize_record(await self._find_doc(raw_id))

    async def update(self, raw_id: Any, payload: Any) -> dict:
        """merge only the fields present in the payload onto the stored record"""
        doc = await self._find_doc(raw_id)
        try:
            fields = self.resource.update_model.model_validate(payload).model_dump(exclude_unset=True)
        except Exception as e:
            raise StorageError(f"invalid update for {self.resource.name} record {doc['id']}") from e

        nulled = sorted(name for name in self.resource.required_fields if name in fields and fields[name] is None)
        if nulled:
            raise StorageError(f"{self.resource.name}: required fields cannot be null: {', '.join(nulled)}")

        fields["updated_at"] = utcnow()
        try:
            updated = await self.collection.find_one_and_update(
                {"id": doc["id"]},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        except Exception as e:
            raise StorageError(f"could not update {self.resource.name} record {doc['id']}") from e

        # deleted between the lookup and the write
        if updated is None:
            raise RecordNotFound(f"{self.resource.name} {raw_id} not found")

        logger.info(f"Updated {self.resource.name} record {doc['id']}")
        return serialize_record(updated)

    async def delete(self, raw_id: Any) -> bool:
        doc = await self._find_doc(raw_id)
        try:
            result = await self.collection.delete_one({"id": doc["id"]})
        except Exception as e:
            raise StorageError(f"could not delete {self.resource.name} record {doc['id']}") from e

        logger.info(f"Deleted {self.resource.name} record {doc['id']}")
        return result.deleted_count > 0

    async def count_grouped_by(self, field: str, date_field: str, start: datetime, end: datetime) -> list[dict]:
        """count records per distinct value of field with date_field inside [start, end]"""
        pipeline = [
            {"$match": {date_field: {"$gte": start, "$lte": end}}},
            {"$group": {"_id": f"${field}", "count": {"$sum": 1}}},
            {"$sort": {"_id": 1}},
        ]
        try:
            results = await self.collection.aggregate(pipeline).to_list(length=None)
        except Exception as e:
            raise StorageError(f"could not aggregate {self.resource.name} by {field}") from e
        return [{field: r["_id"], "count": r["count"]} for r in results]
