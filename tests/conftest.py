# shared fixtures for backend api tests
# provides an in-memory mock of the motor database and an httpx test client

import copy
import operator

import pytest
import pytest_asyncio
from unittest.mock import MagicMock
from datetime import datetime, timezone, timedelta
import bson
from bson import ObjectId
from bson.codec_options import CodecOptions

from httpx import AsyncClient, ASGITransport

from mindmate.main import app
from mindmate.services.db import get_db


NOW = datetime.now(timezone.utc)

# matches the tz_aware motor client
CODEC_OPTIONS = CodecOptions(tz_aware=True)


def bson_roundtrip(doc: dict) -> dict:
    """encode and decode a document the way a write and a read through the driver would"""
    return bson.decode(bson.encode(doc), codec_options=CODEC_OPTIONS)


# async cursor mock

class AsyncCursorMock:
    """mock for motor's async cursor — supports async for and chained methods"""

    def __init__(self, data=None):
        self._data = data or []
        self._index = 0

    def sort(self, key, direction=1):
        self._data = sorted(self._data, key=operator.itemgetter(key), reverse=direction < 0)
        return self

    def __aiter__(self):
        self._index = 0
        return self

    async def __anext__(self):
        if self._index >= len(self._data):
            raise StopAsyncIteration
        item = self._data[self._index]
        self._index += 1
        return item

    async def to_list(self, length=None):
        if length is not None:
            return self._data[:length]
        return self._data


class MockCollection:
    """mock for a motor collection with async methods"""

    def __init__(self, data=None):
        self._data = data or []
        self.indexes = []

    def find(self, query=None, projection=None):
        results = [copy.deepcopy(d) for d in self._data if self._matches(d, query or {})]
        return AsyncCursorMock(results)

    async def find_one(self, query=None, projection=None):
        for doc in self._data:
            if self._matches(doc, query or {}):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, doc):
        oid = doc.get("_id", ObjectId())
        doc["_id"] = oid
        # stored as the driver would: bson-encoded, millisecond datetimes
        self._data.append(bson_roundtrip(doc))
        result = MagicMock()
        result.inserted_id = oid
        return result

    async def find_one_and_update(self, query, update, upsert=False, return_document=False):
        index = next((i for i, d in enumerate(self._data) if self._matches(d, query)), None)
        if index is None:
            if not upsert:
                return None
            before = {k: v for k, v in query.items() if not isinstance(v, dict)}
        else:
            before = self._data[index]
        target = copy.deepcopy(before)
        for key, val in update.get("$set", {}).items():
            target[key] = val
        for key, val in update.get("$inc", {}).items():
            target[key] = target.get(key, 0) + val
        target = bson_roundtrip(target)
        if index is None:
            self._data.append(target)
        else:
            self._data[index] = target
        # pymongo's ReturnDocument.AFTER is True
        return copy.deepcopy(target) if return_document else copy.deepcopy(before)

    async def delete_one(self, query):
        result = MagicMock()
        result.deleted_count = 0
        for i, doc in enumerate(self._data):
            if self._matches(doc, query):
                del self._data[i]
                result.deleted_count = 1
                break
        return result

    async def create_index(self, keys, **kwargs):
        self.indexes.append((keys, kwargs))
        return f"{keys}_1"

    def aggregate(self, pipeline):
        """supports the $match / $group ($sum) / $sort stages used by the reports"""
        docs = [copy.deepcopy(d) for d in self._data]
        for stage in pipeline:
            if "$match" in stage:
                docs = [d for d in docs if self._matches(d, stage["$match"])]
            elif "$group" in stage:
                grouping = stage["$group"]
                key_field = grouping["_id"].lstrip("$")
                groups = {}
                for d in docs:
                    group = groups.setdefault(d.get(key_field), {"_id": d.get(key_field)})
                    for out, acc in grouping.items():
                        if out != "_id":
                            group[out] = group.get(out, 0) + acc["$sum"]
                docs = list(groups.values())
            elif "$sort" in stage:
                for key, direction in reversed(list(stage["$sort"].items())):
                    docs.sort(key=operator.itemgetter(key), reverse=direction < 0)
        return AsyncCursorMock(docs)

    def _matches(self, doc, query):
        """basic mongodb query matching for tests"""
        for key, value in query.items():
            doc_val = doc.get(key)
            if isinstance(value, dict):
                if "$gte" in value and (doc_val is None or doc_val < value["$gte"]):
                    return False
                if "$lte" in value and (doc_val is None or doc_val > value["$lte"]):
                    return False
            elif doc_val != value:
                return False
        return True


class MockDatabase:
    """mock database that mimics the Database class"""

    def __init__(self):
        self._collections = {}
        self.counters = MockCollection([])

    def collection(self, name):
        return self._collections.setdefault(name, MockCollection([]))

    async def register_resources(self, resources):
        for resource in resources:
            await self.collection(resource.name).create_index("id", unique=True)

    async def connect(self):
        pass

    async def close(self):
        pass


@pytest.fixture
def mock_db():
    """create a fresh mock database for each test"""
    return MockDatabase()


def days_ago(days: float) -> str:
    """iso timestamp relative to test start"""
    return (NOW - timedelta(days=days)).isoformat()


@pytest_asyncio.fixture
async def client(mock_db):
    """httpx async test client with the mock database injected"""

    async def override_get_db():
        return mock_db

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
