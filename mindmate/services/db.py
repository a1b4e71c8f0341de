# async mongodb client for the backend api
# uses motor for non-blocking operations

import logging
from typing import Iterable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from mindmate.config import settings
from mindmate.resources import Resource

logger = logging.getLogger(__name__)


class Database:
    """async mongodb connection manager"""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self):
        """establish connection to mongodb"""
        if self.client is not None:
            return

        logger.info(f"Connecting to MongoDB database: {settings.MONGODB_DATABASE}")
        # tz_aware so stored dates come back comparable with utc window bounds
        self.client = AsyncIOMotorClient(settings.MONGODB_URI, tz_aware=True)
        self.db = self.client[settings.MONGODB_DATABASE]

        # verify connection
        await self.client.admin.command("ping")
        logger.info("MongoDB connection established")

    async def close(self):
        """close mongodb connection"""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("MongoDB connection closed")

    async def register_resources(self, resources: Iterable[Resource]):
        """create the unique id index and any declared indexes for each resource collection"""
        for resource in resources:
            collection = self.collection(resource.name)
            await collection.create_index("id", unique=True)
            for field_name in resource.indexes:
                await collection.create_index(field_name)
            logger.info(f"Registered collection: {resource.name}")

    # collection accessors

    def collection(self, name: str) -> AsyncIOMotorCollection:
        return self.db[name]

    @property
    def counters(self):
        return self.db["counters"]


# singleton instance
db = Database()


async def get_db() -> Database:
    """dependency injection for database access"""
    return db
