"""
Database connection lifecycle management
"""

import logging
from typing import Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class MongoConnection:
    """Owns the process-wide MongoDB client; opened on startup, closed on shutdown"""

    def __init__(self, uri: str, default_database: str):
        self.uri = uri
        self.default_database = default_database
        self._client: Optional[AsyncMongoClient] = None

    def open(self) -> bool:
        """
        Create the client. No I/O happens here; the driver connects lazily.

        Returns:
            False if the URI could not be used to build a client
        """
        try:
            self._client = AsyncMongoClient(self.uri, tz_aware=True)
        except PyMongoError as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            return False
        return True

    async def ping(self) -> bool:
        """
        Verify connectivity.

        A failed ping is logged but not raised, so the server keeps
        listening and individual requests report the failure instead.

        Returns:
            True if the server answered the ping
        """
        if self._client is None:
            return False

        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            return False

        logger.info("Connected to Mongo Database Successfully")
        return True

    async def connect(self) -> bool:
        """Create the client and wait for the ping"""
        return self.open() and await self.ping()

    async def close(self):
        """Close the client and release its connection pool"""
        if self._client is not None:
            await self._client.close()
            self._client = None
        logger.info("Database connections closed")

    @property
    def database(self) -> AsyncDatabase:
        if self._client is None:
            raise RuntimeError("Database connection not initialized")
        return self._client.get_default_database(default=self.default_database)

    def get_collection(self, name: str) -> AsyncCollection:
        return self.database[name]
