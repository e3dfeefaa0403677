"""
User entity store - CRUD access to the users collection
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection

from database.connection import MongoConnection
from models.user import User

logger = logging.getLogger(__name__)


class InvalidUserIdError(ValueError):
    """Raised when an id cannot be interpreted as a document id"""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(
            f'Cast to ObjectId failed for value "{user_id}" (type string) '
            f'at path "_id" for model "User"'
        )


class UserStore(ABC):
    @abstractmethod
    async def create(self, fields: Dict[str, Any]) -> User:
        pass

    @abstractmethod
    async def find_all(self) -> List[User]:
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    async def update_by_id(self, user_id: str, fields: Dict[str, Any]) -> Optional[User]:
        pass

    @abstractmethod
    async def delete_by_id(self, user_id: str) -> Optional[User]:
        pass


class MongoUserStore(UserStore):
    """UserStore backed by a MongoDB collection"""

    def __init__(self, connection: MongoConnection, collection_name: str):
        self._connection = connection
        self._collection_name = collection_name

    @property
    def _collection(self) -> AsyncCollection:
        return self._connection.get_collection(self._collection_name)

    async def create(self, fields: Dict[str, Any]) -> User:
        now = _utcnow()
        document = {**fields, "createdAt": now, "updatedAt": now}

        result = await self._collection.insert_one(document)
        document["_id"] = result.inserted_id

        logger.info(f"Inserted user {result.inserted_id}")
        return User.from_document(document)

    async def find_all(self) -> List[User]:
        documents = await self._collection.find({}).to_list(None)
        return [User.from_document(document) for document in documents]

    async def find_by_id(self, user_id: str) -> Optional[User]:
        object_id = _object_id(user_id)
        document = await self._collection.find_one({"_id": object_id})
        return User.from_document(document) if document else None

    async def update_by_id(self, user_id: str, fields: Dict[str, Any]) -> Optional[User]:
        object_id = _object_id(user_id)
        document = await self._collection.find_one_and_update(
            {"_id": object_id},
            {"$set": {**fields, "updatedAt": _utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return User.from_document(document) if document else None

    async def delete_by_id(self, user_id: str) -> Optional[User]:
        object_id = _object_id(user_id)
        document = await self._collection.find_one_and_delete({"_id": object_id})
        return User.from_document(document) if document else None


def _object_id(user_id: str) -> ObjectId:
    try:
        return ObjectId(user_id)
    except (InvalidId, TypeError):
        raise InvalidUserIdError(user_id)


def _utcnow() -> datetime:
    # MongoDB stores millisecond precision
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)
