"""
Users service - business logic for user management
"""

import logging
from typing import Any

from fastapi import Request

from database.user_store import UserStore, InvalidUserIdError
from services.base_service import ServiceResult
from services.user_validator import validate_user_create, validate_user_update

logger = logging.getLogger(__name__)

class UsersService:
    """Service for user CRUD operations on top of a UserStore"""

    def __init__(self, store: UserStore):
        self.store = store

    async def create_user(self, payload: Any) -> ServiceResult:
        """
        Create a new user

        Args:
            payload: Raw request body

        Returns:
            ServiceResult with the created user
        """
        validation = validate_user_create(payload)
        if not validation.valid:
            return ServiceResult.failed(validation.error.message, validation.error.error_type)

        try:
            user = await self.store.create(validation.data)
        except Exception as e:
            logger.error(f"Create operation failed for users: {e}", exc_info=True)
            return ServiceResult.failed(str(e), "DATABASE_ERROR")

        logger.info(f"Created user {user.id}")
        return ServiceResult.ok([user])

    async def list_users(self) -> ServiceResult:
        """Get all users"""
        try:
            users = await self.store.find_all()
        except Exception as e:
            logger.error(f"Read operation failed for users: {e}")
            return ServiceResult.failed(str(e), "DATABASE_ERROR")

        return ServiceResult.ok(users)

    async def get_user_by_id(self, user_id: str) -> ServiceResult:
        """
        Get a user by its ID

        An unknown id is not a failure: the result is simply empty.
        """
        try:
            user = await self.store.find_by_id(user_id)
        except InvalidUserIdError as e:
            return ServiceResult.failed(str(e), "INVALID_ID")
        except Exception as e:
            logger.error(f"Read operation failed for user {user_id}: {e}")
            return ServiceResult.failed(str(e), "DATABASE_ERROR")

        return ServiceResult.ok([user] if user else [])

    async def update_user(self, user_id: str, payload: Any) -> ServiceResult:
        """
        Overwrite the given fields of a user

        Args:
            user_id: ID of the user
            payload: Raw request body with the fields to overwrite

        Returns:
            ServiceResult with the user as it is after the update
        """
        validation = validate_user_update(payload)
        if not validation.valid:
            return ServiceResult.failed(validation.error.message, validation.error.error_type)

        try:
            user = await self.store.update_by_id(user_id, validation.data)
        except InvalidUserIdError as e:
            return ServiceResult.failed(str(e), "INVALID_ID")
        except Exception as e:
            logger.error(f"Update operation failed for user {user_id}: {e}", exc_info=True)
            return ServiceResult.failed(str(e), "DATABASE_ERROR")

        if user is None:
            return ServiceResult.failed(f"User with ID {user_id} not found", "RESOURCE_NOT_FOUND")

        logger.info(f"Updated user {user_id}: {sorted(validation.data)}")
        return ServiceResult.ok([user])

    async def delete_user(self, user_id: str) -> ServiceResult:
        """
        Delete a user

        After a successful delete the user is read back by id, so the
        result reflects the post-delete state (empty).
        """
        try:
            deleted = await self.store.delete_by_id(user_id)
            if deleted is None:
                return ServiceResult.failed(f"cannot find any user with ID {user_id}", "RESOURCE_NOT_FOUND")

            logger.info(f"Deleted user {user_id}")
            remaining = await self.store.find_by_id(user_id)
        except InvalidUserIdError as e:
            return ServiceResult.failed(str(e), "INVALID_ID")
        except Exception as e:
            logger.error(f"Delete operation failed for user {user_id}: {e}")
            return ServiceResult.failed(str(e), "DATABASE_ERROR")

        return ServiceResult.ok([remaining] if remaining else [])

def get_users_service(request: Request) -> UsersService:
    """FastAPI dependency: a UsersService over the store owned by the running app"""
    return UsersService(request.app.state.user_store)
