"""
User management API routes
All data access goes through the users service; handlers only map
service results onto HTTP responses.
"""

import logging
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, HTTPException, Depends, Body

from models.user import User, MessageResponse
from services.base_service import ServiceResult
from services.users_service import UsersService, get_users_service

router = APIRouter()
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    500: {"model": MessageResponse, "description": "Some server error"},
}
NOT_FOUND_RESPONSES = {
    404: {"model": MessageResponse, "description": "The user was not found"},
    **ERROR_RESPONSES,
}

USER_BODY_EXAMPLE = {"firstName": "Alvin", "lastName": "Dewdney", "email": "alv@gmail.com"}

def _raise_for_result(result: ServiceResult):
    if result.success:
        return
    if result.error_type == "RESOURCE_NOT_FOUND":
        raise HTTPException(status_code=404, detail=result.error)
    raise HTTPException(status_code=500, detail=result.error)

@router.post(
    "/createUser",
    response_model=User,
    summary="Create a new user",
    responses=ERROR_RESPONSES,
)
async def create_user(
    payload: Dict[str, Any] = Body(..., examples=[USER_BODY_EXAMPLE]),
    users_service: UsersService = Depends(get_users_service)
):
    """Create a user from firstName, lastName and email"""
    try:
        result = await users_service.create_user(payload)
        _raise_for_result(result)
        return result.first

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to create user: {e}")
        raise HTTPException(status_code=500, detail=str(e))

@router.get(
    "/getAllUsers",
    response_model=List[User],
    summary="Returns the list of all the users",
    responses=ERROR_RESPONSES,
)
async def get_all_users(users_service: UsersService = Depends(get_users_service)):
    try:
        result = await users_service.list_users()
        _raise_for_result(result)
        return result.data

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to list users: {e}")
        raise HTTPException(status_code=500, detail=str(e))

@router.get(
    "/getUserById/{id}",
    response_model=Optional[User],
    summary="Get a user by id",
    responses=ERROR_RESPONSES,
)
async def get_user_by_id(id: str, users_service: UsersService = Depends(get_users_service)):
    """Returns the user, or null when no user has this id"""
    try:
        result = await users_service.get_user_by_id(id)
        _raise_for_result(result)
        return result.first

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to get user {id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

@router.put(
    "/updateUser/{id}",
    response_model=User,
    summary="Update a user by id",
    responses=NOT_FOUND_RESPONSES,
)
async def update_user(
    id: str,
    payload: Dict[str, Any] = Body(..., examples=[{"firstName": "Alvin"}]),
    users_service: UsersService = Depends(get_users_service)
):
    """Overwrite the given fields; fields left out keep their values"""
    try:
        result = await users_service.update_user(id, payload)
        _raise_for_result(result)
        return result.first

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update user {id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

@router.delete(
    "/deleteUserById/{id}",
    response_model=Optional[User],
    summary="Delete User by id",
    responses=NOT_FOUND_RESPONSES,
)
async def delete_user_by_id(id: str, users_service: UsersService = Depends(get_users_service)):
    """
    Delete a user. The body is the user as read back after the delete,
    which is always null.
    """
    try:
        result = await users_service.delete_user(id)
        _raise_for_result(result)
        return result.first

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete user {id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
