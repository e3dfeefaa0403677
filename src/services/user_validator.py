"""
User validation - checks request payloads before anything is written
"""

import logging
from typing import Any, Dict, List, Optional, Type
from dataclasses import dataclass, field

from pydantic import BaseModel, ValidationError as PydanticValidationError

from models.user import UserCreateRequest, UserUpdateRequest

logger = logging.getLogger(__name__)

MODEL_NAME = "User"

# Messages reported when a required field is missing, null or empty
REQUIRED_FIELD_MESSAGES = {
    "firstName": "Please enter first name",
    "lastName": "Please enter Last name",
    "email": "Please enter your email",
}

REQUIRED_ERROR_TYPES = {"missing", "string_too_short", "value_error"}

@dataclass
class FieldError:
    """A single failing field"""
    field: str
    message: str

@dataclass
class ValidationError:
    """Validation error details"""
    error_type: str
    message: str
    fields: List[FieldError] = field(default_factory=list)

@dataclass
class UserValidationResult:
    """Outcome of validating a user payload: cleaned document fields or an error"""
    valid: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[ValidationError] = None

def validate_user_create(payload: Any) -> UserValidationResult:
    """
    Validate a create payload. firstName, lastName and email must all be
    present, non-null, non-empty strings. Unknown fields are dropped.
    """
    return _validate(payload, UserCreateRequest, exclude_unset=False)

def validate_user_update(payload: Any) -> UserValidationResult:
    """
    Validate an update payload. Any subset of the user fields may be
    given; each one present must be a non-empty string.
    """
    return _validate(payload, UserUpdateRequest, exclude_unset=True)

def _validate(payload: Any, model: Type[BaseModel], exclude_unset: bool) -> UserValidationResult:
    if not isinstance(payload, dict):
        return UserValidationResult(
            valid=False,
            error=ValidationError(
                error_type="VALIDATION_ERROR",
                message=f"{MODEL_NAME} validation failed: request body must be a JSON object"
            )
        )

    try:
        validated = model.model_validate(payload)
    except PydanticValidationError as e:
        field_errors = [_to_field_error(error) for error in e.errors()]
        logger.info(f"{MODEL_NAME} validation failed for fields: {[fe.field for fe in field_errors]}")
        return UserValidationResult(
            valid=False,
            error=ValidationError(
                error_type="VALIDATION_ERROR",
                message=f"{MODEL_NAME} validation failed: " + ", ".join(
                    f"{fe.field}: {fe.message}" for fe in field_errors
                ),
                fields=field_errors
            )
        )

    data = validated.model_dump(by_alias=True, exclude_unset=exclude_unset)
    return UserValidationResult(valid=True, data=data)

def _to_field_error(error: Dict[str, Any]) -> FieldError:
    field_name = ".".join(str(loc) for loc in error.get("loc", ())) or MODEL_NAME

    if field_name in REQUIRED_FIELD_MESSAGES and (
        error.get("type") in REQUIRED_ERROR_TYPES or error.get("input") is None
    ):
        return FieldError(field=field_name, message=REQUIRED_FIELD_MESSAGES[field_name])

    return FieldError(field=field_name, message=error.get("msg", "Invalid value"))
