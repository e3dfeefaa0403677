"""
User Pydantic models
"""

from typing import Optional, Dict, Any
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Fields are snake_case in Python and camelCase on the wire and in MongoDB
CAMEL_CASE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    # Numbers in request bodies are stored as their text form
    coerce_numbers_to_str=True,
)

class User(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "65a1c0ffee0ddba11ca7f00d",
                "firstName": "Alvin",
                "lastName": "Dewdney",
                "email": "alv@gmail.com",
                "createdAt": "2024-01-12T22:10:39.123000",
                "updatedAt": "2024-01-12T22:10:39.123000",
            }
        },
    )

    id: str = Field(..., description="The auto-generated id of the user")
    first_name: str = Field(..., description="The User's first name")
    last_name: str = Field(..., description="The User's last name")
    email: str = Field(..., description="The User's email")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "User":
        """Build a User from a raw MongoDB document"""
        return cls(
            id=str(document["_id"]),
            first_name=document.get("firstName"),
            last_name=document.get("lastName"),
            email=document.get("email"),
            created_at=document.get("createdAt"),
            updated_at=document.get("updatedAt"),
        )

class UserPayload(BaseModel):
    """Base for request bodies; JSON scalars are stored as text"""
    model_config = CAMEL_CASE_CONFIG

    @field_validator("first_name", "last_name", "email", mode="before", check_fields=False)
    @classmethod
    def booleans_as_text(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return "true" if value else "false"
        return value

class UserCreateRequest(UserPayload):
    first_name: str = Field(..., min_length=1, examples=["Alvin"])
    last_name: str = Field(..., min_length=1, examples=["Dewdney"])
    email: str = Field(..., min_length=1, examples=["alv@gmail.com"])

class UserUpdateRequest(UserPayload):
    first_name: Optional[str] = Field(None, min_length=1, examples=["Alvin"])
    last_name: Optional[str] = Field(None, min_length=1, examples=["Dewdney"])
    email: Optional[str] = Field(None, min_length=1, examples=["alv@gmail.com"])

    @field_validator("first_name", "last_name", "email")
    @classmethod
    def reject_null(cls, value: Optional[str]) -> str:
        # Defaults are not validated, so this only fires for an explicit null
        if value is None:
            raise ValueError("Field may not be null")
        return value

class MessageResponse(BaseModel):
    message: str
