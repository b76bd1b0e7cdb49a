"""
User models for registration and login.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserDTO(BaseModel):
    """Registration payload."""

    email: Optional[str] = Field(None, description="User email")
    password: Optional[str] = Field(None, description="Clear-text password")
    name: Optional[str] = Field(None, description="Display name")

    model_config = {
        "json_schema_extra": {
            "example": {"email": "a@b.com", "password": "secret", "name": "Ana"}
        }
    }


class CredentialsDTO(BaseModel):
    """Login payload."""

    email: Optional[str] = Field(None, description="User email")
    password: Optional[str] = Field(None, description="Clear-text password")


class UserResponse(BaseModel):
    """User information returned after registration."""

    email: str = Field(..., description="User email")
    name: Optional[str] = Field(None, description="Display name")

    model_config = {"from_attributes": True}
