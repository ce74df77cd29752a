"""
Pydantic schemas for user input and stored user records.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional


class UserCreate(BaseModel):
    """Schema for registering a new user."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="User's display name",
        examples=["Devin Sanders"]
    )

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["tristanjacobs@gmail.com"]
    )

    password: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Plain text password or an existing bcrypt hash"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Validate and clean name."""
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class UserRecord(BaseModel):
    """A row of the users table."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    email: str
    password: Optional[str] = Field(None, repr=False)
