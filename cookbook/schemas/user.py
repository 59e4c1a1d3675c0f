"""User schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    """Create a user. Password hashing happens before this layer."""

    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    hashed_password: str = Field(..., min_length=1, max_length=255)


class UserRecord(BaseModel):
    """User row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    hashed_password: str
