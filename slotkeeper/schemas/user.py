from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID


class UserBase(BaseModel):
    """Base user schema."""
    email: str = Field(..., min_length=3, max_length=255, description="User email")
    name: str = Field(..., min_length=1, max_length=100, description="User name")


class UserCreate(UserBase):
    """Schema for creating a user."""
    pass


class UserResponse(UserBase):
    """Schema for user response."""
    id: UUID
    created_at: datetime

    class Config:
        from_attributes = True
