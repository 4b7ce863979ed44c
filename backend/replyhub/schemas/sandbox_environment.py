"""Pydantic schemas for sandbox environments."""

from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field


class SandboxEnvironmentCreate(BaseModel):
    """Schema for creating a sandbox environment."""
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    is_active: bool = True


class SandboxEnvironmentUpdate(BaseModel):
    """Schema for updating a sandbox environment."""
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    is_active: bool | None = None


class SandboxEnvironmentResponse(BaseModel):
    id: int
    user_id: UUID | None = None
    name: str
    description: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
