"""Pydantic schemas for emulated API endpoints."""

from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from replyhub.models.enums import ApiType
from replyhub.services.sandbox.path_matcher import compile_path_template


class SandboxEndpointCreate(BaseModel):
    """Schema for registering an endpoint in an environment."""
    api_type: ApiType
    path: str = Field(..., min_length=1, max_length=1000)  # e.g. /v1/apps/{app_id}/reviews
    method: str = "GET"
    description: str | None = None

    @field_validator("path")
    @classmethod
    def path_must_be_absolute(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("path must start with /")
        compile_path_template(v)  # rejects duplicate placeholders
        return v

    @field_validator("method")
    @classmethod
    def normalize_method(cls, v: str) -> str:
        return v.strip().upper()


class SandboxEndpointResponse(BaseModel):
    id: int
    environment_id: int
    api_type: ApiType
    path: str
    method: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
