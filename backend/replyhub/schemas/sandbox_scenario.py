"""Pydantic schemas for endpoint test scenarios."""

from datetime import datetime
from pydantic import BaseModel, Field

from replyhub.models.enums import ScenarioType


class SandboxScenarioCreate(BaseModel):
    """Schema for creating a test scenario."""
    name: str = Field(..., min_length=1, max_length=255)
    type: ScenarioType
    description: str | None = None
    request_conditions: dict | None = None  # Stored only, never matched
    response_data: dict = Field(default_factory=dict)
    status_code: int = Field(200, ge=100, le=599)
    delay_ms: int = Field(0, ge=0)
    is_default: bool = False


class SandboxScenarioUpdate(BaseModel):
    """Schema for updating a test scenario."""
    name: str | None = Field(None, min_length=1, max_length=255)
    type: ScenarioType | None = None
    description: str | None = None
    request_conditions: dict | None = None
    response_data: dict | None = None
    status_code: int | None = Field(None, ge=100, le=599)
    delay_ms: int | None = Field(None, ge=0)
    is_default: bool | None = None


class SandboxScenarioResponse(BaseModel):
    id: int
    endpoint_id: int
    name: str
    type: ScenarioType
    description: str | None = None
    request_conditions: dict | None = None
    response_data: dict
    status_code: int
    delay_ms: int
    is_default: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
