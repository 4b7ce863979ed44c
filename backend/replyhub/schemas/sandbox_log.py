"""Pydantic schemas for sandbox request logs."""

from datetime import datetime
from typing import Any
from pydantic import BaseModel


class SandboxLogResponse(BaseModel):
    id: int
    environment_id: int
    endpoint_id: int | None = None
    scenario_id: int | None = None
    request_method: str
    request_path: str
    request_headers: dict | None = None
    request_body: Any = None
    response_status: int
    response_body: Any = None
    duration: int
    timestamp: datetime

    model_config = {"from_attributes": True}
