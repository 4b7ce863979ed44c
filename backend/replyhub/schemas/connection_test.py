"""Schemas for real-provider connectivity checks."""

from pydantic import BaseModel


class ConnectionStepResult(BaseModel):
    """Outcome of one connectivity step."""
    success: bool = False
    message: str
    models: list[str] | None = None
    response: str | None = None


class ConnectionTestDetails(BaseModel):
    auth_test: ConnectionStepResult
    models_test: ConnectionStepResult
    completion_test: ConnectionStepResult


class ConnectionTestResult(BaseModel):
    """
    Structured result of an upstream connectivity check.

    Steps are reported independently so callers can tell a partial success
    (e.g. auth passed, completion failed) from a full failure.
    """
    success: bool = False
    message: str
    details: ConnectionTestDetails
