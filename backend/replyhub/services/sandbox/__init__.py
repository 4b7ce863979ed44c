"""Sandbox emulation of the App Store Connect, Google Play and OpenAI APIs."""

from replyhub.services.sandbox.orchestrator import SandboxService, SandboxResponse
from replyhub.services.sandbox.endpoint_resolver import EndpointResolver
from replyhub.services.sandbox.scenario_store import ScenarioStore
from replyhub.services.sandbox.response_customizer import ResponseCustomizer
from replyhub.services.sandbox.request_logger import RequestLogger, get_request_logger

__all__ = [
    "SandboxService",
    "SandboxResponse",
    "EndpointResolver",
    "ScenarioStore",
    "ResponseCustomizer",
    "RequestLogger",
    "get_request_logger",
]
