"""Entry point of the emulation engine: one request in, one response descriptor out."""

import copy
import logging
import time
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from replyhub.models.enums import ApiType, ScenarioType
from replyhub.models.sandbox_environment import SandboxEnvironment
from replyhub.services.sandbox.endpoint_resolver import EndpointResolver
from replyhub.services.sandbox.path_matcher import extract_path_params
from replyhub.services.sandbox.request_logger import RequestLogger, get_request_logger
from replyhub.services.sandbox.response_customizer import ResponseCustomizer
from replyhub.services.sandbox.scenario_store import ScenarioStore

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass
class SandboxResponse:
    """Synthetic HTTP response; the HTTP layer waits `delay` ms before sending it."""
    status_code: int
    data: Any
    headers: dict[str, str] = field(default_factory=lambda: dict(JSON_HEADERS))
    delay: int = 0

    @classmethod
    def failure(cls, status_code: int, error: str, message: str) -> "SandboxResponse":
        return cls(status_code=status_code, data={"error": error, "message": message})


class SandboxService:
    """
    Answers emulated API calls from the configured environment.

    Configuration problems come back as 4xx/501 descriptors and unexpected
    failures as a 500 descriptor; no exception leaves
    get_response_for_endpoint().
    """

    def __init__(
        self,
        db: AsyncSession,
        request_logger: RequestLogger | None = None,
        customizer: ResponseCustomizer | None = None,
    ):
        self.db = db
        self.endpoints = EndpointResolver(db)
        self.scenarios = ScenarioStore(db)
        self.request_logger = request_logger or get_request_logger()
        self.customizer = customizer or ResponseCustomizer()

    async def get_response_for_endpoint(
        self,
        environment_id: int,
        api_type: ApiType | str,
        path: str,
        method: str = "GET",
        scenario_type: ScenarioType | str | None = None,
        request_body: Any = None,
        request_headers: dict[str, str] | None = None,
    ) -> SandboxResponse:
        started = time.perf_counter()

        try:
            environment = await self.db.get(SandboxEnvironment, environment_id)
            if environment is None:
                return SandboxResponse.failure(404, "environment_not_found", "Sandbox environment not found")
            if not environment.is_active:
                return SandboxResponse.failure(400, "environment_inactive", "Sandbox environment is not active")

            api_type = ApiType(api_type).value
            method = method.upper()

            endpoint = await self.endpoints.resolve(environment_id, api_type, path, method)
            if endpoint is None:
                logger.info("No sandbox endpoint for %s %s %s in environment %s", api_type, method, path, environment_id)
                return SandboxResponse.failure(
                    404, "endpoint_not_found", f"Endpoint not found: {method} {path}"
                )

            path_params = extract_path_params(endpoint.path, path) or {}

            if scenario_type:
                try:
                    scenario_type = ScenarioType(scenario_type)
                except ValueError:
                    return SandboxResponse.failure(
                        501, "scenario_not_found", f"Unknown test scenario type: {scenario_type}"
                    )

            scenario = await self.scenarios.resolve(endpoint.id, scenario_type)
            if scenario is None:
                return SandboxResponse.failure(
                    501, "scenario_not_found", "No test scenario available for this endpoint"
                )

            # Error, timeout and rate-limit templates are returned as stored
            if 200 <= scenario.status_code < 300:
                data = self.customizer.customize(
                    api_type, endpoint.path, path_params, request_body, scenario.response_data
                )
            else:
                data = copy.deepcopy(scenario.response_data)

            delay = scenario.delay_ms or 0
            self.request_logger.log_in_background(
                environment_id=environment_id,
                endpoint_id=endpoint.id,
                scenario_id=scenario.id,
                method=method,
                path=path,
                request_headers=request_headers,
                request_body=request_body,
                status=scenario.status_code,
                response_body=data,
                duration_ms=int((time.perf_counter() - started) * 1000) + delay,
            )

            return SandboxResponse(status_code=scenario.status_code, data=data, delay=delay)

        except Exception:
            logger.exception("Error in sandbox service")
            return SandboxResponse.failure(500, "internal_error", "Internal sandbox service error")
