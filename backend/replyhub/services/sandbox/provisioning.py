"""Default endpoints, scenarios and the shared demo environment."""

import copy
import logging
import random
from datetime import datetime, timedelta

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from replyhub.config import get_settings
from replyhub.models.enums import ApiType, ScenarioType
from replyhub.models.sandbox_endpoint import SandboxApiEndpoint
from replyhub.models.sandbox_environment import SandboxEnvironment
from replyhub.models.sandbox_log import SandboxLog
from replyhub.services.sandbox.path_matcher import render_path
from replyhub.services.sandbox.payloads import ResponseKind, classify_response
from replyhub.services.sandbox.request_logger import serialize_field
from replyhub.services.sandbox.response_customizer import ResponseCustomizer
from replyhub.services.sandbox.scenario_store import ScenarioStore

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINTS = [
    {
        "api_type": ApiType.APP_STORE_CONNECT,
        "path": "/v1/apps/{app_id}/reviews",
        "method": "GET",
        "description": "Get App Store reviews for an app",
    },
    {
        "api_type": ApiType.APP_STORE_CONNECT,
        "path": "/v1/apps/{app_id}/reviews/{review_id}/response",
        "method": "POST",
        "description": "Respond to an App Store review",
    },
    {
        "api_type": ApiType.GOOGLE_PLAY_DEVELOPER,
        "path": "/v3/applications/{package_name}/reviews",
        "method": "GET",
        "description": "Get Google Play reviews for an app",
    },
    {
        "api_type": ApiType.GOOGLE_PLAY_DEVELOPER,
        "path": "/v3/applications/{package_name}/reviews/{review_id}:reply",
        "method": "POST",
        "description": "Respond to a Google Play review",
    },
    {
        "api_type": ApiType.OPENAI,
        "path": "/v1/chat/completions",
        "method": "POST",
        "description": "Generate AI response",
    },
]

# Success templates per response variant; the customizer fills the gaps
SUCCESS_TEMPLATES = {
    ResponseKind.APP_STORE_REVIEW_LIST: {"data": [], "links": {}},
    ResponseKind.APP_STORE_REVIEW_RESPONSE: {},
    ResponseKind.GOOGLE_PLAY_REVIEW_LIST: {"reviews": []},
    ResponseKind.GOOGLE_PLAY_REPLY: {},
    ResponseKind.CHAT_COMPLETION: {"object": "chat.completion", "choices": []},
    ResponseKind.GENERIC: {"success": True, "message": "Operation completed successfully"},
}

# Path parameters used for the demo environment's synthetic log history
DEMO_PATH_PARAMS = {
    "app_id": "123",
    "review_id": "review-0001",
    "package_name": "com.example.reviews",
}
DEMO_PROMPTS = [
    "Thank you for the great update!",
    "The app keeps crashing when I open settings.",
    "Feature suggestion: please add a dark mode.",
    "It works fine.",
]


def default_scenarios_for(endpoint: SandboxApiEndpoint) -> list[dict]:
    kind = classify_response(endpoint.api_type, endpoint.path)
    return [
        {
            "name": "Success Response",
            "type": ScenarioType.SUCCESS,
            "description": "Successful API response",
            "request_conditions": {},
            "response_data": copy.deepcopy(SUCCESS_TEMPLATES[kind]),
            "status_code": 200,
            "delay_ms": 100,
            "is_default": True,
        },
        {
            "name": "Error Response",
            "type": ScenarioType.ERROR,
            "description": "API error response",
            "request_conditions": {},
            "response_data": {"success": False, "message": "Operation failed", "code": "ERROR_OCCURRED"},
            "status_code": 400,
            "delay_ms": 100,
            "is_default": False,
        },
        {
            "name": "Timeout",
            "type": ScenarioType.TIMEOUT,
            "description": "API timeout simulation",
            "request_conditions": {},
            "response_data": {"success": False, "message": "Request timed out"},
            "status_code": 408,
            "delay_ms": 5000,
            "is_default": False,
        },
        {
            "name": "Rate Limit",
            "type": ScenarioType.RATE_LIMIT,
            "description": "API rate limit simulation",
            "request_conditions": {},
            "response_data": {"success": False, "message": "Rate limit exceeded", "code": "RATE_LIMIT_EXCEEDED"},
            "status_code": 429,
            "delay_ms": 100,
            "is_default": False,
        },
    ]


async def create_default_test_scenarios(db: AsyncSession, endpoint: SandboxApiEndpoint) -> None:
    store = ScenarioStore(db)
    for scenario in default_scenarios_for(endpoint):
        await store.create(endpoint.id, **scenario)


async def create_default_api_endpoints(
    db: AsyncSession,
    environment: SandboxEnvironment,
) -> list[SandboxApiEndpoint]:
    """Register the default endpoint set (and their scenarios) in an environment."""
    endpoints = []
    for definition in DEFAULT_ENDPOINTS:
        endpoint = SandboxApiEndpoint(
            environment_id=environment.id,
            api_type=definition["api_type"].value,
            path=definition["path"],
            method=definition["method"],
            description=definition["description"],
        )
        db.add(endpoint)
        await db.flush()
        await create_default_test_scenarios(db, endpoint)
        endpoints.append(endpoint)
    return endpoints


async def seed_demo_logs(
    db: AsyncSession,
    environment: SandboxEnvironment,
    endpoints: list[SandboxApiEndpoint],
    count: int,
) -> None:
    """Insert a synthetic request history spread over the last day."""
    store = ScenarioStore(db)
    customizer = ResponseCustomizer()
    rng = random.Random(environment.id)
    now = datetime.utcnow()

    for i in range(count):
        endpoint = endpoints[i % len(endpoints)]
        scenario = await store.get_default(endpoint.id)
        if scenario is None:
            continue

        path_params = {key: value for key, value in DEMO_PATH_PARAMS.items() if "{" + key + "}" in endpoint.path}
        request_body = None
        if endpoint.api_type == ApiType.OPENAI.value:
            request_body = {
                "model": "gpt-3.5-turbo",
                "messages": [{"role": "user", "content": DEMO_PROMPTS[i % len(DEMO_PROMPTS)]}],
            }

        response_body = customizer.customize(
            endpoint.api_type, endpoint.path, path_params, request_body, scenario.response_data
        )
        db.add(SandboxLog(
            environment_id=environment.id,
            endpoint_id=endpoint.id,
            scenario_id=scenario.id,
            request_method=endpoint.method,
            request_path=render_path(endpoint.path, path_params),
            request_headers={"content-type": "application/json"},
            request_body=serialize_field("request_body", request_body),
            response_status=scenario.status_code,
            response_body=serialize_field("response_body", response_body),
            duration=scenario.delay_ms + rng.randint(5, 60),
            timestamp=now - timedelta(minutes=(count - i) * (24 * 60 // max(count, 1))),
        ))

    await db.flush()


async def ensure_demo_environment(db: AsyncSession) -> SandboxEnvironment:
    """
    Create the shared demo environment if it does not exist yet.

    The demo environment has a fixed id, no owner, is always active, and is
    used whenever an emulation request names no (valid) environment.
    """
    settings = get_settings()
    environment = await db.get(SandboxEnvironment, settings.demo_environment_id)
    if environment:
        return environment

    environment = SandboxEnvironment(
        id=settings.demo_environment_id,
        user_id=None,
        name="Demo Sandbox",
        description="Shared demo environment with the default emulated endpoints",
        is_active=True,
    )
    db.add(environment)
    await db.flush()

    endpoints = await create_default_api_endpoints(db, environment)
    await seed_demo_logs(db, environment, endpoints, settings.demo_log_history_size)

    if db.get_bind().dialect.name == "postgresql":
        # The explicit id does not advance the serial sequence
        max_id = (await db.execute(select(func.max(SandboxEnvironment.id)))).scalar()
        await db.execute(
            text("SELECT setval(pg_get_serial_sequence('sandbox_environments', 'id'), :value)"),
            {"value": max_id},
        )

    await db.commit()
    logger.info("Created demo sandbox environment (id=%s)", environment.id)
    return environment
