"""Emulated third-party APIs served from sandbox environments.

Each route accepts any method and sub-path, e.g.::

    GET /api/app-store/v1/apps/123/reviews?scenario=rate_limit
    X-Sandbox-Environment: 42
"""

import asyncio
import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from replyhub.config import get_settings
from replyhub.db.postgres import get_db
from replyhub.models.enums import ApiType
from replyhub.services.sandbox import RequestLogger, SandboxService, get_request_logger

router = APIRouter()
logger = logging.getLogger(__name__)

EMULATED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def parse_environment_id(raw: str | None) -> int:
    """Environment id from the request header; the demo environment when absent or invalid."""
    demo_id = get_settings().demo_environment_id
    try:
        environment_id = int(raw)
    except (TypeError, ValueError):
        logger.debug("Using demo environment (ID: %s) for API emulation", demo_id)
        return demo_id
    return environment_id if environment_id > 0 else demo_id


async def read_json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.debug("Ignoring non-JSON body on %s %s", request.method, request.url.path)
        return None


async def emulate(
    api_type: ApiType,
    path: str,
    request: Request,
    db: AsyncSession,
    request_logger: RequestLogger,
) -> JSONResponse:
    settings = get_settings()
    environment_id = parse_environment_id(request.headers.get(settings.sandbox_environment_header))

    service = SandboxService(db, request_logger=request_logger)
    response = await service.get_response_for_endpoint(
        environment_id,
        api_type,
        "/" + path.lstrip("/"),
        request.method,
        scenario_type=request.query_params.get("scenario") or None,
        request_body=await read_json_body(request),
        request_headers=dict(request.headers),
    )

    if response.delay > 0:
        await asyncio.sleep(response.delay / 1000)

    return JSONResponse(
        status_code=response.status_code,
        content=response.data,
        headers=response.headers,
    )


@router.api_route("/app-store/{path:path}", methods=EMULATED_METHODS)
async def app_store_connect_api(
    path: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    request_logger: RequestLogger = Depends(get_request_logger),
):
    return await emulate(ApiType.APP_STORE_CONNECT, path, request, db, request_logger)


@router.api_route("/google-play/{path:path}", methods=EMULATED_METHODS)
async def google_play_developer_api(
    path: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    request_logger: RequestLogger = Depends(get_request_logger),
):
    return await emulate(ApiType.GOOGLE_PLAY_DEVELOPER, path, request, db, request_logger)


@router.api_route("/openai/{path:path}", methods=EMULATED_METHODS)
async def openai_api(
    path: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    request_logger: RequestLogger = Depends(get_request_logger),
):
    return await emulate(ApiType.OPENAI, path, request, db, request_logger)
