"""Connectivity checks against real providers."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from replyhub.config import get_settings
from replyhub.schemas.connection_test import ConnectionTestResult
from replyhub.services.connection_tester import check_openai_connection

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/test-connection/openai", response_model=ConnectionTestResult)
async def run_openai_connection_test():
    """Run the auth / models / completion checks with the server's API key."""
    settings = get_settings()
    if not settings.openai_api_key:
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "OpenAI API key not configured in server environment",
            },
        )

    return await check_openai_connection(settings.openai_api_key)
