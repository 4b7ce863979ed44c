"""Connectivity check against the real OpenAI API (outside sandbox mode)."""

import logging

import openai

from replyhub.config import get_settings
from replyhub.schemas.connection_test import (
    ConnectionStepResult,
    ConnectionTestDetails,
    ConnectionTestResult,
)

logger = logging.getLogger(__name__)


async def check_openai_connection(
    api_key: str,
    client: openai.AsyncOpenAI | None = None,
) -> ConnectionTestResult:
    """
    Check auth, model listing and a chat completion, one step at a time.

    Errors are recorded on the failing step instead of being raised. A failed
    auth step stops the check; the other two steps are independent.
    """
    settings = get_settings()
    client = client or openai.AsyncOpenAI(api_key=api_key)

    details = ConnectionTestDetails(
        auth_test=ConnectionStepResult(message="Authentication test failed"),
        models_test=ConnectionStepResult(message="Models test failed"),
        completion_test=ConnectionStepResult(message="Completion test failed"),
    )
    result = ConnectionTestResult(message="OpenAI API connection test failed", details=details)

    # Step 1: listing models validates the key
    try:
        models_page = await client.models.list()
        details.auth_test = ConnectionStepResult(
            success=True, message="Successfully authenticated with OpenAI API"
        )
    except Exception as e:
        logger.info("OpenAI authentication check failed: %s", e)
        details.auth_test = ConnectionStepResult(message=f"Authentication failed: {e}")
        return result

    # Step 2: model ids
    try:
        models = [model.id for model in models_page.data]
        details.models_test = ConnectionStepResult(
            success=True,
            message=f"Successfully retrieved {len(models)} models",
            models=models[:10],
        )
    except Exception as e:
        details.models_test = ConnectionStepResult(message=f"Models retrieval failed: {e}")

    # Step 3: a short completion
    try:
        completion = await client.chat.completions.create(
            model=settings.openai_test_model,
            messages=[
                {"role": "system", "content": "You are a helpful assistant."},
                {"role": "user", "content": "Say hello in Russian."},
            ],
            temperature=0.7,
            max_tokens=100,
        )
        if not completion.choices:
            raise ValueError("Empty completion response")
        details.completion_test = ConnectionStepResult(
            success=True,
            message="Successfully generated a completion",
            response=completion.choices[0].message.content,
        )
    except Exception as e:
        logger.info("OpenAI completion check failed: %s", e)
        details.completion_test = ConnectionStepResult(message=f"Completion failed: {e}")

    if details.models_test.success and details.completion_test.success:
        result.success = True
        result.message = "OpenAI API connection test successful"
    else:
        result.message = "OpenAI API connection partially successful"

    return result
