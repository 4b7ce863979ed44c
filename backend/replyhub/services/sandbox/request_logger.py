"""Persistence of emulated API calls for later inspection."""

import asyncio
import json
import logging
from datetime import datetime
from typing import Any

from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from replyhub.config import get_settings
from replyhub.db.postgres import AsyncSessionLocal
from replyhub.models.sandbox_log import SandboxLog

logger = logging.getLogger(__name__)

MASKED_HEADERS = {"authorization", "proxy-authorization", "x-api-key", "cookie"}
MASK = "***"

MISSING_TABLE_MARKERS = (
    'relation "sandbox_logs" does not exist',
    "no such table: sandbox_logs",
)


def mask_headers(headers: dict[str, Any] | None) -> dict[str, Any] | None:
    if headers is None:
        return None
    return {
        key: (MASK if key.lower() in MASKED_HEADERS else value)
        for key, value in headers.items()
    }


def serialize_field(name: str, value: Any) -> Any:
    """
    Convert a value into plain JSON data for storage.

    A value that cannot be serialized is replaced by an error marker so the
    rest of the log entry can still be written.
    """
    if value is None:
        return None
    try:
        return json.loads(json.dumps(value))
    except (TypeError, ValueError) as e:
        logger.warning("Could not serialize sandbox log field %s: %s", name, e)
        return {"error": f"Failed to serialize {name}", "detail": str(e)}


def is_missing_table_error(error: Exception) -> bool:
    message = str(error)
    return any(marker in message for marker in MISSING_TABLE_MARKERS)


class RequestLogger:
    """
    Writes SandboxLog entries without ever failing the emulated call.

    Entries are written through their own session so that logging can run
    as a background task after the response has been produced.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        enabled: bool | None = None,
    ):
        self.session_factory = session_factory or AsyncSessionLocal
        self.enabled = get_settings().sandbox_logging_enabled if enabled is None else enabled
        self._pending: set[asyncio.Task] = set()

    def log_in_background(self, **entry) -> asyncio.Task | None:
        """Schedule log() without waiting for it."""
        if not self.enabled:
            return None
        task = asyncio.create_task(self.log(**entry))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for every scheduled log write to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def log(
        self,
        environment_id: int,
        endpoint_id: int | None,
        scenario_id: int | None,
        method: str,
        path: str,
        request_headers: dict | None = None,
        request_body: Any = None,
        status: int = 200,
        response_body: Any = None,
        duration_ms: int = 0,
    ) -> None:
        if not self.enabled:
            return

        try:
            entry = SandboxLog(
                environment_id=environment_id,
                endpoint_id=endpoint_id,
                scenario_id=scenario_id,
                request_method=method.upper(),
                request_path=path,
                request_headers=serialize_field("request_headers", mask_headers(request_headers)),
                request_body=serialize_field("request_body", request_body),
                response_status=status,
                response_body=serialize_field("response_body", response_body),
                duration=duration_ms,
                timestamp=datetime.utcnow(),
            )
            async with self.session_factory() as session:
                session.add(entry)
                await session.commit()
        except (ProgrammingError, OperationalError) as e:
            if is_missing_table_error(e):
                logger.debug("sandbox_logs table is not provisioned, skipping request log")
                return
            logger.exception("Error logging sandbox request")
        except IntegrityError as e:
            logger.warning("Sandbox request log rejected by a constraint: %s", e.orig)
        except Exception:
            logger.exception("Error logging sandbox request")


request_logger = RequestLogger()


def get_request_logger() -> RequestLogger:
    return request_logger
