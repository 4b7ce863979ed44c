"""Tests for persisting emulated calls."""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from replyhub.models import SandboxLog
from replyhub.services.sandbox.request_logger import (
    MASK,
    RequestLogger,
    mask_headers,
    serialize_field,
)


def test_mask_headers():
    headers = {"Authorization": "Bearer abc", "X-Api-Key": "k", "Accept": "application/json"}
    assert mask_headers(headers) == {"Authorization": MASK, "X-Api-Key": MASK, "Accept": "application/json"}
    assert mask_headers(None) is None


def test_serialize_field_plain_data():
    assert serialize_field("body", {"a": [1, "b", None]}) == {"a": [1, "b", None]}
    assert serialize_field("body", None) is None


def test_serialize_field_replaces_unserializable_value():
    result = serialize_field("request_body", {"when": object()})
    assert result["error"] == "Failed to serialize request_body"
    assert "detail" in result


async def fetch_logs(db, environment_id):
    result = await db.execute(select(SandboxLog).where(SandboxLog.environment_id == environment_id))
    return list(result.scalars().all())


@pytest.mark.asyncio
async def test_log_writes_entry(db, environment, request_logger):
    await request_logger.log(
        environment_id=environment.id,
        endpoint_id=None,
        scenario_id=None,
        method="post",
        path="/v1/chat/completions",
        request_headers={"authorization": "Bearer secret", "content-type": "application/json"},
        request_body={"messages": []},
        status=200,
        response_body={"ok": True},
        duration_ms=120,
    )

    [entry] = await fetch_logs(db, environment.id)
    assert entry.request_method == "POST"
    assert entry.request_headers == {"authorization": MASK, "content-type": "application/json"}
    assert entry.request_body == {"messages": []}
    assert entry.response_body == {"ok": True}
    assert entry.duration == 120


@pytest.mark.asyncio
async def test_unserializable_body_still_logged(db, environment, request_logger):
    await request_logger.log(
        environment_id=environment.id,
        endpoint_id=None,
        scenario_id=None,
        method="GET",
        path="/x",
        request_body={"bad": {1, 2}},
    )

    [entry] = await fetch_logs(db, environment.id)
    assert entry.request_body["error"] == "Failed to serialize request_body"


@pytest.mark.asyncio
async def test_background_log_written_after_drain(db, environment, request_logger):
    task = request_logger.log_in_background(
        environment_id=environment.id,
        endpoint_id=None,
        scenario_id=None,
        method="GET",
        path="/v1/apps/1/reviews",
    )
    assert task is not None

    await request_logger.drain()
    assert len(await fetch_logs(db, environment.id)) == 1


@pytest.mark.asyncio
async def test_disabled_logger_writes_nothing(db, environment, session_factory):
    logger = RequestLogger(session_factory, enabled=False)

    assert logger.log_in_background(
        environment_id=environment.id, endpoint_id=None, scenario_id=None, method="GET", path="/x"
    ) is None
    await logger.log(environment_id=environment.id, endpoint_id=None, scenario_id=None, method="GET", path="/x")

    assert await fetch_logs(db, environment.id) == []


@pytest.mark.asyncio
async def test_missing_table_is_swallowed(tmp_path, caplog):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    logger = RequestLogger(async_sessionmaker(engine, class_=AsyncSession), enabled=True)

    try:
        await logger.log(environment_id=1, endpoint_id=None, scenario_id=None, method="GET", path="/x")
    finally:
        await engine.dispose()

    assert "Error logging sandbox request" not in caplog.text


@pytest.mark.asyncio
async def test_malformed_entry_never_raises(db, environment, request_logger, caplog):
    await request_logger.log(
        environment_id=environment.id,
        endpoint_id=None,
        scenario_id=None,
        method="GET",
        path="/x",
        request_headers={1: "a"},
    )
    request_logger.log_in_background(
        environment_id=environment.id,
        endpoint_id=None,
        scenario_id=None,
        method=None,
        path="/x",
    )
    await request_logger.drain()

    assert await fetch_logs(db, environment.id) == []
    assert "Error logging sandbox request" in caplog.text
