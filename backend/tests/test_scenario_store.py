"""Tests for scenario persistence and the single-default rule."""

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from replyhub.models import SandboxTestScenario
from replyhub.models.enums import ScenarioType
from replyhub.services.sandbox.scenario_store import ScenarioStore


async def count_defaults(db, endpoint_id):
    result = await db.execute(
        select(func.count())
        .select_from(SandboxTestScenario)
        .where(SandboxTestScenario.endpoint_id == endpoint_id, SandboxTestScenario.is_default.is_(True))
    )
    return result.scalar()


@pytest_asyncio.fixture
async def endpoint(make_endpoint):
    return await make_endpoint("/v1/apps/{app_id}/reviews")


@pytest.mark.asyncio
async def test_create_new_default_replaces_previous(db, endpoint):
    store = ScenarioStore(db)
    first = await store.create(endpoint.id, name="ok", type=ScenarioType.SUCCESS, is_default=True)
    second = await store.create(endpoint.id, name="fail", type="error", status_code=400, is_default=True)
    await db.commit()

    assert await count_defaults(db, endpoint.id) == 1
    assert first.is_default is False
    assert second.is_default is True
    assert (await store.get_default(endpoint.id)).id == second.id


@pytest.mark.asyncio
async def test_set_default_clears_siblings(db, endpoint):
    store = ScenarioStore(db)
    success = await store.create(endpoint.id, name="ok", type="success", is_default=True)
    limited = await store.create(endpoint.id, name="limited", type="rate_limit", status_code=429)

    await store.set_default(limited)
    await db.commit()

    assert limited.is_default is True
    assert success.is_default is False
    assert await count_defaults(db, endpoint.id) == 1


@pytest.mark.asyncio
async def test_set_default_only_touches_own_endpoint(db, make_endpoint):
    store = ScenarioStore(db)
    first = await make_endpoint("/v1/apps/{app_id}/reviews")
    second = await make_endpoint("/v1/chat/completions", api_type="openai", method="POST")
    other_default = await store.create(second.id, name="ok", type="success", is_default=True)
    scenario = await store.create(first.id, name="ok", type="success")

    await store.set_default(scenario)
    await db.commit()

    assert other_default.is_default is True
    assert await count_defaults(db, second.id) == 1


@pytest.mark.asyncio
async def test_update_default_flag(db, endpoint):
    store = ScenarioStore(db)
    success = await store.create(endpoint.id, name="ok", type="success", is_default=True)
    error = await store.create(endpoint.id, name="fail", type="error", status_code=400)

    await store.update(error, is_default=True, delay_ms=250)
    await db.commit()
    assert error.is_default is True
    assert error.delay_ms == 250
    assert success.is_default is False

    await store.update(error, is_default=False)
    await db.commit()
    assert await count_defaults(db, endpoint.id) == 0


@pytest.mark.asyncio
async def test_resolve_prefers_requested_type(db, endpoint):
    store = ScenarioStore(db)
    success = await store.create(endpoint.id, name="ok", type="success", is_default=True)
    timeout = await store.create(endpoint.id, name="slow", type="timeout", status_code=408, delay_ms=5000)
    await db.commit()

    assert (await store.resolve(endpoint.id)).id == success.id
    assert (await store.resolve(endpoint.id, "timeout")).id == timeout.id
    assert await store.resolve(endpoint.id, ScenarioType.RATE_LIMIT) is None


@pytest.mark.asyncio
async def test_resolve_without_default(db, endpoint):
    store = ScenarioStore(db)
    await store.create(endpoint.id, name="fail", type="error", status_code=400)
    await db.commit()

    assert await store.resolve(endpoint.id) is None


@pytest.mark.asyncio
async def test_list_and_delete(db, endpoint):
    store = ScenarioStore(db)
    first = await store.create(endpoint.id, name="a", type="success")
    second = await store.create(endpoint.id, name="b", type="error", status_code=500)
    await db.commit()

    assert [s.id for s in await store.list_for_endpoint(endpoint.id)] == [first.id, second.id]

    await store.delete(first)
    await db.commit()
    assert [s.id for s in await store.list_for_endpoint(endpoint.id)] == [second.id]
