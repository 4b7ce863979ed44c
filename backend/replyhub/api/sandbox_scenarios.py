"""Test scenario routes; changes are limited to the owner of the endpoint's environment."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from replyhub.db.postgres import get_db
from replyhub.models.sandbox_endpoint import SandboxApiEndpoint
from replyhub.models.sandbox_environment import SandboxEnvironment
from replyhub.models.sandbox_scenario import SandboxTestScenario
from replyhub.models.user import User
from replyhub.schemas.sandbox_scenario import (
    SandboxScenarioCreate,
    SandboxScenarioResponse,
    SandboxScenarioUpdate,
)
from replyhub.security import get_current_user
from replyhub.services.sandbox.scenario_store import ScenarioStore
from replyhub.utils.ownership import ensure_owner

router = APIRouter()


async def get_endpoint_or_404(endpoint_id: int, db: AsyncSession) -> SandboxApiEndpoint:
    endpoint = await db.get(SandboxApiEndpoint, endpoint_id)
    if not endpoint:
        raise HTTPException(status_code=404, detail="Sandbox endpoint not found")
    return endpoint


async def get_scenario_or_404(scenario_id: int, db: AsyncSession) -> SandboxTestScenario:
    scenario = await db.get(SandboxTestScenario, scenario_id)
    if not scenario:
        raise HTTPException(status_code=404, detail="Test scenario not found")
    return scenario


async def ensure_endpoint_owner(endpoint: SandboxApiEndpoint, user: User, db: AsyncSession) -> None:
    environment = await db.get(SandboxEnvironment, endpoint.environment_id)
    if not environment:
        raise HTTPException(status_code=404, detail="Sandbox environment not found")
    ensure_owner(environment, user)


async def get_owned_scenario(scenario_id: int, user: User, db: AsyncSession) -> SandboxTestScenario:
    scenario = await get_scenario_or_404(scenario_id, db)
    endpoint = await get_endpoint_or_404(scenario.endpoint_id, db)
    await ensure_endpoint_owner(endpoint, user, db)
    return scenario


@router.get("/endpoints/{endpoint_id}/scenarios", response_model=list[SandboxScenarioResponse])
async def list_scenarios(endpoint_id: int, db: AsyncSession = Depends(get_db)):
    await get_endpoint_or_404(endpoint_id, db)
    return await ScenarioStore(db).list_for_endpoint(endpoint_id)


@router.post(
    "/endpoints/{endpoint_id}/scenarios",
    response_model=SandboxScenarioResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_scenario(
    endpoint_id: int,
    data: SandboxScenarioCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a scenario; a new default replaces the previous one."""
    endpoint = await get_endpoint_or_404(endpoint_id, db)
    await ensure_endpoint_owner(endpoint, current_user, db)

    scenario = await ScenarioStore(db).create(endpoint_id, **data.model_dump())
    await db.commit()
    await db.refresh(scenario)

    return scenario


@router.patch("/scenarios/{scenario_id}", response_model=SandboxScenarioResponse)
async def update_scenario(
    scenario_id: int,
    data: SandboxScenarioUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    scenario = await get_owned_scenario(scenario_id, current_user, db)

    scenario = await ScenarioStore(db).update(scenario, **data.model_dump(exclude_none=True))
    await db.commit()
    await db.refresh(scenario)

    return scenario


@router.post("/scenarios/{scenario_id}/default", response_model=SandboxScenarioResponse)
async def set_default_scenario(
    scenario_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Make this the endpoint's only default scenario."""
    scenario = await get_owned_scenario(scenario_id, current_user, db)

    scenario = await ScenarioStore(db).set_default(scenario)
    await db.commit()

    return scenario


@router.delete("/scenarios/{scenario_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_scenario(
    scenario_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    scenario = await get_owned_scenario(scenario_id, current_user, db)

    await ScenarioStore(db).delete(scenario)
    await db.commit()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
