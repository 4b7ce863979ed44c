"""Sandbox environments, their endpoints and request logs."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from replyhub.config import get_settings
from replyhub.db.postgres import get_db
from replyhub.models.sandbox_endpoint import SandboxApiEndpoint
from replyhub.models.sandbox_environment import SandboxEnvironment
from replyhub.models.sandbox_log import SandboxLog
from replyhub.models.user import User
from replyhub.schemas.sandbox_endpoint import SandboxEndpointCreate, SandboxEndpointResponse
from replyhub.schemas.sandbox_environment import (
    SandboxEnvironmentCreate,
    SandboxEnvironmentResponse,
    SandboxEnvironmentUpdate,
)
from replyhub.schemas.sandbox_log import SandboxLogResponse
from replyhub.security import get_current_user, get_optional_user
from replyhub.services.sandbox.provisioning import (
    create_default_api_endpoints,
    create_default_test_scenarios,
)
from replyhub.utils.ownership import ensure_owner

router = APIRouter()


async def get_environment_or_404(environment_id: int, db: AsyncSession) -> SandboxEnvironment:
    environment = await db.get(SandboxEnvironment, environment_id)
    if not environment:
        raise HTTPException(status_code=404, detail="Sandbox environment not found")
    return environment


@router.get("/environments", response_model=list[SandboxEnvironmentResponse])
async def list_environments(
    current_user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's environments plus the shared demo environment."""
    demo_id = get_settings().demo_environment_id
    query = select(SandboxEnvironment).order_by(SandboxEnvironment.id)

    if current_user:
        query = query.where(
            or_(SandboxEnvironment.user_id == current_user.id, SandboxEnvironment.id == demo_id)
        )
    else:
        query = query.where(SandboxEnvironment.id == demo_id)

    result = await db.execute(query)
    return result.scalars().all()


@router.post("/environments", response_model=SandboxEnvironmentResponse, status_code=status.HTTP_201_CREATED)
async def create_environment(
    data: SandboxEnvironmentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create an environment with the default endpoints and scenarios."""
    environment = SandboxEnvironment(
        user_id=current_user.id,
        name=data.name,
        description=data.description,
        is_active=data.is_active,
    )
    db.add(environment)
    await db.flush()

    await create_default_api_endpoints(db, environment)

    await db.commit()
    await db.refresh(environment)

    return environment


@router.get("/environments/{environment_id}", response_model=SandboxEnvironmentResponse)
async def get_environment(environment_id: int, db: AsyncSession = Depends(get_db)):
    return await get_environment_or_404(environment_id, db)


@router.patch("/environments/{environment_id}", response_model=SandboxEnvironmentResponse)
async def update_environment(
    environment_id: int,
    data: SandboxEnvironmentUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    environment = await get_environment_or_404(environment_id, db)
    ensure_owner(environment, current_user)

    if data.name is not None:
        environment.name = data.name
    if data.description is not None:
        environment.description = data.description
    if data.is_active is not None:
        environment.is_active = data.is_active

    await db.commit()
    await db.refresh(environment)

    return environment


@router.delete("/environments/{environment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_environment(
    environment_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete an environment with its endpoints, scenarios and logs."""
    environment = await get_environment_or_404(environment_id, db)
    ensure_owner(environment, current_user)

    await db.delete(environment)
    await db.commit()

    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Endpoints

@router.get("/environments/{environment_id}/endpoints", response_model=list[SandboxEndpointResponse])
async def list_endpoints(environment_id: int, db: AsyncSession = Depends(get_db)):
    """List endpoints in registration order (the order pattern matching uses)."""
    await get_environment_or_404(environment_id, db)

    result = await db.execute(
        select(SandboxApiEndpoint)
        .where(SandboxApiEndpoint.environment_id == environment_id)
        .order_by(SandboxApiEndpoint.id)
    )
    return result.scalars().all()


@router.post(
    "/environments/{environment_id}/endpoints",
    response_model=SandboxEndpointResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_endpoint(
    environment_id: int,
    data: SandboxEndpointCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Register an endpoint and give it the default test scenarios."""
    environment = await get_environment_or_404(environment_id, db)
    ensure_owner(environment, current_user)

    endpoint = SandboxApiEndpoint(
        environment_id=environment_id,
        api_type=data.api_type.value,
        path=data.path,
        method=data.method,
        description=data.description,
    )
    db.add(endpoint)
    await db.flush()

    await create_default_test_scenarios(db, endpoint)

    await db.commit()
    await db.refresh(endpoint)

    return endpoint


@router.delete("/endpoints/{endpoint_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_endpoint(
    endpoint_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    endpoint = await db.get(SandboxApiEndpoint, endpoint_id)
    if not endpoint:
        raise HTTPException(status_code=404, detail="Sandbox endpoint not found")

    environment = await get_environment_or_404(endpoint.environment_id, db)
    ensure_owner(environment, current_user)

    await db.delete(endpoint)
    await db.commit()

    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Logs

@router.get("/environments/{environment_id}/logs", response_model=list[SandboxLogResponse])
async def list_logs(
    environment_id: int,
    limit: int | None = None,
    offset: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Newest entries first."""
    await get_environment_or_404(environment_id, db)

    query = (
        select(SandboxLog)
        .where(SandboxLog.environment_id == environment_id)
        .order_by(SandboxLog.timestamp.desc(), SandboxLog.id.desc())
    )
    if limit is not None:
        query = query.limit(limit)
    if offset is not None:
        query = query.offset(offset)

    result = await db.execute(query)
    return result.scalars().all()


@router.delete("/environments/{environment_id}/logs", status_code=status.HTTP_204_NO_CONTENT)
async def clear_logs(environment_id: int, db: AsyncSession = Depends(get_db)):
    await get_environment_or_404(environment_id, db)

    await db.execute(delete(SandboxLog).where(SandboxLog.environment_id == environment_id))
    await db.commit()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
