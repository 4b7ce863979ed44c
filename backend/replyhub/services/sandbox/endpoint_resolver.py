"""Resolution of concrete request paths to registered sandbox endpoints."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from replyhub.models.sandbox_endpoint import SandboxApiEndpoint
from replyhub.services.sandbox.path_matcher import (
    compile_path_template,
    has_placeholders,
    match_path,
)


class EndpointResolver:
    """
    Finds the endpoint serving a request.

    An exact (api_type, path, method) match always wins. Otherwise endpoints
    are tried in registration order and the first template that matches the
    path structurally is used. There is no specificity ranking between
    overlapping templates: whichever was registered first wins.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_exact(
        self,
        environment_id: int,
        api_type: str,
        path: str,
        method: str,
    ) -> SandboxApiEndpoint | None:
        result = await self.db.execute(
            select(SandboxApiEndpoint)
            .where(
                SandboxApiEndpoint.environment_id == environment_id,
                SandboxApiEndpoint.api_type == api_type,
                SandboxApiEndpoint.path == path,
                SandboxApiEndpoint.method == method.upper(),
            )
            .order_by(SandboxApiEndpoint.id)
            .limit(1)
        )
        return result.scalars().first()

    async def list_candidates(
        self,
        environment_id: int,
        api_type: str,
        method: str,
    ) -> list[SandboxApiEndpoint]:
        result = await self.db.execute(
            select(SandboxApiEndpoint)
            .where(
                SandboxApiEndpoint.environment_id == environment_id,
                SandboxApiEndpoint.api_type == api_type,
                SandboxApiEndpoint.method == method.upper(),
            )
            .order_by(SandboxApiEndpoint.id)
        )
        return list(result.scalars().all())

    async def resolve(
        self,
        environment_id: int,
        api_type: str,
        path: str,
        method: str,
    ) -> SandboxApiEndpoint | None:
        endpoint = await self.find_exact(environment_id, api_type, path, method)
        if endpoint:
            return endpoint

        for candidate in await self.list_candidates(environment_id, api_type, method):
            # Literal paths were already tried by the exact lookup
            if not has_placeholders(candidate.path):
                continue
            if match_path(compile_path_template(candidate.path), path) is not None:
                return candidate

        return None
