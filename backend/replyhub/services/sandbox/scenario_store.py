"""Storage operations for endpoint test scenarios."""

from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from replyhub.models.enums import ScenarioType
from replyhub.models.sandbox_scenario import SandboxTestScenario


class ScenarioStore:
    """
    Reads and writes scenarios while keeping at most one default per endpoint.

    Methods that touch the default flag issue a single UPDATE over the
    endpoint's scenarios in the caller's transaction; callers commit.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_endpoint(self, endpoint_id: int) -> list[SandboxTestScenario]:
        result = await self.db.execute(
            select(SandboxTestScenario)
            .where(SandboxTestScenario.endpoint_id == endpoint_id)
            .order_by(SandboxTestScenario.id)
        )
        return list(result.scalars().all())

    async def get_by_type(
        self,
        endpoint_id: int,
        scenario_type: ScenarioType | str,
    ) -> SandboxTestScenario | None:
        result = await self.db.execute(
            select(SandboxTestScenario)
            .where(
                SandboxTestScenario.endpoint_id == endpoint_id,
                SandboxTestScenario.type == ScenarioType(scenario_type).value,
            )
            .order_by(SandboxTestScenario.id)
            .limit(1)
        )
        return result.scalars().first()

    async def get_default(self, endpoint_id: int) -> SandboxTestScenario | None:
        result = await self.db.execute(
            select(SandboxTestScenario)
            .where(
                SandboxTestScenario.endpoint_id == endpoint_id,
                SandboxTestScenario.is_default.is_(True),
            )
            .order_by(SandboxTestScenario.id)
            .limit(1)
        )
        return result.scalars().first()

    async def resolve(
        self,
        endpoint_id: int,
        requested_type: ScenarioType | str | None = None,
    ) -> SandboxTestScenario | None:
        """Explicitly requested type if given, otherwise the endpoint's default."""
        if requested_type:
            return await self.get_by_type(endpoint_id, requested_type)
        return await self.get_default(endpoint_id)

    async def create(self, endpoint_id: int, **fields) -> SandboxTestScenario:
        if fields.get("is_default"):
            await self._clear_defaults(endpoint_id)

        if isinstance(fields.get("type"), ScenarioType):
            fields["type"] = fields["type"].value

        scenario = SandboxTestScenario(endpoint_id=endpoint_id, **fields)
        self.db.add(scenario)
        await self.db.flush()
        return scenario

    async def update(self, scenario: SandboxTestScenario, **changes) -> SandboxTestScenario:
        is_default = changes.pop("is_default", None)

        for key, value in changes.items():
            if isinstance(value, ScenarioType):
                value = value.value
            setattr(scenario, key, value)

        if is_default:
            await self.set_default(scenario)
        elif is_default is False:
            scenario.is_default = False

        await self.db.flush()
        return scenario

    async def set_default(self, scenario: SandboxTestScenario) -> SandboxTestScenario:
        """Flag this scenario as default and clear every sibling in one statement."""
        await self.db.execute(
            update(SandboxTestScenario)
            .where(SandboxTestScenario.endpoint_id == scenario.endpoint_id)
            .values(
                is_default=case(
                    (SandboxTestScenario.id == scenario.id, True),
                    else_=False,
                )
            )
            .execution_options(synchronize_session=False)
        )
        await self._reload(scenario.endpoint_id)
        return scenario

    async def delete(self, scenario: SandboxTestScenario) -> None:
        await self.db.delete(scenario)
        await self.db.flush()

    async def _clear_defaults(self, endpoint_id: int) -> None:
        await self.db.execute(
            update(SandboxTestScenario)
            .where(
                SandboxTestScenario.endpoint_id == endpoint_id,
                SandboxTestScenario.is_default.is_(True),
            )
            .values(is_default=False)
            .execution_options(synchronize_session=False)
        )
        await self._reload(endpoint_id)

    async def _reload(self, endpoint_id: int) -> None:
        # Loaded siblings take the values written by the bulk UPDATE
        await self.db.execute(
            select(SandboxTestScenario)
            .where(SandboxTestScenario.endpoint_id == endpoint_id)
            .execution_options(populate_existing=True)
        )
