"""PostgreSQL implementation of Capability repository."""

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from commentarea.domain.repository import CapabilityRepository
from commentarea.domain.value import ActivityId, Capability, UserId
from commentarea.persistence.tables import capabilities_table


class PostgresCapabilityRepository(CapabilityRepository):
    """PostgreSQL implementation of CapabilityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_capabilities(
        self, user_id: UserId, activity_id: ActivityId
    ) -> set[Capability]:
        """Return every capability granted to the user in the activity."""
        stmt = select(capabilities_table.c.capability).where(
            capabilities_table.c.user_id == user_id,
            capabilities_table.c.activity_id == activity_id,
            capabilities_table.c.capability.in_([c.value for c in Capability]),
        )
        result = await self.session.execute(stmt)
        return {Capability(value) for value in result.scalars().all()}

    async def grant(
        self, user_id: UserId, activity_id: ActivityId, capability: Capability
    ) -> None:
        """Grant a capability. Granting twice is a no-op."""
        stmt = (
            insert(capabilities_table)
            .values(user_id=user_id, activity_id=activity_id, capability=capability.value)
            .on_conflict_do_nothing()
        )
        await self.session.execute(stmt)
        await self.session.flush()
