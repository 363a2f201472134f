"""PostgreSQL implementation of Preference repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from commentarea.domain.repository import PreferenceRepository
from commentarea.domain.value import UserId
from commentarea.persistence.tables import user_preferences_table


class PostgresPreferenceRepository(PreferenceRepository):
    """PostgreSQL implementation of PreferenceRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, user_id: UserId, name: str) -> Optional[str]:
        """Read a preference."""
        stmt = select(user_preferences_table.c.value).where(
            user_preferences_table.c.user_id == user_id,
            user_preferences_table.c.name == name,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def set(self, user_id: UserId, name: str, value: str) -> None:
        """Create or overwrite a preference."""
        stmt = (
            insert(user_preferences_table)
            .values(user_id=user_id, name=name, value=value)
            .on_conflict_do_update(
                index_elements=[
                    user_preferences_table.c.user_id,
                    user_preferences_table.c.name,
                ],
                set_={"value": value},
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
