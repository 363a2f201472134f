"""PostgreSQL implementation of Activity repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from commentarea.domain.model import Activity, Question
from commentarea.domain.repository import ActivityRepository
from commentarea.domain.value import ActivityId, QuestionId
from commentarea.persistence.mappers import (
    activity_to_dict,
    question_to_dict,
    row_to_activity,
    row_to_question,
)
from commentarea.persistence.tables import activities_table, questions_table


class PostgresActivityRepository(ActivityRepository):
    """PostgreSQL implementation of ActivityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, activity_id: ActivityId) -> Optional[Activity]:
        """Find an activity by ID."""
        stmt = select(activities_table).where(activities_table.c.id == activity_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_activity(row._asdict()) if row else None

    async def find_question(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        stmt = select(questions_table).where(questions_table.c.id == question_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_question(row._asdict()) if row else None

    async def save_activity(self, activity: Activity) -> Activity:
        """Save an activity (create or update)."""
        values = activity_to_dict(activity)
        stmt = (
            insert(activities_table)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[activities_table.c.id],
                set_={k: v for k, v in values.items() if k != "id"},
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return activity

    async def save_question(self, question: Question) -> Question:
        """Save a question (create or update)."""
        values = question_to_dict(question)
        stmt = (
            insert(questions_table)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[questions_table.c.id],
                set_={k: v for k, v in values.items() if k != "id"},
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return question
