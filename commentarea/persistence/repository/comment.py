"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import case, exists, func, literal, select, union_all, update
from sqlalchemy.ext.asyncio import AsyncSession

from commentarea.domain.error import NotFoundError
from commentarea.domain.model import Comment, CommentRow
from commentarea.domain.repository import CommentRepository
from commentarea.domain.value import (
    ROOT_PARENT_ID,
    CommentId,
    CommentQueryPlan,
    QuestionId,
    SortField,
    UserId,
)
from commentarea.persistence.mappers import comment_state_to_dict, row_to_comment
from commentarea.persistence.tables import comments_table, users_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    def _tree_query(self, plan: CommentQueryPlan):
        c = comments_table
        author = users_table.alias("author")

        # Window membership is decided by recency only
        window = select(c.c.id).where(
            c.c.question_id == plan.question_id,
            c.c.parent_id == ROOT_PARENT_ID,
        )
        if plan.root_id is not None:
            window = window.where(c.c.id == plan.root_id)
        if plan.windowed:
            window = window.order_by(c.c.created.desc(), c.c.id.desc()).limit(
                plan.limit
            )
        window = window.cte("root_window")

        root_count = select(func.count()).select_from(window).scalar_subquery()
        chronological = func.row_number().over(order_by=(c.c.created, c.c.id))
        author_columns = (
            author.c.first_name.label("author_first_name"),
            author.c.last_name.label("author_last_name"),
        )

        roots = (
            select(
                c,
                literal(0).label("is_reply"),
                chronological.label("row_number"),
                *author_columns,
            )
            .select_from(c.outerjoin(author, author.c.id == c.c.user_id))
            .where(c.c.id.in_(select(window.c.id)))
        )
        replies = (
            select(
                c,
                literal(1).label("is_reply"),
                (chronological + root_count).label("row_number"),
                *author_columns,
            )
            .select_from(c.outerjoin(author, author.c.id == c.c.user_id))
            .where(
                c.c.question_id == plan.question_id,
                c.c.parent_id.in_(select(window.c.id)),
            )
        )
        tree = union_all(roots, replies).subquery("tree")

        is_root = tree.c.is_reply == 0
        if plan.sort.field is SortField.DATE:
            sort_columns = [tree.c.created, tree.c.id]
        elif plan.sort.field is SortField.AUTHOR_FIRSTNAME:
            sort_columns = [tree.c.author_first_name]
        else:
            sort_columns = [tree.c.author_last_name]

        root_order = []
        for column in sort_columns:
            key = case((is_root, column))
            # Roots without a user row: last ascending, first descending
            root_order.append(
                key.desc().nulls_first()
                if plan.sort.descending
                else key.asc().nulls_last()
            )

        return select(tree).order_by(
            tree.c.is_reply,
            *root_order,
            tree.c.created.asc(),
            tree.c.id.asc(),
        )

    async def find_rows(self, plan: CommentQueryPlan) -> List[CommentRow]:
        """Fetch one windowed comment tree as flat rows."""
        result = await self.session.execute(self._tree_query(plan))
        return [
            CommentRow(
                comment=row_to_comment(row._asdict()),
                row_number=row.row_number,
            )
            for row in result.fetchall()
        ]

    async def create(
        self,
        question_id: QuestionId,
        parent_id: CommentId,
        user_id: UserId,
        text: str,
        created: int,
    ) -> Comment:
        """Insert a new comment."""
        stmt = (
            comments_table.insert()
            .values(
                question_id=question_id,
                parent_id=parent_id,
                user_id=user_id,
                comment=text,
                created=created,
            )
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict())

    async def update_state(self, comment: Comment) -> Comment:
        """Persist the delete/undelete columns of an existing comment."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment.id)
            .values(**comment_state_to_dict(comment))
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            raise NotFoundError("Comment", str(comment.id))

        await self.session.flush()
        return row_to_comment(row._asdict())

    async def count_by_question(
        self, question_id: QuestionId, include_deleted: bool = False
    ) -> int:
        """Count comments and replies on a question."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.question_id == question_id)
        )
        if not include_deleted:
            stmt = stmt.where(comments_table.c.deleted == 0)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def exists_for_user(self, question_id: QuestionId, user_id: UserId) -> bool:
        """Whether the user has a non-deleted comment on the question."""
        stmt = select(
            exists().where(
                comments_table.c.question_id == question_id,
                comments_table.c.user_id == user_id,
                comments_table.c.deleted == 0,
            )
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar())
