"""In-memory comment repository for testing."""

from typing import Optional

from commentarea.domain.model.comment import Comment, CommentRow
from commentarea.domain.repository.comment import CommentRepository
from commentarea.domain.value import (
    ROOT_PARENT_ID,
    CommentId,
    CommentQueryPlan,
    QuestionId,
    SortField,
    UserId,
)

from .user import InMemoryUserRepository


def _chronological(comment: Comment) -> tuple[int, int]:
    return (comment.created, comment.id)


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Author sorts read names from the in-memory user repository, mirroring
    the join done by the PostgreSQL query.
    """

    def __init__(self, user_repository: Optional[InMemoryUserRepository] = None) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._next_id = 1
        self.user_repository = user_repository or InMemoryUserRepository()

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    def _author_key(self, comment: Comment, field: SortField) -> tuple[bool, str]:
        # Missing authors compare like SQL NULL: last ascending, first descending
        user = self.user_repository.get(comment.user_id)
        if user is None:
            return (True, "")
        if field is SortField.AUTHOR_FIRSTNAME:
            return (False, user.first_name)
        return (False, user.last_name)

    async def find_rows(self, plan: CommentQueryPlan) -> list[CommentRow]:
        """Fetch one windowed comment tree as flat rows."""
        roots = [
            c
            for c in self._comments.values()
            if c.question_id == plan.question_id and c.parent_id == ROOT_PARENT_ID
        ]
        if plan.root_id is not None:
            roots = [c for c in roots if c.id == plan.root_id]

        # Window membership by recency
        if plan.windowed:
            roots.sort(key=_chronological, reverse=True)
            roots = roots[: plan.limit]

        root_ids = {c.id for c in roots}
        replies = sorted(
            (
                c
                for c in self._comments.values()
                if c.question_id == plan.question_id and c.parent_id in root_ids
            ),
            key=_chronological,
        )

        row_numbers: dict[CommentId, int] = {}
        for number, comment in enumerate(sorted(roots, key=_chronological), start=1):
            row_numbers[comment.id] = number
        for number, comment in enumerate(replies, start=len(roots) + 1):
            row_numbers[comment.id] = number

        # Presentation order, stable sorts applied tie-breaker first
        if plan.sort.field is SortField.DATE:
            roots.sort(key=_chronological, reverse=plan.sort.descending)
        else:
            roots.sort(key=_chronological)
            roots.sort(
                key=lambda c: self._author_key(c, plan.sort.field),
                reverse=plan.sort.descending,
            )

        return [
            CommentRow(comment=c, row_number=row_numbers[c.id]) for c in roots + replies
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
        while CommentId(self._next_id) in self._comments:
            self._next_id += 1
        comment = Comment(
            id=CommentId(self._next_id),
            question_id=question_id,
            parent_id=parent_id,
            user_id=user_id,
            comment=text,
            created=created,
        )
        self._comments[comment.id] = comment
        self._next_id += 1
        return comment

    async def update_state(self, comment: Comment) -> Comment:
        """Persist the delete/undelete columns of an existing comment."""
        existing = self._comments[comment.id]
        updated = existing.model_copy(
            update={
                "deleted": comment.deleted,
                "delete_user_id": comment.delete_user_id,
                "modified": comment.modified,
                "edit_user_id": comment.edit_user_id,
            }
        )
        self._comments[comment.id] = updated
        return updated

    async def count_by_question(
        self, question_id: QuestionId, include_deleted: bool = False
    ) -> int:
        """Count comments and replies on a question."""
        return sum(
            1
            for c in self._comments.values()
            if c.question_id == question_id and (include_deleted or not c.is_deleted)
        )

    async def exists_for_user(self, question_id: QuestionId, user_id: UserId) -> bool:
        """Whether the user has a non-deleted comment on the question."""
        return any(
            c.question_id == question_id and c.user_id == user_id and not c.is_deleted
            for c in self._comments.values()
        )

    def add(self, comment: Comment) -> Comment:
        """Store a fully specified comment, keeping its id and timestamps."""
        self._comments[comment.id] = comment
        return comment
