"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from commentarea.domain.model.comment import Comment, CommentRow
from commentarea.domain.value import CommentId, CommentQueryPlan, QuestionId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_rows(self, plan: CommentQueryPlan) -> List[CommentRow]:
        """Fetch one windowed comment tree as flat rows.

        Roots come first, in the plan's presentation order, followed by every
        reply of every selected root ordered ``created asc, id asc``. Deleted
        rows are included. Roots are numbered 1..k by ``created asc`` and
        replies continue from k+1 in the same order.

        Args:
            plan: Query plan built by the ``QueryPlanner``

        Returns:
            Rows for the selected roots and all of their replies
        """
        pass

    @abstractmethod
    async def create(
        self,
        question_id: QuestionId,
        parent_id: CommentId,
        user_id: UserId,
        text: str,
        created: int,
    ) -> Comment:
        """Insert a new comment.

        Args:
            question_id: Question the comment belongs to
            parent_id: Root comment being replied to, or ``ROOT_PARENT_ID``
            user_id: Author
            text: Comment body
            created: Creation time in epoch seconds

        Returns:
            The stored comment with its assigned id
        """
        pass

    @abstractmethod
    async def update_state(self, comment: Comment) -> Comment:
        """Persist the delete/undelete columns of an existing comment.

        Only ``deleted``, ``delete_user_id``, ``modified`` and
        ``edit_user_id`` are written.

        Args:
            comment: Comment carrying the new state

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def count_by_question(
        self, question_id: QuestionId, include_deleted: bool = False
    ) -> int:
        """Count comments and replies on a question.

        Args:
            question_id: The question ID
            include_deleted: Whether to count soft-deleted comments

        Returns:
            Number of comments
        """
        pass

    @abstractmethod
    async def exists_for_user(self, question_id: QuestionId, user_id: UserId) -> bool:
        """Whether ``user_id`` has a non-deleted comment on the question."""
        pass
