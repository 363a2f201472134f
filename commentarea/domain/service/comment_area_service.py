"""Comment area domain service.

Single entry point for everything that happens in the comment area of a
question: fetching windowed trees, creating comments and replies, soft
deleting and restoring them, and the sort preference.
"""

import time
from dataclasses import dataclass
from typing import Iterable, Optional

import logfire

from commentarea.config import Settings
from commentarea.domain.error import (
    NotFoundError,
    ReplyNotAllowedError,
    ValidationError,
)
from commentarea.domain.model.activity import Activity, Question
from commentarea.domain.model.comment import Comment, CommentRow
from commentarea.domain.model.comment_node import CommentNode, UserDirectory, ViewContext
from commentarea.domain.repository import (
    CommentRepository,
    PreferenceRepository,
    UserRepository,
)
from commentarea.domain.value import (
    DEFAULT_SORT,
    ROOT_PARENT_ID,
    CommentId,
    CommentQueryPlan,
    DenialReason,
    SortFeature,
    UserId,
    Viewer,
)

from .base import Service
from .comment_tree import CommentTree, CommentTreeBuilder
from .query_planner import QueryPlanner


def current_time() -> int:
    """Current time in epoch seconds."""
    return int(time.time())


@dataclass(frozen=True)
class CommentActionResult:
    """Outcome of a delete or undelete attempt.

    A refused action is not an error: ``success`` is False, ``reason``
    explains why and nothing was written.
    """

    success: bool
    reason: Optional[str] = None
    node: Optional[CommentNode] = None


class CommentAreaService(Service):
    """Domain service for the comment area of a question."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
        preference_repository: PreferenceRepository,
        query_planner: QueryPlanner,
        settings: Settings,
    ) -> None:
        """Initialize comment area service.

        Args:
            comment_repository: Comment repository
            user_repository: User repository, used for batched author lookups
            preference_repository: Per-user preference store
            query_planner: Sort resolution and query planning
            settings: Application settings
        """
        self.comment_repository = comment_repository
        self.user_repository = user_repository
        self.preference_repository = preference_repository
        self.query_planner = query_planner
        self.settings = settings

    # Tree loading

    async def _load_users(self, comments: Iterable[Comment]) -> UserDirectory:
        user_ids: set[UserId] = set()
        for comment in comments:
            user_ids.add(comment.user_id)
            if comment.delete_user_id is not None:
                user_ids.add(comment.delete_user_id)

        directory = UserDirectory()
        if user_ids:
            users = await self.user_repository.find_by_ids(user_ids)
            directory.add_all(users.values())
        return directory

    def _context(
        self, viewer: Viewer, activity: Activity, users: UserDirectory
    ) -> ViewContext:
        return ViewContext(
            viewer=viewer,
            activity=activity,
            users=users,
            now=current_time(),
            settings=self.settings.comments,
            site_url=self.settings.site_url,
        )

    async def _load_tree(
        self, plan: CommentQueryPlan, activity: Activity, viewer: Viewer
    ) -> CommentTree:
        rows: list[CommentRow] = await self.comment_repository.find_rows(plan)
        users = await self._load_users(row.comment for row in rows)
        builder = CommentTreeBuilder(self._context(viewer, activity, users))
        return builder.build(rows)

    async def fetch_all(
        self,
        question: Question,
        activity: Activity,
        viewer: Viewer,
        limit: int = 0,
        sort: SortFeature = DEFAULT_SORT,
    ) -> list[CommentNode]:
        """Fetch the comment tree of a question.

        Args:
            question: Question whose comments are shown
            activity: Activity owning the question
            viewer: Requesting user
            limit: Number of latest root comments to show, 0 shows all
            sort: Presentation order of the root comments

        Returns:
            Root nodes in presentation order, each with its replies attached
            oldest first

        Raises:
            ValidationError: If ``limit`` is negative
        """
        with logfire.span(
            "comment_area.fetch_all",
            question_id=question.id,
            viewer_id=viewer.id,
            limit=limit,
            sort=sort.key,
        ):
            plan = self.query_planner.plan(question.id, limit, sort)
            tree = await self._load_tree(plan, activity, viewer)
            roots = tree.roots
            logfire.info(
                "Comments retrieved for question",
                question_id=question.id,
                roots=len(roots),
                total=len(tree.nodes),
            )
            return roots

    async def fetch_one(
        self,
        question: Question,
        activity: Activity,
        viewer: Viewer,
        comment_id: CommentId,
    ) -> CommentNode:
        """Fetch a single comment with its full reply list.

        A root is loaded through the same tree query restricted to that
        root. A reply is loaded together with its root so the node keeps the
        parent's row.

        Raises:
            NotFoundError: If the comment does not exist on this question
        """
        with logfire.span(
            "comment_area.fetch_one",
            question_id=question.id,
            comment_id=comment_id,
            viewer_id=viewer.id,
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None or comment.question_id != question.id:
                logfire.warn(
                    "Comment not found",
                    comment_id=comment_id,
                    question_id=question.id,
                )
                raise NotFoundError("Comment", str(comment_id))

            # Row numbers (anonymous labels) restart within a single-root fetch
            root_id = comment.id if comment.is_root else comment.parent_id
            plan = self.query_planner.plan(question.id, 0, root_id=root_id)
            tree = await self._load_tree(plan, activity, viewer)

            node = tree.find(comment.id)
            if node is None:
                logfire.error(
                    "Reply points at a missing root",
                    comment_id=comment_id,
                    parent_id=comment.parent_id,
                )
                raise NotFoundError("Comment", str(comment_id))
            return node

    # Mutations

    def _validate_new_comment(self, reply_to: int, body: Optional[str]) -> str:
        errors: dict[str, str] = {}
        text = (body or "").strip()
        if not text:
            errors["message"] = "Comment must not be empty"
        elif len(text) > self.settings.comments.max_comment_length:
            errors["message"] = (
                f"Comment must be at most "
                f"{self.settings.comments.max_comment_length} characters"
            )
        if reply_to < 0:
            errors["replyto"] = "Must be 0 or the id of a root comment"
        if errors:
            raise ValidationError(errors)
        return text

    async def create_comment(
        self,
        question: Question,
        activity: Activity,
        viewer: Viewer,
        reply_to: int,
        body: Optional[str],
    ) -> CommentId:
        """Create a root comment or a reply to a root comment.

        Args:
            question: Question being commented on
            activity: Activity owning the question
            viewer: Author
            reply_to: Root comment id to reply to, ``ROOT_PARENT_ID`` for a
                new root comment
            body: Comment body

        Returns:
            Id of the new comment

        Raises:
            ValidationError: If the body is empty or too long, or ``reply_to``
                is negative
            NotFoundError: If ``reply_to`` names no comment
            ReplyNotAllowedError: If ``reply_to`` is a reply or belongs to
                another question
        """
        with logfire.span(
            "comment_area.create_comment",
            question_id=question.id,
            viewer_id=viewer.id,
            reply_to=reply_to,
        ):
            text = self._validate_new_comment(reply_to, body)

            parent_id = ROOT_PARENT_ID
            if reply_to != ROOT_PARENT_ID:
                parent = await self.comment_repository.find_by_id(CommentId(reply_to))
                if parent is None:
                    logfire.warn("Parent comment not found", parent_id=reply_to)
                    raise NotFoundError("Comment", str(reply_to))
                if parent.question_id != question.id:
                    logfire.warn(
                        "Parent comment does not belong to question",
                        parent_id=reply_to,
                        parent_question_id=parent.question_id,
                        target_question_id=question.id,
                    )
                    raise ReplyNotAllowedError(
                        "Parent comment does not belong to this question"
                    )
                if not parent.is_root:
                    logfire.warn("Reply to a reply refused", parent_id=reply_to)
                    raise ReplyNotAllowedError(DenialReason.REPLY_TO_REPLY.value)
                parent_id = parent.id

            comment = await self.comment_repository.create(
                question_id=question.id,
                parent_id=parent_id,
                user_id=viewer.id,
                text=text,
                created=current_time(),
            )
            logfire.info(
                "Comment created",
                event="comment_created",
                comment_id=comment.id,
                question_id=question.id,
                activity_id=activity.id,
                parent_id=parent_id,
                author_id=viewer.id,
            )
            return comment.id

    async def delete_comment(
        self,
        question: Question,
        activity: Activity,
        viewer: Viewer,
        comment_id: CommentId,
    ) -> CommentActionResult:
        """Soft delete a comment if the viewer may.

        Raises:
            NotFoundError: If the comment does not exist on this question
        """
        with logfire.span(
            "comment_area.delete_comment",
            comment_id=comment_id,
            viewer_id=viewer.id,
        ):
            node = await self.fetch_one(question, activity, viewer, comment_id)
            if not node.can_delete():
                logfire.warn(
                    "Comment delete refused",
                    comment_id=comment_id,
                    viewer_id=viewer.id,
                    reason=node.reason,
                )
                return CommentActionResult(success=False, reason=node.reason)

            await self.comment_repository.update_state(node.delete())
            logfire.info(
                "Comment deleted",
                event="comment_deleted",
                comment_id=comment_id,
                question_id=question.id,
                delete_user_id=viewer.id,
            )
            refreshed = await self.fetch_one(question, activity, viewer, comment_id)
            return CommentActionResult(success=True, node=refreshed)

    async def undelete_comment(
        self,
        question: Question,
        activity: Activity,
        viewer: Viewer,
        comment_id: CommentId,
    ) -> CommentActionResult:
        """Restore a soft deleted comment if the viewer may.

        Raises:
            NotFoundError: If the comment does not exist on this question
        """
        with logfire.span(
            "comment_area.undelete_comment",
            comment_id=comment_id,
            viewer_id=viewer.id,
        ):
            node = await self.fetch_one(question, activity, viewer, comment_id)
            if not node.can_undelete():
                logfire.warn(
                    "Comment undelete refused",
                    comment_id=comment_id,
                    viewer_id=viewer.id,
                    reason=node.reason,
                )
                return CommentActionResult(success=False, reason=node.reason)

            await self.comment_repository.update_state(node.undelete())
            logfire.info(
                "Comment undeleted",
                event="comment_undeleted",
                comment_id=comment_id,
                question_id=question.id,
                edit_user_id=viewer.id,
            )
            refreshed = await self.fetch_one(question, activity, viewer, comment_id)
            return CommentActionResult(success=True, node=refreshed)

    # Question level queries

    async def count_comments(self, question: Question) -> int:
        """Number of non-deleted comments and replies on a question."""
        return await self.comment_repository.count_by_question(question.id)

    async def has_open_comment_requirement(
        self, question: Question, activity: Activity, viewer: Viewer
    ) -> bool:
        """Whether the viewer still has to comment before moving on.

        Only activities that force commenting impose the requirement, and a
        deleted comment does not fulfil it.
        """
        with logfire.span(
            "comment_area.has_open_comment_requirement",
            question_id=question.id,
            viewer_id=viewer.id,
        ):
            if not activity.force_commenting:
                return False
            exists = await self.comment_repository.exists_for_user(
                question.id, viewer.id
            )
            return not exists

    # Sorting

    def get_sortable_fields(self, viewer: Viewer, activity: Activity) -> list[SortFeature]:
        return self.query_planner.sortable_fields(viewer, activity)

    async def resolve_sort(
        self, viewer: Viewer, activity: Activity, requested: Optional[str] = None
    ) -> SortFeature:
        """Effective sort for a fetch, remembering a valid explicit choice.

        Args:
            viewer: Requesting user
            activity: Activity the comments belong to
            requested: Sort key sent with the request, if any

        Returns:
            The sort feature to fetch with
        """
        name = self.settings.comments.sort_preference_name
        stored = await self.preference_repository.get(viewer.id, name)
        sort, remember = self.query_planner.resolve_sort(
            requested, stored, viewer, activity
        )
        if remember and sort.key != stored:
            await self.preference_repository.set(viewer.id, name, sort.key)
        return sort

    async def set_sort_preference(
        self, viewer: Viewer, activity: Activity, raw: str
    ) -> SortFeature:
        """Persist a sort choice.

        A choice that is unknown or not allowed for the viewer is not stored;
        the default sort is returned instead.
        """
        with logfire.span(
            "comment_area.set_sort_preference", viewer_id=viewer.id, sort=raw
        ):
            sort = SortFeature.parse(raw)
            if not self.query_planner.is_allowed(sort, viewer, activity):
                logfire.warn(
                    "Sort preference not available, ignoring",
                    viewer_id=viewer.id,
                    sort=raw,
                )
                return DEFAULT_SORT

            await self.preference_repository.set(
                viewer.id, self.settings.comments.sort_preference_name, sort.key
            )
            logfire.info("Sort preference saved", viewer_id=viewer.id, sort=sort.key)
            return sort
