"""In-memory comment tree node.

A ``CommentNode`` wraps one ``Comment`` row for the duration of a request. It
knows its parent only by id (plus the parent's immutable row when a reply is
fetched on its own), owns its ordered replies, and derives everything a
viewer may see from the ``ViewContext`` it was built with.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from commentarea.config import CommentAreaSettings
from commentarea.domain.error import BusinessRuleViolationError
from commentarea.domain.model.activity import Activity
from commentarea.domain.model.comment import Comment
from commentarea.domain.model.comment_view import CommentView, DeleteUserView
from commentarea.domain.model.user import User
from commentarea.domain.value import (
    HIDDEN_USER_ID,
    CommentId,
    DenialReason,
    UserId,
    Viewer,
)
from commentarea.util.text import summarize_html

PROFILE_PATH = "/user/view.php"
REPORT_PATH = "/mod/studentquiz/comment-report.php"


@dataclass
class UserDirectory:
    """Users referenced by one request's comments, keyed by id.

    Filled with a single batched lookup so nodes never query users one by one.
    """

    users: dict[UserId, User] = field(default_factory=dict)

    def add_all(self, users: Iterable[User]) -> None:
        for user in users:
            self.users[user.id] = user

    def get(self, user_id: Optional[UserId]) -> Optional[User]:
        if user_id is None:
            return None
        return self.users.get(user_id)


@dataclass(frozen=True)
class ViewContext:
    """Everything a node needs to evaluate permissions for one request."""

    viewer: Viewer
    activity: Activity
    users: UserDirectory
    now: int
    settings: CommentAreaSettings
    site_url: str = ""

    def profile_url(self, user_id: int) -> str:
        return f"{self.site_url}{PROFILE_PATH}?id={user_id}"

    def report_url(self, comment_id: int) -> str:
        return f"{self.site_url}{REPORT_PATH}?commentid={comment_id}"


class CommentNode:
    """One comment or reply in a request's comment tree.

    Permission predicates return booleans and, when they refuse, leave a
    human-readable explanation in ``reason``.
    """

    def __init__(
        self,
        comment: Comment,
        context: ViewContext,
        row_number: int,
        parent: Optional[Comment] = None,
    ) -> None:
        self.comment = comment
        self.context = context
        self.row_number = row_number
        self.parent = parent
        self.replies: list["CommentNode"] = []
        self.reason: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"CommentNode(id={self.id}, parent_id={self.parent_id}, "
            f"replies={len(self.replies)})"
        )

    @property
    def id(self) -> CommentId:
        return self.comment.id

    @property
    def parent_id(self) -> CommentId:
        return self.comment.parent_id

    @property
    def is_root(self) -> bool:
        return self.comment.is_root

    @property
    def is_deleted(self) -> bool:
        return self.comment.is_deleted

    @property
    def editable_until(self) -> int:
        """Last second at which a non-moderator creator may still act."""
        return self.comment.created + self.context.settings.editable_window_seconds

    def add_reply(self, reply: "CommentNode") -> None:
        self.replies.append(reply)

    def total_replies(self, include_deleted: bool = True) -> int:
        if include_deleted:
            return len(self.replies)
        return sum(1 for reply in self.replies if not reply.is_deleted)

    # Permissions

    def is_moderator(self) -> bool:
        return self.context.viewer.is_moderator

    def is_creator(self) -> bool:
        return self.context.viewer.id == self.comment.user_id

    def can_edit(self) -> bool:
        # Comments cannot be edited after posting
        return False

    def _within_owner_rights(self) -> bool:
        if self.is_moderator():
            return True
        if not self.is_creator():
            self.reason = DenialReason.NOT_CREATOR.value
            return False
        if self.context.now > self.editable_until:
            self.reason = DenialReason.EDIT_WINDOW_EXPIRED.value
            return False
        return True

    def can_delete(self) -> bool:
        if self.is_deleted:
            self.reason = DenialReason.ALREADY_DELETED.value
            return False
        return self._within_owner_rights()

    def can_undelete(self) -> bool:
        # The window is anchored to ``created``, not to the delete time
        if not self.is_deleted:
            self.reason = DenialReason.NOT_DELETED.value
            return False
        return self._within_owner_rights()

    def can_reply(self) -> bool:
        if not self.is_root:
            self.reason = DenialReason.REPLY_TO_REPLY.value
            return False
        return True

    def can_view_deleted(self) -> bool:
        return self.is_moderator()

    def can_view_username(self) -> bool:
        viewer = self.context.viewer
        if viewer.is_moderator or viewer.can_unhide_anonymous:
            return True
        return not self.context.activity.anonymous_rank

    def can_report(self) -> bool:
        if not self.context.activity.reporting_enabled:
            return False
        return self.is_moderator() or not self.is_creator()

    # State transitions

    def delete(self) -> Comment:
        """Return the row as it looks after the viewer deletes it.

        Raises:
            BusinessRuleViolationError: If the viewer may not delete it
        """
        if not self.can_delete():
            raise BusinessRuleViolationError(self.reason or "cannot delete")
        return self.comment.model_copy(
            update={
                "deleted": self.context.now,
                "delete_user_id": self.context.viewer.id,
            }
        )

    def undelete(self) -> Comment:
        """Return the row as it looks after the viewer restores it.

        Raises:
            BusinessRuleViolationError: If the viewer may not undelete it
        """
        if not self.can_undelete():
            raise BusinessRuleViolationError(self.reason or "cannot undelete")
        return self.comment.model_copy(
            update={
                "deleted": 0,
                "delete_user_id": None,
                "modified": self.context.now,
                "edit_user_id": self.context.viewer.id,
            }
        )

    # View derivation

    def short_content(self) -> str:
        settings = self.context.settings
        return summarize_html(
            self.comment.comment,
            settings.short_content_length,
            settings.image_placeholder,
        )

    def to_view(self, include_replies: bool = True) -> CommentView:
        """Project this node for the current viewer.

        Deleted content is blanked for viewers who may not see deletions,
        and authors are replaced by a numbered label while anonymisation
        applies to the viewer.
        """
        ctx = self.context
        comment = self.comment
        can_view_deleted = self.can_view_deleted()
        can_report = self.can_report()

        content = comment.comment
        short_content = self.short_content()
        delete_user = DeleteUserView()
        if self.is_deleted and not can_view_deleted:
            content = ""
            short_content = ""
            author_name = ""
            author_id = HIDDEN_USER_ID
            author_profile_url = ""
            posted_at = 0
            last_edited_at = 0
        else:
            if self.can_view_username():
                author = ctx.users.get(comment.user_id)
                author_name = author.full_name if author else ""
                author_id = comment.user_id
                author_profile_url = ctx.profile_url(comment.user_id)
            else:
                author_name = f"{ctx.settings.anonymous_label}{self.row_number}"
                author_id = HIDDEN_USER_ID
                author_profile_url = ""
            posted_at = comment.created
            last_edited_at = comment.modified
            if self.is_deleted and comment.delete_user_id is not None:
                deleter = ctx.users.get(comment.delete_user_id)
                delete_user = DeleteUserView(
                    id=comment.delete_user_id,
                    first_name=deleter.first_name if deleter else "",
                    last_name=deleter.last_name if deleter else "",
                    profile_url=ctx.profile_url(comment.delete_user_id),
                )

        return CommentView(
            id=comment.id,
            question_id=comment.question_id,
            parent_id=comment.parent_id,
            content=content,
            short_content=short_content,
            number_of_replies=self.total_replies(include_deleted=False),
            is_root=self.is_root,
            is_deleted=self.is_deleted,
            deleted_at=comment.deleted,
            author_name=author_name,
            author_id=author_id,
            author_profile_url=author_profile_url,
            posted_at=posted_at,
            last_edited_at=last_edited_at,
            delete_user=delete_user,
            can_edit=self.can_edit(),
            can_delete=self.can_delete(),
            can_undelete=self.can_undelete(),
            can_view_deleted=can_view_deleted,
            can_reply=self.can_reply(),
            can_report=can_report,
            report_url=ctx.report_url(comment.id) if can_report else None,
            is_creator=self.is_creator(),
            row_number=self.row_number,
            replies=[reply.to_view() for reply in self.replies]
            if include_replies
            else [],
        )
