"""Domain model entities for the comment area."""

from commentarea.domain.model.activity import Activity, Question
from commentarea.domain.model.comment import Comment, CommentRow
from commentarea.domain.model.comment_view import CommentView, DeleteUserView
from commentarea.domain.model.user import User

__all__ = [
    "Activity",
    "Question",
    "Comment",
    "CommentRow",
    "CommentView",
    "DeleteUserView",
    "User",
]
