"""Comment entity.

Comments hang off a quiz question in a two-level discussion: root comments
(``parent_id == ROOT_PARENT_ID``) and direct replies to them. Replies cannot
themselves be replied to.
"""

from typing import Optional

from pydantic import Field

from commentarea.domain.model.common import DomainModel
from commentarea.domain.value import ROOT_PARENT_ID, CommentId, QuestionId, UserId


class Comment(DomainModel):
    """Comment entity, one row of the ``comments`` table.

    Timestamps are epoch seconds. ``deleted`` is 0 while the comment is
    active and holds the deletion time otherwise; rows are never removed.
    """

    id: CommentId
    question_id: QuestionId
    parent_id: CommentId = ROOT_PARENT_ID
    user_id: UserId
    comment: str
    created: int = Field(ge=0)
    deleted: int = Field(default=0, ge=0)
    delete_user_id: Optional[UserId] = None
    modified: int = Field(default=0, ge=0)
    edit_user_id: Optional[UserId] = None

    @property
    def is_root(self) -> bool:
        return self.parent_id == ROOT_PARENT_ID

    @property
    def is_deleted(self) -> bool:
        return self.deleted != 0


class CommentRow(DomainModel):
    """A comment as returned by a tree query, with its anonymous label number."""

    comment: Comment
    row_number: int = Field(ge=1)
