"""Redacted, permission-annotated projection of a comment for clients."""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ViewModel(BaseModel):
    """Base for client-facing projections (camelCase on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class DeleteUserView(ViewModel):
    """Who deleted a comment. All-blank unless the viewer may see it."""

    id: int = 0
    first_name: str = ""
    last_name: str = ""
    profile_url: str = ""


class CommentView(ViewModel):
    """A comment as one viewer is allowed to see it.

    Built per request by ``CommentNode.to_view``; never stored.
    """

    id: int
    question_id: int
    parent_id: int
    content: str
    short_content: str
    number_of_replies: int
    is_root: bool
    is_deleted: bool
    deleted_at: int
    author_name: str
    author_id: int
    author_profile_url: str
    posted_at: int
    last_edited_at: int
    delete_user: DeleteUserView
    can_edit: bool
    can_delete: bool
    can_undelete: bool
    can_view_deleted: bool
    can_reply: bool
    can_report: bool
    report_url: Optional[str] = None
    is_creator: bool
    row_number: int
    replies: list["CommentView"] = []
