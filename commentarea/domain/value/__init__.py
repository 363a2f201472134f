"""Domain value objects for the comment area."""

from commentarea.domain.value.identifiers import (
    HIDDEN_USER_ID,
    ROOT_PARENT_ID,
    ActivityId,
    CommentId,
    QuestionId,
    UserId,
)
from commentarea.domain.value.query_plan import CommentQueryPlan
from commentarea.domain.value.types import (
    DEFAULT_SORT,
    Capability,
    DenialReason,
    SortDirection,
    SortFeature,
    SortField,
    Viewer,
)

__all__ = [
    # Identifiers
    "ActivityId",
    "CommentId",
    "QuestionId",
    "UserId",
    "ROOT_PARENT_ID",
    "HIDDEN_USER_ID",
    # Types
    "Capability",
    "DenialReason",
    "SortDirection",
    "SortField",
    "SortFeature",
    "DEFAULT_SORT",
    "Viewer",
    # Query
    "CommentQueryPlan",
]
