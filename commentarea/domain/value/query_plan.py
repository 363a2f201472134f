"""Query plan handed from the planner to comment repositories."""

from typing import Optional

from commentarea.domain.value.common import ValueObject
from commentarea.domain.value.identifiers import CommentId, QuestionId
from commentarea.domain.value.types import DEFAULT_SORT, SortFeature


class CommentQueryPlan(ValueObject):
    """What a comment repository must fetch and in which order.

    Window membership is always decided by recency (``created desc, id
    desc``), ``sort`` only orders the roots inside the window. Replies of
    every selected root are fetched oldest first.

    Attributes:
        question_id: Question whose comments are fetched
        limit: Number of latest roots to keep, 0 keeps all
        sort: Presentation order of the selected roots
        root_id: Restrict the window to this single root
    """

    question_id: QuestionId
    limit: int = 0
    sort: SortFeature = DEFAULT_SORT
    root_id: Optional[CommentId] = None

    @property
    def windowed(self) -> bool:
        return self.limit > 0
