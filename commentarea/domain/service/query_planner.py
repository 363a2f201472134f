"""Sort resolution and query planning for comment trees."""

from typing import Optional

import logfire

from commentarea.config import CommentAreaSettings
from commentarea.domain.error import ValidationError
from commentarea.domain.model.activity import Activity
from commentarea.domain.value import (
    DEFAULT_SORT,
    CommentId,
    CommentQueryPlan,
    QuestionId,
    SortDirection,
    SortFeature,
    SortField,
    Viewer,
)

from .base import Service


class QueryPlanner(Service):
    """Decides the effective sort for a viewer and builds query plans."""

    def __init__(self, settings: CommentAreaSettings) -> None:
        self.settings = settings

    def is_anonymized(self, viewer: Viewer, activity: Activity) -> bool:
        """Whether author identity is hidden from ``viewer`` in ``activity``."""
        if viewer.is_moderator or viewer.can_unhide_anonymous:
            return False
        return activity.anonymous_rank

    def sortable_fields(self, viewer: Viewer, activity: Activity) -> list[SortFeature]:
        """Every sort feature ``viewer`` may choose, date sorts first."""
        fields = [SortField.DATE]
        if not self.is_anonymized(viewer, activity):
            fields += [SortField.AUTHOR_FIRSTNAME, SortField.AUTHOR_LASTNAME]
        return [
            SortFeature(field=field, direction=direction)
            for field in fields
            for direction in (SortDirection.ASC, SortDirection.DESC)
        ]

    def is_allowed(
        self, sort: Optional[SortFeature], viewer: Viewer, activity: Activity
    ) -> bool:
        if sort is None:
            return False
        if sort.field.reveals_author:
            return not self.is_anonymized(viewer, activity)
        return True

    def resolve_sort(
        self,
        requested: Optional[str],
        stored: Optional[str],
        viewer: Viewer,
        activity: Activity,
    ) -> tuple[SortFeature, bool]:
        """Pick the sort feature that applies to this request.

        A valid explicit request wins over a valid stored preference, which
        wins over ``date_asc``. Unknown keys and author sorts under
        anonymisation are downgraded silently.

        Args:
            requested: Sort key sent with the request, if any
            stored: Sort key from the viewer's preferences, if any
            viewer: Requesting user
            activity: Activity the comments belong to

        Returns:
            The effective feature and whether it came from a valid request
            (and so should be remembered)
        """
        explicit = SortFeature.parse(requested)
        if self.is_allowed(explicit, viewer, activity):
            return explicit, True

        if requested:
            logfire.warn(
                "Requested sort not available, falling back",
                requested=requested,
                viewer_id=viewer.id,
                activity_id=activity.id,
            )

        preferred = SortFeature.parse(stored)
        if self.is_allowed(preferred, viewer, activity):
            return preferred, False
        return DEFAULT_SORT, False

    def plan(
        self,
        question_id: QuestionId,
        limit: int,
        sort: SortFeature = DEFAULT_SORT,
        root_id: Optional[CommentId] = None,
    ) -> CommentQueryPlan:
        """Build the plan for one tree fetch.

        Raises:
            ValidationError: If ``limit`` is negative
        """
        if limit < 0:
            raise ValidationError({"limit": "must be zero or a positive number"})
        return CommentQueryPlan(
            question_id=question_id,
            limit=limit,
            sort=sort,
            root_id=root_id,
        )
