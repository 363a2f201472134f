"""Get comments use case."""

from typing import Optional

from pydantic import BaseModel, Field

from commentarea.application.usecase.base import BaseUseCase
from commentarea.config import Settings
from commentarea.domain.model.comment_view import CommentView, ViewModel
from commentarea.domain.service import CommentAreaService

from .scope import CommentScopeResolver


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    question_id: int
    user_id: int  # Authenticated user
    limit: Optional[int] = Field(default=None, ge=0)  # None uses the configured default, 0 shows all
    sort: Optional[str] = None  # e.g. "date_desc"


class GetCommentsResponse(ViewModel):
    """Get comments response."""

    question_id: int
    comments: list[CommentView]
    total: int
    sort: str
    sortable_fields: list[str]


class GetCommentsUseCase(BaseUseCase):
    """Use case for the comment tree shown under a question."""

    def __init__(
        self,
        scope_resolver: CommentScopeResolver,
        comment_area_service: CommentAreaService,
        settings: Settings,
    ) -> None:
        """Initialize get comments use case.

        Args:
            scope_resolver: Loads question, activity and viewer
            comment_area_service: Comment area domain service
            settings: Application settings
        """
        self.scope_resolver = scope_resolver
        self.comment_area_service = comment_area_service
        self.settings = settings

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Steps:
        1. Resolve question, activity and viewer
        2. Resolve the effective sort, remembering an explicit valid choice
        3. Fetch the windowed tree and project it for the viewer

        Args:
            request: Get comments request

        Returns:
            Root comments with replies, the question's comment count and the
            sort vocabulary available to the viewer

        Raises:
            NotFoundError: If the question or its activity does not exist
        """
        scope = await self.scope_resolver.resolve(request.question_id, request.user_id)
        service = self.comment_area_service

        sort = await service.resolve_sort(scope.viewer, scope.activity, request.sort)
        limit = (
            request.limit
            if request.limit is not None
            else self.settings.comments.default_number_to_show
        )
        roots = await service.fetch_all(
            scope.question, scope.activity, scope.viewer, limit=limit, sort=sort
        )
        total = await service.count_comments(scope.question)

        return GetCommentsResponse(
            question_id=scope.question.id,
            comments=[node.to_view() for node in roots],
            total=total,
            sort=sort.key,
            sortable_fields=[
                feature.key
                for feature in service.get_sortable_fields(scope.viewer, scope.activity)
            ],
        )
