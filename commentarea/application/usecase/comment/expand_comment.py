"""Expand comment use case."""

from pydantic import BaseModel

from commentarea.application.usecase.base import BaseUseCase
from commentarea.domain.model.comment_view import CommentView
from commentarea.domain.service import CommentAreaService
from commentarea.domain.value import CommentId

from .scope import CommentScopeResolver


class ExpandCommentRequest(BaseModel):
    """Expand comment request."""

    question_id: int
    comment_id: int
    user_id: int


class ExpandCommentUseCase(BaseUseCase):
    """Use case for loading one comment with all of its replies."""

    def __init__(
        self,
        scope_resolver: CommentScopeResolver,
        comment_area_service: CommentAreaService,
    ) -> None:
        self.scope_resolver = scope_resolver
        self.comment_area_service = comment_area_service

    async def execute(self, request: ExpandCommentRequest) -> CommentView:
        """Execute expand comment flow.

        Raises:
            NotFoundError: If the question, activity or comment does not exist
        """
        scope = await self.scope_resolver.resolve(request.question_id, request.user_id)
        node = await self.comment_area_service.fetch_one(
            scope.question,
            scope.activity,
            scope.viewer,
            CommentId(request.comment_id),
        )
        return node.to_view()
