"""Comment requirement use case."""

from pydantic import BaseModel

from commentarea.application.usecase.base import BaseUseCase
from commentarea.domain.model.comment_view import ViewModel
from commentarea.domain.service import CommentAreaService

from .scope import CommentScopeResolver


class CommentRequirementRequest(BaseModel):
    question_id: int
    user_id: int


class CommentRequirementResponse(ViewModel):
    """Whether the viewer must still comment before moving on.

    ``exists`` is the inverse of ``required``: True when the activity does
    not force commenting or the viewer already has a live comment.
    """

    required: bool
    exists: bool


class CheckCommentRequirementUseCase(BaseUseCase):
    """Use case for the force-commenting check."""

    def __init__(
        self,
        scope_resolver: CommentScopeResolver,
        comment_area_service: CommentAreaService,
    ) -> None:
        self.scope_resolver = scope_resolver
        self.comment_area_service = comment_area_service

    async def execute(
        self, request: CommentRequirementRequest
    ) -> CommentRequirementResponse:
        scope = await self.scope_resolver.resolve(request.question_id, request.user_id)
        required = await self.comment_area_service.has_open_comment_requirement(
            scope.question, scope.activity, scope.viewer
        )
        return CommentRequirementResponse(required=required, exists=not required)
