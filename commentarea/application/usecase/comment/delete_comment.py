"""Delete and undelete comment use cases."""

from typing import Optional

from pydantic import BaseModel

from commentarea.application.usecase.base import BaseUseCase
from commentarea.domain.model.comment_view import CommentView, ViewModel
from commentarea.domain.service import CommentActionResult, CommentAreaService
from commentarea.domain.value import CommentId

from .scope import CommentScopeResolver


class CommentActionRequest(BaseModel):
    """Delete or undelete request."""

    question_id: int
    comment_id: int
    user_id: int


class CommentActionResponse(ViewModel):
    """Outcome of a delete or undelete.

    ``message`` carries the refusal reason when ``success`` is False.
    """

    success: bool
    message: str = ""
    comment: Optional[CommentView] = None

    @classmethod
    def from_result(cls, result: CommentActionResult) -> "CommentActionResponse":
        return cls(
            success=result.success,
            message=result.reason or "",
            comment=result.node.to_view() if result.node else None,
        )


class DeleteCommentUseCase(BaseUseCase):
    """Use case for soft deleting a comment."""

    def __init__(
        self,
        scope_resolver: CommentScopeResolver,
        comment_area_service: CommentAreaService,
    ) -> None:
        self.scope_resolver = scope_resolver
        self.comment_area_service = comment_area_service

    async def execute(self, request: CommentActionRequest) -> CommentActionResponse:
        """Execute delete comment flow.

        A refused delete is reported in the response, not raised.

        Raises:
            NotFoundError: If the question, activity or comment does not exist
        """
        scope = await self.scope_resolver.resolve(request.question_id, request.user_id)
        result = await self.comment_area_service.delete_comment(
            scope.question,
            scope.activity,
            scope.viewer,
            CommentId(request.comment_id),
        )
        return CommentActionResponse.from_result(result)


class UndeleteCommentUseCase(BaseUseCase):
    """Use case for restoring a soft deleted comment."""

    def __init__(
        self,
        scope_resolver: CommentScopeResolver,
        comment_area_service: CommentAreaService,
    ) -> None:
        self.scope_resolver = scope_resolver
        self.comment_area_service = comment_area_service

    async def execute(self, request: CommentActionRequest) -> CommentActionResponse:
        """Execute undelete comment flow.

        Raises:
            NotFoundError: If the question, activity or comment does not exist
        """
        scope = await self.scope_resolver.resolve(request.question_id, request.user_id)
        result = await self.comment_area_service.undelete_comment(
            scope.question,
            scope.activity,
            scope.viewer,
            CommentId(request.comment_id),
        )
        return CommentActionResponse.from_result(result)
