"""Create comment use case."""

from pydantic import BaseModel

from commentarea.application.usecase.base import BaseUseCase
from commentarea.domain.model.comment_view import CommentView
from commentarea.domain.service import CommentAreaService
from commentarea.domain.value import ROOT_PARENT_ID

from .scope import CommentScopeResolver


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    question_id: int
    user_id: int  # Author, the authenticated user
    reply_to: int = ROOT_PARENT_ID  # Root comment id for replies, 0 for a new root
    message: str


class CreateCommentUseCase(BaseUseCase):
    """Use case for posting a comment or replying to a root comment."""

    def __init__(
        self,
        scope_resolver: CommentScopeResolver,
        comment_area_service: CommentAreaService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            scope_resolver: Loads question, activity and viewer
            comment_area_service: Comment area domain service
        """
        self.scope_resolver = scope_resolver
        self.comment_area_service = comment_area_service

    async def execute(self, request: CreateCommentRequest) -> CommentView:
        """Execute create comment flow.

        Steps:
        1. Resolve question, activity and viewer
        2. Create the comment (the service validates body and parent)
        3. Load the new comment as the author sees it

        Args:
            request: Create comment request

        Returns:
            View of the new comment

        Raises:
            ValidationError: If the body or parent reference is invalid
            NotFoundError: If the question or parent comment does not exist
            ReplyNotAllowedError: If the parent cannot receive replies
        """
        scope = await self.scope_resolver.resolve(request.question_id, request.user_id)
        service = self.comment_area_service

        comment_id = await service.create_comment(
            scope.question,
            scope.activity,
            scope.viewer,
            reply_to=request.reply_to,
            body=request.message,
        )
        node = await service.fetch_one(
            scope.question, scope.activity, scope.viewer, comment_id
        )
        return node.to_view()
