"""Comment area routes."""

from typing import Optional

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Query, status
from pydantic import BaseModel, Field

from commentarea.application.usecase.comment import (
    CheckCommentRequirementUseCase,
    CommentActionRequest,
    CommentActionResponse,
    CommentRequirementRequest,
    CommentRequirementResponse,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentUseCase,
    ExpandCommentRequest,
    ExpandCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    SetSortPreferenceRequest,
    SetSortPreferenceUseCase,
    SortPreferenceResponse,
    UndeleteCommentUseCase,
)
from commentarea.domain.error import DomainError
from commentarea.domain.model.comment_view import CommentView
from commentarea.interface.error import to_http_exception

router = APIRouter(prefix="/questions", tags=["comments"], route_class=DishkaRoute)


def _require_user(user_id: Optional[int]) -> int:
    """Reject requests that do not say who is asking."""
    if user_id is None:
        logfire.warn("Comment area request without user id")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user_id


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    reply_to: int = Field(default=0, alias="replyTo")  # 0 posts a new root comment
    message: str


class SortPreferenceAPIRequest(BaseModel):
    """API request for changing the sort preference."""

    sort: str


@router.get(
    "/{question_id}/comments",
    response_model=GetCommentsResponse,
    response_model_by_alias=True,
)
async def get_comments(
    question_id: int,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    limit: Optional[int] = Query(default=None, ge=0),
    sort: Optional[str] = Query(default=None),
    user_id: Optional[int] = Header(default=None, alias="X-User-Id"),
) -> GetCommentsResponse:
    """Get the comment tree of a question.

    Args:
        question_id: Question id
        get_comments_use_case: Get comments use case from DI
        limit: Number of latest root comments, 0 for all, default from settings
        sort: Sort key such as ``date_desc``; unavailable keys fall back
        user_id: Requesting user from the ``X-User-Id`` header

    Returns:
        Root comments with their replies and the sort in effect
    """
    request = GetCommentsRequest(
        question_id=question_id,
        user_id=_require_user(user_id),
        limit=limit,
        sort=sort,
    )
    try:
        return await get_comments_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e, "get comments")


@router.get(
    "/{question_id}/comments/requirement",
    response_model=CommentRequirementResponse,
    response_model_by_alias=True,
)
async def get_comment_requirement(
    question_id: int,
    use_case: FromDishka[CheckCommentRequirementUseCase],
    user_id: Optional[int] = Header(default=None, alias="X-User-Id"),
) -> CommentRequirementResponse:
    """Whether the user must comment on the question before moving on."""
    request = CommentRequirementRequest(
        question_id=question_id, user_id=_require_user(user_id)
    )
    try:
        return await use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e, "check comment requirement")


@router.put(
    "/{question_id}/comments/sort",
    response_model=SortPreferenceResponse,
    response_model_by_alias=True,
)
async def set_sort_preference(
    question_id: int,
    body: SortPreferenceAPIRequest,
    use_case: FromDishka[SetSortPreferenceUseCase],
    user_id: Optional[int] = Header(default=None, alias="X-User-Id"),
) -> SortPreferenceResponse:
    """Remember how the user wants comments sorted."""
    request = SetSortPreferenceRequest(
        question_id=question_id, user_id=_require_user(user_id), sort=body.sort
    )
    try:
        return await use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e, "set sort preference")


@router.get(
    "/{question_id}/comments/{comment_id}",
    response_model=CommentView,
    response_model_by_alias=True,
)
async def expand_comment(
    question_id: int,
    comment_id: int,
    use_case: FromDishka[ExpandCommentUseCase],
    user_id: Optional[int] = Header(default=None, alias="X-User-Id"),
) -> CommentView:
    """Get one comment with all of its replies."""
    request = ExpandCommentRequest(
        question_id=question_id,
        comment_id=comment_id,
        user_id=_require_user(user_id),
    )
    try:
        return await use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e, "expand comment")


@router.post(
    "/{question_id}/comments",
    response_model=CommentView,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    question_id: int,
    body: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    user_id: Optional[int] = Header(default=None, alias="X-User-Id"),
) -> CommentView:
    """Post a root comment or reply to a root comment.

    Args:
        question_id: Question id
        body: ``replyTo`` (0 for a root comment) and ``message``
        create_comment_use_case: Create comment use case from DI
        user_id: Author from the ``X-User-Id`` header

    Returns:
        The new comment as the author sees it

    Raises:
        HTTPException: 400 on invalid input or a reply to a reply, 404 when
            the question or parent does not exist
    """
    request = CreateCommentRequest(
        question_id=question_id,
        user_id=_require_user(user_id),
        reply_to=body.reply_to,
        message=body.message,
    )
    try:
        return await create_comment_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e, "create comment")


@router.post(
    "/{question_id}/comments/{comment_id}/delete",
    response_model=CommentActionResponse,
    response_model_by_alias=True,
)
async def delete_comment(
    question_id: int,
    comment_id: int,
    use_case: FromDishka[DeleteCommentUseCase],
    user_id: Optional[int] = Header(default=None, alias="X-User-Id"),
) -> CommentActionResponse:
    """Soft delete a comment.

    A refused delete answers 200 with ``success`` false and the reason in
    ``message``.
    """
    request = CommentActionRequest(
        question_id=question_id,
        comment_id=comment_id,
        user_id=_require_user(user_id),
    )
    try:
        return await use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e, "delete comment")


@router.post(
    "/{question_id}/comments/{comment_id}/undelete",
    response_model=CommentActionResponse,
    response_model_by_alias=True,
)
async def undelete_comment(
    question_id: int,
    comment_id: int,
    use_case: FromDishka[UndeleteCommentUseCase],
    user_id: Optional[int] = Header(default=None, alias="X-User-Id"),
) -> CommentActionResponse:
    """Restore a soft deleted comment."""
    request = CommentActionRequest(
        question_id=question_id,
        comment_id=comment_id,
        user_id=_require_user(user_id),
    )
    try:
        return await use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e, "undelete comment")
