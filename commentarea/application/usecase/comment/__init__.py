"""Comment use cases."""

from .comment_requirement import (
    CheckCommentRequirementUseCase,
    CommentRequirementRequest,
    CommentRequirementResponse,
)
from .create_comment import CreateCommentRequest, CreateCommentUseCase
from .delete_comment import (
    CommentActionRequest,
    CommentActionResponse,
    DeleteCommentUseCase,
    UndeleteCommentUseCase,
)
from .expand_comment import ExpandCommentRequest, ExpandCommentUseCase
from .get_comments import GetCommentsRequest, GetCommentsResponse, GetCommentsUseCase
from .scope import CommentScope, CommentScopeResolver
from .sort_preference import (
    SetSortPreferenceRequest,
    SetSortPreferenceUseCase,
    SortPreferenceResponse,
)

__all__ = [
    "CheckCommentRequirementUseCase",
    "CommentActionRequest",
    "CommentActionResponse",
    "CommentRequirementRequest",
    "CommentRequirementResponse",
    "CommentScope",
    "CommentScopeResolver",
    "CreateCommentRequest",
    "CreateCommentUseCase",
    "DeleteCommentUseCase",
    "ExpandCommentRequest",
    "ExpandCommentUseCase",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
    "SetSortPreferenceRequest",
    "SetSortPreferenceUseCase",
    "SortPreferenceResponse",
    "UndeleteCommentUseCase",
]
