"""Application layer DI providers."""

from dishka import Scope, provide

from commentarea.application.usecase.comment import (
    CheckCommentRequirementUseCase,
    CommentScopeResolver,
    CreateCommentUseCase,
    DeleteCommentUseCase,
    ExpandCommentUseCase,
    GetCommentsUseCase,
    SetSortPreferenceUseCase,
    UndeleteCommentUseCase,
)
from commentarea.config import Settings
from commentarea.domain.repository import ActivityRepository
from commentarea.domain.service import CommentAreaService, ViewerService
from commentarea.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_comment_scope_resolver(
        self,
        activity_repository: ActivityRepository,
        viewer_service: ViewerService,
    ) -> CommentScopeResolver:
        """Provide question/activity/viewer resolver."""
        return CommentScopeResolver(
            activity_repository=activity_repository,
            viewer_service=viewer_service,
        )

    # Read use cases
    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self,
        scope_resolver: CommentScopeResolver,
        comment_area_service: CommentAreaService,
        settings: Settings,
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            scope_resolver=scope_resolver,
            comment_area_service=comment_area_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_expand_comment_use_case(
        self,
        scope_resolver: CommentScopeResolver,
        comment_area_service: CommentAreaService,
    ) -> ExpandCommentUseCase:
        """Provide expand comment use case."""
        return ExpandCommentUseCase(
            scope_resolver=scope_resolver, comment_area_service=comment_area_service
        )

    @provide(scope=Scope.REQUEST)
    def get_check_comment_requirement_use_case(
        self,
        scope_resolver: CommentScopeResolver,
        comment_area_service: CommentAreaService,
    ) -> CheckCommentRequirementUseCase:
        """Provide force-commenting check use case."""
        return CheckCommentRequirementUseCase(
            scope_resolver=scope_resolver, comment_area_service=comment_area_service
        )

    # Write use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        scope_resolver: CommentScopeResolver,
        comment_area_service: CommentAreaService,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            scope_resolver=scope_resolver, comment_area_service=comment_area_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self,
        scope_resolver: CommentScopeResolver,
        comment_area_service: CommentAreaService,
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            scope_resolver=scope_resolver, comment_area_service=comment_area_service
        )

    @provide(scope=Scope.REQUEST)
    def get_undelete_comment_use_case(
        self,
        scope_resolver: CommentScopeResolver,
        comment_area_service: CommentAreaService,
    ) -> UndeleteCommentUseCase:
        """Provide undelete comment use case."""
        return UndeleteCommentUseCase(
            scope_resolver=scope_resolver, comment_area_service=comment_area_service
        )

    @provide(scope=Scope.REQUEST)
    def get_set_sort_preference_use_case(
        self,
        scope_resolver: CommentScopeResolver,
        comment_area_service: CommentAreaService,
    ) -> SetSortPreferenceUseCase:
        """Provide sort preference use case."""
        return SetSortPreferenceUseCase(
            scope_resolver=scope_resolver, comment_area_service=comment_area_service
        )
