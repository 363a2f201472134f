"""Domain layer DI providers."""

from dishka import Scope, provide

from commentarea.config import CommentAreaSettings, Settings
from commentarea.domain.repository import (
    CapabilityRepository,
    CommentRepository,
    PreferenceRepository,
    UserRepository,
)
from commentarea.domain.service import CommentAreaService, QueryPlanner, ViewerService
from commentarea.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_query_planner(self, settings: CommentAreaSettings) -> QueryPlanner:
        """Provide comment query planner."""
        return QueryPlanner(settings=settings)

    @provide
    def get_viewer_service(
        self, capability_repository: CapabilityRepository
    ) -> ViewerService:
        """Provide permission oracle."""
        return ViewerService(capability_repository=capability_repository)

    @provide
    def get_comment_area_service(
        self,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
        preference_repository: PreferenceRepository,
        query_planner: QueryPlanner,
        settings: Settings,
    ) -> CommentAreaService:
        """Provide comment area domain service."""
        return CommentAreaService(
            comment_repository=comment_repository,
            user_repository=user_repository,
            preference_repository=preference_repository,
            query_planner=query_planner,
            settings=settings,
        )
