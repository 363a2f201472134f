"""Sort preference use case."""

from pydantic import BaseModel

from commentarea.application.usecase.base import BaseUseCase
from commentarea.domain.model.comment_view import ViewModel
from commentarea.domain.service import CommentAreaService

from .scope import CommentScopeResolver


class SetSortPreferenceRequest(BaseModel):
    """Set sort preference request."""

    question_id: int
    user_id: int
    sort: str


class SortPreferenceResponse(ViewModel):
    """Sort in effect after the update.

    An unavailable choice is not stored and ``sort`` falls back to the
    default.
    """

    sort: str
    sortable_fields: list[str]


class SetSortPreferenceUseCase(BaseUseCase):
    """Use case for remembering how a user sorts comments."""

    def __init__(
        self,
        scope_resolver: CommentScopeResolver,
        comment_area_service: CommentAreaService,
    ) -> None:
        self.scope_resolver = scope_resolver
        self.comment_area_service = comment_area_service

    async def execute(self, request: SetSortPreferenceRequest) -> SortPreferenceResponse:
        scope = await self.scope_resolver.resolve(request.question_id, request.user_id)
        service = self.comment_area_service

        sort = await service.set_sort_preference(
            scope.viewer, scope.activity, request.sort
        )
        return SortPreferenceResponse(
            sort=sort.key,
            sortable_fields=[
                feature.key
                for feature in service.get_sortable_fields(scope.viewer, scope.activity)
            ],
        )
