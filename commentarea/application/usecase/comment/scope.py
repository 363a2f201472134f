"""Resolution of the question, activity and viewer a request acts on."""

from dataclasses import dataclass

from commentarea.domain.error import NotFoundError
from commentarea.domain.model import Activity, Question
from commentarea.domain.repository import ActivityRepository
from commentarea.domain.service import ViewerService
from commentarea.domain.value import QuestionId, UserId, Viewer


@dataclass(frozen=True)
class CommentScope:
    question: Question
    activity: Activity
    viewer: Viewer


class CommentScopeResolver:
    """Loads the comment area a request targets and who is asking."""

    def __init__(
        self,
        activity_repository: ActivityRepository,
        viewer_service: ViewerService,
    ) -> None:
        self.activity_repository = activity_repository
        self.viewer_service = viewer_service

    async def resolve(self, question_id: int, user_id: int) -> CommentScope:
        """Load question, activity and viewer.

        Raises:
            NotFoundError: If the question or its activity does not exist
        """
        question = await self.activity_repository.find_question(QuestionId(question_id))
        if question is None:
            raise NotFoundError("Question", str(question_id))

        activity = await self.activity_repository.find_by_id(question.activity_id)
        if activity is None:
            raise NotFoundError("Activity", str(question.activity_id))

        viewer = await self.viewer_service.resolve(UserId(user_id), activity)
        return CommentScope(question=question, activity=activity, viewer=viewer)
