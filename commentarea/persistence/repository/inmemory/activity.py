"""In-memory activity repository for testing."""

from typing import Optional

from commentarea.domain.model.activity import Activity, Question
from commentarea.domain.repository.activity import ActivityRepository
from commentarea.domain.value import ActivityId, QuestionId


class InMemoryActivityRepository(ActivityRepository):
    """In-memory implementation of ActivityRepository for testing."""

    def __init__(self) -> None:
        self._activities: dict[ActivityId, Activity] = {}
        self._questions: dict[QuestionId, Question] = {}

    async def find_by_id(self, activity_id: ActivityId) -> Optional[Activity]:
        return self._activities.get(activity_id)

    async def find_question(self, question_id: QuestionId) -> Optional[Question]:
        return self._questions.get(question_id)

    async def save_activity(self, activity: Activity) -> Activity:
        self._activities[activity.id] = activity
        return activity

    async def save_question(self, question: Question) -> Question:
        self._questions[question.id] = question
        return question
