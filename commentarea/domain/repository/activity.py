"""Activity and question repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from commentarea.domain.model.activity import Activity, Question
from commentarea.domain.value import ActivityId, QuestionId


class ActivityRepository(ABC):
    """Repository for activities and the questions they own."""

    @abstractmethod
    async def find_by_id(self, activity_id: ActivityId) -> Optional[Activity]:
        """Find an activity by ID."""
        pass

    @abstractmethod
    async def find_question(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        pass

    @abstractmethod
    async def save_activity(self, activity: Activity) -> Activity:
        """Save an activity (create or update)."""
        pass

    @abstractmethod
    async def save_question(self, question: Question) -> Question:
        """Save a question (create or update)."""
        pass
