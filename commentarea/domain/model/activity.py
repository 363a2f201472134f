"""StudentQuiz activity and question entities."""

from commentarea.domain.model.common import DomainModel
from commentarea.domain.value import ActivityId, QuestionId


class Activity(DomainModel):
    """A StudentQuiz activity and the settings the comment area reads.

    Attributes:
        anonymous_rank: Hide author identity from students
        force_commenting: Students must comment before moving on
        reporting_emails: ';' separated addresses that receive abuse reports
    """

    id: ActivityId
    name: str = ""
    anonymous_rank: bool = True
    force_commenting: bool = False
    reporting_emails: str = ""

    @property
    def reporting_email_list(self) -> list[str]:
        return [e.strip() for e in self.reporting_emails.split(";") if e.strip()]

    @property
    def reporting_enabled(self) -> bool:
        return bool(self.reporting_email_list)


class Question(DomainModel):
    """A quiz question that owns a comment area."""

    id: QuestionId
    activity_id: ActivityId
    name: str = ""
