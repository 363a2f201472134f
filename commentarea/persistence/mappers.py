"""Mappers for converting between database rows and domain models.

Since the domain models are immutable pydantic models, mapping is done by
hand instead of through SQLAlchemy's imperative mapping.
"""

from typing import Any, Dict

from commentarea.domain.model import Activity, Comment, Question, User
from commentarea.domain.value import ActivityId, CommentId, QuestionId, UserId


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    delete_user_id = row.get("delete_user_id")
    edit_user_id = row.get("edit_user_id")
    return Comment(
        id=CommentId(row["id"]),
        question_id=QuestionId(row["question_id"]),
        parent_id=CommentId(row["parent_id"]),
        user_id=UserId(row["user_id"]),
        comment=row["comment"],
        created=row["created"],
        deleted=row.get("deleted") or 0,
        delete_user_id=UserId(delete_user_id) if delete_user_id is not None else None,
        modified=row.get("modified") or 0,
        edit_user_id=UserId(edit_user_id) if edit_user_id is not None else None,
    )


def comment_state_to_dict(comment: Comment) -> Dict[str, Any]:
    """Columns written by a delete or undelete."""
    return {
        "deleted": comment.deleted,
        "delete_user_id": comment.delete_user_id,
        "modified": comment.modified,
        "edit_user_id": comment.edit_user_id,
    }


def row_to_user(row: Dict[str, Any]) -> User:
    return User(
        id=UserId(row["id"]),
        first_name=row.get("first_name") or "",
        last_name=row.get("last_name") or "",
        email=row.get("email"),
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
    }


def row_to_activity(row: Dict[str, Any]) -> Activity:
    return Activity(
        id=ActivityId(row["id"]),
        name=row.get("name") or "",
        anonymous_rank=row["anonymous_rank"],
        force_commenting=row["force_commenting"],
        reporting_emails=row.get("reporting_emails") or "",
    )


def activity_to_dict(activity: Activity) -> Dict[str, Any]:
    return {
        "id": activity.id,
        "name": activity.name,
        "anonymous_rank": activity.anonymous_rank,
        "force_commenting": activity.force_commenting,
        "reporting_emails": activity.reporting_emails,
    }


def row_to_question(row: Dict[str, Any]) -> Question:
    return Question(
        id=QuestionId(row["id"]),
        activity_id=ActivityId(row["activity_id"]),
        name=row.get("name") or "",
    )


def question_to_dict(question: Question) -> Dict[str, Any]:
    return {
        "id": question.id,
        "activity_id": question.activity_id,
        "name": question.name,
    }
