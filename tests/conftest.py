"""Test configuration and shared helpers."""

import time
from typing import Optional

from commentarea.config import CommentAreaSettings
from commentarea.domain.model import Activity, Comment, Question, User
from commentarea.domain.model.comment_node import UserDirectory, ViewContext
from commentarea.domain.repository import (
    ActivityRepository,
    CapabilityRepository,
    UserRepository,
)
from commentarea.domain.value import (
    ROOT_PARENT_ID,
    ActivityId,
    Capability,
    CommentId,
    QuestionId,
    UserId,
    Viewer,
)

ACTIVITY_ID = ActivityId(1)
QUESTION_ID = QuestionId(10)
OTHER_QUESTION_ID = QuestionId(11)

ALICE = UserId(100)
BOB = UserId(200)
MODERATOR = UserId(300)
DAVE = UserId(400)

USERS = [
    User(id=ALICE, first_name="Alice", last_name="Walker", email="alice@example.org"),
    User(id=BOB, first_name="Bob", last_name="Adams", email="bob@example.org"),
    User(id=MODERATOR, first_name="Carol", last_name="Tutor"),
    User(id=DAVE, first_name="Dave", last_name="Brown"),
]


def now() -> int:
    return int(time.time())


def make_comment(
    comment_id: int,
    *,
    parent_id: int = ROOT_PARENT_ID,
    user_id: UserId = ALICE,
    created: Optional[int] = None,
    deleted: int = 0,
    delete_user_id: Optional[UserId] = None,
    text: Optional[str] = None,
    question_id: QuestionId = QUESTION_ID,
) -> Comment:
    """Build a comment row, created just now unless told otherwise."""
    return Comment(
        id=CommentId(comment_id),
        question_id=question_id,
        parent_id=CommentId(parent_id),
        user_id=user_id,
        comment=text if text is not None else f"<p>Comment {comment_id}</p>",
        created=created if created is not None else now(),
        deleted=deleted,
        delete_user_id=delete_user_id,
    )


def make_viewer(
    user_id: UserId, moderator: bool = False, unhide: bool = False
) -> Viewer:
    return Viewer(id=user_id, is_moderator=moderator, can_unhide_anonymous=unhide)


def make_context(
    viewer: Viewer,
    activity: Optional[Activity] = None,
    current_time: Optional[int] = None,
) -> ViewContext:
    """View context with every test user known."""
    users = UserDirectory()
    users.add_all(USERS)
    return ViewContext(
        viewer=viewer,
        activity=activity or Activity(id=ACTIVITY_ID),
        users=users,
        now=current_time if current_time is not None else now(),
        settings=CommentAreaSettings(),
        site_url="https://moodle.example.org",
    )


async def seed_comment_area(
    env,
    *,
    anonymous_rank: bool = True,
    force_commenting: bool = False,
    reporting_emails: str = "",
) -> tuple[Question, Activity]:
    """Store an activity with two questions, the test users and a moderator grant."""
    activities = await env.get(ActivityRepository)
    users = await env.get(UserRepository)
    capabilities = await env.get(CapabilityRepository)

    activity = await activities.save_activity(
        Activity(
            id=ACTIVITY_ID,
            name="Biology quiz",
            anonymous_rank=anonymous_rank,
            force_commenting=force_commenting,
            reporting_emails=reporting_emails,
        )
    )
    question = await activities.save_question(
        Question(id=QUESTION_ID, activity_id=ACTIVITY_ID, name="Mitosis")
    )
    await activities.save_question(
        Question(id=OTHER_QUESTION_ID, activity_id=ACTIVITY_ID, name="Meiosis")
    )
    for user in USERS:
        await users.save(user)
    await capabilities.grant(MODERATOR, ACTIVITY_ID, Capability.MANAGE)
    return question, activity
