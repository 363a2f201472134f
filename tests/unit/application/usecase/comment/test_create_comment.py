"""Unit tests for CreateCommentUseCase."""

import pytest

from commentarea.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
)
from commentarea.domain.error import ReplyNotAllowedError, ValidationError
from commentarea.domain.repository import CommentRepository
from tests.conftest import ALICE, BOB, QUESTION_ID, make_comment, seed_comment_area
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_create_root_comment(self, unit_env):
        """The author gets the new comment back with delete rights."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        await seed_comment_area(unit_env)
        request = CreateCommentRequest(
            question_id=QUESTION_ID,
            user_id=ALICE,
            message="<p>Is anaphase <b>before</b> telophase?</p>",
        )

        # Act
        view = await use_case.execute(request)

        # Assert
        assert view.is_root is True
        assert view.parent_id == 0
        assert view.is_creator is True
        assert view.can_delete is True
        assert view.can_reply is True
        assert view.short_content == "Is anaphase before telophase?"
        assert view.author_name == "Anonymous Student #1"

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        await seed_comment_area(unit_env, anonymous_rank=False)
        comment_repo.add(make_comment(1))

        view = await use_case.execute(
            CreateCommentRequest(
                question_id=QUESTION_ID, user_id=BOB, reply_to=1, message="Yes"
            )
        )

        assert view.parent_id == 1
        assert view.is_root is False
        assert view.can_reply is False
        assert view.author_name == "Bob Adams"
        assert view.row_number == 2

    @pytest.mark.asyncio
    async def test_empty_message_is_rejected(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        await seed_comment_area(unit_env)

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateCommentRequest(question_id=QUESTION_ID, user_id=ALICE, message="")
            )

    @pytest.mark.asyncio
    async def test_reply_to_reply_is_refused(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        await seed_comment_area(unit_env)
        comment_repo.add(make_comment(1))
        comment_repo.add(make_comment(2, parent_id=1))

        with pytest.raises(ReplyNotAllowedError) as exc_info:
            await use_case.execute(
                CreateCommentRequest(
                    question_id=QUESTION_ID, user_id=BOB, reply_to=2, message="Hm"
                )
            )

        assert "root comments" in exc_info.value.reason
