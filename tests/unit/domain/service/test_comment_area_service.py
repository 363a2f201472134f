"""Unit tests for CommentAreaService."""

import pytest

from commentarea.domain.error import (
    NotFoundError,
    ReplyNotAllowedError,
    ValidationError,
)
from commentarea.domain.repository import CommentRepository, PreferenceRepository
from commentarea.domain.service import CommentAreaService, ViewerService
from commentarea.domain.value import DEFAULT_SORT, CommentId, SortFeature
from tests.conftest import (
    ALICE,
    BOB,
    DAVE,
    MODERATOR,
    OTHER_QUESTION_ID,
    make_comment,
    make_viewer,
    now,
    seed_comment_area,
)
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

SORT_KEYS = [
    "date_asc",
    "date_desc",
    "author_firstname_asc",
    "author_firstname_desc",
    "author_lastname_asc",
    "author_lastname_desc",
]


class TestThreadScenarios:
    """End to end thread behaviour through the service."""

    @pytest.mark.asyncio
    async def test_replies_attach_to_root_in_creation_order(self, unit_env):
        """A root with two replies comes back as one tree, oldest reply first."""
        # Arrange
        service = await unit_env.get(CommentAreaService)
        question, activity = await seed_comment_area(unit_env)
        alice = make_viewer(ALICE)

        root_id = await service.create_comment(
            question, activity, alice, reply_to=0, body="<p>Why?</p>"
        )
        first_id = await service.create_comment(
            question, activity, make_viewer(BOB), reply_to=root_id, body="Because"
        )
        second_id = await service.create_comment(
            question, activity, make_viewer(DAVE), reply_to=root_id, body="Indeed"
        )

        # Act
        roots = await service.fetch_all(question, activity, alice, limit=0)

        # Assert
        assert [root.id for root in roots] == [root_id]
        assert [reply.id for reply in roots[0].replies] == [first_id, second_id]
        assert roots[0].to_view().number_of_replies == 2

    @pytest.mark.asyncio
    async def test_deleted_reply_stays_in_tree_but_not_in_count(self, unit_env):
        """Deleting a reply keeps it in the list, flagged and redacted."""
        # Arrange
        service = await unit_env.get(CommentAreaService)
        question, activity = await seed_comment_area(unit_env)
        root_id = await service.create_comment(
            question, activity, make_viewer(ALICE), reply_to=0, body="Root"
        )
        first_id = await service.create_comment(
            question, activity, make_viewer(BOB), reply_to=root_id, body="First"
        )
        second_id = await service.create_comment(
            question, activity, make_viewer(DAVE), reply_to=root_id, body="Second"
        )

        # Act
        result = await service.delete_comment(
            question, activity, make_viewer(BOB), first_id
        )
        roots = await service.fetch_all(question, activity, make_viewer(DAVE))

        # Assert
        assert result.success is True
        view = roots[0].to_view()
        assert view.number_of_replies == 1
        assert [reply.id for reply in view.replies] == [first_id, second_id]
        assert view.replies[0].is_deleted is True
        assert view.replies[0].content == ""
        assert view.replies[1].content == "Second"

    @pytest.mark.asyncio
    async def test_deleting_someone_elses_comment_is_refused(self, unit_env):
        """A student cannot delete another student's comment."""
        # Arrange
        service = await unit_env.get(CommentAreaService)
        comment_repo = await unit_env.get(CommentRepository)
        question, activity = await seed_comment_area(unit_env)
        comment_id = await service.create_comment(
            question, activity, make_viewer(ALICE), reply_to=0, body="Mine"
        )

        # Act
        result = await service.delete_comment(
            question, activity, make_viewer(BOB), comment_id
        )

        # Assert
        assert result.success is False
        assert result.reason == "not the creator"
        assert result.node is None
        stored = await comment_repo.find_by_id(comment_id)
        assert stored.deleted == 0


class TestFetchAll:
    """Tests for windowing and ordering."""

    async def _seed_roots(self, unit_env):
        question, activity = await seed_comment_area(unit_env, anonymous_rank=False)
        comment_repo = await unit_env.get(CommentRepository)
        t = now()
        authors = [ALICE, BOB, DAVE, MODERATOR]
        for offset, comment_id in zip((50, 40, 30, 20), (1, 2, 3, 4)):
            comment_repo.add(
                make_comment(
                    comment_id,
                    user_id=authors[comment_id - 1],
                    created=t - offset,
                )
            )
        return question, activity

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sort_key", SORT_KEYS)
    async def test_window_keeps_latest_roots_under_every_sort(
        self, unit_env, sort_key
    ):
        """The window is chosen by recency; the sort only orders it."""
        # Arrange
        service = await unit_env.get(CommentAreaService)
        question, activity = await self._seed_roots(unit_env)

        # Act
        roots = await service.fetch_all(
            question,
            activity,
            make_viewer(BOB),
            limit=2,
            sort=SortFeature.parse(sort_key),
        )

        # Assert
        assert {root.id for root in roots} == {3, 4}

    @pytest.mark.asyncio
    async def test_date_sorts(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        question, activity = await self._seed_roots(unit_env)
        viewer = make_viewer(BOB)

        ascending = await service.fetch_all(question, activity, viewer)
        descending = await service.fetch_all(
            question, activity, viewer, sort=SortFeature.parse("date_desc")
        )

        assert [r.id for r in ascending] == [1, 2, 3, 4]
        assert [r.id for r in descending] == [4, 3, 2, 1]

    @pytest.mark.asyncio
    async def test_author_sorts(self, unit_env):
        # Alice Walker, Bob Adams, Dave Brown, Carol Tutor
        service = await unit_env.get(CommentAreaService)
        question, activity = await self._seed_roots(unit_env)
        viewer = make_viewer(BOB)

        by_last = await service.fetch_all(
            question, activity, viewer, sort=SortFeature.parse("author_lastname_asc")
        )
        by_first = await service.fetch_all(
            question, activity, viewer, sort=SortFeature.parse("author_firstname_desc")
        )

        assert [r.id for r in by_last] == [2, 3, 4, 1]
        assert [r.id for r in by_first] == [3, 4, 2, 1]

    @pytest.mark.asyncio
    async def test_row_numbers_are_chronological_roots_then_replies(self, unit_env):
        """Anonymous labels number roots oldest first, replies after them."""
        # Arrange
        service = await unit_env.get(CommentAreaService)
        question, activity = await self._seed_roots(unit_env)
        comment_repo = await unit_env.get(CommentRepository)
        t = now()
        comment_repo.add(make_comment(5, parent_id=4, user_id=BOB, created=t - 5))
        comment_repo.add(make_comment(6, parent_id=3, user_id=DAVE, created=t - 10))

        # Act
        roots = await service.fetch_all(
            question,
            activity,
            make_viewer(BOB),
            limit=2,
            sort=SortFeature.parse("date_desc"),
        )

        # Assert
        assert [(r.id, r.row_number) for r in roots] == [(4, 2), (3, 1)]
        assert roots[0].replies[0].row_number == 4
        assert roots[1].replies[0].row_number == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, 1])
    @pytest.mark.parametrize("sort_key", SORT_KEYS)
    async def test_replies_stay_oldest_first_under_every_sort(
        self, unit_env, sort_key, limit
    ):
        """Reply order is created asc, id asc whatever the root sort and window."""
        # Arrange
        service = await unit_env.get(CommentAreaService)
        comment_repo = await unit_env.get(CommentRepository)
        question, activity = await seed_comment_area(unit_env, anonymous_rank=False)
        t = now()
        comment_repo.add(make_comment(11, user_id=DAVE, created=t - 200))
        comment_repo.add(make_comment(10, user_id=MODERATOR, created=t - 100))
        # Ids out of creation order, with a tie on created
        comment_repo.add(make_comment(7, parent_id=10, user_id=DAVE, created=t - 80))
        comment_repo.add(make_comment(9, parent_id=10, user_id=ALICE, created=t - 90))
        comment_repo.add(make_comment(3, parent_id=10, user_id=BOB, created=t - 80))

        # Act
        roots = await service.fetch_all(
            question,
            activity,
            make_viewer(BOB),
            limit=limit,
            sort=SortFeature.parse(sort_key),
        )

        # Assert
        root = next(r for r in roots if r.id == 10)
        assert [reply.id for reply in root.replies] == [9, 3, 7]

    @pytest.mark.asyncio
    async def test_comments_of_other_questions_are_ignored(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        comment_repo = await unit_env.get(CommentRepository)
        question, activity = await seed_comment_area(unit_env)
        comment_repo.add(make_comment(1))
        comment_repo.add(make_comment(2, question_id=OTHER_QUESTION_ID))

        roots = await service.fetch_all(question, activity, make_viewer(BOB))

        assert [r.id for r in roots] == [1]
        assert await service.count_comments(question) == 1

    @pytest.mark.asyncio
    async def test_negative_limit_is_rejected(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        question, activity = await seed_comment_area(unit_env)

        with pytest.raises(ValidationError):
            await service.fetch_all(question, activity, make_viewer(BOB), limit=-1)


class TestFetchOne:
    """Tests for fetch_one."""

    @pytest.mark.asyncio
    async def test_reply_keeps_parent_row(self, unit_env):
        # Arrange
        service = await unit_env.get(CommentAreaService)
        comment_repo = await unit_env.get(CommentRepository)
        question, activity = await seed_comment_area(unit_env)
        t = now()
        comment_repo.add(make_comment(1, created=t - 30))
        comment_repo.add(make_comment(2, created=t - 20))
        comment_repo.add(make_comment(3, parent_id=2, user_id=BOB, created=t - 10))

        # Act
        node = await service.fetch_one(
            question, activity, make_viewer(BOB), CommentId(3)
        )

        # Assert
        assert node.id == 3
        assert node.parent.id == 2
        assert node.row_number == 2

    @pytest.mark.asyncio
    async def test_root_comes_with_all_replies(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        comment_repo = await unit_env.get(CommentRepository)
        question, activity = await seed_comment_area(unit_env)
        comment_repo.add(make_comment(1))
        for reply_id in range(2, 9):
            comment_repo.add(make_comment(reply_id, parent_id=1))

        node = await service.fetch_one(
            question, activity, make_viewer(BOB), CommentId(1)
        )

        assert len(node.replies) == 7
        assert node.row_number == 1

    @pytest.mark.asyncio
    async def test_single_root_fetch_restarts_numbering(self, unit_env):
        """Anonymous labels number within the fetched root, not the full list."""
        # Arrange
        service = await unit_env.get(CommentAreaService)
        comment_repo = await unit_env.get(CommentRepository)
        question, activity = await seed_comment_area(unit_env)
        t = now()
        comment_repo.add(make_comment(1, created=t - 30))
        comment_repo.add(make_comment(2, created=t - 20))
        comment_repo.add(make_comment(3, created=t - 10))
        bob = make_viewer(BOB)

        # Act
        roots = await service.fetch_all(question, activity, bob, limit=0)
        node = await service.fetch_one(question, activity, bob, CommentId(3))

        # Assert
        listed = next(r for r in roots if r.id == 3)
        assert listed.row_number == 3
        assert node.row_number == 1
        assert node.to_view().author_name == "Anonymous Student #1"

    @pytest.mark.asyncio
    async def test_unknown_comment_raises(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        question, activity = await seed_comment_area(unit_env)

        with pytest.raises(NotFoundError):
            await service.fetch_one(
                question, activity, make_viewer(BOB), CommentId(999)
            )

    @pytest.mark.asyncio
    async def test_comment_on_other_question_raises(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        comment_repo = await unit_env.get(CommentRepository)
        question, activity = await seed_comment_area(unit_env)
        comment_repo.add(make_comment(1, question_id=OTHER_QUESTION_ID))

        with pytest.raises(NotFoundError):
            await service.fetch_one(question, activity, make_viewer(BOB), CommentId(1))


class TestCreateComment:
    """Tests for create_comment validation."""

    @pytest.mark.asyncio
    async def test_body_is_stripped(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        comment_repo = await unit_env.get(CommentRepository)
        question, activity = await seed_comment_area(unit_env)

        comment_id = await service.create_comment(
            question, activity, make_viewer(ALICE), reply_to=0, body="  Hi  "
        )

        stored = await comment_repo.find_by_id(comment_id)
        assert stored.comment == "Hi"
        assert stored.user_id == ALICE
        assert stored.is_root

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "reply_to, body, field",
        [(0, "", "message"), (0, "   ", "message"), (-1, "Hi", "replyto")],
    )
    async def test_invalid_input_is_rejected(self, unit_env, reply_to, body, field):
        service = await unit_env.get(CommentAreaService)
        question, activity = await seed_comment_area(unit_env)

        with pytest.raises(ValidationError) as exc_info:
            await service.create_comment(
                question, activity, make_viewer(ALICE), reply_to=reply_to, body=body
            )

        assert field in exc_info.value.field_errors

    @pytest.mark.asyncio
    async def test_too_long_body_is_rejected(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        question, activity = await seed_comment_area(unit_env)
        body = "x" * (service.settings.comments.max_comment_length + 1)

        with pytest.raises(ValidationError):
            await service.create_comment(
                question, activity, make_viewer(ALICE), reply_to=0, body=body
            )

    @pytest.mark.asyncio
    async def test_reply_to_reply_is_refused(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        comment_repo = await unit_env.get(CommentRepository)
        question, activity = await seed_comment_area(unit_env)
        comment_repo.add(make_comment(1))
        comment_repo.add(make_comment(2, parent_id=1))

        with pytest.raises(ReplyNotAllowedError):
            await service.create_comment(
                question, activity, make_viewer(BOB), reply_to=2, body="Nested"
            )

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent_raises(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        question, activity = await seed_comment_area(unit_env)

        with pytest.raises(NotFoundError):
            await service.create_comment(
                question, activity, make_viewer(BOB), reply_to=42, body="Hello?"
            )

    @pytest.mark.asyncio
    async def test_reply_across_questions_is_refused(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        comment_repo = await unit_env.get(CommentRepository)
        question, activity = await seed_comment_area(unit_env)
        comment_repo.add(make_comment(1, question_id=OTHER_QUESTION_ID))

        with pytest.raises(ReplyNotAllowedError):
            await service.create_comment(
                question, activity, make_viewer(BOB), reply_to=1, body="Wrong place"
            )


class TestDeleteUndelete:
    """Tests for the soft delete round trip."""

    @pytest.mark.asyncio
    async def test_delete_then_undelete(self, unit_env):
        # Arrange
        service = await unit_env.get(CommentAreaService)
        comment_repo = await unit_env.get(CommentRepository)
        question, activity = await seed_comment_area(unit_env)
        alice = make_viewer(ALICE)
        comment_id = await service.create_comment(
            question, activity, alice, reply_to=0, body="Oops"
        )

        # Act
        deleted = await service.delete_comment(question, activity, alice, comment_id)
        again = await service.delete_comment(question, activity, alice, comment_id)
        restored = await service.undelete_comment(question, activity, alice, comment_id)

        # Assert
        assert deleted.success is True
        assert deleted.node.is_deleted
        assert again.success is False
        assert again.reason == "already deleted"
        assert restored.success is True
        stored = await comment_repo.find_by_id(comment_id)
        assert stored.deleted == 0
        assert stored.delete_user_id is None
        assert stored.edit_user_id == ALICE

    @pytest.mark.asyncio
    async def test_reply_round_trip_updates_parent_reply_count(self, unit_env):
        # Arrange
        service = await unit_env.get(CommentAreaService)
        question, activity = await seed_comment_area(unit_env)
        alice = make_viewer(ALICE)
        bob = make_viewer(BOB)
        root_id = await service.create_comment(
            question, activity, alice, reply_to=0, body="Question?"
        )
        reply_id = await service.create_comment(
            question, activity, alice, reply_to=root_id, body="Never mind"
        )

        async def reply_count():
            root = await service.fetch_one(question, activity, bob, root_id)
            return root.to_view().number_of_replies

        assert await reply_count() == 1

        # Act / Assert
        deleted = await service.delete_comment(question, activity, alice, reply_id)
        assert deleted.success is True
        assert await reply_count() == 0

        restored = await service.undelete_comment(question, activity, alice, reply_id)
        assert restored.success is True
        assert await reply_count() == 1

    @pytest.mark.asyncio
    async def test_undelete_of_active_comment_is_refused(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        question, activity = await seed_comment_area(unit_env)
        alice = make_viewer(ALICE)
        comment_id = await service.create_comment(
            question, activity, alice, reply_to=0, body="Still here"
        )

        result = await service.undelete_comment(question, activity, alice, comment_id)

        assert result.success is False
        assert result.reason == "not deleted"

    @pytest.mark.asyncio
    async def test_moderator_deletes_old_comment(self, unit_env):
        # Arrange
        service = await unit_env.get(CommentAreaService)
        viewer_service = await unit_env.get(ViewerService)
        comment_repo = await unit_env.get(CommentRepository)
        question, activity = await seed_comment_area(unit_env)
        comment_repo.add(make_comment(1, created=now() - 86_400))
        moderator = await viewer_service.resolve(MODERATOR, activity)

        # Act
        result = await service.delete_comment(
            question, activity, moderator, CommentId(1)
        )

        # Assert
        assert moderator.is_moderator is True
        assert result.success is True
        view = result.node.to_view()
        assert view.delete_user.id == MODERATOR
        assert view.can_undelete is True

    @pytest.mark.asyncio
    async def test_creator_cannot_delete_after_window(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        comment_repo = await unit_env.get(CommentRepository)
        question, activity = await seed_comment_area(unit_env)
        comment_repo.add(make_comment(1, created=now() - 3600))

        result = await service.delete_comment(
            question, activity, make_viewer(ALICE), CommentId(1)
        )

        assert result.success is False
        assert result.reason == "edit window expired"


class TestCommentRequirement:
    """Tests for has_open_comment_requirement."""

    @pytest.mark.asyncio
    async def test_no_requirement_without_force_commenting(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        question, activity = await seed_comment_area(unit_env)

        assert not await service.has_open_comment_requirement(
            question, activity, make_viewer(BOB)
        )

    @pytest.mark.asyncio
    async def test_requirement_until_live_comment_exists(self, unit_env):
        # Arrange
        service = await unit_env.get(CommentAreaService)
        question, activity = await seed_comment_area(unit_env, force_commenting=True)
        bob = make_viewer(BOB)

        # Act / Assert
        assert await service.has_open_comment_requirement(question, activity, bob)

        comment_id = await service.create_comment(
            question, activity, bob, reply_to=0, body="Done"
        )
        assert not await service.has_open_comment_requirement(question, activity, bob)

        await service.delete_comment(question, activity, bob, comment_id)
        assert await service.has_open_comment_requirement(question, activity, bob)


class TestSortPreference:
    """Tests for sort preference handling."""

    @pytest.mark.asyncio
    async def test_valid_preference_is_stored(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        preferences = await unit_env.get(PreferenceRepository)
        question, activity = await seed_comment_area(unit_env)
        bob = make_viewer(BOB)

        sort = await service.set_sort_preference(bob, activity, "date_desc")

        assert sort.key == "date_desc"
        name = service.settings.comments.sort_preference_name
        assert await preferences.get(BOB, name) == "date_desc"
        assert (await service.resolve_sort(bob, activity)).key == "date_desc"

    @pytest.mark.asyncio
    async def test_author_sort_under_anonymisation_is_not_stored(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        preferences = await unit_env.get(PreferenceRepository)
        question, activity = await seed_comment_area(unit_env)

        sort = await service.set_sort_preference(
            make_viewer(BOB), activity, "author_lastname_asc"
        )

        assert sort == DEFAULT_SORT
        name = service.settings.comments.sort_preference_name
        assert await preferences.get(BOB, name) is None

    @pytest.mark.asyncio
    async def test_explicit_request_is_remembered(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        question, activity = await seed_comment_area(unit_env)
        bob = make_viewer(BOB)

        await service.resolve_sort(bob, activity, "date_desc")
        remembered = await service.resolve_sort(bob, activity)

        assert remembered.key == "date_desc"

    @pytest.mark.asyncio
    async def test_anonymised_student_only_gets_date_sorts(self, unit_env):
        service = await unit_env.get(CommentAreaService)
        question, activity = await seed_comment_area(unit_env)

        assert len(service.get_sortable_fields(make_viewer(BOB), activity)) == 2
