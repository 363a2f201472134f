"""Unit tests for comment tree reconstruction."""

from commentarea.domain.model.comment import CommentRow
from commentarea.domain.service import CommentTreeBuilder, build_tree
from commentarea.domain.value import CommentId
from tests.conftest import ALICE, make_comment, make_context, make_viewer


class TestBuildTree:
    """Tests for build_tree."""

    def test_groups_replies_under_roots_in_input_order(self):
        # Arrange
        comments = [
            make_comment(1),
            make_comment(3, parent_id=1),
            make_comment(2),
            make_comment(4, parent_id=2),
            make_comment(5, parent_id=1),
        ]

        # Act
        tree = build_tree(comments)

        # Assert
        assert tree == {CommentId(1): [3, 5], CommentId(2): [4]}
        assert list(tree) == [1, 2]

    def test_root_without_replies_gets_empty_entry(self):
        tree = build_tree([make_comment(1), make_comment(2, parent_id=1), make_comment(7)])

        assert tree[CommentId(7)] == []

    def test_reply_before_its_root_is_still_attached(self):
        tree = build_tree([make_comment(2, parent_id=1), make_comment(1)])

        assert tree == {CommentId(1): [2]}

    def test_orphaned_reply_is_dropped(self):
        tree = build_tree([make_comment(1), make_comment(2, parent_id=99)])

        assert tree == {CommentId(1): []}

    def test_no_reply_appears_under_two_roots(self):
        comments = [make_comment(i) for i in range(1, 4)] + [
            make_comment(10 + i, parent_id=(i % 3) + 1) for i in range(9)
        ]

        tree = build_tree(comments)

        reply_ids = [reply for replies in tree.values() for reply in replies]
        assert len(reply_ids) == len(set(reply_ids)) == 9


class TestCommentTreeBuilder:
    """Tests for CommentTreeBuilder."""

    def test_build_wires_nodes(self):
        # Arrange
        rows = [
            CommentRow(comment=make_comment(1), row_number=1),
            CommentRow(comment=make_comment(2, parent_id=1), row_number=2),
            CommentRow(comment=make_comment(3, parent_id=1), row_number=3),
        ]
        builder = CommentTreeBuilder(make_context(make_viewer(ALICE)))

        # Act
        tree = builder.build(rows)

        # Assert
        assert [root.id for root in tree.roots] == [1]
        root = tree.roots[0]
        assert [reply.id for reply in root.replies] == [2, 3]
        assert root.parent is None
        assert tree.find(CommentId(3)).parent.id == 1
        assert tree.find(CommentId(3)).row_number == 3
        assert tree.find(CommentId(42)) is None
