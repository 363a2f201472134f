"""Comment tree reconstruction.

Comment rows arrive flat, each pointing at its parent by id. The discussion
is only ever two levels deep, so instead of a recursive structure the tree is
kept as an adjacency map ``root_id -> [reply_id, ...]`` next to a flat store
of nodes by id.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from commentarea.domain.model.comment import Comment, CommentRow
from commentarea.domain.model.comment_node import CommentNode, ViewContext
from commentarea.domain.value import CommentId


def build_tree(comments: Iterable[Comment]) -> dict[CommentId, list[CommentId]]:
    """Group reply ids under their root comment id in a single pass.

    Every root gets an entry even when it has no replies. Root order and
    reply order follow the input order. Replies whose parent is not among
    the given roots are dropped.

    Args:
        comments: Roots and replies, interleaved in any order

    Returns:
        Ordered mapping of root id to the ids of its direct replies
    """
    roots: list[CommentId] = []
    children: dict[CommentId, list[CommentId]] = {}
    for comment in comments:
        if comment.is_root:
            roots.append(comment.id)
        else:
            children.setdefault(comment.parent_id, []).append(comment.id)
    return {root_id: children.get(root_id, []) for root_id in roots}


@dataclass
class CommentTree:
    """Materialised comment tree for one request."""

    adjacency: dict[CommentId, list[CommentId]] = field(default_factory=dict)
    nodes: dict[CommentId, CommentNode] = field(default_factory=dict)

    @property
    def roots(self) -> list[CommentNode]:
        """Root nodes in presentation order, replies attached."""
        return [self.nodes[root_id] for root_id in self.adjacency]

    def find(self, comment_id: CommentId) -> Optional[CommentNode]:
        return self.nodes.get(comment_id)


class CommentTreeBuilder:
    """Turns flat query rows into wired ``CommentNode`` objects."""

    def __init__(self, context: ViewContext) -> None:
        self.context = context

    def build(self, rows: list[CommentRow]) -> CommentTree:
        """Build nodes for every root and its replies.

        Args:
            rows: Query rows, roots in presentation order, replies oldest first

        Returns:
            The tree with each root's ``replies`` populated
        """
        by_id = {row.comment.id: row for row in rows}
        adjacency = build_tree(row.comment for row in rows)

        tree = CommentTree(adjacency=adjacency)
        for root_id, reply_ids in adjacency.items():
            root_row = by_id[root_id]
            root = CommentNode(root_row.comment, self.context, root_row.row_number)
            tree.nodes[root_id] = root
            for reply_id in reply_ids:
                reply_row = by_id[reply_id]
                reply = CommentNode(
                    reply_row.comment,
                    self.context,
                    reply_row.row_number,
                    parent=root_row.comment,
                )
                root.add_reply(reply)
                tree.nodes[reply_id] = reply
        return tree
