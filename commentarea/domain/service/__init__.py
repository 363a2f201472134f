"""Domain services."""

from .base import Service
from .comment_area_service import CommentActionResult, CommentAreaService
from .comment_tree import CommentTree, CommentTreeBuilder, build_tree
from .query_planner import QueryPlanner
from .viewer_service import ViewerService

__all__ = [
    "CommentActionResult",
    "CommentAreaService",
    "CommentTree",
    "CommentTreeBuilder",
    "QueryPlanner",
    "Service",
    "ViewerService",
    "build_tree",
]
