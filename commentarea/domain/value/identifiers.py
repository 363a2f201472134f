"""Strongly typed identifiers for comment area entities.

Rows are keyed by the hosting site's integer ids, so every identifier
wraps ``int``.
"""

from typing import NewType

CommentId = NewType("CommentId", int)
QuestionId = NewType("QuestionId", int)
ActivityId = NewType("ActivityId", int)
UserId = NewType("UserId", int)

# parent_id of a root comment
ROOT_PARENT_ID = CommentId(0)

# author_id shown when the real author must not be revealed
HIDDEN_USER_ID = -1
