"""initial_schema

Create the schema for the StudentQuiz comment area:
- Users (names shown as comment authors)
- Activities (anonymisation, force commenting and reporting settings)
- Questions (owners of a comment area)
- Comments (two levels: root comments and replies, soft deleted)
- Capabilities (moderator and unhide-anonymous grants per activity)
- User preferences (per-user key-value store, holds the comment sort)

Revision ID: 3c1f0d5a9e27
Revises:
Create Date: 2026-10-19 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f0d5a9e27"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("first_name", sa.String(length=100), server_default="", nullable=False),
        sa.Column("last_name", sa.String(length=100), server_default="", nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_users_last_name", "users", ["last_name"])

    op.create_table(
        "activities",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(length=255), server_default="", nullable=False),
        sa.Column("anonymous_rank", sa.Boolean(), server_default="true", nullable=False),
        sa.Column(
            "force_commenting", sa.Boolean(), server_default="false", nullable=False
        ),
        sa.Column("reporting_emails", sa.Text(), server_default="", nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "questions",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("activity_id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(length=255), server_default="", nullable=False),
        sa.ForeignKeyConstraint(["activity_id"], ["activities.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_questions_activity_id", "questions", ["activity_id"])

    # parent_id is 0 for root comments; deleted/modified are 0 when unset
    op.create_table(
        "comments",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("question_id", sa.BigInteger(), nullable=False),
        sa.Column("parent_id", sa.BigInteger(), server_default="0", nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("created", sa.BigInteger(), nullable=False),
        sa.Column("deleted", sa.BigInteger(), server_default="0", nullable=False),
        sa.Column("delete_user_id", sa.BigInteger(), nullable=True),
        sa.Column("modified", sa.BigInteger(), server_default="0", nullable=False),
        sa.Column("edit_user_id", sa.BigInteger(), nullable=True),
        sa.CheckConstraint("parent_id >= 0", name="parent_id_non_negative"),
        sa.CheckConstraint("deleted >= 0", name="deleted_non_negative"),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["delete_user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["edit_user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_comments_question_parent_created",
        "comments",
        ["question_id", "parent_id", "created"],
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index("idx_comments_user_id", "comments", ["user_id"])

    op.create_table(
        "capabilities",
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("activity_id", sa.BigInteger(), nullable=False),
        sa.Column("capability", sa.String(length=50), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["activity_id"], ["activities.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "activity_id", "capability"),
    )

    op.create_table(
        "user_preferences",
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "name"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("user_preferences")
    op.drop_table("capabilities")
    op.drop_index("idx_comments_user_id", table_name="comments")
    op.drop_index("idx_comments_parent_id", table_name="comments")
    op.drop_index("idx_comments_question_parent_created", table_name="comments")
    op.drop_table("comments")
    op.drop_index("idx_questions_activity_id", table_name="questions")
    op.drop_table("questions")
    op.drop_table("activities")
    op.drop_index("idx_users_last_name", table_name="users")
    op.drop_table("users")
