"""SQLAlchemy table definitions for the comment area.

Tables are used through SQLAlchemy Core and mapped by hand into the
domain models. They match the schema created by the Alembic migrations.
Timestamps are integer epoch seconds.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
)

metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", BigInteger, primary_key=True),
    Column("first_name", String(100), nullable=False, server_default=""),
    Column("last_name", String(100), nullable=False, server_default=""),
    Column("email", String(255), nullable=True),
)

Index("idx_users_last_name", users_table.c.last_name)

# ============================================================================
# ACTIVITIES TABLE
# ============================================================================
activities_table = Table(
    "activities",
    metadata,
    Column("id", BigInteger, primary_key=True),
    Column("name", String(255), nullable=False, server_default=""),
    Column("anonymous_rank", Boolean, nullable=False, server_default="true"),
    Column("force_commenting", Boolean, nullable=False, server_default="false"),
    Column("reporting_emails", Text, nullable=False, server_default=""),
)

# ============================================================================
# QUESTIONS TABLE
# ============================================================================
questions_table = Table(
    "questions",
    metadata,
    Column("id", BigInteger, primary_key=True),
    Column(
        "activity_id",
        BigInteger,
        ForeignKey("activities.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("name", String(255), nullable=False, server_default=""),
)

Index("idx_questions_activity_id", questions_table.c.activity_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
# parent_id is 0 for root comments, so it carries no foreign key
comments_table = Table(
    "comments",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column(
        "question_id",
        BigInteger,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("parent_id", BigInteger, nullable=False, server_default="0"),
    Column("user_id", BigInteger, ForeignKey("users.id"), nullable=False),
    Column("comment", Text, nullable=False),
    Column("created", BigInteger, nullable=False),
    Column("deleted", BigInteger, nullable=False, server_default="0"),
    Column("delete_user_id", BigInteger, ForeignKey("users.id"), nullable=True),
    Column("modified", BigInteger, nullable=False, server_default="0"),
    Column("edit_user_id", BigInteger, ForeignKey("users.id"), nullable=True),
    CheckConstraint("parent_id >= 0", name="parent_id_non_negative"),
    CheckConstraint("deleted >= 0", name="deleted_non_negative"),
)

Index(
    "idx_comments_question_parent_created",
    comments_table.c.question_id,
    comments_table.c.parent_id,
    comments_table.c.created,
)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_user_id", comments_table.c.user_id)

# ============================================================================
# CAPABILITIES TABLE
# ============================================================================
capabilities_table = Table(
    "capabilities",
    metadata,
    Column(
        "user_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "activity_id",
        BigInteger,
        ForeignKey("activities.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("capability", String(50), primary_key=True),  # 'manage', 'unhide_anonymous'
)

# ============================================================================
# USER PREFERENCES TABLE
# ============================================================================
user_preferences_table = Table(
    "user_preferences",
    metadata,
    Column(
        "user_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("name", String(255), primary_key=True),
    Column("value", Text, nullable=False),
)
