"""PostgreSQL repository implementations."""

from commentarea.persistence.repository.activity import PostgresActivityRepository
from commentarea.persistence.repository.capability import PostgresCapabilityRepository
from commentarea.persistence.repository.comment import PostgresCommentRepository
from commentarea.persistence.repository.preference import PostgresPreferenceRepository
from commentarea.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresActivityRepository",
    "PostgresCapabilityRepository",
    "PostgresCommentRepository",
    "PostgresPreferenceRepository",
    "PostgresUserRepository",
]
