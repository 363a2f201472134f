"""In-memory repository implementations for testing."""

from .activity import InMemoryActivityRepository
from .capability import InMemoryCapabilityRepository
from .comment import InMemoryCommentRepository
from .preference import InMemoryPreferenceRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryActivityRepository",
    "InMemoryCapabilityRepository",
    "InMemoryCommentRepository",
    "InMemoryPreferenceRepository",
    "InMemoryUserRepository",
]
