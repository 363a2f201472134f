"""Repository interfaces for the comment area domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from commentarea.domain.repository.activity import ActivityRepository
from commentarea.domain.repository.capability import CapabilityRepository
from commentarea.domain.repository.comment import CommentRepository
from commentarea.domain.repository.preference import PreferenceRepository
from commentarea.domain.repository.user import UserRepository

__all__ = [
    "ActivityRepository",
    "CapabilityRepository",
    "CommentRepository",
    "PreferenceRepository",
    "UserRepository",
]
