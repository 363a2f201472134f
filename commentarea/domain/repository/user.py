"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from commentarea.domain.model.user import User
from commentarea.domain.value import UserId


class UserRepository(ABC):
    """Repository for User entity."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Load many users with a single lookup.

        Args:
            user_ids: Ids to load, duplicates allowed

        Returns:
            Found users keyed by id, unknown ids are absent
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass
