"""In-memory user repository for testing."""

from typing import Iterable, Optional

from commentarea.domain.model.user import User
from commentarea.domain.repository.user import UserRepository
from commentarea.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    def get(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Load many users at once."""
        return {
            user_id: self._users[user_id]
            for user_id in set(user_ids)
            if user_id in self._users
        }

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user
