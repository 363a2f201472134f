"""In-memory preference repository for testing."""

from typing import Optional

from commentarea.domain.repository.preference import PreferenceRepository
from commentarea.domain.value import UserId


class InMemoryPreferenceRepository(PreferenceRepository):
    """In-memory implementation of PreferenceRepository for testing."""

    def __init__(self) -> None:
        self._preferences: dict[tuple[UserId, str], str] = {}

    async def get(self, user_id: UserId, name: str) -> Optional[str]:
        return self._preferences.get((user_id, name))

    async def set(self, user_id: UserId, name: str, value: str) -> None:
        self._preferences[(user_id, name)] = value
