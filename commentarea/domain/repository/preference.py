"""User preference repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from commentarea.domain.value import UserId


class PreferenceRepository(ABC):
    """Per-user key-value preference store."""

    @abstractmethod
    async def get(self, user_id: UserId, name: str) -> Optional[str]:
        """Read a preference.

        Args:
            user_id: Owner of the preference
            name: Preference key

        Returns:
            The stored value, or None when unset
        """
        pass

    @abstractmethod
    async def set(self, user_id: UserId, name: str, value: str) -> None:
        """Create or overwrite a preference."""
        pass
