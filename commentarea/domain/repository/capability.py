"""Capability repository interface."""

from abc import ABC, abstractmethod

from commentarea.domain.value import ActivityId, Capability, UserId


class CapabilityRepository(ABC):
    """Which capabilities a user holds in an activity.

    Backs the permission oracle; the comment area never asks it directly.
    """

    @abstractmethod
    async def find_capabilities(
        self, user_id: UserId, activity_id: ActivityId
    ) -> set[Capability]:
        """Return every capability granted to the user in the activity."""
        pass

    @abstractmethod
    async def grant(
        self, user_id: UserId, activity_id: ActivityId, capability: Capability
    ) -> None:
        """Grant a capability. Granting twice is a no-op."""
        pass
