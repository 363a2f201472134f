"""In-memory capability repository for testing."""

from commentarea.domain.repository.capability import CapabilityRepository
from commentarea.domain.value import ActivityId, Capability, UserId


class InMemoryCapabilityRepository(CapabilityRepository):
    """In-memory implementation of CapabilityRepository for testing."""

    def __init__(self) -> None:
        self._grants: dict[tuple[UserId, ActivityId], set[Capability]] = {}

    async def find_capabilities(
        self, user_id: UserId, activity_id: ActivityId
    ) -> set[Capability]:
        return set(self._grants.get((user_id, activity_id), set()))

    async def grant(
        self, user_id: UserId, activity_id: ActivityId, capability: Capability
    ) -> None:
        self._grants.setdefault((user_id, activity_id), set()).add(capability)
