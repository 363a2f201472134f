"""Permission oracle for the comment area."""

import logfire

from commentarea.domain.model.activity import Activity
from commentarea.domain.repository import CapabilityRepository
from commentarea.domain.value import Capability, UserId, Viewer

from .base import Service


class ViewerService(Service):
    """Resolves who is asking and what they may do in an activity."""

    def __init__(self, capability_repository: CapabilityRepository) -> None:
        """Initialize viewer service.

        Args:
            capability_repository: Capability grants store
        """
        self.capability_repository = capability_repository

    async def resolve(self, user_id: UserId, activity: Activity) -> Viewer:
        """Build the ``Viewer`` for one request.

        Args:
            user_id: Authenticated user
            activity: Activity whose comment area is being accessed

        Returns:
            Viewer with moderator and unhide-anonymous flags resolved
        """
        with logfire.span(
            "viewer_service.resolve", user_id=user_id, activity_id=activity.id
        ):
            capabilities = await self.capability_repository.find_capabilities(
                user_id, activity.id
            )
            viewer = Viewer(
                id=user_id,
                is_moderator=Capability.MANAGE in capabilities,
                can_unhide_anonymous=Capability.UNHIDE_ANONYMOUS in capabilities,
            )
            logfire.debug(
                "Viewer resolved",
                user_id=user_id,
                is_moderator=viewer.is_moderator,
                can_unhide_anonymous=viewer.can_unhide_anonymous,
            )
            return viewer
