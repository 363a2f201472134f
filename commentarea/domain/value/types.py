"""Domain value objects for the comment area.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum
from typing import Optional

from commentarea.domain.value.common import ValueObject
from commentarea.domain.value.identifiers import UserId


class Capability(str, Enum):
    """Capabilities a user can hold within one activity."""

    MANAGE = "manage"  # Moderator
    UNHIDE_ANONYMOUS = "unhide_anonymous"


class DenialReason(str, Enum):
    """Human-readable reasons attached to a refused comment action."""

    ALREADY_DELETED = "already deleted"
    NOT_DELETED = "not deleted"
    NOT_CREATOR = "not the creator"
    EDIT_WINDOW_EXPIRED = "edit window expired"
    REPLY_TO_REPLY = "only root comments can receive replies"


class SortField(str, Enum):
    """Fields root comments can be ordered by."""

    DATE = "date"
    AUTHOR_FIRSTNAME = "author_firstname"
    AUTHOR_LASTNAME = "author_lastname"

    @property
    def reveals_author(self) -> bool:
        """Whether ordering by this field would leak author identity."""
        return self is not SortField.DATE


class SortDirection(str, Enum):
    """Direction of a sort."""

    ASC = "asc"
    DESC = "desc"


class SortFeature(ValueObject):
    """A (field, direction) pair, serialised as ``<field>_<direction>``."""

    field: SortField = SortField.DATE
    direction: SortDirection = SortDirection.ASC

    @property
    def key(self) -> str:
        """String form used by clients and the preference store."""
        return f"{self.field.value}_{self.direction.value}"

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["SortFeature"]:
        """Parse ``date_desc`` style keys.

        Returns:
            The feature, or None when ``raw`` is empty or unknown
        """
        if not raw:
            return None
        field, sep, direction = raw.strip().lower().rpartition("_")
        if not sep:
            return None
        try:
            return cls(field=SortField(field), direction=SortDirection(direction))
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.key


DEFAULT_SORT = SortFeature(field=SortField.DATE, direction=SortDirection.ASC)


class Viewer(ValueObject):
    """The user a request acts on behalf of, with their capabilities resolved.

    Produced once per request by the permission oracle and passed explicitly
    into every comment area call.
    """

    id: UserId
    is_moderator: bool = False
    can_unhide_anonymous: bool = False
