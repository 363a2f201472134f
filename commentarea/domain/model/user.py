"""User entity."""

from typing import Optional

from commentarea.domain.model.common import DomainModel
from commentarea.domain.value import UserId


class User(DomainModel):
    """A user of the hosting site, as far as the comment area needs one."""

    id: UserId
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
