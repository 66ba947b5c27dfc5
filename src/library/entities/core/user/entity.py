"""User domain entity."""

from typing import Any

from pydantic import Field

from src.library.core.security import Role
from src.library.entities.core._base import Entity


class User(Entity):
    """A library user who can borrow books.

    Roles are stored with the user so that development tokens can be minted
    for seeded accounts; request authorization always uses the roles carried
    by the caller's token.
    """

    first_name: str = Field(description="User's first name")
    last_name: str = Field(description="User's last name")
    email: str | None = Field(default=None, description="User's email address")
    roles: list[Role] = Field(default_factory=list, description="User's roles")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.first_name == other.first_name
            and self.last_name == other.last_name
            and self.email == other.email
            and set(self.roles) == set(other.roles)
        )

    def __hash__(self) -> int:
        return hash((self.id, self.first_name, self.last_name, self.email))
