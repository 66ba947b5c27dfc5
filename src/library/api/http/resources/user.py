"""Wire representations of users."""

from pydantic import BaseModel, Field

from src.library.core.models.principal import LibraryPrincipal
from src.library.core.security import Role
from src.library.entities.core.user import User


class UserResource(BaseModel):
    identifier: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    roles: list[Role] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, user: User) -> "UserResource":
        return cls(
            identifier=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            roles=sorted(user.roles, key=lambda role: role.value),
        )

    @classmethod
    def from_principal(cls, principal: LibraryPrincipal) -> "UserResource":
        return cls(
            identifier=principal.identifier,
            first_name=principal.first_name,
            last_name=principal.last_name,
            email=principal.email,
            roles=sorted(principal.roles, key=lambda role: role.value),
        )


class UserListResource(BaseModel):
    users: list[UserResource] = Field(default_factory=list)
