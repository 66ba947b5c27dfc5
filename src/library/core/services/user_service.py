"""Administrative access to library users."""

from src.library.core.models.principal import LibraryPrincipal
from src.library.core.security import check_access
from src.library.entities.core.user import User, UserRepository


class UserService:
    def __init__(self, user_repository: UserRepository, principal: LibraryPrincipal):
        self._repository = user_repository
        self._principal = principal

    def find_all(self) -> list[User]:
        check_access("users.find_all", self._principal)
        return self._repository.list_all()

    def find_by_identifier(self, identifier: str) -> User | None:
        check_access("users.find_by_identifier", self._principal)
        return self._repository.get(identifier)
