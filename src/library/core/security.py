"""Role-based access control for service operations.

Each service operation is guarded by an explicit :func:`check_access` call
against :data:`ACCESS_POLICY`, a table mapping operation names to the roles
allowed to perform them. A principal passes when it holds at least one of
the allowed roles.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from src.library.core.models.principal import LibraryPrincipal


class Role(str, Enum):
    USER = "USER"
    CURATOR = "CURATOR"
    ADMIN = "ADMIN"

    @classmethod
    def parse(cls, value: str) -> Role | None:
        """Map a token role value to a Role.

        Matching ignores case and an optional ``ROLE_`` prefix; unknown
        values map to None.
        """
        name = value.strip().upper()
        if name.startswith("ROLE_"):
            name = name[len("ROLE_"):]
        try:
            return cls(name)
        except ValueError:
            return None

    @classmethod
    def parse_all(cls, values: Iterable[str]) -> frozenset[Role]:
        return frozenset(
            role for role in (cls.parse(v) for v in values) if role is not None
        )


class AccessDeniedError(Exception):
    """Raised when the current principal may not perform an operation."""

    def __init__(self, operation: str, allowed: frozenset[Role]) -> None:
        self.operation = operation
        self.allowed = allowed
        super().__init__(f"Access denied for operation '{operation}'")


ACCESS_POLICY: dict[str, frozenset[Role]] = {
    "books.create": frozenset({Role.CURATOR}),
    "books.update": frozenset({Role.CURATOR}),
    "books.find_by_identifier": frozenset({Role.USER, Role.CURATOR}),
    "books.find_with_details_by_identifier": frozenset({Role.USER, Role.CURATOR}),
    "books.find_all": frozenset({Role.USER, Role.CURATOR}),
    "books.borrow_by_id": frozenset({Role.USER}),
    "books.return_by_id": frozenset({Role.USER}),
    "books.delete_by_identifier": frozenset({Role.CURATOR}),
    "users.find_all": frozenset({Role.ADMIN}),
    "users.find_by_identifier": frozenset({Role.ADMIN}),
}


def is_allowed(operation: str, roles: Iterable[Role]) -> bool:
    """Return True when any of ``roles`` may perform ``operation``.

    Operations missing from the policy are denied.
    """
    allowed = ACCESS_POLICY.get(operation, frozenset())
    return not allowed.isdisjoint(roles)


def check_access(operation: str, principal: LibraryPrincipal) -> None:
    """Raise AccessDeniedError unless ``principal`` may perform ``operation``."""
    if is_allowed(operation, principal.roles):
        return
    logger.warning(
        "Access denied: user={} roles={} operation={}",
        principal.identifier,
        sorted(role.value for role in principal.roles),
        operation,
    )
    raise AccessDeniedError(operation, ACCESS_POLICY.get(operation, frozenset()))
