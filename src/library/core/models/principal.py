"""Authenticated caller models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.library.core.security import Role


class TokenClaims(BaseModel):
    """Verified claims extracted from a bearer token."""

    subject: str = Field(description="Subject (sub) claim")
    issuer: str | None = Field(default=None, description="Issuer (iss) claim")
    audience: list[str] = Field(default_factory=list, description="Audience (aud) claim")
    roles: list[str] = Field(default_factory=list, description="Raw role values")
    email: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    expires_at: int | None = None
    all_claims: dict[str, Any] = Field(default_factory=dict)


class LibraryPrincipal(BaseModel):
    """The user on whose behalf a request is executed."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    roles: frozenset[Role] = frozenset()
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    def has_role(self, role: Role) -> bool:
        return role in self.roles
