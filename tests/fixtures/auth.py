"""Token and API client fixtures."""

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from src.library.api.http.app import app
from src.library.api.http.deps import get_database_service, get_jwt_verify_service
from src.library.core.security import Role
from src.library.core.services import (
    DbSessionService,
    JwtGeneratorService,
    JwtVerificationService,
)
from src.library.runtime.config.config_data import JWTConfig

_SECRET = "library-test-signing-secret"
_ISSUER = "https://issuer.test"
_AUDIENCE = "api://library"

MEMBER_IDENTIFIER = "7a0c9b7e-4d1f-4b6a-8e2d-3f5c6a7b8c01"
CURATOR_IDENTIFIER = "7a0c9b7e-4d1f-4b6a-8e2d-3f5c6a7b8c02"
ADMIN_IDENTIFIER = "7a0c9b7e-4d1f-4b6a-8e2d-3f5c6a7b8c03"


@pytest.fixture
def jwt_config() -> JWTConfig:
    return JWTConfig(
        signing_secret=_SECRET,
        issuer=_ISSUER,
        audiences=[_AUDIENCE],
    )


@pytest.fixture
def jwt_generate_service(jwt_config: JWTConfig) -> JwtGeneratorService:
    return JwtGeneratorService(jwt_config)


@pytest.fixture
def jwt_verify_service(jwt_config: JWTConfig) -> JwtVerificationService:
    return JwtVerificationService(jwt_config)


@pytest.fixture
def token_factory(
    jwt_generate_service: JwtGeneratorService,
) -> Callable[..., str]:
    """Mint signed access tokens for a subject and set of roles."""

    def _make_token(subject: str, *roles: Role | str, **claims) -> str:
        return jwt_generate_service.generate_access_token(
            subject,
            roles=[role.value if isinstance(role, Role) else role for role in roles],
            **claims,
        )

    return _make_token


@pytest.fixture
def auth_headers(token_factory: Callable[..., str]) -> Callable[..., dict[str, str]]:
    """Build Authorization headers for the standard member, curator and admin."""
    subjects = {
        Role.USER: (MEMBER_IDENTIFIER, "member@example.com"),
        Role.CURATOR: (CURATOR_IDENTIFIER, "curator@example.com"),
        Role.ADMIN: (ADMIN_IDENTIFIER, "admin@example.com"),
    }

    def _make_headers(role: Role) -> dict[str, str]:
        subject, email = subjects[role]
        token = token_factory(subject, role, email=email)
        return {"Authorization": f"Bearer {token}"}

    return _make_headers


@pytest.fixture
def client(
    database_service: DbSessionService,
    jwt_verify_service: JwtVerificationService,
) -> Generator[TestClient]:
    """API client wired to the in-memory database and test signing secret.

    The lifespan is not entered, so no file database is created or seeded.
    """
    app.dependency_overrides[get_database_service] = lambda: database_service
    app.dependency_overrides[get_jwt_verify_service] = lambda: jwt_verify_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
