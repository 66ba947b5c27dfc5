"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, HTTPException, Request
from loguru import logger
from sqlmodel import Session

from src.library.api.http.app_data import ApplicationDependencies
from src.library.core.models.principal import LibraryPrincipal, TokenClaims
from src.library.core.security import Role
from src.library.core.services import (
    BookService,
    DbSessionService,
    JwtVerificationService,
    UserService,
)
from src.library.entities.core.user import User, UserRepository
from src.library.entities.service.book import BookRepository


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Open a database session for the duration of the request."""
    session = database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_jwt_verify_service(request: Request) -> JwtVerificationService:
    """Get the JWT verification service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.jwt_verify_service


def _provision_user(claims: TokenClaims, user_repo: UserRepository) -> User:
    """Create the local user record for a first-time token subject."""
    first_name = claims.given_name
    last_name = claims.family_name

    # Fallback to extracting name from email or subject if no name claims
    if not first_name and not last_name:
        if claims.email and "@" in claims.email:
            name_part = claims.email.split("@")[0]
            first_name = name_part.replace(".", " ").replace("_", " ").title()
            last_name = ""
        else:
            first_name = f"User {claims.subject[-8:]}"
            last_name = ""

    new_user = User(
        id=claims.subject,
        first_name=first_name or "Unknown",
        last_name=last_name or "",
        email=claims.email,
        roles=sorted(Role.parse_all(claims.roles), key=lambda role: role.value),
    )
    logger.info("Provisioning user {} on first request", new_user.id)
    return user_repo.create(new_user)


async def get_current_principal(
    request: Request,
    db: Session = Depends(get_db_session),
    jwt_verify: JwtVerificationService = Depends(get_jwt_verify_service),
) -> LibraryPrincipal:
    """Authenticate the request using a Bearer token, with JIT user provisioning."""

    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing Bearer token")

    token = auth_header.split(" ", 1)[1].strip()
    claims = await jwt_verify.verify_jwt(token)

    user_repo = UserRepository(db)
    user = user_repo.get(claims.subject)
    if user is None:
        user = _provision_user(claims, user_repo)

    principal = LibraryPrincipal(
        identifier=user.id,
        roles=Role.parse_all(claims.roles),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
    )
    request.state.principal = principal
    return principal


def get_book_service(
    db: Session = Depends(get_db_session),
    principal: LibraryPrincipal = Depends(get_current_principal),
) -> BookService:
    return BookService(BookRepository(db), principal)


def get_user_service(
    db: Session = Depends(get_db_session),
    principal: LibraryPrincipal = Depends(get_current_principal),
) -> UserService:
    return UserService(UserRepository(db), principal)
