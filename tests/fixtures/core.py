from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
from sqlmodel import Session

from src.library.core.models.principal import LibraryPrincipal
from src.library.core.security import Role
from src.library.core.services import DbManageService, DbSessionService
from src.library.entities.core.user import User, UserRepository
from src.library.entities.service.book import Book, BookRepository
from src.library.runtime.config.config_data import ConfigData, DatabaseConfig

# Models are registered with the metadata by the entity package imports above


@pytest.fixture
def database_service() -> Generator[DbSessionService]:
    """In-memory database shared by every session opened from the service."""
    config = ConfigData(database=DatabaseConfig(url="sqlite://"))
    service = DbSessionService(config)
    DbManageService(service.engine).create_all()
    try:
        yield service
    finally:
        service.dispose()


@pytest.fixture
def session(database_service: DbSessionService) -> Generator[Session]:
    """Create a fresh database session for testing."""
    session = database_service.get_session()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def book_repository(session: Session) -> BookRepository:
    return BookRepository(session)


@pytest.fixture
def user_repository(session: Session) -> UserRepository:
    return UserRepository(session)


@pytest.fixture
def book_factory() -> Callable[..., Book]:
    def _make_book(**overrides: Any) -> Book:
        values: dict[str, Any] = {
            "isbn": "9780132350884",
            "title": "Clean Code",
            "description": "A Handbook of Agile Software Craftsmanship",
            "authors": ["Robert C. Martin"],
        }
        values.update(overrides)
        return Book(**values)

    return _make_book


@pytest.fixture
def test_user() -> User:
    """Standard library member used across tests."""
    return User(
        id="5b1f4c9e-2a7d-4e3b-9c8f-0d1e2f3a4b5c",
        first_name="Bruce",
        last_name="Wayne",
        email="bruce.wayne@example.com",
        roles=[Role.USER],
    )


@pytest.fixture
def principal_factory() -> Callable[..., LibraryPrincipal]:
    def _make_principal(
        *roles: Role, identifier: str = "principal-under-test"
    ) -> LibraryPrincipal:
        return LibraryPrincipal(identifier=identifier, roles=frozenset(roles))

    return _make_principal
