"""Tests for application startup and shutdown hooks."""

from pathlib import Path

import pytest

from src.library.api.http.app import app, shutdown, startup
from src.library.api.http.app_data import ApplicationDependencies
from src.library.core.services.database.data_initializer import SAMPLE_BOOKS
from src.library.entities.service.book import BookRepository
from src.library.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    DatabaseConfig,
    JWTConfig,
)
from src.library.runtime.context import with_context


@pytest.fixture
def clean_app_state():
    yield
    if hasattr(app.state, "app_dependencies"):
        del app.state.app_dependencies


@pytest.mark.usefixtures("clean_app_state")
class TestStartup:
    @pytest.mark.asyncio
    async def test_startup_creates_and_seeds_database(self, tmp_path: Path):
        override = ConfigData(
            database=DatabaseConfig(
                url=f"sqlite:///{tmp_path / 'startup.db'}",
                create_tables=True,
                seed_on_startup=True,
            )
        )

        with with_context(override):
            await startup()
            deps: ApplicationDependencies = app.state.app_dependencies
            with deps.database_service.session_scope() as session:
                books = BookRepository(session).find_all()
            await shutdown()

        assert len(books) == len(SAMPLE_BOOKS)

    @pytest.mark.asyncio
    async def test_startup_without_seeding(self, tmp_path: Path):
        override = ConfigData(
            database=DatabaseConfig(
                url=f"sqlite:///{tmp_path / 'empty.db'}",
                create_tables=True,
                seed_on_startup=False,
            )
        )

        with with_context(override):
            await startup()
            deps: ApplicationDependencies = app.state.app_dependencies
            with deps.database_service.session_scope() as session:
                books = BookRepository(session).find_all()
            await shutdown()

        assert books == []

    @pytest.mark.asyncio
    async def test_production_requires_signing_secret(self, tmp_path: Path):
        override = ConfigData(
            app=AppConfig(environment="production"),
            jwt=JWTConfig(signing_secret=None),
            database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'prod.db'}"),
        )

        with with_context(override):
            with pytest.raises(RuntimeError, match="signing secret"):
                await startup()
