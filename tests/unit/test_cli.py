"""Tests for the management CLI."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from src.library.cli import app
from src.library.core.services.database.data_initializer import (
    USER_PETER_PARKER_IDENTIFIER,
)
from src.library.core.services.jwt.jwt_utils import preview_jwt
from src.library.runtime.config.config_data import (
    ConfigData,
    DatabaseConfig,
    JWTClaimsConfig,
    JWTConfig,
)
from src.library.runtime.context import with_context

runner = CliRunner()


@pytest.fixture
def cli_database(tmp_path: Path):
    override = ConfigData(database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'cli.db'}"))
    with with_context(override):
        yield


@pytest.mark.usefixtures("cli_database")
class TestCli:
    def test_init_db(self):
        result = runner.invoke(app, ["init-db"])

        assert result.exit_code == 0
        assert "Tables created" in result.output

    def test_seed_then_reseed(self):
        first = runner.invoke(app, ["seed"])
        second = runner.invoke(app, ["seed"])

        assert first.exit_code == 0
        assert "seeded" in first.output
        assert second.exit_code == 0
        assert "nothing seeded" in second.output

    def test_users_lists_seeded_accounts(self):
        runner.invoke(app, ["seed"])

        result = runner.invoke(app, ["users"])

        assert result.exit_code == 0
        assert "Parker" in result.output

    def test_users_empty(self):
        runner.invoke(app, ["init-db"])

        result = runner.invoke(app, ["users"])

        assert "No users found" in result.output

    def test_token_for_seeded_user(self):
        runner.invoke(app, ["seed"])

        result = runner.invoke(app, ["token", "peter.parker@example.com"])

        assert result.exit_code == 0
        token = result.output.strip().splitlines()[-1]
        claims = preview_jwt(token).claims
        assert claims["sub"] == USER_PETER_PARKER_IDENTIFIER
        assert claims["roles"] == ["CURATOR"]
        assert claims["email"] == "peter.parker@example.com"

    def test_token_rejects_unknown_role(self):
        runner.invoke(app, ["init-db"])

        result = runner.invoke(app, ["token", "someone", "--role", "LIBRARIAN"])

        assert result.exit_code == 1
        assert "Unknown role" in result.output

    def test_token_uses_configured_claim_names(self):
        runner.invoke(app, ["seed"])
        override = ConfigData(
            jwt=JWTConfig(
                claims=JWTClaimsConfig(
                    email="mail", given_name="first", family_name="last"
                )
            )
        )

        with with_context(override):
            result = runner.invoke(app, ["token", "peter.parker@example.com"])

        assert result.exit_code == 0
        claims = preview_jwt(result.output.strip().splitlines()[-1]).claims
        assert claims["mail"] == "peter.parker@example.com"
        assert claims["first"] == "Peter"
        assert claims["last"] == "Parker"
        assert "email" not in claims
