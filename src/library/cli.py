"""Command-line utilities for running and preparing the library server."""

from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.library.core.security import Role
from src.library.core.services import (
    DbManageService,
    DbSessionService,
    JwtGeneratorService,
)
from src.library.core.services.database.data_initializer import DataInitializer
from src.library.entities.core.user import UserRepository
from src.library.runtime.context import get_config

console = Console()

app = typer.Typer(
    name="library-server",
    help="Library server management CLI",
    rich_markup_mode="rich",
)


@app.command("init-db")
def init_db(
    drop: bool = typer.Option(False, "--drop", help="Drop existing tables first"),
) -> None:
    """Create the database tables."""
    database_service = DbSessionService()
    manager = DbManageService(database_service.engine)
    if drop:
        manager.drop_all()
    manager.create_all()
    console.print(f"[green]Tables created in {get_config().database.url}[/green]")


@app.command("seed")
def seed(
    force: bool = typer.Option(
        False, "--force", help="Add missing sample records even if data exists"
    ),
) -> None:
    """Seed sample users and books."""
    database_service = DbSessionService()
    DbManageService(database_service.engine).create_all()
    with database_service.session_scope() as session:
        seeded = DataInitializer(session).initialize(force=force)
    if seeded:
        console.print("[green]Sample data seeded[/green]")
    else:
        console.print("[yellow]Database already contains data; nothing seeded[/yellow]")


@app.command("users")
def list_users() -> None:
    """List users and their roles."""
    database_service = DbSessionService()
    with database_service.session_scope() as session:
        users = UserRepository(session).list_all()

    if not users:
        console.print("[yellow]No users found. Run 'seed' first.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Identifier", style="cyan")
    table.add_column("Name", style="blue")
    table.add_column("Email", style="green")
    table.add_column("Roles", style="yellow")
    for user in users:
        table.add_row(
            user.id,
            user.full_name,
            user.email or "",
            ", ".join(role.value for role in user.roles),
        )
    console.print(table)


@app.command("token")
def issue_token(
    user_id: str = typer.Argument(..., help="User identifier or email"),
    role: Optional[list[str]] = typer.Option(
        None, "--role", "-r", help="Role to grant; defaults to the user's stored roles"
    ),
    ttl: Optional[int] = typer.Option(None, help="Token lifetime in seconds"),
) -> None:
    """Mint a development bearer token for a user."""
    config = get_config()
    unknown = [r for r in role or [] if Role.parse(r) is None]
    if unknown:
        valid = ", ".join(r.value for r in Role)
        console.print(f"[red]Unknown role(s) {unknown}; valid roles: {valid}[/red]")
        raise typer.Exit(1)
    roles = Role.parse_all(role or [])

    database_service = DbSessionService()
    with database_service.session_scope() as session:
        repo = UserRepository(session)
        user = repo.get_by_email(user_id) if "@" in user_id else repo.get(user_id)

    claims = {}
    subject = user_id
    if user is not None:
        subject = user.id
        roles = roles or frozenset(user.roles)
        claims = {
            config.jwt.claims.email: user.email,
            config.jwt.claims.given_name: user.first_name,
            config.jwt.claims.family_name: user.last_name,
        }

    try:
        token = JwtGeneratorService(config.jwt).generate_access_token(
            subject,
            roles=sorted(r.value for r in roles),
            expires_in_seconds=ttl,
            **{k: v for k, v in claims.items() if v},
        )
    except ValueError as e:
        console.print(f"[red]Failed to generate token: {e}[/red]")
        raise typer.Exit(1) from None

    console.print(
        Panel.fit(
            f"[bold]sub[/bold]: {subject}\n[bold]roles[/bold]: "
            f"{', '.join(sorted(r.value for r in roles)) or '-'}",
            title="Bearer token",
            border_style="cyan",
        )
    )
    print(token)


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind host (defaults to configuration)"),
    port: Optional[int] = typer.Option(None, help="Bind port (defaults to configuration)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "src.library.api.http.app:app",
        host=host or config.app.host,
        port=port or config.app.port,
        reload=reload,
        access_log=False,
    )


if __name__ == "__main__":
    app()
