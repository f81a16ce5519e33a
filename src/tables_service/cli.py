"""Command line entry point for running and administering the service."""

import typer
from rich.console import Console
from rich.panel import Panel

from tables_service.runtime.context import get_config

app = typer.Typer(
    help="Tables service CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Host to bind; defaults to app.host"),
    port: int | None = typer.Option(None, help="Port to bind; defaults to app.port"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """Start the HTTP server."""
    import uvicorn

    config = get_config()
    host = host or config.app.host
    port = port or config.app.port

    console.print(
        Panel.fit(
            f"[bold green]Serving tables API on http://{host}:{port}[/bold green]",
            border_style="green",
        )
    )
    uvicorn.run(
        "tables_service.api.http.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )


@app.command(name="init-db")
def init_db_command() -> None:
    """Create the database schema."""
    from tables_service.runtime.init_db import init_db

    init_db()
    console.print("[green]Database tables created[/green]")


@app.command(name="issue-token")
def issue_token(
    subject: str = typer.Option("developer", help="Subject (sub) claim"),
    scope: list[str] = typer.Option([], "--scope", help="Scope to grant; repeatable"),
    role: list[str] = typer.Option([], "--role", help="Role to grant; repeatable"),
    expires_in: int = typer.Option(3600, help="Token lifetime in seconds"),
) -> None:
    """Mint a bearer token signed with the configured secret."""
    from tables_service.core.services.jwt.jwt_gen import JwtGeneratorService

    claims = {}
    if scope:
        claims["scope"] = " ".join(scope)
    if role:
        claims["roles"] = list(role)

    try:
        token = JwtGeneratorService(get_config()).generate_jwt(
            subject, claims=claims, expires_in_seconds=expires_in
        )
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc
    typer.echo(token)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
