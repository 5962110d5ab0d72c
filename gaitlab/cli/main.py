"""
GaitLab Backend - CLI Application
"""
import json
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from gaitlab.config import settings
from gaitlab.core.exceptions import GaitLabError
from gaitlab.logger import logger, logger_manager

# Create Typer app
app = typer.Typer(
    name="gaitlab",
    help="GaitLab gait data CLI",
    add_completion=False,
)

console = Console()


def _services():
    from gaitlab.models import SessionLocal, engine, init_db
    from gaitlab.services.container import build_services

    init_db(engine)
    return build_services(SessionLocal, settings)


def _apply_log_level(level: str) -> str:
    try:
        return logger_manager.set_level(level)
    except ValueError as e:
        console.print(f"[red]✗[/red] Error: {e}")
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", "-v", help="Show version and exit"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log file level for this run")
):
    """
    GaitLab Backend CLI

    Collects quaternion readings from wearable devices into experiment sessions.
    """
    if version:
        console.print(f"[cyan]{settings.APP_NAME}[/cyan] v{settings.APP_VERSION}")
        raise typer.Exit()

    if log_level:
        _apply_log_level(log_level)

    if ctx.invoked_subcommand is None:
        console.print(Panel.fit(
            f"[bold cyan]{settings.APP_NAME}[/bold cyan]\n"
            f"[dim]Version {settings.APP_VERSION}[/dim]\n\n"
            f"[yellow]Use --help to see available commands[/yellow]",
            box=box.ROUNDED,
            border_style="cyan"
        ))


@app.command()
def server(
    host: str = typer.Option(settings.API.host, "--host", "-h", help="Server host"),
    port: int = typer.Option(settings.API.port, "--port", "-p", help="Server port"),
    reload: bool = typer.Option(settings.DEBUG, "--reload", "-r", help="Enable auto-reload")
):
    """
    Start the FastAPI server
    """
    import uvicorn

    console.print(f"[green]Starting server at http://{host}:{port}[/green]")
    console.print(f"[dim]API docs: http://{host}:{port}/docs[/dim]\n")

    logger.info(f"Starting server via CLI at {host}:{port}")

    uvicorn.run(
        "gaitlab.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@app.command("init-db")
def init_db():
    """
    Initialize the database (create tables and indexes)
    """
    from gaitlab.models import init_db as initialize_database, engine

    console.print("[yellow]Initializing database...[/yellow]")
    logger.info("Initializing database via CLI")

    try:
        initialize_database(engine)
        console.print("[green]✓[/green] Database initialized successfully")
        logger.success("Database initialized via CLI")
    except Exception as e:
        console.print(f"[red]✗[/red] Error: {e}")
        logger.error(f"Database initialization failed: {e}")
        raise typer.Exit(code=1)


@app.command()
def sessions():
    """
    List experiment sessions, most recent first
    """
    try:
        rows = _services().lifecycle.list()
    except GaitLabError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)

    if not rows:
        console.print("[yellow]No sessions recorded yet[/yellow]")
        return

    table = Table(title="Experiment Sessions", box=box.ROUNDED)
    table.add_column("Name", style="cyan")
    table.add_column("Start", style="green")
    table.add_column("End", style="green")
    table.add_column("Notes", style="dim")

    for row in rows:
        table.add_row(
            row.experiment_name,
            row.start_time,
            row.end_time or "[yellow]open[/yellow]",
            row.notes or "",
        )

    console.print(table)


@app.command()
def export(
    name: str = typer.Argument(..., help="Experiment name"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file")
):
    """
    Write the readings of a closed session to a JSON file
    """
    try:
        result = _services().window_query.require_complete(name)
    except GaitLabError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)

    output = output or Path(f"{name}_gait_data.json")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(result.model_dump(mode="json"), indent=2), encoding="utf-8")

    console.print(f"[green]✓[/green] Exported {result.data_count} readings to {output}")
    logger.info(f"Exported {result.data_count} readings for '{name}' to {output}")


@app.command("log-level")
def log_level(
    level: Optional[str] = typer.Argument(None, help="New level (TRACE, DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL)")
):
    """
    Show the log file level, or change it
    """
    if level:
        new_level = _apply_log_level(level)
        console.print(f"[green]✓[/green] Log level changed to: [cyan]{new_level}[/cyan]")
        return

    table = Table(title="Log Level Configuration", box=box.ROUNDED)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Current Level", logger_manager.get_level())
    table.add_row("Available Levels", ", ".join(logger_manager.available_levels()))
    table.add_row("Log File", str(logger_manager.file_path))
    console.print(table)


if __name__ == "__main__":
    app()
