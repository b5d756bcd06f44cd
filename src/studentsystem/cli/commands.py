"""CLI commands for the student system.

Running `studentsys` with no command creates the schema, seeds the sample
data and prints every query section. Commands:
- init-db: Create the schema only
- seed: Create the schema and seed empty tables
- report: Print the query sections
"""

import os
import sqlite3
from collections.abc import Callable
from pathlib import Path
from typing import Optional

import structlog
import typer
from rich.console import Console

from studentsystem.config.app_config import (
    LOG_LEVEL_ENV,
    ConfigurationError,
    load_app_config,
    resolve_db_path,
)
from studentsystem.config.logging_config import configure_logging
from studentsystem.core.report import DEFAULT_STUDENT_NAME, build_report
from studentsystem.core.seed_loader import SeedError, SeedReport, seed_database
from studentsystem.db.database import TABLES, init_db

logger = structlog.get_logger(__name__)

app = typer.Typer(
    name="studentsys",
    help="Student and course records: schema, sample data and reports.",
)

console = Console()


def _fail(message: str) -> None:
    console.print(f"[red]✗ {message}[/red]", soft_wrap=True)
    raise typer.Exit(code=1)


def _run_or_exit(action: Callable[[], None]) -> None:
    """Run an action, turning fatal errors into exit code 1."""
    try:
        action()
    except ConfigurationError as e:
        _fail(f"Invalid configuration: {e}")
    except SeedError as e:
        _fail(f"Seeding failed: {e}")
    except sqlite3.Error as e:
        logger.error("database.error", error=str(e))
        _fail(f"Database error: {e}")


def _prepare_database(ctx: typer.Context) -> Path:
    """Load config, set up logging and initialize the schema."""
    config = load_app_config()
    configure_logging(config.logging.level)

    db_url = ctx.obj.get("db_url") or config.database.url
    db_path = resolve_db_path(db_url)
    init_db(db_path)
    return db_path


def _print_report(student_name: str) -> None:
    for line in build_report(student_name):
        console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)


def _print_seed_summary(report: SeedReport) -> None:
    for table in TABLES:
        if table in report.inserted:
            console.print(f"  [green]✓[/green] {table}: {report.inserted[table]} inserted")
        elif table in report.skipped:
            console.print(f"  [dim]- {table}: already populated, skipped[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    db: Optional[str] = typer.Option(
        None, "--db", help="Database URL (e.g., 'sqlite:///db/studentsystem.db')"
    ),
) -> None:
    """Create the schema, seed sample data and print all reports."""
    # Config loading logs too, so logging must be routed to stderr first
    configure_logging(os.environ.get(LOG_LEVEL_ENV, "INFO"))
    ctx.obj = {"db_url": db}

    if ctx.invoked_subcommand is not None:
        return

    def run_all() -> None:
        _prepare_database(ctx)
        seed_database()
        _print_report(DEFAULT_STUDENT_NAME)

    _run_or_exit(run_all)


@app.command(name="init-db")
def init_db_command(ctx: typer.Context) -> None:
    """Create the database schema."""

    def run() -> None:
        db_path = _prepare_database(ctx)
        console.print(f"[green]✓ Database ready:[/green] {db_path}", soft_wrap=True)

    _run_or_exit(run)


@app.command()
def seed(ctx: typer.Context) -> None:
    """Seed every empty table with the sample data."""

    def run() -> None:
        _prepare_database(ctx)
        report = seed_database()
        console.print(f"\n[bold]Sample data ({report.total_inserted} rows inserted):[/bold]")
        _print_seed_summary(report)

    _run_or_exit(run)


@app.command()
def report(
    ctx: typer.Context,
    student: str = typer.Option(
        DEFAULT_STUDENT_NAME, "--student", "-s", help="Student for the homework query"
    ),
) -> None:
    """Print the five query sections."""

    def run() -> None:
        _prepare_database(ctx)
        _print_report(student)

    _run_or_exit(run)
