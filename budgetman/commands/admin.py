"""Admin commands for init, export and listing categories."""

import sys
import tomllib
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from budgetman.config import create_default_config, get_config_path, load_settings
from budgetman.session import load_session
from budgetman.store import JsonFileBackend, TransactionStore

console = Console()


def init_command(force: bool = False) -> None:
    """Initialize budgetman configuration and an empty store."""
    config_path = get_config_path()

    try:
        if config_path.exists() and not force:
            console.print("[red]Initialization failed:[/red]", style="bold")
            console.print(f"  Config already exists: {escape(str(config_path))}")
            console.print("\n[yellow]Use 'budgetman init --force' to overwrite[/yellow]")
            sys.exit(1)

        console.print(f"[cyan]Creating config file at {escape(str(config_path))}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        settings = load_settings(config_path)
        store = TransactionStore(JsonFileBackend(settings.data_dir))
        store.load()
        if len(store) == 0 and store.load_error is None:
            if not store.persist():
                error = escape(str(store.persist_error))
                console.print(f"[red]Could not create store: {error}[/red]", style="bold")
                sys.exit(1)
            console.print("[green]✓[/green] Empty store created")
        else:
            console.print(f"[dim]Keeping existing store ({len(store)} transactions)[/dim]")

        console.print("\n[green]Initialization complete![/green]", style="bold")
        console.print(f"[dim]Config: {escape(str(config_path))}[/dim]")
        console.print(f"[dim]Data: {escape(str(settings.data_dir))}[/dim]")

    except OSError as e:
        console.print(f"[red]Filesystem error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def export_command(output: str | None = None) -> None:
    """Export all transactions to a JSON file."""
    try:
        _, session = load_session()
        path = session.export_to_file(Path(output).expanduser() if output else None)
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Export failed: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Exported {len(session.store)} transactions to: {escape(str(path))}")


def categories_command() -> None:
    """List configured categories."""
    try:
        settings = load_settings()
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    for idx, category in enumerate(settings.categories, 1):
        console.print(f"  {idx}. {escape(category)}")
