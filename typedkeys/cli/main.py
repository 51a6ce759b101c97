"""
typedkeys CLI entry point.

Commands:
    typedkeys demo     — Store and read back the example keys
    typedkeys get      — Show the raw cell stored under a name
    typedkeys clear    — Remove every cell in the configured suite
    typedkeys config   — Show the resolved configuration
    typedkeys version  — Show version
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.pretty import Pretty
from rich.table import Table

from typedkeys.core.config import TypedKeysConfig
from typedkeys.core.errors import TypedKeysError
from typedkeys.core.keys import KeyNamespace
from typedkeys.core.logging import setup_logging
from typedkeys.store.factory import open_storage
from typedkeys.store.sqlite import SQLiteStorage

app = typer.Typer(
    name="typedkeys",
    help="typedkeys — typed keys over a preferences store.",
    add_completion=False,
)

console = Console()

DEMO_SUITE = "playground-suite"


# ━━━ Demo key catalogue ━━━


@dataclass
class Score:
    player: str
    points: int


class DemoKeys(KeyNamespace):
    number_of_cakes = KeyNamespace.plist("cake-count", int)
    complex_structure = KeyNamespace.plist("complex-dictionary", dict[str, list[int]])
    score = KeyNamespace.json("highscore", Score)


# ━━━ Helpers ━━━


def _load_config(
    backend: str | None,
    path: str | None,
    suite: str | None,
    verbose: bool = False,
) -> TypedKeysConfig:
    storage: dict[str, Any] = {}
    if backend:
        storage["backend"] = backend
    if path:
        storage["path"] = path
    if suite:
        storage["suite"] = suite
    overrides: dict[str, Any] = {"storage": storage} if storage else {}
    if verbose:
        overrides["logging"] = {"level": "DEBUG"}

    try:
        config = TypedKeysConfig.load(overrides=overrides)
    except TypedKeysError as e:
        console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(1)

    setup_logging(console_level=config.logging.level, log_file=config.logging.file)
    return config


def _describe_raw(value: Any) -> Any:
    """Blobs are shown as text when they are UTF-8 (encoded keys are JSON)."""
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return value
    return value


BackendOpt = typer.Option(None, "--backend", "-b", help="Backend: sqlite or memory")
PathOpt = typer.Option(None, "--path", "-p", help="SQLite database path")
SuiteOpt = typer.Option(None, "--suite", "-s", help="Preference suite (namespace)")


# ━━━ Commands ━━━


@app.command()
def demo(
    backend: str = BackendOpt,
    path: str = PathOpt,
    keep: bool = typer.Option(False, "--keep", help="Leave the demo suite in place"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
) -> None:
    """Write the example keys, read them back, and show the raw highscore blob."""
    config = _load_config(backend, path, DEMO_SUITE, verbose)
    logger = logging.getLogger("typedkeys")
    logger.info(f"Running demo against {config.storage.backend} storage")

    with open_storage(config) as storage:
        storage[DemoKeys.number_of_cakes] = 4
        storage[DemoKeys.complex_structure] = {"a": [1, 2, 3]}
        storage[DemoKeys.score] = Score(player="John", points=3)

        table = Table(title=f"Suite '{DEMO_SUITE}'")
        table.add_column("Key", style="cyan")
        table.add_column("Strategy")
        table.add_column("Type", style="dim")
        table.add_column("Value")
        for key in DemoKeys.all_keys():
            table.add_row(key.name, key.strategy.value, key.type_name, Pretty(storage[key]))
        console.print(table)

        blob = storage.get(DemoKeys.score.name)
        console.print(Panel(Pretty(_describe_raw(blob)), title=f"raw '{DemoKeys.score.name}'", border_style="dim"))

        if not keep and isinstance(storage, SQLiteStorage):
            storage.remove_suite()


@app.command()
def get(
    name: str = typer.Argument(..., help="Cell name"),
    backend: str = BackendOpt,
    path: str = PathOpt,
    suite: str = SuiteOpt,
) -> None:
    """Show the raw value stored under NAME."""
    config = _load_config(backend, path, suite)
    with open_storage(config) as storage:
        try:
            value = storage.get(name)
        except TypedKeysError as e:
            console.print(f"[red]{escape(e.message)}[/red]")
            raise typer.Exit(1)

    if value is None:
        console.print(f"[dim]No value stored under '{name}'[/dim]")
        raise typer.Exit(1)
    console.print(Pretty(_describe_raw(value)))


@app.command()
def clear(
    path: str = PathOpt,
    suite: str = SuiteOpt,
) -> None:
    """Remove every cell in a SQLite suite."""
    config = _load_config("sqlite", path, suite)
    with open_storage(config) as storage:
        removed = storage.remove_suite()  # type: ignore[attr-defined]
    console.print(f"Removed {removed} cell(s) from suite '{config.storage.suite}'")


@app.command()
def config(
    backend: str = BackendOpt,
    path: str = PathOpt,
    suite: str = SuiteOpt,
) -> None:
    """Show the resolved configuration."""
    cfg = _load_config(backend, path, suite)
    console.print(Panel("[bold]typedkeys configuration[/bold]", border_style="cyan"))
    console.print(Pretty(cfg.model_dump()))


@app.command()
def version() -> None:
    """Show typedkeys version."""
    from typedkeys import __version__

    console.print(f"typedkeys v{__version__}")


if __name__ == "__main__":
    app()
