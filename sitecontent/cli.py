"""CLI entrypoints for the content pipeline."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from .config import Config, load_config
from .errors import ContentError, ContentValidationError
from .feeds import write_feed
from .ingest import load_all, load_collections

console = Console()
app = typer.Typer(help="Validate site content collections and generate the blog feed.")

ConfigPathOption = Annotated[
    str,
    typer.Option("--config", "-c", help="Path to configuration file or project directory."),
]


@app.command()
def check(config_path: ConfigPathOption = ".") -> None:
    """Validate every configured collection."""
    config = _load(config_path)
    try:
        collections = load_collections(config)
    except ContentError as exc:
        _print_content_error(exc)
        raise typer.Exit(code=1) from exc

    console.print(f"[bold blue]{escape(config.project_name)}[/]: content collections are valid.")
    for collection, entries in collections.items():
        console.print(
            f"[bold green]{collection.value}[/]: {len(entries)} valid entr"
            f"{'y' if len(entries) == 1 else 'ies'} in {_display_path(config.collection_dir(collection))}"
        )


@app.command()
def feed(
    config_path: ConfigPathOption = ".",
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Override the feed output path."),
    ] = None,
) -> None:
    """Render the syndication feed for the configured collection."""
    config = _load(config_path)
    if output is not None:
        config.feed.output_path = output.resolve()

    collection = config.feed.collection
    try:
        entries = load_all(collection, config.collection_dir(collection))
    except ContentError as exc:
        _print_content_error(exc)
        raise typer.Exit(code=1) from exc

    path = write_feed(config, entries)
    if path is None:
        console.print("[bold yellow]Feed[/]: generation disabled in configuration.")
        return
    console.print(f"[bold green]Feed[/]: wrote {len(entries)} item(s) to {_display_path(path)}")


def _print_content_error(exc: ContentError) -> None:
    console.print(f"[bold red]Content build failed[/]: {escape(str(exc))}")
    if isinstance(exc, ContentValidationError):
        for error in exc.errors:
            console.print(f"  - {escape(error.describe())}")


def _display_path(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def _load(path: str) -> Config:
    try:
        return load_config(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Config file not found: {path}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
