"""CLI entry point — scan a directory of repositories, report unsaved work."""

import logging
from pathlib import Path
from typing import Optional

import click
import typer

from . import __version__
from .config import load_config
from .errors import ConfigError, InvalidRoot
from .format import format_human, format_json
from .models import ScanReport
from .scanner import scan

app = typer.Typer(help="Find git repositories with uncommitted or unpushed work.")


def _err(msg: str) -> None:
    """Raise a styled error (red box) — used for all CLI errors."""
    raise click.BadParameter(msg)


def _setup_logging(verbose: bool) -> None:
    """Send log records to stderr; DEBUG with --verbose, else WARNING."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger("ggs")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.propagate = False


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ggs {__version__}")
        raise typer.Exit()


def _ci_exit(report: ScanReport) -> None:
    """Exit 1 if any repository has uncommitted or unpushed work."""
    if report.needs_attention:
        raise typer.Exit(1)


@app.command()
def main(
    path: Path = typer.Argument(..., help="Directory whose subdirectories are checked"),
    details: bool = typer.Option(False, "--details", "-d", help="Show changed files, ahead/behind counts and errors"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Also list clean repositories"),
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", dir_okay=False, help="YAML config file (default: <path>/.ggs.yaml)"),
    jobs: Optional[int] = typer.Option(None, "--jobs", min=1, help="Check this many repositories in parallel"),
    ci: bool = typer.Option(False, "--ci", help="CI mode: exit 1 if any repo is dirty or unpushed"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
) -> None:
    """Report which repositories under PATH have uncommitted or unpushed work."""
    _setup_logging(verbose)
    try:
        config = load_config(config_path, root=path).with_overrides(jobs=jobs)
        report = scan(path, config=config)
    except (InvalidRoot, ConfigError) as e:
        _err(str(e))

    if json_out:
        typer.echo(format_json(report))
    else:
        typer.echo(format_human(report, details=details, show_all=show_all))

    if ci:
        _ci_exit(report)


def _main() -> None:
    app()


if __name__ == "__main__":
    _main()
