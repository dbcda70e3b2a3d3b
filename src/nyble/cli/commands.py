"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from nyble.config import Settings, load_config
from nyble.core.diagnostics import Diagnostics
from nyble.core.pipeline import run_build, run_render


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging from it."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _echo_warnings(diagnostics: Diagnostics) -> None:
    if diagnostics:
        typer.echo(f"{len(diagnostics)} warning(s)", err=True)


def build_cmd(
    root: Annotated[Path, typer.Argument(exists=True, file_okay=False, help="Site source directory")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    site_name: Annotated[Optional[str], typer.Option("--site-name", help="Suffix for post page titles")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = None,
    ):
    """Copy static files, then render the notebook and words pages."""
    settings = _settings(overrides={"output_dir": out, "site_name": site_name, "log_level": log_level})
    diagnostics = Diagnostics()

    try:
        written = run_build(root, settings, diagnostics)
    except (OSError, RuntimeError, ValueError) as e:
        _fail("Build failed", e)

    for path in written:
        typer.echo(f"  {path}")
    typer.echo(f"Built {len(written)} file(s) into {settings.output_dir}/")
    _echo_warnings(diagnostics)


def render_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="Source file to render")],
    ):
    """Render one file and print its HTML to stdout."""
    _settings()
    diagnostics = Diagnostics()
    try:
        html = run_render(path, diagnostics)
    except RuntimeError as e:
        _fail(str(e))
    typer.echo(html)
    _echo_warnings(diagnostics)
