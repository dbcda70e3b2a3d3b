"""CLI entrypoint: Typer app definition and command registration"""

import typer

from nyble.cli.commands import build_cmd, render_cmd


app = typer.Typer(name="nyble", no_args_is_help=True, help="Render structured-text pages into a static site")

app.command(name="build")(build_cmd)
app.command(name="render")(render_cmd)
