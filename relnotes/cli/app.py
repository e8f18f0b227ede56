from __future__ import annotations

import typer

from relnotes import __version__
from relnotes.cli.commands.generate import all_releases, latest


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Generate per-package release notes from git tags and commit history.",
)


# Commands
app.command()(latest)
app.command("all")(all_releases)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    pass


def main() -> None:
    app()
