"""Generate commands - write per-package changelogs from git history."""

from __future__ import annotations

from pathlib import Path

import typer

from relnotes.changelog.service import ChangelogMode
from relnotes.changelog.writer import write_changelogs
from relnotes.cli.commands._helpers import exit_on_error
from relnotes.cli.context import ContextOptions, build_context
from relnotes.core.errors import ErrorCode
from relnotes.core.result import Ok


def latest(
    repo: Path = typer.Option(Path("."), "--repo", "-r", help="Repository root."),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to relnotes.toml."),
    package: list[str] | None = typer.Option(
        None, "--package", "-p", help="Package to document (repeatable, overrides config)."
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output directory."),
    no_lookup: bool = typer.Option(
        False, "--no-lookup", help="Do not query GitHub for pull request authors."
    ),
    skip_empty: bool = typer.Option(
        False, "--skip-empty", help="Omit packages without classified commits."
    ),
) -> None:
    """Write the newest release of each package."""
    _generate(
        "latest",
        ContextOptions(
            repo=repo,
            config=config,
            packages=tuple(package or ()),
            output=output,
            no_lookup=no_lookup,
        ),
        skip_empty=skip_empty,
    )


def all_releases(
    repo: Path = typer.Option(Path("."), "--repo", "-r", help="Repository root."),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to relnotes.toml."),
    package: list[str] | None = typer.Option(
        None, "--package", "-p", help="Package to document (repeatable, overrides config)."
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output directory."),
    no_lookup: bool = typer.Option(
        False, "--no-lookup", help="Do not query GitHub for pull request authors."
    ),
) -> None:
    """Write every release of each package, newest first."""
    _generate(
        "all",
        ContextOptions(
            repo=repo,
            config=config,
            packages=tuple(package or ()),
            output=output,
            no_lookup=no_lookup,
        ),
        skip_empty=False,
    )


def _generate(mode: ChangelogMode, options: ContextOptions, *, skip_empty: bool) -> None:
    ctx = build_context(options)
    report = ctx.service.run(mode, skip_empty=skip_empty)

    written = write_changelogs(ctx.output_dir, report.changelogs)
    exit_on_error(written, ctx.console, ErrorCode.IO_ERROR)
    if isinstance(written, Ok):
        ctx.console.success(f"wrote {len(written.value)} changelog(s) to {ctx.output_dir}")

    if report.has_failures():
        raise typer.Exit(code=int(ErrorCode.GIT_ERROR))
