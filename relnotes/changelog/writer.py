from __future__ import annotations

import shutil
from collections.abc import Sequence
from pathlib import Path

from relnotes.changelog.errors import WriteError
from relnotes.changelog.model import PackageChangelog
from relnotes.core.result import Err, Ok, Result

__all__ = ["changelog_path", "write_changelogs"]


def changelog_path(output_dir: Path, package: str) -> Path:
    return output_dir / f"{package}.md"


def write_changelogs(
    output_dir: Path, changelogs: Sequence[PackageChangelog]
) -> Result[list[Path], WriteError]:
    """Recreate ``output_dir`` and write one ``<package>.md`` per changelog.

    Anything previously in ``output_dir`` is removed first.
    """
    try:
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True)
    except OSError as e:
        return Err(WriteError(message=f"cannot recreate output directory: {e}", path=output_dir))

    written: list[Path] = []
    for changelog in changelogs:
        path = changelog_path(output_dir, changelog.package)
        try:
            path.write_text(changelog.content, encoding="utf-8")
        except OSError as e:
            return Err(WriteError(message=f"failed to write changelog: {e}", path=path))
        written.append(path)

    return Ok(written)
