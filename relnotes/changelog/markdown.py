from __future__ import annotations

from collections.abc import Sequence

from relnotes.changelog.model import Tag
from relnotes.core.config import DEFAULT_EMPTY_NOTICE

__all__ = ["DEFAULT_EMPTY_NOTICE", "join_releases", "render_release"]


def render_release(
    tag: Tag,
    entries: Sequence[str],
    empty_notice: str = DEFAULT_EMPTY_NOTICE,
) -> str:
    """Markdown section for one release.

    A release without entries still gets a section with a single
    ``empty_notice`` bullet.
    """
    lines: list[str] = []
    lines.append(f"## {tag.name}")
    lines.append("")
    lines.append(f"`{tag.release_date}`")
    lines.append("")

    bullets = entries or [empty_notice]
    for entry in bullets:
        lines.append(f"* {entry}")

    return "\n".join(lines) + "\n"


def join_releases(sections: Sequence[str]) -> str:
    """Concatenate release sections (already newest first) with one blank line."""
    return "\n".join(sections)
