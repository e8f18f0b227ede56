"""Tag name parsing and per-package ordering.

Release tags in a monorepo share one namespace and carry the package scope
and the version: ``<scope>@<version>``, e.g. ``@ant-design/pro-form@2.3.0``
or ``pkg-a@1.1.0``. Tags that do not end in a semantic version are not
release tags and are ignored.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

__all__ = [
    "PackageVersion",
    "SemVer",
    "package_tags",
    "parse_semver",
    "parse_tag_version",
]


_NUM = r"(?:0|[1-9][0-9]*)"
_PRE_ID = rf"(?:{_NUM}|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
_SEMVER_RE = re.compile(
    rf"^({_NUM})\.({_NUM})\.({_NUM})"
    rf"(?:-({_PRE_ID}(?:\.{_PRE_ID})*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def precedence(self) -> tuple[object, ...]:
        """Sort key implementing semver precedence.

        Pre-releases sort before the release they precede; numeric
        identifiers sort before alphanumeric ones; build metadata is ignored.
        """
        if not self.prerelease:
            pre: tuple[object, ...] = (1,)
        else:
            pre = (
                0,
                tuple((0, int(p), "") if p.isdigit() else (1, 0, p) for p in self.prerelease),
            )
        return (self.major, self.minor, self.patch, pre)

    def __lt__(self, other: SemVer) -> bool:
        return self.precedence() < other.precedence()

    def __str__(self) -> str:
        s = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            s += "-" + ".".join(self.prerelease)
        if self.build:
            s += "+" + ".".join(self.build)
        return s


@dataclass(frozen=True, slots=True)
class PackageVersion:
    scope: str
    version: SemVer


def parse_semver(text: str) -> SemVer | None:
    m = _SEMVER_RE.match(text)
    if m is None:
        return None
    return SemVer(
        major=int(m.group(1)),
        minor=int(m.group(2)),
        patch=int(m.group(3)),
        prerelease=tuple(m.group(4).split(".")) if m.group(4) else (),
        build=tuple(m.group(5).split(".")) if m.group(5) else (),
    )


def parse_tag_version(tag_name: str) -> PackageVersion | None:
    """Split ``<scope>@<version>`` on the last ``@``.

    Returns None for tags without a scope or whose suffix is not semver.
    """
    scope, sep, version = tag_name.rpartition("@")
    if not sep or not scope:
        return None
    parsed = parse_semver(version)
    if parsed is None:
        return None
    return PackageVersion(scope=scope, version=parsed)


def package_tags(tag_names: Iterable[str], scope: str) -> list[str]:
    """Release tags of one package, oldest version first.

    The tag scope must equal ``scope``. A scope that merely starts with it
    (``@acme/form-extra`` for ``@acme/form``) belongs to another package,
    unlike a plain prefix match on the tag name.
    """
    found: list[tuple[str, SemVer]] = []
    for name in tag_names:
        parsed = parse_tag_version(name)
        if parsed is not None and parsed.scope == scope:
            found.append((name, parsed.version))

    found.sort(key=lambda item: (item[1].precedence(), item[0]))
    return [name for name, _ in found]
