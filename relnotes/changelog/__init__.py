"""Changelog generation engine.

Pipeline per package:
    tags -> release windows -> commits -> classified commits -> attribution -> markdown

Usage:
    from relnotes.changelog import ChangelogService

    service = ChangelogService(repo=repo, config=cfg.changelog, resolver=resolver, console=console)
    report = service.run("latest")
"""

from relnotes.changelog.attribution import AuthorCache, AuthorResolver, find_pull_request
from relnotes.changelog.classifier import (
    CONVENTIONAL_SCOPE_PATTERN,
    LEGACY_SCOPE_PATTERN,
    CommitClassifier,
    ScopedHeaderClassifier,
    classify,
)
from relnotes.changelog.errors import (
    AttributionLookupError,
    GraphTraversalError,
    NoTagsError,
    WriteError,
)
from relnotes.changelog.markdown import join_releases, render_release
from relnotes.changelog.model import CommitRecord, PackageChangelog, ReleaseWindow, Tag
from relnotes.changelog.ranges import resolve_history, resolve_latest
from relnotes.changelog.service import ChangelogReport, ChangelogService
from relnotes.changelog.tags import PackageVersion, SemVer, package_tags, parse_tag_version
from relnotes.changelog.walker import BoundaryRule, walk_window
from relnotes.changelog.writer import write_changelogs

__all__ = [
    # Tags
    "PackageVersion",
    "SemVer",
    "package_tags",
    "parse_tag_version",
    # Ranges and history
    "BoundaryRule",
    "ReleaseWindow",
    "resolve_history",
    "resolve_latest",
    "walk_window",
    # Classification, attribution, rendering
    "CONVENTIONAL_SCOPE_PATTERN",
    "LEGACY_SCOPE_PATTERN",
    "AuthorCache",
    "AuthorResolver",
    "CommitClassifier",
    "CommitRecord",
    "ScopedHeaderClassifier",
    "Tag",
    "classify",
    "find_pull_request",
    "join_releases",
    "render_release",
    # Orchestration
    "ChangelogReport",
    "ChangelogService",
    "PackageChangelog",
    "write_changelogs",
    # Errors
    "AttributionLookupError",
    "GraphTraversalError",
    "NoTagsError",
    "WriteError",
]
