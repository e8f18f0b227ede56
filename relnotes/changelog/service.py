from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from relnotes.changelog.attribution import AuthorResolver
from relnotes.changelog.classifier import CommitClassifier, ScopedHeaderClassifier, classify
from relnotes.changelog.errors import ChangelogError, GraphTraversalError, NoTagsError
from relnotes.changelog.markdown import join_releases, render_release
from relnotes.changelog.model import PackageChangelog, ReleaseWindow
from relnotes.changelog.ranges import resolve_history, resolve_latest
from relnotes.changelog.walker import BoundaryRule, walk_window
from relnotes.core.config import ChangelogConfig
from relnotes.core.result import Err, Ok, Result
from relnotes.git.repository import Repository
from relnotes.output.console import ConsoleProtocol

type ChangelogMode = Literal["latest", "all"]


@dataclass(frozen=True, slots=True)
class ChangelogReport:
    changelogs: list[PackageChangelog]
    skipped: list[NoTagsError]
    failures: list[GraphTraversalError]

    def has_failures(self) -> bool:
        return bool(self.failures)


class ChangelogService:
    """Generate one markdown document per configured package.

    Packages are processed one after another. A package without release
    tags is skipped with a warning; a package whose history cannot be read
    is reported as a failure. Neither stops the remaining packages.
    """

    def __init__(
        self,
        *,
        repo: Repository,
        config: ChangelogConfig,
        resolver: AuthorResolver,
        console: ConsoleProtocol,
        classifier: CommitClassifier | None = None,
        rule: BoundaryRule = BoundaryRule.INCLUSIVE_IF_ROOT,
    ) -> None:
        self._repo = repo
        self._config = config
        self._resolver = resolver
        self._console = console
        self._rule = rule
        if classifier is None:
            classifier = (
                ScopedHeaderClassifier.strict()
                if config.strict_header
                else ScopedHeaderClassifier()
            )
        self._classifier = classifier

    def run(self, mode: ChangelogMode, *, skip_empty: bool = False) -> ChangelogReport:
        """Generate changelogs for every configured package.

        Args:
            mode: "latest" for the newest release only, "all" for full history
            skip_empty: Omit packages whose releases have no classified commits
        """
        changelogs: list[PackageChangelog] = []
        skipped: list[NoTagsError] = []
        failures: list[GraphTraversalError] = []

        for package in self._config.packages:
            self._console.info(f"generating changelog for {package}")
            if not self._classifier.accepts(package):
                self._console.warning(
                    f"{package}: commit headers cannot name this package with the current "
                    "scope pattern; set strict_header = true"
                )
            result = self.package_changelog(package, mode)
            match result:
                case Ok(changelog):
                    if skip_empty and changelog.entries == 0:
                        self._console.print(f"{package}: no changes, skipped")
                        continue
                    changelogs.append(changelog)
                case Err(NoTagsError() as e):
                    self._console.warning(f"{package}: {e.pretty()}")
                    skipped.append(e)
                case Err(GraphTraversalError() as e):
                    self._console.error(e.pretty())
                    failures.append(e)

        return ChangelogReport(changelogs=changelogs, skipped=skipped, failures=failures)

    def package_changelog(
        self, package: str, mode: ChangelogMode
    ) -> Result[PackageChangelog, ChangelogError]:
        windows = self._windows(package, mode)
        if isinstance(windows, Err):
            return Err(_with_package(windows.error, package))

        seen: set[str] = set()
        sections: list[str] = []
        total = 0
        for window in windows.value:
            commits = walk_window(self._repo, window, self._rule)
            if isinstance(commits, Err):
                return Err(replace(commits.error, package=package))

            selected = classify(commits.value, package, self._classifier, seen)
            entries = [self._resolver.attribute(commit) for commit in selected]
            total += len(entries)
            sections.append(render_release(window.tag, entries, self._config.empty_notice))

        return Ok(
            PackageChangelog(
                package=package,
                content=join_releases(sections),
                releases=len(sections),
                entries=total,
            )
        )

    def _windows(
        self, package: str, mode: ChangelogMode
    ) -> Result[list[ReleaseWindow], ChangelogError]:
        scope = self._config.tag_scope(package)
        if mode == "latest":
            return resolve_latest(self._repo, scope).map(lambda window: [window])
        return resolve_history(
            self._repo,
            scope,
            include_first_release=self._config.include_first_release,
        )


def _with_package(error: ChangelogError, package: str) -> ChangelogError:
    if isinstance(error, GraphTraversalError):
        return replace(error, package=package)
    return error
