"""Shared fixtures: throwaway git repositories built with the real git binary."""

from __future__ import annotations

import os
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

import pytest

_BASE_TIME = 1_704_067_200  # 2024-01-01T00:00:00Z


def _base_env(home: Path) -> dict[str, str]:
    env = dict(os.environ)
    env.update(
        {
            "HOME": str(home),
            "GIT_CONFIG_NOSYSTEM": "1",
            "GIT_CONFIG_GLOBAL": str(home / ".gitconfig"),
            "GIT_TERMINAL_PROMPT": "0",
        }
    )
    return env


@dataclass
class GitRepoBuilder:
    """Create commits and tags with controlled authors and timestamps.

    Each commit is one hour after the previous one so that git's
    reverse-chronological order is the creation order reversed.
    """

    path: Path
    env: dict[str, str]
    clock: int = _BASE_TIME
    commits: list[str] = field(default_factory=lambda: [])

    def git(self, *args: str, env: dict[str, str] | None = None) -> str:
        proc = subprocess.run(
            ["git", "-C", str(self.path), *args],
            env=env or self.env,
            capture_output=True,
            text=True,
            check=True,
        )
        return proc.stdout.strip()

    def identity_env(self, author: str = "Alice Doe") -> dict[str, str]:
        """Environment with author and committer set to ``author`` at the current clock."""
        stamp = f"{self.clock} +0000"
        env = dict(self.env)
        env.update(
            {
                "GIT_AUTHOR_NAME": author,
                "GIT_AUTHOR_EMAIL": "dev@example.com",
                "GIT_COMMITTER_NAME": author,
                "GIT_COMMITTER_EMAIL": "dev@example.com",
                "GIT_AUTHOR_DATE": stamp,
                "GIT_COMMITTER_DATE": stamp,
            }
        )
        return env

    def commit(self, message: str, *, author: str = "Alice Doe", when: int | None = None) -> str:
        self.clock = when if when is not None else self.clock + 3600
        env = self.identity_env(author)
        self.git(
            "-c",
            "commit.gpgsign=false",
            "commit",
            "-q",
            "--allow-empty",
            "-m",
            message,
            env=env,
        )
        sha = self.git("rev-parse", "HEAD")
        self.commits.append(sha)
        return sha

    def commit_bytes(self, message: bytes) -> str:
        """Commit ``message`` verbatim, bypassing any text encoding, on top of HEAD."""
        self.clock += 3600
        env = self.identity_env()
        tree = self.git("write-tree")
        parent = self.git("rev-parse", "HEAD")
        proc = subprocess.run(
            ["git", "-C", str(self.path), "commit-tree", tree, "-p", parent],
            env=env,
            input=message,
            capture_output=True,
            check=True,
        )
        sha = proc.stdout.decode("ascii").strip()
        self.git("update-ref", "HEAD", sha)
        self.commits.append(sha)
        return sha

    def tag(self, name: str, rev: str = "HEAD", *, annotated: bool = False) -> None:
        if annotated:
            self.git(
                "-c",
                "tag.gpgsign=false",
                "tag",
                "-a",
                name,
                rev,
                "-m",
                f"release {name}",
                env=self.identity_env(),
            )
        else:
            self.git("tag", name, rev)


@pytest.fixture
def git_repo(tmp_path: Path) -> GitRepoBuilder:
    """An empty git repository on branch main."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    home = tmp_path / "home"
    home.mkdir()
    (home / ".gitconfig").write_text("", encoding="utf-8")
    repo_path = tmp_path / "repo"
    repo_path.mkdir()

    builder = GitRepoBuilder(path=repo_path, env=_base_env(home))
    builder.git("init", "-q")
    builder.git("symbolic-ref", "HEAD", "refs/heads/main")
    return builder
