"""Typed configuration loading for relnotes.toml.

The config file is optional. Every value has a default, and command line
options override what the file provides.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import (
    StrDict,
    as_str_dict,
    get_bool,
    get_float,
    get_str,
    get_str_list,
    get_table,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ChangelogConfig",
    "Config",
    "ConfigError",
    "GitHubConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "relnotes.toml"

DEFAULT_OUTPUT_DIR = ".changelogs"
DEFAULT_EMPTY_NOTICE = "Dependency updates"
DEFAULT_WEB_URL = "https://github.com"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or is incomplete."""

    message: str
    path: Path | None = None

    def pretty(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


@dataclass(frozen=True, slots=True)
class ChangelogConfig:
    """Which packages to document and how.

    Attributes:
        packages: Package names; each is the commit scope token and the output file stem
        tag_prefix: Prepended to a package name to get its tag scope
        output_dir: Output directory, relative to the repository root
        empty_notice: Bullet used for releases without classified commits
        strict_header: Use the anchored conventional-commit matcher
        include_first_release: Also pair the oldest tag against its parent in full history
    """

    packages: tuple[str, ...] = ()
    tag_prefix: str = ""
    output_dir: str = DEFAULT_OUTPUT_DIR
    empty_notice: str = DEFAULT_EMPTY_NOTICE
    strict_header: bool = False
    include_first_release: bool = False

    def tag_scope(self, package: str) -> str:
        return f"{self.tag_prefix}{package}"


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """GitHub endpoints and credentials lookup."""

    repo: str | None = None
    repo_url: str | None = None
    web_url: str = DEFAULT_WEB_URL
    api_url: str = DEFAULT_API_URL
    token_env: str = DEFAULT_TOKEN_ENV
    timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    changelog: ChangelogConfig = field(default_factory=ChangelogConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        changelog: StrDict = get_table(data, "changelog") or {}
        github: StrDict = get_table(data, "github") or {}

        return cls(
            changelog=ChangelogConfig(
                packages=get_str_list(changelog, "packages") or (),
                # An empty prefix is meaningful; don't collapse it through get_str.
                tag_prefix=_raw_str(changelog, "tag_prefix") or "",
                output_dir=get_str(changelog, "output_dir") or DEFAULT_OUTPUT_DIR,
                empty_notice=get_str(changelog, "empty_notice") or DEFAULT_EMPTY_NOTICE,
                strict_header=get_bool(changelog, "strict_header") or False,
                include_first_release=get_bool(changelog, "include_first_release") or False,
            ),
            github=GitHubConfig(
                repo=get_str(github, "repo"),
                repo_url=_strip_slash(get_str(github, "repo_url")),
                web_url=_strip_slash(get_str(github, "web_url")) or DEFAULT_WEB_URL,
                api_url=_strip_slash(get_str(github, "api_url")) or DEFAULT_API_URL,
                token_env=get_str(github, "token_env") or DEFAULT_TOKEN_ENV,
                timeout=get_float(github, "timeout") or DEFAULT_HTTP_TIMEOUT_SECONDS,
            ),
        )

    def with_packages(self, packages: tuple[str, ...]) -> Config:
        return replace(self, changelog=replace(self.changelog, packages=packages))

    def with_output_dir(self, output_dir: str) -> Config:
        return replace(self, changelog=replace(self.changelog, output_dir=output_dir))


def _raw_str(table: Mapping[str, object], key: str) -> str | None:
    value = table.get(key)
    return value if isinstance(value, str) else None


def _strip_slash(url: str | None) -> str | None:
    if url is None:
        return None
    return url.rstrip("/") or None


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relnotes.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, defaults otherwise.

    A present but broken file is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
