from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from relnotes.changelog.attribution import AuthorCache, AuthorResolver
from relnotes.changelog.service import ChangelogService
from relnotes.cli.commands._helpers import fail
from relnotes.core.config import CONFIG_FILE_NAME, Config, load_config_or_default
from relnotes.core.errors import ErrorCode
from relnotes.core.result import Err, Ok
from relnotes.git.remote import parse_remote_slug
from relnotes.git.repository import Repository
from relnotes.github.api import GitHubApi, fetch_repo_html_url
from relnotes.github.http import HttpClient, RealHttpClient
from relnotes.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class ContextOptions:
    """Command line options shared by the generate commands."""

    repo: Path = Path(".")
    config: Path | None = None
    packages: tuple[str, ...] = ()
    output: Path | None = None
    no_lookup: bool = False


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo: Repository
    config: Config
    console: ConsoleProtocol
    resolver: AuthorResolver
    service: ChangelogService
    output_dir: Path


def build_context(
    options: ContextOptions,
    *,
    console: ConsoleProtocol | None = None,
    http: HttpClient | None = None,
    cache: AuthorCache | None = None,
) -> CLIContext:
    console = console if console is not None else RichConsole()

    try:
        root = options.repo.expanduser().resolve()
    except OSError as e:
        fail(console, f"invalid --repo: {e}", ErrorCode.USER_ERROR)

    repo = Repository(root)
    if not repo.exists():
        fail(console, f"not a git repository: {root}", ErrorCode.USER_ERROR)

    config_path = options.config if options.config is not None else root / CONFIG_FILE_NAME
    match load_config_or_default(config_path):
        case Ok(loaded):
            config = loaded
        case Err(e):
            fail(console, e.pretty(), ErrorCode.CONFIG_ERROR)

    if options.packages:
        config = config.with_packages(options.packages)
    if options.output is not None:
        config = config.with_output_dir(str(options.output))
    if not config.changelog.packages:
        fail(
            console,
            "no packages to document",
            ErrorCode.USER_ERROR,
            hint=f"list them under [changelog] packages in {CONFIG_FILE_NAME} or pass --package",
        )

    resolver = _build_resolver(
        repo=repo,
        config=config,
        console=console,
        http=http,
        cache=cache,
        no_lookup=options.no_lookup,
    )

    service = ChangelogService(
        repo=repo,
        config=config.changelog,
        resolver=resolver,
        console=console,
    )

    return CLIContext(
        repo=repo,
        config=config,
        console=console,
        resolver=resolver,
        service=service,
        output_dir=root / config.changelog.output_dir,
    )


def _repo_slug(repo: Repository, config: Config, console: ConsoleProtocol) -> str:
    if config.github.repo is not None:
        return config.github.repo

    remote = repo.remote_url()
    if isinstance(remote, Err):
        fail(
            console,
            remote.error.message,
            ErrorCode.CONFIG_ERROR,
            hint="set [github] repo = \"owner/name\"",
        )

    slug = parse_remote_slug(remote.value)
    if slug is None:
        fail(
            console,
            f"cannot derive owner/repo from remote URL: {remote.value}",
            ErrorCode.CONFIG_ERROR,
            hint="set [github] repo = \"owner/name\"",
        )
    return slug


def _build_resolver(
    *,
    repo: Repository,
    config: Config,
    console: ConsoleProtocol,
    http: HttpClient | None,
    cache: AuthorCache | None,
    no_lookup: bool,
) -> AuthorResolver:
    github = config.github
    slug = _repo_slug(repo, config, console)

    if no_lookup:
        return AuthorResolver(
            repo_url=github.repo_url or f"{github.web_url}/{slug}",
            web_url=github.web_url,
            lookup=None,
            cache=cache,
            console=console,
        )

    token = os.environ.get(github.token_env, "").strip()
    if not token:
        fail(
            console,
            f"{github.token_env} is not set",
            ErrorCode.CONFIG_ERROR,
            hint="export a GitHub token, or pass --no-lookup to skip author lookups",
        )

    http = http if http is not None else RealHttpClient(timeout=github.timeout)
    api = GitHubApi(api_url=github.api_url, slug=slug, token=token)

    repo_url = github.repo_url
    if repo_url is None:
        match fetch_repo_html_url(http, api):
            case Ok(url):
                repo_url = url
            case Err(e):
                fail(
                    console,
                    f"cannot resolve repository URL: {e}",
                    ErrorCode.NETWORK_ERROR,
                    hint="check network access and the token, or set [github] repo_url",
                )

    return AuthorResolver.for_github(
        http=http,
        api=api,
        repo_url=repo_url,
        web_url=github.web_url,
        cache=cache,
        console=console,
    )
