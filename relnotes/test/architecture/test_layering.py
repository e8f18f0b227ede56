"""Import and call-site policies for the relnotes package."""

from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ImportRef:
    module: str
    line: int


def package_root() -> Path:
    return Path(__file__).resolve().parents[2]


def iter_source_files() -> list[Path]:
    root = package_root()
    files: list[Path] = []
    for path in sorted(root.rglob("*.py")):
        rel = path.relative_to(root)
        if rel.parts[0] == "test" or "__pycache__" in rel.parts:
            continue
        files.append(path)
    return files


def read_tree(path: Path) -> ast.AST:
    return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))


def parse_imports(path: Path) -> list[ImportRef]:
    imports: list[ImportRef] = []
    for node in ast.walk(read_tree(path)):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.append(ImportRef(module=alias.name, line=node.lineno))
        elif isinstance(node, ast.ImportFrom) and not node.level and node.module:
            imports.append(ImportRef(module=node.module, line=node.lineno))
    return imports


def matches_prefix(module: str, prefix: str) -> bool:
    return module == prefix or module.startswith(prefix + ".")


def _offenders(allowlist: set[str], prefixes: tuple[str, ...]) -> list[str]:
    root = package_root()
    offenders: list[str] = []
    for file_path in iter_source_files():
        rel = file_path.relative_to(root).as_posix()
        if rel in allowlist or any(rel.startswith(a) for a in allowlist if a.endswith("/")):
            continue
        for item in parse_imports(file_path):
            if any(matches_prefix(item.module, p) for p in prefixes):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")
    return offenders


def test_engine_does_not_import_cli() -> None:
    root = package_root()
    offenders: list[str] = []
    for base in ("changelog", "core", "git", "github", "output", "platform"):
        for file_path in sorted((root / base).rglob("*.py")):
            for item in parse_imports(file_path):
                if matches_prefix(item.module, "relnotes.cli"):
                    rel = file_path.relative_to(root).as_posix()
                    offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")

    assert not offenders, "engine -> cli dependency violations:\n" + "\n".join(offenders)


def test_rich_is_limited_to_console() -> None:
    offenders = _offenders({"output/console.py"}, ("rich",))

    assert not offenders, "Direct rich usage policy violations:\n" + "\n".join(offenders)


def test_typer_is_limited_to_cli() -> None:
    offenders = _offenders({"cli/"}, ("typer",))

    assert not offenders, "Direct typer usage policy violations:\n" + "\n".join(offenders)


def test_subprocess_is_limited_to_process_module() -> None:
    offenders = _offenders({"platform/process.py"}, ("subprocess",))

    assert not offenders, "Subprocess policy violations:\n" + "\n".join(offenders)


def test_http_is_limited_to_http_module() -> None:
    offenders = _offenders({"github/http.py"}, ("urllib",))

    assert not offenders, "HTTP policy violations:\n" + "\n".join(offenders)
