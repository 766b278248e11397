# topmark:header:start
#
#   project      : WxmlFmt
#   file         : file_resolver.py
#   file_relpath : src/wxmlfmt/file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve the input files of a CLI run.

Positional arguments are expanded (directories recursively to ``**/*.wxml``,
globs relative to the current working directory), then exclude patterns
(``.gitignore`` semantics via ``pathspec``) are subtracted. The result is a
deterministic, sorted list of files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Final

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from wxmlfmt.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wxmlfmt.config.logging import WxmlfmtLogger

logger: WxmlfmtLogger = get_logger(__name__)

WXML_SUFFIX: Final[str] = ".wxml"


@dataclass
class ResolvedFiles:
    """Files selected for a run.

    Attributes:
        files (list[Path]): Existing files to process, sorted.
        missing (list[Path]): Literal paths that do not exist.
        unmatched (list[str]): Glob patterns that matched nothing.
    """

    files: list[Path] = field(default_factory=lambda: [])
    missing: list[Path] = field(default_factory=lambda: [])
    unmatched: list[str] = field(default_factory=lambda: [])


def load_patterns_from_file(path: Path) -> list[str]:
    """Load non-empty, non-comment patterns from a text file.

    Args:
        path (Path): The pattern file.

    Returns:
        list[str]: The patterns (empty when the file cannot be read).
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Cannot read patterns from '%s': %s", path, e)
        return []
    patterns: list[str] = []
    for line in text.splitlines():
        s: str = line.strip()
        if not s or s.startswith("#"):
            continue
        patterns.append(s)
    logger.debug("Loaded %d pattern(s) from %s", len(patterns), path)
    return patterns


def _rel_for_match(path: Path, base: Path) -> str:
    """Return a POSIX-style relative path (or absolute as fallback) for PathSpec matching."""
    try:
        return path.resolve().relative_to(base.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def _expand(arg: str, base: Path, resolved: ResolvedFiles) -> set[Path]:
    """Expand one positional argument into candidate files."""
    candidate: Path = Path(arg)
    if any(ch in arg for ch in "*?["):
        pattern_base: Path = base
        pattern: str = arg
        if candidate.is_absolute():
            pattern_base = Path(candidate.anchor)
            pattern = str(candidate.relative_to(candidate.anchor))
        expanded: set[Path] = {p for p in pattern_base.glob(pattern) if p.is_file()}
        if not expanded:
            resolved.unmatched.append(arg)
        return expanded
    if not candidate.is_absolute():
        candidate = base / candidate
    if candidate.is_dir():
        return {p for p in candidate.rglob(f"*{WXML_SUFFIX}") if p.is_file()}
    if candidate.is_file():
        return {candidate}
    resolved.missing.append(candidate)
    return set()


def resolve_file_list(
    paths: Iterable[str],
    *,
    exclude_patterns: Iterable[str] = (),
    exclude_from: Iterable[Path] = (),
    base: Path | None = None,
) -> ResolvedFiles:
    """Return the files to process.

    Args:
        paths (Iterable[str]): Files, directories and globs.
        exclude_patterns (Iterable[str]): Gitwildmatch patterns, relative to ``base``.
        exclude_from (Iterable[Path]): Files holding more patterns, each relative
            to its own directory.
        base (Path | None): Base directory (defaults to the working directory).

    Returns:
        ResolvedFiles: Sorted files plus the arguments that matched nothing.
    """
    root: Path = base or Path.cwd()
    resolved = ResolvedFiles()
    candidates: set[Path] = set()
    for arg in paths:
        candidates |= _expand(arg, root, resolved)

    for up in resolved.unmatched:
        logger.warning("No matches for glob pattern: %s", up)
    for ml in resolved.missing:
        logger.warning("No such file or directory: %s", ml)

    patterns: list[str] = list(exclude_patterns)
    if patterns:
        spec_root: PathSpec = PathSpec.from_lines(GitWildMatchPattern, patterns)
        candidates = {p for p in candidates if not spec_root.match_file(_rel_for_match(p, root))}
    for source in exclude_from:
        pats: list[str] = load_patterns_from_file(source)
        if not pats:
            continue
        spec_src: PathSpec = PathSpec.from_lines(GitWildMatchPattern, pats)
        source_base: Path = source.parent
        candidates = {
            p for p in candidates if not spec_src.match_file(_rel_for_match(p, source_base))
        }

    resolved.files = sorted(candidates)
    logger.trace("Files to process: %d -- %s", len(resolved.files), resolved.files)
    return resolved
