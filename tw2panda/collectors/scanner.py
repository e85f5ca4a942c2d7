"""File scanning with gitignore-style include/exclude patterns."""

import os
from collections.abc import Iterable
from pathlib import Path

import pathspec

from ..config import DEFAULT_INCLUDE
from ..tw_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.MINER)

# Never descended into
SKIP_DIRS = frozenset(["node_modules", ".git", "dist", "build", ".next", ".panda"])


def _build_spec(patterns: Iterable[str]) -> pathspec.PathSpec | None:
    lines = [p.strip() for p in patterns if p.strip() and not p.strip().startswith("#")]
    if not lines:
        return None
    return pathspec.PathSpec.from_lines(pathspec.patterns.GitWildMatchPattern, lines)


def collect_files(
    root: Path | str,
    include: Iterable[str] | None = None,
    exclude: Iterable[str] | None = None,
) -> list[Path]:
    """Collect source files under ``root``.

    Args:
        root: Project root directory.
        include: Gitignore-style patterns a file must match. Defaults to
            common markup and script extensions.
        exclude: Gitignore-style patterns that drop a file.

    Returns:
        Sorted absolute paths of matching files.
    """
    root_path = Path(root).resolve()
    include_spec = _build_spec(DEFAULT_INCLUDE if include is None else include)
    exclude_spec = _build_spec(exclude or [])

    if include_spec is None:
        return []

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root_path):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
        for filename in filenames:
            path = Path(dirpath) / filename
            relative = path.relative_to(root_path).as_posix()
            if not include_spec.match_file(relative):
                continue
            if exclude_spec is not None and exclude_spec.match_file(relative):
                continue
            files.append(path)

    files.sort()
    logger.debug(f"Collected {len(files)} files under {root_path}")
    return files
