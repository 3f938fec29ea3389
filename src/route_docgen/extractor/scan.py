"""Locate route files inside a project tree."""

from pathlib import Path

DEFAULT_PATTERN = "**/routes/**/*.js"
IGNORED_DIRS = {"node_modules", "test", "tests"}


def find_route_files(project: Path, pattern: str = DEFAULT_PATTERN) -> list[Path]:
    """Return files under project matching a glob pattern, sorted.

    Anything inside node_modules/, test/ or tests/ is skipped.
    """
    matches = []
    for path in project.glob(pattern):
        if not path.is_file():
            continue
        if IGNORED_DIRS & set(path.relative_to(project).parts[:-1]):
            continue
        matches.append(path)
    return sorted(matches)
