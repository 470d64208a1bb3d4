from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path, PurePath, PurePosixPath


def matches_any(globs: Iterable[str], rel_path: PurePath) -> bool:
    """True when ``rel_path`` (relative to the scan root) matches one of ``globs``.

    ``**/`` prefixes also match at the root, and directory patterns such as
    ``**/build/**`` match everything below any ``build`` directory.
    """
    rel = rel_path.as_posix().removeprefix("./")
    candidate = PurePosixPath(rel)
    return any(_match_one(glob.removeprefix("./"), rel, candidate) for glob in globs)


def _match_one(pattern: str, rel: str, candidate: PurePosixPath) -> bool:
    if candidate.match(pattern):
        return True
    if pattern.startswith("**/") and candidate.match(pattern[3:]):
        return True
    if "/**" not in pattern:
        return False
    base = pattern.split("/**", 1)[0].removeprefix("**/")
    return f"/{base}/" in f"/{rel}/"


def _walk(root: Path, include_globs: list[str], exclude_globs: list[str]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        rel_dir = current.relative_to(root)
        # prune excluded directories before descending
        dirnames[:] = [d for d in dirnames if not matches_any(exclude_globs, rel_dir / d)]
        for name in filenames:
            rel = rel_dir / name
            if matches_any(include_globs, rel) and not matches_any(exclude_globs, rel):
                yield current / name


def _relative_to_cwd(path: Path) -> Path:
    if not path.is_absolute():
        return path
    try:
        return path.relative_to(Path.cwd())
    except ValueError:
        return Path(path.name)


def collect_files(
    paths: Iterable[str], include_globs: list[str], exclude_globs: list[str]
) -> list[str]:
    """Return absolute, de-duplicated source paths in ordinal order.

    Directories are walked recursively; explicit files are matched against the
    globs relative to the working directory. Missing paths are ignored.
    """
    found: set[str] = set()
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            found.update(str(item.resolve()) for item in _walk(path, include_globs, exclude_globs))
        elif path.is_file():
            rel = _relative_to_cwd(path)
            if matches_any(include_globs, rel) and not matches_any(exclude_globs, rel):
                found.add(str(path.resolve()))
    return sorted(found)
