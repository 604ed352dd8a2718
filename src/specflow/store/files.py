"""File-backed spec store.

Every spec lives at ``<root>/.spec/<name>_<category>_spec.md``. Writes replace
the whole file through a sibling temp file, so readers never see a partial
document.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from specflow.errors import SpecNotFoundError

logger = logging.getLogger(__name__)

SPEC_DIR_NAME = ".spec"
SPEC_SUFFIX = "_spec.md"

CATEGORIES = ("frontend", "backend", "mobile", "design")
DEFAULT_CATEGORY = "frontend"

ROOT_MARKERS = ("pyproject.toml", "package.json", ".git")


@dataclass(frozen=True)
class SpecEntry:
    """One row of a directory listing."""

    name: str
    category: str
    file_path: Path


def find_project_root(start: Path | str | None = None) -> Path:
    """Walk up from ``start`` (default: cwd) to the nearest directory with a root marker.

    Falls back to ``start`` itself when no ancestor has one.
    """
    origin = Path(start) if start is not None else Path.cwd()
    origin = origin.resolve()
    p = origin
    while True:
        if any((p / marker).exists() for marker in ROOT_MARKERS):
            return p
        if p == p.parent:
            return origin
        p = p.parent


def parse_spec_filename(filename: str) -> tuple[str, str] | None:
    """Split ``<name>_<category>_spec.md`` back into (name, category).

    Only the known categories count, so underscores inside the name survive:
    ``my_table_backend_spec.md`` -> ("my_table", "backend").
    """
    if not filename.endswith(SPEC_SUFFIX):
        return None
    stem = filename[: -len(SPEC_SUFFIX)]
    for category in CATEGORIES:
        tail = f"_{category}"
        if stem.endswith(tail) and len(stem) > len(tail):
            return stem[: -len(tail)], category
    return None


class SpecStore:
    """Read/write access to the ``.spec`` directory of one project."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    @property
    def spec_dir(self) -> Path:
        return self.root / SPEC_DIR_NAME

    def ensure_dir(self) -> Path:
        """Create the spec directory if needed. Idempotent."""
        self.spec_dir.mkdir(parents=True, exist_ok=True)
        return self.spec_dir

    def path_for(self, name: str, category: str = DEFAULT_CATEGORY) -> Path:
        return self.spec_dir / f"{name}_{category}{SPEC_SUFFIX}"

    def exists(self, name: str, category: str = DEFAULT_CATEGORY) -> bool:
        path = self.path_for(name, category)
        return path.is_file() and os.access(path, os.R_OK)

    def read(self, name: str, category: str = DEFAULT_CATEGORY) -> str:
        path = self.path_for(name, category)
        try:
            # newline="" keeps \r\n and lone \r exactly as written
            with path.open(encoding="utf-8", newline="") as f:
                return f.read()
        except FileNotFoundError:
            raise SpecNotFoundError(name, category) from None

    def write(self, name: str, category: str, content: str) -> Path:
        """Replace the file for (name, category) with ``content``. Returns the resolved path."""
        self.ensure_dir()
        path = self.path_for(name, category)
        fd, tmp_name = tempfile.mkstemp(dir=self.spec_dir, prefix=".tmp-")
        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            tmp.chmod(0o644)
            tmp.replace(path)
        except OSError:
            try:
                tmp.unlink(missing_ok=True)
            except OSError:
                logger.warning("Could not remove temp file %s", tmp)
            raise
        logger.debug("Wrote %s (%d chars)", path, len(content))
        return path.resolve()

    def remove(self, name: str, category: str = DEFAULT_CATEGORY) -> None:
        path = self.path_for(name, category)
        try:
            path.unlink()
        except FileNotFoundError:
            raise SpecNotFoundError(name, category) from None
        logger.debug("Removed %s", path)

    def list(self) -> list[SpecEntry]:
        """List well-formed spec files (non-recursive). Missing directory -> empty list."""
        if not self.spec_dir.is_dir():
            return []

        entries: list[SpecEntry] = []
        for path in self.spec_dir.iterdir():
            if not path.is_file():
                continue
            parsed = parse_spec_filename(path.name)
            if parsed is None:
                logger.debug("Skipping non-spec file: %s", path.name)
                continue
            name, category = parsed
            entries.append(SpecEntry(name=name, category=category, file_path=path))
        entries.sort(key=lambda e: (e.name, e.category))
        return entries
