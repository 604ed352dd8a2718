"""Spec service: validation plus create/edit/delete semantics over SpecStore.

Expected outcomes come back as data (``OperationResult.success``). Bad input
raises ``InvalidArgumentError``; a missing spec on ``get`` raises
``SpecNotFoundError``. Disk faults (``OSError``) are not caught here.

Create never overwrites and edit never creates. The existence check and the
write are two separate steps with no lock between them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from specflow.errors import InvalidArgumentError
from specflow.store import CATEGORIES, DEFAULT_CATEGORY, SpecEntry, SpecStore

logger = logging.getLogger(__name__)


@dataclass
class SpecDocument:
    """A spec read from disk."""

    spec_name: str
    content: str
    category: str
    file_path: Path


@dataclass
class OperationResult:
    """Outcome of create/edit/delete."""

    success: bool
    message: str
    spec_name: str
    category: str


@dataclass
class SpecListing:
    total: int
    specs: list[SpecEntry] = field(default_factory=list)


def _require(value: str | None, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidArgumentError(f"{field_name} must not be empty")
    return value


def _check_name(name: str | None) -> str:
    name = _require(name, "spec_name")
    if "/" in name or "\\" in name or name in (".", ".."):
        raise InvalidArgumentError(f"spec_name must be a plain file name, got {name!r}")
    return name


def _check_category(category: str | None) -> str:
    if not category:
        return DEFAULT_CATEGORY
    if category not in CATEGORIES:
        raise InvalidArgumentError(
            f"category must be one of {', '.join(CATEGORIES)}, got {category!r}"
        )
    return category


class SpecService:
    """The five spec operations. Stateless; every call names its project root."""

    def _store(self, root: str | Path | None) -> SpecStore:
        root = _require(None if root is None else str(root), "projectRoot")
        return SpecStore(Path(root))

    def get(
        self, name: str, category: str = DEFAULT_CATEGORY, root: str | Path | None = None
    ) -> SpecDocument:
        name = _check_name(name)
        store = self._store(root)
        category = _check_category(category)
        logger.info("Getting spec: %s (%s)", name, category)

        content = store.read(name, category)
        return SpecDocument(
            spec_name=name,
            content=content,
            category=category,
            file_path=store.path_for(name, category),
        )

    def create(
        self,
        name: str,
        content: str,
        category: str = DEFAULT_CATEGORY,
        root: str | Path | None = None,
    ) -> OperationResult:
        name = _check_name(name)
        content = _require(content, "content")
        store = self._store(root)
        category = _check_category(category)
        logger.info("Creating spec: %s (%s)", name, category)

        if store.exists(name, category):
            logger.warning("Spec already exists, refusing to overwrite: %s (%s)", name, category)
            return OperationResult(
                success=False,
                message=(
                    f'Spec "{name}" already exists; create does not overwrite existing specs. '
                    "Use edit to change it."
                ),
                spec_name=name,
                category=category,
            )

        store.write(name, category, content)
        logger.info("Created spec: %s (%s)", name, category)
        return OperationResult(
            success=True,
            message=f"Created spec: {name}",
            spec_name=name,
            category=category,
        )

    def edit(
        self,
        name: str,
        content: str,
        category: str = DEFAULT_CATEGORY,
        root: str | Path | None = None,
    ) -> OperationResult:
        name = _check_name(name)
        content = _require(content, "content")
        store = self._store(root)
        category = _check_category(category)
        logger.info("Editing spec: %s (%s)", name, category)

        if not store.exists(name, category):
            logger.warning("Spec does not exist, refusing to create on edit: %s (%s)", name, category)
            return OperationResult(
                success=False,
                message=(
                    f'Spec "{name}" does not exist; edit only changes existing specs. '
                    "Use create to add a new one."
                ),
                spec_name=name,
                category=category,
            )

        store.write(name, category, content)
        logger.info("Edited spec: %s (%s)", name, category)
        return OperationResult(
            success=True,
            message=f"Edited spec: {name}",
            spec_name=name,
            category=category,
        )

    def delete(
        self, name: str, category: str = DEFAULT_CATEGORY, root: str | Path | None = None
    ) -> OperationResult:
        name = _check_name(name)
        store = self._store(root)
        category = _check_category(category)
        logger.info("Deleting spec: %s (%s)", name, category)

        if not store.exists(name, category):
            return OperationResult(
                success=False,
                message=f'Spec "{name}" does not exist',
                spec_name=name,
                category=category,
            )

        store.remove(name, category)
        logger.info("Deleted spec: %s (%s)", name, category)
        return OperationResult(
            success=True,
            message=f"Deleted spec: {name}",
            spec_name=name,
            category=category,
        )

    def list(self, root: str | Path | None = None) -> SpecListing:
        store = self._store(root)
        logger.info("Listing specs under %s", store.spec_dir)
        specs = store.list()
        return SpecListing(total=len(specs), specs=specs)
