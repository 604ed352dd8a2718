"""Spec storage — one markdown file per (name, category).

Layout:
    <project root>/
    └── .spec/
        ├── table_frontend_spec.md
        ├── auth_flow_backend_spec.md
        └── ...

The filename is the only place name and category are recorded; file bodies
are plain markdown with no frontmatter.
"""

from specflow.store.files import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    SPEC_DIR_NAME,
    SpecEntry,
    SpecStore,
    find_project_root,
)

__all__ = [
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "SPEC_DIR_NAME",
    "SpecEntry",
    "SpecStore",
    "find_project_root",
]
