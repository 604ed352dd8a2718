"""Exception types shared by the store, the service and the dispatcher."""

from __future__ import annotations


class SpecFlowError(Exception):
    """Expected, user-facing failure. Rendered as tool output, never as a protocol error."""


class InvalidArgumentError(SpecFlowError, ValueError):
    """A required field is empty, or a value is not acceptable (bad category, bad name)."""


class SpecNotFoundError(SpecFlowError):
    """The (name, category) pair has no file on disk."""

    def __init__(self, name: str, category: str) -> None:
        super().__init__(f"Spec not found: {name} ({category})")
        self.name = name
        self.category = category
