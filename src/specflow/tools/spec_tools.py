"""MCP tools for development spec access.

Each tool takes its typed request, calls SpecService, and renders the outcome
as the text the calling agent reads. Domain failures come back as text with
the failure marker, not as exceptions.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from specflow.errors import SpecNotFoundError

if TYPE_CHECKING:
    from specflow.server.protocol import (
        CreateSpecRequest,
        DeleteSpecRequest,
        EditSpecRequest,
        GetSpecRequest,
        ListSpecsRequest,
    )
    from specflow.service import SpecService

SUCCESS_MARKER = "✅"
FAILURE_MARKER = "❌"
HINT_MARKER = "💡"

_ACTIONS = {
    "get_development_spec": "get",
    "list_specs": "list",
    "create_development_spec": "create",
    "edit_development_spec": "edit",
    "delete_development_spec": "delete",
}


@dataclass
class ToolOutput:
    text: str
    is_error: bool = False


def _hints(*lines: str) -> str:
    numbered = "\n".join(f"{i}. {line}" for i, line in enumerate(lines, start=1))
    return f"{HINT_MARKER} Next steps:\n{numbered}"


def render_failure(tool_name: str, error: Exception) -> ToolOutput:
    """Render an exception raised during a tool call as failure text."""
    action = _ACTIONS.get(tool_name, "run")
    if isinstance(error, SpecNotFoundError):
        hints = _hints(
            "Check that the spec name is spelled correctly",
            "Make sure the spec file exists (use list_specs)",
            "Check the category argument",
        )
    else:
        hints = _hints(
            "Check that the spec name and content are valid",
            "Make sure the project root is correct and writable",
            "Check the argument format",
        )
    return ToolOutput(
        text=f"{FAILURE_MARKER} Failed to {action} development spec: {error}\n\n{hints}",
        is_error=True,
    )


def get_spec_tools(service: SpecService) -> dict[str, Callable[..., ToolOutput]]:
    """Return a dict of tool_name -> callable for spec operations."""

    def get_development_spec(req: GetSpecRequest) -> ToolOutput:
        doc = service.get(req.spec_name, req.category, req.project_root)
        return ToolOutput(
            f"# {doc.spec_name} development spec\n\n"
            f"Category: {doc.category}\n\n"
            f"{doc.content}"
        )

    def list_specs(req: ListSpecsRequest) -> ToolOutput:
        listing = service.list(req.project_root)
        lines = "\n".join(f"- {s.name} ({s.category})" for s in listing.specs)
        return ToolOutput(
            "# Available development specs\n\n"
            f"Total: {listing.total} specs\n\n"
            f"{lines}\n\n"
            "Use the get_development_spec tool to read a spec."
        )

    def create_development_spec(req: CreateSpecRequest) -> ToolOutput:
        result = service.create(req.spec_name, req.content, req.category, req.project_root)
        if not result.success:
            return ToolOutput(
                f"{FAILURE_MARKER} {result.message}\n\n"
                + _hints(
                    "Check whether a spec with this name already exists (create never overwrites)",
                    "Check the content format",
                    "To change an existing spec, use the edit_development_spec tool",
                ),
                is_error=True,
            )
        return ToolOutput(
            f"{SUCCESS_MARKER} Created spec: {result.spec_name}\n\n"
            f"- Name: {result.spec_name}\n"
            f"- Category: {result.category}\n"
            "- Operation: create\n"
            "- Status: saved\n\n"
            f"{HINT_MARKER} Use the get_development_spec tool to view the new spec."
        )

    def edit_development_spec(req: EditSpecRequest) -> ToolOutput:
        result = service.edit(req.spec_name, req.content, req.category, req.project_root)
        if not result.success:
            return ToolOutput(
                f"{FAILURE_MARKER} {result.message}\n\n"
                + _hints(
                    "Check that the spec exists (edit only changes existing specs)",
                    "Check the content format",
                    "To add a new spec, use the create_development_spec tool",
                ),
                is_error=True,
            )
        return ToolOutput(
            f"{SUCCESS_MARKER} Edited spec: {result.spec_name}\n\n"
            f"- Name: {result.spec_name}\n"
            f"- Category: {result.category}\n"
            "- Operation: edit\n"
            "- Status: updated\n\n"
            f"{HINT_MARKER} Use the get_development_spec tool to view the updated spec."
        )

    def delete_development_spec(req: DeleteSpecRequest) -> ToolOutput:
        result = service.delete(req.spec_name, req.category, req.project_root)
        if not result.success:
            return ToolOutput(
                f"{FAILURE_MARKER} {result.message}\n\n"
                + _hints(
                    "Check that the spec name is spelled correctly",
                    "Check the category argument",
                    "Use the list_specs tool to see which specs exist",
                ),
                is_error=True,
            )
        return ToolOutput(
            f"{SUCCESS_MARKER} Deleted spec: {result.spec_name}\n\n"
            f"- Name: {result.spec_name}\n"
            f"- Category: {result.category}\n"
            "- Operation: delete\n"
            "- Status: removed"
        )

    return {
        "get_development_spec": get_development_spec,
        "list_specs": list_specs,
        "create_development_spec": create_development_spec,
        "edit_development_spec": edit_development_spec,
        "delete_development_spec": delete_development_spec,
    }
