"""JSON-RPC 2.0 envelopes, the MCP tool catalog, and typed tool requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from specflow.errors import InvalidArgumentError
from specflow.store import CATEGORIES, DEFAULT_CATEGORY

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"

METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603

# ── JSON-RPC 2.0 helpers ─────────────────────────────────────


def jsonrpc_result(req_id, result):
    return {"jsonrpc": JSONRPC_VERSION, "id": req_id, "result": result}


def jsonrpc_error(req_id, code, message):
    return {"jsonrpc": JSONRPC_VERSION, "id": req_id, "error": {"code": code, "message": message}}


def text_result(text: str, *, is_error: bool = False) -> dict:
    """MCP tool result carrying a single text block."""
    result: dict[str, Any] = {"content": [{"type": "text", "text": text}]}
    if is_error:
        result["isError"] = True
    return result


# ── Tool definitions ─────────────────────────────────────────

_ROOT_PROPERTY = {
    "type": "string",
    "description": "Project root directory; specs are stored under {projectRoot}/.spec",
}

_CATEGORY_PROPERTY = {
    "type": "string",
    "enum": list(CATEGORIES),
    "default": DEFAULT_CATEGORY,
    "description": "Spec category",
}

TOOLS = [
    {
        "name": "get_development_spec",
        "description": "Get a development spec",
        "inputSchema": {
            "type": "object",
            "properties": {
                "spec_name": {
                    "type": "string",
                    "description": "Spec name, e.g. spttable, sptdrawer",
                },
                "category": _CATEGORY_PROPERTY,
                "projectRoot": _ROOT_PROPERTY,
            },
            "required": ["spec_name", "projectRoot"],
        },
    },
    {
        "name": "list_specs",
        "description": "List all available development specs",
        "inputSchema": {
            "type": "object",
            "properties": {"projectRoot": _ROOT_PROPERTY},
            "required": ["projectRoot"],
        },
    },
    {
        "name": "create_development_spec",
        "description": "Create a new development spec; existing specs are never overwritten",
        "inputSchema": {
            "type": "object",
            "properties": {
                "spec_name": {
                    "type": "string",
                    "description": "Spec name, e.g. newcomponent, newpattern",
                },
                "content": {
                    "type": "string",
                    "description": "Full spec content (Markdown)",
                },
                "category": _CATEGORY_PROPERTY,
                "projectRoot": _ROOT_PROPERTY,
            },
            "required": ["spec_name", "content", "projectRoot"],
        },
    },
    {
        "name": "edit_development_spec",
        "description": "Edit an existing development spec; only existing specs can be changed",
        "inputSchema": {
            "type": "object",
            "properties": {
                "spec_name": {
                    "type": "string",
                    "description": "Spec name; the spec must already exist",
                },
                "content": {
                    "type": "string",
                    "description": "New spec content (Markdown)",
                },
                "category": _CATEGORY_PROPERTY,
                "projectRoot": _ROOT_PROPERTY,
            },
            "required": ["spec_name", "content", "projectRoot"],
        },
    },
    {
        "name": "delete_development_spec",
        "description": "Delete an existing development spec",
        "inputSchema": {
            "type": "object",
            "properties": {
                "spec_name": {
                    "type": "string",
                    "description": "Spec name; the spec must already exist",
                },
                "category": _CATEGORY_PROPERTY,
                "projectRoot": _ROOT_PROPERTY,
            },
            "required": ["spec_name", "projectRoot"],
        },
    },
]

TOOL_NAMES = frozenset(tool["name"] for tool in TOOLS)

# ── Typed tool requests ──────────────────────────────────────


@dataclass(frozen=True)
class GetSpecRequest:
    spec_name: str
    project_root: str
    category: str = DEFAULT_CATEGORY


@dataclass(frozen=True)
class ListSpecsRequest:
    project_root: str


@dataclass(frozen=True)
class CreateSpecRequest:
    spec_name: str
    content: str
    project_root: str
    category: str = DEFAULT_CATEGORY


@dataclass(frozen=True)
class EditSpecRequest:
    spec_name: str
    content: str
    project_root: str
    category: str = DEFAULT_CATEGORY


@dataclass(frozen=True)
class DeleteSpecRequest:
    spec_name: str
    project_root: str
    category: str = DEFAULT_CATEGORY


ToolRequest = Union[
    GetSpecRequest, ListSpecsRequest, CreateSpecRequest, EditSpecRequest, DeleteSpecRequest
]


def _string_arg(args: dict, key: str, default: str = "") -> str:
    value = args.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{key} must be a string, got {type(value).__name__}")
    return value


def parse_tool_arguments(
    tool_name: str, arguments: dict | None, default_root: str | None = None
) -> ToolRequest:
    """Build the typed request for ``tool_name`` from a raw ``arguments`` object.

    Missing strings become "" so the service reports them as empty fields.
    ``category`` defaults to frontend. ``projectRoot`` (alias ``root``) falls
    back to ``default_root`` when given.
    """
    if tool_name not in TOOL_NAMES:
        raise KeyError(tool_name)
    args = arguments or {}
    if not isinstance(args, dict):
        raise InvalidArgumentError("arguments must be an object")

    root = _string_arg(args, "projectRoot") or _string_arg(args, "root") or (default_root or "")

    if tool_name == "list_specs":
        return ListSpecsRequest(project_root=root)

    name = _string_arg(args, "spec_name")
    category = _string_arg(args, "category") or DEFAULT_CATEGORY

    if tool_name == "get_development_spec":
        return GetSpecRequest(spec_name=name, project_root=root, category=category)
    if tool_name == "delete_development_spec":
        return DeleteSpecRequest(spec_name=name, project_root=root, category=category)

    content = _string_arg(args, "content")
    if tool_name == "create_development_spec":
        return CreateSpecRequest(
            spec_name=name, content=content, project_root=root, category=category
        )
    return EditSpecRequest(spec_name=name, content=content, project_root=root, category=category)
