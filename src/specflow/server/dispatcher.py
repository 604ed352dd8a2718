"""Request dispatch: JSON-RPC method -> spec tool -> response envelope.

Only unknown methods, unknown tools and unexpected dispatch faults become
JSON-RPC errors. Everything a tool call can go wrong with (empty fields,
missing specs, refused create/edit, disk errors) comes back as a normal
result whose text starts with the failure marker.
"""

from __future__ import annotations

import logging
from typing import Any

from specflow import __version__
from specflow.config import SpecFlowConfig
from specflow.server.protocol import (
    INTERNAL_ERROR,
    METHOD_NOT_FOUND,
    TOOLS,
    TOOL_NAMES,
    jsonrpc_error,
    jsonrpc_result,
    parse_tool_arguments,
    text_result,
)
from specflow.service import SpecService
from specflow.tools.spec_tools import get_spec_tools, render_failure

logger = logging.getLogger(__name__)


class Dispatcher:
    """Stateless MCP request handler."""

    def __init__(
        self,
        config: SpecFlowConfig | None = None,
        service: SpecService | None = None,
    ) -> None:
        self.config = config or SpecFlowConfig()
        self.service = service or SpecService()
        self._tools = get_spec_tools(self.service)

    @property
    def default_root(self) -> str | None:
        root = self.config.project_root
        return str(root) if root else None

    async def handle_request(self, req: dict) -> dict | None:
        """Handle one decoded message. Returns None for notifications."""
        req_id = req.get("id")
        method = req.get("method", "")

        try:
            logger.debug("Handling %s (id=%s)", method, req_id)

            # Notifications — no response
            if isinstance(method, str) and method.startswith("notifications/"):
                if method == "notifications/initialized":
                    logger.info("Client initialized")
                return None

            if method == "initialize":
                return jsonrpc_result(req_id, {
                    "protocolVersion": self.config.server.protocol_version,
                    "capabilities": {"tools": {}},
                    "serverInfo": {"name": self.config.server.name, "version": __version__},
                })

            if method == "tools/list":
                return jsonrpc_result(req_id, {"tools": TOOLS})

            if method == "tools/call":
                params = req.get("params") or {}
                if not isinstance(params, dict):
                    raise TypeError(f"params must be an object, got {type(params).__name__}")
                return await self._handle_tool_call(
                    params.get("name", ""), params.get("arguments"), req_id
                )

            return jsonrpc_error(req_id, METHOD_NOT_FOUND, f"Unknown method: {method}")
        except Exception as e:
            logger.exception("Error handling %s", method)
            return jsonrpc_error(req_id, INTERNAL_ERROR, f"Internal error: {e}")

    async def _handle_tool_call(self, tool_name: str, arguments: Any, req_id) -> dict:
        if not isinstance(tool_name, str) or tool_name not in TOOL_NAMES:
            return jsonrpc_error(req_id, METHOD_NOT_FOUND, f"Unknown tool: {tool_name}")

        try:
            request = parse_tool_arguments(tool_name, arguments, self.default_root)
            output = self._tools[tool_name](request)
        except Exception as e:
            if isinstance(e, OSError):
                logger.exception("Tool %s failed", tool_name)
            else:
                logger.warning("Tool %s failed: %s", tool_name, e)
            output = render_failure(tool_name, e)

        return jsonrpc_result(req_id, text_result(output.text, is_error=output.is_error))
