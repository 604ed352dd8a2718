"""spec-flow — development specs as markdown files, served over MCP (JSON-RPC 2.0 on stdio)."""

__version__ = "1.0.0"
