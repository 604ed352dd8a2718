"""MCP server: JSON-RPC 2.0 over stdio (NDJSON).

- protocol.py:   envelopes, error codes, tool catalog, typed tool requests
- dispatcher.py: method/tool routing
- stdio.py:      line-framed stdin/stdout loop
"""
