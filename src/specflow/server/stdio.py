"""Stdio transport: newline-delimited JSON-RPC over stdin/stdout.

Requests are handled one at a time, in arrival order. Logs go to stderr;
stdout carries protocol traffic only.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import TextIO

from specflow.server.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


async def _stdin_reader() -> asyncio.StreamReader:
    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    await asyncio.get_running_loop().connect_read_pipe(lambda: protocol, sys.stdin)
    return reader


async def serve(
    dispatcher: Dispatcher,
    reader: asyncio.StreamReader | None = None,
    writer: TextIO | None = None,
) -> None:
    """Read requests until EOF and write one response line per request."""
    if reader is None:
        reader = await _stdin_reader()
    out = writer or sys.stdout

    while True:
        line = await reader.readline()
        if not line:
            break
        line = line.decode("utf-8", errors="replace").strip()
        if not line:
            continue

        try:
            req = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning("Parse error: %s", e)
            continue
        if not isinstance(req, dict):
            logger.warning("Ignoring non-object message: %r", req)
            continue

        logger.debug("<- %s", req.get("method", "?"))
        response = await dispatcher.handle_request(req)
        if response is not None:
            out.write(json.dumps(response, ensure_ascii=False) + "\n")
            out.flush()

    logger.info("stdin closed, stopping")
