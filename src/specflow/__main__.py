"""Entry point: python -m specflow [serve|list|version]

- No args / "serve": MCP server on stdio
- "list [root]":     Print the specs stored under a project root
- "version":         Print the package version
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from specflow import __version__
from specflow.config import load_config

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _run_serve() -> None:
    """MCP server mode — stdin/stdout until EOF."""
    config = load_config()
    _setup_logging(config.log_level)

    from specflow.server.dispatcher import Dispatcher
    from specflow.server.stdio import serve
    from specflow.store import SpecStore

    logger.info("Starting %s %s", config.server.name, __version__)
    if config.project_root:
        spec_dir = SpecStore(config.project_root).ensure_dir()
        logger.info("Spec directory: %s", spec_dir)

    try:
        asyncio.run(serve(Dispatcher(config)))
    except KeyboardInterrupt:
        pass


def _run_list(root_arg: str | None) -> None:
    config = load_config()
    _setup_logging(config.log_level)

    from specflow.service import SpecService
    from specflow.store import find_project_root

    root = Path(root_arg) if root_arg else (config.project_root or find_project_root())
    listing = SpecService().list(root)
    print(f"{listing.total} specs in {root}")
    for spec in listing.specs:
        print(f"  {spec.name} ({spec.category})  {spec.file_path}")


def main() -> None:
    cmd = sys.argv[1] if len(sys.argv) > 1 else "serve"

    if cmd == "serve":
        _run_serve()
    elif cmd == "list":
        _run_list(sys.argv[2] if len(sys.argv) > 2 else None)
    elif cmd == "version":
        print(__version__)
    else:
        print("Usage: python -m specflow [serve|list|version]")
        print("  serve         — MCP server on stdio (default)")
        print("  list [root]   — List specs under a project root")
        print("  version       — Print version")
        sys.exit(1)


if __name__ == "__main__":
    main()
