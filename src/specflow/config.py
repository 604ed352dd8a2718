"""Configuration loading from environment variables and specflow.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

from specflow.server.protocol import PROTOCOL_VERSION

_CONFIG_FILENAME = "specflow.toml"
_DEFAULT_SERVER_NAME = "spec-flow-mcp"


@dataclass
class ServerConfig:
    """MCP server identity reported on initialize."""

    name: str = _DEFAULT_SERVER_NAME
    protocol_version: str = PROTOCOL_VERSION


@dataclass
class SpecFlowConfig:
    """Top-level spec-flow configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    project_root: Path | None = None
    log_level: str = "INFO"


def load_config(config_path: Path | None = None) -> SpecFlowConfig:
    """Load configuration from environment variables and optional specflow.toml.

    Priority: environment variables > specflow.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.specflow/
        for candidate in [
            Path.cwd() / _CONFIG_FILENAME,
            Path.home() / ".specflow" / _CONFIG_FILENAME,
        ]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    server_data = file_data.get("server", {})

    project_root = os.getenv("SPECFLOW_PROJECT_ROOT", file_data.get("project_root"))

    return SpecFlowConfig(
        server=ServerConfig(
            name=os.getenv("SPECFLOW_SERVER_NAME", server_data.get("name", _DEFAULT_SERVER_NAME)),
            protocol_version=server_data.get("protocol_version", PROTOCOL_VERSION),
        ),
        project_root=Path(project_root).expanduser() if project_root else None,
        log_level=os.getenv("SPECFLOW_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
