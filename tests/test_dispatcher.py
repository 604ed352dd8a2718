"""Tests for JSON-RPC dispatch and tool output rendering."""

from __future__ import annotations

import pytest
from pathlib import Path
from unittest.mock import MagicMock

from specflow import __version__
from specflow.config import SpecFlowConfig
from specflow.server.dispatcher import Dispatcher
from specflow.service import SpecService


@pytest.fixture
def dispatcher() -> Dispatcher:
    return Dispatcher()


@pytest.fixture
def root(tmp_path: Path) -> str:
    return str(tmp_path)


def _call(name: str, req_id=1, **arguments) -> dict:
    return {
        "jsonrpc": "2.0",
        "id": req_id,
        "method": "tools/call",
        "params": {"name": name, "arguments": arguments},
    }


def _text(response: dict) -> str:
    return response["result"]["content"][0]["text"]


class TestProtocolMethods:
    @pytest.mark.asyncio
    async def test_initialize(self, dispatcher: Dispatcher):
        resp = await dispatcher.handle_request({"jsonrpc": "2.0", "id": 1, "method": "initialize"})
        assert resp["id"] == 1
        assert resp["result"]["protocolVersion"] == "2024-11-05"
        assert resp["result"]["capabilities"] == {"tools": {}}
        assert resp["result"]["serverInfo"] == {"name": "spec-flow-mcp", "version": __version__}

    @pytest.mark.asyncio
    async def test_tools_list(self, dispatcher: Dispatcher):
        resp = await dispatcher.handle_request({"jsonrpc": "2.0", "id": "x", "method": "tools/list"})
        names = {t["name"] for t in resp["result"]["tools"]}
        assert "delete_development_spec" in names
        assert len(names) == 5

    @pytest.mark.asyncio
    async def test_unknown_method(self, dispatcher: Dispatcher):
        resp = await dispatcher.handle_request({"jsonrpc": "2.0", "id": 3, "method": "unknown_x"})
        assert resp["id"] == 3
        assert resp["error"]["code"] == -32601
        assert "Unknown method" in resp["error"]["message"]
        assert "result" not in resp

    @pytest.mark.asyncio
    async def test_unknown_tool(self, dispatcher: Dispatcher):
        resp = await dispatcher.handle_request(_call("unknown_tool"))
        assert resp["error"]["code"] == -32601
        assert "Unknown tool" in resp["error"]["message"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", [{"x": 1}, ["get_development_spec"], None, 7])
    async def test_non_string_tool_name(self, dispatcher: Dispatcher, name):
        resp = await dispatcher.handle_request(
            {"jsonrpc": "2.0", "id": 4, "method": "tools/call", "params": {"name": name}}
        )
        assert resp["error"]["code"] == -32601
        assert "Unknown tool" in resp["error"]["message"]

    @pytest.mark.asyncio
    async def test_notification_gets_no_response(self, dispatcher: Dispatcher):
        resp = await dispatcher.handle_request(
            {"jsonrpc": "2.0", "method": "notifications/initialized"}
        )
        assert resp is None

    @pytest.mark.asyncio
    async def test_bad_params_is_internal_error(self, dispatcher: Dispatcher):
        resp = await dispatcher.handle_request(
            {"jsonrpc": "2.0", "id": 9, "method": "tools/call", "params": "oops"}
        )
        assert resp["error"]["code"] == -32603
        assert resp["error"]["message"].startswith("Internal error")


class TestToolCalls:
    @pytest.mark.asyncio
    async def test_create_success(self, dispatcher: Dispatcher, root: str):
        resp = await dispatcher.handle_request(
            _call("create_development_spec", spec_name="table", content="# T", projectRoot=root)
        )
        text = _text(resp)
        assert text.startswith("✅")
        assert "table" in text
        assert "frontend" in text
        assert "isError" not in resp["result"]

    @pytest.mark.asyncio
    async def test_create_twice(self, dispatcher: Dispatcher, root: str):
        args = dict(spec_name="table", content="# T", projectRoot=root)
        await dispatcher.handle_request(_call("create_development_spec", **args))
        resp = await dispatcher.handle_request(_call("create_development_spec", **args))
        assert "error" not in resp
        assert _text(resp).startswith("❌")
        assert "edit_development_spec" in _text(resp)
        assert resp["result"]["isError"] is True

    @pytest.mark.asyncio
    async def test_edit_missing(self, dispatcher: Dispatcher, root: str):
        resp = await dispatcher.handle_request(
            _call("edit_development_spec", spec_name="ghost", content="# G", projectRoot=root)
        )
        assert _text(resp).startswith("❌")
        assert "create_development_spec" in _text(resp)
        assert not (Path(root) / ".spec" / "ghost_frontend_spec.md").exists()

    @pytest.mark.asyncio
    async def test_get_missing_is_text_not_error(self, dispatcher: Dispatcher, root: str):
        resp = await dispatcher.handle_request(
            _call("get_development_spec", spec_name="ghost", projectRoot=root)
        )
        assert "error" not in resp
        text = _text(resp)
        assert text.startswith("❌")
        assert "not found" in text
        assert "list_specs" in text

    @pytest.mark.asyncio
    async def test_empty_name_is_text_not_error(self, dispatcher: Dispatcher, root: str):
        resp = await dispatcher.handle_request(
            _call("get_development_spec", spec_name="  ", projectRoot=root)
        )
        assert "error" not in resp
        assert _text(resp).startswith("❌")
        assert "spec_name" in _text(resp)

    @pytest.mark.asyncio
    async def test_missing_root(self, dispatcher: Dispatcher):
        resp = await dispatcher.handle_request(_call("list_specs"))
        assert _text(resp).startswith("❌")
        assert "projectRoot" in _text(resp)

    @pytest.mark.asyncio
    async def test_configured_default_root(self, tmp_path: Path):
        dispatcher = Dispatcher(SpecFlowConfig(project_root=tmp_path))
        await dispatcher.handle_request(
            _call("create_development_spec", spec_name="t", content="# t")
        )
        assert (tmp_path / ".spec" / "t_frontend_spec.md").exists()

    @pytest.mark.asyncio
    async def test_unexpected_service_error(self):
        service = MagicMock(spec=SpecService)
        service.get.side_effect = PermissionError("permission denied")
        dispatcher = Dispatcher(service=service)
        resp = await dispatcher.handle_request(
            _call("get_development_spec", spec_name="t", projectRoot="/p")
        )
        assert "error" not in resp
        assert _text(resp).startswith("❌")
        assert "permission denied" in _text(resp)

    @pytest.mark.asyncio
    async def test_delete_renders(self, dispatcher: Dispatcher, root: str):
        await dispatcher.handle_request(
            _call("create_development_spec", spec_name="t", content="# t", projectRoot=root)
        )
        ok = await dispatcher.handle_request(
            _call("delete_development_spec", spec_name="t", projectRoot=root)
        )
        assert _text(ok).startswith("✅")
        again = await dispatcher.handle_request(
            _call("delete_development_spec", spec_name="t", projectRoot=root)
        )
        assert _text(again).startswith("❌")
        assert "does not exist" in _text(again)


class TestWorkflow:
    @pytest.mark.asyncio
    async def test_create_get_list_edit_delete(self, dispatcher: Dispatcher, root: str):
        async def call(name, **args):
            return _text(await dispatcher.handle_request(_call(name, projectRoot=root, **args)))

        listed = await call("list_specs")
        assert "Total: 0 specs" in listed

        created = await call("create_development_spec", spec_name="alpha", category="backend", content="# A")
        assert created.startswith("✅")

        got = await call("get_development_spec", spec_name="alpha", category="backend")
        assert got.startswith("# alpha development spec")
        assert "Category: backend" in got
        assert got.endswith("# A")

        listed = await call("list_specs")
        assert "Total: 1 specs" in listed
        assert "- alpha (backend)" in listed

        edited = await call("edit_development_spec", spec_name="alpha", category="backend", content="# A2")
        assert edited.startswith("✅")
        got = await call("get_development_spec", spec_name="alpha", category="backend")
        assert got.endswith("# A2")

        deleted = await call("delete_development_spec", spec_name="alpha", category="backend")
        assert deleted.startswith("✅")
        assert "Total: 0 specs" in await call("list_specs")
