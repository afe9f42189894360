"""
Tests for the stdio JSON-RPC transport.
"""

import asyncio
import io
import json

import pytest

from git_mcp.infrastructure.mcp.stdio_server import (
    DEFAULT_PROTOCOL_VERSION,
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    StdioServer,
)


@pytest.fixture
def server(catalog, router):
    return StdioServer(catalog=catalog, router=router, server_name="git-server", server_version="1.0.0")


def _handle(server, message):
    return asyncio.run(server.handle_message(message))


def test_initialize_reports_server_info(server):
    response = _handle(server, {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}})
    assert response["id"] == 1
    assert response["result"] == {
        "protocolVersion": DEFAULT_PROTOCOL_VERSION,
        "capabilities": {"tools": {}},
        "serverInfo": {"name": "git-server", "version": "1.0.0"},
    }


def test_initialize_echoes_client_protocol_version(server):
    response = _handle(
        server,
        {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {"protocolVersion": "2025-03-26"}},
    )
    assert response["result"]["protocolVersion"] == "2025-03-26"


def test_tools_list_returns_catalog(server):
    response = _handle(server, {"jsonrpc": "2.0", "id": "a", "method": "tools/list"})
    tools = response["result"]["tools"]
    assert len(tools) == 12
    assert tools[0]["name"] == "git_status"
    assert set(tools[0]) == {"name", "description", "inputSchema"}


def test_tools_call_success_envelope(server, fake_run):
    fake_run.stdout = "On branch main\n"
    response = _handle(
        server,
        {
            "jsonrpc": "2.0",
            "id": 7,
            "method": "tools/call",
            "params": {"name": "git_status", "arguments": {"repo_path": "/r"}},
        },
    )
    assert response == {
        "jsonrpc": "2.0",
        "id": 7,
        "result": {"content": [{"type": "text", "text": "On branch main\n"}]},
    }


def test_tools_call_failure_is_jsonrpc_error(server, fake_run):
    fake_run.returncode = 128
    fake_run.stderr = "fatal: not a git repository\n"
    response = _handle(
        server,
        {
            "jsonrpc": "2.0",
            "id": 8,
            "method": "tools/call",
            "params": {"name": "git_status", "arguments": {"repo_path": "/tmp"}},
        },
    )
    assert response["error"] == {"code": INTERNAL_ERROR, "message": "fatal: not a git repository\n"}


def test_tools_call_without_arguments(server, fake_run):
    response = _handle(server, {"jsonrpc": "2.0", "id": 9, "method": "tools/call", "params": {"name": "git_status"}})
    assert response["error"]["message"] == "No arguments provided for tool: git_status"
    assert fake_run.calls == []


def test_tools_call_without_name(server):
    response = _handle(server, {"jsonrpc": "2.0", "id": 10, "method": "tools/call", "params": {"arguments": {}}})
    assert response["error"]["code"] == INVALID_PARAMS


def test_unknown_method(server):
    response = _handle(server, {"jsonrpc": "2.0", "id": 11, "method": "resources/list"})
    assert response["error"]["code"] == METHOD_NOT_FOUND


def test_ping(server):
    assert _handle(server, {"jsonrpc": "2.0", "id": 12, "method": "ping"})["result"] == {}


def test_notifications_get_no_response(server):
    assert _handle(server, {"jsonrpc": "2.0", "method": "notifications/initialized"}) is None


@pytest.mark.parametrize("message", [[1, 2], {"jsonrpc": "2.0", "id": 3}])
def test_invalid_request(server, message):
    response = _handle(server, message)
    assert response["error"]["code"] == INVALID_REQUEST


def test_invalid_json_line(server):
    response = asyncio.run(server.handle_line("{not json"))
    assert response["id"] is None
    assert response["error"]["code"] == PARSE_ERROR


def test_serve_processes_lines_until_eof(catalog, router, fake_run):
    fake_run.stdout = "ok\n"
    lines = [
        {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}},
        {"jsonrpc": "2.0", "method": "notifications/initialized"},
        {"jsonrpc": "2.0", "id": 2, "method": "tools/list"},
        {"jsonrpc": "2.0", "id": 3, "method": "tools/call", "params": {"name": "git_init", "arguments": {"repo_path": "/r"}}},
    ]
    stdin = io.StringIO("\n".join(json.dumps(m) for m in lines) + "\n\n")
    stdout = io.StringIO()
    server = StdioServer(catalog=catalog, router=router, stdin=stdin, stdout=stdout)

    asyncio.run(server.serve())

    responses = [json.loads(line) for line in stdout.getvalue().splitlines()]
    assert [r["id"] for r in responses] == [1, 2, 3]
    assert responses[2]["result"]["content"][0]["text"] == "ok\n"
    assert fake_run.argvs == [["init"]]


def test_attach_fails_on_closed_stream(catalog, router):
    closed = io.StringIO()
    closed.close()
    server = StdioServer(catalog=catalog, router=router, stdin=closed, stdout=io.StringIO())
    with pytest.raises(RuntimeError):
        server.attach()


def test_initialize_with_non_object_client_info(server):
    response = _handle(
        server,
        {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {"clientInfo": "x"}},
    )
    assert response["result"]["serverInfo"]["name"] == "git-server"


def test_handler_error_becomes_internal_error_response(server, monkeypatch):
    def broken_list_tools():
        raise RuntimeError("catalog exploded")

    monkeypatch.setattr(server.catalog, "list_tools", broken_list_tools)
    response = asyncio.run(server.handle_line(json.dumps({"jsonrpc": "2.0", "id": 4, "method": "tools/list"})))
    assert response["id"] == 4
    assert response["error"]["code"] == INTERNAL_ERROR
    assert "catalog exploded" in response["error"]["message"]


def test_serve_keeps_answering_after_malformed_messages(catalog, router):
    raw = b"".join(
        [
            json.dumps({"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {"clientInfo": "x"}}).encode() + b"\n",
            b"\xff\xfe not utf-8\n",
            json.dumps({"jsonrpc": "2.0", "id": 2, "method": "ping"}).encode() + b"\n",
        ]
    )
    stdin = io.TextIOWrapper(io.BytesIO(raw), encoding="utf-8", errors="strict")
    stdout = io.StringIO()
    server = StdioServer(catalog=catalog, router=router, stdin=stdin, stdout=stdout)

    asyncio.run(server.serve())

    responses = [json.loads(line) for line in stdout.getvalue().splitlines()]
    assert len(responses) == 3
    assert responses[0]["id"] == 1 and "result" in responses[0]
    assert responses[1]["error"]["code"] == PARSE_ERROR
    assert responses[2] == {"jsonrpc": "2.0", "id": 2, "result": {}}
