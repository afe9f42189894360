"""
Stdio transport (newline-delimited JSON-RPC 2.0, MCP method vocabulary)

Responsibilities:
- Read one JSON message per line from stdin; write one response per line to stdout.
- Answer the handshake and catalog methods:
  - initialize       -> protocolVersion, capabilities, serverInfo
  - tools/list       -> {"tools": [{name, description, inputSchema}, ...]}
  - tools/call       -> {"content": [{"type": "text", "text": ...}]} or a JSON-RPC error
  - ping             -> {}
- Stay silent on notifications (messages without an id, or notifications/*).

Notes:
- Requests are handled strictly one at a time; the next line is not read
  until the current dispatch has finished.
- A bad message produces an error response; only a failure to attach to the
  streams at startup is fatal.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, Dict, Optional, TextIO, TYPE_CHECKING

from git_mcp.abstractions.dto.tools import InvocationRequest
from git_mcp.abstractions.errors import ProtocolError

if TYPE_CHECKING:
    from git_mcp.interfaces.services.tools import IRequestRouter, IToolCatalog

logger = logging.getLogger(__name__)

DEFAULT_PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def _ok(msg_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": msg_id, "result": result}


def _err(msg_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": msg_id, "error": {"code": code, "message": message}}


class StdioServer:
    def __init__(
        self,
        catalog: "IToolCatalog",
        router: "IRequestRouter",
        server_name: str = "git-server",
        server_version: str = "1.0.0",
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.catalog = catalog
        self.router = router
        self.server_name = server_name
        self.server_version = server_version
        self._stdin = stdin
        self._stdout = stdout

    # ---------- Lifecycle ----------

    def attach(self) -> None:
        """
        Bind to the process streams (or the ones given at construction).

        Raises:
            RuntimeError: If either stream is missing or closed
        """
        stdin = self._stdin if self._stdin is not None else sys.stdin
        stdout = self._stdout if self._stdout is not None else sys.stdout
        for label, stream in (("stdin", stdin), ("stdout", stdout)):
            if stream is None or getattr(stream, "closed", False):
                raise RuntimeError(f"Cannot attach to {label}: stream is unavailable")
        # undecodable input bytes become U+FFFD and fail JSON parsing per line
        if hasattr(stdin, "reconfigure"):
            stdin.reconfigure(errors="replace")
        self._stdin, self._stdout = stdin, stdout

    async def serve(self) -> None:
        """Process messages until stdin reaches end of file."""
        self.attach()
        loop = asyncio.get_running_loop()
        logger.info("Git MCP Server running on stdio")
        while True:
            try:
                line = await loop.run_in_executor(None, self._stdin.readline)
            except UnicodeDecodeError as e:
                logger.warning(f"Discarding undecodable input: {e}")
                self._write(_err(None, PARSE_ERROR, "Parse error: input is not valid UTF-8"))
                continue
            if not line:
                break
            if not line.strip():
                continue
            response = await self.handle_line(line)
            if response is not None:
                self._write(response)
        logger.info("stdin closed; shutting down")

    def _write(self, message: Dict[str, Any]) -> None:
        self._stdout.write(json.dumps(message, ensure_ascii=False) + "\n")
        self._stdout.flush()

    # ---------- Message handling ----------

    async def handle_line(self, line: str) -> Optional[Dict[str, Any]]:
        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Discarding unparseable message: {e}")
            return _err(None, PARSE_ERROR, f"Parse error: {e.msg}")
        try:
            return await self.handle_message(message)
        except Exception as e:
            logger.error(f"Failed to handle message: {e}")
            msg_id = message.get("id") if isinstance(message, dict) else None
            return _err(msg_id, INTERNAL_ERROR, f"Internal error: {e}")

    async def handle_message(self, message: Any) -> Optional[Dict[str, Any]]:
        if not isinstance(message, dict) or not isinstance(message.get("method"), str):
            msg_id = message.get("id") if isinstance(message, dict) else None
            return _err(msg_id, INVALID_REQUEST, "Invalid request")

        method = message["method"]
        is_notification = "id" not in message or method.startswith("notifications/")
        if is_notification:
            logger.debug(f"Notification received: {method}")
            return None

        msg_id = message["id"]
        params = message.get("params") or {}
        if not isinstance(params, dict):
            return _err(msg_id, INVALID_PARAMS, "params must be an object")

        if method == "initialize":
            return _ok(msg_id, self._initialize(params))
        if method == "ping":
            return _ok(msg_id, {})
        if method == "tools/list":
            return _ok(msg_id, {"tools": [d.to_dict() for d in self.catalog.list_tools()]})
        if method == "tools/call":
            return await self._call_tool(msg_id, params)
        return _err(msg_id, METHOD_NOT_FOUND, f"Method not found: {method}")

    def _initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        version = params.get("protocolVersion") or DEFAULT_PROTOCOL_VERSION
        client_info = params.get("clientInfo")
        client = client_info.get("name", "unknown") if isinstance(client_info, dict) else "unknown"
        logger.info(f"Initialize from client {client} (protocol {version})")
        return {
            "protocolVersion": version,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": self.server_name, "version": self.server_version},
        }

    async def _call_tool(self, msg_id: Any, params: Dict[str, Any]) -> Dict[str, Any]:
        name = params.get("name")
        if not isinstance(name, str) or not name:
            error = ProtocolError("tools/call requires a tool name")
            return _err(msg_id, INVALID_PARAMS, error.message)

        result = await self.router.dispatch_async(
            InvocationRequest(tool_name=name, arguments=params.get("arguments"))
        )
        if result.ok:
            return _ok(msg_id, result.to_envelope())
        return _err(msg_id, INTERNAL_ERROR, result.message)
