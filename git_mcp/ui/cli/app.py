"""
Command-line entry point for the git tool server.

Commands:
  serve      Run the stdio server (default)
  tools      List the tool catalog
  call       Dispatch a single tool call locally and print the result

Run:
  python -m git_mcp
  or
  git-mcp-server tools
  git-mcp-server call git_log --repo . --args '{"max_count": 5}'
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from rich.box import ROUNDED
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from git_mcp import __version__
from git_mcp.abstractions.dto.tools import InvocationRequest
from git_mcp.api.di.composition import (
    build_command_adapter,
    build_router,
    build_server,
    build_tool_catalog,
)
from git_mcp.infrastructure.config import Config
from git_mcp.ui.cli.console import configure_logging, make_console

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="git-mcp-server", description="Git operations exposed as tools.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None, help="Override GIT_MCP_LOG_LEVEL")
    parser.add_argument("--git-binary", default=None, help="Override GIT_MCP_GIT_BINARY")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("serve", help="Run the stdio server (default)")
    sub.add_parser("tools", help="List the tool catalog")

    call = sub.add_parser("call", help="Dispatch one tool call and print its output")
    call.add_argument("tool", help="Tool name, e.g. git_status")
    call.add_argument("--args", dest="arguments", default="{}", help="Tool arguments as a JSON object")
    call.add_argument("--repo", default=None, help="Value for repo_path when not given in --args")
    return parser


def list_tools(console: Console) -> None:
    """Render a table of catalog tools."""
    table = Table(title="Git Tools", box=ROUNDED)
    table.add_column("Name", no_wrap=True)
    table.add_column("Description")
    table.add_column("Required Params")
    table.add_column("Optional Params")

    for descriptor in build_tool_catalog().list_tools():
        required = descriptor.required_parameters
        optional = [p.name for p in descriptor.parameters if not p.required]
        table.add_row(descriptor.name, descriptor.description, ", ".join(required) or "-", ", ".join(optional) or "-")

    console.print(table)


def call_tool(tool: str, raw_arguments: str, repo: Optional[str], git_binary: Optional[str], err_console: Console) -> int:
    try:
        arguments: Dict[str, Any] = json.loads(raw_arguments)
    except json.JSONDecodeError as e:
        err_console.print(Panel(f"--args is not valid JSON: {e}", title="Error", box=ROUNDED, border_style="error"))
        return 1
    if not isinstance(arguments, dict):
        err_console.print(Panel("--args must be a JSON object", title="Error", box=ROUNDED, border_style="error"))
        return 1
    if repo is not None:
        arguments.setdefault("repo_path", repo)

    router = build_router(build_tool_catalog(build_command_adapter(git_binary)))
    result = router.dispatch(InvocationRequest(tool_name=tool, arguments=arguments))
    if result.ok:
        sys.stdout.write(result.text)
        sys.stdout.flush()
        return 0
    err_console.print(Panel(result.message.rstrip("\n") or "(no message)", title=f"Tool Failed: {tool}", box=ROUNDED, border_style="error"))
    return 1


def run_server(git_binary: Optional[str]) -> int:
    server = None
    try:
        server = build_server(git_binary)
        asyncio.run(server.serve())
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.error(f"Fatal error in main(): {e}")
        return 1
    finally:
        if server is not None:
            server.router.close()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.log_level:
        Config.LOG_LEVEL = args.log_level.upper()
    err_console = make_console(Config.use_color())
    try:
        Config.validate()
    except ValueError as e:
        err_console.print(Panel(str(e), title="Configuration Error", box=ROUNDED, border_style="error"))
        return 1
    configure_logging(Config.LOG_LEVEL, err_console)

    command = args.command or "serve"
    if command == "tools":
        list_tools(make_console(Config.use_color(), stderr=False))
        return 0
    if command == "call":
        return call_tool(args.tool, args.arguments, args.repo, args.git_binary, err_console)
    return run_server(args.git_binary)


if __name__ == "__main__":
    sys.exit(main())
