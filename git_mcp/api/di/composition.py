"""
Composition module (edge wiring): builds the adapter, catalog, router and server.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from git_mcp.infrastructure.config import Config

if TYPE_CHECKING:
    from git_mcp.infrastructure.git.command_adapter import GitCommandAdapter
    from git_mcp.infrastructure.mcp.stdio_server import StdioServer
    from git_mcp.infrastructure.tools.catalog import GitToolCatalog
    from git_mcp.infrastructure.tools.router import RequestRouter


def build_command_adapter(git_binary: Optional[str] = None) -> "GitCommandAdapter":
    """
    Construct the git command adapter, defaulting to the configured binary.
    """
    from git_mcp.infrastructure.git.command_adapter import GitCommandAdapter
    return GitCommandAdapter(git_binary=git_binary or Config.GIT_BINARY)


def build_tool_catalog(adapter: Optional["GitCommandAdapter"] = None) -> "GitToolCatalog":
    from git_mcp.infrastructure.tools.catalog import GitToolCatalog
    return GitToolCatalog(adapter or build_command_adapter())


def build_router(catalog: Optional["GitToolCatalog"] = None) -> "RequestRouter":
    from git_mcp.infrastructure.tools.router import RequestRouter
    return RequestRouter(catalog or build_tool_catalog())


def build_server(git_binary: Optional[str] = None) -> "StdioServer":
    """
    Construct a stdio server whose catalog and router share one adapter.
    """
    from git_mcp.infrastructure.mcp.stdio_server import StdioServer
    catalog = build_tool_catalog(build_command_adapter(git_binary))
    return StdioServer(
        catalog=catalog,
        router=build_router(catalog),
        server_name=Config.SERVER_NAME,
        server_version=Config.SERVER_VERSION,
    )
