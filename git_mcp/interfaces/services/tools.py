"""
Tool catalog and routing ports.
"""
from __future__ import annotations
from typing import Protocol, Sequence, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from git_mcp.abstractions.dto.tools import ToolDescriptor, InvocationRequest, InvocationResult
    from git_mcp.infrastructure.tools.tool_base import ToolBinding

class IToolCatalog(Protocol):
    def list_tools(self) -> Sequence["ToolDescriptor"]:
        ...
    def get_tool(self, name: str) -> Optional["ToolBinding"]:
        ...

class IRequestRouter(Protocol):
    def dispatch(self, request: "InvocationRequest") -> "InvocationResult":
        ...
    async def dispatch_async(self, request: "InvocationRequest") -> "InvocationResult":
        ...
    def close(self) -> None:
        ...

__all__ = ["IToolCatalog", "IRequestRouter"]
