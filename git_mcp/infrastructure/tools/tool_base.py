# git_mcp/infrastructure/tools/tool_base.py
"""
A catalog entry: the advertised descriptor paired with the handler that serves it.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping

from git_mcp.abstractions.dto.tools import ToolDescriptor, InvocationResult
from .params import parse_params


@dataclass(frozen=True)
class ToolBinding:
    """
    Immutable pairing of a ToolDescriptor with its typed parameters and handler.

    The handler receives the descriptor's parameters positionally, in the
    order they are declared.
    """

    descriptor: ToolDescriptor
    params_type: type
    handler: Callable[..., InvocationResult]

    @property
    def name(self) -> str:
        """Tool name used in function calling format."""
        return self.descriptor.name

    def parse(self, arguments: Mapping[str, Any]) -> Any:
        """Coerce a raw argument bag into this tool's parameter struct."""
        return parse_params(self.descriptor, self.params_type, arguments)

    def invoke(self, params: Any) -> InvocationResult:
        """Call the handler with the struct's fields in declared order."""
        args = [getattr(params, p.name) for p in self.descriptor.parameters]
        return self.handler(*args)

    def get_tool_definition(self) -> Dict[str, Any]:
        """Get the tool definition in catalog listing format."""
        return self.descriptor.to_dict()
