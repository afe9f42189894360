"""
Shared tool DTOs: catalog descriptors, invocation requests and results.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from git_mcp.abstractions.errors import GitToolError


class ParameterKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    STRING_ARRAY = "array"


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    kind: ParameterKind
    required: bool = True
    description: str = ""

    def to_schema(self) -> Dict[str, Any]:
        """JSON Schema fragment for this parameter."""
        schema: Dict[str, Any] = {"type": self.kind.value}
        if self.kind is ParameterKind.STRING_ARRAY:
            schema["items"] = {"type": "string"}
        if self.description:
            schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    parameters: Tuple[ParameterSpec, ...] = ()

    def __post_init__(self) -> None:
        names = [p.name for p in self.parameters]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate parameter names in tool '{self.name}': {names}")

    @property
    def required_parameters(self) -> List[str]:
        return [p.name for p in self.parameters if p.required]

    @property
    def parameter_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {p.name: p.to_schema() for p in self.parameters},
            "required": self.required_parameters,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Catalog listing entry in the wire vocabulary (``inputSchema``)."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.parameter_schema,
        }


@dataclass
class InvocationRequest:
    tool_name: str
    arguments: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class Success:
    text: str
    ok = True

    def to_envelope(self) -> Dict[str, Any]:
        return {"content": [{"type": "text", "text": self.text}]}


@dataclass(frozen=True)
class Failure:
    error: GitToolError
    ok = False

    @property
    def message(self) -> str:
        return self.error.message


InvocationResult = Union[Success, Failure]

__all__ = [
    "ParameterKind",
    "ParameterSpec",
    "ToolDescriptor",
    "InvocationRequest",
    "Success",
    "Failure",
    "InvocationResult",
]
