"""
Typed parameter structs, one per tool, and coercion from the loose argument bag.

The router validates presence against the descriptor, then calls
``parse_params`` to turn the bag into the frozen struct the handler receives.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from git_mcp.abstractions.dto.tools import ParameterKind, ToolDescriptor
from git_mcp.abstractions.errors import ValidationError
from git_mcp.infrastructure.git.command_adapter import DEFAULT_LOG_COUNT

P = TypeVar("P")


@dataclass(frozen=True)
class RepoParams:
    repo_path: str


@dataclass(frozen=True)
class DiffParams:
    repo_path: str
    target: str


@dataclass(frozen=True)
class CommitParams:
    repo_path: str
    message: str


@dataclass(frozen=True)
class AddParams:
    repo_path: str
    files: List[str]


@dataclass(frozen=True)
class LogParams:
    repo_path: str
    max_count: int = DEFAULT_LOG_COUNT


@dataclass(frozen=True)
class CreateBranchParams:
    repo_path: str
    branch_name: str
    start_point: Optional[str] = None


@dataclass(frozen=True)
class CheckoutParams:
    repo_path: str
    branch_name: str


@dataclass(frozen=True)
class ShowParams:
    repo_path: str
    revision: str


def missing_required(descriptor: ToolDescriptor, arguments: Mapping[str, Any]) -> List[str]:
    """Names of required parameters that are absent or null, in declared order."""
    return [name for name in descriptor.required_parameters if arguments.get(name) is None]


def _coerce(tool: str, name: str, kind: ParameterKind, value: Any) -> Any:
    if kind is ParameterKind.STRING:
        return str(value)
    if kind is ParameterKind.NUMBER:
        # bool is a Real subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, (Real, str)):
            raise ValidationError(f"Argument '{name}' for tool {tool} must be a number")
        try:
            return int(float(value))
        except (ValueError, OverflowError):
            raise ValidationError(f"Argument '{name}' for tool {tool} must be a number")
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    raise ValidationError(f"Argument '{name}' for tool {tool} must be an array of strings")


def parse_params(descriptor: ToolDescriptor, params_type: Type[P], arguments: Mapping[str, Any]) -> P:
    """
    Build ``params_type`` from ``arguments`` using the descriptor's parameter kinds.

    Optional parameters that are absent or null fall back to the struct's
    defaults. Arguments the descriptor does not declare are ignored.

    Raises:
        ValidationError: If a value cannot be coerced to its declared kind
    """
    values: Dict[str, Any] = {}
    for param in descriptor.parameters:
        value = arguments.get(param.name)
        if value is None:
            continue
        values[param.name] = _coerce(descriptor.name, param.name, param.kind, value)
    return params_type(**values)


def field_names(params_type: type) -> List[str]:
    return [f.name for f in fields(params_type)]
