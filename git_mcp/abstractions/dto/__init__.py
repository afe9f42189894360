from .tools import (
    ParameterKind,
    ParameterSpec,
    ToolDescriptor,
    InvocationRequest,
    Success,
    Failure,
    InvocationResult,
)

__all__ = [
    "ParameterKind",
    "ParameterSpec",
    "ToolDescriptor",
    "InvocationRequest",
    "Success",
    "Failure",
    "InvocationResult",
]
