"""
Error taxonomy shared by the router, the command adapter and the transport.
"""
from __future__ import annotations

from typing import List, Optional


class GitToolError(Exception):
    """Base class for every error this package reports back to a caller."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GitToolError):
    """Unknown tool, missing required argument or an argument of the wrong shape."""

    kind = "validation"


class ExecutionError(GitToolError):
    """The git binary exited non-zero or could not be started.

    ``message`` is the captured standard error, untouched.
    """

    kind = "execution"

    def __init__(self, message: str, returncode: Optional[int] = None, argv: Optional[List[str]] = None):
        super().__init__(message)
        self.returncode = returncode
        self.argv = list(argv or [])


class ProtocolError(GitToolError):
    """Malformed inbound request (no arguments bag, bad JSON-RPC envelope)."""

    kind = "protocol"


__all__ = ["GitToolError", "ValidationError", "ExecutionError", "ProtocolError"]
