"""
Request router: validates an InvocationRequest against the catalog and dispatches it.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Mapping, Optional, TYPE_CHECKING

from git_mcp.abstractions.dto.tools import InvocationRequest, InvocationResult, Failure
from git_mcp.abstractions.errors import GitToolError, ProtocolError, ValidationError
from .params import missing_required

if TYPE_CHECKING:
    from git_mcp.interfaces.services.tools import IToolCatalog

logger = logging.getLogger(__name__)


class RequestRouter:
    """
    Routes invocation requests to catalog handlers and wraps every outcome
    as an InvocationResult. Nothing raised by a handler escapes ``dispatch``.
    """

    def __init__(self, catalog: "IToolCatalog", executor: Optional[ThreadPoolExecutor] = None):
        self.catalog = catalog
        self._executor = executor
        self._owns_executor = executor is None

    def dispatch(self, request: InvocationRequest) -> InvocationResult:
        """
        Validate and execute one request.

        Validation runs in order and the first failure wins: missing
        argument bag, unknown tool name, missing required arguments,
        argument coercion. No subprocess is started unless all pass.
        """
        name = request.tool_name
        arguments = request.arguments

        if arguments is None:
            return self._reject(ProtocolError(f"No arguments provided for tool: {name}"))
        if not isinstance(arguments, Mapping):
            return self._reject(ProtocolError(f"Arguments for tool {name} must be an object"))

        binding = self.catalog.get_tool(name)
        if binding is None:
            return self._reject(ValidationError(f"Unknown tool: {name}"))

        missing = missing_required(binding.descriptor, arguments)
        if missing:
            return self._reject(
                ValidationError(f"Missing required argument(s) for tool {name}: {', '.join(missing)}")
            )

        try:
            params = binding.parse(arguments)
        except GitToolError as e:
            return self._reject(e)

        try:
            result = binding.invoke(params)
        except GitToolError as e:
            result = Failure(e)
        except Exception as e:
            logger.error(f"Tool {name} raised unexpectedly: {e}")
            result = Failure(GitToolError(str(e)))

        if result.ok:
            logger.info(f"Tool {name} succeeded")
        else:
            logger.info(f"Tool {name} failed: {result.error.kind}")
        return result

    async def dispatch_async(self, request: InvocationRequest) -> InvocationResult:
        """Run ``dispatch`` on the router's worker thread and await its result."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._get_executor(), self.dispatch, request)

    def close(self) -> None:
        if self._executor is not None and self._owns_executor:
            self._executor.shutdown(wait=True)
            self._executor = None

    def _get_executor(self) -> ThreadPoolExecutor:
        # one worker: requests complete in arrival order
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="git-dispatch")
            self._owns_executor = True
        return self._executor

    @staticmethod
    def _reject(error: GitToolError) -> Failure:
        logger.warning(f"Rejected request: {error.message}")
        return Failure(error)
