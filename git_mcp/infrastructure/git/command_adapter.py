# git_mcp/infrastructure/git/command_adapter.py

import logging
import subprocess
from typing import List, Optional

from git_mcp.abstractions.dto.tools import Success, Failure, InvocationResult
from git_mcp.abstractions.errors import ExecutionError

logger = logging.getLogger(__name__)

DEFAULT_LOG_COUNT = 10
LOG_FORMAT = "--pretty=format:%H %an %ad %s"


class GitCommandAdapter:
    """
    Runs one git subcommand per call as a blocking child process.

    Arguments are handed to the binary as discrete tokens, never through a
    shell. Output is returned exactly as git wrote it.
    """

    def __init__(self, git_binary: str = "git"):
        """
        Initialize with the git executable to invoke.

        Args:
            git_binary: Name or path of the git executable
        """
        self.git_binary = git_binary

    def run_command(self, repo_path: str, argv: List[str]) -> InvocationResult:
        """
        Execute git with ``argv`` inside ``repo_path``.

        Args:
            repo_path: Working directory for the child process
            argv: Subcommand and its arguments, without the binary name

        Returns:
            Success carrying stdout on exit code 0, otherwise Failure
            carrying an ExecutionError whose message is stderr
        """
        cmd = [self.git_binary, *argv]
        logger.debug(f"Running {cmd} in {repo_path}")
        try:
            result = subprocess.run(
                cmd,
                cwd=repo_path,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            logger.warning(f"Could not start {self.git_binary} in {repo_path}: {e}")
            return Failure(ExecutionError(str(e), argv=argv))

        if result.returncode != 0:
            logger.warning(f"{self.git_binary} {argv[0] if argv else ''} exited with {result.returncode}")
            return Failure(ExecutionError(result.stderr, returncode=result.returncode, argv=argv))

        return Success(result.stdout)

    def status(self, repo_path: str) -> InvocationResult:
        return self.run_command(repo_path, ["status"])

    def diff_unstaged(self, repo_path: str) -> InvocationResult:
        return self.run_command(repo_path, ["diff"])

    def diff_staged(self, repo_path: str) -> InvocationResult:
        return self.run_command(repo_path, ["diff", "--cached"])

    def diff(self, repo_path: str, target: str) -> InvocationResult:
        return self.run_command(repo_path, ["diff", target])

    def commit(self, repo_path: str, message: str) -> InvocationResult:
        return self.run_command(repo_path, ["commit", "-m", message])

    def add(self, repo_path: str, files: List[str]) -> InvocationResult:
        return self.run_command(repo_path, ["add", *files])

    def reset(self, repo_path: str) -> InvocationResult:
        return self.run_command(repo_path, ["reset"])

    def log(self, repo_path: str, max_count: Optional[int] = DEFAULT_LOG_COUNT) -> InvocationResult:
        if max_count is None:
            max_count = DEFAULT_LOG_COUNT
        return self.run_command(repo_path, ["log", f"-n {max_count}", LOG_FORMAT])

    def create_branch(self, repo_path: str, branch_name: str, start_point: Optional[str] = None) -> InvocationResult:
        argv = ["branch", branch_name]
        if start_point:
            argv.append(start_point)
        return self.run_command(repo_path, argv)

    def checkout(self, repo_path: str, branch_name: str) -> InvocationResult:
        return self.run_command(repo_path, ["checkout", branch_name])

    def show(self, repo_path: str, revision: str) -> InvocationResult:
        return self.run_command(repo_path, ["show", revision])

    def init(self, repo_path: str) -> InvocationResult:
        return self.run_command(repo_path, ["init"])
