"""
Shared test fixtures for the git tool server.

Subprocess calls are faked by patching ``subprocess.run`` inside the command
adapter module, so most tests never start a child process. Tests that need
a real repository use the ``git_repo`` fixture, which is skipped when git is
not installed.
"""

import os
import shutil
import subprocess
import sys
from typing import Any, Dict, List, Optional

import pytest
from dotenv import load_dotenv

# Ensure project root is on sys.path so 'git_mcp' imports resolve in tests
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

# Load environment variables
load_dotenv()

from git_mcp.infrastructure.git import command_adapter as command_adapter_module  # noqa: E402
from git_mcp.infrastructure.git.command_adapter import GitCommandAdapter  # noqa: E402
from git_mcp.infrastructure.tools.catalog import GitToolCatalog  # noqa: E402
from git_mcp.infrastructure.tools.router import RequestRouter  # noqa: E402


class FakeRun:
    """Stand-in for subprocess.run that records every call."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.returncode = 0
        self.stdout = ""
        self.stderr = ""
        self.raises: Optional[Exception] = None

    def __call__(self, cmd, **kwargs):
        self.calls.append({"cmd": list(cmd), **kwargs})
        if self.raises is not None:
            raise self.raises
        return subprocess.CompletedProcess(cmd, self.returncode, self.stdout, self.stderr)

    @property
    def argvs(self) -> List[List[str]]:
        """Recorded argument vectors without the binary name."""
        return [c["cmd"][1:] for c in self.calls]


@pytest.fixture
def fake_run(monkeypatch):
    fake = FakeRun()
    monkeypatch.setattr(command_adapter_module.subprocess, "run", fake)
    return fake


@pytest.fixture
def adapter():
    return GitCommandAdapter(git_binary="git")


@pytest.fixture
def catalog(adapter):
    return GitToolCatalog(adapter)


@pytest.fixture
def router(catalog):
    r = RequestRouter(catalog)
    yield r
    r.close()


def _git(cwd, *args):
    subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True, text=True)


@pytest.fixture
def git_repo(tmp_path):
    """An initialized repository with one commit on its initial branch."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init")
    _git(repo, "config", "user.email", "dev@example.com")
    _git(repo, "config", "user.name", "Dev")
    _git(repo, "config", "commit.gpgsign", "false")
    (repo / "README.md").write_text("hello\n")
    _git(repo, "add", "README.md")
    _git(repo, "commit", "-m", "initial commit")
    return repo
