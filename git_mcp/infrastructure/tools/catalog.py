"""
The fixed catalog of git tools, built once per process around one command adapter.
"""

from typing import Dict, Optional, Tuple, TYPE_CHECKING

from git_mcp.abstractions.dto.tools import ParameterKind, ParameterSpec, ToolDescriptor
from .params import (
    AddParams,
    CheckoutParams,
    CommitParams,
    CreateBranchParams,
    DiffParams,
    LogParams,
    RepoParams,
    ShowParams,
)
from .tool_base import ToolBinding

if TYPE_CHECKING:
    from git_mcp.infrastructure.git.command_adapter import GitCommandAdapter

STRING = ParameterKind.STRING
NUMBER = ParameterKind.NUMBER
STRING_ARRAY = ParameterKind.STRING_ARRAY

REPO_PATH = ParameterSpec("repo_path", STRING, description="Path to Git repository")

# (tool name, adapter method, description, parameters, parameter struct)
CATALOG_ENTRIES: Tuple[Tuple[str, str, str, Tuple[ParameterSpec, ...], type], ...] = (
    ("git_status", "status", "Shows the working tree status", (REPO_PATH,), RepoParams),
    (
        "git_diff_unstaged",
        "diff_unstaged",
        "Shows changes in working directory not yet staged",
        (REPO_PATH,),
        RepoParams,
    ),
    ("git_diff_staged", "diff_staged", "Shows changes that are staged for commit", (REPO_PATH,), RepoParams),
    (
        "git_diff",
        "diff",
        "Shows differences between branches or commits",
        (REPO_PATH, ParameterSpec("target", STRING, description="Target branch or commit to compare with")),
        DiffParams,
    ),
    (
        "git_commit",
        "commit",
        "Records changes to the repository",
        (REPO_PATH, ParameterSpec("message", STRING, description="Commit message")),
        CommitParams,
    ),
    (
        "git_add",
        "add",
        "Adds file contents to the staging area",
        (REPO_PATH, ParameterSpec("files", STRING_ARRAY, description="Array of file paths to stage")),
        AddParams,
    ),
    ("git_reset", "reset", "Unstages all staged changes", (REPO_PATH,), RepoParams),
    (
        "git_log",
        "log",
        "Shows the commit logs",
        (
            REPO_PATH,
            ParameterSpec(
                "max_count",
                NUMBER,
                required=False,
                description="Maximum number of commits to show (default: 10)",
            ),
        ),
        LogParams,
    ),
    (
        "git_create_branch",
        "create_branch",
        "Creates a new branch",
        (
            REPO_PATH,
            ParameterSpec("branch_name", STRING, description="Name of the new branch"),
            ParameterSpec(
                "start_point",
                STRING,
                required=False,
                description="Starting point for the new branch",
            ),
        ),
        CreateBranchParams,
    ),
    (
        "git_checkout",
        "checkout",
        "Switches branches",
        (REPO_PATH, ParameterSpec("branch_name", STRING, description="Name of branch to checkout")),
        CheckoutParams,
    ),
    (
        "git_show",
        "show",
        "Shows the contents of a commit",
        (
            REPO_PATH,
            ParameterSpec(
                "revision",
                STRING,
                description="The revision (commit hash, branch name, tag) to show",
            ),
        ),
        ShowParams,
    ),
    (
        "git_init",
        "init",
        "Initializes a Git repository",
        (ParameterSpec("repo_path", STRING, description="Path to directory to initialize git repo"),),
        RepoParams,
    ),
)


class GitToolCatalog:
    """
    Ordered, read-only collection of ToolBindings.

    Bindings are created in the constructor and never added or removed
    afterwards; ``list_tools`` returns the same tuple on every call.
    """

    def __init__(self, adapter: "GitCommandAdapter"):
        self._bindings: Tuple[ToolBinding, ...] = tuple(
            ToolBinding(
                descriptor=ToolDescriptor(name=name, description=description, parameters=parameters),
                params_type=params_type,
                handler=getattr(adapter, method),
            )
            for name, method, description, parameters, params_type in CATALOG_ENTRIES
        )
        self._by_name: Dict[str, ToolBinding] = {b.name: b for b in self._bindings}
        if len(self._by_name) != len(self._bindings):
            raise ValueError("Duplicate tool names in catalog")
        self._descriptors: Tuple[ToolDescriptor, ...] = tuple(b.descriptor for b in self._bindings)

    def list_tools(self) -> Tuple[ToolDescriptor, ...]:
        return self._descriptors

    def get_tool(self, name: str) -> Optional[ToolBinding]:
        return self._by_name.get(name)

