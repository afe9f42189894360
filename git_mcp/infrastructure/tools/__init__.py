"""
Tool catalog and routing for git operations.
"""

from .tool_base import ToolBinding
from .catalog import GitToolCatalog, CATALOG_ENTRIES
from .router import RequestRouter

__all__ = ["ToolBinding", "GitToolCatalog", "CATALOG_ENTRIES", "RequestRouter"]
