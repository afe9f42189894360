"""
Configuration module for loading environment variables and settings.

This module handles:
1. Loading overrides from a .env file
2. Setting default configurations
3. Validating the settings the server cannot start without
"""

import os
from typing import Optional
from dotenv import load_dotenv

from git_mcp import __version__

# Load environment variables from .env file
load_dotenv()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    """Configuration manager for server settings."""

    # Executable invoked for every tool call
    GIT_BINARY: str = os.getenv('GIT_MCP_GIT_BINARY', 'git')

    # Logging (always written to stderr; stdout carries the protocol)
    LOG_LEVEL: str = os.getenv('GIT_MCP_LOG_LEVEL', 'INFO').upper()

    # Identity reported in the initialize handshake
    SERVER_NAME: str = os.getenv('GIT_MCP_SERVER_NAME', 'git-server')
    SERVER_VERSION: str = os.getenv('GIT_MCP_SERVER_VERSION', __version__)

    # Console colors for the CLI; unset means auto-detect
    CLI_COLOR: Optional[str] = os.getenv('GIT_MCP_CLI_COLOR')

    @classmethod
    def validate(cls) -> None:
        """
        Validate settings.

        Raises:
            ValueError: If the log level is unknown or no git binary is configured
        """
        if cls.LOG_LEVEL not in LOG_LEVELS:
            raise ValueError(
                f"Invalid GIT_MCP_LOG_LEVEL: {cls.LOG_LEVEL}. "
                f"Expected one of: {', '.join(LOG_LEVELS)}"
            )
        if not (cls.GIT_BINARY or "").strip():
            raise ValueError("GIT_MCP_GIT_BINARY must not be empty")

    @classmethod
    def use_color(cls) -> Optional[bool]:
        """Color preference from GIT_MCP_CLI_COLOR, or None to auto-detect."""
        if cls.CLI_COLOR is None:
            return None
        return cls.CLI_COLOR.lower() in ('1', 'true', 'yes', 'on')
