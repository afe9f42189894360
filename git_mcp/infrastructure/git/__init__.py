from .command_adapter import GitCommandAdapter, DEFAULT_LOG_COUNT, LOG_FORMAT

__all__ = ["GitCommandAdapter", "DEFAULT_LOG_COUNT", "LOG_FORMAT"]
