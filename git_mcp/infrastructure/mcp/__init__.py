from .stdio_server import StdioServer, DEFAULT_PROTOCOL_VERSION

__all__ = ["StdioServer", "DEFAULT_PROTOCOL_VERSION"]
