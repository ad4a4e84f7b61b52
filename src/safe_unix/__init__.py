"""Read-only Unix inspection gateway speaking JSON-RPC over stdio."""

SERVER_NAME = "safe-unix-mcp"
__version__ = "0.1.0"
