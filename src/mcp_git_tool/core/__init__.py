"""MCP Git Tool core components"""

from .tools import GitOperationAdapter, format_summary
from .handlers import CallToolHandler

__all__ = [
    "GitOperationAdapter",
    "format_summary",
    "CallToolHandler",
]
