"""
Logging for Spawner.

Provides process-wide log configuration (rich console output) and a
JSONL tool-call log for auditing MCP traffic.
"""

from spawner.logging.setup import configure_logging
from spawner.logging.tool_call_logger import ToolCallLogger

__all__ = [
    "ToolCallLogger",
    "configure_logging",
]
