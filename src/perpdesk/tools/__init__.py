"""Assistant tool-call layer: definitions, input schemas and the executor."""

from perpdesk.tools.definitions import TOOL_DEFINITIONS
from perpdesk.tools.executor import ToolExecutor, ToolResponse

__all__ = ["TOOL_DEFINITIONS", "ToolExecutor", "ToolResponse"]
