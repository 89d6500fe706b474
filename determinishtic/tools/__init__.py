"""Tool registry, schemas and the reserved result tool."""

from .registry import ToolRegistry, define_tool
from .result import RESULT_TOOL_NAME, ResultTool
from .schema import (
    DictSchema, OutputAdapter, PydanticSchema, WrappedSchema, input_schema, output_schema,
)

__all__ = [
    "ToolRegistry", "define_tool",
    "RESULT_TOOL_NAME", "ResultTool",
    "DictSchema", "OutputAdapter", "PydanticSchema", "WrappedSchema",
    "input_schema", "output_schema",
]
