"""The synthesized result tool the engine calls to deliver its final answer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from ..errors import ResultError
from ..types import ToolSpec
from .schema import WrappedSchema

RESULT_TOOL_NAME = "return_result"

RESULT_TOOL_DESCRIPTION = (
    "Return the final result of the task. Call this exactly once, when you are done; "
    "the value goes in the `result` field."
)


@dataclass
class ResultTool:
    """Schema and decoder for a builder's expected output type."""

    output_type: Any
    schema: WrappedSchema

    @classmethod
    def for_type(cls, output_type: Any) -> ResultTool:
        return cls(
            output_type=output_type,
            schema=WrappedSchema(output_type, field="result", model_name="ReturnResult"),
        )

    def spec(self) -> ToolSpec:
        return ToolSpec(
            name=RESULT_TOOL_NAME,
            description=RESULT_TOOL_DESCRIPTION,
            input_schema=self.schema.to_json_schema(),
        )

    def decode(self, payload: Any) -> Any:
        try:
            return self.schema.parse(payload)
        except (ValidationError, ValueError) as e:
            raise ResultError(
                RESULT_TOOL_NAME, f"could not decode result as {_type_name(self.output_type)}: {e}", e
            ) from e


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)
