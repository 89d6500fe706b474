"""Tool schemas — Pydantic-based parameter validation and output encoding."""

from __future__ import annotations

import inspect
from typing import Any

from pydantic import BaseModel, TypeAdapter, create_model

_OBJECT = TypeAdapter(dict[str, Any])


class PydanticSchema:
    """ToolSchema implementation backed by a Pydantic model."""

    def __init__(self, model: type[BaseModel]) -> None:
        self._model = model

    def parse(self, raw: Any) -> Any:
        if isinstance(raw, (str, bytes)):
            return self._model.model_validate_json(raw)
        return self._model.model_validate(raw)

    def to_json_schema(self) -> dict:
        return self._model.model_json_schema()


class WrappedSchema:
    """Object schema holding a single required field of an arbitrary type.

    Tool inputs must be JSON objects, so non-model types travel as
    ``{"<field>": value}`` and come back unwrapped from ``parse``.
    """

    def __init__(self, tp: Any, field: str = "input", model_name: str = "Input") -> None:
        self._field = field
        self._model = create_model(model_name, **{field: (tp, ...)})

    @property
    def field(self) -> str:
        return self._field

    def parse(self, raw: Any) -> Any:
        if isinstance(raw, (str, bytes)):
            parsed = self._model.model_validate_json(raw)
        else:
            parsed = self._model.model_validate(raw)
        return getattr(parsed, self._field)

    def to_json_schema(self) -> dict:
        return self._model.model_json_schema()


class DictSchema:
    """ToolSchema backed by a raw JSON Schema dict. Input is passed through."""

    def __init__(self, schema: dict[str, Any]) -> None:
        self._schema = schema

    def parse(self, raw: Any) -> Any:
        if isinstance(raw, (str, bytes)):
            return _OBJECT.validate_json(raw) if raw.strip() else {}
        return raw if isinstance(raw, dict) else {}

    def to_json_schema(self) -> dict:
        return self._schema


class OutputAdapter:
    """Validates a callback's return value against its type and encodes it as JSON text."""

    def __init__(self, tp: Any = Any) -> None:
        self._type = tp
        self._adapter = TypeAdapter(tp)

    def dump(self, value: Any) -> str:
        value = self._adapter.validate_python(value)
        if isinstance(value, str):
            return value
        return self._adapter.dump_json(value).decode()

    def to_json_schema(self) -> dict:
        return self._adapter.json_schema()


def input_schema(tp: Any) -> PydanticSchema | WrappedSchema | DictSchema:
    if isinstance(tp, dict):
        return DictSchema(tp)
    if inspect.isclass(tp) and issubclass(tp, BaseModel):
        return PydanticSchema(tp)
    return WrappedSchema(tp)


def output_schema(tp: Any) -> OutputAdapter:
    return OutputAdapter(tp)
