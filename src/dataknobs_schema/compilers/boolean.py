"""Compiler for boolean nodes; only the ``type`` keyword applies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..exceptions import SchemaValidationError
from ..execution import Check
from ..types import is_boolean

if TYPE_CHECKING:
    from . import CompileContext


def compile(schema: Any, context: CompileContext) -> list[Check]:
    if schema.get("type") != "boolean":
        return []

    def assert_boolean_type(value: Any, ref: Any) -> None:
        if not is_boolean(value):
            raise SchemaValidationError("type", "value is not a boolean", code="type_mismatch")

    return [assert_boolean_type]
