"""Compiler for keywords that apply to values of any type.

Handles ``type`` when it is ``"null"`` or an array of type names (single
type names are enforced by the matching type compiler), ``enum`` and
``const``. Equality follows JSON rules, so ``True`` never equals ``1``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..exceptions import SchemaDefinitionError, SchemaValidationError
from ..execution import Check
from ..types import TYPE_PREDICATES, is_array, is_enum, is_string, json_equal, json_key

if TYPE_CHECKING:
    from . import CompileContext


def compile(schema: Any, context: CompileContext) -> list[Check]:
    """Compile the type-independent keywords of a schema node."""
    checks: list[Check] = []

    if "type" in schema:
        check = _compile_type(schema["type"])
        if check is not None:
            checks.append(check)
    if "enum" in schema:
        checks.append(_compile_enum(schema["enum"]))
    if "const" in schema:
        checks.append(_assert_const)

    return checks


def _compile_type(schema_type: Any) -> Check | None:
    if is_string(schema_type):
        if schema_type not in TYPE_PREDICATES:
            raise SchemaDefinitionError("type", f"unknown type '{schema_type}'", code="unknown_type")
        if schema_type != "null":
            return None

        def assert_null(value: Any, ref: Any) -> None:
            if value is not None:
                raise SchemaValidationError("type", "value is not null", code="type_mismatch")

        return assert_null

    if not is_enum(schema_type, is_string):
        raise SchemaDefinitionError(
            "type", "must be a type name or an array of unique type names"
        )
    for name in schema_type:
        if name not in TYPE_PREDICATES:
            raise SchemaDefinitionError("type", f"unknown type '{name}'", code="unknown_type")

    def assert_type_list(value: Any, ref: Any) -> None:
        names = ref["type"]
        if not any(TYPE_PREDICATES[name](value) for name in names):
            raise SchemaValidationError(
                "type",
                f"value is not any of {', '.join(names)}",
                code="type_mismatch",
            )

    return assert_type_list


def _compile_enum(enum: Any) -> Check:
    if not is_array(enum) or not enum:
        raise SchemaDefinitionError("enum", "keyword must be a non-empty array")
    allowed = {"source": enum, "keys": frozenset(json_key(item) for item in enum)}

    def assert_enum(value: Any, ref: Any) -> None:
        current = ref["enum"]
        if current is not allowed["source"]:
            allowed["source"] = current
            allowed["keys"] = frozenset(json_key(item) for item in current)
        if json_key(value) not in allowed["keys"]:
            raise SchemaValidationError(
                "enum", "value is not one of the allowed values", code="not_allowed"
            )

    return assert_enum


def _assert_const(value: Any, ref: Any) -> None:
    if not json_equal(value, ref["const"]):
        raise SchemaValidationError(
            "const", "value does not equal the constant", code="not_constant"
        )
