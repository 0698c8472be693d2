"""Compiler for the schema combinators ``allOf``, ``anyOf``, ``oneOf`` and ``not``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..exceptions import SchemaDefinitionError, SchemaValidationError
from ..execution import Check, validate_subschema
from ..types import is_schema, is_typed_array

if TYPE_CHECKING:
    from . import CompileContext


def compile(schema: Any, context: CompileContext) -> list[Check]:
    checks: list[Check] = []

    for keyword in ("allOf", "anyOf", "oneOf"):
        if keyword in schema:
            nodes = schema[keyword]
            if not (is_typed_array(nodes, is_schema) and nodes):
                raise SchemaDefinitionError(keyword, "must be a non-empty array of Schemas")

    if "allOf" in schema:
        def assert_all_of(value: Any, ref: Any) -> None:
            for node in ref["allOf"]:
                validate_subschema(value, node, context)

        checks.append(assert_all_of)

    if "anyOf" in schema:
        def assert_any_of(value: Any, ref: Any) -> None:
            for node in ref["anyOf"]:
                if _passes(value, node, context):
                    return
            raise SchemaValidationError(
                "anyOf", "value does not match any schema", code="no_match"
            )

        checks.append(assert_any_of)

    if "oneOf" in schema:
        def assert_one_of(value: Any, ref: Any) -> None:
            matches = 0
            for node in ref["oneOf"]:
                if _passes(value, node, context):
                    matches += 1
                    if matches > 1:
                        raise SchemaValidationError(
                            "oneOf",
                            "value matches more than one schema",
                            code="multiple_matches",
                        )
            if not matches:
                raise SchemaValidationError("oneOf", "value matches no schema", code="no_match")

        checks.append(assert_one_of)

    if "not" in schema:
        if not is_schema(schema["not"]):
            raise SchemaDefinitionError("not", "must be a Schema")

        def assert_not(value: Any, ref: Any) -> None:
            if _passes(value, ref["not"], context):
                raise SchemaValidationError(
                    "not", "value matches a disallowed schema", code="disallowed_match"
                )

        checks.append(assert_not)

    return checks


def _passes(value: Any, node: Any, context: CompileContext) -> bool:
    try:
        validate_subschema(value, node, context)
    except SchemaValidationError:
        return False
    return True
