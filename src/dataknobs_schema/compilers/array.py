"""Compiler for array keywords.

Handles ``items``, ``additionalItems``, ``contains``, ``uniqueItems``,
``maxItems`` and ``minItems``. Like the object compiler, per-item checks run
inside one pass over the items and whole-array checks run after it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..exceptions import SchemaDefinitionError, SchemaValidationError
from ..execution import (
    Check,
    ItemContext,
    SizeMode,
    run_compiled,
    size_threshold,
    validate_subschema,
)
from ..types import is_array, is_boolean, is_object, is_schema, is_typed_array, json_key

if TYPE_CHECKING:
    from . import CompileContext


def compile(schema: Any, context: CompileContext) -> list[Check]:
    """Compile the array keywords of a schema node.

    Args:
        schema: Schema node
        context: Compile context used to reach sub-schema checks

    Returns:
        A single combined check, a type-only check, or no check

    Raises:
        SchemaDefinitionError: If an array keyword is malformed
    """
    inner: list[Check] = []
    outer: list[Check] = []

    if "additionalItems" in schema and not is_schema(schema["additionalItems"]):
        raise SchemaDefinitionError("additionalItems", "must be either a Schema or Boolean")
    if "items" in schema:
        inner.append(_compile_items(schema["items"], context))

    if "contains" in schema:
        outer.append(_compile_contains(schema["contains"], context))
    if "uniqueItems" in schema:
        if not is_boolean(schema["uniqueItems"]):
            raise SchemaDefinitionError("uniqueItems", "keyword must be a boolean")
        if schema["uniqueItems"]:
            outer.append(_assert_unique_items)
    if "maxItems" in schema:
        outer.append(size_threshold(schema["maxItems"], "maxItems", SizeMode.MAX))
    if "minItems" in schema:
        outer.append(size_threshold(schema["minItems"], "minItems", SizeMode.MIN))

    if inner or outer:
        def assert_array(value: Any, ref: Any) -> None:
            if not is_array(value):
                if ref.get("type") == "array":
                    raise _type_error()
                return

            if inner:
                for index, item in enumerate(value):
                    run_compiled(ItemContext(value, index, item), ref, inner)

            if outer:
                run_compiled(value, ref, outer)

        return [assert_array]

    if schema.get("type") == "array":
        def assert_array_type(value: Any, ref: Any) -> None:
            if not is_array(value):
                raise _type_error()

        return [assert_array_type]

    return []


def _type_error() -> SchemaValidationError:
    return SchemaValidationError("type", "value is not an array", code="type_mismatch")


def _compile_items(items: Any, context: CompileContext) -> Check:
    if is_schema(items):
        def assert_items(entry: ItemContext, ref: Any) -> None:
            validate_subschema(entry.item, ref["items"], context)

        return assert_items

    if not is_typed_array(items, is_schema):
        raise SchemaDefinitionError("items", "must be a Schema or an array of Schemas")

    def assert_item_tuple(entry: ItemContext, ref: Any) -> None:
        positional = ref["items"]
        if entry.index < len(positional):
            validate_subschema(entry.item, positional[entry.index], context)
            return

        additional = ref.get("additionalItems", True)
        if additional is False:
            raise SchemaValidationError(
                "additionalItems",
                "additional items not allowed",
                code="additional_item",
                context={"index": entry.index},
            )
        if is_object(additional):
            validate_subschema(entry.item, additional, context)

    return assert_item_tuple


def _compile_contains(contains: Any, context: CompileContext) -> Check:
    if not is_schema(contains):
        raise SchemaDefinitionError("contains", "must be a Schema")

    def assert_contains(value: Any, ref: Any) -> None:
        node = ref["contains"]
        checks = context.checks_for(node)
        for item in value:
            try:
                run_compiled(item, node, checks)
            except SchemaValidationError:
                continue
            return
        raise SchemaValidationError(
            "contains", "value does not contain a matching item", code="no_match"
        )

    return assert_contains


def _assert_unique_items(value: Any, ref: Any) -> None:
    if ref.get("uniqueItems") is not True:
        return
    seen = set()
    for index, item in enumerate(value):
        key = json_key(item)
        if key in seen:
            raise SchemaValidationError(
                "uniqueItems",
                "value contains duplicate items",
                code="duplicate_item",
                context={"index": index},
            )
        seen.add(key)
