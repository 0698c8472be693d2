"""Compiler for object keywords.

Handles ``properties``, ``patternProperties``, ``additionalProperties``,
``dependencies``, ``propertyNames``, ``required``, ``maxProperties`` and
``minProperties``.

The keywords fall into two groups. Per-key checks run once for every own key
of the object, inside a single pass over the keys. Whole-object checks run
once after that pass and receive an ``ObjectTally`` holding the key count and
the number of required keys seen during the pass. The object is walked once
no matter how many keywords are present, and the first violation found in
key order, then check order, is the one reported.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from ..exceptions import SchemaDefinitionError, SchemaValidationError
from ..execution import (
    Check,
    ObjectTally,
    PropertyContext,
    SizeMode,
    run_compiled,
    size_threshold,
    validate_subschema,
)
from ..types import is_array, is_enum, is_object, is_schema, is_string, is_typed_array

if TYPE_CHECKING:
    from . import CompileContext


def compile(schema: Any, context: CompileContext) -> list[Check]:
    """Compile the object keywords of a schema node.

    Args:
        schema: Schema node
        context: Compile context used to reach sub-schema checks

    Returns:
        A single combined check, a type-only check, or no check at all

    Raises:
        SchemaDefinitionError: If an object keyword is malformed
    """
    inner: list[Check] = []
    outer: list[Check] = []

    # per-key keywords
    inner.extend(_compile_properties(schema, context))
    if "dependencies" in schema:
        inner.append(_compile_dependencies(schema["dependencies"], context))
    if "propertyNames" in schema:
        inner.append(_compile_property_names(schema["propertyNames"], context))

    # whole-object keywords
    required, assert_required = _compile_required(schema)
    if assert_required is not None:
        outer.append(assert_required)
    if "maxProperties" in schema:
        outer.append(size_threshold(schema["maxProperties"], "maxProperties", SizeMode.MAX))
    if "minProperties" in schema:
        outer.append(size_threshold(schema["minProperties"], "minProperties", SizeMode.MIN))

    if inner or outer:
        def assert_object(value: Any, ref: Any) -> None:
            if not is_object(value):
                if ref.get("type") == "object":
                    raise _type_error()
                return

            required_count = 0
            if inner or required:
                for key, item in value.items():
                    if key in required:
                        required_count += 1
                    if inner:
                        run_compiled(PropertyContext(value, key, item), ref, inner)

            if outer:
                run_compiled(ObjectTally(len(value), required_count), ref, outer)

        return [assert_object]

    if schema.get("type") == "object":
        def assert_object_type(value: Any, ref: Any) -> None:
            if not is_object(value):
                raise _type_error()

        return [assert_object_type]

    return []


def _type_error() -> SchemaValidationError:
    return SchemaValidationError("type", "value is not an object", code="type_mismatch")


def _compile_pattern(keyword: str, source: str) -> re.Pattern:
    try:
        return re.compile(source)
    except (re.error, TypeError):
        raise SchemaDefinitionError(
            keyword, f"invalid regular expression '{source}'", code="invalid_pattern"
        ) from None


def _is_schema_map(value: Any) -> bool:
    return is_object(value) and all(is_schema(node) for node in value.values())


def _compile_properties(schema: Any, context: CompileContext) -> list[Check]:
    checks: list[Check] = []

    if "properties" in schema:
        if not _is_schema_map(schema["properties"]):
            raise SchemaDefinitionError("properties", "must be an Object")

        def assert_properties(prop: PropertyContext, ref: Any) -> None:
            node = ref["properties"].get(prop.key)
            if is_schema(node):
                validate_subschema(prop.item, node, context)

        checks.append(assert_properties)

    if "patternProperties" in schema:
        if not _is_schema_map(schema["patternProperties"]):
            raise SchemaDefinitionError("patternProperties", "must be an Object")
        patterns = {
            source: _compile_pattern("patternProperties", source)
            for source in schema["patternProperties"]
        }

        def assert_pattern_properties(prop: PropertyContext, ref: Any) -> None:
            if not is_string(prop.key):
                return
            for source, node in ref["patternProperties"].items():
                regex = patterns.get(source)
                if regex is None:
                    regex = patterns[source] = _compile_pattern("patternProperties", source)
                if regex.search(prop.key):
                    prop.pattern_matched = True
                    validate_subschema(prop.item, node, context)

        checks.append(assert_pattern_properties)

    if "additionalProperties" in schema:
        additional = schema["additionalProperties"]

        def is_additional(prop: PropertyContext, ref: Any) -> bool:
            return prop.key not in (ref.get("properties") or {}) and not prop.pattern_matched

        if is_object(additional):
            def assert_additional_properties(prop: PropertyContext, ref: Any) -> None:
                if is_additional(prop, ref):
                    validate_subschema(prop.item, ref["additionalProperties"], context)

            checks.append(assert_additional_properties)
        elif additional is False:
            def assert_no_additional_properties(prop: PropertyContext, ref: Any) -> None:
                if is_additional(prop, ref):
                    raise SchemaValidationError(
                        "additionalProperties",
                        "additional properties not allowed",
                        code="additional_property",
                        context={"property": prop.key},
                    )

            checks.append(assert_no_additional_properties)
        elif additional is not True:
            raise SchemaDefinitionError(
                "additionalProperties", "must be either a Schema or Boolean"
            )

    return checks


def _compile_dependencies(dependencies: Any, context: CompileContext) -> Check:
    if not is_object(dependencies):
        raise SchemaDefinitionError("dependencies", "must be an Object")
    for dependency in dependencies.values():
        # empty arrays are allowed and always satisfied
        if not (
            (is_array(dependency) and not dependency)
            or is_enum(dependency, is_string)
            or is_schema(dependency)
        ):
            raise SchemaDefinitionError(
                "dependencies", "all dependencies must either be Schemas|enums"
            )

    def assert_dependencies(prop: PropertyContext, ref: Any) -> None:
        dependency = ref["dependencies"].get(prop.key)
        if dependency is None:
            return

        if is_array(dependency):
            for name in dependency:
                if name not in prop.container:
                    raise SchemaValidationError(
                        "dependencies",
                        f"value does not have '{name}' dependency required by '{prop.key}'",
                        code="missing_dependency",
                        context={"property": prop.key, "missing": name},
                    )
        else:
            validate_subschema(prop.container, dependency, context)

    return assert_dependencies


def _compile_property_names(property_names: Any, context: CompileContext) -> Check:
    if not is_schema(property_names):
        raise SchemaDefinitionError("propertyNames", "must be a Schema")

    def assert_property_names(prop: PropertyContext, ref: Any) -> None:
        validate_subschema(prop.key, ref["propertyNames"], context)

    return assert_property_names


def _compile_required(schema: Any) -> tuple[frozenset, Check | None]:
    """Convert ``required`` into a lookup set plus its tally check."""
    if "required" not in schema:
        return frozenset(), None

    required = schema["required"]
    if not is_typed_array(required, is_string):
        raise SchemaDefinitionError(
            "required", "required properties must be defined in an array of strings"
        )
    if len(set(required)) != len(required):
        raise SchemaDefinitionError("required", "required properties must be unique")

    def assert_required(tally: ObjectTally, ref: Any) -> None:
        if tally.required_count != len(ref["required"]):
            raise SchemaValidationError(
                "required",
                "value does not have all required properties",
                code="missing_required",
            )

    return frozenset(required), assert_required
