"""Compiler for string keywords: ``maxLength``, ``minLength`` and ``pattern``."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from ..exceptions import SchemaDefinitionError, SchemaValidationError
from ..execution import Check, SizeMode, run_compiled, size_threshold
from ..types import is_string

if TYPE_CHECKING:
    from . import CompileContext


def compile(schema: Any, context: CompileContext) -> list[Check]:
    """Compile the string keywords of a schema node.

    Lengths count code points, so ``"né"`` has length 2 whatever its
    encoding. Patterns are unanchored, as in JSON Schema.
    """
    checks: list[Check] = []

    if "maxLength" in schema:
        checks.append(size_threshold(schema["maxLength"], "maxLength", SizeMode.MAX))
    if "minLength" in schema:
        checks.append(size_threshold(schema["minLength"], "minLength", SizeMode.MIN))
    if "pattern" in schema:
        checks.append(_compile_pattern(schema["pattern"]))

    if checks:
        def assert_string(value: Any, ref: Any) -> None:
            if not is_string(value):
                if ref.get("type") == "string":
                    raise _type_error()
                return
            run_compiled(value, ref, checks)

        return [assert_string]

    if schema.get("type") == "string":
        def assert_string_type(value: Any, ref: Any) -> None:
            if not is_string(value):
                raise _type_error()

        return [assert_string_type]

    return []


def _type_error() -> SchemaValidationError:
    return SchemaValidationError("type", "value is not a string", code="type_mismatch")


def _compile_pattern(source: Any) -> Check:
    if not is_string(source):
        raise SchemaDefinitionError("pattern", "keyword must be a string")
    try:
        compiled = {source: re.compile(source)}
    except re.error:
        raise SchemaDefinitionError(
            "pattern", f"invalid regular expression '{source}'", code="invalid_pattern"
        ) from None

    def assert_pattern(value: str, ref: Any) -> None:
        current = ref["pattern"]
        regex = compiled.get(current)
        if regex is None:
            regex = compiled[current] = re.compile(current)
        if not regex.search(value):
            raise SchemaValidationError(
                "pattern",
                f"value does not match pattern '{current}'",
                code="pattern_mismatch",
            )

    return assert_pattern
