"""Compiler for numeric keywords.

Handles ``maximum``, ``minimum``, ``exclusiveMaximum``, ``exclusiveMinimum``
and ``multipleOf`` for both ``number`` and ``integer`` nodes. The exclusive
keywords accept either convention: a boolean modifier of ``maximum`` /
``minimum``, or a standalone numeric bound.
"""

from __future__ import annotations

import math
from fractions import Fraction
from numbers import Integral
from typing import TYPE_CHECKING, Any, Callable

from ..exceptions import SchemaDefinitionError, SchemaValidationError
from ..execution import Check
from ..settings import MultipleOfMode
from ..types import is_boolean, is_integer, is_number

if TYPE_CHECKING:
    from . import CompileContext

_BOUND_KEYWORDS = ("maximum", "exclusiveMaximum", "minimum", "exclusiveMinimum", "multipleOf")


def compile(schema: Any, context: CompileContext) -> list[Check]:
    """Compile the numeric keywords of a schema node.

    Args:
        schema: Schema node
        context: Compile context; its settings pick the multipleOf test

    Returns:
        One combined bounds check, a type-only check, or no check

    Raises:
        SchemaDefinitionError: If a numeric keyword has the wrong type
    """
    schema_type = schema.get("type")
    assertion = is_integer if schema_type == "integer" else is_number

    if "maximum" in schema:
        _assert_bound("maximum", "exclusiveMaximum", schema, assertion)
    if "minimum" in schema:
        _assert_bound("minimum", "exclusiveMinimum", schema, assertion)
    for keyword in ("exclusiveMaximum", "exclusiveMinimum"):
        if keyword in schema and not (is_number(schema[keyword]) or is_boolean(schema[keyword])):
            raise SchemaDefinitionError(keyword, "keyword must be a boolean or a number")
    if "multipleOf" in schema:
        _assert_multiple_of(schema["multipleOf"], assertion)

    if any(is_number(schema.get(keyword)) for keyword in _BOUND_KEYWORDS):
        is_multiple = _multiple_test(context.settings.multiple_of_mode)

        def assert_number(value: Any, ref: Any) -> None:
            if not assertion(value):
                if ref.get("type") in ("integer", "number"):
                    raise _type_error(ref["type"])
                return

            maximum = ref.get("maximum")
            exclusive_maximum = ref.get("exclusiveMaximum")
            minimum = ref.get("minimum")
            exclusive_minimum = ref.get("exclusiveMinimum")
            multiple_of = ref.get("multipleOf")

            if is_number(maximum) and (
                (exclusive_maximum is True and value >= maximum) or value > maximum
            ):
                raise SchemaValidationError(
                    "maximum",
                    f"value is greater than or equal to {maximum}",
                    code="above_maximum",
                )
            if is_number(exclusive_maximum) and value >= exclusive_maximum:
                raise SchemaValidationError(
                    "exclusiveMaximum",
                    f"value is greater than or equal to {exclusive_maximum}",
                    code="above_maximum",
                )
            if is_number(minimum) and (
                (exclusive_minimum is True and value <= minimum) or value < minimum
            ):
                raise SchemaValidationError(
                    "minimum",
                    f"value is less than or equal to {minimum}",
                    code="below_minimum",
                )
            if is_number(exclusive_minimum) and value <= exclusive_minimum:
                raise SchemaValidationError(
                    "exclusiveMinimum",
                    f"value is less than or equal to {exclusive_minimum}",
                    code="below_minimum",
                )
            if is_number(multiple_of) and not is_multiple(value, multiple_of):
                raise SchemaValidationError(
                    "multipleOf",
                    f"value is not a multiple of {multiple_of}",
                    code="not_multiple",
                )

        return [assert_number]

    if schema_type in ("integer", "number"):
        def assert_number_type(value: Any, ref: Any) -> None:
            if not assertion(value):
                raise _type_error(ref["type"])

        return [assert_number_type]

    return []


def _type_error(schema_type: str) -> SchemaValidationError:
    return SchemaValidationError(
        "type", f"value is not a(n) {schema_type}", code="type_mismatch"
    )


def _assert_bound(
    keyword: str, exclusive_keyword: str, schema: Any, assertion: Callable[[Any], bool]
) -> None:
    if not assertion(schema[keyword]):
        raise SchemaDefinitionError(keyword, "keyword is not the right type")

    # a numeric exclusive bound is standalone, not a modifier
    exclusive = schema.get(exclusive_keyword, False)
    if not is_number(exclusive) and not is_boolean(exclusive):
        raise SchemaDefinitionError(exclusive_keyword, "keyword is not a boolean")


def _assert_multiple_of(multiple_of: Any, assertion: Callable[[Any], bool]) -> None:
    if not assertion(multiple_of):
        raise SchemaDefinitionError("multipleOf", "keyword is not the right type")
    if multiple_of <= 0:
        raise SchemaDefinitionError("multipleOf", "keyword must be greater than 0")


def _multiple_test(mode: MultipleOfMode) -> Callable[[Any, Any], bool]:
    if mode is MultipleOfMode.FLOAT:
        return _is_float_multiple
    return _is_decimal_multiple


def _is_float_multiple(value: Any, multiple_of: Any) -> bool:
    try:
        return (value / multiple_of) % 1 == 0
    except OverflowError:
        return False


def _is_decimal_multiple(value: Any, multiple_of: Any) -> bool:
    """Test divisibility exactly, treating floats as their shortest decimal form."""
    if isinstance(value, Integral) and isinstance(multiple_of, Integral):
        return value % multiple_of == 0
    operands = []
    for operand in (value, multiple_of):
        if isinstance(operand, Integral):
            operands.append(Fraction(int(operand)))
        elif math.isfinite(operand):
            operands.append(Fraction(str(operand)))
        else:
            return False
    return operands[0] % operands[1] == 0
