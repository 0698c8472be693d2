"""Type predicates used by the schema compilers.

All predicates are pure and follow JSON semantics on Python values:
``bool`` is never a number, ``1.0`` is an integer, and objects are any
``Mapping``.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from numbers import Integral, Real
from typing import Any, Callable


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_null(value: Any) -> bool:
    return value is None


def is_number(value: Any) -> bool:
    """Check for a real number, excluding booleans and NaN."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def is_integer(value: Any) -> bool:
    """Check for a whole number; integral floats such as ``2.0`` qualify."""
    if not is_number(value):
        return False
    if isinstance(value, Integral):
        return True
    return math.isfinite(value) and value == math.floor(value)


def is_typed_array(value: Any, predicate: Callable[[Any], bool]) -> bool:
    """Check for an array whose items all satisfy ``predicate``."""
    return is_array(value) and all(predicate(item) for item in value)


def is_enum(value: Any, predicate: Callable[[Any], bool]) -> bool:
    """Check for a non-empty array of unique items that satisfy ``predicate``."""
    if not is_typed_array(value, predicate) or not value:
        return False
    keys = [json_key(item) for item in value]
    return len(set(keys)) == len(keys)


def is_schema(value: Any) -> bool:
    """Check whether a value has the shape of a schema node."""
    return is_object(value) or is_boolean(value)


TYPE_PREDICATES: dict[str, Callable[[Any], bool]] = {
    "array": is_array,
    "boolean": is_boolean,
    "integer": is_integer,
    "null": is_null,
    "number": is_number,
    "object": is_object,
    "string": is_string,
}


def type_name(value: Any) -> str:
    """Get the JSON type name of a value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, Integral):
        return "integer"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_array(value):
        return "array"
    if is_object(value):
        return "object"
    return type(value).__name__


def json_key(value: Any) -> Any:
    """Build a hashable key such that equal keys mean JSON-equal values.

    Booleans are tagged apart from numbers so ``True`` and ``1`` differ,
    while ``1`` and ``1.0`` compare equal as they do in JSON.
    """
    if value is None:
        return ("null",)
    if isinstance(value, bool):
        return ("boolean", value)
    if is_number(value):
        return ("number", value)
    if isinstance(value, str):
        return ("string", value)
    if is_array(value):
        return ("array", tuple(json_key(item) for item in value))
    if is_object(value):
        return ("object", frozenset((key, json_key(item)) for key, item in value.items()))
    # NaN and foreign objects
    return ("other", repr(value))


def json_equal(left: Any, right: Any) -> bool:
    return json_key(left) == json_key(right)
