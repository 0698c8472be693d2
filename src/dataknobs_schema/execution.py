"""Execution primitives shared by every schema compiler.

A compiled check is a callable ``check(value, ref)`` that returns ``None`` when
the value passes and raises ``SchemaValidationError`` otherwise. ``ref`` is the
live schema node, so checks read keyword values at call time.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterable

from .exceptions import SchemaDefinitionError, SchemaValidationError
from .types import is_integer

if TYPE_CHECKING:
    from .compilers import CompileContext

Check = Callable[[Any, Any], None]


class SizeMode(Enum):
    """Comparison direction for count-threshold keywords."""

    MAX = "max"
    MIN = "min"


@dataclass
class PropertyContext:
    """Value handed to per-key object checks.

    ``pattern_matched`` is set by the patternProperties check so the
    additionalProperties check can tell whether the key was already claimed.
    """

    container: Any
    key: Any
    item: Any
    pattern_matched: bool = False


@dataclass
class ItemContext:
    """Value handed to per-item array checks."""

    container: Any
    index: int
    item: Any


@dataclass
class ObjectTally:
    """Measurement handed to whole-object checks after the key pass."""

    length: int
    required_count: int = 0

    def __len__(self) -> int:
        return self.length


def run_compiled(value: Any, ref: Any, checks: Iterable[Check]) -> None:
    """Run a compiled check list against a value.

    Args:
        value: Value (or per-key/per-item context) to validate
        ref: Schema node the checks were compiled from
        checks: Ordered checks; the first failure propagates

    Raises:
        SchemaValidationError: If ``ref`` is the ``False`` schema or a check fails
    """
    if ref is False:
        raise SchemaValidationError(
            "schema", "'false' schema invalidates all values", code="false_schema"
        )
    for check in checks:
        check(value, ref)


def validate_subschema(value: Any, node: Any, context: CompileContext) -> None:
    """Validate a value against a nested schema node using its cached checks."""
    run_compiled(value, node, context.checks_for(node))


def size_threshold(size: Any, keyword: str, mode: SizeMode | str) -> Check:
    """Create a count-comparison check for a ``max*``/``min*`` keyword.

    The threshold is validated here but read from ``ref[keyword]`` when the
    check runs, so one check serves every node sharing the keyword name.

    Args:
        size: Declared threshold; must be a positive whole number
        keyword: Keyword name, e.g. ``"maxProperties"``
        mode: ``SizeMode.MAX`` or ``SizeMode.MIN`` (or their string values)

    Returns:
        Check that compares ``len(measurement)`` against the threshold

    Raises:
        SchemaDefinitionError: If ``size`` is not a positive whole number
    """
    mode = SizeMode(mode)
    if not (is_integer(size) and size > 0):
        raise SchemaDefinitionError(
            keyword, "keyword must be a positive integer", code="invalid_threshold"
        )

    if mode is SizeMode.MAX:
        def assert_size_max(measurement: Any, ref: Any) -> None:
            if len(measurement) > ref[keyword]:
                raise SchemaValidationError(
                    keyword, "value maximum exceeded", code="above_maximum"
                )

        return assert_size_max

    def assert_size_min(measurement: Any, ref: Any) -> None:
        if len(measurement) < ref[keyword]:
            raise SchemaValidationError(
                keyword, "value minimum not met", code="below_minimum"
            )

    return assert_size_min
