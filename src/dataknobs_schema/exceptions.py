"""Custom exceptions for the dataknobs_schema package.

This module defines the two error kinds raised by the schema compiler and
validator, built on the common exception framework from dataknobs_common:

- ``SchemaDefinitionError``: a keyword's declared value is structurally wrong.
  Raised only while compiling a schema node.
- ``SchemaValidationError``: a value violates a keyword's constraint. Raised
  only while running compiled checks.

Both carry the offending keyword and a stable reason code, and render as
``#<keyword>: <reason>`` so callers can classify failures by keyword without
parsing the free text.

Example:
    ```python
    from dataknobs_schema import SchemaValidator, SchemaValidationError

    validator = SchemaValidator({"type": "number", "minimum": 5})
    try:
        validator.validate(4)
    except SchemaValidationError as e:
        e.keyword  # 'minimum'
        e.code     # 'below_minimum'
        str(e)     # '#minimum: value is less than or equal to 5'
    ```
"""

from __future__ import annotations

from typing import Any

from dataknobs_common import (
    ConfigurationError,
    DataknobsError,
    ValidationError,
)


class SchemaError(DataknobsError):
    """Base exception for schema compilation and validation failures.

    Attributes:
        keyword: Name of the schema keyword the failure is attributed to
        reason: Human-readable reason
        code: Stable, machine-readable reason code
    """

    def __init__(
        self,
        keyword: str,
        reason: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        """Initialize the error.

        Args:
            keyword: Offending keyword name (without the leading ``#``)
            reason: Human-readable reason
            code: Reason code; defaults to ``"invalid_<keyword>"``
            context: Extra context merged into the error context
        """
        self.keyword = keyword
        self.reason = reason
        self.code = code or f"invalid_{keyword}"
        error_context = {"keyword": keyword, "code": self.code}
        if context:
            error_context.update(context)
        super().__init__(f"#{keyword}: {reason}", context=error_context)


class SchemaDefinitionError(SchemaError, ConfigurationError):
    """Raised when a schema keyword is declared with an invalid value.

    Fatal to compilation: the node is not validatable and nothing is cached
    for it.
    """

    pass


class SchemaValidationError(SchemaError, ValidationError):
    """Raised when a value violates a compiled schema check.

    Aborts only the current validation; the schema node and its cached checks
    remain usable.
    """

    pass


__all__ = [
    "SchemaError",
    "SchemaDefinitionError",
    "SchemaValidationError",
]
