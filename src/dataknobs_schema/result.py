"""Validation result type for callers that prefer a return value to an exception.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .exceptions import SchemaValidationError


@dataclass
class ValidationResult:
    """Outcome of validating one value against a compiled schema.

    Validation stops at the first violation, so a failed result carries
    exactly one error.
    """

    valid: bool
    value: Any
    errors: list[str] = field(default_factory=list)
    error: SchemaValidationError | None = None

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    @property
    def keyword(self) -> str | None:
        """Keyword of the violated check, if any."""
        return self.error.keyword if self.error else None

    @property
    def code(self) -> str | None:
        return self.error.code if self.error else None

    @classmethod
    def success(cls, value: Any) -> ValidationResult:
        """Create a successful validation result.

        Args:
            value: The validated value

        Returns:
            Successful ValidationResult
        """
        return cls(valid=True, value=value)

    @classmethod
    def failure(cls, value: Any, error: SchemaValidationError) -> ValidationResult:
        """Create a failed validation result.

        Args:
            value: The value that failed validation
            error: The first violation found

        Returns:
            Failed ValidationResult
        """
        return cls(valid=False, value=value, errors=[str(error)], error=error)
