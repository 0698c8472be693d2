"""Per-type schema compilers.

Each compiler module exposes a single ``compile(schema, context)`` function
that reads only the keywords relevant to its type and returns an ordered list
of checks (possibly empty). Compilers never look at data values; they raise
``SchemaDefinitionError`` for malformed keywords.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from ..settings import ValidatorSettings
from . import array, boolean, core, logic, number, string
from . import object as object_

if TYPE_CHECKING:
    from ..execution import Check


class CompileContext:
    """What a compiler may use besides the schema node itself.

    Attributes:
        settings: Active validator settings
    """

    def __init__(
        self,
        lookup: Callable[[Any], list[Check]],
        settings: ValidatorSettings | None = None,
    ):
        """Initialize the context.

        Args:
            lookup: Returns the (cached) compiled checks of a sub-schema node
            settings: Validator settings; defaults are used when omitted
        """
        self._lookup = lookup
        self.settings = settings or ValidatorSettings()

    def checks_for(self, node: Any) -> list[Check]:
        """Get the compiled checks of a sub-schema node."""
        return self._lookup(node)


# Type name -> compiler module; "integer" shares the number compiler
TYPE_COMPILERS = {
    "object": object_,
    "number": number,
    "integer": number,
    "string": string,
    "array": array,
    "boolean": boolean,
}

__all__ = [
    "CompileContext",
    "TYPE_COMPILERS",
    "array",
    "boolean",
    "core",
    "logic",
    "number",
    "object_",
    "string",
]
