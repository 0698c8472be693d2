"""Schema validator: compiles a schema tree once and validates values against it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from .cache import CompiledCache
from .compilers import TYPE_COMPILERS, CompileContext, core, logic
from .exceptions import SchemaDefinitionError, SchemaValidationError
from .execution import Check, run_compiled
from .result import ValidationResult
from .settings import ValidatorSettings
from .types import is_array, is_boolean, is_object, is_schema, is_string

logger = logging.getLogger(__name__)

# Keywords whose value is a single sub-schema
_SCHEMA_KEYWORDS = ("additionalProperties", "propertyNames", "additionalItems", "contains", "not")
# Keywords whose value maps names to sub-schemas
_SCHEMA_MAP_KEYWORDS = ("properties", "patternProperties", "dependencies")
# Keywords whose value is an array of sub-schemas
_SCHEMA_LIST_KEYWORDS = ("allOf", "anyOf", "oneOf")


def compile_node(node: Any, context: CompileContext) -> list[Check]:
    """Compile a single schema node into its ordered check list.

    Type-independent keywords come first, then the compiler for the node's
    ``type`` (every type compiler when ``type`` is absent or an array), then
    the combinators.

    Args:
        node: Schema node (mapping or boolean)
        context: Compile context

    Returns:
        Ordered list of checks

    Raises:
        SchemaDefinitionError: If the node or any of its keywords is malformed
    """
    if is_boolean(node):
        return []
    if not is_object(node):
        raise SchemaDefinitionError(
            "schema", "must be an Object or Boolean", code="invalid_schema"
        )

    checks = core.compile(node, context)

    schema_type = node.get("type")
    if is_string(schema_type):
        compiler = TYPE_COMPILERS.get(schema_type)
        if compiler is not None:
            checks.extend(compiler.compile(node, context))
    else:
        for compiler in dict.fromkeys(TYPE_COMPILERS.values()):
            checks.extend(compiler.compile(node, context))

    checks.extend(logic.compile(node, context))

    logger.debug(f"Compiled {len(checks)} check(s) for schema node of type {schema_type!r}")
    return checks


def iter_subschemas(node: Any) -> Iterator[Any]:
    """Yield the sub-schema nodes directly nested in a schema node."""
    if not is_object(node):
        return

    for keyword in _SCHEMA_MAP_KEYWORDS:
        mapping = node.get(keyword)
        if is_object(mapping):
            # array-form dependencies are skipped here
            yield from (sub for sub in mapping.values() if is_schema(sub))

    for keyword in _SCHEMA_KEYWORDS:
        if is_schema(node.get(keyword)):
            yield node[keyword]

    items = node.get("items")
    if is_schema(items):
        yield items
    elif is_array(items):
        yield from (sub for sub in items if is_schema(sub))

    for keyword in _SCHEMA_LIST_KEYWORDS:
        nodes = node.get(keyword)
        if is_array(nodes):
            yield from (sub for sub in nodes if is_schema(sub))


class SchemaValidator:
    """Owns a schema tree and its compiled checks.

    Each node in the tree is compiled once; the resulting check list is kept
    in a ``CompiledCache`` and reused for every later validation until the
    node is recompiled.

    Example:
        ```python
        validator = SchemaValidator({
            "type": "object",
            "required": ["a", "b"],
            "properties": {"a": {"type": "number"}},
        })
        validator.validate({"a": 1, "b": 2})
        validator.is_valid({"a": 1})  # False
        ```
    """

    def __init__(
        self,
        schema: Any,
        settings: ValidatorSettings | None = None,
        cache: CompiledCache | None = None,
    ):
        """Initialize the validator.

        Args:
            schema: Root schema node (mapping or boolean)
            settings: Validator settings; defaults are used when omitted
            cache: Cache to store compiled checks in; a private one by default
        """
        if not is_schema(schema):
            raise SchemaDefinitionError(
                "schema", "must be an Object or Boolean", code="invalid_schema"
            )
        self.schema = schema
        self.settings = settings or ValidatorSettings()
        self.cache = cache if cache is not None else CompiledCache()
        self._context = CompileContext(self.checks_for, self.settings)
        self._compiled = False

    @property
    def compiled(self) -> bool:
        return self._compiled

    def compile(self) -> list[Check]:
        """Compile the schema tree and populate the cache.

        With ``eager_compile`` every reachable sub-schema is compiled now;
        otherwise sub-schemas compile on first use.

        Returns:
            The root node's check list

        Raises:
            SchemaDefinitionError: If any node is malformed; nothing written
                by this call stays cached
        """
        self._compile_from(self.schema)
        self._compiled = True
        return self.checks_for(self.schema)

    def checks_for(self, node: Any) -> list[Check]:
        """Get the cached checks of a node, compiling it on a cache miss."""
        checks = self.cache.get(node)
        if checks is None:
            checks = compile_node(node, self._context)
            self.cache.set(node, checks)
        return checks

    def recompile(self, node: Any = None) -> list[Check]:
        """Discard cached checks and compile again.

        Args:
            node: Node to recompile; the whole tree when omitted

        Returns:
            The recompiled node's check list
        """
        if node is None:
            self.cache.clear()
            self._compiled = False
            return self.compile()

        self.cache.invalidate(node)
        self._compile_from(node)
        return self.checks_for(node)

    def validate(self, value: Any) -> None:
        """Validate a value, raising on the first violation.

        Raises:
            SchemaValidationError: If the value violates the schema
            SchemaDefinitionError: If the schema has not compiled yet and is malformed
        """
        if not self._compiled:
            self.compile()
        run_compiled(value, self.schema, self.checks_for(self.schema))

    def check(self, value: Any) -> ValidationResult:
        """Validate a value and report the outcome as a ValidationResult."""
        try:
            self.validate(value)
        except SchemaValidationError as e:
            return ValidationResult.failure(value, e)
        return ValidationResult.success(value)

    def is_valid(self, value: Any) -> bool:
        return self.check(value).valid

    def _compile_from(self, root: Any) -> None:
        written: list[Any] = []
        try:
            if self.settings.eager_compile:
                self._compile_tree(root, written)
            elif root not in self.cache:
                self.cache.set(root, compile_node(root, self._context))
                written.append(root)
        except SchemaDefinitionError:
            for node in written:
                self.cache.invalidate(node)
            raise

    def _compile_tree(self, root: Any, written: list[Any]) -> None:
        stack = [root]
        seen: set[int] = set()
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            if node not in self.cache:
                # compile the parent first so its keyword shapes are checked
                self.cache.set(node, compile_node(node, self._context))
                written.append(node)
            stack.extend(reversed(list(iter_subschemas(node))))
