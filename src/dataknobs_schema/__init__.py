"""DataKnobs Schema package.

Compiled, cached validation of structured values against JSON-Schema-style
schema nodes. Each schema node is compiled once into an ordered list of
checks; every later validation re-runs the cached checks and stops at the
first violation.
"""

from .cache import CompiledCache
from .compilers import CompileContext
from .exceptions import SchemaDefinitionError, SchemaError, SchemaValidationError
from .execution import SizeMode, run_compiled, size_threshold
from .factory import ValidatorFactory, validator_factory
from .result import ValidationResult
from .settings import MultipleOfMode, ValidatorSettings
from .validator import SchemaValidator, compile_node

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Validation
    "SchemaValidator",
    "ValidationResult",
    "compile_node",
    # Execution primitives
    "CompileContext",
    "CompiledCache",
    "SizeMode",
    "run_compiled",
    "size_threshold",
    # Errors
    "SchemaError",
    "SchemaDefinitionError",
    "SchemaValidationError",
    # Configuration
    "MultipleOfMode",
    "ValidatorSettings",
    "ValidatorFactory",
    "validator_factory",
]
