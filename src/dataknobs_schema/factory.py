"""Factory for building schema validators from configuration."""

import logging
from typing import Any

from dataknobs_config import FactoryBase

from .exceptions import SchemaDefinitionError
from .settings import ValidatorSettings
from .validator import SchemaValidator

logger = logging.getLogger(__name__)


class ValidatorFactory(FactoryBase):
    """Factory for creating compiled schema validators from configuration.

    Configuration Options:
        schema (dict|bool): Root schema node (required)
        multiple_of_mode (str): ``decimal`` (default) or ``float``
        eager_compile (bool): Compile all sub-schemas up front (default: True)

    Example Configuration:
        validator:
          - name: order
            factory: dataknobs_schema.factory.validator_factory
            multiple_of_mode: decimal
            schema:
              type: object
              required: [id, total]
              properties:
                id: {type: string, minLength: 1}
                total: {type: number, minimum: 0, multipleOf: 0.01}
    """

    def create(self, **config) -> SchemaValidator:
        """Create and compile a SchemaValidator from configuration.

        Args:
            **config: Validator configuration

        Returns:
            Compiled SchemaValidator

        Raises:
            SchemaDefinitionError: If the schema is missing or malformed
        """
        if "schema" not in config:
            raise SchemaDefinitionError(
                "schema", "validator configuration requires a schema", code="missing_schema"
            )

        name = config.get("name", "unnamed_validator")
        logger.info(f"Creating schema validator: {name}")

        validator = SchemaValidator(config["schema"], ValidatorSettings.from_dict(config))
        validator.compile()
        return validator


# Create singleton instance for registration
validator_factory = ValidatorFactory()
