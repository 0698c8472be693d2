"""Pytest configuration and fixtures for schema package tests."""

import os

import pytest

from dataknobs_schema import SchemaValidator, ValidatorSettings


@pytest.fixture
def make_validator():
    """Build a compiled validator for a schema."""

    def _make(schema, **settings):
        validator = SchemaValidator(schema, ValidatorSettings(**settings))
        validator.compile()
        return validator

    return _make


@pytest.fixture
def person_schema():
    """Object schema touching every object keyword."""
    return {
        "type": "object",
        "required": ["name", "age"],
        "properties": {
            "name": {"type": "string", "minLength": 1},
            "age": {"type": "integer", "minimum": 0},
            "married": {"type": "boolean"},
            "spouse": {"type": "string"},
        },
        "patternProperties": {
            "^x-": {"type": "string"},
        },
        "additionalProperties": False,
        "dependencies": {
            "spouse": ["married"],
        },
        "maxProperties": 6,
    }


@pytest.fixture
def clear_env(monkeypatch):
    """Clear all DATAKNOBS_ environment variables."""
    for key in list(os.environ.keys()):
        if key.startswith("DATAKNOBS_"):
            monkeypatch.delenv(key)
