"""Tests for the object keyword compiler."""

import pytest

from dataknobs_schema import SchemaDefinitionError, SchemaValidationError, SchemaValidator
from dataknobs_schema.compilers import object_ as object_compiler


def compile_object(schema):
    """Compile only the object keywords of a schema."""
    validator = SchemaValidator(schema)
    return object_compiler.compile(schema, validator._context)


class TestObjectCompile:
    """Test what the object compiler emits."""

    def test_no_keywords_no_checks(self):
        """A node without object keywords compiles to nothing."""
        assert compile_object({}) == []
        assert compile_object({"type": "number", "minimum": 1}) == []

    def test_type_only_check(self):
        """type: object alone compiles to a single type check."""
        checks = compile_object({"type": "object"})
        assert len(checks) == 1

        checks[0]({}, {"type": "object"})
        with pytest.raises(SchemaValidationError, match="#type: value is not an object"):
            checks[0]([], {"type": "object"})

    def test_keywords_fold_into_one_check(self):
        """All object keywords share a single combined check."""
        checks = compile_object({
            "properties": {"a": {}},
            "patternProperties": {"^b": {}},
            "additionalProperties": False,
            "dependencies": {"a": ["b"]},
            "propertyNames": {"maxLength": 4},
            "required": ["a"],
            "maxProperties": 3,
            "minProperties": 1,
        })
        assert len(checks) == 1

    @pytest.mark.parametrize(
        "schema,keyword",
        [
            ({"properties": []}, "properties"),
            ({"properties": {"a": 1}}, "properties"),
            ({"patternProperties": "^a"}, "patternProperties"),
            ({"patternProperties": {"(": {}}}, "patternProperties"),
            ({"additionalProperties": "no"}, "additionalProperties"),
            ({"dependencies": {"a": "b"}}, "dependencies"),
            ({"dependencies": {"a": ["b", "b"]}}, "dependencies"),
            ({"dependencies": {"a": [1]}}, "dependencies"),
            ({"dependencies": []}, "dependencies"),
            ({"propertyNames": "a"}, "propertyNames"),
            ({"required": "a"}, "required"),
            ({"required": ["a", 1]}, "required"),
            ({"required": ["a", "a"]}, "required"),
            ({"maxProperties": 0}, "maxProperties"),
            ({"minProperties": 1.5}, "minProperties"),
        ],
    )
    def test_malformed_keywords(self, schema, keyword):
        """Malformed keywords raise schema-definition errors at compile time."""
        with pytest.raises(SchemaDefinitionError) as exc_info:
            compile_object(schema)

        assert exc_info.value.keyword == keyword
        assert str(exc_info.value).startswith(f"#{keyword}: ")

    def test_empty_dependency_array_allowed(self):
        """An empty property dependency is accepted and always satisfied."""
        validator = SchemaValidator({"dependencies": {"a": []}})
        validator.validate({"a": 1})


class TestRequired:
    """Test required keys."""

    def test_required_example(self, make_validator):
        """Missing required keys fail with #required."""
        validator = make_validator({
            "type": "object",
            "required": ["a", "b"],
            "properties": {"a": {"type": "number"}},
        })

        with pytest.raises(SchemaValidationError) as exc_info:
            validator.validate({"a": 1})
        assert exc_info.value.keyword == "required"
        assert str(exc_info.value) == "#required: value does not have all required properties"

        validator.validate({"a": 1, "b": 2})

    def test_required_independent_of_key_order(self, make_validator):
        """Key order of the value does not matter."""
        validator = make_validator({"required": ["b", "a"]})

        validator.validate({"a": 1, "b": 2})
        validator.validate({"b": 2, "a": 1, "c": 3})

    def test_required_counts_only_present_keys(self, make_validator):
        """Extra keys never make up for missing required keys."""
        validator = make_validator({"required": ["a", "b"]})

        assert not validator.is_valid({"a": 1, "c": 2, "d": 3})
        assert validator.is_valid({"a": None, "b": None})

    def test_non_objects_skipped_without_type(self, make_validator):
        """Object keywords ignore non-object values unless type is object."""
        validator = make_validator({"required": ["a"]})
        for value in (1, "a", [], None, True):
            validator.validate(value)

        typed = make_validator({"type": "object", "required": ["a"]})
        with pytest.raises(SchemaValidationError, match="#type: value is not an object"):
            typed.validate([])


class TestPropertiesKeywords:
    """Test properties, patternProperties and additionalProperties."""

    def test_additional_properties_false(self, make_validator):
        """Unknown keys are rejected when additionalProperties is false."""
        validator = make_validator({
            "type": "object",
            "additionalProperties": False,
            "properties": {"a": {"type": "string"}},
        })

        with pytest.raises(SchemaValidationError) as exc_info:
            validator.validate({"a": "x", "b": 2})
        assert exc_info.value.keyword == "additionalProperties"
        assert exc_info.value.context["property"] == "b"

        validator.validate({"a": "x"})

    def test_property_schema_failure(self, make_validator):
        """A named property's sub-schema error propagates unchanged."""
        validator = make_validator({"properties": {"a": {"type": "number"}}})

        with pytest.raises(SchemaValidationError, match=r"#type: value is not a\(n\) number"):
            validator.validate({"a": "x"})
        validator.validate({"b": "x"})

    def test_false_property_schema(self, make_validator):
        """A property whose schema is false cannot be present."""
        validator = make_validator({"properties": {"secret": False}})

        validator.validate({"public": 1})
        with pytest.raises(SchemaValidationError, match="#schema: "):
            validator.validate({"secret": 1})

    def test_pattern_properties_all_matches_apply(self, make_validator):
        """Every matching pattern's sub-schema must pass."""
        validator = make_validator({
            "patternProperties": {
                "^n": {"type": "number"},
                "_id$": {"minimum": 10},
            },
        })

        validator.validate({"n_id": 12, "other": "x"})
        with pytest.raises(SchemaValidationError) as exc_info:
            validator.validate({"n_id": 5})
        assert exc_info.value.keyword == "minimum"
        with pytest.raises(SchemaValidationError) as exc_info:
            validator.validate({"n_id": "twelve"})
        assert exc_info.value.keyword == "type"

    def test_pattern_match_is_not_additional(self, make_validator):
        """Keys claimed by a pattern are not additional properties."""
        validator = make_validator({
            "properties": {"id": {"type": "string"}},
            "patternProperties": {"^x-": {"type": "string"}},
            "additionalProperties": False,
        })

        validator.validate({"id": "1", "x-trace": "abc"})
        with pytest.raises(SchemaValidationError, match="#additionalProperties"):
            validator.validate({"id": "1", "y-trace": "abc"})

    def test_additional_properties_schema(self, make_validator):
        """Unclaimed keys validate against the additionalProperties schema."""
        validator = make_validator({
            "properties": {"name": {"type": "string"}},
            "additionalProperties": {"type": "integer"},
        })

        validator.validate({"name": "x", "count": 3})
        with pytest.raises(SchemaValidationError, match="#type"):
            validator.validate({"name": "x", "count": 3.5})

    def test_first_violation_in_key_order(self, make_validator):
        """The first failing key, in the value's key order, is reported."""
        validator = make_validator({
            "properties": {
                "a": {"type": "string"},
                "b": {"type": "number"},
            },
        })

        with pytest.raises(SchemaValidationError) as exc_info:
            validator.validate({"b": "x", "a": 1})
        assert str(exc_info.value) == "#type: value is not a(n) number"

        with pytest.raises(SchemaValidationError) as exc_info:
            validator.validate({"a": 1, "b": "x"})
        assert str(exc_info.value) == "#type: value is not a string"


class TestDependencies:
    """Test property and schema dependencies."""

    def test_property_dependency(self, make_validator):
        """A present key requires its companion keys."""
        validator = make_validator({"dependencies": {"card": ["billing", "cvv"]}})

        validator.validate({})
        validator.validate({"billing": "x"})
        validator.validate({"card": 1, "billing": "x", "cvv": 123})

        with pytest.raises(SchemaValidationError) as exc_info:
            validator.validate({"card": 1, "billing": "x"})
        error = exc_info.value
        assert error.keyword == "dependencies"
        assert error.code == "missing_dependency"
        assert "'cvv'" in str(error)
        assert error.context["property"] == "card"
        assert error.context["missing"] == "cvv"

    def test_schema_dependency_validates_whole_object(self, make_validator):
        """A schema dependency applies to the whole object."""
        validator = make_validator({
            "dependencies": {
                "card": {"required": ["billing"]},
            },
        })

        validator.validate({"card": 1, "billing": "x"})
        with pytest.raises(SchemaValidationError, match="#required"):
            validator.validate({"card": 1})


class TestPropertyNamesAndCounts:
    """Test propertyNames, maxProperties and minProperties."""

    def test_property_names(self, make_validator):
        """Each key is validated as a string against propertyNames."""
        validator = make_validator({"propertyNames": {"maxLength": 3, "pattern": "^[a-z]+$"}})

        validator.validate({"abc": 1, "de": 2})
        with pytest.raises(SchemaValidationError, match="#maxLength"):
            validator.validate({"abcd": 1})
        with pytest.raises(SchemaValidationError, match="#pattern"):
            validator.validate({"AB": 1})

    def test_property_counts(self, make_validator):
        """Key counts are compared after the key pass."""
        validator = make_validator({"maxProperties": 2, "minProperties": 1})

        validator.validate({"a": 1})
        validator.validate({"a": 1, "b": 2})
        with pytest.raises(SchemaValidationError, match="#maxProperties: value maximum exceeded"):
            validator.validate({"a": 1, "b": 2, "c": 3})
        with pytest.raises(SchemaValidationError, match="#minProperties: value minimum not met"):
            validator.validate({})

    def test_threshold_mutation_observed(self, make_validator):
        """Changing a keyword value takes effect without recompiling."""
        schema = {"maxProperties": 1}
        validator = make_validator(schema)

        assert not validator.is_valid({"a": 1, "b": 2})
        schema["maxProperties"] = 2
        assert validator.is_valid({"a": 1, "b": 2})

    def test_person_schema(self, make_validator, person_schema):
        """A realistic schema combining every object keyword."""
        validator = make_validator(person_schema)

        validator.validate({"name": "Ada", "age": 36})
        validator.validate({"name": "Ada", "age": 36, "x-team": "core"})
        validator.validate({"name": "Ada", "age": 36, "spouse": "W", "married": True})

        result = validator.check({"name": "Ada", "age": 36, "spouse": "W"})
        assert result.keyword == "dependencies"
        result = validator.check({"name": "", "age": 36})
        assert result.keyword == "minLength"
        result = validator.check({"name": "Ada", "age": -1})
        assert result.keyword == "minimum"
        result = validator.check({"name": "Ada", "age": 36, "nickname": "A"})
        assert result.keyword == "additionalProperties"
