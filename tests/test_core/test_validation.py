"""Unit tests for exhaustive configuration validation (next_scaffold.core.validation).

Tests cover:
- Structural errors: unknown keys, wrong types, enum values, duplicates
- One message per independent violation
- Effective values (partial over defaults) and the INVALID marker
- Wire-path labels for nested and list fields
- Project name rule
"""

from __future__ import annotations

import pytest

from next_scaffold import validate_config
from next_scaffold.core.validation import INVALID, ConfigInspector, check_project_name, present
from next_scaffold.families.forms.config import DEFAULTS as FORM_DEFAULTS
from next_scaffold.families.forms.config import FormConfig
from next_scaffold.families.project.config import DEFAULTS, PRESETS, ProjectConfig

pytestmark = pytest.mark.unit


def _inspect(partial, checks=()) -> ConfigInspector:
    inspector = ConfigInspector(partial, ProjectConfig, DEFAULTS)
    inspector.run(checks)
    return inspector


# ---------------------------------------------------------------------------
# Structural pass
# ---------------------------------------------------------------------------


class TestStructuralErrors:
    def test_empty_partial_is_valid(self):
        assert validate_config({}) == []

    def test_none_is_not_an_object(self):
        errors = validate_config(None)
        assert errors == ["Configuration must be an object, got null"]

    def test_array_is_not_an_object(self):
        assert validate_config([]) == ["Configuration must be an object, got array"]

    def test_unknown_top_level_key(self):
        assert validate_config({"projectTitle": "x"}) == ["Unknown configuration field 'projectTitle'"]

    def test_unknown_nested_key(self):
        errors = validate_config({"dependencies": {"extras": []}})
        assert errors == ["Unknown configuration field 'dependencies.extras'"]

    def test_enum_value_lists_allowed_values(self):
        errors = validate_config({"packageManager": "pip"})
        assert errors == ["'packageManager' must be one of: npm, yarn, pnpm, bun (got 'pip')"]

    def test_boolean_type(self):
        errors = validate_config({"useTypeScript": "yes"})
        assert errors == ["'useTypeScript' must be a boolean, got string"]

    def test_array_type(self):
        errors = validate_config({"features": "linting"})
        assert errors == ["'features' must be an array, got string"]

    def test_object_type(self):
        errors = validate_config({"dependencies": ["next"]})
        assert errors == ["'dependencies' must be an object, got array"]

    def test_null_for_required_value(self):
        errors = validate_config({"projectName": None})
        assert errors == ["'projectName' must not be null"]

    def test_duplicate_enum_entry(self):
        errors = validate_config({"features": ["linting", "linting"]})
        assert errors == ["'features' lists 'linting' more than once"]

    def test_invalid_list_item_is_labelled_with_index(self):
        errors = validate_config({"features": ["linting", "docker"]})
        assert len(errors) == 1
        assert errors[0].startswith("'features[1]' must be one of:")

    def test_both_spellings_of_one_key(self):
        errors = validate_config({"projectName": "a", "project_name": "b"})
        assert errors == ["'projectName' is given more than once"]

    def test_snake_case_keys_are_accepted(self):
        assert validate_config({"project_name": "shop", "package_manager": "yarn"}) == []

    def test_missing_required_field_in_list_item(self):
        errors = validate_config({"fields": [{"name": "email"}]}, family="forms")
        assert "'fields[0].label' is required" in errors

    def test_model_instance_is_accepted(self):
        assert validate_config(PRESETS["enterprise"]) == []


class TestExhaustiveness:
    def test_independent_violations_each_reported(self):
        errors = validate_config({
            "projectName": "My App!",
            "packageManager": "pip",
            "useAppRouter": "yes",
            "colour": "blue",
        })
        assert len(errors) == 4

    def test_errors_follow_input_order(self):
        errors = validate_config({"colour": "blue", "packageManager": "pip"})
        assert errors[0].startswith("Unknown configuration field")
        assert errors[1].startswith("'packageManager'")

    def test_structural_failure_silences_dependent_rule(self):
        # An invalid projectName type is reported once, not again by the name rule.
        errors = validate_config({"projectName": 42})
        assert errors == ["'projectName' must be a string, got number"]

    def test_bad_choice_suppresses_semantic_rules_on_the_list(self):
        errors = validate_config({"features": ["database-typo", "seeding"]})
        assert len(errors) == 1
        assert errors[0].startswith("'features[0]' must be one of:")


# ---------------------------------------------------------------------------
# Effective values
# ---------------------------------------------------------------------------


class TestEffectiveValues:
    def test_missing_value_falls_back_to_default(self):
        inspector = _inspect({})
        assert inspector.value("project_name") == "nextjs-app"

    def test_partial_value_wins(self):
        inspector = _inspect({"projectName": "shop"})
        assert inspector.value("project_name") == "shop"

    def test_nested_partial_falls_back_key_by_key(self):
        inspector = _inspect({"dependencies": {"auth": []}})
        assert inspector.value("dependencies", "auth") == []
        assert inspector.value("dependencies", "core") == DEFAULTS.dependencies.core

    def test_invalid_value_reads_back_as_marker(self):
        inspector = _inspect({"packageManager": "pip"})
        assert inspector.value("package_manager") is INVALID

    def test_list_with_bad_choice_reads_back_as_marker(self):
        inspector = _inspect({"features": ["bogus", "linting"]})
        assert inspector.value("features") is INVALID

    def test_provided(self):
        inspector = _inspect({"dependencies": {"auth": []}})
        assert inspector.provided("dependencies", "auth")
        assert not inspector.provided("dependencies", "core")
        assert not inspector.provided("features")

    def test_list_items_of_records_are_built_models(self):
        inspector = ConfigInspector(
            {"fields": [{"name": "email", "label": "Email"}]}, FormConfig, FORM_DEFAULTS
        )
        inspector.run()
        fields = inspector.value("fields")
        assert fields[0].name == "email"
        assert fields[0].type == "text"


class TestLabel:
    def test_top_level_uses_alias(self):
        assert _inspect({}).label("package_manager") == "packageManager"

    def test_nested_list_index(self):
        assert _inspect({}).label("dependencies", "core", 0) == "dependencies.core[0]"

    def test_records_in_lists(self):
        inspector = ConfigInspector({}, FormConfig, FORM_DEFAULTS)
        assert inspector.label("steps", 0, "fields", 1, "validation", "min_length") == (
            "steps[0].fields[1].validation.minLength"
        )


class TestInvalidMarker:
    def test_is_falsy_singleton(self):
        assert not INVALID
        assert repr(INVALID) == "INVALID"
        assert type(INVALID)() is INVALID

    def test_present_drops_marker(self):
        assert present(["a", INVALID, "b"]) == ["a", "b"]
        assert present(INVALID) == []
        assert present(None) == []


# ---------------------------------------------------------------------------
# Project name rule
# ---------------------------------------------------------------------------


class TestProjectName:
    def test_message_names_allowed_characters(self):
        errors = validate_config({"projectName": "My App!"})
        assert len(errors) == 1
        assert "lowercase letters (a-z), digits (0-9) and hyphens (-)" in errors[0]
        assert "'My App!'" in errors[0]

    def test_empty_name(self):
        assert _inspect({"projectName": ""}, [check_project_name]).errors == ["Project name is required"]

    @pytest.mark.parametrize("name", ["app", "my-app-2", "0day"])
    def test_accepted_names(self, name):
        assert validate_config({"projectName": name}) == []

    @pytest.mark.parametrize("family", ["project", "database", "auth", "forms"])
    def test_rule_applies_to_every_family(self, family):
        assert len(validate_config({"projectName": "Bad_Name"}, family=family)) == 1
