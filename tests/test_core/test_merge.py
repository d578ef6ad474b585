"""Unit tests for the two-level configuration merge (next_scaffold.core.merge)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from next_scaffold.core.merge import merge_config
from next_scaffold.families.auth.config import DEFAULTS as AUTH_DEFAULTS
from next_scaffold.families.database.config import DEFAULTS as DB_DEFAULTS
from next_scaffold.families.forms.config import FormConfig, FormStyling, SubmitButton
from next_scaffold.families.project.config import DEFAULTS, PRESETS, ProjectConfig

pytestmark = pytest.mark.unit


class TestMergePrecedence:
    def test_empty_partial_equals_defaults(self):
        assert merge_config({}, DEFAULTS) == DEFAULTS

    def test_none_partial_equals_defaults(self):
        assert merge_config(None, DEFAULTS) == DEFAULTS

    def test_partial_scalar_wins(self):
        merged = merge_config({"packageManager": "pnpm"}, DEFAULTS)
        assert merged.package_manager == "pnpm"
        assert merged.project_name == DEFAULTS.project_name

    def test_snake_case_keys(self):
        merged = merge_config({"package_manager": "bun", "use_src_directory": False}, DEFAULTS)
        assert merged.package_manager == "bun"
        assert merged.use_src_directory is False

    def test_returns_family_model(self):
        assert isinstance(merge_config({}, DEFAULTS), ProjectConfig)

    def test_result_is_frozen(self):
        merged = merge_config({}, DEFAULTS)
        with pytest.raises(ValidationError):
            merged.project_name = "other"


class TestNestedRecords:
    def test_nested_keys_merge_one_level(self):
        merged = merge_config({"security": {"minPasswordLength": 12}}, AUTH_DEFAULTS)
        assert merged.security.min_password_length == 12
        assert merged.security.max_password_length == AUTH_DEFAULTS.security.max_password_length
        assert merged.security.rate_limit == AUTH_DEFAULTS.security.rate_limit

    def test_nested_snake_case_keys(self):
        merged = merge_config({"models": {"post": False}}, DB_DEFAULTS)
        assert merged.models.post is False
        assert merged.models.user is True

    def test_below_second_level_is_replaced(self):
        base = FormConfig(styling=FormStyling(submit_button=SubmitButton(text="Go", loading_text="Going...")))
        merged = merge_config({"styling": {"submitButton": {"text": "Send"}}}, base)
        assert merged.styling.submit_button.text == "Send"
        assert merged.styling.submit_button.loading_text == "Submitting..."
        assert merged.styling.layout == base.styling.layout


class TestArrays:
    def test_array_replaces_default(self):
        merged = merge_config({"features": ["testing"]}, DEFAULTS)
        assert merged.features == ["testing"]

    def test_empty_array_clears_default(self):
        merged = merge_config({"features": []}, DEFAULTS)
        assert merged.features == []

    def test_array_in_nested_record_replaced(self):
        merged = merge_config({"dependencies": {"auth": []}}, DEFAULTS)
        assert merged.dependencies.auth == []
        assert merged.dependencies.core == DEFAULTS.dependencies.core


class TestInputs:
    def test_partial_not_modified(self):
        partial = {"dependencies": {"auth": []}}
        merge_config(partial, DEFAULTS)
        assert partial == {"dependencies": {"auth": []}}

    def test_model_instance_as_partial(self):
        assert merge_config(PRESETS["basic"], DEFAULTS) == PRESETS["basic"]

    def test_defaults_not_modified(self):
        merge_config({"features": []}, DEFAULTS)
        assert DEFAULTS.features != []

    def test_invalid_merge_raises(self):
        with pytest.raises(ValidationError):
            merge_config({"packageManager": "pip"}, DEFAULTS)
