"""Tests for the form family (next_scaffold.families.forms).

Tests cover:
- Default (contact) form output and slug-derived paths
- Multi-step forms: steps, stepper and per-step actions
- Feature toggles (auto-save, uploads, optimistic UI, tests) and monotonicity
- Per-field code fragments (Zod, TypeScript types, samples, conditions)
- Field, step and condition validation rules
- Presets
"""

from __future__ import annotations

import pytest

from next_scaffold import get_preset, validate_config
from next_scaffold.families.forms.config import PRESETS, FieldCondition, FormFeature, FormField
from next_scaffold.families.forms.fields import (
    condition_expression,
    default_value,
    sample_value,
    ts_type,
    zod_expression,
)

pytestmark = pytest.mark.unit

ALL_FEATURES = [feature.value for feature in FormFeature]


def _validate(partial) -> list[str]:
    return validate_config(partial, family="forms")


def _field(**data) -> FormField:
    data.setdefault("label", "Field")
    return FormField.model_validate(data)


# ---------------------------------------------------------------------------
# Contact form (defaults)
# ---------------------------------------------------------------------------


class TestDefaultForm:
    def test_default_paths(self, forms_assembler):
        result = forms_assembler.assemble({})
        assert result.paths == [
            "shared/validation/forms/contact.ts",
            "shared/types/forms/contact.ts",
            "src/services/forms/contact/submit.ts",
            "src/components/forms/contact-form.tsx",
            "src/components/forms/contact-submit-button.tsx",
            "src/hooks/forms/use-contact-form.ts",
            "__tests__/forms/contact-form.test.tsx",
            "__tests__/forms/contact-schema.test.ts",
            "docs/forms/contact.md",
        ]

    def test_schema_content(self, forms_assembler):
        content = forms_assembler.assemble({}).file("shared/validation/forms/contact.ts").content
        assert "export const contactSchema = z.object({" in content
        assert "  email: z.string().email('Enter a valid email address')," in content
        assert '  subject: z.enum(["general", "support", "sales"]),' in content
        assert "export type ContactFormData = z.infer<typeof contactSchema>;" in content

    def test_component_name(self, forms_assembler):
        content = forms_assembler.assemble({}).file("src/components/forms/contact-form.tsx").content
        assert "ContactForm" in content

    def test_slug_from_form_name(self, forms_assembler):
        result = forms_assembler.assemble({"formName": "Support Ticket"})
        assert "src/components/forms/support-ticket-form.tsx" in result.paths
        assert result.package_scripts == {"test:forms:support-ticket": "jest __tests__/forms/support-ticket"}

    def test_no_tests(self, forms_assembler):
        result = forms_assembler.assemble({"generateTests": False})
        assert not any(path.startswith("__tests__/") for path in result.paths)
        assert result.package_scripts == {}

    def test_npm_install_instruction(self, forms_assembler):
        result = forms_assembler.assemble({"packageManager": "npm"})
        assert any("npm install" in line for line in result.instructions)
        assert any("sonner" in line for line in result.instructions)

    def test_no_toast_without_feature(self, forms_assembler):
        result = forms_assembler.assemble({"features": []})
        assert not any("sonner" in line for line in result.instructions)


# ---------------------------------------------------------------------------
# Multi-step forms
# ---------------------------------------------------------------------------


class TestMultiStep:
    def test_paths(self, forms_assembler, multi_step_form):
        result = forms_assembler.assemble(multi_step_form)
        assert result.success, getattr(result, "errors", None)
        assert "src/components/forms/job-application-stepper.tsx" in result.paths
        assert "src/services/forms/job-application/save-step.ts" in result.paths

    def test_step_schemas(self, forms_assembler, multi_step_form):
        content = forms_assembler.assemble(multi_step_form).file(
            "shared/validation/forms/job-application.ts"
        ).content
        assert "export const personalStepSchema = z.object({" in content
        assert "export const roleStepSchema = z.object({" in content
        assert "...personalStepSchema.shape," in content
        assert "['fullName', 'email']," in content

    def test_top_level_fields_ignored(self, forms_assembler, multi_step_form):
        content = forms_assembler.assemble(multi_step_form).file(
            "shared/validation/forms/job-application.ts"
        ).content
        assert "message:" not in content

    def test_conditional_field_is_optional(self, forms_assembler, multi_step_form):
        content = forms_assembler.assemble(multi_step_form).file(
            "shared/validation/forms/job-application.ts"
        ).content
        assert "otherPosition: z.string().optional()," in content

    def test_basic_form_has_no_stepper(self, forms_assembler):
        paths = forms_assembler.assemble({}).paths
        assert not any(path.endswith("-stepper.tsx") for path in paths)


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------


class TestFeatures:
    def test_file_upload(self, forms_assembler):
        result = forms_assembler.assemble({
            "features": ["file-upload"],
            "fields": [{"name": "resume", "type": "file", "label": "Resume", "required": True}],
        })
        assert "src/services/forms/contact/upload-files.ts" in result.paths
        assert "src/hooks/forms/use-contact-file-upload.ts" in result.paths
        assert any("public/uploads" in line for line in result.instructions)

    def test_file_upload_without_file_fields(self, forms_assembler):
        result = forms_assembler.assemble({"features": ["file-upload"]})
        assert "src/services/forms/contact/upload-files.ts" not in result.paths

    def test_auto_save_and_optimistic(self, forms_assembler):
        paths = forms_assembler.assemble({"features": ["auto-save", "optimistic-ui"]}).paths
        assert "src/services/forms/contact/auto-save.ts" in paths
        assert "src/hooks/forms/use-contact-auto-save.ts" in paths
        assert "src/hooks/forms/use-contact-optimistic.ts" in paths

    @pytest.mark.parametrize("feature", ALL_FEATURES)
    def test_removing_a_feature_never_adds_files(self, forms_assembler, feature):
        fields = [
            {"name": "title", "label": "Title", "required": True},
            {"name": "attachment", "type": "file", "label": "Attachment"},
        ]
        full = forms_assembler.assemble({"features": ALL_FEATURES, "fields": fields})
        reduced_features = [f for f in ALL_FEATURES if f != feature]
        if feature == "file-upload":
            fields = fields[:1]
        reduced = forms_assembler.assemble({"features": reduced_features, "fields": fields})
        assert full.success and reduced.success
        assert set(reduced.paths) <= set(full.paths)

    def test_layout_classes(self, forms_assembler):
        result = forms_assembler.assemble({"styling": {"layout": "two-column"}})
        content = result.file("src/components/forms/contact-form.tsx").content
        assert "md:grid-cols-2" in content


# ---------------------------------------------------------------------------
# Field fragments
# ---------------------------------------------------------------------------


class TestFieldFragments:
    def test_required_text(self):
        assert zod_expression(_field(name="city", label="City", required=True)) == (
            "z.string().min(1, 'City is required')"
        )

    def test_optional_text(self):
        assert zod_expression(_field(name="nick")) == "z.string().optional()"

    def test_length_bounds_with_message(self):
        field = _field(name="code", required=True, validation={"minLength": 3, "maxLength": 5, "message": "Bad code"})
        assert zod_expression(field) == "z.string().min(3, 'Bad code').max(5, 'Bad code')"

    def test_pattern(self):
        field = _field(name="zip", required=True, validation={"pattern": "^[0-9]{5}$"})
        assert '.regex(new RegExp("^[0-9]{5}$"), ' in zod_expression(field)
        assert sample_value(field) is None

    def test_number_bounds(self):
        field = _field(name="age", type="number", required=True, validation={"min": 18, "max": 99})
        assert zod_expression(field) == "z.coerce.number().min(18).max(99)"
        assert ts_type(field) == "number"
        assert sample_value(field) == "18"
        assert default_value(field) == "undefined"

    def test_required_checkbox(self):
        field = _field(name="terms", type="checkbox", label="Terms", required=True)
        assert zod_expression(field) == "z.boolean().refine((value) => value, { message: 'Terms is required' })"
        assert default_value(field) == "false"

    def test_select_union_type(self):
        field = _field(name="size", type="select", options=[{"label": "S", "value": "s"}, {"label": "M", "value": "m"}])
        assert ts_type(field) == '"s" | "m"'
        assert sample_value(field) == '"s"'

    def test_multiselect(self):
        field = _field(name="tags", type="multiselect", required=True, options=[{"label": "A", "value": "a"}])
        assert zod_expression(field) == "z.array(z.enum([\"a\"])).min(1, 'Field is required')"
        assert default_value(field) == "[]"

    def test_label_quotes_escaped(self):
        field = _field(name="owner", label="Owner's name", required=True)
        assert "'Owner\\'s name is required'" in zod_expression(field)

    @pytest.mark.parametrize(
        "operator, expected",
        [
            ("equals", 'watched.plan === "business"'),
            ("not-equals", 'watched.plan !== "business"'),
            ("contains", "String(watched.plan ?? '').includes(String(\"business\"))"),
            ("greater-than", 'Number(watched.plan) > Number("business")'),
            ("less-than", 'Number(watched.plan) < Number("business")'),
        ],
    )
    def test_condition_expression(self, operator, expected):
        condition = FieldCondition(depends_on="plan", condition=operator, value="business")
        assert condition_expression(condition, "watched.plan") == expected


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    def test_form_name(self):
        errors = _validate({"formName": "1st form"})
        assert len(errors) == 1
        assert errors[0].startswith("Form name '1st form' is invalid")

    def test_basic_form_needs_fields(self):
        assert _validate({"fields": []}) == ["A basic form needs at least one field"]

    def test_multi_step_needs_steps(self):
        assert _validate({"formType": "multi-step"}) == ["A multi-step form needs at least one step"]

    def test_step_rules(self):
        errors = _validate({
            "formType": "multi-step",
            "steps": [
                {"name": "one", "fields": [{"name": "a", "label": "A"}]},
                {"name": "one", "fields": [{"name": "b", "label": "B"}]},
                {"name": "", "fields": []},
            ],
        })
        assert errors == [
            "Step 'one' is declared more than once",
            "'steps[2].name' must not be empty",
            "Step 2 needs at least one field",
        ]

    def test_field_rules(self):
        errors = _validate({
            "features": [],
            "fields": [
                {"name": "first name", "label": "First"},
                {"name": "email", "label": "Email"},
                {"name": "email", "label": " "},
                {"name": "kind", "type": "select", "label": "Kind"},
                {"name": "cv", "type": "file", "label": "CV"},
            ],
        })
        assert errors == [
            "'fields[0].name' 'first name' must be a valid identifier "
            "(letters, digits and underscores, not starting with a digit)",
            "Field 'email' is declared more than once",
            "'fields[2].label' must not be empty",
            "Field 'kind' of type 'select' needs a non-empty 'options' list",
            "Field 'cv' is a file field; enable feature 'file-upload'",
        ]

    def test_bounds(self):
        errors = _validate({
            "fields": [
                {"name": "n", "label": "N", "type": "number", "validation": {"min": 10, "max": 1}},
                {"name": "t", "label": "T", "validation": {"minLength": -1}},
            ],
        })
        assert errors == [
            "'fields[0].validation' min/max bounds are reversed (10 > 1)",
            "'fields[1].validation.minLength' must not be negative (got -1)",
        ]

    def test_conditions(self):
        errors = _validate({
            "features": ["conditional-fields"],
            "fields": [
                {"name": "a", "label": "A", "conditional": {"dependsOn": "a", "value": 1}},
                {"name": "b", "label": "B", "conditional": {"dependsOn": "zzz", "value": True}},
            ],
        })
        assert errors == [
            "'fields[0].conditional.dependsOn' of field 'a' cannot reference the field itself",
            "'fields[1].conditional.dependsOn' references unknown field 'zzz'",
        ]

    def test_conditional_requires_feature(self):
        errors = _validate({
            "features": [],
            "fields": [
                {"name": "a", "label": "A"},
                {"name": "b", "label": "B", "conditional": {"dependsOn": "a", "value": "x"}},
            ],
        })
        assert errors == ["Field 'b' is conditional; enable feature 'conditional-fields'"]

    def test_incomplete_field_reported_structurally_once(self):
        errors = _validate({"fields": [{"name": "email"}, {"name": "ok", "label": "Ok"}]})
        assert errors == ["'fields[0].label' is required"]

    @pytest.mark.parametrize("first, second", [("my-step", "my_step"), ("Account", "account")])
    def test_steps_sharing_a_schema_name(self, first, second):
        errors = _validate({
            "formType": "multi-step",
            "steps": [
                {"name": first, "fields": [{"name": "a", "label": "A"}]},
                {"name": second, "fields": [{"name": "b", "label": "B"}]},
            ],
        })
        assert len(errors) == 1
        assert errors[0].startswith(f"Step {second!r} clashes with step {first!r}")

    def test_step_clash_names_the_schema(self):
        errors = _validate({
            "formType": "multi-step",
            "steps": [
                {"name": "my-step", "fields": [{"name": "a", "label": "A"}]},
                {"name": "my_step", "fields": [{"name": "b", "label": "B"}]},
            ],
        })
        assert errors == ["Step 'my_step' clashes with step 'my-step' (both generate 'myStepStepSchema')"]

    def test_feature_typo_does_not_flag_conditional_fields(self, multi_step_form):
        errors = _validate({**multi_step_form, "features": ["conditional-fieldz"]})
        assert len(errors) == 1
        assert errors[0].startswith("'features[0]' must be one of:")

    def test_fixture_is_valid(self, multi_step_form):
        assert _validate(multi_step_form) == []


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------


class TestPresets:
    @pytest.mark.parametrize("name", sorted(PRESETS))
    def test_preset_validates(self, name):
        assert _validate(get_preset("forms", name)) == []

    @pytest.mark.parametrize("name", sorted(PRESETS))
    def test_preset_generates(self, forms_assembler, name):
        assert forms_assembler.assemble(get_preset("forms", name)).success

    def test_registration_is_multi_step(self, forms_assembler):
        result = forms_assembler.assemble(get_preset("forms", "registration"))
        assert "src/components/forms/registration-stepper.tsx" in result.paths

    def test_profile_has_upload(self, forms_assembler):
        result = forms_assembler.assemble(get_preset("forms", "profile"))
        assert "src/hooks/forms/use-contact-file-upload.ts" not in result.paths
        assert any(path.endswith("-file-upload.ts") for path in result.paths)
