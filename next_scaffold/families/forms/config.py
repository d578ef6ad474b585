"""Configuration model, defaults and presets for generated forms."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import Field

from ...core.models import ConfigModel, ProjectSettings
from ...scaffolder.templates import camel_case, kebab_case, pascal_case, slugify


class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    NUMBER = "number"
    TEXTAREA = "textarea"
    SELECT = "select"
    MULTISELECT = "multiselect"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    DATE = "date"
    DATETIME = "datetime"
    FILE = "file"
    SWITCH = "switch"
    SLIDER = "slider"
    COMBOBOX = "combobox"


#: Field types that render a list of choices and need ``options``.
OPTION_TYPES = frozenset({"select", "multiselect", "radio", "combobox"})


class ConditionOperator(str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "not-equals"
    CONTAINS = "contains"
    GREATER_THAN = "greater-than"
    LESS_THAN = "less-than"


class FormType(str, Enum):
    BASIC = "basic"
    MULTI_STEP = "multi-step"


class FormFeature(str, Enum):
    FILE_UPLOAD = "file-upload"
    AUTO_SAVE = "auto-save"
    CONDITIONAL_FIELDS = "conditional-fields"
    OPTIMISTIC_UI = "optimistic-ui"
    TOAST_NOTIFICATIONS = "toast-notifications"
    DYNAMIC_FIELDS = "dynamic-fields"


class Layout(str, Enum):
    SINGLE_COLUMN = "single-column"
    TWO_COLUMN = "two-column"
    GRID = "grid"


class Spacing(str, Enum):
    COMPACT = "compact"
    NORMAL = "normal"
    RELAXED = "relaxed"


class Variant(str, Enum):
    DEFAULT = "default"
    CARD = "card"
    INLINE = "inline"


class ButtonVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"
    OUTLINE = "outline"
    SECONDARY = "secondary"


# ---------------------------------------------------------------------------
# Field records
# ---------------------------------------------------------------------------


class FieldOption(ConfigModel):
    label: str
    value: str
    disabled: bool = False


class FieldValidation(ConfigModel):
    """Bounds for numbers (``min``/``max``) and strings (``minLength``/``maxLength``)."""

    min: Optional[int] = None
    max: Optional[int] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = Field(default=None, description="JavaScript regular expression source")
    message: Optional[str] = None


class FieldCondition(ConfigModel):
    """Show the field only when another field's value matches."""

    depends_on: str
    condition: ConditionOperator = ConditionOperator.EQUALS
    value: Union[str, int, float, bool]


class FormField(ConfigModel):
    name: str
    type: FieldType = FieldType.TEXT
    label: str
    placeholder: str = ""
    description: str = ""
    required: bool = False
    options: list[FieldOption] = Field(default_factory=list)
    validation: Optional[FieldValidation] = None
    conditional: Optional[FieldCondition] = None


class FormStep(ConfigModel):
    name: str
    title: str = ""
    description: str = ""
    fields: list[FormField] = Field(default_factory=list)


class SubmitButton(ConfigModel):
    text: str = "Submit"
    loading_text: str = "Submitting..."
    variant: ButtonVariant = ButtonVariant.DEFAULT
    full_width: bool = False


class FormStyling(ConfigModel):
    layout: Layout = Layout.SINGLE_COLUMN
    spacing: Spacing = Spacing.NORMAL
    variant: Variant = Variant.CARD
    submit_button: SubmitButton = Field(default_factory=SubmitButton)


# ---------------------------------------------------------------------------
# Family configuration
# ---------------------------------------------------------------------------


def _contact_fields() -> list[FormField]:
    return [
        FormField(name="name", label="Name", placeholder="Jane Doe", required=True,
                  validation=FieldValidation(min_length=2, max_length=100)),
        FormField(name="email", type=FieldType.EMAIL, label="Email", placeholder="jane@example.com", required=True),
        FormField(
            name="subject",
            type=FieldType.SELECT,
            label="Subject",
            required=True,
            options=[
                FieldOption(label="General question", value="general"),
                FieldOption(label="Support", value="support"),
                FieldOption(label="Sales", value="sales"),
            ],
        ),
        FormField(name="message", type=FieldType.TEXTAREA, label="Message", required=True,
                  validation=FieldValidation(min_length=10, max_length=2000)),
    ]


class FormConfig(ProjectSettings):
    """Full configuration of the ``forms`` family."""

    form_name: str = "contact"
    description: str = "Contact form"
    form_type: FormType = FormType.BASIC
    fields: list[FormField] = Field(default_factory=_contact_fields)
    steps: list[FormStep] = Field(default_factory=list)
    features: list[FormFeature] = Field(default_factory=lambda: [FormFeature.TOAST_NOTIFICATIONS])
    styling: FormStyling = Field(default_factory=FormStyling)
    generate_tests: bool = True

    def has(self, feature: FormFeature | str) -> bool:
        return FormFeature(feature).value in self.features

    @property
    def multi_step(self) -> bool:
        return self.form_type == FormType.MULTI_STEP.value

    @property
    def all_fields(self) -> list[FormField]:
        """Fields rendered by the form: the steps' fields for multi-step forms."""
        if self.multi_step:
            return [field for step in self.steps for field in step.fields]
        return list(self.fields)

    @property
    def slug(self) -> str:
        """``User Registration`` / ``userRegistration`` -> ``user-registration``."""
        return slugify(kebab_case(self.form_name))

    @property
    def component_name(self) -> str:
        return pascal_case(self.slug) + "Form"

    @property
    def variable_name(self) -> str:
        return camel_case(self.slug)

    @property
    def has_files(self) -> bool:
        return self.has(FormFeature.FILE_UPLOAD) and any(f.type == FieldType.FILE.value for f in self.all_fields)


DEFAULTS = FormConfig()


PRESETS: dict[str, FormConfig] = {
    "contact": FormConfig(project_name="contact-form"),
    "registration": FormConfig(
        project_name="registration-form",
        form_name="registration",
        description="Multi-step account registration",
        form_type=FormType.MULTI_STEP,
        fields=[],
        steps=[
            FormStep(
                name="account",
                title="Account",
                fields=[
                    FormField(name="email", type=FieldType.EMAIL, label="Email", required=True),
                    FormField(name="password", type=FieldType.PASSWORD, label="Password", required=True,
                              validation=FieldValidation(min_length=8, max_length=128)),
                ],
            ),
            FormStep(
                name="profile",
                title="Profile",
                fields=[
                    FormField(name="firstName", label="First name", required=True),
                    FormField(name="lastName", label="Last name", required=True),
                    FormField(name="birthDate", type=FieldType.DATE, label="Date of birth"),
                ],
            ),
            FormStep(
                name="preferences",
                title="Preferences",
                fields=[
                    FormField(
                        name="plan",
                        type=FieldType.RADIO,
                        label="Plan",
                        required=True,
                        options=[
                            FieldOption(label="Personal", value="personal"),
                            FieldOption(label="Business", value="business"),
                        ],
                    ),
                    FormField(
                        name="company",
                        label="Company",
                        conditional=FieldCondition(depends_on="plan", value="business"),
                    ),
                    FormField(name="newsletter", type=FieldType.CHECKBOX, label="Subscribe to the newsletter"),
                ],
            ),
        ],
        features=[FormFeature.CONDITIONAL_FIELDS, FormFeature.AUTO_SAVE, FormFeature.TOAST_NOTIFICATIONS],
    ),
    "profile": FormConfig(
        project_name="profile-form",
        form_name="profile",
        description="Editable user profile",
        fields=[
            FormField(name="displayName", label="Display name", required=True,
                      validation=FieldValidation(min_length=2, max_length=50)),
            FormField(name="bio", type=FieldType.TEXTAREA, label="Bio", validation=FieldValidation(max_length=500)),
            FormField(name="avatar", type=FieldType.FILE, label="Avatar"),
            FormField(name="website", label="Website", placeholder="https://"),
            FormField(name="notifications", type=FieldType.SWITCH, label="Email notifications"),
        ],
        features=[
            FormFeature.FILE_UPLOAD,
            FormFeature.OPTIMISTIC_UI,
            FormFeature.AUTO_SAVE,
            FormFeature.TOAST_NOTIFICATIONS,
        ],
        styling=FormStyling(layout=Layout.TWO_COLUMN),
    ),
}
