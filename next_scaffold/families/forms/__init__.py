"""react-hook-form + Zod forms: schema, types, server actions, components,
hooks, optional tests and documentation for one form."""

from next_scaffold.core.family import TemplateFamily
from next_scaffold.families.forms.config import (
    DEFAULTS,
    PRESETS,
    FieldType,
    FormConfig,
    FormFeature,
    FormField,
    FormStep,
)
from next_scaffold.families.forms.sections import SECTIONS, instructions, package_scripts
from next_scaffold.families.forms.validator import CHECKS

FAMILY = TemplateFamily(
    name="forms",
    description="react-hook-form + Zod form",
    model=FormConfig,
    defaults=DEFAULTS,
    sections=SECTIONS,
    checks=CHECKS,
    package_scripts=package_scripts,
    instructions=instructions,
    presets=PRESETS,
)

__all__ = [
    "DEFAULTS",
    "FAMILY",
    "PRESETS",
    "FieldType",
    "FormConfig",
    "FormFeature",
    "FormField",
    "FormStep",
]
