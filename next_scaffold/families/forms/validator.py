"""Semantic rules for the ``forms`` family.

Field rules run on the field list the form actually renders (the top-level
``fields`` of a basic form, the steps' fields of a multi-step form) and on
any list the partial supplies explicitly.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

from ...core.validation import INVALID, ConfigInspector, check_project_name
from ...scaffolder.templates import camel_case
from .config import OPTION_TYPES

FORM_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9 _-]*$")
FIELD_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def check_form_name(inspector: ConfigInspector) -> None:
    name = inspector.value("form_name")
    if name is INVALID:
        return
    if not name.strip():
        inspector.error("Form name is required")
    elif not FORM_NAME_PATTERN.match(name):
        inspector.error(
            f"Form name {name!r} is invalid: it must start with a letter and contain only "
            "letters, digits, spaces, hyphens and underscores"
        )


def check_form_shape(inspector: ConfigInspector) -> None:
    """Basic forms need fields; multi-step forms need well-formed steps."""
    form_type = inspector.value("form_type")
    if form_type == "basic":
        fields = inspector.value("fields")
        if fields is not INVALID and not fields:
            inspector.error("A basic form needs at least one field")
    elif form_type == "multi-step":
        steps = inspector.value("steps")
        if steps is not INVALID and not steps:
            inspector.error("A multi-step form needs at least one step")
    if form_type != "multi-step" and not inspector.provided("steps"):
        return
    steps = inspector.value("steps")
    if steps is INVALID:
        return
    seen: dict[str, str] = {}
    for index, step in enumerate(steps):
        if step is INVALID:
            continue
        label = inspector.label("steps", index, "name")
        identifier = camel_case(step.name)
        if not step.name.strip():
            inspector.error(f"'{label}' must not be empty")
        elif not FORM_NAME_PATTERN.match(step.name):
            inspector.error(
                f"'{label}' {step.name!r} must start with a letter "
                "and contain only letters, digits, spaces, hyphens and underscores"
            )
        elif step.name in seen.values():
            inspector.error(f"Step {step.name!r} is declared more than once")
        elif identifier in seen:
            inspector.error(
                f"Step {step.name!r} clashes with step {seen[identifier]!r} "
                f"(both generate '{identifier}StepSchema')"
            )
        else:
            seen[identifier] = step.name
        if not step.fields:
            inspector.error(f"Step {step.name or index!r} needs at least one field")


def check_fields(inspector: ConfigInspector) -> None:
    """Per-field rules plus name uniqueness within each rendered list."""
    features = inspector.value("features")
    gated = features is not INVALID
    for fields in _field_lists(inspector):
        seen: set[str] = set()
        for path, field in fields:
            if not FIELD_NAME_PATTERN.match(field.name):
                inspector.error(
                    f"'{inspector.label(*path, 'name')}' {field.name!r} must be a valid identifier "
                    "(letters, digits and underscores, not starting with a digit)"
                )
            elif field.name in seen:
                inspector.error(f"Field {field.name!r} is declared more than once")
            seen.add(field.name)
            if not field.label.strip():
                inspector.error(f"'{inspector.label(*path, 'label')}' must not be empty")
            if field.type in OPTION_TYPES and not field.options:
                inspector.error(f"Field {field.name!r} of type {field.type!r} needs a non-empty 'options' list")
            _check_bounds(inspector, field, path)
            if gated and field.type == "file" and "file-upload" not in features:
                inspector.error(f"Field {field.name!r} is a file field; enable feature 'file-upload'")
            if gated and field.conditional is not None and "conditional-fields" not in features:
                inspector.error(f"Field {field.name!r} is conditional; enable feature 'conditional-fields'")


def check_conditions(inspector: ConfigInspector) -> None:
    """A conditional field depends on another field of the same form."""
    for fields in _field_lists(inspector):
        names = {field.name for _, field in fields}
        for path, field in fields:
            if field.conditional is None:
                continue
            target = field.conditional.depends_on
            label = inspector.label(*path, "conditional", "depends_on")
            if target == field.name:
                inspector.error(f"'{label}' of field {field.name!r} cannot reference the field itself")
            elif target not in names:
                inspector.error(f"'{label}' references unknown field {target!r}")


def _check_bounds(inspector: ConfigInspector, field: Any, path: tuple[Any, ...]) -> None:
    rules = field.validation
    if rules is None:
        return
    for low, high, wire in ((rules.min, rules.max, "min/max"), (rules.min_length, rules.max_length, "minLength/maxLength")):
        if low is not None and high is not None and low > high:
            inspector.error(f"'{inspector.label(*path, 'validation')}' {wire} bounds are reversed ({low} > {high})")
    for name in ("min_length", "max_length"):
        value = getattr(rules, name)
        if value is not None and value < 0:
            inspector.error(f"'{inspector.label(*path, 'validation', name)}' must not be negative (got {value})")


def _field_lists(inspector: ConfigInspector) -> Iterator[list[tuple[tuple[Any, ...], Any]]]:
    """Yield each field list to check, as ``(label path, field)`` pairs."""
    form_type = inspector.value("form_type")
    if form_type == "basic" or inspector.provided("fields"):
        fields = inspector.value("fields")
        if fields is not INVALID:
            yield [(("fields", index), field) for index, field in enumerate(fields) if field is not INVALID]
    if form_type == "multi-step" or inspector.provided("steps"):
        steps = inspector.value("steps")
        if steps is not INVALID:
            yield [
                (("steps", step_index, "fields", index), field)
                for step_index, step in enumerate(steps)
                if step is not INVALID
                for index, field in enumerate(step.fields)
            ]


CHECKS = (
    check_project_name,
    check_form_name,
    check_form_shape,
    check_fields,
    check_conditions,
)
