"""Per-field code fragments: Zod expressions, TypeScript types, default
values and visibility conditions."""

from __future__ import annotations

import json
from typing import Any

from .config import FieldCondition, FormField

_STRING_TYPES = {"text", "password", "textarea"}
_CHOICE_TYPES = {"select", "radio", "combobox"}


def _js(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _single_quoted(text: str) -> str:
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


def zod_expression(field: FormField) -> str:
    """Zod schema expression for *field*, e.g. ``z.string().min(2)``."""
    rules = field.validation
    message = rules.message if rules and rules.message else None
    required_message = _single_quoted(f"{field.label} is required")

    if field.type in _STRING_TYPES:
        expr = "z.string()"
        if rules and rules.min_length is not None:
            expr += f".min({rules.min_length}, {_single_quoted(message or f'{field.label} must be at least {rules.min_length} characters')})"
        elif field.required:
            expr += f".min(1, {required_message})"
        if rules and rules.max_length is not None:
            expr += f".max({rules.max_length}, {_single_quoted(message or f'{field.label} must be at most {rules.max_length} characters')})"
        if rules and rules.pattern:
            expr += f".regex(new RegExp({_js(rules.pattern)}), {_single_quoted(message or f'{field.label} has an invalid format')})"
    elif field.type == "email":
        expr = f"z.string().email({_single_quoted(message or 'Enter a valid email address')})"
    elif field.type in ("number", "slider"):
        expr = "z.coerce.number()"
        if rules and rules.min is not None:
            expr += f".min({rules.min})"
        if rules and rules.max is not None:
            expr += f".max({rules.max})"
    elif field.type in ("checkbox", "switch"):
        expr = "z.boolean()"
        if field.required:
            expr += f".refine((value) => value, {{ message: {required_message} }})"
    elif field.type in _CHOICE_TYPES:
        expr = f"z.enum([{', '.join(_js(option.value) for option in field.options)}])"
    elif field.type == "multiselect":
        expr = f"z.array(z.enum([{', '.join(_js(option.value) for option in field.options)}]))"
        if field.required:
            expr += f".min(1, {required_message})"
    elif field.type in ("date", "datetime"):
        expr = "z.coerce.date()"
    else:
        expr = "z.instanceof(File)"

    if not field.required or field.conditional is not None:
        expr += ".optional()"
    return expr


def ts_type(field: FormField) -> str:
    if field.type in ("number", "slider"):
        base = "number"
    elif field.type in ("checkbox", "switch"):
        base = "boolean"
    elif field.type in _CHOICE_TYPES:
        base = " | ".join(_js(option.value) for option in field.options) or "string"
    elif field.type == "multiselect":
        union = " | ".join(_js(option.value) for option in field.options) or "string"
        base = f"Array<{union}>"
    elif field.type in ("date", "datetime"):
        base = "Date"
    elif field.type == "file":
        base = "File"
    else:
        base = "string"
    return base


def default_value(field: FormField) -> str:
    """Initial value passed to ``useForm({ defaultValues })``."""
    if field.type in ("checkbox", "switch"):
        return "false"
    if field.type == "multiselect":
        return "[]"
    if field.type in ("number", "slider", "date", "datetime", "file"):
        return "undefined"
    return "''"


def sample_value(field: FormField) -> str | None:
    """A JavaScript literal that passes the field's schema, or ``None`` when
    the field has a pattern no sample can be derived for."""
    rules = field.validation
    if field.type in _STRING_TYPES:
        if rules and rules.pattern:
            return None
        length = max(rules.min_length or 1, 1) if rules else 1
        if rules and rules.max_length is not None:
            length = min(length, rules.max_length)
        return _single_quoted("a" * length)
    if field.type == "email":
        return "'user@example.com'"
    if field.type in ("number", "slider"):
        low = rules.min if rules and rules.min is not None else 1
        if rules and rules.max is not None:
            low = min(low, rules.max)
        return str(low)
    if field.type in ("checkbox", "switch"):
        return "true"
    if field.type in _CHOICE_TYPES:
        return _js(field.options[0].value) if field.options else None
    if field.type == "multiselect":
        return f"[{_js(field.options[0].value)}]" if field.options else None
    if field.type in ("date", "datetime"):
        return "new Date('2024-01-01T00:00:00Z')"
    return "new File(['content'], 'sample.txt', { type: 'text/plain' })"


def condition_expression(condition: FieldCondition, watched: str) -> str:
    """JavaScript boolean expression over the watched value *watched*."""
    value = _js(condition.value)
    if condition.condition == "equals":
        return f"{watched} === {value}"
    if condition.condition == "not-equals":
        return f"{watched} !== {value}"
    if condition.condition == "contains":
        return f"String({watched} ?? '').includes(String({value}))"
    if condition.condition == "greater-than":
        return f"Number({watched}) > Number({value})"
    return f"Number({watched}) < Number({value})"


def field_context(field: FormField) -> dict[str, Any]:
    """Everything a template needs to render one field."""
    return {
        "name": field.name,
        "type": field.type,
        "label": field.label,
        "placeholder": field.placeholder,
        "description": field.description,
        "required": field.required,
        "options": [option.model_dump() for option in field.options],
        "zod": zod_expression(field),
        "ts_type": ts_type(field),
        "optional": not field.required or field.conditional is not None,
        "default": default_value(field),
        "sample": sample_value(field),
        "condition": (
            condition_expression(field.conditional, f"watched.{field.conditional.depends_on}")
            if field.conditional is not None
            else None
        ),
        "depends_on": field.conditional.depends_on if field.conditional is not None else None,
    }
