"""Exhaustive validation of partial configurations.

``ConfigInspector`` walks a partial configuration against the family's
pydantic model and records every structural problem it finds (unknown keys,
wrong types, values outside an enumeration).  Family-specific semantic rules
then run against the *effective* configuration (partial overlaid on the
defaults) through :meth:`ConfigInspector.value`.

Every problem produces exactly one message.  A field that failed the
structural pass is marked invalid and reads back as :data:`INVALID`, so
semantic rules that depend on it stay silent instead of reporting the same
mistake twice.

Usage::

    inspector = ConfigInspector(partial, ProjectConfig, DEFAULTS)
    errors = inspector.run([check_project_name, check_features])
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from .schema import choices, is_record, list_item_type, resolve_field, unwrap_optional, wire_name

logger = logging.getLogger(__name__)


PROJECT_NAME_PATTERN = re.compile(r"^[a-z0-9-]+$")
PROJECT_NAME_RULE = "lowercase letters (a-z), digits (0-9) and hyphens (-)"


class _Invalid:
    """Marker for a value that already produced a structural error."""

    _instance: _Invalid | None = None

    def __new__(cls) -> _Invalid:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "INVALID"

    def __bool__(self) -> bool:
        return False


INVALID = _Invalid()


Check = Callable[["ConfigInspector"], None]


# ---------------------------------------------------------------------------
# Inspector
# ---------------------------------------------------------------------------


class ConfigInspector:
    """Collects every violation in a partial configuration.

    Attributes:
        partial: The raw input, never modified.
        model: The family's top-level configuration model.
        defaults: The family's fully populated default configuration.
        errors: Messages collected so far, in discovery order.
    """

    def __init__(self, partial: Any, model: type[BaseModel], defaults: BaseModel) -> None:
        self.partial = partial
        self.model = model
        self.defaults = defaults
        self.errors: list[str] = []
        self._checked: dict[str, Any] = {}

    # -- Entry point ---------------------------------------------------------

    def run(self, checks: Iterable[Check] = ()) -> list[str]:
        """Run the structural pass, then every semantic *check*."""
        if isinstance(self.partial, BaseModel):
            self.partial = self.partial.model_dump(by_alias=True)
        if not isinstance(self.partial, Mapping):
            self.error(f"Configuration must be an object, got {_type_name(self.partial)}")
            return list(self.errors)

        self._checked = self._check_record(self.partial, self.model, (), partial=True)
        for check in checks:
            check(self)

        if self.errors:
            logger.debug("Configuration rejected with %d error(s)", len(self.errors))
        return list(self.errors)

    # -- Reporting -----------------------------------------------------------

    def error(self, message: str) -> None:
        self.errors.append(message)

    # -- Effective values ----------------------------------------------------

    def provided(self, *path: str) -> bool:
        """Whether the partial itself supplies the field at *path*."""
        node: Any = self._checked
        for name in path:
            if not isinstance(node, dict) or name not in node:
                return False
            node = node[name]
        return True

    def value(self, *path: str) -> Any:
        """Effective value at *path* (attribute names), or :data:`INVALID`.

        The partial's value wins when present; otherwise the default is used.
        Nested records given partially fall back to the default key by key.
        """
        node: Any = self._checked
        fallback: Any = self.defaults
        for name in path:
            fallback = getattr(fallback, name, None) if fallback is not None else None
            if isinstance(node, dict) and name in node:
                node = node[name]
                if node is INVALID:
                    return INVALID
            else:
                node = None
        if node is None or isinstance(node, dict):
            return fallback
        return node

    def label(self, *path: str | int) -> str:
        """Human-readable wire path, e.g. ``security.minPasswordLength``."""
        model: Any = self.model
        parts: list[str] = []
        for step in path:
            if isinstance(step, int):
                parts[-1] = f"{parts[-1]}[{step}]"
                continue
            if model is not None and step in model.model_fields:
                parts.append(wire_name(model, step))
                annotation, _ = unwrap_optional(model.model_fields[step].annotation)
                item = list_item_type(annotation)
                annotation = item if item is not None else annotation
                model = annotation if is_record(annotation) else None
            else:
                parts.append(step)
                model = None
        return ".".join(parts)

    # -- Structural pass -----------------------------------------------------

    def _check_record(
        self,
        data: Mapping[str, Any],
        model: type[BaseModel],
        path: tuple[str, ...],
        *,
        partial: bool,
    ) -> dict[str, Any]:
        checked: dict[str, Any] = {}
        for key in data:
            resolved = resolve_field(model, str(key))
            if resolved is None:
                self.error(f"Unknown configuration field '{_join(path, str(key))}'")
                continue
            name, info = resolved
            if name in checked:
                self.error(f"'{_join(path, wire_name(model, name))}' is given more than once")
                continue
            checked[name] = self._check_value(
                data[key], info.annotation, path + (wire_name(model, name),), nested_partial=not path
            )

        if not partial:
            for name, info in model.model_fields.items():
                if info.is_required() and name not in checked:
                    self.error(f"'{_join(path, wire_name(model, name))}' is required")
        return checked

    def _check_value(self, value: Any, annotation: Any, path: tuple[str, ...], *, nested_partial: bool) -> Any:
        label = _join(path)
        annotation, optional = unwrap_optional(annotation)
        if value is None:
            if optional:
                return None
            self.error(f"'{label}' must not be null")
            return INVALID

        allowed = choices(annotation)
        if allowed is not None:
            if not isinstance(value, str) or value not in allowed:
                self.error(f"'{label}' must be one of: {', '.join(allowed)} (got {value!r})")
                return INVALID
            return value

        item_type = list_item_type(annotation)
        if item_type is not None:
            return self._check_list(value, item_type, path)

        if is_record(annotation):
            if isinstance(value, BaseModel):
                value = value.model_dump(by_alias=True)
            if not isinstance(value, Mapping):
                self.error(f"'{label}' must be an object, got {_type_name(value)}")
                return INVALID
            before = len(self.errors)
            checked = self._check_record(value, annotation, path, partial=nested_partial)
            if nested_partial:
                return checked
            if len(self.errors) > before:
                return INVALID
            return self._build(annotation, value, label)

        if annotation is bool:
            if not isinstance(value, bool):
                self.error(f"'{label}' must be a boolean, got {_type_name(value)}")
                return INVALID
        elif annotation is int:
            if isinstance(value, bool) or not isinstance(value, int):
                self.error(f"'{label}' must be an integer, got {_type_name(value)}")
                return INVALID
        elif annotation is str:
            if not isinstance(value, str):
                self.error(f"'{label}' must be a string, got {_type_name(value)}")
                return INVALID
        return value

    def _check_list(self, value: Any, item_type: Any, path: tuple[str, ...]) -> Any:
        label = _join(path)
        if not isinstance(value, (list, tuple)):
            self.error(f"'{label}' must be an array, got {_type_name(value)}")
            return INVALID

        enumerated = choices(unwrap_optional(item_type)[0]) is not None
        items: list[Any] = []
        seen: set[Any] = set()
        rejected = False
        for index, item in enumerate(value):
            item_path = path[:-1] + (f"{path[-1]}[{index}]",)
            checked = self._check_value(item, item_type, item_path, nested_partial=False)
            if enumerated:
                if checked is INVALID:
                    rejected = True
                    continue
                if checked in seen:
                    self.error(f"'{label}' lists {checked!r} more than once")
                    continue
                seen.add(checked)
            items.append(checked)
        # One rejected choice invalidates the whole list for the semantic rules.
        if rejected:
            return INVALID
        return items

    def _build(self, model: type[BaseModel], value: Mapping[str, Any], label: str) -> Any:
        try:
            return model.model_validate(value)
        except ValidationError as exc:
            for detail in exc.errors():
                where = ".".join(str(part) for part in detail["loc"])
                self.error(f"'{label}.{where}': {detail['msg']}")
            return INVALID


# ---------------------------------------------------------------------------
# Shared semantic checks
# ---------------------------------------------------------------------------


def check_project_name(inspector: ConfigInspector) -> None:
    """``projectName`` is non-empty and uses only the npm-safe characters."""
    name = inspector.value("project_name")
    if name is INVALID:
        return
    if not name:
        inspector.error("Project name is required")
    elif not PROJECT_NAME_PATTERN.match(name):
        inspector.error(
            f"Project name {name!r} is invalid: it may contain only {PROJECT_NAME_RULE}"
        )


def present(values: Any) -> list[Any]:
    """Drop :data:`INVALID` entries from a checked list (or return ``[]``)."""
    if values is INVALID or values is None:
        return []
    return [item for item in values if item is not INVALID]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _join(path: tuple[str, ...], *extra: str) -> str:
    return ".".join(path + extra)


def _type_name(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    if value is None:
        return "null"
    return type(value).__name__
