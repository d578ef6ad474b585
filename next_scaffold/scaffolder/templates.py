"""Jinja2 template rendering for generated project files.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``next_scaffold/scaffolder/templates/`` directory and renders them with a
context built from a merged configuration.  Rendering is purely in-memory;
writing files is left to :func:`next_scaffold.utils.write_files`.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for scaffolded files.

    Templates live under a configurable directory, grouped by family
    (``project/``, ``database/``, ``auth/``, ``forms/``).  Undefined context
    variables raise instead of rendering as empty strings, so a template
    cannot silently drop configuration.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([], default_for_string=False),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["slugify"] = slugify
        self.env.filters["kebab_case"] = kebab_case
        self.env.filters["pascal_case"] = pascal_case
        self.env.filters["snake_case"] = snake_case
        self.env.filters["camel_case"] = camel_case
        self.env.filters["js"] = js_literal

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"project/app/layout.tsx.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*."""
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# Name filters (also used directly by section generators)
# ---------------------------------------------------------------------------

def slugify(value: str) -> str:
    """Convert a string to a URL/filename-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")


def kebab_case(value: str) -> str:
    """Convert ``SomeThing`` or ``some_thing`` to ``some-thing``."""
    return snake_case(value).replace("_", "-")


def pascal_case(value: str) -> str:
    """Convert ``some-thing``, ``some_thing`` or ``someThing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", value)
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


def snake_case(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-\s]+", "_", s2).lower()


def camel_case(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    pascal = pascal_case(value)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


def js_literal(value: Any) -> str:
    """Render *value* as a JavaScript/TypeScript literal (JSON syntax)."""
    return json.dumps(value, ensure_ascii=False)
