"""Section generators, package scripts and instructions for one form.

Every path is keyed by the form slug (``contact``, ``user-registration``):

- ``schema``      shared/validation/forms/<slug>.ts
- ``types``       shared/types/forms/<slug>.ts
- ``actions``     src/services/forms/<slug>/*
- ``components``  src/components/forms/<slug>-*.tsx
- ``hooks``       src/hooks/forms/use-<slug>-*.ts
- ``tests``       __tests__/forms/<slug>-*
- ``docs``        docs/forms/<slug>.md
"""

from __future__ import annotations

from typing import Any

from ...core.commands import add_command, install_command, numbered_steps, run_script
from ...core.family import SectionGenerator
from ...core.models import FileRecord
from ...scaffolder.templates import camel_case, pascal_case
from .config import FormConfig, FormFeature
from .fields import field_context

_GAPS = {"compact": "space-y-2", "normal": "space-y-4", "relaxed": "space-y-6"}
_GRIDS = {
    "single-column": "grid grid-cols-1",
    "two-column": "grid grid-cols-1 gap-4 md:grid-cols-2",
    "grid": "grid grid-cols-1 gap-4 md:grid-cols-3",
}


def _context(config: FormConfig) -> dict[str, Any]:
    styling = config.styling
    return {
        "project_name": config.project_name,
        "form_name": config.form_name,
        "description": config.description,
        "slug": config.slug,
        "component": config.component_name,
        "variable": config.variable_name,
        "schema_name": f"{config.variable_name}Schema",
        "type_name": f"{pascal_case(config.slug)}FormData",
        "multi_step": config.multi_step,
        "fields": [field_context(field) for field in config.all_fields],
        "steps": [
            {
                "name": step.name,
                "title": step.title or step.name.replace("-", " ").title(),
                "description": step.description,
                "schema_name": f"{camel_case(step.name)}StepSchema",
                "field_names": [field.name for field in step.fields],
            }
            for step in (config.steps if config.multi_step else [])
        ],
        "file_fields": [field.name for field in config.all_fields if field.type == "file"],
        "file_upload": config.has_files,
        "auto_save": config.has(FormFeature.AUTO_SAVE),
        "conditional": config.has(FormFeature.CONDITIONAL_FIELDS),
        "optimistic": config.has(FormFeature.OPTIMISTIC_UI),
        "toast": config.has(FormFeature.TOAST_NOTIFICATIONS),
        "dynamic": config.has(FormFeature.DYNAMIC_FIELDS),
        "gap": _GAPS[styling.spacing],
        "grid": _GRIDS[styling.layout],
        "card": styling.variant == "card",
        "inline": styling.variant == "inline",
        "submit": styling.submit_button.model_dump(),
        "run": lambda script: run_script(config.package_manager, script),
    }


# ---------------------------------------------------------------------------
# Package scripts
# ---------------------------------------------------------------------------


def package_scripts(config: FormConfig) -> dict[str, str]:
    if not config.generate_tests:
        return {}
    return {
        f"test:forms:{config.slug}": f"jest __tests__/forms/{config.slug}",
    }


# ---------------------------------------------------------------------------
# Instructions
# ---------------------------------------------------------------------------


def instructions(config: FormConfig) -> list[str]:
    pm = config.package_manager
    packages = ["react-hook-form", "zod", "@hookform/resolvers"]
    if config.has(FormFeature.TOAST_NOTIFICATIONS):
        packages.append("sonner")
    steps: list[tuple[str, list[str]]] = [
        ("Install dependencies:", [install_command(pm), add_command(pm, packages)]),
        ("Render the form on a page:", [
            f"import {{ {config.component_name} }} from '@/components/forms/{config.slug}-form';",
            f"<{config.component_name} />",
        ]),
    ]
    if config.has(FormFeature.TOAST_NOTIFICATIONS):
        steps.append(("Mount the toaster once in app/layout.tsx:", [
            "import { Toaster } from 'sonner';",
            "<Toaster richColors />",
        ]))
    if config.has_files:
        steps.append(("Create the upload directory:", ["mkdir -p public/uploads"]))
    if config.generate_tests:
        steps.append(("Run the form tests:", [run_script(pm, f"test:forms:{config.slug}")]))
    footer = [f"Form documentation: docs/forms/{config.slug}.md"]
    return numbered_steps(f"Adding the {config.form_name} form", steps, footer=footer)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


class SchemaSection(SectionGenerator):
    name = "schema"

    def generate(self, config: FormConfig) -> list[FileRecord]:
        return [self.render(f"shared/validation/forms/{config.slug}.ts", "forms/schema.ts.j2", **_context(config))]


class TypesSection(SectionGenerator):
    name = "types"

    def generate(self, config: FormConfig) -> list[FileRecord]:
        return [self.render(f"shared/types/forms/{config.slug}.ts", "forms/types.ts.j2", **_context(config))]


class ActionsSection(SectionGenerator):
    """Server actions for submit, per-step save, drafts and uploads."""

    name = "actions"

    def generate(self, config: FormConfig) -> list[FileRecord]:
        ctx = _context(config)
        base = f"src/services/forms/{config.slug}"
        records = [self.render(f"{base}/submit.ts", "forms/actions/submit.ts.j2", **ctx)]
        if config.multi_step:
            records.append(self.render(f"{base}/save-step.ts", "forms/actions/save-step.ts.j2", **ctx))
        if ctx["auto_save"]:
            records.append(self.render(f"{base}/auto-save.ts", "forms/actions/auto-save.ts.j2", **ctx))
        if ctx["file_upload"]:
            records.append(self.render(f"{base}/upload-files.ts", "forms/actions/upload-files.ts.j2", **ctx))
        return records


class ComponentsSection(SectionGenerator):
    name = "components"

    def generate(self, config: FormConfig) -> list[FileRecord]:
        ctx = _context(config)
        base = f"src/components/forms/{config.slug}"
        records = [
            self.render(f"{base}-form.tsx", "forms/components/form.tsx.j2", **ctx),
            self.render(f"{base}-submit-button.tsx", "forms/components/submit-button.tsx.j2", **ctx),
        ]
        if config.multi_step:
            records.append(self.render(f"{base}-stepper.tsx", "forms/components/stepper.tsx.j2", **ctx))
        return records


class HooksSection(SectionGenerator):
    """``use<Form>`` plus one hook per interactive feature."""

    name = "hooks"

    def generate(self, config: FormConfig) -> list[FileRecord]:
        ctx = _context(config)
        base = f"src/hooks/forms/use-{config.slug}"
        records = [self.render(f"{base}-form.ts", "forms/hooks/use-form.ts.j2", **ctx)]
        if ctx["auto_save"]:
            records.append(self.render(f"{base}-auto-save.ts", "forms/hooks/use-auto-save.ts.j2", **ctx))
        if ctx["optimistic"]:
            records.append(self.render(f"{base}-optimistic.ts", "forms/hooks/use-optimistic.ts.j2", **ctx))
        if ctx["file_upload"]:
            records.append(self.render(f"{base}-file-upload.ts", "forms/hooks/use-file-upload.ts.j2", **ctx))
        return records


class TestsSection(SectionGenerator):
    name = "tests"

    def generate(self, config: FormConfig) -> list[FileRecord]:
        if not config.generate_tests:
            return []
        ctx = _context(config)
        return [
            self.render(f"__tests__/forms/{config.slug}-form.test.tsx", "forms/tests/form.test.tsx.j2", **ctx),
            self.render(f"__tests__/forms/{config.slug}-schema.test.ts", "forms/tests/schema.test.ts.j2", **ctx),
        ]


class DocsSection(SectionGenerator):
    name = "docs"

    def generate(self, config: FormConfig) -> list[FileRecord]:
        return [self.render(f"docs/forms/{config.slug}.md", "forms/docs.md.j2", **_context(config))]


SECTIONS = (
    SchemaSection,
    TypesSection,
    ActionsSection,
    ComponentsSection,
    HooksSection,
    TestsSection,
    DocsSection,
)
