"""Shared pytest fixtures for the next-scaffold test suite.

Provides reusable fixtures for:
- Output directories for generated projects
- One assembler per template family, with a frozen clock
- Small partial configurations used across families
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from next_scaffold.core import TemplateAssembler
from next_scaffold.families import get_family
from next_scaffold.scaffolder.templates import TemplateRenderer

FIXED_TIME = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_output_dir(tmp_path: Path) -> Path:
    """Temporary directory that receives generated projects (auto-cleanup)."""
    output = tmp_path / "output"
    output.mkdir()
    yield output


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a JSON configuration file and return its path."""

    def _write(data: Any, name: str = "config.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Assemblers
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


def _assembler(name: str, renderer: TemplateRenderer) -> TemplateAssembler:
    return TemplateAssembler(get_family(name), renderer=renderer, clock=lambda: FIXED_TIME)


@pytest.fixture
def project_assembler(renderer: TemplateRenderer) -> TemplateAssembler:
    return _assembler("project", renderer)


@pytest.fixture
def database_assembler(renderer: TemplateRenderer) -> TemplateAssembler:
    return _assembler("database", renderer)


@pytest.fixture
def auth_assembler(renderer: TemplateRenderer) -> TemplateAssembler:
    return _assembler("auth", renderer)


@pytest.fixture
def forms_assembler(renderer: TemplateRenderer) -> TemplateAssembler:
    return _assembler("forms", renderer)


@pytest.fixture
def assembler_for(renderer: TemplateRenderer):
    """Factory: ``assembler_for("auth")`` -> assembler with the frozen clock."""

    def _make(name: str) -> TemplateAssembler:
        return _assembler(name, renderer)

    return _make


# ---------------------------------------------------------------------------
# Sample configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def multi_step_form() -> dict[str, Any]:
    """A two-step form with one conditional field."""
    return {
        "formName": "Job Application",
        "formType": "multi-step",
        "features": ["conditional-fields", "toast-notifications"],
        "steps": [
            {
                "name": "personal",
                "title": "About you",
                "fields": [
                    {"name": "fullName", "label": "Full name", "required": True},
                    {"name": "email", "type": "email", "label": "Email", "required": True},
                ],
            },
            {
                "name": "role",
                "fields": [
                    {
                        "name": "position",
                        "type": "select",
                        "label": "Position",
                        "options": [
                            {"label": "Engineer", "value": "engineer"},
                            {"label": "Other", "value": "other"},
                        ],
                    },
                    {
                        "name": "otherPosition",
                        "label": "Which position?",
                        "conditional": {"dependsOn": "position", "value": "other"},
                    },
                ],
            },
        ],
    }
