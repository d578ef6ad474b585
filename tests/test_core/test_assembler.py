"""Unit tests for the generation pipeline (next_scaffold.core.assembler).

Tests cover:
- Validation short-circuit (no section runs on bad input)
- Path uniqueness and path validity invariants
- Generation banner placement and format
- Determinism of the whole result
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from next_scaffold.core import (
    FileRecord,
    GenerationFailure,
    GenerationSuccess,
    InvariantViolation,
    SectionGenerator,
    TemplateAssembler,
)
from next_scaffold.core.assembler import add_banner, banner_line
from next_scaffold.families import get_family

pytestmark = pytest.mark.unit

STAMP = "2025-01-02T03:04:05+00:00"


class _ReadmeSection(SectionGenerator):
    name = "readme"

    def generate(self, config):
        return [FileRecord(path="README.md", content=f"# {config.project_name}\n")]


class _ExplodingSection(SectionGenerator):
    name = "exploding"

    def generate(self, config):
        raise RuntimeError("must not run")


class _BadPathSection(SectionGenerator):
    name = "bad-path"

    def generate(self, config):
        return [FileRecord(path="../outside.txt", content="")]


def _family_with(*sections):
    return replace(get_family("project"), sections=tuple(sections))


# ---------------------------------------------------------------------------
# Validation gate
# ---------------------------------------------------------------------------


class TestValidationGate:
    def test_invalid_input_returns_failure(self, project_assembler):
        result = project_assembler.assemble({"projectName": "My App!"})
        assert isinstance(result, GenerationFailure)
        assert result.success is False
        assert len(result.errors) == 1

    def test_no_section_runs_on_invalid_input(self):
        assembler = TemplateAssembler(_family_with(_ExplodingSection))
        result = assembler.assemble({"packageManager": "pip"})
        assert result.success is False

    def test_none_means_empty_partial(self, project_assembler):
        assert project_assembler.assemble(None).success is True

    def test_success_carries_merged_config(self, project_assembler):
        result = project_assembler.assemble({"packageManager": "yarn"})
        assert isinstance(result, GenerationSuccess)
        assert result.config.package_manager == "yarn"


# ---------------------------------------------------------------------------
# Output contract
# ---------------------------------------------------------------------------


class TestPathInvariants:
    def test_duplicate_path_raises_invariant_violation(self):
        assembler = TemplateAssembler(_family_with(_ReadmeSection, _ReadmeSection))
        with pytest.raises(InvariantViolation, match="README.md"):
            assembler.assemble({})

    def test_invariant_violation_is_assertion_error(self):
        assert issubclass(InvariantViolation, AssertionError)

    def test_duplicate_against_real_sections(self):
        # The project family already owns README.md.
        family = get_family("project")
        assembler = TemplateAssembler(replace(family, sections=family.sections + (_ReadmeSection,)))
        with pytest.raises(InvariantViolation):
            assembler.assemble({})

    def test_invalid_path_raises_invariant_violation(self):
        assembler = TemplateAssembler(_family_with(_BadPathSection))
        with pytest.raises(InvariantViolation, match="bad-path"):
            assembler.assemble({})

    @pytest.mark.parametrize("path", ["", "/abs.ts", "a//b.ts", "a/./b.ts", "a\\b.ts", "a/../b.ts"])
    def test_file_record_rejects_bad_paths(self, path):
        with pytest.raises(ValueError):
            FileRecord(path=path, content="")

    @pytest.mark.parametrize("family", ["project", "database", "auth", "forms"])
    def test_default_output_paths_are_unique(self, assembler_for, family):
        result = assembler_for(family).assemble({})
        assert len(result.paths) == len(set(result.paths))


# ---------------------------------------------------------------------------
# Banner
# ---------------------------------------------------------------------------


class TestBanner:
    def test_banner_is_single_line(self):
        line = banner_line("src/lib/utils.ts", STAMP)
        assert line == f"// Generated by next-scaffold at {STAMP}"
        assert "\n" not in line

    @pytest.mark.parametrize(
        "path, prefix",
        [
            ("app/page.tsx", "// "),
            ("prisma/schema.prisma", "// "),
            ("app/globals.css", "/* "),
            ("README.md", "<!-- "),
            (".env.example", "# "),
            (".gitignore", "# "),
        ],
    )
    def test_comment_syntax_by_file_type(self, path, prefix):
        assert banner_line(path, STAMP).startswith(prefix)

    @pytest.mark.parametrize("path", ["package.json", "tsconfig.json", ".prettierrc"])
    def test_files_without_comments_get_no_banner(self, path):
        assert banner_line(path, STAMP) is None

    def test_add_banner_prepends_exactly_one_line(self):
        record = FileRecord(path="a.ts", content="export {};\n")
        stamped = add_banner(record, STAMP)
        assert stamped.content.count("\n") == 2
        assert stamped.content.endswith("export {};\n")

    def test_banner_disabled_by_default(self, project_assembler):
        result = project_assembler.assemble({})
        assert not any("Generated by next-scaffold" in record.content for record in result.files)

    def test_banner_uses_clock_once(self):
        ticks = iter([datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)])
        assembler = TemplateAssembler(get_family("project"), clock=lambda: next(ticks))
        result = assembler.assemble({"generatedBanner": True})
        stamped = [r for r in result.files if r.content.startswith("// Generated by next-scaffold")]
        assert stamped
        assert {r.content.splitlines()[0] for r in stamped} == {f"// Generated by next-scaffold at {STAMP}"}

    def test_json_files_stay_parseable_with_banner(self, project_assembler):
        import json

        result = project_assembler.assemble({"generatedBanner": True})
        json.loads(result.file("package.json").content)


# ---------------------------------------------------------------------------
# Determinism
# ---------------------------------------------------------------------------


class TestDeterminism:
    @pytest.mark.parametrize("family", ["project", "database", "auth", "forms"])
    def test_repeated_runs_are_identical(self, assembler_for, family):
        first = assembler_for(family).assemble({"generatedBanner": True})
        second = assembler_for(family).assemble({"generatedBanner": True})
        assert first.model_dump() == second.model_dump()

    def test_fresh_renderer_gives_same_bytes(self, project_assembler):
        other = TemplateAssembler(get_family("project"), clock=project_assembler.clock)
        first = project_assembler.assemble({})
        second = other.assemble({})
        assert [(r.path, r.content) for r in first.files] == [(r.path, r.content) for r in second.files]
