"""Integration tests for generate-then-write.

Every preset of every family is generated and written to a temporary
directory; the written tree must match the in-memory result exactly and
every JSON file must parse.  Nothing outside ``tmp_path`` is touched.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from next_scaffold import get_preset, list_families, list_presets
from next_scaffold.utils import write_files


def _cases() -> list[tuple[str, str]]:
    return [(family, preset) for family in list_families() for preset in list_presets(family)]


def _tree(root: Path) -> dict[str, bytes]:
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.mark.integration
class TestPresetsOnDisk:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("family, preset", _cases())
    async def test_written_tree_matches_result(self, assembler_for, tmp_path: Path, family, preset):
        result = assembler_for(family).assemble(get_preset(family, preset))
        assert result.success, result.errors

        written = await write_files(result.files, tmp_path / "out")
        assert len(written) == len(result.files)

        on_disk = _tree(tmp_path / "out")
        assert on_disk == {record.path: record.content.encode("utf-8") for record in result.files}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("family, preset", _cases())
    async def test_json_files_parse(self, assembler_for, tmp_path: Path, family, preset):
        result = assembler_for(family).assemble(get_preset(family, preset))
        await write_files(result.files, tmp_path)
        for path in tmp_path.rglob("*.json"):
            json.loads(path.read_text(encoding="utf-8"))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("family", list_families())
    async def test_repeat_runs_are_byte_identical(self, assembler_for, tmp_path: Path, family):
        first = assembler_for(family).assemble({})
        second = assembler_for(family).assemble({})
        await write_files(first.files, tmp_path / "first")
        await write_files(second.files, tmp_path / "second")
        assert _tree(tmp_path / "first") == _tree(tmp_path / "second")


@pytest.mark.integration
class TestProjectLayout:
    def test_default_project_has_manifest_and_tsconfig(self, project_assembler):
        result = project_assembler.assemble({})
        manifest = json.loads(result.file("package.json").content)
        tsconfig = json.loads(result.file("tsconfig.json").content)
        assert manifest["name"] == "nextjs-app"
        assert tsconfig["compilerOptions"]["paths"]
