"""Unit tests for shared models (next_scaffold.core.models)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from next_scaffold.core.errors import ConfigurationError
from next_scaffold.core.models import (
    FileRecord,
    GenerationFailure,
    GenerationSuccess,
    PackageManager,
    ProjectSettings,
    path_problem,
)

pytestmark = pytest.mark.unit


class TestProjectSettings:
    def test_defaults(self):
        settings = ProjectSettings()
        assert settings.project_name == "my-app"
        assert settings.package_manager == "npm"
        assert settings.generated_banner is False

    def test_camel_case_aliases(self):
        settings = ProjectSettings.model_validate({"projectName": "shop", "packageManager": "bun"})
        assert settings.project_name == "shop"
        assert settings.package_manager == PackageManager.BUN.value

    def test_dump_by_alias(self):
        dumped = ProjectSettings().model_dump(by_alias=True)
        assert set(dumped) == {"projectName", "packageManager", "generatedBanner"}

    def test_extra_keys_rejected(self):
        with pytest.raises(ValidationError):
            ProjectSettings.model_validate({"projectTitle": "x"})

    def test_frozen(self):
        with pytest.raises(ValidationError):
            ProjectSettings().project_name = "x"


class TestFileRecord:
    def test_valid(self):
        record = FileRecord(path="src/app/page.tsx", content="")
        assert record.path == "src/app/page.tsx"

    def test_path_problem_messages(self):
        assert path_problem("ok/file.ts") is None
        assert path_problem("") == "path is empty"
        assert path_problem("/etc/passwd") == "path must be relative"
        assert path_problem("a/../b") == "segment '..' is not allowed"

    def test_records_are_hashable(self):
        assert len({FileRecord(path="a", content="x"), FileRecord(path="a", content="x")}) == 1


class TestGenerationResults:
    def test_success_helpers(self):
        result = GenerationSuccess(
            config=ProjectSettings(),
            files=[FileRecord(path="a.ts", content="1"), FileRecord(path="b.ts", content="2")],
        )
        assert result.success is True
        assert result.paths == ["a.ts", "b.ts"]
        assert result.file("b.ts").content == "2"
        assert result.file("c.ts") is None

    def test_success_dumps_camel_case(self):
        result = GenerationSuccess(config=ProjectSettings(), package_scripts={"dev": "next dev"})
        dumped = result.model_dump(by_alias=True)
        assert dumped["packageScripts"] == {"dev": "next dev"}
        assert dumped["config"]["projectName"] == "my-app"

    def test_failure(self):
        result = GenerationFailure(errors=["boom"])
        assert result.success is False
        assert result.errors == ["boom"]


class TestErrors:
    def test_configuration_error_carries_errors(self):
        exc = ConfigurationError("bad", errors=["a", "b"])
        assert str(exc) == "bad"
        assert exc.errors == ["a", "b"]
        assert isinstance(exc, ValueError)
