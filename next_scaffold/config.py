"""Runtime settings for the ``next-scaffold`` CLI.

These describe *where* and *how* output is written, not what is generated;
the generated project is described by a family configuration.  Settings are
a Pydantic v2 model so they validate at construction time and round-trip
through JSON or environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """CLI defaults, overridable per invocation."""

    output_dir: Path = Field(default=Path("."), description="Directory that receives <projectName>/")
    family: str = Field(default="project")
    preset: str | None = Field(default=None, description="Preset used as the base configuration")
    overwrite: bool = Field(default=False, description="Write into a non-empty project directory")
    dry_run: bool = Field(default=False, description="List files without writing them")

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def project_root(self, project_name: str) -> Path:
        """Directory the files of *project_name* are written to."""
        return self.output_dir / project_name

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the settings to a JSON file and return its path."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "Settings":
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            NEXT_SCAFFOLD_OUTPUT_DIR, NEXT_SCAFFOLD_FAMILY,
            NEXT_SCAFFOLD_PRESET, NEXT_SCAFFOLD_OVERWRITE.
        """
        return cls(
            output_dir=Path(os.environ.get("NEXT_SCAFFOLD_OUTPUT_DIR", ".")),
            family=os.environ.get("NEXT_SCAFFOLD_FAMILY", "project"),
            preset=os.environ.get("NEXT_SCAFFOLD_PRESET") or None,
            overwrite=os.environ.get("NEXT_SCAFFOLD_OVERWRITE", "").strip().lower() in _TRUE_VALUES,
        )
