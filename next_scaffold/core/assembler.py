"""Validate -> merge -> generate -> check -> derive.

The assembler is the only place where the sections of a family meet.  It
runs them in registration order against one frozen configuration, enforces
the output contract (valid, unique paths) and derives the package scripts and
setup instructions.

Usage::

    assembler = TemplateAssembler(get_family("project"))
    result = assembler.assemble({"packageManager": "pnpm"})
    if result.success:
        print(result.paths)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Any

from pydantic import ValidationError

from ..scaffolder.templates import TemplateRenderer
from .errors import InvariantViolation
from .family import SectionGenerator, TemplateFamily
from .models import FileRecord, GenerationFailure, GenerationResult, GenerationSuccess

logger = logging.getLogger(__name__)

BANNER_TEXT = "Generated by next-scaffold at {stamp}"

# Comment syntax by file suffix.  Files not listed (JSON above all) are left
# untouched because they have no comment syntax.
_LINE_COMMENTS: dict[str, tuple[str, str]] = {
    ".ts": ("// ", ""),
    ".tsx": ("// ", ""),
    ".js": ("// ", ""),
    ".jsx": ("// ", ""),
    ".mjs": ("// ", ""),
    ".cjs": ("// ", ""),
    ".prisma": ("// ", ""),
    ".css": ("/* ", " */"),
    ".md": ("<!-- ", " -->"),
    ".yml": ("# ", ""),
    ".yaml": ("# ", ""),
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# TemplateAssembler
# ---------------------------------------------------------------------------


class TemplateAssembler:
    """Runs one template family end to end.

    Attributes:
        family: The family being assembled.
        renderer: Shared Jinja2 renderer handed to every section.
        sections: Section generator instances, in registration order.
    """

    def __init__(
        self,
        family: TemplateFamily,
        renderer: TemplateRenderer | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.family = family
        self.renderer = renderer or TemplateRenderer()
        self.clock = clock or _utc_now
        self.sections: list[SectionGenerator] = [section(self.renderer) for section in family.sections]

    def validate(self, partial: Any) -> list[str]:
        return self.family.validate(partial)

    def assemble(self, partial: Any = None) -> GenerationResult:
        """Generate every file for *partial*.

        Returns:
            ``GenerationSuccess`` with files, package scripts and
            instructions, or ``GenerationFailure`` listing every validation
            error.  No section runs when validation fails.

        Raises:
            InvariantViolation: If a section emits an invalid or duplicate
                path.
        """
        partial = {} if partial is None else partial
        errors = self.validate(partial)
        if errors:
            logger.info("%s: configuration rejected (%d error(s))", self.family.name, len(errors))
            return GenerationFailure(errors=errors)

        config = self.family.merge(partial)

        files: list[FileRecord] = []
        for section in self.sections:
            produced = self._run_section(section, config)
            logger.debug("%s/%s: %d file(s)", self.family.name, section.name, len(produced))
            files.extend(produced)

        self._assert_unique(files)

        if config.generated_banner:
            stamp = self.clock().astimezone(timezone.utc).isoformat(timespec="seconds")
            files = [add_banner(record, stamp) for record in files]

        result = GenerationSuccess(
            config=config,
            files=files,
            package_scripts=self.family.package_scripts(config),
            instructions=self.family.instructions(config),
        )
        logger.info("%s: generated %d file(s)", self.family.name, len(files))
        return result

    # -- Contract checks -----------------------------------------------------

    def _run_section(self, section: SectionGenerator, config: Any) -> list[FileRecord]:
        try:
            return list(section.generate(config))
        except ValidationError as exc:
            raise InvariantViolation(
                f"section '{section.name}' of family '{self.family.name}' produced an invalid file record: {exc}"
            ) from exc

    def _assert_unique(self, files: list[FileRecord]) -> None:
        seen: set[str] = set()
        for record in files:
            if record.path in seen:
                raise InvariantViolation(
                    f"family '{self.family.name}' generated '{record.path}' more than once"
                )
            seen.add(record.path)


# ---------------------------------------------------------------------------
# Banner
# ---------------------------------------------------------------------------


def banner_line(path: str, stamp: str) -> str | None:
    """The single comment line announcing generation time, or ``None`` when
    the file format at *path* has no comment syntax."""
    name = PurePosixPath(path).name
    if name.startswith(".env") or name == ".gitignore" or name.endswith("ignore"):
        prefix, suffix = "# ", ""
    else:
        style = _LINE_COMMENTS.get(PurePosixPath(path).suffix)
        if style is None:
            return None
        prefix, suffix = style
    return f"{prefix}{BANNER_TEXT.format(stamp=stamp)}{suffix}"


def add_banner(record: FileRecord, stamp: str) -> FileRecord:
    line = banner_line(record.path, stamp)
    if line is None:
        return record
    return FileRecord(path=record.path, content=f"{line}\n{record.content}")
