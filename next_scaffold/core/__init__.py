"""Family-independent scaffolding pipeline.

Quick usage::

    from next_scaffold.core import TemplateAssembler
    from next_scaffold.families import get_family

    result = TemplateAssembler(get_family("database")).assemble({"database": "mysql"})
"""

from next_scaffold.core.assembler import TemplateAssembler, add_banner, banner_line
from next_scaffold.core.errors import ConfigurationError, InvariantViolation
from next_scaffold.core.family import SectionGenerator, TemplateFamily
from next_scaffold.core.merge import merge_config
from next_scaffold.core.models import (
    ConfigModel,
    FileRecord,
    GenerationFailure,
    GenerationResult,
    GenerationSuccess,
    PackageManager,
    ProjectSettings,
)
from next_scaffold.core.validation import INVALID, ConfigInspector, check_project_name

__all__ = [
    "INVALID",
    "ConfigInspector",
    "ConfigModel",
    "ConfigurationError",
    "FileRecord",
    "GenerationFailure",
    "GenerationResult",
    "GenerationSuccess",
    "InvariantViolation",
    "PackageManager",
    "ProjectSettings",
    "SectionGenerator",
    "TemplateAssembler",
    "TemplateFamily",
    "add_banner",
    "banner_line",
    "check_project_name",
    "merge_config",
]
