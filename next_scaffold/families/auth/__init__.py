"""Better Auth integration: server and client configuration, middleware,
route handler, forms, pages, server actions and shared schemas."""

from next_scaffold.core.family import TemplateFamily
from next_scaffold.families.auth.config import (
    DEFAULTS,
    PRESETS,
    AuthConfig,
    AuthFeature,
    LoginProvider,
    Role,
)
from next_scaffold.families.auth.sections import SECTIONS, instructions, package_scripts
from next_scaffold.families.auth.validator import CHECKS

FAMILY = TemplateFamily(
    name="auth",
    description="Better Auth authentication",
    model=AuthConfig,
    defaults=DEFAULTS,
    sections=SECTIONS,
    checks=CHECKS,
    package_scripts=package_scripts,
    instructions=instructions,
    presets=PRESETS,
)

__all__ = [
    "DEFAULTS",
    "FAMILY",
    "PRESETS",
    "AuthConfig",
    "AuthFeature",
    "LoginProvider",
    "Role",
]
