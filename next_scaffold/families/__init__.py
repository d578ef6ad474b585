"""Registry of the built-in template families."""

from __future__ import annotations

from ..core.errors import ConfigurationError
from ..core.family import TemplateFamily
from .auth import FAMILY as AUTH
from .database import FAMILY as DATABASE
from .forms import FAMILY as FORMS
from .project import FAMILY as PROJECT

DEFAULT_FAMILY = "project"

FAMILIES: dict[str, TemplateFamily] = {
    family.name: family for family in (PROJECT, DATABASE, AUTH, FORMS)
}


def get_family(name: str) -> TemplateFamily:
    """Return the family registered as *name*.

    Raises:
        ConfigurationError: If no such family exists.
    """
    try:
        return FAMILIES[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown template family {name!r} (available: {', '.join(FAMILIES)})"
        ) from None


def list_families() -> list[str]:
    return list(FAMILIES)


__all__ = ["DEFAULT_FAMILY", "FAMILIES", "get_family", "list_families"]
