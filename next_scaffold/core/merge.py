"""Two-level configuration merge.

A top-level key from the partial replaces the default, except when both sides
are objects: those are merged key by key.  Nothing below that level is merged.
Lists (``features``, ``providers``, form ``fields``) are always replaced
wholesale, so ``features: []`` switches every default feature off.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

from .schema import to_wire

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def merge_config(partial: Mapping[str, Any] | BaseModel | None, defaults: M) -> M:
    """Overlay *partial* on *defaults* and return a validated full config.

    Args:
        partial: Keys in either alias (``projectName``) or attribute
            (``project_name``) spelling, or a full model instance such as a
            preset.  Not modified.
        defaults: The family's fully populated default configuration.

    Returns:
        A new instance of ``type(defaults)``.

    Raises:
        pydantic.ValidationError: If the merged data does not fit the model.
            Callers run the validator first, so this signals a defect.
    """
    model = type(defaults)
    merged: dict[str, Any] = defaults.model_dump(by_alias=True)
    overrides = to_wire(model, partial or {})

    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = {**current, **value}
        else:
            merged[key] = value

    logger.debug("Merged %d override(s) into %s defaults", len(overrides), model.__name__)
    return model.model_validate(merged)
