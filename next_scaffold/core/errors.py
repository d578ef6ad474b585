"""Exception types for the scaffolding pipeline.

User-facing configuration problems are never raised by ``generate``; they come
back as strings on a ``GenerationFailure``.  The exceptions here cover the two
remaining cases: lookups of names that do not exist (``ConfigurationError``)
and broken generator contracts (``InvariantViolation``).
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a caller asks for an unknown family/preset or supplies an
    unreadable configuration file."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = list(errors or [])
        super().__init__(message)


class InvariantViolation(AssertionError):
    """A section generator broke the output contract (duplicate or malformed
    path).  Indicates a defect in the generator registration, not bad input."""
