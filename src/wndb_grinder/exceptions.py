"""Custom exception hierarchy for wndb-grinder."""

from __future__ import annotations


class WndbError(Exception):
    """Base exception for all wndb-grinder errors."""


class CompatibilityViolation(WndbError):
    """Encoding only exists in the extended rule set while a legacy flag is set.

    Recoverable: the offending relation or frame is dropped and counted.
    """

    def __init__(self, cause: str) -> None:
        self.cause = cause
        super().__init__(cause)


class MalformedInput(WndbError):
    """No rule for a value, a dangling reference, or an offset inconsistency."""

    def __init__(
        self,
        message: str,
        *,
        subject: str | None = None,
        value: object = None,
    ) -> None:
        self.subject = subject
        self.value = value
        super().__init__(message)


class ConfigError(WndbError):
    """Invalid grind configuration."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        super().__init__(message)


class DataImportError(WndbError):
    """Failed to import source data (malformed XML, etc.)."""
