"""
Generation-time errors and the diagnostics reporter.

Errors raised while extracting, resolving or emitting one aggregate are
recovered at the aggregate boundary and turned into diagnostics, so a single
bad aggregate never aborts the whole generation pass.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..logging_config import get_logger

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    def __init__(self, message: str, aggregate: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.aggregate = aggregate


class SchemaError(GeneratorError):
    """The aggregate declaration is malformed."""

    pass


class EmptySchemaError(SchemaError):
    """The aggregate has a store name but no field carries a storage key."""

    pass


class UnsupportedTypeError(GeneratorError):
    """A field declares a type outside the supported set."""

    pass


class InvalidDefaultError(UnsupportedTypeError):
    """A default-value literal cannot be parsed as the field's type."""

    pass


class DuplicateKeyError(SchemaError):
    """Two fields of one aggregate share a storage key."""

    pass


class EmissionIOError(GeneratorError):
    """The rendered artifact could not be written to the output sink."""

    pass


class Severity(Enum):
    """Diagnostic severities, mirroring a compiler's message kinds."""

    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


@dataclass(frozen=True)
class Diagnostic:
    """A single message addressed to the invoking build step."""

    severity: Severity
    message: str
    aggregate: Optional[str] = None

    def __str__(self) -> str:
        prefix = f"{self.aggregate}: " if self.aggregate else ""
        return f"{self.severity.value}: {prefix}{self.message}"


class DiagnosticsReporter:
    """Collects diagnostics for one generation pass."""

    _LOG_LEVELS = {
        Severity.ERROR: "error",
        Severity.WARNING: "warning",
        Severity.NOTE: "info",
    }

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    def report(
        self, severity: Severity, message: str, aggregate: Optional[str] = None
    ) -> Diagnostic:
        """Record a diagnostic and forward it to the log."""
        diagnostic = Diagnostic(severity, message, aggregate)
        self.diagnostics.append(diagnostic)
        getattr(logger, self._LOG_LEVELS[severity])("%s", diagnostic)
        return diagnostic

    def error(self, message: str, aggregate: Optional[str] = None) -> Diagnostic:
        return self.report(Severity.ERROR, message, aggregate)

    def warning(self, message: str, aggregate: Optional[str] = None) -> Diagnostic:
        return self.report(Severity.WARNING, message, aggregate)

    def note(self, message: str, aggregate: Optional[str] = None) -> Diagnostic:
        return self.report(Severity.NOTE, message, aggregate)

    def report_exception(self, error: GeneratorError) -> Diagnostic:
        """Turn a recovered generator error into an ERROR diagnostic."""
        return self.error(error.message, error.aggregate)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def exit_code(self) -> int:
        """Non-zero when any aggregate reported an error."""
        return 1 if self.has_errors else 0
