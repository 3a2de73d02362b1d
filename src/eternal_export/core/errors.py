"""
Error types for the export engine.

Errors are raised inside the engine and converted into ``Diagnostic``
values at the pipeline boundary; nothing here crosses the public API
as an exception.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ExportError(Exception):
    """Base exception for all export errors."""

    code = "ExportError"
    fatal = True

    def __init__(self, message: str, node_id: str | None = None):
        self.message = message
        self.node_id = node_id
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the offending node if known."""
        if self.node_id:
            return f"[{self.node_id}] {self.message}"
        return self.message

    def to_diagnostic(self) -> Diagnostic:
        """Convert the error into a diagnostic entry."""
        return Diagnostic(
            severity=Severity.ERROR if self.fatal else Severity.WARNING,
            code=self.code,
            message=self.message,
            node_id=self.node_id,
        )


class ValidationError(ExportError):
    """
    Raised when the tree or the configuration is malformed.

    Examples:
    - Unknown target surface or styling system
    - Duplicate node ids
    - Cycles between nodes
    - Bindings with an invalid handler name
    - Label templates referencing missing props
    """

    code = "ValidationError"

    def __init__(self, message: str, node_id: str | None = None, problems: list[str] | None = None):
        self.problems = problems or [message]
        super().__init__(message, node_id)

    def to_diagnostics(self) -> list[Diagnostic]:
        """One diagnostic per collected problem."""
        return [
            Diagnostic(severity=Severity.ERROR, code=self.code, message=problem)
            for problem in self.problems
        ]


class UnsupportedCombinationError(ExportError):
    """
    Raised when a valid configuration is not implemented for a target.

    Example: decorator-annotated class components without type annotations.
    """

    code = "UnsupportedCombinationError"


class UnknownNodeKindError(ExportError):
    """
    Raised by an emitter for a node kind it does not recognise.

    Non-fatal: the pipeline degrades the node to a passthrough element and
    records an ``UnknownNodeKindWarning``.
    """

    code = "UnknownNodeKindWarning"
    fatal = False


class CancelledError(ExportError):
    """Raised when cooperative cancellation is observed between nodes."""

    code = "Cancelled"


class Severity(str, Enum):
    """Diagnostic severities."""

    ERROR = "error"
    WARNING = "warning"


class Diagnostic(BaseModel):
    """
    A structured warning or error attached to an export result.

    Attributes:
        severity: error (fatal to the request) or warning
        code: Taxonomy name, e.g. ``UnknownNodeKindWarning``
        message: Human-readable description
        node_id: Node the diagnostic refers to, when there is one
    """

    severity: Severity
    code: str
    message: str
    node_id: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR
