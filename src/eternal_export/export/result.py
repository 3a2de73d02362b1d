"""
Export result types.

An ExportResult is built once per request and never mutated afterwards.
Builders accumulate into an ExportResultBuilder and freeze it on return.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from eternal_export.core.errors import Diagnostic, ExportError, Severity, ValidationError


class FileType(str, Enum):
    """Categories of generated files."""

    COMPONENT = "component"
    STYLE = "style"
    TEST = "test"
    CONFIG = "config"
    DOCUMENTATION = "documentation"


class OutputFile(BaseModel):
    """A generated text file, path relative to the project root."""

    path: str
    content: str
    type: FileType = FileType.COMPONENT

    model_config = ConfigDict(frozen=True)

    @property
    def size(self) -> int:
        return len(self.content.encode("utf-8"))


class ExportMetadata(BaseModel):
    """Summary of an export, free of timestamps so results stay reproducible."""

    target_surface: str | None = None
    styling_system: str | None = None
    component_name: str | None = None
    total_files: int = 0
    total_size: int = 0

    model_config = ConfigDict(frozen=True)


class ExportResult(BaseModel):
    """
    Outcome of one pipeline run.

    Attributes:
        success: False when a fatal diagnostic was recorded
        files: Component file first, then stylesheet, test, manifest and companion files
        diagnostics: Warnings (and, on failure, errors)
        dependencies: Runtime packages the generated code imports
        dev_dependencies: Tooling packages for types and tests
        scripts: package.json scripts
        metadata: Export summary
    """

    success: bool
    files: tuple[OutputFile, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)
    scripts: dict[str, str] = Field(default_factory=dict)
    metadata: ExportMetadata = Field(default_factory=ExportMetadata)

    model_config = ConfigDict(frozen=True)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    def get_file(self, path: str) -> OutputFile | None:
        for f in self.files:
            if f.path == path:
                return f
        return None

    @classmethod
    def failure(cls, error: ExportError, warnings: list[Diagnostic] | None = None) -> ExportResult:
        """Result for a request stopped by a fatal error: no files."""
        diagnostics = list(warnings or [])
        if isinstance(error, ValidationError):
            diagnostics.extend(error.to_diagnostics())
        else:
            diagnostics.append(error.to_diagnostic())
        return cls(success=False, diagnostics=tuple(diagnostics))


@dataclass
class ExportResultBuilder:
    """
    Mutable accumulator used while a pipeline run is in progress.

    Attributes:
        files: Files in output order
        diagnostics: Diagnostics in the order they were raised
    """

    files: list[OutputFile] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def add_file(self, path: str, content: str, type: FileType = FileType.COMPONENT) -> None:
        """Record a generated file."""
        self.files.append(OutputFile(path=path, content=content, type=type))

    def add_warning(self, code: str, message: str, node_id: str | None = None) -> None:
        """Record a non-fatal diagnostic."""
        self.diagnostics.append(
            Diagnostic(severity=Severity.WARNING, code=code, message=message, node_id=node_id)
        )

    def build(
        self,
        dependencies: dict[str, str],
        dev_dependencies: dict[str, str],
        scripts: dict[str, str],
        metadata: ExportMetadata,
    ) -> ExportResult:
        """Freeze into a successful ExportResult."""
        return ExportResult(
            success=True,
            files=tuple(self.files),
            diagnostics=tuple(self.diagnostics),
            dependencies=dependencies,
            dev_dependencies=dev_dependencies,
            scripts=scripts,
            metadata=metadata,
        )
