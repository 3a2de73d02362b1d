"""
Eternal Export - component tree to framework source code.

Exports a framework-neutral UI component tree as idiomatic source for
React, Vue, Svelte or Angular with Tailwind, Emotion, CSS Modules or SCSS
styling.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import Diagnostic, ExportError, ValidationError
from .core.ir import ComponentNode, ComponentTree
from .export import (
    CancellationToken,
    ExportConfig,
    ExportResult,
    StylingSystem,
    TargetSurface,
    export_async,
    export_tree,
)


def _get_version() -> str:
    """Get version from installed package metadata."""
    try:
        return _metadata_version("eternal-export")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "ComponentNode",
    "ComponentTree",
    "ExportConfig",
    "TargetSurface",
    "StylingSystem",
    "ExportResult",
    "Diagnostic",
    "ExportError",
    "ValidationError",
    "CancellationToken",
    "export_tree",
    "export_async",
]
