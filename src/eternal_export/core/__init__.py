"""
Core of the export engine: tree IR, validation, style cascade and errors.
"""

from . import ir
from .cascade import resolve_responsive, resolve_style
from .errors import (
    CancelledError,
    Diagnostic,
    ExportError,
    Severity,
    UnknownNodeKindError,
    UnsupportedCombinationError,
    ValidationError,
)
from .validator import MAX_TREE_DEPTH, validate

__all__ = [
    "ir",
    "validate",
    "MAX_TREE_DEPTH",
    "resolve_style",
    "resolve_responsive",
    "ExportError",
    "ValidationError",
    "UnsupportedCombinationError",
    "UnknownNodeKindError",
    "CancelledError",
    "Diagnostic",
    "Severity",
]
