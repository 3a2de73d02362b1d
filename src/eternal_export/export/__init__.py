"""
Export toolchain.

Turns a component tree into source files for one UI framework and one
styling system.

Usage:
    result = export_tree(tree, {"target_surface": "vue", "styling_system": "scss"})
    for file in result.files:
        print(file.path)
"""

from .accessibility import AccessibilityInjector
from .config import ExportConfig, StylingSystem, TargetSurface, load_export_config
from .emitters import (
    CompiledReactiveEmitter,
    DecoratorClassEmitter,
    Emitter,
    JsxEmitter,
    TemplateScriptEmitter,
)
from .registry import ExportRegistry
from .result import ExportMetadata, ExportResult, FileType, OutputFile
from .runner import CancellationToken, ExportPipeline, export_async, export_tree
from .styling import (
    CssInJsAdapter,
    PreprocessedAdapter,
    ScopedClassesAdapter,
    StylingAdapter,
    UtilityClassAdapter,
)

__all__ = [
    # Config
    "ExportConfig",
    "TargetSurface",
    "StylingSystem",
    "load_export_config",
    # Result
    "ExportResult",
    "ExportMetadata",
    "OutputFile",
    "FileType",
    # Pipeline
    "ExportPipeline",
    "CancellationToken",
    "export_tree",
    "export_async",
    "AccessibilityInjector",
    "ExportRegistry",
    # Emitters
    "Emitter",
    "JsxEmitter",
    "TemplateScriptEmitter",
    "CompiledReactiveEmitter",
    "DecoratorClassEmitter",
    # Styling
    "StylingAdapter",
    "UtilityClassAdapter",
    "CssInJsAdapter",
    "ScopedClassesAdapter",
    "PreprocessedAdapter",
]
