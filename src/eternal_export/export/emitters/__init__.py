"""
Framework emitters.

Each emitter renders nodes in one target surface's syntax:
- JSX-style: React function components
- Template+script: Vue single-file components
- Compiled-reactive: Svelte components
- Decorator+class: Angular standalone components
"""

from .base import (
    KIND_TAGS,
    AssembleContext,
    Attribute,
    ComponentScope,
    EmitContext,
    Emitter,
    TemplatePart,
)
from .compiled_reactive import CompiledReactiveEmitter
from .decorator_class import DecoratorClassEmitter
from .jsx import JsxEmitter
from .template_script import TemplateScriptEmitter

__all__ = [
    # Base classes
    "Emitter",
    "EmitContext",
    "AssembleContext",
    "ComponentScope",
    "Attribute",
    "TemplatePart",
    "KIND_TAGS",
    # Implementations
    "JsxEmitter",
    "TemplateScriptEmitter",
    "CompiledReactiveEmitter",
    "DecoratorClassEmitter",
]
