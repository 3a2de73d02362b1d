"""
Styling adapters.

Each adapter maps resolved node styles onto one styling system:
- Utility classes (Tailwind)
- CSS-in-JS (Emotion)
- Scoped classes (CSS Modules)
- Preprocessed stylesheets (SCSS)
"""

from .base import (
    ClassAllocator,
    RefMode,
    StyleArtifacts,
    StyleBundle,
    StylesheetFragment,
    StylingAdapter,
)
from .css_in_js import CssInJsAdapter
from .preprocessed import PreprocessedAdapter
from .scoped import ScopedClassesAdapter
from .utility import UtilityClassAdapter

__all__ = [
    # Base classes
    "StylingAdapter",
    "ClassAllocator",
    "RefMode",
    "StyleArtifacts",
    "StyleBundle",
    "StylesheetFragment",
    # Implementations
    "UtilityClassAdapter",
    "CssInJsAdapter",
    "ScopedClassesAdapter",
    "PreprocessedAdapter",
]
