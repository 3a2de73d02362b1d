"""
Scoped stylesheet classes adapter (CSS Modules).

Allocates one locally scoped class per distinct style and collects the
rule blocks into a companion stylesheet.
"""

from __future__ import annotations

from eternal_export.core.ir import BREAKPOINT_ORDER, ResolvedStyle

from ..config import StylingSystem
from ..registry import ExportRegistry
from .base import (
    RefMode,
    StyleBundle,
    StylesheetFragment,
    StylingAdapter,
    css_declarations,
    indent_lines,
    media_query,
)


class ScopedClassesAdapter(StylingAdapter):
    """Generate a ``.module.css`` stylesheet with one class per distinct style."""

    system = StylingSystem.SCOPED_CLASSES
    ref_mode = RefMode.MODULE
    extension = "css"

    def finalize(self) -> StyleBundle:
        if not self.allocator.allocated:
            return StyleBundle()

        sections: list[str] = []
        for name, style in self.allocator.allocated:
            sections.append(self.render_class(name, style))

        content = "\n\n".join(s for s in sections if s) + "\n"
        return StyleBundle(
            stylesheet=StylesheetFragment(extension=self.extension, content=content),
            definitions=[name for name, _ in self.allocator.allocated],
        )

    def render_class(self, name: str, style: ResolvedStyle) -> str:
        """Base rule followed by one media block per responsive delta."""
        blocks = []
        base = css_declarations(style.base)
        if base:
            blocks.append("\n".join([f".{name} {{", *indent_lines(base), "}"]))
        for bp in BREAKPOINT_ORDER[1:]:
            if bp not in style.deltas:
                continue
            rule = [f".{name} {{", *indent_lines(css_declarations(style.deltas[bp])), "}"]
            blocks.append("\n".join([f"{media_query(bp)} {{", *indent_lines(rule), "}"]))
        return "\n\n".join(blocks)


# Register adapter
ExportRegistry.register_styling(StylingSystem.SCOPED_CLASSES, ScopedClassesAdapter)
