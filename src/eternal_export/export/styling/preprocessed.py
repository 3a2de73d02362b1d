"""
Preprocessed stylesheet adapter (SCSS).

Same allocation as the scoped-classes adapter, but breakpoints are SCSS
variables and media queries nest inside the class rule.
"""

from __future__ import annotations

from eternal_export.core.ir import BREAKPOINT_ORDER, ResolvedStyle

from ..config import StylingSystem
from ..registry import ExportRegistry
from .base import StyleBundle, StylesheetFragment, css_declarations, indent_lines, media_query
from .scoped import ScopedClassesAdapter


class PreprocessedAdapter(ScopedClassesAdapter):
    """Generate a ``.module.scss`` stylesheet using nesting and variables."""

    system = StylingSystem.PREPROCESSED
    extension = "scss"
    dev_dependencies = {"sass": "^1.69.0"}

    def finalize(self) -> StyleBundle:
        bundle = super().finalize()
        if bundle.stylesheet is None:
            return bundle

        variables = [
            f"$breakpoint-{bp.value}: {bp.min_width}px;" for bp in BREAKPOINT_ORDER[1:]
        ]
        header = "\n".join(variables)
        bundle.stylesheet = StylesheetFragment(
            extension=self.extension,
            content=f"{header}\n\n{bundle.stylesheet.content}",
        )
        return bundle

    def render_class(self, name: str, style: ResolvedStyle) -> str:
        body = css_declarations(style.base)
        lines = [f".{name} {{", *indent_lines(body)]
        for bp in BREAKPOINT_ORDER[1:]:
            if bp not in style.deltas:
                continue
            if len(lines) > 1:
                lines.append("")
            lines.append(f"  {media_query(bp, f'$breakpoint-{bp.value}')} {{")
            lines.extend(indent_lines(css_declarations(style.deltas[bp]), 2))
            lines.append("  }")
        lines.append("}")
        return "\n".join(lines)


# Register adapter
ExportRegistry.register_styling(StylingSystem.PREPROCESSED, PreprocessedAdapter)
