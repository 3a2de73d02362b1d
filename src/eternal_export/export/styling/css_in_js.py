"""
CSS-in-JS styling adapter (Emotion).

Each distinct style becomes one ``css`` tagged-template definition in the
component script; the generated constant holds the runtime class name.
"""

from __future__ import annotations

from eternal_export.core.ir import BREAKPOINT_ORDER

from ..config import StylingSystem
from ..registry import ExportRegistry
from ..syntax import escape_template_literal
from .base import RefMode, StyleBundle, StylingAdapter, css_declarations, indent_lines, media_query


class CssInJsAdapter(StylingAdapter):
    """Generate Emotion ``css`` definitions appended to the component file."""

    system = StylingSystem.CSS_IN_JS
    ref_mode = RefMode.IDENTIFIER
    class_suffix = "Class"
    dependencies = {"@emotion/css": "^11.11.0"}

    def finalize(self) -> StyleBundle:
        if not self.allocator.allocated:
            return StyleBundle()

        blocks = []
        names = []
        for name, style in self.allocator.allocated:
            body = indent_lines(css_declarations(style.base))
            for bp in BREAKPOINT_ORDER[1:]:
                if bp not in style.deltas:
                    continue
                if body:
                    body.append("")
                body.append(f"  {media_query(bp)} {{")
                body.extend(indent_lines(css_declarations(style.deltas[bp]), 2))
                body.append("  }")
            css_text = escape_template_literal("\n".join(body))
            blocks.append(f"const {name} = css`\n{css_text}\n`;")
            names.append(name)

        return StyleBundle(
            script_imports=["import { css } from '@emotion/css';"],
            script_block="\n\n".join(blocks),
            definitions=names,
        )


# Register adapter
ExportRegistry.register_styling(StylingSystem.CSS_IN_JS, CssInJsAdapter)
