"""
Utility-class styling adapter (Tailwind).

Utility tokens pass through unchanged; CSS declarations become Tailwind
arbitrary properties (``[padding:16px]``). Responsive deltas get the
``md:`` / ``lg:`` variant prefixes, and tokens switched off at a larger
breakpoint are bounded with ``max-md:`` / ``max-lg:``. Project exports
also get the Tailwind and PostCSS configs and a global stylesheet.
"""

from __future__ import annotations

from eternal_export.core.ir import BREAKPOINT_ORDER, Breakpoint, ResolvedStyle, StyleMap, is_utility_token

from ..config import ExportConfig, StylingSystem, TargetSurface
from ..registry import ExportRegistry
from ..scaffold import tailwind_files
from .base import StyleArtifacts, StyleBundle, StylingAdapter, css_property_name, css_value, token_class


class UtilityClassAdapter(StylingAdapter):
    """Emit Tailwind class strings straight into the markup."""

    system = StylingSystem.UTILITY_CLASS
    dev_dependencies = {
        "tailwindcss": "^3.4.0",
        "postcss": "^8.4.0",
        "autoprefixer": "^10.4.0",
    }

    def resolve_classes_and_rules(
        self,
        style: ResolvedStyle,
        node_id: str,
        config: ExportConfig | None = None,
    ) -> StyleArtifacts:
        classes = self._classes_for(style, Breakpoint.MOBILE, style.base)
        for bp in BREAKPOINT_ORDER[1:]:
            if bp in style.deltas:
                classes.extend(self._classes_for(style, bp, style.deltas[bp]))
        return StyleArtifacts(class_attr=" ".join(classes))

    def _classes_for(self, style: ResolvedStyle, bp: Breakpoint, entries: StyleMap) -> list[str]:
        classes = []
        for key, value in entries.items():
            if is_utility_token(value):
                classes.append(token_class(style, key, bp))
            elif value is not False:
                classes.append(bp.utility_prefix + arbitrary_property(key, value))
        return classes

    def finalize(self) -> StyleBundle:
        return StyleBundle()

    def config_files(self) -> list[tuple[str, str]]:
        return tailwind_files(module_syntax=self.config.target_surface != TargetSurface.DECORATOR_CLASS)


def arbitrary_property(key: str, value: str | int | float) -> str:
    """
    Tailwind arbitrary-property class for one declaration.

    Examples:
        >>> arbitrary_property("gridTemplateColumns", "1fr 2fr")
        '[grid-template-columns:1fr_2fr]'
    """
    prop = css_property_name(key)
    rendered = css_value(prop, value).replace(" ", "_").replace('"', "'")
    return f"[{prop}:{rendered}]"


# Register adapter
ExportRegistry.register_styling(StylingSystem.UTILITY_CLASS, UtilityClassAdapter)
