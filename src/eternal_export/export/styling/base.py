"""
Base classes for styling adapters.

A styling adapter turns each node's resolved style into a class reference
for the emitter and accumulates whatever rule blocks the styling system
needs (an extra stylesheet, or definitions inside the component script).
One adapter instance serves exactly one export run.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from eternal_export.core.ir import BREAKPOINT_ORDER, Breakpoint, ResolvedStyle, StyleMap, StyleValue, is_utility_token
from eternal_export.core.strings import safe_identifier

if TYPE_CHECKING:
    from eternal_export.export.config import ExportConfig, StylingSystem

# CSS properties that take bare numbers
UNITLESS_PROPERTIES = frozenset(
    {
        "opacity",
        "z-index",
        "font-weight",
        "line-height",
        "flex",
        "flex-grow",
        "flex-shrink",
        "order",
        "zoom",
        "aspect-ratio",
    }
)

_CAMEL_HUMP = re.compile(r"(?<!^)(?=[A-Z])")


class RefMode(str, Enum):
    """How an emitter must reference an allocated class name."""

    NONE = "none"  # static class tokens only
    MODULE = "module"  # member of an imported stylesheet module (styles.x)
    IDENTIFIER = "identifier"  # script-level constant holding the class name


@dataclass(frozen=True)
class StyleArtifacts:
    """
    Styling output for one node.

    Attributes:
        class_attr: Space-joined static class tokens
        class_ref: Allocated class/identifier name, if the node needs one
    """

    class_attr: str = ""
    class_ref: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.class_attr and self.class_ref is None


@dataclass(frozen=True)
class StylesheetFragment:
    """Stylesheet produced by an adapter; the emitter decides where it lives."""

    extension: str
    content: str


@dataclass
class StyleBundle:
    """
    Everything an adapter contributes once all nodes are resolved.

    Attributes:
        stylesheet: Extra stylesheet file, if any
        script_imports: Import lines the component script needs
        script_block: Definitions appended to the component script
        definitions: Names defined in ``script_block``, in order
    """

    stylesheet: StylesheetFragment | None = None
    script_imports: list[str] = field(default_factory=list)
    script_block: str = ""
    definitions: list[str] = field(default_factory=list)


class ClassAllocator:
    """
    Deterministic class-name allocation.

    One name per distinct resolved style; the name comes from the first node
    id that uses the style, with a numeric suffix on collisions. Identical
    input always yields identical names.
    """

    def __init__(self, suffix: str = ""):
        self.suffix = suffix
        self._by_key: dict[tuple, str] = {}
        self._used: set[str] = set()
        self.allocated: list[tuple[str, ResolvedStyle]] = []

    def allocate(self, style: ResolvedStyle, node_id: str) -> str:
        key = style.cache_key()
        if key in self._by_key:
            return self._by_key[key]

        base = safe_identifier(node_id) + self.suffix
        name = base
        counter = 2
        while name in self._used:
            name = f"{base}{counter}"
            counter += 1

        self._by_key[key] = name
        self._used.add(name)
        self.allocated.append((name, style))
        return name


class StylingAdapter(ABC):
    """
    Base class for styling systems.

    Subclasses declare the npm packages they need and render their rule
    blocks in ``finalize``.
    """

    system: StylingSystem
    ref_mode: RefMode = RefMode.NONE
    class_suffix: str = ""
    dependencies: dict[str, str] = {}
    dev_dependencies: dict[str, str] = {}

    def __init__(self, config: ExportConfig):
        self.config = config
        self.allocator = ClassAllocator(self.class_suffix)

    def resolve_classes_and_rules(
        self,
        style: ResolvedStyle,
        node_id: str,
        config: ExportConfig | None = None,
    ) -> StyleArtifacts:
        """
        Resolve a node's style into class tokens and an allocated class.

        Utility tokens always pass through as static classes; CSS
        declarations are allocated a class whose rules ``finalize`` renders.
        """
        tokens = utility_tokens(style)
        declarations = css_only(style)
        class_ref = None
        if not declarations.is_empty:
            class_ref = self.allocator.allocate(declarations, node_id)
        return StyleArtifacts(class_attr=" ".join(tokens), class_ref=class_ref)

    @abstractmethod
    def finalize(self) -> StyleBundle:
        """Render accumulated rule blocks."""
        pass

    def config_files(self) -> list[tuple[str, str]]:
        """(path, content) of project configuration the styling system needs."""
        return []


# =============================================================================
# CSS helpers shared by the adapters
# =============================================================================


def css_property_name(key: str) -> str:
    """
    Normalise a style key to a CSS property name.

    Examples:
        >>> css_property_name("fontSize")
        'font-size'
        >>> css_property_name("WebkitLineClamp")
        '-webkit-line-clamp'
        >>> css_property_name("--brand-color")
        '--brand-color'
    """
    if key.startswith("--"):
        return key
    if "-" in key:
        return key.lower()
    kebab = _CAMEL_HUMP.sub("-", key).lower()
    if key[:1].isupper():
        kebab = "-" + kebab
    return kebab


def css_value(prop: str, value: StyleValue) -> str:
    """Format a declaration value; bare numbers get ``px`` unless unitless."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int | float):
        if prop in UNITLESS_PROPERTIES or value == 0:
            return f"{value:g}"
        return f"{value:g}px"
    return str(value).strip()


def css_declarations(style: StyleMap) -> list[str]:
    """``prop: value;`` lines for every CSS entry of a style map."""
    lines = []
    for key, value in style.items():
        if is_utility_token(value) or value is False:
            continue
        prop = css_property_name(key)
        lines.append(f"{prop}: {css_value(prop, value)};")
    return lines


def utility_tokens(style: ResolvedStyle) -> list[str]:
    """Utility tokens of a resolved style with breakpoint variants applied."""
    tokens = [token_class(style, k, Breakpoint.MOBILE) for k, v in style.base.items() if is_utility_token(v)]
    for bp in BREAKPOINT_ORDER[1:]:
        for key, value in style.deltas.get(bp, {}).items():
            if is_utility_token(value):
                tokens.append(token_class(style, key, bp))
    return tokens


def token_class(style: ResolvedStyle, key: str, start: Breakpoint) -> str:
    """
    Variant-prefixed class for a token switched on at ``start``.

    The class stays active until a later delta switches the token off.

    Examples:
        >>> style = ResolvedStyle(base={"p-4": True}, deltas={Breakpoint.TABLET: {"p-4": False}})
        >>> token_class(style, "p-4", Breakpoint.MOBILE)
        'max-md:p-4'
    """
    end = start
    for bp in BREAKPOINT_ORDER[BREAKPOINT_ORDER.index(start) + 1 :]:
        if style.deltas.get(bp, {}).get(key) is False:
            break
        end = bp
    return start.utility_prefix + end.utility_max_prefix + key


def css_only(style: ResolvedStyle) -> ResolvedStyle:
    """The CSS declarations of a resolved style, utility tokens removed."""

    def strip(m: StyleMap) -> StyleMap:
        return {k: v for k, v in m.items() if not is_utility_token(v) and v is not False}

    deltas = {bp: d for bp, d in ((bp, strip(m)) for bp, m in style.deltas.items()) if d}
    return ResolvedStyle(base=strip(style.base), deltas=deltas)


def media_query(breakpoint: Breakpoint, width: str | None = None) -> str:
    """Mobile-first media query for a breakpoint."""
    return f"@media (min-width: {width or f'{breakpoint.min_width}px'})"


def indent_lines(lines: list[str], level: int = 1) -> list[str]:
    pad = "  " * level
    return [pad + line if line else line for line in lines]
