"""
Responsive style types for the component tree.

A node carries one optional style map per breakpoint. Keys whose value is
``True`` are utility-class tokens; any other key is a CSS property
(camelCase or kebab-case) with a string or numeric value.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

StyleValue = str | int | float | bool
StyleMap = dict[str, StyleValue]


class Breakpoint(str, Enum):
    """Responsive breakpoints, smallest first."""

    MOBILE = "mobile"
    TABLET = "tablet"
    DESKTOP = "desktop"

    @property
    def min_width(self) -> int:
        """Lower bound of the breakpoint in CSS pixels."""
        return BREAKPOINT_MIN_WIDTHS[self]

    @property
    def utility_prefix(self) -> str:
        """Utility-class variant prefix (mobile-first, so mobile has none)."""
        return BREAKPOINT_PREFIXES[self]

    @property
    def utility_max_prefix(self) -> str:
        """Variant prefix limiting a utility class to widths below the next breakpoint."""
        return BREAKPOINT_MAX_PREFIXES[self]


# Cascade order: each breakpoint inherits from the one before it
BREAKPOINT_ORDER: tuple[Breakpoint, ...] = (
    Breakpoint.MOBILE,
    Breakpoint.TABLET,
    Breakpoint.DESKTOP,
)

BREAKPOINT_MIN_WIDTHS: dict[Breakpoint, int] = {
    Breakpoint.MOBILE: 0,
    Breakpoint.TABLET: 768,
    Breakpoint.DESKTOP: 1024,
}

BREAKPOINT_PREFIXES: dict[Breakpoint, str] = {
    Breakpoint.MOBILE: "",
    Breakpoint.TABLET: "md:",
    Breakpoint.DESKTOP: "lg:",
}

BREAKPOINT_MAX_PREFIXES: dict[Breakpoint, str] = {
    Breakpoint.MOBILE: "max-md:",
    Breakpoint.TABLET: "max-lg:",
    Breakpoint.DESKTOP: "",
}


class ResponsiveStyles(BaseModel):
    """
    Per-breakpoint style maps for one node.

    ``None`` means the breakpoint is absent and inherits from the next
    smaller breakpoint; ``{}`` means "no styling at this breakpoint".

    Attributes:
        mobile: Base styles
        tablet: Styles from 768px
        desktop: Styles from 1024px
    """

    mobile: StyleMap | None = None
    tablet: StyleMap | None = None
    desktop: StyleMap | None = None

    model_config = ConfigDict(frozen=True)

    def get(self, breakpoint: Breakpoint) -> StyleMap | None:
        """Raw map stored for a breakpoint (no inheritance)."""
        return getattr(self, breakpoint.value)

    @property
    def is_empty(self) -> bool:
        return all(not self.get(bp) for bp in BREAKPOINT_ORDER)


def is_utility_token(value: StyleValue) -> bool:
    """A style entry is a utility-class token when its value is literally True."""
    return value is True


class ResolvedStyle(BaseModel):
    """
    A node's styles resolved for emission.

    ``base`` holds the mobile-first declarations; ``deltas`` holds, for each
    larger breakpoint, only what changes relative to the breakpoint below.
    When responsive output is disabled, ``base`` is the desktop map and
    ``deltas`` is empty.

    Attributes:
        base: Declarations applied at every width
        deltas: Breakpoint -> changed declarations (removed CSS properties
            carry the value ``"unset"``, removed utility tokens ``False``)
    """

    base: StyleMap = Field(default_factory=dict)
    deltas: dict[Breakpoint, StyleMap] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def is_empty(self) -> bool:
        return not self.base and not any(self.deltas.values())

    def cache_key(self) -> tuple:
        """Hashable, order-independent identity of the resolved style."""
        return (
            _freeze(self.base),
            tuple((bp.value, _freeze(self.deltas[bp])) for bp in BREAKPOINT_ORDER if bp in self.deltas),
        )


def _freeze(style: StyleMap) -> tuple:
    return tuple(sorted((k, repr(v)) for k, v in style.items()))
