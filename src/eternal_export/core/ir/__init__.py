"""
Component tree IR types.

The framework-neutral description of a UI that the export engine consumes.
"""

from .styles import (
    BREAKPOINT_ORDER,
    Breakpoint,
    ResolvedStyle,
    ResponsiveStyles,
    StyleMap,
    StyleValue,
    is_utility_token,
)
from .tree import (
    AFFORDANCE_LABELS,
    AccessibilitySpec,
    Binding,
    BindingSlot,
    ComponentNode,
    ComponentTree,
    NodeBindings,
    NodeKind,
    PropValue,
)

__all__ = [
    # Styles
    "Breakpoint",
    "BREAKPOINT_ORDER",
    "ResponsiveStyles",
    "ResolvedStyle",
    "StyleMap",
    "StyleValue",
    "is_utility_token",
    # Tree
    "ComponentNode",
    "ComponentTree",
    "NodeKind",
    "PropValue",
    "AccessibilitySpec",
    "Binding",
    "BindingSlot",
    "NodeBindings",
    "AFFORDANCE_LABELS",
]
