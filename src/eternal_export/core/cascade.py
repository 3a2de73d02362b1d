"""
Breakpoint style resolution.

Styles cascade mobile -> tablet -> desktop: an absent breakpoint inherits
the resolved map of the next smaller one, an explicit empty map resets to
no styling, and a non-empty map overrides on top of what it inherits.
With responsive output disabled only the desktop map is used, verbatim.
"""

from __future__ import annotations

from .ir import BREAKPOINT_ORDER, Breakpoint, ComponentNode, ResolvedStyle, StyleMap, is_utility_token

UNSET = "unset"


def resolve_style(node: ComponentNode, breakpoint: Breakpoint, responsive: bool = True) -> StyleMap:
    """
    Merged style map for one breakpoint.

    Args:
        node: Node whose styles are resolved
        breakpoint: Breakpoint to resolve
        responsive: When False the raw desktop map is returned for any breakpoint

    Returns:
        A new style map (never the node's own dict)
    """
    if not responsive:
        return dict(node.styles.desktop or {})

    resolved: StyleMap = {}
    for bp in BREAKPOINT_ORDER:
        raw = node.styles.get(bp)
        if raw is not None:
            resolved = {**resolved, **raw} if raw else {}
        if bp == breakpoint:
            break
    return resolved


def resolve_responsive(node: ComponentNode, responsive: bool = True) -> ResolvedStyle:
    """
    Resolve a node's styles into a mobile-first base plus per-breakpoint deltas.

    A delta holds the entries whose value changed relative to the breakpoint
    below. CSS properties that disappear are reset with ``unset``; utility
    tokens that disappear are switched off with ``False``.
    """
    if not responsive:
        return ResolvedStyle(base=resolve_style(node, Breakpoint.DESKTOP, responsive=False))

    base = resolve_style(node, Breakpoint.MOBILE)
    deltas: dict[Breakpoint, StyleMap] = {}
    previous = base
    for bp in BREAKPOINT_ORDER[1:]:
        current = resolve_style(node, bp)
        delta: StyleMap = {}
        for key, value in current.items():
            if previous.get(key) != value:
                delta[key] = value
        for key, value in previous.items():
            if value is False or current.get(key, False) is not False:
                continue
            delta[key] = False if is_utility_token(value) else UNSET
        if delta:
            deltas[bp] = delta
        previous = current
    return ResolvedStyle(base=base, deltas=deltas)
