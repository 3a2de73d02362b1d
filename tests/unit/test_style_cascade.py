"""Tests for breakpoint style resolution."""

from __future__ import annotations

from eternal_export.core.cascade import UNSET, resolve_responsive, resolve_style
from eternal_export.core.ir import Breakpoint, ComponentNode, ResponsiveStyles


def _node(**styles: dict) -> ComponentNode:
    return ComponentNode(id="n", kind="container", styles=ResponsiveStyles(**styles))


class TestResolveStyle:
    """Tests for resolve_style."""

    def test_absent_breakpoint_inherits(self) -> None:
        """Test tablet and desktop inherit mobile when absent."""
        node = _node(mobile={"padding": 8})
        assert resolve_style(node, Breakpoint.TABLET) == {"padding": 8}
        assert resolve_style(node, Breakpoint.DESKTOP) == {"padding": 8}

    def test_override_merges(self) -> None:
        """Test a present map overrides on top of the inherited one."""
        node = _node(mobile={"padding": 8, "color": "red"}, tablet={"padding": 16})
        assert resolve_style(node, Breakpoint.TABLET) == {"padding": 16, "color": "red"}
        assert resolve_style(node, Breakpoint.DESKTOP) == {"padding": 16, "color": "red"}

    def test_empty_map_resets(self) -> None:
        """Test an explicit empty map clears inherited styling."""
        node = _node(mobile={"padding": 8}, tablet={}, desktop={"margin": 4})
        assert resolve_style(node, Breakpoint.TABLET) == {}
        assert resolve_style(node, Breakpoint.DESKTOP) == {"margin": 4}

    def test_non_responsive_uses_desktop_only(self) -> None:
        """Test mobile and tablet are ignored when responsive output is off."""
        node = _node(mobile={"padding": 8}, tablet={"padding": 12}, desktop={"margin": 4})
        for bp in Breakpoint:
            assert resolve_style(node, bp, responsive=False) == {"margin": 4}

    def test_non_responsive_without_desktop(self) -> None:
        """Test a missing desktop map resolves to no styling."""
        node = _node(mobile={"padding": 8})
        assert resolve_style(node, Breakpoint.MOBILE, responsive=False) == {}

    def test_returns_copy(self) -> None:
        """Test the node's own map is never returned."""
        node = _node(mobile={"padding": 8})
        resolved = resolve_style(node, Breakpoint.MOBILE)
        resolved["padding"] = 0
        assert node.styles.mobile == {"padding": 8}


class TestResolveResponsive:
    """Tests for resolve_responsive."""

    def test_base_and_deltas(self) -> None:
        """Test deltas hold only changed declarations."""
        node = _node(mobile={"padding": 8, "flex": True}, desktop={"padding": 16})
        resolved = resolve_responsive(node)
        assert resolved.base == {"padding": 8, "flex": True}
        assert resolved.deltas == {Breakpoint.DESKTOP: {"padding": 16}}

    def test_removed_entries(self) -> None:
        """Test a reset unsets CSS properties and switches tokens off."""
        node = _node(mobile={"padding": 8, "flex": True}, tablet={})
        resolved = resolve_responsive(node)
        assert resolved.deltas == {Breakpoint.TABLET: {"padding": UNSET, "flex": False}}

    def test_disabled_property_is_unset(self) -> None:
        """Test a property set to False at a larger breakpoint is unset."""
        node = _node(mobile={"padding": 8}, desktop={"padding": False})
        assert resolve_responsive(node).deltas == {Breakpoint.DESKTOP: {"padding": UNSET}}

    def test_token_switched_back_on(self) -> None:
        """Test a token removed at tablet and restored at desktop."""
        node = _node(mobile={"p-4": True}, tablet={}, desktop={"p-4": True})
        resolved = resolve_responsive(node)
        assert resolved.deltas == {
            Breakpoint.TABLET: {"p-4": False},
            Breakpoint.DESKTOP: {"p-4": True},
        }

    def test_no_styles(self) -> None:
        """Test an unstyled node resolves to an empty style."""
        assert resolve_responsive(_node()).is_empty

    def test_non_responsive(self) -> None:
        """Test non-responsive resolution has no deltas."""
        node = _node(mobile={"padding": 8}, desktop={"margin": 4})
        resolved = resolve_responsive(node, responsive=False)
        assert resolved.base == {"margin": 4}
        assert resolved.deltas == {}

    def test_cache_key_ignores_order(self) -> None:
        """Test equal styles written in a different order share a key."""
        a = resolve_responsive(_node(mobile={"padding": 8, "margin": 4}))
        b = resolve_responsive(_node(mobile={"margin": 4, "padding": 8}))
        assert a.cache_key() == b.cache_key()
