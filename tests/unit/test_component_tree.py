"""Tests for the component tree model and its validation."""

from __future__ import annotations

import pytest

from eternal_export.core.errors import ValidationError
from eternal_export.core.ir import (
    AccessibilitySpec,
    Binding,
    BindingSlot,
    ComponentNode,
    ComponentTree,
    NodeBindings,
    NodeKind,
    ResponsiveStyles,
)
from eternal_export.core.validator import MAX_TREE_DEPTH, template_fields, validate

# =============================================================================
# Tree Model
# =============================================================================


class TestComponentNode:
    """Tests for ComponentNode."""

    def test_defaults(self) -> None:
        """Test a bare node has empty props, styles and bindings."""
        node = ComponentNode(id="root", kind="container")
        assert node.props == {}
        assert node.children == ()
        assert node.styles.is_empty
        assert node.accessibility.is_empty
        assert node.bindings.present() == []

    def test_text_prop(self) -> None:
        """Test text content comes from the text prop."""
        assert ComponentNode(id="h", kind="heading", props={"text": "Hi"}).text == "Hi"
        assert ComponentNode(id="n", kind="container").text is None

    def test_frozen(self) -> None:
        """Test nodes are immutable."""
        from pydantic import ValidationError as PydanticValidationError

        node = ComponentNode(id="root", kind="container")
        with pytest.raises(PydanticValidationError):
            node.kind = "section"  # type: ignore

    def test_utility_tokens_stay_boolean(self) -> None:
        """Test True style values survive validation as booleans."""
        node = ComponentNode(
            id="root", kind="container", styles=ResponsiveStyles(mobile={"flex": True, "padding": 4})
        )
        assert node.styles.mobile == {"flex": True, "padding": 4}
        assert node.styles.mobile["flex"] is True


class TestNodeBindings:
    """Tests for explicit optional binding slots."""

    def test_unbound_slots_are_none(self) -> None:
        """Test unbound slots are explicitly None."""
        bindings = NodeBindings(on_edit=Binding())
        assert bindings.get(BindingSlot.ON_EDIT) is not None
        assert bindings.get(BindingSlot.ON_DELETE) is None

    def test_default_handler_names(self) -> None:
        """Test handlers default to the slot's camelCase name."""
        bindings = NodeBindings(on_edit=Binding(), on_click=Binding(handler="save"))
        assert bindings.handler_for(BindingSlot.ON_EDIT) == "onEdit"
        assert bindings.handler_for(BindingSlot.ON_CLICK) == "save"
        assert bindings.handler_for(BindingSlot.ON_DELETE) is None

    def test_camel_case_aliases(self) -> None:
        """Test bindings accept the onEdit/onDelete spelling."""
        bindings = NodeBindings.model_validate({"onDelete": {}})
        assert [slot for slot, _ in bindings.present()] == [BindingSlot.ON_DELETE]

    def test_slot_properties(self) -> None:
        """Test affordance and DOM event classification."""
        assert BindingSlot.ON_EDIT.is_affordance
        assert not BindingSlot.ON_CLICK.is_affordance
        assert BindingSlot.ON_SUBMIT.dom_event == "submit"


class TestComponentTree:
    """Tests for ComponentTree construction."""

    def test_iter_nodes_is_preorder(self, profile_card: ComponentTree) -> None:
        """Test traversal visits parents before children, in order."""
        ids = [n.id for n in profile_card.iter_nodes()]
        assert ids == ["profile-card", "title", "avatar", "edit-button"]

    def test_get(self, profile_card: ComponentTree) -> None:
        """Test lookup by id."""
        assert profile_card.get("avatar").kind == NodeKind.IMAGE
        assert profile_card.get("missing") is None

    def test_from_dict(self) -> None:
        """Test building from nested mappings."""
        tree = ComponentTree.from_dict(
            {
                "id": "root",
                "kind": "section",
                "children": [{"id": "p", "kind": "paragraph", "props": {"text": "x"}}],
            }
        )
        assert tree.component_id == "root"
        assert tree.root.children[0].text == "x"

    def test_from_dict_accepts_dumped_tree(self, profile_card: ComponentTree) -> None:
        """Test a dumped tree reads back to an equal tree."""
        assert ComponentTree.from_dict(profile_card.model_dump()) == profile_card
        assert ComponentTree.from_dict(profile_card.root.model_dump()) == profile_card

    def test_snapshot_is_detached(self) -> None:
        """Test snapshots do not share nodes with the source graph."""
        child = ComponentNode(id="c", kind="text", props={"text": "a"})
        root = ComponentNode(id="r", kind="container", children=(child,))
        tree = ComponentTree.snapshot(root)
        assert tree.root == root
        assert tree.root.children[0] is not child

    def test_from_arena(self) -> None:
        """Test building from an arena of nodes indexed by id."""
        tree = ComponentTree.from_arena(
            {
                "root": {"kind": "container", "children": ["a", "b"]},
                "a": {"kind": "heading", "props": {"text": "A"}},
                "b": {"kind": "paragraph", "props": {"text": "B"}},
            },
            "root",
        )
        assert [n.id for n in tree.iter_nodes()] == ["root", "a", "b"]

    def test_from_arena_rejects_cycle(self) -> None:
        """Test arena cycles are reported."""
        with pytest.raises(ValidationError) as exc_info:
            ComponentTree.from_arena(
                {
                    "root": {"kind": "container", "children": ["a"]},
                    "a": {"kind": "container", "children": ["root"]},
                },
                "root",
            )
        assert "Cycle detected" in exc_info.value.message

    def test_from_arena_rejects_shared_child(self) -> None:
        """Test a node listed under two parents is reported."""
        with pytest.raises(ValidationError) as exc_info:
            ComponentTree.from_arena(
                {
                    "root": {"kind": "container", "children": ["a", "b"]},
                    "a": {"kind": "container", "children": ["c"]},
                    "b": {"kind": "container", "children": ["c"]},
                    "c": {"kind": "text"},
                },
                "root",
            )
        assert "more than one parent" in exc_info.value.message

    def test_from_arena_rejects_unknown_child(self) -> None:
        """Test dangling child ids are reported."""
        with pytest.raises(ValidationError):
            ComponentTree.from_arena({"root": {"kind": "container", "children": ["ghost"]}}, "root")

    def test_from_arena_missing_root(self) -> None:
        """Test a missing root id is reported."""
        with pytest.raises(ValidationError):
            ComponentTree.from_arena({}, "root")


# =============================================================================
# Validation
# =============================================================================


class TestValidate:
    """Tests for structural validation."""

    def test_valid_tree(self, profile_card: ComponentTree) -> None:
        """Test a well-formed tree passes."""
        validate(profile_card)

    def test_accepts_bare_node(self) -> None:
        """Test a root node can be validated directly."""
        validate(ComponentNode(id="root", kind="container"))

    def test_duplicate_ids(self) -> None:
        """Test duplicate ids are rejected."""
        root = ComponentNode(
            id="root",
            kind="container",
            children=(ComponentNode(id="x", kind="text"), ComponentNode(id="x", kind="text")),
        )
        with pytest.raises(ValidationError) as exc_info:
            validate(root)
        assert "Duplicate node id 'x'" in exc_info.value.problems

    def test_collects_every_problem(self) -> None:
        """Test all problems are listed, not just the first."""
        root = ComponentNode(
            id="root",
            kind="",
            children=(ComponentNode(id="root", kind="text"),),
        )
        with pytest.raises(ValidationError) as exc_info:
            validate(root)
        assert len(exc_info.value.problems) == 2

    def test_depth_limit(self) -> None:
        """Test trees nested beyond the limit are rejected."""
        node = ComponentNode(id="leaf", kind="text")
        for i in range(MAX_TREE_DEPTH + 1):
            node = ComponentNode(id=f"n{i}", kind="container", children=(node,))
        with pytest.raises(ValidationError) as exc_info:
            validate(node)
        assert "maximum depth" in exc_info.value.message

    def test_invalid_handler(self) -> None:
        """Test handlers must be JavaScript identifiers."""
        node = ComponentNode(
            id="b", kind="button", bindings=NodeBindings(on_click=Binding(handler="on-click"))
        )
        with pytest.raises(ValidationError, match="invalid handler"):
            validate(node)

    def test_reserved_handler(self) -> None:
        """Test reserved words are not usable as handlers."""
        node = ComponentNode(id="b", kind="button", bindings=NodeBindings(on_click=Binding(handler="delete")))
        with pytest.raises(ValidationError):
            validate(node)

    def test_label_on_event_slot(self) -> None:
        """Test labels are only accepted on affordance slots."""
        node = ComponentNode(id="b", kind="button", bindings=NodeBindings(on_click=Binding(label="Go")))
        with pytest.raises(ValidationError, match="labelled action"):
            validate(node)

    def test_label_template_missing_prop(self) -> None:
        """Test label templates must reference existing props."""
        node = ComponentNode(
            id="img",
            kind="image",
            accessibility=AccessibilitySpec(labels={"alt": "Photo of {name}"}),
        )
        with pytest.raises(ValidationError, match="missing prop 'name'"):
            validate(node)

    def test_malformed_label_template(self) -> None:
        """Test unbalanced braces are rejected."""
        node = ComponentNode(
            id="img",
            kind="image",
            props={"name": "x"},
            accessibility=AccessibilitySpec(labels={"alt": "Photo of {name"}),
        )
        with pytest.raises(ValidationError, match="malformed"):
            validate(node)

    def test_unsafe_style_value(self) -> None:
        """Test style values that would break a rule block are rejected."""
        node = ComponentNode(
            id="x", kind="container", styles=ResponsiveStyles(mobile={"color": "red; } body {"})
        )
        with pytest.raises(ValidationError, match="unsafe value"):
            validate(node)

    def test_invalid_utility_token(self) -> None:
        """Test tokens containing quotes or whitespace are rejected."""
        node = ComponentNode(id="x", kind="container", styles=ResponsiveStyles(tablet={'a"b': True}))
        with pytest.raises(ValidationError, match="invalid utility class"):
            validate(node)

    def test_void_kind_with_children(self) -> None:
        """Test images cannot contain children."""
        node = ComponentNode(
            id="img", kind="image", children=(ComponentNode(id="t", kind="text"),)
        )
        with pytest.raises(ValidationError, match="cannot have children"):
            validate(node)

    @pytest.mark.parametrize("kind", ["image", "input"])
    def test_void_kind_with_affordance(self, kind: str) -> None:
        """Test void elements cannot carry edit or delete actions."""
        node = ComponentNode(id="photo", kind=kind, bindings=NodeBindings(on_edit=Binding(label="Replace photo")))
        with pytest.raises(ValidationError, match="cannot render the on_edit action"):
            validate(node)

    def test_void_kind_with_event(self) -> None:
        """Test element-level events stay allowed on void elements."""
        validate(ComponentNode(id="field", kind="input", bindings=NodeBindings(on_change=Binding())))

    def test_unknown_kind_is_valid(self) -> None:
        """Test unknown kinds are left to the emitters."""
        validate(ComponentNode(id="x", kind="carousel"))


class TestTemplateFields:
    """Tests for label template parsing."""

    def test_fields_in_order(self) -> None:
        """Test referenced props are returned in order."""
        assert template_fields("{first} {last}, aged {age}") == ["first", "last", "age"]

    def test_escaped_braces(self) -> None:
        """Test doubled braces are literal text."""
        assert template_fields("{{literal}} {name}") == ["name"]

    def test_format_spec_rejected(self) -> None:
        """Test format specs are not supported."""
        with pytest.raises(ValueError):
            template_fields("{price:.2f}")
