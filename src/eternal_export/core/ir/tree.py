"""
Component tree types.

The tree handed to the exporter is an immutable snapshot of what the
editor built: typed nodes with props, responsive styles, accessibility
metadata and optional event bindings.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ValidationError
from .styles import ResponsiveStyles

PropValue = str | int | float | bool


class NodeKind(str, Enum):
    """
    Semantic roles the emitters know how to render.

    Nodes may carry any ``kind`` string; kinds outside this set are
    exported as generic passthrough elements with a warning.
    """

    CONTAINER = "container"
    SECTION = "section"
    HERO = "hero"
    HEADER = "header"
    FOOTER = "footer"
    MAIN = "main"
    NAV = "nav"
    ARTICLE = "article"
    CARD = "card"
    HEADING = "heading"
    TEXT = "text"
    PARAGRAPH = "paragraph"
    BUTTON = "button"
    LINK = "link"
    IMAGE = "image"
    INPUT = "input"
    FORM = "form"
    LIST = "list"
    LIST_ITEM = "list-item"

    @classmethod
    def is_known(cls, kind: str) -> bool:
        return kind in cls._value2member_map_


class BindingSlot(str, Enum):
    """Named binding slots a node can expose."""

    ON_CLICK = "on_click"
    ON_CHANGE = "on_change"
    ON_SUBMIT = "on_submit"
    ON_EDIT = "on_edit"
    ON_DELETE = "on_delete"

    @property
    def default_handler(self) -> str:
        """Conventional handler/prop name, e.g. ``onEdit``."""
        head, *rest = self.value.split("_")
        return head + "".join(part.capitalize() for part in rest)

    @property
    def is_affordance(self) -> bool:
        """Affordance slots render their own action element when bound."""
        return self in AFFORDANCE_LABELS

    @property
    def dom_event(self) -> str:
        """DOM event name for element-level slots (``click`` for on_click)."""
        return self.value.split("_", 1)[1]


# Default visible label of the action element rendered for each affordance slot
AFFORDANCE_LABELS: dict[BindingSlot, str] = {
    BindingSlot.ON_EDIT: "Edit",
    BindingSlot.ON_DELETE: "Delete",
}


class Binding(BaseModel):
    """
    One bound event hook.

    Attributes:
        handler: Name of the component prop that receives the callback
            (defaults to the slot's conventional name, e.g. ``onDelete``)
        label: Visible label of the action element (affordance slots only)
    """

    handler: str | None = None
    label: str | None = None

    model_config = ConfigDict(frozen=True)


class NodeBindings(BaseModel):
    """
    Optional bindings of a node, one explicit field per slot.

    A slot left as ``None`` is intentionally unbound: the corresponding
    affordance or event handler is not emitted at all.
    """

    on_click: Binding | None = Field(default=None, alias="onClick")
    on_change: Binding | None = Field(default=None, alias="onChange")
    on_submit: Binding | None = Field(default=None, alias="onSubmit")
    on_edit: Binding | None = Field(default=None, alias="onEdit")
    on_delete: Binding | None = Field(default=None, alias="onDelete")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def get(self, slot: BindingSlot) -> Binding | None:
        return getattr(self, slot.value)

    def present(self) -> list[tuple[BindingSlot, Binding]]:
        """Bound slots in declaration order."""
        return [(slot, b) for slot in BindingSlot if (b := self.get(slot)) is not None]

    def handler_for(self, slot: BindingSlot) -> str | None:
        """Resolved handler name for a slot, or None when unbound."""
        binding = self.get(slot)
        if binding is None:
            return None
        return binding.handler or slot.default_handler


class AccessibilitySpec(BaseModel):
    """
    Accessibility metadata for a node.

    Attributes:
        attributes: ARIA/role attributes with literal values
            (e.g. ``{"role": "region", "aria-live": "polite"}``)
        labels: Attribute name -> label template; ``{prop}`` placeholders
            are filled from the node's props (e.g. ``{"alt": "Photo of {name}"}``)
    """

    attributes: dict[str, PropValue] = Field(default_factory=dict)
    labels: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def keys(self) -> list[str]:
        """Every attribute name this spec contributes."""
        return list(self.attributes) + [k for k in self.labels if k not in self.attributes]

    @property
    def is_empty(self) -> bool:
        return not self.attributes and not self.labels


class ComponentNode(BaseModel):
    """
    A typed UI element.

    Attributes:
        id: Unique identifier within the tree
        kind: Semantic role (see NodeKind)
        props: Kind-specific values (text, src, href, ...)
        children: Ordered child nodes, exclusively owned
        styles: Per-breakpoint style maps
        accessibility: ARIA/role attributes and label templates
        bindings: Optional event bindings
    """

    id: str
    kind: str
    props: dict[str, PropValue] = Field(default_factory=dict)
    children: tuple[ComponentNode, ...] = ()
    styles: ResponsiveStyles = Field(default_factory=ResponsiveStyles)
    accessibility: AccessibilitySpec = Field(default_factory=AccessibilitySpec)
    bindings: NodeBindings = Field(default_factory=NodeBindings)

    model_config = ConfigDict(frozen=True)

    @property
    def text(self) -> str | None:
        """Text content carried in the ``text`` prop, if any."""
        value = self.props.get("text")
        return None if value is None else str(value)


ComponentNode.model_rebuild()


class ComponentTree(BaseModel):
    """
    Immutable snapshot of a component tree rooted at one node.

    Build it with ``snapshot`` / ``from_dict`` / ``from_arena`` so the
    exporter never shares objects with the live editor state.
    """

    root: ComponentNode

    model_config = ConfigDict(frozen=True)

    @property
    def component_id(self) -> str:
        return self.root.id

    def iter_nodes(self) -> Iterator[ComponentNode]:
        """Yield every node depth-first, pre-order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def get(self, node_id: str) -> ComponentNode | None:
        for node in self.iter_nodes():
            if node.id == node_id:
                return node
        return None

    @classmethod
    def snapshot(cls, root: ComponentNode) -> ComponentTree:
        """Deep-copy a node graph into a detached tree."""
        return cls(root=root.model_copy(deep=True))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ComponentTree:
        """
        Build from nested JSON-like data.

        Accepts either a root node mapping (``{"id", "kind", "children": [...]}``)
        or a dumped tree (``{"root": {...}}``).
        """
        if "root" in data and "id" not in data:
            return cls.model_validate(data)
        return cls(root=ComponentNode.model_validate(data))

    @classmethod
    def from_arena(cls, nodes: Mapping[str, Mapping[str, Any]], root_id: str) -> ComponentTree:
        """
        Build from an arena of nodes indexed by id.

        Each entry holds the node fields with ``children`` given as a list of
        child ids. Cycles, shared children and dangling ids are rejected.

        Raises:
            ValidationError: If the arena does not describe a tree
        """
        if root_id not in nodes:
            raise ValidationError(f"Root node '{root_id}' not found in arena")

        problems: list[str] = []
        seen: set[str] = set()

        def build(node_id: str, path: tuple[str, ...]) -> ComponentNode | None:
            if node_id in path:
                cycle = " -> ".join((*path, node_id))
                problems.append(f"Cycle detected: {cycle}")
                return None
            if node_id in seen:
                problems.append(f"Node '{node_id}' has more than one parent")
                return None
            seen.add(node_id)

            entry = dict(nodes[node_id])
            children: list[ComponentNode] = []
            for child_id in entry.pop("children", []):
                if child_id not in nodes:
                    problems.append(f"Node '{node_id}' references unknown child '{child_id}'")
                    continue
                child = build(child_id, (*path, node_id))
                if child is not None:
                    children.append(child)
            entry.setdefault("id", node_id)
            return ComponentNode.model_validate({**entry, "children": children})

        root = build(root_id, ())
        if problems or root is None:
            raise ValidationError(problems[0], problems=problems)
        return cls(root=root)
