"""
Base classes for framework emitters.

An emitter renders one node at a time; the pipeline drives the traversal
and hands each call the already-emitted child fragments, the node's
styling artifacts and its (possibly accessibility-injected) attributes.
Per-component facts discovered along the way (bound handlers, live label
props, directives in use) accumulate on a ComponentScope that ``assemble``
turns into the final component file.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from textwrap import indent
from typing import TYPE_CHECKING

from eternal_export.core.errors import UnknownNodeKindError
from eternal_export.core.ir import AFFORDANCE_LABELS, BindingSlot, ComponentNode, NodeKind, PropValue
from eternal_export.core.strings import to_kebab_case, to_pascal_case

from ..styling.base import RefMode, StyleArtifacts, StyleBundle

if TYPE_CHECKING:
    from eternal_export.export.config import ExportConfig, TargetSurface

# Semantic HTML tag per node kind
KIND_TAGS: dict[str, str] = {
    NodeKind.CONTAINER: "div",
    NodeKind.SECTION: "section",
    NodeKind.HERO: "section",
    NodeKind.HEADER: "header",
    NodeKind.FOOTER: "footer",
    NodeKind.MAIN: "main",
    NodeKind.NAV: "nav",
    NodeKind.ARTICLE: "article",
    NodeKind.CARD: "div",
    NodeKind.HEADING: "h2",
    NodeKind.TEXT: "span",
    NodeKind.PARAGRAPH: "p",
    NodeKind.BUTTON: "button",
    NodeKind.LINK: "a",
    NodeKind.IMAGE: "img",
    NodeKind.INPUT: "input",
    NodeKind.FORM: "form",
    NodeKind.LIST: "ul",
    NodeKind.LIST_ITEM: "li",
}

# Props rendered as attributes, per kind (all others are not markup attributes)
KIND_ATTRIBUTES: dict[str, tuple[str, ...]] = {
    NodeKind.IMAGE: ("src", "width", "height", "loading"),
    NodeKind.LINK: ("href", "target", "rel"),
    NodeKind.INPUT: ("type", "name", "placeholder", "value", "required", "disabled"),
    NodeKind.BUTTON: ("type", "disabled"),
    NodeKind.FORM: ("action", "method"),
}

GLOBAL_ATTRIBUTES = ("title",)

VOID_TAGS = frozenset({"img", "input", "br", "hr"})

PASSTHROUGH_TAG = "div"

# Inline an element's body when it is a single short line
_INLINE_LIMIT = 80


@dataclass(frozen=True)
class TemplatePart:
    """Literal text or a reference to a component prop inside a live label."""

    text: str
    is_prop: bool = False


@dataclass(frozen=True)
class Attribute:
    """
    An attribute to emit on a node's element.

    Exactly one of ``value`` (literal) and ``template`` (live binding) is set.

    Attributes:
        name: HTML attribute name
        value: Literal value
        template: Text and prop parts of a bound label
        defaults: Default values of the props a bound label references
        accessibility: Added by the accessibility injector
    """

    name: str
    value: PropValue | None = None
    template: tuple[TemplatePart, ...] | None = None
    defaults: tuple[tuple[str, PropValue], ...] = ()
    accessibility: bool = False

    @property
    def is_bound(self) -> bool:
        return self.template is not None


@dataclass
class ComponentScope:
    """
    Facts collected while emitting one component.

    Attributes:
        name: Component name derived from the root node id
        handlers: Bound handler prop names, in first-use order
        value_props: Live label props and their default values
        features: Framework helpers the template needs (e.g. ``NgIf``)
    """

    name: str
    handlers: dict[str, None] = field(default_factory=dict)
    value_props: dict[str, PropValue] = field(default_factory=dict)
    features: set[str] = field(default_factory=set)

    def add_handler(self, handler: str) -> None:
        self.handlers.setdefault(handler, None)

    @property
    def has_props(self) -> bool:
        return bool(self.handlers or self.value_props)


@dataclass
class EmitContext:
    """
    Everything the emitter needs for one node.

    Attributes:
        scope: Component-wide accumulator
        artifacts: Styling output for the node
        ref_mode: How allocated classes are referenced
        attributes: Attributes to render, in order
        children: Emitted child fragments, in order
        is_root: Whether the node is the component root
    """

    scope: ComponentScope
    artifacts: StyleArtifacts = field(default_factory=StyleArtifacts)
    ref_mode: RefMode = RefMode.NONE
    attributes: list[Attribute] = field(default_factory=list)
    children: list[str] = field(default_factory=list)
    is_root: bool = False


@dataclass
class AssembleContext:
    """Inputs for turning the root fragment into a component file."""

    scope: ComponentScope
    body: str
    bundle: StyleBundle
    ref_mode: RefMode
    stylesheet_path: str | None = None


class Emitter(ABC):
    """
    Base class for target-surface emitters.

    Subclasses supply the syntax: attribute/class/text rendering, the
    conditional-rendering idiom for affordances, and component assembly.
    """

    surface: TargetSurface
    requires_typed: bool = False
    dependencies: dict[str, str] = {}
    dev_dependencies: dict[str, str] = {}
    typed_dev_dependencies: dict[str, str] = {}
    test_dev_dependencies: dict[str, str] = {}
    # (import statement, plugin call) for vite.config; None when not built with vite
    vite_plugin: tuple[str, str] | None = None
    # tsconfig compilerOptions overrides; None removes a base option
    tsconfig_options: dict[str, object] = {}

    def __init__(self, config: ExportConfig):
        self.config = config

    # -------------------------------------------------------------------------
    # Naming and paths
    # -------------------------------------------------------------------------

    def component_name(self, root_id: str) -> str:
        """PascalCase component name, stable for a given root id."""
        name = to_pascal_case(root_id) or "Generated"
        if name[0].isdigit():
            name = "Component" + name
        return name

    def file_stem(self, name: str) -> str:
        return name

    @abstractmethod
    def component_path(self, name: str) -> str:
        """Path of the component file."""
        pass

    def stylesheet_path(self, name: str, extension: str) -> str:
        """Path of a companion stylesheet next to the component."""
        directory = self.component_path(name).rsplit("/", 1)[0]
        return f"{directory}/{self.file_stem(name)}.module.{extension}"

    @abstractmethod
    def test_path(self, name: str) -> str:
        """Path of the generated smoke test."""
        pass

    def test_import(self, name: str) -> str:
        """Module specifier the smoke test uses to import the component."""
        return "./" + file_name(self.component_path(name))

    def test_subject(self, name: str) -> str:
        """Exported symbol the smoke test renders."""
        return name

    def selector(self, name: str) -> str:
        return to_kebab_case(name)

    # -------------------------------------------------------------------------
    # Node rendering
    # -------------------------------------------------------------------------

    def tag_for(self, node: ComponentNode) -> str:
        """
        Semantic tag for a node.

        Raises:
            UnknownNodeKindError: If the kind is not one this emitter renders
        """
        if node.kind not in KIND_TAGS:
            raise UnknownNodeKindError(f"Unknown node kind '{node.kind}'", node.id)
        if node.kind == NodeKind.HEADING:
            level = node.props.get("level", 2)
            if isinstance(level, int) and not isinstance(level, bool) and 1 <= level <= 6:
                return f"h{level}"
        if node.kind == NodeKind.LIST and node.props.get("ordered") is True:
            return "ol"
        return KIND_TAGS[node.kind]

    def node_attributes(self, node: ComponentNode) -> list[Attribute]:
        """Attributes carried by the node's own props."""
        names = KIND_ATTRIBUTES.get(node.kind, ()) + GLOBAL_ATTRIBUTES
        attributes = [Attribute(name=n, value=node.props[n]) for n in names if n in node.props]
        if node.kind == NodeKind.BUTTON and "type" not in node.props:
            attributes.insert(0, Attribute(name="type", value="button"))
        return attributes

    def emit(self, node: ComponentNode, config: ExportConfig, context: EmitContext) -> str:
        """
        Emit the source fragment for one node.

        Raises:
            UnknownNodeKindError: For kinds outside the known set
        """
        return self.render_element(self.tag_for(node), node, context)

    def emit_passthrough(self, node: ComponentNode, config: ExportConfig, context: EmitContext) -> str:
        """Generic element for a node whose kind is not recognised."""
        context.attributes = [Attribute(name="data-kind", value=node.kind), *context.attributes]
        return self.render_element(PASSTHROUGH_TAG, node, context)

    def render_element(self, tag: str, node: ComponentNode, context: EmitContext) -> str:
        attrs: list[str] = []
        class_attr = self.render_class(context.artifacts, context)
        if class_attr:
            attrs.append(class_attr)
        for attribute in context.attributes:
            for prop, default in attribute.defaults:
                context.scope.value_props.setdefault(prop, default)
            rendered = self.render_attribute(attribute, context)
            if rendered:
                attrs.append(rendered)
        for slot, _binding in node.bindings.present():
            if slot.is_affordance:
                continue
            handler = node.bindings.handler_for(slot)
            context.scope.add_handler(handler)
            attrs.append(self.render_event(slot, handler, context))

        opening = f"<{tag}" + (" " + " ".join(attrs) if attrs else "")
        if tag in VOID_TAGS:
            return opening + " />"

        body: list[str] = []
        if node.text is not None:
            body.append(self.render_text(node.text))
        body.extend(context.children)
        for slot, binding in node.bindings.present():
            if not slot.is_affordance:
                continue
            handler = node.bindings.handler_for(slot)
            context.scope.add_handler(handler)
            label = binding.label or AFFORDANCE_LABELS[slot]
            body.append(self.render_affordance(slot, handler, label, context))

        if not body:
            return f"{opening}></{tag}>"
        if len(body) == 1 and "\n" not in body[0] and len(opening) + len(body[0]) < _INLINE_LIMIT:
            return f"{opening}>{body[0]}</{tag}>"
        inner = "\n".join(indent(part, "  ") for part in body)
        return f"{opening}>\n{inner}\n</{tag}>"

    @abstractmethod
    def render_class(self, artifacts: StyleArtifacts, context: EmitContext) -> str | None:
        """Class attribute for the node's styling artifacts."""
        pass

    @abstractmethod
    def render_attribute(self, attribute: Attribute, context: EmitContext) -> str | None:
        """One attribute in target syntax, or None to omit it."""
        pass

    @abstractmethod
    def render_text(self, text: str) -> str:
        """Escaped text content."""
        pass

    @abstractmethod
    def render_event(self, slot: BindingSlot, handler: str, context: EmitContext) -> str:
        """Event handler attribute for an element-level binding."""
        pass

    @abstractmethod
    def render_affordance(self, slot: BindingSlot, handler: str, label: str, context: EmitContext) -> str:
        """Action element rendered only when the handler is provided."""
        pass

    # -------------------------------------------------------------------------
    # Assembly
    # -------------------------------------------------------------------------

    @abstractmethod
    def assemble(self, context: AssembleContext) -> str:
        """Wrap the root fragment into a complete component file."""
        pass

    def root_tag(self, node: ComponentNode) -> str:
        """Tag of the element rendered for the root node (used by smoke tests)."""
        try:
            return self.tag_for(node)
        except UnknownNodeKindError:
            return PASSTHROUGH_TAG


def literal_type(value: PropValue) -> str:
    """TypeScript type of a literal prop value."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    return "string"


def bool_attribute(attribute: Attribute) -> str | None:
    """
    Render boolean attributes the HTML way.

    ARIA states are strings (``aria-hidden="true"``); other booleans are
    present (``disabled``) or omitted.
    """
    if attribute.name.startswith("aria-"):
        return f'{attribute.name}="{"true" if attribute.value else "false"}"'
    return attribute.name if attribute.value else None


def component_props(scope: ComponentScope) -> list[tuple[str, str, PropValue | None]]:
    """(name, TypeScript type, default) for every prop the component exposes."""
    props: list[tuple[str, str, PropValue | None]] = [
        (name, literal_type(value), value) for name, value in scope.value_props.items()
    ]
    props.extend((handler, "() => void", None) for handler in scope.handlers)
    return props


def file_name(path: str | None) -> str:
    """Last path segment, for relative imports of sibling files."""
    return "" if path is None else path.rsplit("/", 1)[-1]
