"""
Accessibility injection.

Adds a node's ARIA/role attributes and label attributes to the attribute
list an emitter renders. Label templates (``"Photo of {name}"``) are filled
from the node's props, or bound to component props when live labels are
enabled.
"""

from __future__ import annotations

import logging
from string import Formatter

from eternal_export.core.ir import ComponentNode, NodeKind, PropValue
from eternal_export.core.strings import safe_identifier

from .config import ExportConfig
from .emitters.base import Attribute, TemplatePart

logger = logging.getLogger(__name__)

# Attributes every node of a kind gets unless its own metadata sets them
KIND_DEFAULTS: dict[str, dict[str, PropValue]] = {
    NodeKind.IMAGE.value: {"alt": ""},
    NodeKind.NAV.value: {"aria-label": "Main navigation"},
}


class AccessibilityInjector:
    """
    Merge accessibility metadata into a node's attributes.

    Accessibility attributes replace prop-derived attributes of the same
    name. The input list is never modified.
    """

    def __init__(self, config: ExportConfig):
        self.config = config

    def inject(self, attributes: list[Attribute], node: ComponentNode) -> list[Attribute]:
        """
        Return a new attribute list including the node's accessibility attributes.

        Args:
            attributes: Attributes derived from the node's props
            node: Node whose accessibility metadata is applied

        Returns:
            New list; ``attributes`` is left untouched
        """
        spec = node.accessibility
        added: list[Attribute] = [
            Attribute(name=name, value=value, accessibility=True) for name, value in spec.attributes.items()
        ]
        for name, template in spec.labels.items():
            if name in spec.attributes:
                continue
            added.append(self.label_attribute(name, template, node))

        names = {a.name for a in added}
        for name, value in KIND_DEFAULTS.get(node.kind, {}).items():
            if name not in names:
                added.append(Attribute(name=name, value=value, accessibility=True))
                names.add(name)

        if added:
            logger.debug(f"Injected {len(added)} accessibility attribute(s) on '{node.id}'")
        return [a for a in attributes if a.name not in names] + added

    def label_attribute(self, name: str, template: str, node: ComponentNode) -> Attribute:
        """Literal or bound attribute for one label template."""
        if not self.config.live_labels:
            return Attribute(name=name, value=fill_template(template, node), accessibility=True)

        parts: list[TemplatePart] = []
        defaults: list[tuple[str, PropValue]] = []
        for literal, field, _spec, _conversion in Formatter().parse(template):
            if literal:
                parts.append(TemplatePart(text=literal))
            if field is None:
                continue
            prop = live_prop_name(node.id, field)
            parts.append(TemplatePart(text=prop, is_prop=True))
            defaults.append((prop, node.props.get(field, "")))
        return Attribute(
            name=name,
            template=tuple(parts),
            defaults=tuple(defaults),
            accessibility=True,
        )


def fill_template(template: str, node: ComponentNode) -> str:
    """
    Substitute ``{prop}`` placeholders with the node's prop values.

    Examples:
        >>> node = ComponentNode(id="avatar", kind="image", props={"name": "Ada"})
        >>> fill_template("Photo of {name}", node)
        'Photo of Ada'
    """
    out = []
    for literal, field, _spec, _conversion in Formatter().parse(template):
        out.append(literal)
        if field is not None:
            out.append(prop_text(node.props.get(field, "")))
    return "".join(out)


def prop_text(value: PropValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def live_prop_name(node_id: str, prop: str) -> str:
    """Component prop that carries a node's prop value into a bound label."""
    return safe_identifier(f"{node_id}-{prop}")
