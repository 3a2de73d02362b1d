"""
Structural validation for component trees.

Checks everything the emitters rely on but cannot recover from: unique ids,
a strict tree shape, well-formed bindings, resolvable label templates and
style entries that cannot break the emitted syntax.
"""

from __future__ import annotations

import re
from string import Formatter

from .errors import ValidationError
from .ir import BREAKPOINT_ORDER, ComponentNode, ComponentTree, NodeKind, is_utility_token
from .strings import is_js_identifier

# =============================================================================
# Validation Constants
# =============================================================================

# Deepest nesting the recursive emitters are asked to handle
MAX_TREE_DEPTH = 64

_ATTRIBUTE_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9:_-]*$")
_PROP_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
_CSS_PROPERTY = re.compile(r"^-{0,2}[A-Za-z][A-Za-z0-9-]*$")

# Kinds rendered as void elements
_VOID_KINDS = frozenset({NodeKind.IMAGE.value, NodeKind.INPUT.value})

# Characters that would terminate a declaration or an enclosing template
_FORBIDDEN_CSS_VALUE_CHARS = frozenset("{};<>`\n\r")
_FORBIDDEN_TOKEN_CHARS = frozenset("\"<>{}`\\") | frozenset(" \t\n\r")


def validate(tree: ComponentTree | ComponentNode) -> None:
    """
    Validate a component tree.

    Args:
        tree: Tree snapshot or bare root node

    Raises:
        ValidationError: Listing every problem found
    """
    root = tree.root if isinstance(tree, ComponentTree) else tree
    problems: list[str] = []
    seen_ids: set[str] = set()

    def visit(node: ComponentNode, path: tuple[int, ...], depth: int) -> None:
        if id(node) in path:
            problems.append(f"Cycle detected at node '{node.id}'")
            return
        if depth > MAX_TREE_DEPTH:
            problems.append(f"Node '{node.id}' exceeds maximum depth of {MAX_TREE_DEPTH}")
            return

        if not node.id:
            problems.append("Node with empty id")
        elif node.id in seen_ids:
            problems.append(f"Duplicate node id '{node.id}'")
        seen_ids.add(node.id)

        if not node.kind:
            problems.append(f"Node '{node.id}' has an empty kind")
        elif node.kind in _VOID_KINDS and node.children:
            problems.append(f"Node '{node.id}' of kind '{node.kind}' cannot have children")

        problems.extend(_check_props(node))
        problems.extend(_check_bindings(node))
        problems.extend(_check_accessibility(node))
        problems.extend(_check_styles(node))

        for child in node.children:
            visit(child, (*path, id(node)), depth + 1)

    visit(root, (), 0)

    if problems:
        raise ValidationError(problems[0], problems=problems)


def _check_props(node: ComponentNode) -> list[str]:
    return [
        f"Node '{node.id}' has invalid prop name '{name}'"
        for name in node.props
        if not _PROP_NAME.match(name)
    ]


def _check_bindings(node: ComponentNode) -> list[str]:
    """Every bound slot must resolve to a usable handler identifier."""
    problems = []
    for slot, binding in node.bindings.present():
        handler = node.bindings.handler_for(slot)
        if not handler or not is_js_identifier(handler):
            problems.append(f"Node '{node.id}' binding {slot.value} has invalid handler '{binding.handler}'")
        if binding.label is not None and not binding.label.strip():
            problems.append(f"Node '{node.id}' binding {slot.value} has an empty label")
        if binding.label is not None and not slot.is_affordance:
            problems.append(f"Node '{node.id}' binding {slot.value} does not render a labelled action")
        if slot.is_affordance and node.kind in _VOID_KINDS:
            problems.append(f"Node '{node.id}' of kind '{node.kind}' cannot render the {slot.value} action")
    return problems


def _check_accessibility(node: ComponentNode) -> list[str]:
    problems = []
    for name in node.accessibility.keys():
        if not _ATTRIBUTE_NAME.match(name):
            problems.append(f"Node '{node.id}' has invalid accessibility attribute '{name}'")

    for name, template in node.accessibility.labels.items():
        try:
            fields = template_fields(template)
        except ValueError as e:
            problems.append(f"Node '{node.id}' label '{name}' is malformed: {e}")
            continue
        for field in fields:
            if field not in node.props:
                problems.append(f"Node '{node.id}' label '{name}' references missing prop '{field}'")
    return problems


def _check_styles(node: ComponentNode) -> list[str]:
    problems = []
    for bp in BREAKPOINT_ORDER:
        style = node.styles.get(bp)
        if not style:
            continue
        for key, value in style.items():
            if is_utility_token(value):
                if not key or any(c in _FORBIDDEN_TOKEN_CHARS for c in key):
                    problems.append(f"Node '{node.id}' has invalid utility class '{key}' at {bp.value}")
            elif value is False:
                continue
            elif not _CSS_PROPERTY.match(key):
                problems.append(f"Node '{node.id}' has invalid style property '{key}' at {bp.value}")
            elif isinstance(value, str) and any(c in _FORBIDDEN_CSS_VALUE_CHARS for c in value):
                problems.append(f"Node '{node.id}' style '{key}' has an unsafe value at {bp.value}")
    return problems


def template_fields(template: str) -> list[str]:
    """
    Prop names referenced by a label template, in order of appearance.

    Raises:
        ValueError: On unbalanced braces, format specs or non-identifier fields
    """
    fields: list[str] = []
    for _literal, field, spec, conversion in Formatter().parse(template):
        if field is None:
            continue
        if spec or conversion:
            raise ValueError(f"format options are not supported in '{{{field}}}'")
        if not _PROP_NAME.match(field):
            raise ValueError(f"'{{{field}}}' is not a prop reference")
        fields.append(field)
    return fields
