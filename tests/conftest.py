"""Shared pytest fixtures for export engine tests."""

import pytest

from eternal_export.core.ir import (
    AccessibilitySpec,
    Binding,
    ComponentNode,
    ComponentTree,
    NodeBindings,
    ResponsiveStyles,
)


@pytest.fixture
def profile_card() -> ComponentTree:
    """Container with a heading, an avatar image and an edit action."""
    return ComponentTree(
        root=ComponentNode(
            id="profile-card",
            kind="container",
            styles=ResponsiveStyles(
                mobile={"flex": True, "flex-col": True, "padding": 16},
                desktop={"flex-row": True, "padding": 32},
            ),
            accessibility=AccessibilitySpec(attributes={"role": "region", "aria-label": "Profile"}),
            bindings=NodeBindings(on_edit=Binding()),
            children=(
                ComponentNode(
                    id="title",
                    kind="heading",
                    props={"text": "Profile"},
                    styles=ResponsiveStyles(mobile={"text-xl": True}),
                ),
                ComponentNode(
                    id="avatar",
                    kind="image",
                    props={"src": "/avatars/ada.png", "name": "Ada Lovelace"},
                    styles=ResponsiveStyles(mobile={"borderRadius": "50%", "width": 64}),
                    accessibility=AccessibilitySpec(labels={"alt": "Photo of {name}"}),
                ),
                ComponentNode(
                    id="edit-button",
                    kind="button",
                    props={"text": "Change photo"},
                    bindings=NodeBindings(on_click=Binding(handler="onEdit")),
                ),
            ),
        )
    )


@pytest.fixture
def styled_tree() -> ComponentTree:
    """Tree whose nodes share and differ in CSS declarations."""
    card_style = {"padding": 16, "borderRadius": 8}
    return ComponentTree(
        root=ComponentNode(
            id="list",
            kind="list",
            styles=ResponsiveStyles(
                mobile={"margin": 0},
                tablet={"margin": 8},
                desktop={"margin": 16},
            ),
            children=(
                ComponentNode(
                    id="first",
                    kind="list-item",
                    props={"text": "One"},
                    styles=ResponsiveStyles(mobile=card_style),
                ),
                ComponentNode(
                    id="second",
                    kind="list-item",
                    props={"text": "Two"},
                    styles=ResponsiveStyles(mobile=dict(card_style)),
                ),
                ComponentNode(
                    id="third",
                    kind="list-item",
                    props={"text": "Three"},
                    styles=ResponsiveStyles(mobile={"padding": 4}),
                ),
            ),
        )
    )
