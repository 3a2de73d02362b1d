"""Tests for the styling adapters and class allocation."""

from __future__ import annotations

import pytest

from eternal_export.core.ir import Breakpoint, ResolvedStyle
from eternal_export.export.config import ExportConfig, StylingSystem
from eternal_export.export.registry import ExportRegistry
from eternal_export.export.styling import (
    ClassAllocator,
    CssInJsAdapter,
    PreprocessedAdapter,
    RefMode,
    ScopedClassesAdapter,
    UtilityClassAdapter,
)
from eternal_export.export.styling.base import css_declarations, css_property_name, css_value
from eternal_export.export.styling.utility import arbitrary_property


@pytest.fixture
def config() -> ExportConfig:
    return ExportConfig()


@pytest.fixture
def card_style() -> ResolvedStyle:
    return ResolvedStyle(
        base={"rounded": True, "padding": 16},
        deltas={Breakpoint.DESKTOP: {"padding": 32}},
    )


# =============================================================================
# CSS helpers
# =============================================================================


class TestCssHelpers:
    """Tests for declaration formatting."""

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("fontSize", "font-size"),
            ("font-size", "font-size"),
            ("WebkitLineClamp", "-webkit-line-clamp"),
            ("--brand-color", "--brand-color"),
        ],
    )
    def test_property_name(self, key: str, expected: str) -> None:
        """Test style keys normalise to CSS property names."""
        assert css_property_name(key) == expected

    def test_numeric_values(self) -> None:
        """Test bare numbers get px unless unitless or zero."""
        assert css_value("padding", 16) == "16px"
        assert css_value("opacity", 0.5) == "0.5"
        assert css_value("margin", 0) == "0"
        assert css_value("width", "50%") == "50%"

    def test_declarations_skip_tokens(self) -> None:
        """Test utility tokens and disabled entries are not declarations."""
        assert css_declarations({"flex": True, "gap": 8, "hidden": False}) == ["gap: 8px;"]


class TestClassAllocator:
    """Tests for deterministic class-name allocation."""

    def test_same_style_same_name(self) -> None:
        """Test identical styles reuse the first allocated name."""
        allocator = ClassAllocator()
        style = ResolvedStyle(base={"padding": 4})
        assert allocator.allocate(style, "first") == "first"
        assert allocator.allocate(ResolvedStyle(base={"padding": 4}), "second") == "first"
        assert len(allocator.allocated) == 1

    def test_collision_suffix(self) -> None:
        """Test distinct styles whose ids normalise alike get numeric suffixes."""
        allocator = ClassAllocator()
        assert allocator.allocate(ResolvedStyle(base={"padding": 4}), "hero-title") == "heroTitle"
        assert allocator.allocate(ResolvedStyle(base={"padding": 8}), "hero_title") == "heroTitle2"
        assert allocator.allocate(ResolvedStyle(base={"padding": 12}), "heroTitle") == "heroTitle3"

    def test_suffix_and_identifier_safety(self) -> None:
        """Test names are valid identifiers with the adapter suffix."""
        allocator = ClassAllocator(suffix="Class")
        assert allocator.allocate(ResolvedStyle(base={"padding": 4}), "1st-card") == "n1stCardClass"


# =============================================================================
# Adapters
# =============================================================================


class TestUtilityClassAdapter:
    """Tests for the utility-class adapter."""

    def test_tokens_and_arbitrary_properties(self, config: ExportConfig, card_style: ResolvedStyle) -> None:
        """Test tokens pass through and declarations become arbitrary properties."""
        adapter = UtilityClassAdapter(config)
        artifacts = adapter.resolve_classes_and_rules(card_style, "card", config)
        assert artifacts.class_attr == "rounded [padding:16px] lg:[padding:32px]"
        assert artifacts.class_ref is None

    def test_tablet_prefix(self, config: ExportConfig) -> None:
        """Test tablet deltas use the md: prefix."""
        adapter = UtilityClassAdapter(config)
        style = ResolvedStyle(base={"flex-col": True}, deltas={Breakpoint.TABLET: {"flex-row": True}})
        assert adapter.resolve_classes_and_rules(style, "n").class_attr == "flex-col md:flex-row"

    @pytest.mark.parametrize(
        "deltas,expected",
        [
            ({Breakpoint.TABLET: {"p-4": False}}, "max-md:p-4"),
            ({Breakpoint.DESKTOP: {"p-4": False}}, "max-lg:p-4"),
            ({Breakpoint.TABLET: {"p-4": False}, Breakpoint.DESKTOP: {"p-4": True}}, "max-md:p-4 lg:p-4"),
        ],
    )
    def test_token_switched_off(self, config: ExportConfig, deltas: dict, expected: str) -> None:
        """Test tokens removed at a larger breakpoint are bounded with max variants."""
        style = ResolvedStyle(base={"p-4": True}, deltas=deltas)
        adapter = UtilityClassAdapter(config)
        assert adapter.resolve_classes_and_rules(style, "n").class_attr == expected

    def test_token_within_tablet_range(self, config: ExportConfig) -> None:
        """Test a token only active at tablet gets both bounds."""
        style = ResolvedStyle(
            base={}, deltas={Breakpoint.TABLET: {"hidden": True}, Breakpoint.DESKTOP: {"hidden": False}}
        )
        adapter = UtilityClassAdapter(config)
        assert adapter.resolve_classes_and_rules(style, "n").class_attr == "md:max-lg:hidden"

    def test_no_extra_output(self, config: ExportConfig, card_style: ResolvedStyle) -> None:
        """Test nothing is produced beyond class strings."""
        adapter = UtilityClassAdapter(config)
        adapter.resolve_classes_and_rules(card_style, "card")
        bundle = adapter.finalize()
        assert bundle.stylesheet is None
        assert bundle.script_block == ""

    def test_arbitrary_property_spaces(self) -> None:
        """Test spaces in values become underscores."""
        assert arbitrary_property("gridTemplateColumns", "1fr 2fr") == "[grid-template-columns:1fr_2fr]"


class TestScopedClassesAdapter:
    """Tests for the scoped-classes adapter."""

    def test_allocates_class(self, config: ExportConfig, card_style: ResolvedStyle) -> None:
        """Test declarations are moved into an allocated class."""
        adapter = ScopedClassesAdapter(config)
        artifacts = adapter.resolve_classes_and_rules(card_style, "card")
        assert artifacts.class_attr == "rounded"
        assert artifacts.class_ref == "card"
        assert adapter.ref_mode == RefMode.MODULE

    def test_stylesheet(self, config: ExportConfig, card_style: ResolvedStyle) -> None:
        """Test the stylesheet has a base rule and a media block."""
        adapter = ScopedClassesAdapter(config)
        adapter.resolve_classes_and_rules(card_style, "card")
        bundle = adapter.finalize()
        assert bundle.stylesheet is not None
        assert bundle.stylesheet.extension == "css"
        assert bundle.stylesheet.content == (
            ".card {\n"
            "  padding: 16px;\n"
            "}\n"
            "\n"
            "@media (min-width: 1024px) {\n"
            "  .card {\n"
            "    padding: 32px;\n"
            "  }\n"
            "}\n"
        )

    def test_removed_token_bounded(self, config: ExportConfig) -> None:
        """Test static tokens switched off at tablet keep the max variant."""
        adapter = ScopedClassesAdapter(config)
        style = ResolvedStyle(base={"p-4": True, "padding": 8}, deltas={Breakpoint.TABLET: {"p-4": False}})
        artifacts = adapter.resolve_classes_and_rules(style, "box")
        assert artifacts.class_attr == "max-md:p-4"
        assert artifacts.class_ref == "box"

    def test_token_only_style_allocates_nothing(self, config: ExportConfig) -> None:
        """Test pure utility styles produce no stylesheet."""
        adapter = ScopedClassesAdapter(config)
        artifacts = adapter.resolve_classes_and_rules(ResolvedStyle(base={"flex": True}), "row")
        assert artifacts.class_ref is None
        assert adapter.finalize().stylesheet is None

    def test_stable_across_instances(self, config: ExportConfig, card_style: ResolvedStyle) -> None:
        """Test repeated runs allocate the same names and rules."""
        runs = []
        for _ in range(2):
            adapter = ScopedClassesAdapter(config)
            names = [
                adapter.resolve_classes_and_rules(card_style, "card").class_ref,
                adapter.resolve_classes_and_rules(card_style, "other").class_ref,
            ]
            runs.append((names, adapter.finalize().stylesheet))
        assert runs[0] == runs[1]
        assert runs[0][0] == ["card", "card"]


class TestPreprocessedAdapter:
    """Tests for the preprocessed (SCSS) adapter."""

    def test_variables_and_nesting(self, config: ExportConfig, card_style: ResolvedStyle) -> None:
        """Test breakpoints become variables and media queries nest."""
        adapter = PreprocessedAdapter(config)
        adapter.resolve_classes_and_rules(card_style, "card")
        stylesheet = adapter.finalize().stylesheet
        assert stylesheet is not None
        assert stylesheet.extension == "scss"
        assert stylesheet.content == (
            "$breakpoint-tablet: 768px;\n"
            "$breakpoint-desktop: 1024px;\n"
            "\n"
            ".card {\n"
            "  padding: 16px;\n"
            "\n"
            "  @media (min-width: $breakpoint-desktop) {\n"
            "    padding: 32px;\n"
            "  }\n"
            "}\n"
        )

    def test_sass_dev_dependency(self, config: ExportConfig) -> None:
        """Test the compiler is declared as a dev dependency."""
        assert "sass" in PreprocessedAdapter(config).dev_dependencies


class TestCssInJsAdapter:
    """Tests for the CSS-in-JS adapter."""

    def test_identifier_reference(self, config: ExportConfig, card_style: ResolvedStyle) -> None:
        """Test allocated names are script identifiers."""
        adapter = CssInJsAdapter(config)
        artifacts = adapter.resolve_classes_and_rules(card_style, "card")
        assert artifacts.class_ref == "cardClass"
        assert adapter.ref_mode == RefMode.IDENTIFIER

    def test_script_block(self, config: ExportConfig, card_style: ResolvedStyle) -> None:
        """Test definitions use the css tagged template with nested media."""
        adapter = CssInJsAdapter(config)
        adapter.resolve_classes_and_rules(card_style, "card")
        bundle = adapter.finalize()
        assert bundle.stylesheet is None
        assert bundle.script_imports == ["import { css } from '@emotion/css';"]
        assert bundle.definitions == ["cardClass"]
        assert bundle.script_block == (
            "const cardClass = css`\n"
            "  padding: 16px;\n"
            "\n"
            "  @media (min-width: 1024px) {\n"
            "    padding: 32px;\n"
            "  }\n"
            "`;"
        )

    def test_runtime_dependency(self, config: ExportConfig) -> None:
        """Test the runtime library is a dependency."""
        assert "@emotion/css" in CssInJsAdapter(config).dependencies


class TestRegistry:
    """Tests for styling adapter lookup."""

    @pytest.mark.parametrize(
        "system,adapter",
        [
            (StylingSystem.UTILITY_CLASS, UtilityClassAdapter),
            (StylingSystem.CSS_IN_JS, CssInJsAdapter),
            (StylingSystem.SCOPED_CLASSES, ScopedClassesAdapter),
            (StylingSystem.PREPROCESSED, PreprocessedAdapter),
        ],
    )
    def test_lookup(self, system: StylingSystem, adapter: type) -> None:
        """Test every styling system resolves to its adapter."""
        assert ExportRegistry.get_styling(system) is adapter

    def test_list(self) -> None:
        """Test all four systems are registered."""
        assert set(ExportRegistry.list_styling()) == {s.value for s in StylingSystem}
