"""
Export configuration models.

Parses the [export] section of a project TOML file and provides the
immutable ExportConfig consumed by the pipeline.
"""

from __future__ import annotations

import tomllib
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from eternal_export.core.errors import ValidationError


class TargetSurface(str, Enum):
    """Supported UI-framework targets."""

    JSX = "jsx-style"  # React function components
    TEMPLATE_SCRIPT = "template-script"  # Vue single-file components
    COMPILED_REACTIVE = "compiled-reactive"  # Svelte components
    DECORATOR_CLASS = "decorator-class"  # Angular standalone components


class StylingSystem(str, Enum):
    """Supported styling approaches."""

    UTILITY_CLASS = "utility-class"  # Tailwind
    CSS_IN_JS = "css-in-js"  # Emotion
    SCOPED_CLASSES = "scoped-classes"  # CSS Modules
    PREPROCESSED = "preprocessed"  # SCSS


# Framework/library names accepted in place of the canonical values
TARGET_ALIASES: dict[str, TargetSurface] = {
    "react": TargetSurface.JSX,
    "jsx": TargetSurface.JSX,
    "vue": TargetSurface.TEMPLATE_SCRIPT,
    "svelte": TargetSurface.COMPILED_REACTIVE,
    "angular": TargetSurface.DECORATOR_CLASS,
}

STYLING_ALIASES: dict[str, StylingSystem] = {
    "tailwind": StylingSystem.UTILITY_CLASS,
    "emotion": StylingSystem.CSS_IN_JS,
    "styled-components": StylingSystem.CSS_IN_JS,
    "css-modules": StylingSystem.SCOPED_CLASSES,
    "sass": StylingSystem.PREPROCESSED,
    "scss": StylingSystem.PREPROCESSED,
}


class ExportConfig(BaseModel):
    """
    One export request's configuration.

    Attributes:
        target_surface: Output UI framework
        styling_system: Output styling approach
        typed: Emit static type annotations
        accessible: Run the accessibility injector
        responsive: Emit breakpoint-specific rules (desktop only when off)
        tested: Also emit a smoke-test file
        manifest: Also emit a package.json with dependencies and scripts
        live_labels: Bind label templates to component props instead of
            substituting literal values
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    target_surface: TargetSurface = Field(default=TargetSurface.JSX, alias="targetSurface")
    styling_system: StylingSystem = Field(default=StylingSystem.UTILITY_CLASS, alias="stylingSystem")
    typed: bool = True
    accessible: bool = True
    responsive: bool = True
    tested: bool = False
    manifest: bool = False
    live_labels: bool = Field(default=False, alias="liveLabels")

    @field_validator("target_surface", mode="before")
    @classmethod
    def resolve_target_alias(cls, v: Any) -> Any:
        """Accept framework names such as ``react`` or ``vue``."""
        if isinstance(v, str):
            return TARGET_ALIASES.get(v.lower(), v)
        return v

    @field_validator("styling_system", mode="before")
    @classmethod
    def resolve_styling_alias(cls, v: Any) -> Any:
        """Accept library names such as ``tailwind`` or ``sass``."""
        if isinstance(v, str):
            return STYLING_ALIASES.get(v.lower(), v)
        return v


def load_export_config(toml_path: Path) -> ExportConfig:
    """
    Load export configuration from a project TOML file.

    Args:
        toml_path: Path to the TOML file

    Returns:
        ExportConfig with parsed values or defaults

    Raises:
        ValidationError: If the export table holds an invalid value
    """
    if not toml_path.exists():
        return ExportConfig()

    with open(toml_path, "rb") as f:
        data = tomllib.load(f)

    export_data = data.get("export", {})

    if not export_data:
        return ExportConfig()

    config_dict: dict[str, Any] = {
        "target_surface": export_data.get("target", TargetSurface.JSX.value),
        "styling_system": export_data.get("styling", StylingSystem.UTILITY_CLASS.value),
    }

    # Feature toggles
    for key in ("typed", "accessible", "responsive", "tested", "manifest", "live_labels"):
        if key in export_data:
            config_dict[key] = export_data[key]

    try:
        return ExportConfig(**config_dict)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid export configuration in {toml_path}", problems=validation_problems(e)) from e


def validation_problems(error: PydanticValidationError) -> list[str]:
    """One ``location: message`` line per pydantic error."""
    return [f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}" for err in error.errors()]
