"""
Registry of emitters and styling adapters.

Maps configuration values to implementations. Implementations register
themselves at the bottom of their modules; importing
``eternal_export.export`` loads all built-in ones.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import StylingSystem, TargetSurface
    from .emitters.base import Emitter
    from .styling.base import StylingAdapter


class ExportRegistry:
    """
    Registry for export components.

    Maps target surfaces to emitter classes and styling systems to
    adapter classes.
    """

    _emitters: dict[str, type[Emitter]] = {}
    _styling: dict[str, type[StylingAdapter]] = {}

    @classmethod
    def register_emitter(cls, surface: TargetSurface, emitter: type[Emitter]) -> None:
        """Register an emitter for a target surface."""
        cls._emitters[surface.value] = emitter

    @classmethod
    def register_styling(cls, system: StylingSystem, adapter: type[StylingAdapter]) -> None:
        """Register a styling adapter."""
        cls._styling[system.value] = adapter

    @classmethod
    def get_emitter(cls, surface: TargetSurface) -> type[Emitter] | None:
        """Get emitter class by target surface."""
        return cls._emitters.get(surface.value)

    @classmethod
    def get_styling(cls, system: StylingSystem) -> type[StylingAdapter] | None:
        """Get styling adapter class by styling system."""
        return cls._styling.get(system.value)

    @classmethod
    def list_emitters(cls) -> list[str]:
        """List registered target surfaces."""
        return list(cls._emitters.keys())

    @classmethod
    def list_styling(cls) -> list[str]:
        """List registered styling systems."""
        return list(cls._styling.keys())
