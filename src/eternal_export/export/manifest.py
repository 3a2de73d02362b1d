"""
Package manifest data.

Collects the npm dependencies the selected emitter and styling adapter
need, the scripts to build and test the exported component, and renders
them as a ``package.json``.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from eternal_export.core.strings import to_kebab_case

from .config import ExportConfig, TargetSurface

if TYPE_CHECKING:
    from .emitters.base import Emitter
    from .styling.base import StylingAdapter

MANIFEST_PATH = "package.json"

_VITE_SCRIPTS = {
    "dev": "vite",
    "build": "vite build",
    "preview": "vite preview",
}


def collect_dependencies(
    emitter: Emitter,
    adapter: StylingAdapter,
    config: ExportConfig,
) -> tuple[dict[str, str], dict[str, str]]:
    """
    Runtime and development dependencies for an export.

    Returns:
        Tuple of (dependencies, dev_dependencies), each sorted by name
    """
    deps = {**emitter.dependencies, **adapter.dependencies}
    dev_deps = {**emitter.dev_dependencies, **adapter.dev_dependencies}
    if config.typed:
        dev_deps.update(emitter.typed_dev_dependencies)
    if config.tested:
        dev_deps.update(emitter.test_dev_dependencies)
    return dict(sorted(deps.items())), dict(sorted(dev_deps.items()))


def build_scripts(config: ExportConfig) -> dict[str, str]:
    """npm scripts for the selected target surface."""
    surface = config.target_surface
    if surface == TargetSurface.DECORATOR_CLASS:
        scripts = {"start": "ng serve", "build": "ng build"}
        if config.tested:
            scripts["test"] = "ng test"
        return scripts

    scripts = dict(_VITE_SCRIPTS)
    if config.typed and surface == TargetSurface.TEMPLATE_SCRIPT:
        scripts["type-check"] = "vue-tsc --noEmit"
    elif config.typed and surface == TargetSurface.COMPILED_REACTIVE:
        scripts["check"] = "svelte-check"
    if config.tested:
        scripts["test"] = "vitest run"
    return scripts


def render_package_json(
    component_name: str,
    config: ExportConfig,
    dependencies: dict[str, str],
    dev_dependencies: dict[str, str],
    scripts: dict[str, str],
) -> str:
    """``package.json`` content for the exported component."""
    manifest: dict[str, object] = {
        "name": to_kebab_case(component_name),
        "version": "0.1.0",
        "private": True,
    }
    if config.target_surface != TargetSurface.DECORATOR_CLASS:
        manifest["type"] = "module"
    manifest["scripts"] = scripts
    manifest["dependencies"] = dependencies
    manifest["devDependencies"] = dev_dependencies
    return json.dumps(manifest, indent=2) + "\n"
