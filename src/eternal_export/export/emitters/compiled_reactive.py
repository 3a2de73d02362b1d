"""
Compiled-reactive emitter (Svelte components).

Props are ``export let`` declarations, affordances use ``{#if}`` blocks
and attribute values interpolate with single braces.
"""

from __future__ import annotations

from textwrap import indent

from eternal_export.core.ir import BindingSlot

from ..config import TargetSurface
from ..registry import ExportRegistry
from ..styling.base import RefMode, StyleArtifacts
from ..syntax import escape_attribute, escape_text, js_literal
from .base import (
    AssembleContext,
    Attribute,
    EmitContext,
    Emitter,
    bool_attribute,
    component_props,
    file_name,
)


class CompiledReactiveEmitter(Emitter):
    """Emit Svelte components."""

    surface = TargetSurface.COMPILED_REACTIVE
    dependencies = {"svelte": "^4.2.0"}
    dev_dependencies = {
        "vite": "^5.0.0",
        "@sveltejs/vite-plugin-svelte": "^3.0.0",
    }
    typed_dev_dependencies = {
        "typescript": "^5.3.0",
        "svelte-check": "^3.6.0",
    }
    test_dev_dependencies = {
        "vitest": "^1.1.0",
        "@testing-library/svelte": "^4.0.0",
        "jsdom": "^23.0.0",
    }
    vite_plugin = ("import { svelte } from '@sveltejs/vite-plugin-svelte';", "svelte()")
    tsconfig_options = {"verbatimModuleSyntax": True}

    def component_path(self, name: str) -> str:
        return f"src/lib/{name}.svelte"

    def test_path(self, name: str) -> str:
        ext = "ts" if self.config.typed else "js"
        return f"src/lib/{name}.test.{ext}"

    def render_class(self, artifacts: StyleArtifacts, context: EmitContext) -> str | None:
        ref = artifacts.class_ref
        if ref is not None and context.ref_mode == RefMode.MODULE:
            ref = f"styles.{ref}"
        if ref is None:
            return f'class="{artifacts.class_attr}"' if artifacts.class_attr else None
        if not artifacts.class_attr:
            return f"class={{{ref}}}"
        return f'class="{artifacts.class_attr} {{{ref}}}"'

    def render_attribute(self, attribute: Attribute, context: EmitContext) -> str | None:
        if attribute.template is not None:
            value = "".join(
                f"{{{p.text}}}" if p.is_prop else escape_attribute(p.text, braces=True)
                for p in attribute.template
            )
            return f'{attribute.name}="{value}"'
        if isinstance(attribute.value, bool):
            return bool_attribute(attribute)
        return f'{attribute.name}="{escape_attribute(str(attribute.value), braces=True)}"'

    def render_text(self, text: str) -> str:
        return escape_text(text, braces=True)

    def render_event(self, slot: BindingSlot, handler: str, context: EmitContext) -> str:
        return f"on:{slot.dom_event}={{{handler}}}"

    def render_affordance(self, slot: BindingSlot, handler: str, label: str, context: EmitContext) -> str:
        button = f'<button type="button" on:click={{{handler}}}>{self.render_text(label)}</button>'
        return f"{{#if {handler}}}\n  {button}\n{{/if}}"

    def assemble(self, context: AssembleContext) -> str:
        typed = self.config.typed
        script: list[str] = []

        imports: list[str] = []
        if context.bundle.stylesheet is not None and context.ref_mode == RefMode.MODULE:
            imports.append(f"import styles from './{file_name(context.stylesheet_path)}';")
        imports.extend(context.bundle.script_imports)
        if imports:
            script.append("\n".join(imports))

        props = component_props(context.scope)
        if props:
            lines = []
            for name, ts_type, default in props:
                if default is None:
                    annotation = f": ({ts_type}) | undefined" if typed else ""
                    lines.append(f"export let {name}{annotation} = undefined;")
                else:
                    annotation = f": {ts_type}" if typed else ""
                    lines.append(f"export let {name}{annotation} = {js_literal(default)};")
            script.append("\n".join(lines))

        if context.bundle.script_block:
            script.append(context.bundle.script_block)

        sections: list[str] = []
        if script:
            opening = '<script lang="ts">' if typed else "<script>"
            sections.append(f"{opening}\n" + indent("\n\n".join(script), "  ") + "\n</script>")
        sections.append(context.body)
        return "\n\n".join(sections) + "\n"


# Register emitter
ExportRegistry.register_emitter(TargetSurface.COMPILED_REACTIVE, CompiledReactiveEmitter)
