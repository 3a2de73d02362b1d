"""
Template+script emitter (Vue single-file components).

Generates ``<script setup>`` components with typed ``defineProps`` when
typed, ``v-if`` guarded affordances and CSS-module stylesheets attached
through ``<style module src>``.
"""

from __future__ import annotations

from textwrap import indent

from eternal_export.core.ir import BindingSlot

from ..config import TargetSurface
from ..registry import ExportRegistry
from ..styling.base import RefMode, StyleArtifacts
from ..syntax import escape_attribute, escape_template_literal, escape_text, js_literal
from .base import (
    AssembleContext,
    Attribute,
    EmitContext,
    Emitter,
    bool_attribute,
    component_props,
    file_name,
)

# Runtime prop constructors for untyped defineProps
_RUNTIME_TYPES = {
    "string": "String",
    "number": "Number",
    "boolean": "Boolean",
    "() => void": "Function",
}


class TemplateScriptEmitter(Emitter):
    """Emit Vue 3 single-file components."""

    surface = TargetSurface.TEMPLATE_SCRIPT
    dependencies = {"vue": "^3.4.0"}
    dev_dependencies = {
        "vite": "^5.0.0",
        "@vitejs/plugin-vue": "^5.0.0",
    }
    typed_dev_dependencies = {
        "typescript": "^5.3.0",
        "vue-tsc": "^1.8.0",
    }
    test_dev_dependencies = {
        "vitest": "^1.1.0",
        "@vue/test-utils": "^2.4.0",
        "jsdom": "^23.0.0",
    }
    vite_plugin = ("import vue from '@vitejs/plugin-vue';", "vue()")
    tsconfig_options = {"jsx": "preserve"}

    def component_path(self, name: str) -> str:
        return f"src/components/{name}.vue"

    def test_path(self, name: str) -> str:
        ext = "ts" if self.config.typed else "js"
        return f"src/components/{name}.spec.{ext}"

    def render_class(self, artifacts: StyleArtifacts, context: EmitContext) -> str | None:
        parts = []
        if artifacts.class_attr:
            parts.append(f'class="{artifacts.class_attr}"')
        if artifacts.class_ref is not None:
            ref = artifacts.class_ref
            if context.ref_mode == RefMode.MODULE:
                ref = f"$style.{ref}"
            parts.append(f':class="{ref}"')
        return " ".join(parts) or None

    def render_attribute(self, attribute: Attribute, context: EmitContext) -> str | None:
        if attribute.template is not None:
            rendered = [
                f"${{{p.text}}}" if p.is_prop else escape_template_literal(p.text)
                for p in attribute.template
            ]
            expression = "`" + "".join(rendered) + "`"
            return f':{attribute.name}="{escape_attribute(expression)}"'

        value = attribute.value
        if isinstance(value, bool):
            return bool_attribute(attribute)
        return f'{attribute.name}="{escape_attribute(str(value))}"'

    def render_text(self, text: str) -> str:
        return escape_text(text, braces=True)

    def render_event(self, slot: BindingSlot, handler: str, context: EmitContext) -> str:
        return f'@{slot.dom_event}="{handler}"'

    def render_affordance(self, slot: BindingSlot, handler: str, label: str, context: EmitContext) -> str:
        return f'<button v-if="{handler}" type="button" @click="{handler}">{self.render_text(label)}</button>'

    def assemble(self, context: AssembleContext) -> str:
        typed = self.config.typed
        script: list[str] = []

        imports = list(context.bundle.script_imports)
        if imports:
            script.append("\n".join(imports))

        props = component_props(context.scope)
        if props and typed:
            fields = "\n".join(f"  {name}?: {ts_type};" for name, ts_type, _ in props)
            declared = f"defineProps<{{\n{fields}\n}}>()"
            defaults = [(name, d) for name, _, d in props if d is not None]
            if defaults:
                values = "\n".join(f"  {name}: {js_literal(d)}," for name, d in defaults)
                declared = f"withDefaults({declared}, {{\n{values}\n}})"
            script.append(declared + ";")
        elif props:
            entries = []
            for name, ts_type, default in props:
                runtime = _RUNTIME_TYPES[ts_type]
                if default is None:
                    entries.append(f"  {name}: {runtime},")
                else:
                    entries.append(f"  {name}: {{ type: {runtime}, default: {js_literal(default)} }},")
            script.append("defineProps({\n" + "\n".join(entries) + "\n});")

        if context.bundle.script_block:
            script.append(context.bundle.script_block)

        sections: list[str] = []
        if script:
            opening = '<script setup lang="ts">' if typed else "<script setup>"
            sections.append(f"{opening}\n" + "\n\n".join(script) + "\n</script>")

        sections.append(f"<template>\n{indent(context.body, '  ')}\n</template>")

        stylesheet = context.bundle.stylesheet
        if stylesheet is not None:
            lang = f' lang="{stylesheet.extension}"' if stylesheet.extension != "css" else ""
            src = file_name(context.stylesheet_path)
            sections.append(f'<style module{lang} src="./{src}"></style>')

        return "\n\n".join(sections) + "\n"


# Register emitter
ExportRegistry.register_emitter(TargetSurface.TEMPLATE_SCRIPT, TemplateScriptEmitter)
