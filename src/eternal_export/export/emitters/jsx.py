"""
JSX-style emitter (React function components).

Generates one function component per tree:
- TypeScript props interface when typed (``.tsx``), plain ``.jsx`` otherwise
- Affordances guarded with ``{onEdit && (...)}``
- Scoped stylesheets imported as ``styles`` modules
"""

from __future__ import annotations

from dataclasses import replace
from textwrap import indent

from eternal_export.core.ir import BindingSlot

from ..config import TargetSurface
from ..registry import ExportRegistry
from ..styling.base import RefMode, StyleArtifacts
from ..syntax import escape_template_literal, js_literal, js_string, needs_jsx_expression
from .base import (
    AssembleContext,
    Attribute,
    EmitContext,
    Emitter,
    TemplatePart,
    bool_attribute,
    component_props,
    file_name,
)

# HTML attribute names that JSX spells differently
JSX_ATTRIBUTE_NAMES = {
    "class": "className",
    "for": "htmlFor",
    "tabindex": "tabIndex",
    "readonly": "readOnly",
    "maxlength": "maxLength",
    "autocomplete": "autoComplete",
    "novalidate": "noValidate",
    "srcset": "srcSet",
    "crossorigin": "crossOrigin",
}


class JsxEmitter(Emitter):
    """Emit React function components."""

    surface = TargetSurface.JSX
    dependencies = {
        "react": "^18.2.0",
        "react-dom": "^18.2.0",
    }
    dev_dependencies = {
        "vite": "^5.0.0",
        "@vitejs/plugin-react": "^4.2.0",
    }
    typed_dev_dependencies = {
        "typescript": "^5.3.0",
        "@types/react": "^18.2.0",
        "@types/react-dom": "^18.2.0",
    }
    test_dev_dependencies = {
        "vitest": "^1.1.0",
        "@testing-library/react": "^14.1.0",
        "jsdom": "^23.0.0",
    }
    vite_plugin = ("import react from '@vitejs/plugin-react';", "react()")
    tsconfig_options = {"jsx": "react-jsx"}

    @property
    def extension(self) -> str:
        return "tsx" if self.config.typed else "jsx"

    def component_path(self, name: str) -> str:
        return f"src/components/{name}.{self.extension}"

    def test_path(self, name: str) -> str:
        return f"src/components/{name}.test.{self.extension}"

    def test_import(self, name: str) -> str:
        return f"./{name}"

    # -------------------------------------------------------------------------
    # Node rendering
    # -------------------------------------------------------------------------

    def render_class(self, artifacts: StyleArtifacts, context: EmitContext) -> str | None:
        static = artifacts.class_attr
        ref = self._class_reference(artifacts, context.ref_mode)
        if ref is None:
            return f'className="{static}"' if static else None
        if not static:
            return f"className={{{ref}}}"
        return f"className={{`{escape_template_literal(static)} ${{{ref}}}`}}"

    def _class_reference(self, artifacts: StyleArtifacts, mode: RefMode) -> str | None:
        if artifacts.class_ref is None:
            return None
        if mode == RefMode.MODULE:
            return f"styles.{artifacts.class_ref}"
        return artifacts.class_ref

    def render_attribute(self, attribute: Attribute, context: EmitContext) -> str | None:
        name = JSX_ATTRIBUTE_NAMES.get(attribute.name, attribute.name)
        if attribute.template is not None:
            return f"{name}={{{template_literal(attribute.template)}}}"

        value = attribute.value
        if isinstance(value, bool):
            return bool_attribute(replace(attribute, name=name))
        if isinstance(value, int | float):
            return f"{name}={{{js_literal(value)}}}"
        # JSX attribute strings decode entities and cannot escape quotes
        if value is None or any(c in value for c in '"&\n'):
            return f"{name}={{{js_string(value or '')}}}"
        return f'{name}="{value}"'

    def render_text(self, text: str) -> str:
        if needs_jsx_expression(text) or text != text.strip() or "\n" in text:
            return f"{{{js_string(text)}}}"
        return text

    def render_event(self, slot: BindingSlot, handler: str, context: EmitContext) -> str:
        return f"on{slot.dom_event.capitalize()}={{{handler}}}"

    def render_affordance(self, slot: BindingSlot, handler: str, label: str, context: EmitContext) -> str:
        button = f'<button type="button" onClick={{{handler}}}>{self.render_text(label)}</button>'
        return f"{{{handler} && (\n  {button}\n)}}"

    # -------------------------------------------------------------------------
    # Assembly
    # -------------------------------------------------------------------------

    def assemble(self, context: AssembleContext) -> str:
        scope = context.scope
        typed = self.config.typed
        props = component_props(scope)

        imports: list[str] = []
        if context.bundle.stylesheet is not None and context.ref_mode == RefMode.MODULE:
            imports.append(f"import styles from './{file_name(context.stylesheet_path)}';")
        imports.extend(context.bundle.script_imports)

        sections: list[str] = []
        if imports:
            sections.append("\n".join(imports))

        props_type = f"{scope.name}Props"
        if typed and props:
            fields = [f"  {name}?: {ts_type};" for name, ts_type, _ in props]
            sections.append("\n".join([f"interface {props_type} {{", *fields, "}"]))

        params = ""
        if props:
            names = [
                name if default is None else f"{name} = {js_literal(default)}"
                for name, _, default in props
            ]
            params = "{ " + ", ".join(names) + " }"
            if typed:
                params += f": {props_type}"

        body = indent(context.body, "    ")
        sections.append(
            f"export default function {scope.name}({params}) {{\n"
            f"  return (\n"
            f"{body}\n"
            f"  );\n"
            f"}}"
        )

        if context.bundle.script_block:
            sections.append(context.bundle.script_block)

        return "\n\n".join(sections) + "\n"


def template_literal(parts: tuple[TemplatePart, ...]) -> str:
    """JavaScript template literal interpolating prop references."""
    rendered = [f"${{{p.text}}}" if p.is_prop else escape_template_literal(p.text) for p in parts]
    return "`" + "".join(rendered) + "`"


# Register emitter
ExportRegistry.register_emitter(TargetSurface.JSX, JsxEmitter)
