"""
Decorator+class emitter (Angular standalone components).

The template is inlined in the ``@Component`` decorator; props become
``@Input()`` fields. Requires typed output.
"""

from __future__ import annotations

from textwrap import indent

from eternal_export.core.ir import BindingSlot

from ..config import TargetSurface
from ..registry import ExportRegistry
from ..styling.base import RefMode, StyleArtifacts
from ..syntax import escape_attribute, escape_template_literal, escape_text, js_literal, js_string
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


class DecoratorClassEmitter(Emitter):
    """Emit Angular standalone components."""

    surface = TargetSurface.DECORATOR_CLASS
    requires_typed = True
    dependencies = {
        "@angular/common": "^17.0.0",
        "@angular/core": "^17.0.0",
        "@angular/platform-browser": "^17.0.0",
        "rxjs": "~7.8.0",
        "tslib": "^2.6.0",
        "zone.js": "~0.14.0",
    }
    dev_dependencies = {
        "@angular/cli": "^17.0.0",
        "@angular-devkit/build-angular": "^17.0.0",
        "@angular/compiler-cli": "^17.0.0",
    }
    typed_dev_dependencies = {"typescript": "~5.2.0"}
    test_dev_dependencies = {
        "@types/jasmine": "~5.1.0",
        "jasmine-core": "~5.1.0",
        "karma": "~6.4.0",
        "karma-chrome-launcher": "~3.2.0",
        "karma-jasmine": "~5.1.0",
    }
    tsconfig_options = {
        "target": "ES2022",
        "useDefineForClassFields": False,
        "lib": ["ES2022", "DOM"],
        "moduleResolution": "node",
        "noEmit": None,
        "outDir": "./dist/out-tsc",
        "experimentalDecorators": True,
    }

    def file_stem(self, name: str) -> str:
        return self.selector(name)

    def component_path(self, name: str) -> str:
        stem = self.file_stem(name)
        return f"src/app/{stem}/{stem}.component.ts"

    def stylesheet_path(self, name: str, extension: str) -> str:
        stem = self.file_stem(name)
        return f"src/app/{stem}/{stem}.component.{extension}"

    def test_path(self, name: str) -> str:
        stem = self.file_stem(name)
        return f"src/app/{stem}/{stem}.component.spec.ts"

    def test_import(self, name: str) -> str:
        return f"./{self.file_stem(name)}.component"

    def test_subject(self, name: str) -> str:
        return self.class_name(name)

    def class_name(self, name: str) -> str:
        return f"{name}Component"

    def render_class(self, artifacts: StyleArtifacts, context: EmitContext) -> str | None:
        classes = [artifacts.class_attr] if artifacts.class_attr else []
        binding = None
        if artifacts.class_ref is not None:
            if context.ref_mode == RefMode.IDENTIFIER:
                context.scope.features.add("NgClass")
                binding = f'[ngClass]="cx.{artifacts.class_ref}"'
            else:
                # Component stylesheets are already scoped by view encapsulation
                classes.append(artifacts.class_ref)
        parts = []
        if classes:
            parts.append(f'class="{" ".join(classes)}"')
        if binding:
            parts.append(binding)
        return " ".join(parts) or None

    def render_attribute(self, attribute: Attribute, context: EmitContext) -> str | None:
        if attribute.template is not None:
            expression = binding_expression(attribute.template)
            return f'[attr.{attribute.name}]="{escape_attribute(expression)}"'
        if isinstance(attribute.value, bool):
            return bool_attribute(attribute)
        return f'{attribute.name}="{escape_attribute(str(attribute.value), braces=True)}"'

    def render_text(self, text: str) -> str:
        return escape_text(text, braces=True, at_sign=True)

    def render_event(self, slot: BindingSlot, handler: str, context: EmitContext) -> str:
        return f'({slot.dom_event})="{handler}?.()"'

    def render_affordance(self, slot: BindingSlot, handler: str, label: str, context: EmitContext) -> str:
        context.scope.features.add("NgIf")
        return (
            f'<button *ngIf="{handler}" type="button" (click)="{handler}()">'
            f"{self.render_text(label)}</button>"
        )

    def assemble(self, context: AssembleContext) -> str:
        scope = context.scope
        props = component_props(scope)

        core = ["Component", "Input"] if props else ["Component"]
        imports = [f"import {{ {', '.join(core)} }} from '@angular/core';"]
        if scope.features:
            imports.append(f"import {{ {', '.join(sorted(scope.features))} }} from '@angular/common';")
        imports.extend(context.bundle.script_imports)

        sections = ["\n".join(imports)]
        if context.bundle.script_block:
            sections.append(context.bundle.script_block)

        meta = [
            f"  selector: 'app-{self.selector(scope.name)}',",
            "  standalone: true,",
        ]
        if scope.features:
            meta.append(f"  imports: [{', '.join(sorted(scope.features))}],")
        if context.bundle.stylesheet is not None:
            meta.append(f"  styleUrls: ['./{file_name(context.stylesheet_path)}'],")
        template = indent(escape_template_literal(context.body), "    ")
        meta.append(f"  template: `\n{template}\n  `,")

        members = []
        for name, ts_type, default in props:
            if default is None:
                members.append(f"  @Input() {name}?: {ts_type};")
            else:
                members.append(f"  @Input() {name}: {ts_type} = {js_literal(default)};")
        if context.ref_mode == RefMode.IDENTIFIER and context.bundle.definitions:
            if members:
                members.append("")
            members.append(f"  protected readonly cx = {{ {', '.join(context.bundle.definitions)} }};")

        class_name = self.class_name(scope.name)
        if members:
            klass = f"export class {class_name} {{\n" + "\n".join(members) + "\n}"
        else:
            klass = f"export class {class_name} {{}}"
        sections.append("@Component({\n" + "\n".join(meta) + "\n})\n" + klass)
        return "\n\n".join(sections) + "\n"


def binding_expression(parts: tuple[TemplatePart, ...]) -> str:
    """Template expression concatenating literal text and prop references."""
    if not parts:
        return "''"
    return " + ".join(p.text if p.is_prop else js_string(p.text, "'") for p in parts)


# Register emitter
ExportRegistry.register_emitter(TargetSurface.DECORATOR_CLASS, DecoratorClassEmitter)
