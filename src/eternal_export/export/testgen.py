"""
Smoke-test generation.

One test file per exported component, asserting that a minimal render
produces the root node's element. Each target surface uses the testing
library idiomatic for it.
"""

from __future__ import annotations

from collections.abc import Callable
from textwrap import dedent

from .config import TargetSurface


def generate_smoke_test(surface: TargetSurface, name: str, root_tag: str, import_path: str) -> str:
    """
    Render a smoke test for one component.

    Args:
        surface: Target surface the component was emitted for
        name: Component name (class name for decorator-class)
        root_tag: Tag of the root element, lowercase
        import_path: Module specifier of the component, relative to the test

    Returns:
        Test file content
    """
    render = _RENDERERS[surface]
    return render(name, root_tag, import_path)


def _jsx_test(name: str, root_tag: str, import_path: str) -> str:
    return dedent(f"""\
        import {{ render }} from '@testing-library/react';
        import {{ describe, expect, it }} from 'vitest';
        import {name} from '{import_path}';

        describe('{name}', () => {{
          it('renders the root {root_tag} element', () => {{
            const {{ container }} = render(<{name} />);
            expect(container.firstElementChild?.tagName).toBe('{root_tag.upper()}');
          }});
        }});
        """)


def _template_script_test(name: str, root_tag: str, import_path: str) -> str:
    return dedent(f"""\
        import {{ mount }} from '@vue/test-utils';
        import {{ describe, expect, it }} from 'vitest';
        import {name} from '{import_path}';

        describe('{name}', () => {{
          it('renders the root {root_tag} element', () => {{
            const wrapper = mount({name});
            expect(wrapper.element.tagName).toBe('{root_tag.upper()}');
          }});
        }});
        """)


def _compiled_reactive_test(name: str, root_tag: str, import_path: str) -> str:
    return dedent(f"""\
        import {{ render }} from '@testing-library/svelte';
        import {{ describe, expect, it }} from 'vitest';
        import {name} from '{import_path}';

        describe('{name}', () => {{
          it('renders the root {root_tag} element', () => {{
            const {{ container }} = render({name});
            expect(container.querySelector('{root_tag}')).not.toBeNull();
          }});
        }});
        """)


def _decorator_class_test(name: str, root_tag: str, import_path: str) -> str:
    return dedent(f"""\
        import {{ TestBed }} from '@angular/core/testing';
        import {{ {name} }} from '{import_path}';

        describe('{name}', () => {{
          it('renders the root {root_tag} element', async () => {{
            await TestBed.configureTestingModule({{ imports: [{name}] }}).compileComponents();
            const fixture = TestBed.createComponent({name});
            fixture.detectChanges();
            const host: HTMLElement = fixture.nativeElement;
            expect(host.firstElementChild?.tagName).toBe('{root_tag.upper()}');
          }});
        }});
        """)


_RENDERERS: dict[TargetSurface, Callable[[str, str, str], str]] = {
    TargetSurface.JSX: _jsx_test,
    TargetSurface.TEMPLATE_SCRIPT: _template_script_test,
    TargetSurface.COMPILED_REACTIVE: _compiled_reactive_test,
    TargetSurface.DECORATOR_CLASS: _decorator_class_test,
}
