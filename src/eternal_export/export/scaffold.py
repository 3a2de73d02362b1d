"""
Project companion files.

Generates the configuration a host project needs to build the exported
component alongside ``package.json``:
- tsconfig.json (typed exports)
- vite.config.ts / vite.config.js (vite-based targets)
- whatever the styling adapter contributes (Tailwind config, PostCSS, globals)
- README.md
"""

from __future__ import annotations

import json
from textwrap import dedent
from typing import TYPE_CHECKING

from .config import ExportConfig
from .result import FileType, OutputFile

if TYPE_CHECKING:
    from .emitters.base import Emitter
    from .styling.base import StylingAdapter

README_PATH = "README.md"

_TSCONFIG_BASE: dict[str, object] = {
    "target": "ES2020",
    "useDefineForClassFields": True,
    "lib": ["ES2020", "DOM", "DOM.Iterable"],
    "module": "ESNext",
    "skipLibCheck": True,
    "moduleResolution": "bundler",
    "resolveJsonModule": True,
    "isolatedModules": True,
    "noEmit": True,
    "strict": True,
    "noFallthroughCasesInSwitch": True,
}


def generate_companion_files(
    component_name: str,
    emitter: Emitter,
    adapter: StylingAdapter,
    config: ExportConfig,
    scripts: dict[str, str],
    files: list[OutputFile],
) -> list[OutputFile]:
    """
    Build configuration and documentation files for an export.

    Args:
        component_name: Exported component name
        emitter: Emitter used for the export
        adapter: Styling adapter used for the export
        config: Export configuration
        scripts: package.json scripts, listed in the README
        files: Files generated so far, listed in the README

    Returns:
        Companion files in output order, README last
    """
    companions: list[OutputFile] = []
    if config.typed:
        companions.append(OutputFile(path="tsconfig.json", content=render_tsconfig(emitter), type=FileType.CONFIG))
    if emitter.vite_plugin is not None:
        extension = "ts" if config.typed else "js"
        companions.append(
            OutputFile(
                path=f"vite.config.{extension}",
                content=render_vite_config(emitter, config),
                type=FileType.CONFIG,
            )
        )
    for path, content in adapter.config_files():
        file_type = FileType.STYLE if path.endswith(".css") else FileType.CONFIG
        companions.append(OutputFile(path=path, content=content, type=file_type))

    readme = render_readme(component_name, config, scripts, [*files, *companions])
    companions.append(OutputFile(path=README_PATH, content=readme, type=FileType.DOCUMENTATION))
    return companions


def render_tsconfig(emitter: Emitter) -> str:
    """``tsconfig.json`` with the emitter's compiler option overrides applied."""
    options = {**_TSCONFIG_BASE, **emitter.tsconfig_options}
    tsconfig = {
        "compilerOptions": {k: v for k, v in options.items() if v is not None},
        "include": ["src"],
    }
    return json.dumps(tsconfig, indent=2) + "\n"


def render_vite_config(emitter: Emitter, config: ExportConfig) -> str:
    """
    Vite configuration registering the emitter's framework plugin.

    Tested exports also configure vitest to run under jsdom.
    """
    if emitter.vite_plugin is None:
        raise ValueError(f"Target surface '{emitter.surface.value}' does not build with vite")
    plugin_import, plugin_call = emitter.vite_plugin
    lines = []
    if config.tested:
        lines.append('/// <reference types="vitest" />')
    lines.append("import { defineConfig } from 'vite';")
    lines.append(plugin_import)
    lines.append("")
    lines.append("export default defineConfig({")
    lines.append(f"  plugins: [{plugin_call}],")
    if config.tested:
        lines.append("  test: {")
        lines.append("    environment: 'jsdom',")
        lines.append("  },")
    lines.append("});")
    return "\n".join(lines) + "\n"


def render_readme(
    component_name: str,
    config: ExportConfig,
    scripts: dict[str, str],
    files: list[OutputFile],
) -> str:
    """README describing the export settings, scripts and generated files."""
    run = "start" if "start" in scripts else "dev"
    sections = [
        f"# {component_name}",
        "",
        "Generated component export.",
        "",
        "## Overview",
        "",
        f"- Target surface: {config.target_surface.value}",
        f"- Styling: {config.styling_system.value}",
        f"- TypeScript: {_yes_no(config.typed)}",
        f"- Accessibility attributes: {_yes_no(config.accessible)}",
        f"- Responsive styles: {_yes_no(config.responsive)}",
        "",
        "## Quick start",
        "",
        "```bash",
        "npm install",
        f"npm run {run}",
    ]
    if "build" in scripts:
        sections.append("npm run build")
    if "test" in scripts:
        sections.append("npm test")
    sections.extend(["```", "", "## Files", ""])
    sections.extend(f"- `{f.path}`" for f in files)
    sections.append(f"- `{README_PATH}`")
    return "\n".join(sections) + "\n"


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def tailwind_files(module_syntax: bool) -> list[tuple[str, str]]:
    """
    Tailwind, PostCSS and global stylesheet files.

    Args:
        module_syntax: Use ``export default`` (ES module packages) rather
            than ``module.exports``
    """
    export = "export default" if module_syntax else "module.exports ="
    tailwind_config = dedent(f"""\
        /** @type {{import('tailwindcss').Config}} */
        {export} {{
          content: ['./index.html', './src/**/*.{{html,js,ts,jsx,tsx,vue,svelte}}'],
          theme: {{
            extend: {{}},
          }},
          plugins: [],
        }};
        """)
    postcss_config = dedent(f"""\
        {export} {{
          plugins: {{
            tailwindcss: {{}},
            autoprefixer: {{}},
          }},
        }};
        """)
    globals_css = "@tailwind base;\n@tailwind components;\n@tailwind utilities;\n"
    return [
        ("tailwind.config.js", tailwind_config),
        ("postcss.config.js", postcss_config),
        ("src/globals.css", globals_css),
    ]
