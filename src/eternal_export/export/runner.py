"""
Export pipeline - orchestrates one export request.

Validates the request, selects the emitter and styling adapter, walks the
tree depth-first feeding every node through styling, accessibility
injection and emission, then assembles the component file and its
companions (stylesheet, smoke test, package manifest and project files).

The public entry points never raise: every failure is reported as a
diagnostic on an unsuccessful ExportResult.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from eternal_export.core.cascade import resolve_responsive
from eternal_export.core.errors import (
    CancelledError,
    Diagnostic,
    ExportError,
    Severity,
    UnknownNodeKindError,
    UnsupportedCombinationError,
    ValidationError,
)
from eternal_export.core.ir import ComponentNode, ComponentTree
from eternal_export.core.validator import validate

from .accessibility import AccessibilityInjector
from .config import ExportConfig, validation_problems
from .emitters import AssembleContext, ComponentScope, EmitContext, Emitter
from .manifest import MANIFEST_PATH, build_scripts, collect_dependencies, render_package_json
from .registry import ExportRegistry
from .result import ExportMetadata, ExportResult, ExportResultBuilder, FileType
from .scaffold import generate_companion_files
from .styling import StylingAdapter
from .testgen import generate_smoke_test

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, str], None]

TreeInput = ComponentTree | ComponentNode | Mapping[str, Any]
ConfigInput = ExportConfig | Mapping[str, Any] | None


class CancellationToken:
    """
    Cooperative cancellation flag shared between a caller and a running export.

    The pipeline checks it between nodes; setting it from any thread stops
    the run at the next node boundary.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, node_id: str | None = None) -> None:
        if self._event.is_set():
            raise CancelledError("Export cancelled", node_id)


class ExportPipeline:
    """
    Runs one export request.

    Emitter and adapter instances are created per run, so a pipeline holds
    no state shared with other runs.
    """

    def __init__(
        self,
        config: ConfigInput = None,
        progress: ProgressCallback | None = None,
        token: CancellationToken | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: ExportConfig or a mapping parsed into one (defaults when None)
            progress: Called with (percent, message) as the export advances
            token: Cancellation token checked between nodes
        """
        self.raw_config = config
        self.progress = progress
        self.token = token or CancellationToken()

    def run(self, tree: TreeInput) -> ExportResult:
        """
        Export a component tree.

        Args:
            tree: ComponentTree, root ComponentNode or nested mapping

        Returns:
            ExportResult; ``success`` is False when a fatal diagnostic occurred
        """
        builder = ExportResultBuilder()
        try:
            return self._run(tree, builder)
        except ExportError as e:
            logger.info(f"Export failed: {e}")
            return ExportResult.failure(e, warnings=builder.diagnostics)
        except Exception as e:
            logger.exception("Unexpected error during export")
            diagnostic = Diagnostic(severity=Severity.ERROR, code="InternalError", message=str(e))
            return ExportResult(success=False, diagnostics=(*builder.diagnostics, diagnostic))

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def _run(self, tree_input: TreeInput, builder: ExportResultBuilder) -> ExportResult:
        self._report(0, "Validating")
        config = coerce_config(self.raw_config)
        tree = coerce_tree(tree_input)
        validate(tree)

        emitter, adapter = self._select(config)
        logger.info(
            f"Exporting '{tree.component_id}' as {config.target_surface.value} "
            f"with {config.styling_system.value} styling"
        )

        scope = ComponentScope(name=emitter.component_name(tree.component_id))
        walker = _TreeWalker(
            config=config,
            emitter=emitter,
            adapter=adapter,
            scope=scope,
            builder=builder,
            token=self.token,
            total=sum(1 for _ in tree.iter_nodes()),
            report=self._report,
        )
        body = walker.visit(tree.root, is_root=True)
        self.token.raise_if_cancelled()

        self._report(90, "Assembling")
        bundle = adapter.finalize()
        name = scope.name
        stylesheet_path = None
        if bundle.stylesheet is not None:
            stylesheet_path = emitter.stylesheet_path(name, bundle.stylesheet.extension)

        content = emitter.assemble(
            AssembleContext(
                scope=scope,
                body=body,
                bundle=bundle,
                ref_mode=adapter.ref_mode,
                stylesheet_path=stylesheet_path,
            )
        )
        builder.add_file(emitter.component_path(name), content)
        if bundle.stylesheet is not None and stylesheet_path is not None:
            builder.add_file(stylesheet_path, bundle.stylesheet.content, FileType.STYLE)

        if config.tested:
            test = generate_smoke_test(
                config.target_surface,
                emitter.test_subject(name),
                emitter.root_tag(tree.root),
                emitter.test_import(name),
            )
            builder.add_file(emitter.test_path(name), test, FileType.TEST)

        dependencies, dev_dependencies = collect_dependencies(emitter, adapter, config)
        scripts = build_scripts(config)
        if config.manifest:
            manifest = render_package_json(name, config, dependencies, dev_dependencies, scripts)
            builder.add_file(MANIFEST_PATH, manifest, FileType.CONFIG)
            for companion in generate_companion_files(name, emitter, adapter, config, scripts, builder.files):
                builder.add_file(companion.path, companion.content, companion.type)

        metadata = ExportMetadata(
            target_surface=config.target_surface.value,
            styling_system=config.styling_system.value,
            component_name=name,
            total_files=len(builder.files),
            total_size=sum(f.size for f in builder.files),
        )
        self._report(100, "Done")
        logger.info(f"Exported '{name}': {metadata.total_files} file(s), {metadata.total_size} bytes")
        return builder.build(dependencies, dev_dependencies, scripts, metadata)

    def _select(self, config: ExportConfig) -> tuple[Emitter, StylingAdapter]:
        """Instantiate the emitter and adapter for the configuration."""
        emitter_class = ExportRegistry.get_emitter(config.target_surface)
        if emitter_class is None:
            raise UnsupportedCombinationError(f"No emitter registered for '{config.target_surface.value}'")
        adapter_class = ExportRegistry.get_styling(config.styling_system)
        if adapter_class is None:
            raise UnsupportedCombinationError(
                f"No styling adapter registered for '{config.styling_system.value}'"
            )
        if emitter_class.requires_typed and not config.typed:
            raise UnsupportedCombinationError(
                f"Target surface '{config.target_surface.value}' requires typed output"
            )
        return emitter_class(config), adapter_class(config)

    def _report(self, percent: int, message: str) -> None:
        logger.debug(f"[{percent:3d}%] {message}")
        if self.progress is not None:
            self.progress(percent, message)


class _TreeWalker:
    """Depth-first, pre-order walk feeding each node through the stages."""

    def __init__(
        self,
        config: ExportConfig,
        emitter: Emitter,
        adapter: StylingAdapter,
        scope: ComponentScope,
        builder: ExportResultBuilder,
        token: CancellationToken,
        total: int,
        report: Callable[[int, str], None],
    ):
        self.config = config
        self.emitter = emitter
        self.adapter = adapter
        self.injector = AccessibilityInjector(config) if config.accessible else None
        self.scope = scope
        self.builder = builder
        self.token = token
        self.total = total
        self.report = report
        self.visited = 0

    def visit(self, node: ComponentNode, is_root: bool = False) -> str:
        self.token.raise_if_cancelled(node.id)

        style = resolve_responsive(node, self.config.responsive)
        artifacts = self.adapter.resolve_classes_and_rules(style, node.id, self.config)
        attributes = self.emitter.node_attributes(node)
        if self.injector is not None:
            attributes = self.injector.inject(attributes, node)

        self.visited += 1
        self.report(10 + (80 * self.visited) // self.total, f"Processed '{node.id}'")

        children = [self.visit(child) for child in node.children]
        context = EmitContext(
            scope=self.scope,
            artifacts=artifacts,
            ref_mode=self.adapter.ref_mode,
            attributes=attributes,
            children=children,
            is_root=is_root,
        )
        try:
            return self.emitter.emit(node, self.config, context)
        except UnknownNodeKindError as e:
            logger.warning(f"Node '{node.id}' has unknown kind '{node.kind}', emitting passthrough element")
            self.builder.add_warning(e.code, e.message, node.id)
            return self.emitter.emit_passthrough(node, self.config, context)


def coerce_config(config: ConfigInput) -> ExportConfig:
    """
    Parse a configuration value.

    Raises:
        ValidationError: If a mapping does not describe a valid ExportConfig
    """
    if config is None:
        return ExportConfig()
    if isinstance(config, ExportConfig):
        return config
    try:
        return ExportConfig.model_validate(dict(config))
    except PydanticValidationError as e:
        raise ValidationError("Invalid export configuration", problems=validation_problems(e)) from e


def coerce_tree(tree: TreeInput) -> ComponentTree:
    """
    Normalise tree input into a detached ComponentTree.

    Raises:
        ValidationError: If a mapping does not describe a component tree
    """
    if isinstance(tree, ComponentTree):
        return tree
    if isinstance(tree, ComponentNode):
        return ComponentTree(root=tree)
    try:
        return ComponentTree.from_dict(tree)
    except PydanticValidationError as e:
        raise ValidationError("Invalid component tree", problems=validation_problems(e)) from e


def export_tree(
    tree: TreeInput,
    config: ConfigInput = None,
    *,
    progress: ProgressCallback | None = None,
    token: CancellationToken | None = None,
) -> ExportResult:
    """
    Export a component tree to framework source files.

    Args:
        tree: ComponentTree, root ComponentNode or nested mapping
        config: ExportConfig or mapping (defaults when None)
        progress: Optional (percent, message) callback
        token: Optional cancellation token

    Returns:
        ExportResult describing generated files and diagnostics
    """
    return ExportPipeline(config, progress=progress, token=token).run(tree)


async def export_async(
    tree: TreeInput,
    config: ConfigInput = None,
    *,
    progress: ProgressCallback | None = None,
    token: CancellationToken | None = None,
) -> ExportResult:
    """
    Run an export in a worker thread.

    Cancelling the awaiting task sets the cancellation token, so the worker
    stops at its next node boundary; the task's cancellation propagates.
    """
    token = token or CancellationToken()
    pipeline = ExportPipeline(config, progress=progress, token=token)
    try:
        return await asyncio.to_thread(pipeline.run, tree)
    except asyncio.CancelledError:
        token.cancel()
        raise
