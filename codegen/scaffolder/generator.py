"""Main scaffolding orchestrator.

Takes loose generation options, validates them into a ``ProjectRequest``
and runs the linear pipeline::

    remove existing target -> create target -> resolve template
        -> scaffold -> apply features in order -> write package.json

Nothing is rolled back on failure: files written by earlier steps stay on
disk and the first error is re-raised unchanged.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from codegen.config import Config
from codegen.errors import GenerationCancelledError
from codegen.logger import Logger
from codegen.models import GenerationResult, ProjectRequest
from codegen.utils import format_duration, remove_tree

from .features import FeatureComposer
from .manifest import ManifestBuilder
from .materializer import TemplateMaterializer
from .registry import TemplateRegistry


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------


class CancellationToken:
    """Cooperative cancellation flag checked between pipeline steps."""

    def __init__(self) -> None:
        self._cancelled = False
        self.reason = ""

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self, reason: str = "Generation cancelled") -> None:
        self._cancelled = True
        self.reason = reason

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise GenerationCancelledError(self.reason)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Generates a project directory from a template plus optional features.

    All collaborators are created from *config* unless passed in explicitly,
    which is how tests substitute a registry rooted in a temporary directory.
    """

    def __init__(
        self,
        config: Config,
        logger: Logger | None = None,
        registry: TemplateRegistry | None = None,
        composer: FeatureComposer | None = None,
        manifest_builder: ManifestBuilder | None = None,
        ensure_default_templates: bool = True,
    ) -> None:
        self.config = config
        self.logger = logger or Logger(config.log_level)
        self.registry = registry or TemplateRegistry.from_config(config, self.logger)
        self.materializer = TemplateMaterializer(self.registry, self.logger)
        self.composer = composer or FeatureComposer(self.registry.renderer, self.logger)
        self.manifest_builder = manifest_builder or ManifestBuilder(config.use_exact_versions)
        self.ensure_default_templates = ensure_default_templates

    # -- Public API --------------------------------------------------------

    def build_request(self, options: Mapping[str, Any]) -> ProjectRequest:
        """Validate *options* and attach the target path.

        Raises:
            ValidationError: Before any filesystem access.
        """
        request = ProjectRequest.from_options(options, self.config.default_package_manager)
        output_root = Path(options.get("output_dir") or self.config.output_directory).expanduser()
        return request.model_copy(update={"target_path": output_root / request.name})

    async def generate(
        self, options: Mapping[str, Any], token: CancellationToken | None = None
    ) -> GenerationResult:
        """Generate a project.

        Args:
            options: ``{name, framework, features, packageManager, template,
                description, output_dir}``; only ``name`` and ``framework``
                are required.
            token: Optional cancellation token checked between steps.

        Returns:
            The generation result with the project path and the request.
        """
        token = token or CancellationToken()
        self.logger.info(f"Starting project generation for {options.get('name')!r}...")
        started = time.monotonic()
        try:
            request = self.build_request(options)
            project_path = request.target_path
            assert project_path is not None

            if project_path.exists():
                self.logger.info(f"Removing existing directory {project_path}...")
                await remove_tree(project_path)
            token.raise_if_cancelled()

            self.logger.info(f"Creating project directory {project_path}...")
            await asyncio.to_thread(project_path.mkdir, parents=True, exist_ok=True)

            self.logger.info("Generating base template...")
            if self.ensure_default_templates:
                await self.registry.ensure_defaults()
            template = await self.materializer.resolve(request.framework, request.template)
            token.raise_if_cancelled()
            await self.materializer.scaffold(template, project_path, request)

            if request.features:
                self.logger.info(f"Adding selected features: {', '.join(request.features)}...")
                await self.composer.apply_all(project_path, request.features, request, token)
            token.raise_if_cancelled()

            self.logger.info("Creating package.json...")
            manifest = self.manifest_builder.build(request)
            await self.manifest_builder.write(project_path, manifest)
        except Exception as exc:
            self.logger.error(f"Failed to generate project: {exc}")
            raise

        self.logger.info(
            f"Dependencies will be installed when you run "
            f"'{request.package_manager.value} install' in the project directory."
        )
        self.logger.success(
            f"Project {request.name!r} generated in {project_path} "
            f"({format_duration(time.monotonic() - started)})"
        )
        return GenerationResult(project_path=project_path, project_details=request)

    async def generate_with_timeout(
        self,
        options: Mapping[str, Any],
        timeout: float,
        token: CancellationToken | None = None,
    ) -> GenerationResult:
        """Run :meth:`generate`, giving up after *timeout* seconds.

        On expiry the pipeline task is cancelled at its next await point, the
        token (if any) is marked cancelled, and ``TimeoutError`` is raised.
        Files already written are left in place.
        """
        token = token or CancellationToken()
        try:
            return await asyncio.wait_for(self.generate(options, token), timeout=timeout)
        except asyncio.TimeoutError:
            token.cancel("Project generation timed out")
            self.logger.error(f"Project generation timed out after {timeout}s")
            raise TimeoutError("Project generation timed out") from None
