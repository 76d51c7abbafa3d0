"""Materialises a registry template into a project directory.

Scaffolding copies every template file into the target, replacing the two
substitution tokens along the way.  Files are written one at a time and the
first I/O error propagates; files written before the failure stay on disk.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from codegen.errors import NotFoundError, ValidationError
from codegen.logger import Logger
from codegen.models import ProjectRequest, Template
from codegen.utils import read_text, write_text

from .frameworks import FileSet, get_framework
from .registry import TemplateRegistry, template_files

PROJECT_NAME_TOKEN = "{{projectName}}"
PROJECT_DESCRIPTION_TOKEN = "{{projectDescription}}"


def substitute_tokens(content: str, name: str, description: str | None = None) -> str:
    """Replace both substitution tokens everywhere in *content* (case-sensitive)."""
    content = content.replace(PROJECT_NAME_TOKEN, name)
    return content.replace(PROJECT_DESCRIPTION_TOKEN, description or "")


class TemplateMaterializer:
    """Resolves a template for a framework and copies it into a target."""

    def __init__(self, registry: TemplateRegistry, logger: Logger | None = None) -> None:
        self.registry = registry
        self.logger = logger or registry.logger

    async def resolve(self, framework: str, template_name: str | None = None) -> Template:
        """Pick the template used for *framework*.

        An explicitly named template wins when it exists.  Otherwise the first
        template declaring *framework* is used, and failing that the first
        template in listing order.

        Raises:
            NotFoundError: If the registry holds no templates at all.
        """
        templates = await self.registry.list_templates()
        if not templates:
            raise NotFoundError(f"No template found for framework: {framework}")

        if template_name:
            for template in templates:
                if template.name == template_name:
                    return template
            self.logger.warning(
                f"Template {template_name!r} not found, selecting by framework instead"
            )

        for template in templates:
            if template.framework == framework:
                return template

        fallback = templates[0]
        self.logger.warning(
            f"No {framework} template available, falling back to {fallback.name} "
            f"({fallback.framework})"
        )
        return fallback

    def generate_base_files(self, framework: str, features: Sequence[str]) -> FileSet:
        """Return the canonical skeleton for *framework* without writing it."""
        return get_framework(framework, self.registry.renderer).generate_base(features)

    async def scaffold(
        self, template: Template, target: str | Path, details: ProjectRequest
    ) -> list[Path]:
        """Copy *template* into *target* with tokens substituted.

        The manifest and ``node_modules/`` are not copied.  Content is not
        inspected for binary data.

        Args:
            template: A template returned by the registry (``path`` set).
            target: Project root to write into.
            details: Supplies the ``name`` and ``description`` substitutions.

        Raises:
            ValidationError: If *template* was not loaded from the registry.

        Returns:
            Written paths, in template file order.
        """
        if template.path is None:
            raise ValidationError(f"Template {template.name} has no directory on disk")
        source_root = Path(template.path)
        target_root = Path(target)

        written: list[Path] = []
        for rel_path in template_files(source_root):
            content = await read_text(source_root / rel_path)
            rendered = substitute_tokens(content, details.name, details.description)
            written.append(await write_text(target_root / rel_path, rendered))

        self.logger.debug(f"Scaffolded {len(written)} files from template {template.name}")
        return written
