"""On-disk template catalog.

Every template is one directory under the templates root holding a
``template.json`` manifest plus the template's own scaffold files::

    templates/
      react-basic/
        template.json
        index.html
        src/App.tsx
        ...

A directory whose manifest is missing, unreadable or names a different
template is skipped with a warning, so one broken template never hides the
others.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from codegen.config import Config
from codegen.errors import NotFoundError, ValidationError
from codegen.logger import Logger
from codegen.models import TEMPLATE_MANIFEST, Template, unique_features
from codegen.utils import load_json, remove_tree, save_json, write_text

from .frameworks import get_framework
from .templates import TemplateRenderer

DEFAULT_AUTHOR = "CodeGen CLI"

# Package-manager metadata directories that never belong to a template's file set
IGNORED_DIRS = frozenset({"node_modules"})

DEFAULT_TEMPLATES: list[dict[str, Any]] = [
    {
        "name": "react-basic",
        "framework": "react",
        "description": "Basic React application with modern tooling",
        "features": ["typescript", "eslint", "prettier"],
        "version": "1.0.0",
        "author": DEFAULT_AUTHOR,
    },
    {
        "name": "vue-starter",
        "framework": "vue",
        "description": "Vue.js starter template with composition API",
        "features": ["typescript", "eslint", "prettier"],
        "version": "1.0.0",
        "author": DEFAULT_AUTHOR,
    },
    {
        "name": "express-api",
        "framework": "express",
        "description": "Express.js REST API with middleware",
        "features": ["typescript", "eslint", "jest"],
        "version": "1.0.0",
        "author": DEFAULT_AUTHOR,
    },
    {
        "name": "vanilla-basic",
        "framework": "vanilla",
        "description": "Static HTML, CSS and JavaScript starter",
        "features": [],
        "version": "1.0.0",
        "author": DEFAULT_AUTHOR,
    },
]


def template_files(directory: Path) -> list[str]:
    """List a template's files as sorted relative POSIX paths.

    The manifest and anything below a package-manager metadata directory are
    excluded.
    """
    files: list[str] = []
    for path in directory.rglob("*"):
        if not path.is_file():
            continue
        rel = path.relative_to(directory)
        if rel.as_posix() == TEMPLATE_MANIFEST:
            continue
        if IGNORED_DIRS.intersection(rel.parts[:-1]):
            continue
        files.append(rel.as_posix())
    return sorted(files)


class TemplateRegistry:
    """Lists, creates and deletes templates under a templates root."""

    def __init__(
        self,
        templates_dir: str | Path,
        renderer: TemplateRenderer | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.templates_dir = Path(templates_dir)
        self.renderer = renderer or TemplateRenderer()
        self.logger = logger or Logger()

    @classmethod
    def from_config(cls, config: Config, logger: Logger | None = None) -> "TemplateRegistry":
        return cls(config.templates_path(), logger=logger or Logger(config.log_level))

    # -- Public API --------------------------------------------------------

    async def ensure_defaults(self) -> list[Template]:
        """Create the built-in templates if the root holds no valid template.

        Returns:
            The templates created; empty when templates already existed.
        """
        await asyncio.to_thread(self.templates_dir.mkdir, parents=True, exist_ok=True)
        if await self.list_templates():
            return []

        self.logger.info(f"Creating default templates in {self.templates_dir}")
        return [await self.create(data) for data in DEFAULT_TEMPLATES]

    async def list_templates(self) -> list[Template]:
        """Return every valid template, ordered by directory name.

        Never raises: unreadable roots and broken templates are logged and
        skipped.
        """
        return await asyncio.to_thread(self._scan)

    async def get(self, name: str) -> Template:
        """Return the template called *name*.

        Raises:
            NotFoundError: If no valid template has that name.
        """
        for template in await self.list_templates():
            if template.name == name:
                return template
        raise NotFoundError(f"Template not found: {name}")

    async def create(self, data: Mapping[str, Any]) -> Template:
        """Create a template directory with its manifest and base files.

        Args:
            data: ``{name, framework, description, features, author}``;
                ``version`` is optional.

        Raises:
            ValidationError: If the name is empty or is not a plain directory
                name, or a template with that name already exists.  Nothing is written in that case.
        """
        name = str(data.get("name") or "").strip()
        if not name:
            raise ValidationError("Template name is required")
        if name in {".", ".."} or "/" in name or "\\" in name:
            raise ValidationError(f"Template name must be a plain directory name: {name!r}")

        template = Template(
            name=name,
            framework=str(data.get("framework") or "generic"),
            description=str(data.get("description") or ""),
            features=unique_features(data.get("features") or []),
            version=str(data.get("version") or "1.0.0"),
            author=str(data.get("author") or ""),
        )
        files = get_framework(template.framework, self.renderer).generate_base(template.features)

        directory = self.templates_dir / name
        if await asyncio.to_thread((directory / TEMPLATE_MANIFEST).is_file):
            raise ValidationError(f"Template already exists: {name}")
        await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
        await save_json(template.to_manifest(), directory / TEMPLATE_MANIFEST)
        for rel_path, content in files.items():
            await write_text(directory / rel_path, content)

        self.logger.debug(f"Created template {name} ({template.framework}, {len(files)} files)")
        return template.model_copy(update={"path": directory, "files": sorted(files)})

    async def delete(self, name: str) -> None:
        """Remove the template called *name* and all of its files.

        Raises:
            NotFoundError: If no valid template has that name.
        """
        template = await self.get(name)
        assert template.path is not None
        await remove_tree(template.path)
        self.logger.debug(f"Deleted template {name}")

    # -- Scanning ----------------------------------------------------------

    def _scan(self) -> list[Template]:
        if not self.templates_dir.is_dir():
            self.logger.debug(f"Templates directory does not exist: {self.templates_dir}")
            return []
        try:
            directories = sorted(p for p in self.templates_dir.iterdir() if p.is_dir())
        except OSError as exc:
            self.logger.warning(f"Error listing templates in {self.templates_dir}: {exc}")
            return []

        templates: list[Template] = []
        for directory in directories:
            template = self._load(directory)
            if template is not None:
                templates.append(template)
        return templates

    def _load(self, directory: Path) -> Template | None:
        manifest = directory / TEMPLATE_MANIFEST
        if not manifest.is_file():
            self.logger.warning(f"Skipping {directory.name}: no {TEMPLATE_MANIFEST}")
            return None
        try:
            template = Template.model_validate(load_json(manifest))
            files = template_files(directory)
        except (OSError, json.JSONDecodeError, PydanticValidationError) as exc:
            self.logger.warning(f"Skipping {directory.name}: invalid {TEMPLATE_MANIFEST} ({exc})")
            return None
        if template.name != directory.name:
            self.logger.warning(
                f"Skipping {directory.name}: manifest declares name {template.name!r}"
            )
            return None
        return template.model_copy(update={"files": files, "path": directory})
