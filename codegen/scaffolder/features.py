"""Optional feature add-ons layered onto a scaffolded project.

Features are looked up by string id in a handler registry, so new ones can
be registered without touching the composer.  An id with no handler is a
no-op logged at debug level.  Handlers only assume the project directory
exists; none of them depends on another feature having run.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from codegen.logger import Logger
from codegen.models import ProjectRequest
from codegen.utils import read_text, save_json, write_text

from .templates import TemplateRenderer

if TYPE_CHECKING:
    from .generator import CancellationToken

FeatureHandler = Callable[[Path, ProjectRequest, TemplateRenderer], Awaitable[list[Path]]]

TAILWIND_DIRECTIVES = "@tailwind base;\n@tailwind components;\n@tailwind utilities;\n\n"

DOCKER_PORT = 3000


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def add_eslint(
    project_path: Path, details: ProjectRequest, renderer: TemplateRenderer
) -> list[Path]:
    """Write ``.eslintrc.json``; React projects get the react plugin as well."""
    config: dict[str, Any] = {
        "env": {"browser": True, "es2021": True, "node": True},
        "extends": ["eslint:recommended"],
        "parserOptions": {"ecmaVersion": 12, "sourceType": "module"},
        "rules": {},
    }
    if details.framework == "react":
        config["extends"].append("plugin:react/recommended")
        config["plugins"] = ["react"]
        config["settings"] = {"react": {"version": "detect"}}
        config["parserOptions"]["ecmaFeatures"] = {"jsx": True}
        # New JSX transform: React need not be in scope
        config["rules"]["react/react-in-jsx-scope"] = "off"

    return [await save_json(config, project_path / ".eslintrc.json")]


async def add_prettier(
    project_path: Path, details: ProjectRequest, renderer: TemplateRenderer
) -> list[Path]:
    config = {
        "semi": True,
        "trailingComma": "es5",
        "singleQuote": True,
        "printWidth": 80,
        "tabWidth": 2,
    }
    return [await save_json(config, project_path / ".prettierrc")]


async def add_jest(
    project_path: Path, details: ProjectRequest, renderer: TemplateRenderer
) -> list[Path]:
    """Write ``jest.config.json``; React projects run under jsdom."""
    config: dict[str, Any] = {"testEnvironment": "node"}
    if details.framework == "react":
        config["testEnvironment"] = "jsdom"
        config["setupFilesAfterEnv"] = ["<rootDir>/src/setupTests.js"]
    return [await save_json(config, project_path / "jest.config.json")]


async def add_tailwind(
    project_path: Path, details: ProjectRequest, renderer: TemplateRenderer
) -> list[Path]:
    """Write ``tailwind.config.js`` and prepend the directives to ``src/index.css``.

    The directives are prepended on every application, so applying the
    feature twice leaves two copies at the top of the stylesheet.  A project
    without ``src/index.css`` only gets the config file.
    """
    written = [
        await write_text(
            project_path / "tailwind.config.js",
            renderer.render("features/tailwind.config.js.j2", {}),
        )
    ]

    css_path = project_path / "src" / "index.css"
    if css_path.is_file():
        existing = await read_text(css_path)
        written.append(await write_text(css_path, TAILWIND_DIRECTIVES + existing))
    return written


async def add_docker(
    project_path: Path, details: ProjectRequest, renderer: TemplateRenderer
) -> list[Path]:
    """Write a ``Dockerfile`` for the request's package manager and a ``.dockerignore``."""
    context = {"package_manager": details.package_manager.value, "port": DOCKER_PORT}
    return [
        await write_text(
            project_path / "Dockerfile", renderer.render("features/Dockerfile.j2", context)
        ),
        await write_text(
            project_path / ".dockerignore", renderer.render("features/dockerignore.j2", context)
        ),
    ]


DEFAULT_HANDLERS: dict[str, FeatureHandler] = {
    "eslint": add_eslint,
    "prettier": add_prettier,
    "jest": add_jest,
    "tailwind": add_tailwind,
    "docker": add_docker,
}


# ---------------------------------------------------------------------------
# Composer
# ---------------------------------------------------------------------------


class FeatureComposer:
    """Applies feature handlers to a project directory in caller order."""

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        logger: Logger | None = None,
        handlers: dict[str, FeatureHandler] | None = None,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.logger = logger or Logger()
        self.handlers: dict[str, FeatureHandler] = dict(
            DEFAULT_HANDLERS if handlers is None else handlers
        )

    def register(self, feature: str, handler: FeatureHandler) -> None:
        """Add or replace the handler for *feature*."""
        self.handlers[feature] = handler

    def supported(self) -> list[str]:
        return sorted(self.handlers)

    async def apply(
        self, project_path: str | Path, feature: str, details: ProjectRequest
    ) -> list[Path]:
        """Apply one feature.

        Returns:
            Files written or rewritten; empty for an unknown feature.
        """
        handler = self.handlers.get(feature)
        if handler is None:
            self.logger.debug(f"Feature {feature} not implemented yet")
            return []
        return await handler(Path(project_path), details, self.renderer)

    async def apply_all(
        self,
        project_path: str | Path,
        features: Sequence[str],
        details: ProjectRequest,
        token: CancellationToken | None = None,
    ) -> dict[str, list[Path]]:
        """Apply *features* one after another in the given order.

        The first handler error propagates and the remaining features are not
        applied.

        Returns:
            Mapping of feature id to the files it wrote.
        """
        results: dict[str, list[Path]] = {}
        for feature in features:
            if token is not None:
                token.raise_if_cancelled()
            self.logger.info(f"Adding {feature}...")
            results[feature] = await self.apply(project_path, feature, details)
        return results
