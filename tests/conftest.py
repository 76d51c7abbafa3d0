"""Shared pytest fixtures for the CodeGen test suite.

Provides reusable fixtures for:
- Temporary config, templates and output directories
- A debug-level logger writing to an in-memory console
- Registries, composers and generators rooted in ``tmp_path``
- Pre-built project requests
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from codegen.config import Config, load_config
from codegen.logger import Logger
from codegen.models import ProjectRequest
from codegen.scaffolder import (
    FeatureComposer,
    ProjectGenerator,
    TemplateMaterializer,
    TemplateRegistry,
    TemplateRenderer,
)


# ---------------------------------------------------------------------------
# Paths & configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Per-test configuration directory (not created up front)."""
    return tmp_path / ".codegen-cli"


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory that generated projects are written into."""
    out = tmp_path / "Downloads"
    out.mkdir()
    return out


@pytest.fixture
def config(config_dir: Path, output_dir: Path) -> Config:
    """Loaded configuration whose output directory lives under ``tmp_path``."""
    loaded = load_config(config_dir)
    return loaded.model_copy(update={"output_directory": output_dir, "log_level": "debug"})


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

@pytest.fixture
def log_console() -> Console:
    """Console writing plain text to memory; read it with ``.file.getvalue()``."""
    return Console(file=io.StringIO(), force_terminal=False, width=200)


@pytest.fixture
def logger(log_console: Console) -> Logger:
    return Logger("debug", console=log_console)


# ---------------------------------------------------------------------------
# Scaffolder components
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    return tmp_path / "templates"


@pytest.fixture
def registry(templates_dir: Path, renderer: TemplateRenderer, logger: Logger) -> TemplateRegistry:
    """An empty registry rooted in ``tmp_path``."""
    return TemplateRegistry(templates_dir, renderer=renderer, logger=logger)


@pytest.fixture
async def seeded_registry(registry: TemplateRegistry) -> TemplateRegistry:
    """A registry holding the built-in default templates."""
    await registry.ensure_defaults()
    return registry


@pytest.fixture
def materializer(registry: TemplateRegistry, logger: Logger) -> TemplateMaterializer:
    return TemplateMaterializer(registry, logger)


@pytest.fixture
def composer(renderer: TemplateRenderer, logger: Logger) -> FeatureComposer:
    return FeatureComposer(renderer, logger)


@pytest.fixture
def generator(config: Config, registry: TemplateRegistry, logger: Logger) -> ProjectGenerator:
    """Generator writing into ``output_dir`` with templates in ``templates_dir``."""
    return ProjectGenerator(config, logger=logger, registry=registry)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

@pytest.fixture
def react_request(output_dir: Path) -> ProjectRequest:
    return ProjectRequest(
        name="react-app",
        framework="react",
        features=["typescript", "eslint", "jest"],
        description="A React test app",
        target_path=output_dir / "react-app",
    )


@pytest.fixture
def vanilla_request(output_dir: Path) -> ProjectRequest:
    return ProjectRequest(
        name="demo-app",
        framework="vanilla",
        target_path=output_dir / "demo-app",
    )
