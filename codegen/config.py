"""CodeGen configuration.

User settings live in a single JSON document under a per-user config
directory (``~/.codegen-cli/config.json`` by default).  The settings are a
Pydantic v2 model so that partial updates are validated before they are
persisted.  Nothing here is a process-wide singleton: callers load a
``Config`` once and pass it to whatever needs it.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from codegen.logger import normalize_level
from codegen.utils import print_warning

CONFIG_DIR_NAME = ".codegen-cli"
CONFIG_FILE_NAME = "config.json"


def default_config_dir() -> Path:
    """Return the config directory, honouring ``CODEGEN_CONFIG_DIR``."""
    override = os.environ.get("CODEGEN_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_DIR_NAME


def config_file_path(config_dir: Path) -> Path:
    return Path(config_dir) / CONFIG_FILE_NAME


class Config(BaseModel):
    """User preferences for project generation.

    ``templates_directory`` is left empty in a fresh model and filled in by
    :func:`load_config` relative to the config directory it was loaded from.
    A model that never went through :func:`load_config` falls back to the
    default config directory (see :meth:`templates_path`).
    """

    default_author: str = Field(default="")
    default_email: str = Field(default="")
    log_level: str = Field(default="info")
    auto_install_dependencies: bool = Field(default=True)
    show_tips: bool = Field(default=True)
    templates_directory: Path | None = Field(default=None)
    auto_update_templates: bool = Field(default=True)
    default_framework: str = Field(default="react")
    default_package_manager: Literal["npm", "yarn", "pnpm"] = Field(default="npm")
    use_exact_versions: bool = Field(
        default=False, description="Strip range prefixes from generated dependency versions"
    )
    npm_registry: str = Field(default="https://registry.npmjs.org/")
    preferred_editor: str = Field(default="vscode")
    open_in_editor: bool = Field(default=True)
    terminal_shell: str = Field(default="bash")
    generate_gitignore: bool = Field(default=True)
    output_directory: Path = Field(
        default_factory=lambda: Path.home() / "Downloads",
        description="Parent directory for generated projects",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        return normalize_level(value)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    def with_env_overrides(self) -> "Config":
        """Return a copy with process-level overrides applied.

        Recognised variables (all optional): CODEGEN_LOG_LEVEL,
        CODEGEN_TEMPLATES_DIR, CODEGEN_OUTPUT_DIR.  Overrides are never
        persisted.

        Raises:
            pydantic.ValidationError: If an override is not a valid value.
        """
        overrides: dict[str, Any] = {}
        if os.environ.get("CODEGEN_LOG_LEVEL"):
            overrides["log_level"] = os.environ["CODEGEN_LOG_LEVEL"]
        if os.environ.get("CODEGEN_TEMPLATES_DIR"):
            overrides["templates_directory"] = Path(os.environ["CODEGEN_TEMPLATES_DIR"])
        if os.environ.get("CODEGEN_OUTPUT_DIR"):
            overrides["output_directory"] = Path(os.environ["CODEGEN_OUTPUT_DIR"])
        if not overrides:
            return self
        return Config.model_validate({**self.model_dump(), **overrides})

    def templates_path(self) -> Path:
        """Return the templates root, defaulting to ``<default config dir>/templates``."""
        if self.templates_directory is not None:
            return self.templates_directory
        return default_config_dir() / "templates"


# ---------------------------------------------------------------------------
# Persistence functions
# ---------------------------------------------------------------------------


def _with_templates_dir(config: Config, config_dir: Path) -> Config:
    if config.templates_directory is not None:
        return config
    return config.model_copy(update={"templates_directory": Path(config_dir) / "templates"})


def load_config(config_dir: Path | None = None) -> Config:
    """Load settings from *config_dir*, creating and saving defaults on first run.

    A document that cannot be parsed or validated is reported and replaced
    in memory by the defaults; the file on disk is left untouched so the user
    can repair it.  The templates directory is created if missing.
    """
    config_dir = Path(config_dir) if config_dir is not None else default_config_dir()
    path = config_file_path(config_dir)

    if path.exists():
        try:
            config = _with_templates_dir(Config.load(path), config_dir)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            print_warning(f"Failed to read configuration {path}: {exc}. Using defaults.")
            config = _with_templates_dir(Config(), config_dir)
    else:
        config = _with_templates_dir(Config(), config_dir)
        config.save(path)

    config.templates_path().mkdir(parents=True, exist_ok=True)
    return config


def save_config(config: Config, config_dir: Path | None = None) -> Path:
    """Write *config* to ``<config_dir>/config.json``."""
    config_dir = Path(config_dir) if config_dir is not None else default_config_dir()
    return config.save(config_file_path(config_dir))


def update_config(
    config: Config, updates: dict[str, Any], config_dir: Path | None = None
) -> Config:
    """Merge *updates* over *config*, validate, persist and return the result.

    The input model is not modified.  Unknown keys are rejected.

    Raises:
        pydantic.ValidationError: If the merged settings are invalid.
        KeyError: If *updates* names a setting that does not exist.
    """
    unknown = sorted(set(updates) - set(Config.model_fields))
    if unknown:
        raise KeyError(f"Unknown configuration keys: {', '.join(unknown)}")
    merged = Config.model_validate({**config.model_dump(), **updates})
    save_config(merged, config_dir)
    return merged


def reset_config(config_dir: Path | None = None) -> Config:
    """Restore the default settings and persist them."""
    config_dir = Path(config_dir) if config_dir is not None else default_config_dir()
    config = _with_templates_dir(Config(), config_dir)
    save_config(config, config_dir)
    return config
