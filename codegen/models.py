"""Pydantic models shared by the scaffolding engine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from codegen.errors import ValidationError
from codegen.validation import validate_package_name

TEMPLATE_MANIFEST = "template.json"


class PackageManager(str, Enum):
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


def unique_features(features: Iterable[str]) -> list[str]:
    """Drop duplicate feature ids, keeping the first occurrence of each."""
    seen: set[str] = set()
    ordered: list[str] = []
    for feature in features:
        if feature not in seen:
            seen.add(feature)
            ordered.append(feature)
    return ordered


# ---------------------------------------------------------------------------
# Template
# ---------------------------------------------------------------------------


class Template(BaseModel):
    """A named file-tree skeleton stored under the templates directory.

    ``files`` is always persisted as an empty list and filled from disk when
    the registry lists templates.  ``path`` is the template's root directory
    and is never written to ``template.json``.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    framework: str = Field(default="generic")
    description: str = Field(default="")
    features: list[str] = Field(default_factory=list)
    version: str = Field(default="1.0.0")
    author: str = Field(default="")
    created_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        alias="createdAt",
    )
    files: list[str] = Field(default_factory=list)
    path: Path | None = Field(default=None, exclude=True)

    def to_manifest(self) -> dict[str, Any]:
        """Return the ``template.json`` document for this template."""
        data = self.model_dump(by_alias=True)
        data["files"] = []
        return data


# ---------------------------------------------------------------------------
# Project request / result
# ---------------------------------------------------------------------------


class ProjectRequest(BaseModel):
    """One generation call, validated before any I/O happens."""

    name: str
    framework: str
    features: list[str] = Field(default_factory=list)
    package_manager: PackageManager = Field(default=PackageManager.NPM)
    template: str | None = Field(default=None, description="Explicit template name")
    description: str = Field(default="")
    target_path: Path | None = Field(default=None)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        errors = validate_package_name(value)
        if errors:
            raise ValueError("; ".join(errors))
        return value

    @field_validator("features")
    @classmethod
    def _dedupe_features(cls, value: list[str]) -> list[str]:
        return unique_features(value)

    @classmethod
    def from_options(
        cls, options: Mapping[str, Any], default_package_manager: str = "npm"
    ) -> "ProjectRequest":
        """Build a request from loose caller options.

        Accepts both ``packageManager`` and ``package_manager`` spellings.

        Raises:
            ValidationError: If ``name`` or ``framework`` is missing, the name
                is not a valid package name, or the package manager is unknown.
        """
        name = options.get("name")
        framework = options.get("framework")
        if not name or not framework:
            raise ValidationError("Project name and framework are required")

        errors = validate_package_name(name)
        if errors:
            raise ValidationError(f"Invalid project name {name!r}", errors)

        manager = (
            options.get("packageManager")
            or options.get("package_manager")
            or default_package_manager
        )
        try:
            package_manager = PackageManager(manager)
        except ValueError:
            choices = ", ".join(pm.value for pm in PackageManager)
            raise ValidationError(
                f"Unknown package manager {manager!r} (expected one of {choices})"
            ) from None

        features = options.get("features") or []
        if isinstance(features, str) or not all(isinstance(f, str) for f in features):
            raise ValidationError("Features must be a list of strings")

        return cls(
            name=name,
            framework=str(framework),
            features=list(features),
            package_manager=package_manager,
            template=options.get("template") or None,
            description=options.get("description") or "",
        )


class GenerationResult(BaseModel):
    """Outcome of a successful generation."""

    success: bool = True
    project_path: Path
    project_details: ProjectRequest
