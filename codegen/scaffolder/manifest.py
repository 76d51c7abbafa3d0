"""Derives the generated project's ``package.json``.

Everything except :meth:`ManifestBuilder.write` is a pure function of the
framework and the feature list.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from codegen.models import ProjectRequest
from codegen.utils import save_json

MANIFEST_FILE = "package.json"

VITE_FRAMEWORKS = frozenset({"react", "vue"})

_VITE_SCRIPTS: dict[str, str] = {
    "dev": "vite",
    "build": "vite build",
    "preview": "vite preview",
}

BASE_SCRIPTS: dict[str, dict[str, str]] = {
    "react": _VITE_SCRIPTS,
    "vue": _VITE_SCRIPTS,
    "express": {
        "start": "node index.js",
        "dev": "nodemon index.js",
    },
}

DEFAULT_SCRIPTS: dict[str, str] = {"start": "node index.js"}

LINT_TARGETS = ".js,.jsx,.ts,.tsx"

BASE_DEPENDENCIES: dict[str, dict[str, str]] = {
    "react": {"react": "^18.2.0", "react-dom": "^18.2.0"},
    "vue": {"vue": "^3.3.0"},
    "express": {"express": "^4.18.0"},
    "vanilla": {},
}

FEATURE_DEPENDENCIES: dict[str, dict[str, str]] = {
    "tailwind": {"tailwindcss": "^3.3.0"},
}

FEATURE_DEV_DEPENDENCIES: dict[str, dict[str, str]] = {
    "typescript": {"typescript": "^5.0.0"},
    "eslint": {"eslint": "^8.45.0"},
    "prettier": {"prettier": "^3.0.0"},
    "jest": {"jest": "^29.6.0"},
}

REACT_TYPES: dict[str, str] = {
    "@types/react": "^18.2.0",
    "@types/react-dom": "^18.2.0",
}

VITE_VERSION = "^4.4.0"


def exact_version(version: str) -> str:
    """Strip a leading ``^`` or ``~`` range operator."""
    return version.lstrip("^~")


class ManifestBuilder:
    """Builds and writes ``package.json`` for a framework and feature set."""

    def __init__(self, use_exact_versions: bool = False) -> None:
        self.use_exact_versions = use_exact_versions

    def build_scripts(self, framework: str, features: Sequence[str]) -> dict[str, str]:
        scripts = dict(BASE_SCRIPTS.get(framework, DEFAULT_SCRIPTS))
        if "eslint" in features:
            scripts["lint"] = f"eslint . --ext {LINT_TARGETS}"
            scripts["lint-fix"] = f"eslint . --ext {LINT_TARGETS} --fix"
        if "jest" in features:
            scripts["test"] = "jest"
            scripts["test-watch"] = "jest --watch"
        return scripts

    def build_dependencies(self, framework: str, features: Sequence[str]) -> dict[str, str]:
        dependencies = dict(BASE_DEPENDENCIES.get(framework, {}))
        for feature, packages in FEATURE_DEPENDENCIES.items():
            if feature in features:
                dependencies.update(packages)
        return self._pin(dependencies)

    def build_dev_dependencies(self, framework: str, features: Sequence[str]) -> dict[str, str]:
        dev_dependencies: dict[str, str] = {}
        if framework in VITE_FRAMEWORKS:
            dev_dependencies["vite"] = VITE_VERSION
        for feature, packages in FEATURE_DEV_DEPENDENCIES.items():
            if feature in features:
                dev_dependencies.update(packages)
                if feature == "typescript" and framework == "react":
                    dev_dependencies.update(REACT_TYPES)
        return self._pin(dev_dependencies)

    def build(self, details: ProjectRequest) -> dict[str, Any]:
        """Return the complete manifest document for *details*."""
        framework, features = details.framework, details.features
        description = details.description or f"A {framework} project generated with CodeGen CLI"
        return {
            "name": details.name,
            "version": "1.0.0",
            "description": description,
            "main": "index.js",
            "scripts": self.build_scripts(framework, features),
            "dependencies": self.build_dependencies(framework, features),
            "devDependencies": self.build_dev_dependencies(framework, features),
            "private": True,
        }

    async def write(self, project_path: str | Path, manifest: dict[str, Any]) -> Path:
        """Write *manifest* as ``package.json`` under *project_path*."""
        return await save_json(manifest, Path(project_path) / MANIFEST_FILE)

    def _pin(self, packages: dict[str, str]) -> dict[str, str]:
        if not self.use_exact_versions:
            return packages
        return {name: exact_version(version) for name, version in packages.items()}
