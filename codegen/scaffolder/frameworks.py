"""Framework strategies producing a project's base skeleton.

Each strategy turns a feature list into a ``FileSet``: a mapping from
relative POSIX path to file content.  Strategies never touch the disk; the
registry writes the result into a template directory.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from .templates import TemplateRenderer

FileSet = dict[str, str]

TYPESCRIPT = "typescript"


# ---------------------------------------------------------------------------
# TypeScript compiler options
# ---------------------------------------------------------------------------

_BROWSER_TSCONFIG: dict[str, Any] = {
    "compilerOptions": {
        "target": "ES2020",
        "useDefineForClassFields": True,
        "lib": ["ES2020", "DOM", "DOM.Iterable"],
        "module": "ESNext",
        "skipLibCheck": True,
        "moduleResolution": "bundler",
        "allowImportingTsExtensions": True,
        "resolveJsonModule": True,
        "isolatedModules": True,
        "noEmit": True,
        "jsx": "react-jsx",
        "strict": True,
        "noUnusedLocals": True,
        "noUnusedParameters": True,
        "noFallthroughCasesInSwitch": True,
    },
    "include": ["src"],
    "references": [{"path": "./tsconfig.node.json"}],
}

_NODE_TSCONFIG: dict[str, Any] = {
    "compilerOptions": {
        "target": "ES2020",
        "module": "commonjs",
        "lib": ["ES2020"],
        "outDir": "./dist",
        "rootDir": "./",
        "strict": True,
        "esModuleInterop": True,
        "skipLibCheck": True,
        "forceConsistentCasingInFileNames": True,
        "resolveJsonModule": True,
    },
    "include": ["**/*"],
    "exclude": ["node_modules", "dist"],
}


def _json_document(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2) + "\n"


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class FrameworkScaffold:
    """Base strategy: renders the skeleton files for one framework."""

    name = "generic"

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def generate_base(self, features: Sequence[str]) -> FileSet:
        """Return the README-only skeleton listing *features*."""
        context = {"framework": self.name, "features": list(features)}
        return {"README.md": self.renderer.render("generic/README.md.j2", context)}


class GenericScaffold(FrameworkScaffold):
    """Fallback for frameworks without a dedicated skeleton."""

    def __init__(self, renderer: TemplateRenderer | None = None, name: str = "generic") -> None:
        super().__init__(renderer)
        self.name = name


class ReactScaffold(FrameworkScaffold):
    name = "react"

    def generate_base(self, features: Sequence[str]) -> FileSet:
        typescript = TYPESCRIPT in features
        ext = "tsx" if typescript else "jsx"
        context = {"typescript": typescript, "ext": ext}
        files: FileSet = {
            f"src/App.{ext}": self.renderer.render("react/App.j2", context),
            f"src/main.{ext}": self.renderer.render("react/main.j2", context),
            "src/index.css": self.renderer.render("react/index.css.j2", context),
            "index.html": self.renderer.render("react/index.html.j2", context),
            "vite.config.js": self.renderer.render("react/vite.config.js.j2", context),
        }
        if typescript:
            files["tsconfig.json"] = _json_document(_BROWSER_TSCONFIG)
        return files


class VueScaffold(FrameworkScaffold):
    name = "vue"

    def generate_base(self, features: Sequence[str]) -> FileSet:
        typescript = TYPESCRIPT in features
        ext = "ts" if typescript else "js"
        context = {"typescript": typescript, "ext": ext}
        return {
            "src/App.vue": self.renderer.render("vue/App.vue.j2", context),
            f"src/main.{ext}": self.renderer.render("vue/main.j2", context),
            "index.html": self.renderer.render("vue/index.html.j2", context),
        }


class ExpressScaffold(FrameworkScaffold):
    name = "express"

    def generate_base(self, features: Sequence[str]) -> FileSet:
        typescript = TYPESCRIPT in features
        ext = "ts" if typescript else "js"
        context = {
            "typescript": typescript,
            "request_type": ": Request" if typescript else "",
            "response_type": ": Response" if typescript else "",
        }
        files: FileSet = {f"index.{ext}": self.renderer.render("express/index.j2", context)}
        if typescript:
            files["tsconfig.json"] = _json_document(_NODE_TSCONFIG)
        return files


class VanillaScaffold(FrameworkScaffold):
    name = "vanilla"

    def generate_base(self, features: Sequence[str]) -> FileSet:
        return {
            "index.html": self.renderer.render("vanilla/index.html.j2", {}),
            "style.css": self.renderer.render("vanilla/style.css.j2", {}),
            "script.js": self.renderer.render("vanilla/script.js.j2", {}),
        }


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

_FRAMEWORKS: dict[str, type[FrameworkScaffold]] = {
    "react": ReactScaffold,
    "vue": VueScaffold,
    "express": ExpressScaffold,
    "vanilla": VanillaScaffold,
}


def register_framework(name: str, strategy: type[FrameworkScaffold]) -> None:
    """Add or replace the strategy used for *name*."""
    _FRAMEWORKS[name] = strategy


def known_frameworks() -> list[str]:
    return sorted(_FRAMEWORKS)


def get_framework(name: str, renderer: TemplateRenderer | None = None) -> FrameworkScaffold:
    """Return the strategy for *name*, falling back to the generic README skeleton."""
    strategy = _FRAMEWORKS.get(name)
    if strategy is None:
        return GenericScaffold(renderer, name=name or "generic")
    return strategy(renderer)
