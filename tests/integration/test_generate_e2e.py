"""End-to-end generation tests against a real temporary filesystem."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from codegen.config import load_config
from codegen.scaffolder import ProjectGenerator

pytestmark = pytest.mark.integration


def _tree(root: Path) -> dict[str, str]:
    return {
        p.relative_to(root).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def fresh_generator(tmp_path: Path) -> ProjectGenerator:
    """Generator built the way the CLI builds one, from a fresh config dir."""
    config = load_config(tmp_path / "cfg").model_copy(
        update={"output_directory": tmp_path / "out"}
    )
    return ProjectGenerator(config)


class TestVanillaProject:
    async def test_minimal_project(self, fresh_generator: ProjectGenerator, tmp_path: Path):
        result = await fresh_generator.generate({"name": "demo-app", "framework": "vanilla"})

        assert result.project_path == tmp_path / "out" / "demo-app"
        tree = _tree(result.project_path)
        assert sorted(tree) == ["index.html", "package.json", "script.js", "style.css"]

        manifest = json.loads(tree["package.json"])
        assert manifest["name"] == "demo-app"
        assert manifest["dependencies"] == {}
        assert manifest["devDependencies"] == {}
        assert manifest["scripts"] == {"start": "node index.js"}
        assert "<title>demo-app</title>" in tree["index.html"]

    async def test_no_tokens_left(self, fresh_generator: ProjectGenerator):
        result = await fresh_generator.generate(
            {"name": "demo-app", "framework": "vanilla", "description": "Demo"}
        )
        for content in _tree(result.project_path).values():
            assert "{{projectName}}" not in content
            assert "{{projectDescription}}" not in content

    async def test_deterministic(self, fresh_generator: ProjectGenerator):
        options = {"name": "demo-app", "framework": "vanilla", "features": ["prettier"]}
        first = _tree((await fresh_generator.generate(options)).project_path)
        second = _tree((await fresh_generator.generate(options)).project_path)
        assert first == second


class TestReactProject:
    async def test_full_feature_set(self, fresh_generator: ProjectGenerator):
        result = await fresh_generator.generate(
            {
                "name": "react-app",
                "framework": "react",
                "features": ["typescript", "eslint", "prettier", "jest", "tailwind", "docker"],
                "packageManager": "yarn",
                "description": "Storefront",
            }
        )
        tree = _tree(result.project_path)
        for name in (
            "src/App.tsx",
            "src/main.tsx",
            "src/index.css",
            "index.html",
            "tsconfig.json",
            ".eslintrc.json",
            ".prettierrc",
            "jest.config.json",
            "tailwind.config.js",
            "Dockerfile",
            ".dockerignore",
            "package.json",
        ):
            assert name in tree, name

        assert tree["src/index.css"].startswith("@tailwind base;")
        assert "Welcome to react-app" in tree["src/App.tsx"]
        assert "yarn install" in tree["Dockerfile"]

        manifest = json.loads(tree["package.json"])
        assert manifest["description"] == "Storefront"
        assert manifest["dependencies"]["tailwindcss"] == "^3.3.0"
        assert set(manifest["devDependencies"]) == {
            "vite",
            "typescript",
            "@types/react",
            "@types/react-dom",
            "eslint",
            "prettier",
            "jest",
        }
        assert {"lint", "lint-fix", "test", "test-watch"} <= set(manifest["scripts"])
