"""Tests for the Jinja2 skeleton renderer."""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import TemplateNotFound, UndefinedError

from codegen.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


@pytest.fixture
def skeleton_dir(tmp_path: Path) -> Path:
    root = tmp_path / "skeletons"
    root.mkdir()
    (root / "tokens.j2").write_text("<h1>{{projectName}}</h1> [[ ext ]]\n", encoding="utf-8")
    (root / "branch.j2").write_text(
        "[% if typescript %]\nts\n[% else %]\njs\n[% endif %]\n", encoding="utf-8"
    )
    (root / "missing.j2").write_text("[[ missing ]]", encoding="utf-8")
    return root


class TestTemplateRenderer:
    def test_project_tokens_pass_through(self, skeleton_dir: Path):
        out = TemplateRenderer(skeleton_dir).render("tokens.j2", {"ext": "tsx"})
        assert out == "<h1>{{projectName}}</h1> tsx\n"

    def test_block_syntax_trims_lines(self, skeleton_dir: Path):
        renderer = TemplateRenderer(skeleton_dir)
        assert renderer.render("branch.j2", {"typescript": True}) == "ts\n"
        assert renderer.render("branch.j2", {"typescript": False}) == "js\n"

    def test_missing_variable_is_an_error(self, skeleton_dir: Path):
        with pytest.raises(UndefinedError):
            TemplateRenderer(skeleton_dir).render("missing.j2", {})

    def test_unknown_skeleton(self, renderer: TemplateRenderer):
        with pytest.raises(TemplateNotFound):
            renderer.render("angular/App.j2", {})

    def test_builtin_skeletons_render(self, renderer: TemplateRenderer):
        readme = renderer.render("generic/README.md.j2", {"framework": "svelte", "features": []})
        assert "{{projectName}}" in readme
        assert "- None" in readme
        dockerfile = renderer.render(
            "features/Dockerfile.j2", {"package_manager": "pnpm", "port": 8080}
        )
        assert "EXPOSE 8080" in dockerfile
        assert "pnpm install --prod" in dockerfile
