"""Tests for the framework strategies that build base skeletons."""

from __future__ import annotations

import json

import pytest

from codegen.scaffolder.frameworks import (
    ExpressScaffold,
    FrameworkScaffold,
    GenericScaffold,
    ReactScaffold,
    VanillaScaffold,
    VueScaffold,
    get_framework,
    known_frameworks,
    register_framework,
)

pytestmark = pytest.mark.unit


class TestReactScaffold:
    def test_javascript_files(self):
        files = ReactScaffold().generate_base([])
        assert set(files) == {
            "src/App.jsx",
            "src/main.jsx",
            "src/index.css",
            "index.html",
            "vite.config.js",
        }
        assert "/src/main.jsx" in files["index.html"]
        assert "import React from 'react';\n\nfunction App" not in files["src/App.jsx"]

    def test_typescript_files(self):
        files = ReactScaffold().generate_base(["typescript"])
        assert "src/App.tsx" in files
        assert "src/main.tsx" in files
        assert "/src/main.tsx" in files["index.html"]
        assert files["src/App.tsx"].startswith("import React from 'react';")
        tsconfig = json.loads(files["tsconfig.json"])
        assert tsconfig["compilerOptions"]["jsx"] == "react-jsx"

    def test_tokens_embedded(self):
        files = ReactScaffold().generate_base([])
        assert "{{projectName}}" in files["src/App.jsx"]
        assert "{{projectDescription}}" in files["src/App.jsx"]
        assert "<title>{{projectName}}</title>" in files["index.html"]


class TestVueScaffold:
    def test_single_file_component(self):
        files = VueScaffold().generate_base([])
        assert set(files) == {"src/App.vue", "src/main.js", "index.html"}
        app = files["src/App.vue"]
        assert "<template>" in app
        assert "<script>" in app
        assert "<style>" in app

    def test_typescript(self):
        files = VueScaffold().generate_base(["typescript"])
        assert "src/main.ts" in files
        assert '<script lang="ts">' in files["src/App.vue"]
        assert "/src/main.ts" in files["index.html"]


class TestExpressScaffold:
    def test_javascript_entry(self):
        files = ExpressScaffold().generate_base([])
        assert set(files) == {"index.js"}
        source = files["index.js"]
        assert "const express = require('express');" in source
        assert "app.use(express.json());" in source
        assert "app.use(express.static('public'));" in source
        assert "app.get('/health'" in source
        assert "process.uptime()" in source
        assert "process.env.PORT || 3000" in source
        assert "module.exports = app;" in source
        assert "Welcome to {{projectName}} API" in source

    def test_typescript_entry(self):
        files = ExpressScaffold().generate_base(["typescript"])
        assert set(files) == {"index.ts", "tsconfig.json"}
        assert "(req: Request, res: Response)" in files["index.ts"]
        assert "export default app;" in files["index.ts"]
        assert json.loads(files["tsconfig.json"])["compilerOptions"]["module"] == "commonjs"


class TestVanillaScaffold:
    def test_click_counter(self):
        files = VanillaScaffold().generate_base(["typescript"])
        assert set(files) == {"index.html", "style.css", "script.js"}
        assert 'id="clickBtn"' in files["index.html"]
        assert "clickCount++" in files["script.js"]


class TestGenericScaffold:
    def test_readme_lists_features(self):
        files = GenericScaffold(name="svelte").generate_base(["eslint", "docker"])
        assert set(files) == {"README.md"}
        readme = files["README.md"]
        assert readme.startswith("# {{projectName}}")
        assert "- eslint\n- docker\n" in readme
        assert "A svelte project" in readme

    def test_readme_without_features(self):
        assert "- None" in GenericScaffold().generate_base([])["README.md"]


class TestLookup:
    def test_known(self):
        assert isinstance(get_framework("react"), ReactScaffold)
        assert isinstance(get_framework("vanilla"), VanillaScaffold)

    def test_unknown_routes_to_generic(self):
        strategy = get_framework("angular")
        assert isinstance(strategy, GenericScaffold)
        assert strategy.name == "angular"

    def test_register_framework(self):
        class SvelteScaffold(FrameworkScaffold):
            name = "svelte"

            def generate_base(self, features):
                return {"src/App.svelte": "<h1>{{projectName}}</h1>\n"}

        register_framework("svelte", SvelteScaffold)
        try:
            assert "svelte" in known_frameworks()
            assert get_framework("svelte").generate_base([]) == {
                "src/App.svelte": "<h1>{{projectName}}</h1>\n"
            }
        finally:
            from codegen.scaffolder import frameworks

            frameworks._FRAMEWORKS.pop("svelte", None)

    def test_deterministic(self):
        assert ReactScaffold().generate_base(["typescript"]) == ReactScaffold().generate_base(
            ["typescript"]
        )
