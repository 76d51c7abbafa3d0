"""Jinja2 rendering for built-in skeleton files.

Provides the TemplateRenderer class which loads the skeletons shipped in
``codegen/scaffolder/skeletons/`` and renders them for a framework/feature
combination.  The skeletons themselves contain the project substitution
tokens (``{{projectName}}``, ``{{projectDescription}}``) that are replaced
later, at scaffold time.  So that Jinja2 leaves those tokens alone, the
environment uses square-bracket delimiters::

    [[ ext ]]                 variable
    [% if typescript %]       block
    [# note #]                comment
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "skeletons"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 skeletons for project scaffolding.

    Skeletons are ``.j2`` files under a configurable skeleton directory.
    Rendering is pure: nothing is written to disk here.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            block_start_string="[%",
            block_end_string="%]",
            variable_start_string="[[",
            variable_end_string="]]",
            comment_start_string="[#",
            comment_end_string="#]",
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single skeleton with the provided context.

        Args:
            template_path: Path relative to the skeleton directory (e.g.
                ``"react/App.j2"``).
            context: Variables available inside the skeleton.

        Returns:
            The rendered content.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)
