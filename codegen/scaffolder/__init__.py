"""CodeGen scaffolder -- turns a template plus features into a project.

Quick usage::

    from codegen.config import load_config
    from codegen.scaffolder import ProjectGenerator

    generator = ProjectGenerator(load_config())
    result = await generator.generate(
        {"name": "my-app", "framework": "react", "features": ["typescript", "eslint"]}
    )
"""

from codegen.scaffolder.features import FeatureComposer
from codegen.scaffolder.frameworks import FrameworkScaffold, get_framework, register_framework
from codegen.scaffolder.generator import CancellationToken, ProjectGenerator
from codegen.scaffolder.manifest import ManifestBuilder
from codegen.scaffolder.materializer import TemplateMaterializer, substitute_tokens
from codegen.scaffolder.registry import TemplateRegistry
from codegen.scaffolder.templates import TemplateRenderer

__all__ = [
    "CancellationToken",
    "FeatureComposer",
    "FrameworkScaffold",
    "ManifestBuilder",
    "ProjectGenerator",
    "TemplateMaterializer",
    "TemplateRegistry",
    "TemplateRenderer",
    "get_framework",
    "register_framework",
    "substitute_tokens",
]
