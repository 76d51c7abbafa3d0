"""CodeGen: scaffolds JavaScript and TypeScript projects from templates."""

__version__ = "1.0.0"
