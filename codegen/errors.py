"""Error taxonomy for the scaffolding engine.

Filesystem failures are not wrapped: they surface as the builtin ``OSError``
family with their original message.
"""

from __future__ import annotations


class CodegenError(Exception):
    """Base class for every error raised by the scaffolding engine."""


class ValidationError(CodegenError):
    """Raised when a request is rejected before any I/O takes place."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = list(errors or [])
        if self.errors:
            message = f"{message}: {'; '.join(self.errors)}"
        super().__init__(message)


class NotFoundError(CodegenError):
    """Raised when no template can satisfy a lookup."""


class GenerationCancelledError(CodegenError):
    """Raised at a pipeline checkpoint once its cancellation token has fired."""
