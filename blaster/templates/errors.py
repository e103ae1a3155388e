"""Errors raised while compiling or rendering payload templates."""

from typing import Optional

ROOT_PATH = "<root>"


class TemplateFailure(Exception):
    """Base class for template failures tied to a field of the payload tree."""

    def __init__(self, message: str, path: str = ""):
        self.message = message
        self.path = path or ROOT_PATH
        super().__init__(f"{self.path}: {message}")


class CompileError(TemplateFailure):
    """A string field holds malformed template syntax.

    Fails the whole compilation; nothing can be rendered until the
    definition is fixed.
    """

    def __init__(
        self,
        message: str,
        path: str = "",
        lineno: Optional[int] = None,
        source: Optional[str] = None,
    ):
        self.lineno = lineno
        self.source = source
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message, path)


class RenderError(TemplateFailure):
    """Template execution failed for one render call.

    The whole render is aborted; callers treat it as a failed request attempt.
    """
