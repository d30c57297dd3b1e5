"""
errors.py — Typed failures of a read-file mediation.

Every error carries the configured source name so the outcome property can
say which file went wrong. None of these ever escape ReadFileMediator.mediate();
they are stored on MediationState.error and flattened into READ_FILE_RESPONSE
by the outcome step.
"""

from __future__ import annotations


class ReadFileError(Exception):
    """Base class for all mediation failures."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.message = message
        self.source = source

    def describe(self) -> str:
        """Human-readable text for the outcome property."""
        return self.message


class SourceNotConfigured(ReadFileError):
    """Neither fileName nor property configured. Status only, never raised."""

    def __init__(self):
        super().__init__("No file source configured; nothing was read.")


class SourceError(ReadFileError):
    """The source could not be opened."""

    def describe(self) -> str:
        return f"Error trying to read file {self.source}. {self.message}"


class InvalidSourceUri(SourceError):
    pass


class UnsupportedSourceScheme(SourceError):
    def __init__(self, source: str, scheme: str | None = None):
        super().__init__(f"Unknown protocol: {scheme or '(none)'}", source)
        self.scheme = scheme


class SourceNotFound(SourceError):
    pass


class SourceAccessDenied(SourceError):
    pass


class RemoteRetrievalFailed(SourceError):
    pass


class ContentParseFailed(ReadFileError):
    def describe(self) -> str:
        return f"Error while parsing file : {self.source}. {self.message}"


class ContentTypeUndeclared(ReadFileError):
    def __init__(self, source: str | None, content_type: str | None = None):
        super().__init__(
            f"Content Type of file {source} unknown or not declared.", source
        )
        self.content_type = content_type


class InvalidTargetExpression(ReadFileError):
    def __init__(self, message: str, source: str | None = None, expression: str | None = None):
        super().__init__(message, source)
        self.expression = expression

    def describe(self) -> str:
        return (
            f"Error occurred while evaluating xpath {self.expression!r} "
            f"for file {self.source}. {self.message}"
        )
