# notes/exceptions.py


class NotesError(Exception):
    """Base class for errors raised by the notes app."""


class MarkdownImportError(NotesError):
    """Raised when a markdown notebook cannot be parsed."""

    def __init__(self, message, line=None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class ReferenceCheckError(NotesError):
    """Raised when a reference cannot be checked at all (bad URL scheme, etc.)."""
