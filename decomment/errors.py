"""Exception taxonomy for decomment.

ReadError, ParseError and WriteError are file-scoped: the orchestrator
counts and reports them, leaves the file as it was, and moves on.
UnsupportedLanguageError is a configuration error raised before any file
is touched.
"""


class DecommentError(Exception):
    """Base class for all decomment errors.

    Attributes:
        path: File the error belongs to, when known
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class ReadError(DecommentError):
    """File could not be read into memory."""


class ParseError(DecommentError):
    """Grammar produced no syntax tree, or the comment query failed to compile."""


class WriteError(DecommentError):
    """Apply-mode persistence of the rewritten buffer failed."""


class UnsupportedLanguageError(DecommentError):
    """Requested language key is not in the registry."""
