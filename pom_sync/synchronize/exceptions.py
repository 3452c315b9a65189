"""Custom exceptions for the synchronize module."""

from pathlib import Path


class DocumentIOError(Exception):
    """Raised when a document or the sync file cannot be read or written."""

    def __init__(self, path: Path, error: OSError) -> None:
        """Initializes the exception with the path and the underlying OS error."""
        super().__init__(f"Unable to access {path}: {error.strerror or error}")
        self.path = path
        self.error = error


class UnreconcilableConflictError(Exception):
    """Raised when both documents changed since the last sync and neither can win."""

    pass


class XmlRegeneratedError(Exception):
    """Raised after the XML document was regenerated, so the invoking tool must re-run against it."""

    def __init__(self, path: Path) -> None:
        """Initializes the exception with the path of the regenerated XML document."""
        super().__init__(f"{path.name} modified.  You must retry your command.")
        self.path = path
