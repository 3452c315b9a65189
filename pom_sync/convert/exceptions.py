"""Custom exceptions for the convert module."""


class InvalidFormatError(Exception):
    """Raised when a document cannot be parsed or cannot be expressed in the target format."""

    def __init__(self, message: str, text: str, line: int | None = None, column: int | None = None) -> None:
        """Initialize the error with a description and the offending fragment of the document.

        Args:
            message (str): Human-readable description of the problem.
            text (str): The offending fragment (source line or document path).
            line (int | None): 1-based line number of the problem, if known.
            column (int | None): 1-based column number of the problem, if known.
        """
        super().__init__(message)
        self.message = message
        self.text = text
        self.line = line
        self.column = column

    def __str__(self) -> str:
        """Return the message followed by the offending fragment."""
        return f"{self.message}\n{self.text}"


def source_snippet(source: str, line: int, column: int) -> str:
    """Return the given 1-based source line with a caret under the 1-based column."""
    lines = source.splitlines()
    if not 1 <= line <= len(lines):
        return f"line {line}, column {column}"
    offending = lines[line - 1]
    marker = " " * max(column - 1, 0) + "^"
    return f"line {line}, column {column}:\n{offending}\n{marker}"
