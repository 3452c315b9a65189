"""Contains utility functions for reading and writing files."""

import os
import tempfile
from pathlib import Path

import structlog
from structlog.stdlib import BoundLogger

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore


def read_text_if_exists(path: Path) -> str | None:
    """Read a UTF-8 text file, returning None if it does not exist.

    Any other OSError (permissions, a directory in place of the file) is raised to the caller.
    """
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        return None


def read_bytes_if_exists(path: Path) -> bytes | None:
    """Read a file as raw bytes, returning None if it does not exist.

    Documents are read as bytes so that the caller can honor an encoding the document
    declares itself. Any other OSError is raised to the caller.
    """
    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError:
        return None


def atomic_write_text(path: Path, content: str) -> None:
    """Write text to a file so that readers never observe a partial write.

    The content is written to a temporary file in the target's directory, which then
    replaces the target via os.replace(). The temporary file is removed on any failure.
    """
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=str(directory), prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
    logger.debug("Wrote file", path=str(path), size=len(content))
