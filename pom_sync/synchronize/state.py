"""Sync state persistence.

The sync file records fingerprints of both documents taken when they last agreed. It is
written atomically, so a crash mid-write leaves the previous snapshot in place. Any
problem reading it back is treated as if no snapshot existed: the next run degrades to
first-run behavior instead of failing.
"""

import hashlib
from pathlib import Path

import structlog
from pydantic import ValidationError
from ruamel.yaml.error import YAMLError
from structlog.stdlib import BoundLogger

from pom_sync.synchronize.models import Snapshot
from pom_sync.utils.files import atomic_write_text, read_text_if_exists
from pom_sync.utils.yaml import dump_yaml_to_string, load_yaml_string

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore


def fingerprint(content: str | None) -> str | None:
    """Compute the SHA-256 hex digest of document text, or None for a missing document."""
    if content is None:
        return None
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


class SyncStateStore:
    """Loads and saves the last synchronized snapshot."""

    def __init__(self, path: Path) -> None:
        """Initialize the store with the path of the sync file."""
        self.path = path

    def load(self) -> Snapshot | None:
        """Load the snapshot, returning None if it is missing, unreadable or corrupt."""
        try:
            content = read_text_if_exists(self.path)
        except OSError as e:
            logger.warning("Unable to read sync file, ignoring it", path=str(self.path), error=str(e))
            return None
        except UnicodeDecodeError as e:
            logger.warning("Sync file is corrupt, ignoring it", path=str(self.path), error=str(e))
            return None
        if content is None:
            logger.debug("No sync file found", path=str(self.path))
            return None

        try:
            data = load_yaml_string(content)
            return Snapshot.model_validate(data)
        except (YAMLError, ValidationError) as e:
            logger.warning("Sync file is corrupt, ignoring it", path=str(self.path), error=str(e))
            return None

    def save(self, snapshot: Snapshot) -> None:
        """Persist the snapshot atomically, replacing any previous one."""
        atomic_write_text(self.path, dump_yaml_to_string(snapshot.model_dump(mode="json")))
        logger.debug(
            "Saved sync file",
            path=str(self.path),
            xml_fingerprint=snapshot.xml_fingerprint,
            yaml_fingerprint=snapshot.yaml_fingerprint,
        )
