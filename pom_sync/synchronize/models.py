"""Models for synchronization decisions and persisted sync state."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class SyncTarget(str, Enum):
    """Enum for the outcome of comparing both documents against the last snapshot."""

    NONE = "none"
    XML = "xml"
    YAML = "yaml"
    SYNC_FILE_ONLY = "sync_file_only"
    UNKNOWN = "unknown"


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class Snapshot(BaseModel):
    """Fingerprints of both documents taken when they were last known to agree."""

    model_config = {"frozen": True}

    xml_fingerprint: str
    yaml_fingerprint: str
    synced_at: str = Field(default_factory=_utc_now)
