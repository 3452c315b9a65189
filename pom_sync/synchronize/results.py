"""Contains results of a synchronization run."""

from pathlib import Path

from pom_sync.synchronize.models import Snapshot, SyncTarget


class SyncResult:
    """Contains the outcome of the sync workflow."""

    def __init__(self, target: SyncTarget, written_path: Path | None = None, snapshot: Snapshot | None = None) -> None:
        """Initialize the result with the decision, the regenerated document (if any), and the saved snapshot (if any)."""
        self.target = target
        self.written_path = written_path
        self.snapshot = snapshot

    @property
    def snapshot_saved(self) -> bool:
        """Whether a new snapshot was persisted during the run."""
        return self.snapshot is not None
