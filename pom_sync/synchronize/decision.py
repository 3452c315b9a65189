"""Decides which document, if any, must be regenerated.

The decision is a pure function of the current fingerprints and the last snapshot, so it
never touches the filesystem and never raises. Callers reject configurations it cannot
classify (no document at all) before asking.
"""

from pom_sync.synchronize.models import Snapshot, SyncTarget


def determine_sync_target(
    xml_fingerprint: str | None,
    yaml_fingerprint: str | None,
    snapshot: Snapshot | None,
    documents_agree: bool = False,
) -> SyncTarget:
    """Compare current fingerprints to the snapshot and decide what to regenerate.

    Args:
        xml_fingerprint (str | None): Fingerprint of the XML document, or None if it is missing.
        yaml_fingerprint (str | None): Fingerprint of the YAML document, or None if it is missing.
        snapshot (Snapshot | None): The last synchronized state, or None on a first run.
        documents_agree (bool): Whether both documents already convert into each other
            exactly. Only consulted when there is no snapshot.

    Returns:
        SyncTarget: The document to regenerate, or what to do instead.
    """
    xml_exists = xml_fingerprint is not None
    yaml_exists = yaml_fingerprint is not None

    # Nothing to synchronize from
    if not xml_exists and not yaml_exists:
        return SyncTarget.UNKNOWN

    # A missing document is generated from the one that exists
    if not yaml_exists:
        return SyncTarget.YAML
    if not xml_exists:
        return SyncTarget.XML

    # First run with both documents present
    if snapshot is None:
        if documents_agree:
            return SyncTarget.SYNC_FILE_ONLY
        return SyncTarget.UNKNOWN

    xml_changed = xml_fingerprint != snapshot.xml_fingerprint
    yaml_changed = yaml_fingerprint != snapshot.yaml_fingerprint

    if not xml_changed and not yaml_changed:
        return SyncTarget.NONE
    if xml_changed and not yaml_changed:
        return SyncTarget.YAML
    if yaml_changed and not xml_changed:
        return SyncTarget.XML
    return SyncTarget.UNKNOWN
