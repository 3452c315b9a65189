"""Orchestrates the synchronization of the XML and YAML documents."""

from pathlib import Path

import structlog
from structlog.stdlib import BoundLogger

from pom_sync.configuration.exceptions import ConfigurationError
from pom_sync.configuration.models import SyncConfig, SyncTargetOverride
from pom_sync.convert.converter import ConversionDirection, convert, decode_source, documents_agree
from pom_sync.synchronize.decision import determine_sync_target
from pom_sync.synchronize.exceptions import DocumentIOError, UnreconcilableConflictError, XmlRegeneratedError
from pom_sync.synchronize.models import Snapshot, SyncTarget
from pom_sync.synchronize.results import SyncResult
from pom_sync.synchronize.state import SyncStateStore, fingerprint
from pom_sync.utils.files import atomic_write_text, read_bytes_if_exists

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore


def run_sync_workflow(config: SyncConfig, log: BoundLogger | None = None) -> SyncResult:
    """Run the sync workflow: decide which document changed and regenerate the other.

    Args:
        config (SyncConfig): The reconciled configuration.
        log (BoundLogger | None): Logger for progress and warning lines (default: module logger).

    Raises:
        ConfigurationError: If neither document exists, or a forced target has no source.
        DocumentIOError: If a document or the sync file cannot be read or written.
        InvalidFormatError: If a document cannot be decoded or the source document cannot be converted.
        UnreconcilableConflictError: If both documents changed and fail_if_cannot_sync is set.
        XmlRegeneratedError: If the XML document was regenerated and fail_if_xml_sync is set.

    Returns:
        SyncResult: What was decided, written and saved.
    """
    log = log or logger
    xml_path, yaml_path = config.xml_path, config.yaml_path
    xml_text = _read_document(xml_path, ConversionDirection.XML_TO_YAML)
    yaml_text = _read_document(yaml_path, ConversionDirection.YAML_TO_XML)
    if xml_text is None and yaml_text is None:
        raise ConfigurationError(f"Neither {xml_path} nor {yaml_path} exists, there is no document to synchronize")

    store = SyncStateStore(config.sync_path)
    target = _determine_target(config, store, xml_text, yaml_text)
    log.debug("Determined sync target", target=target.value, override=config.target.value)

    if target == SyncTarget.YAML:
        log.info(f"Converting {xml_path.name} into {yaml_path.name}")
        yaml_text = convert(_require_source(xml_text, xml_path), ConversionDirection.XML_TO_YAML, config.yaml_indent)
        _write_document(yaml_path, yaml_text)
        snapshot = _save_snapshot(store, xml_text, yaml_text)
        return SyncResult(target, written_path=yaml_path, snapshot=snapshot)

    if target == SyncTarget.XML:
        log.info(f"Converting {yaml_path.name} into {xml_path.name}")
        xml_text = convert(_require_source(yaml_text, yaml_path), ConversionDirection.YAML_TO_XML, config.xml_indent)
        _write_document(xml_path, xml_text)
        snapshot = _save_snapshot(store, xml_text, yaml_text)
        if config.fail_if_xml_sync:
            raise XmlRegeneratedError(xml_path)
        return SyncResult(target, written_path=xml_path, snapshot=snapshot)

    if target == SyncTarget.SYNC_FILE_ONLY:
        log.info("Files in sync, creating a sync file")
        snapshot = _save_snapshot(store, xml_text, yaml_text)
        return SyncResult(target, snapshot=snapshot)

    if target == SyncTarget.NONE:
        log.info("No sync required")
        return SyncResult(target)

    if config.fail_if_cannot_sync:
        raise UnreconcilableConflictError("Unable to automatically sync")
    log.error("Unable to automatically sync due to changes to both XML and YAML since last sync.")
    return SyncResult(target)


def _determine_target(config: SyncConfig, store: SyncStateStore, xml_text: str | None, yaml_text: str | None) -> SyncTarget:
    """Honor a forced target, otherwise compare fingerprints against the last snapshot."""
    if config.target == SyncTargetOverride.XML:
        return SyncTarget.XML
    if config.target == SyncTargetOverride.YAML:
        return SyncTarget.YAML

    snapshot = store.load()
    agree = False
    if snapshot is None and xml_text is not None and yaml_text is not None:
        agree = documents_agree(xml_text, yaml_text, config.xml_indent, config.yaml_indent)
    return determine_sync_target(fingerprint(xml_text), fingerprint(yaml_text), snapshot, documents_agree=agree)


def _require_source(text: str | None, path: Path) -> str:
    if text is None:
        raise ConfigurationError(f"Cannot synchronize from {path}, it does not exist")
    return text


def _read_document(path: Path, direction: ConversionDirection) -> str | None:
    """Read a document as text, or None if it does not exist; direction names its format."""
    try:
        data = read_bytes_if_exists(path)
    except OSError as e:
        raise DocumentIOError(path, e) from e
    if data is None:
        return None
    return decode_source(data, direction)


def _write_document(path: Path, content: str) -> None:
    try:
        atomic_write_text(path, content)
    except OSError as e:
        raise DocumentIOError(path, e) from e


def _save_snapshot(store: SyncStateStore, xml_text: str | None, yaml_text: str | None) -> Snapshot:
    """Record fingerprints of both documents together."""
    xml_fingerprint, yaml_fingerprint = fingerprint(xml_text), fingerprint(yaml_text)
    if xml_fingerprint is None or yaml_fingerprint is None:
        raise ConfigurationError("Both documents must exist before a sync file can be written")
    snapshot = Snapshot(xml_fingerprint=xml_fingerprint, yaml_fingerprint=yaml_fingerprint)
    try:
        store.save(snapshot)
    except OSError as e:
        raise DocumentIOError(store.path, e) from e
    return snapshot
