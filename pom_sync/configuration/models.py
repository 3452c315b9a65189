"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pom_sync.utils.constants import (
    DEFAULT_SYNC_FILE,
    DEFAULT_XML_FILE,
    DEFAULT_XML_INDENT,
    DEFAULT_YAML_FILE,
    DEFAULT_YAML_INDENT,
)


class SyncTargetOverride(str, Enum):
    """Enum for forcing a sync into a particular format instead of detecting it."""

    AUTO = "auto"
    XML = "xml"
    YAML = "yaml"


@dataclass
class SyncConfig:
    """Configuration class for the sync command."""

    base_dir: Path = Path(".")
    xml_file: str = DEFAULT_XML_FILE
    yaml_file: str = DEFAULT_YAML_FILE
    sync_file: str = DEFAULT_SYNC_FILE
    yaml_indent: int = DEFAULT_YAML_INDENT
    xml_indent: int = DEFAULT_XML_INDENT
    fail_if_xml_sync: bool = True
    fail_if_cannot_sync: bool = True
    target: SyncTargetOverride = SyncTargetOverride.AUTO
    debug: bool = False

    @property
    def xml_path(self) -> Path:
        """Path of the XML document."""
        return self.base_dir / self.xml_file

    @property
    def yaml_path(self) -> Path:
        """Path of the YAML document."""
        return self.base_dir / self.yaml_file

    @property
    def sync_path(self) -> Path:
        """Path of the sync file."""
        return self.base_dir / self.sync_file
