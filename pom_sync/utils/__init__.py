"""Utility modules for shared functionality."""

from .constants import (
    ATTRIBUTES_KEY,
    CHILDREN_KEY,
    DEFAULT_SYNC_FILE,
    DEFAULT_XML_FILE,
    DEFAULT_XML_INDENT,
    DEFAULT_YAML_FILE,
    DEFAULT_YAML_INDENT,
    TEXT_KEY,
)
from .files import atomic_write_text, read_bytes_if_exists, read_text_if_exists

__all__ = [
    "ATTRIBUTES_KEY",
    "CHILDREN_KEY",
    "TEXT_KEY",
    "DEFAULT_XML_FILE",
    "DEFAULT_YAML_FILE",
    "DEFAULT_SYNC_FILE",
    "DEFAULT_XML_INDENT",
    "DEFAULT_YAML_INDENT",
    "atomic_write_text",
    "read_bytes_if_exists",
    "read_text_if_exists",
]
