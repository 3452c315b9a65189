"""Converts a document between its XML and YAML renditions."""

import codecs
from enum import Enum

import structlog
from structlog.stdlib import BoundLogger

from pom_sync.convert.exceptions import InvalidFormatError
from pom_sync.convert.xml import declared_encoding, parse_xml, render_xml
from pom_sync.convert.yaml import parse_yaml, render_yaml

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore


class ConversionDirection(str, Enum):
    """Enum for the direction of a conversion."""

    XML_TO_YAML = "xml_to_yaml"
    YAML_TO_XML = "yaml_to_xml"


def decode_source(data: bytes, direction: ConversionDirection) -> str:
    """Decode raw document bytes read from disk into text for conversion.

    XML is decoded with the encoding its declaration names, YAML is always UTF-8. A UTF-8
    byte order mark is dropped and line endings are normalized to ``\\n``.

    Raises:
        InvalidFormatError: If the encoding is unknown or the bytes are not valid in it.
    """
    declared = declared_encoding(data) if direction == ConversionDirection.XML_TO_YAML else "utf-8"
    try:
        encoding = "utf-8-sig" if codecs.lookup(declared).name == "utf-8" else declared
        text = data.decode(encoding)
    except LookupError as e:
        raise InvalidFormatError(f"Unknown document encoding '{declared}'", f"declared encoding: {declared}") from e
    except UnicodeDecodeError as e:
        raise InvalidFormatError(
            f"Document is not valid {declared}: {e.reason}", f"byte 0x{e.object[e.start]:02x} at position {e.start}"
        ) from e
    return text.replace("\r\n", "\n").replace("\r", "\n")


def convert(source: str, direction: ConversionDirection, indent_spaces: int) -> str:
    """Convert a document to the other format.

    Args:
        source (str): The document text in the source format.
        direction (ConversionDirection): Which format to read and which to write.
        indent_spaces (int): Number of spaces per indentation level of the output.

    Raises:
        InvalidFormatError: If the source cannot be parsed or cannot be expressed in the
            target format.

    Returns:
        str: The document text in the target format.
    """
    if direction == ConversionDirection.XML_TO_YAML:
        root = parse_xml(source)
        output = render_yaml(root, indent=indent_spaces)
    else:
        root = parse_yaml(source)
        output = render_xml(root, indent=indent_spaces)
    logger.debug("Converted document", direction=direction.value, root=root.name, size=len(output))
    return output


def documents_agree(xml_text: str, yaml_text: str, xml_indent: int, yaml_indent: int) -> bool:
    """Check whether either document, once converted, reproduces the other byte-for-byte."""
    if convert(xml_text, ConversionDirection.XML_TO_YAML, yaml_indent) == yaml_text:
        return True
    return convert(yaml_text, ConversionDirection.YAML_TO_XML, xml_indent) == xml_text
