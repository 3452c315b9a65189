"""Reads and writes the XML rendition of a document.

Parsing and pretty-printing both go through xml.dom.minidom, which keeps qualified names
(``xsi:schemaLocation``) and namespace declarations (``xmlns``) as ordinary attributes in
source order. Comments and processing instructions are not part of the document model and
are discarded on read.
"""

import re
from xml.dom import Node, minidom
from xml.parsers.expat import ExpatError

import structlog
from structlog.stdlib import BoundLogger

from pom_sync.convert.document import XmlNode
from pom_sync.convert.exceptions import InvalidFormatError, source_snippet
from pom_sync.utils.constants import XML_DECLARATION_ENCODING

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore

XML_NAME_PATTERN = re.compile(r"[^\W\d][\w.\-:]*")
"""Approximation of the XML Name production: a letter or underscore, then name characters."""

XML_ENCODING_PATTERN = re.compile(rb"""(?:\xef\xbb\xbf)?\s*<\?xml\s[^>]*?\bencoding\s*=\s*["']([A-Za-z][\w.\-]*)["']""")
"""Matches the encoding pseudo-attribute of an XML declaration at the start of a document."""


def is_valid_xml_name(name: str) -> bool:
    """Check whether a string can be used as an XML element or attribute name."""
    return XML_NAME_PATTERN.fullmatch(name) is not None


def declared_encoding(data: bytes) -> str:
    """Return the encoding named by the document's XML declaration, defaulting to UTF-8."""
    match = XML_ENCODING_PATTERN.match(data)
    if match is None:
        return "utf-8"
    return match.group(1).decode("ascii")


def parse_xml(source: str) -> XmlNode:
    """Parse XML text into a document tree.

    Raises:
        InvalidFormatError: If the text is not well-formed XML.
    """
    try:
        dom = minidom.parseString(source)
    except ExpatError as e:
        # Expat reports 1-based lines and 0-based columns.
        column = e.offset + 1
        raise InvalidFormatError(f"Invalid XML: {e}", source_snippet(source, e.lineno, column), line=e.lineno, column=column) from e
    try:
        return _element_to_node(dom.documentElement)
    finally:
        dom.unlink()


def _element_to_node(element: minidom.Element) -> XmlNode:
    attributes = {name: value for name, value in element.attributes.items()}
    children: list[XmlNode] = []
    text_parts: list[str] = []
    for child in element.childNodes:
        if child.nodeType == Node.ELEMENT_NODE:
            children.append(_element_to_node(child))
        elif child.nodeType in (Node.TEXT_NODE, Node.CDATA_SECTION_NODE):
            text_parts.append(child.data)
    text = "".join(text_parts).strip()
    if children and text:
        logger.warning("Dropping text mixed with child elements", element=element.tagName, text=text)
        text = ""
    return XmlNode(name=element.tagName, value=text or None, attributes=attributes, children=children)


def render_xml(root: XmlNode, indent: int = 4) -> str:
    """Render a document tree as pretty-printed XML with the given indentation width.

    The output starts with an XML declaration, places leaf text inline and self-closes
    empty elements.

    Raises:
        InvalidFormatError: If an element or attribute name is not a valid XML name.
    """
    for node in root.walk():
        _check_name(node.name, node.name)
        for attribute in node.attributes:
            _check_name(attribute, f"{node.name}/@{attribute}")

    dom = minidom.Document()
    try:
        dom.appendChild(_node_to_element(dom, root))
        rendered: bytes = dom.toprettyxml(indent=" " * indent, encoding=XML_DECLARATION_ENCODING)
    finally:
        dom.unlink()
    return rendered.decode(XML_DECLARATION_ENCODING.lower())


def _check_name(name: str, location: str) -> None:
    if not is_valid_xml_name(name):
        raise InvalidFormatError(f"'{name}' is not a valid XML name", location)


def _node_to_element(dom: minidom.Document, node: XmlNode) -> minidom.Element:
    element = dom.createElement(node.name)
    for name, value in node.attributes.items():
        element.setAttribute(name, value)
    if node.children:
        for child in node.children:
            element.appendChild(_node_to_element(dom, child))
    elif node.value is not None:
        element.appendChild(dom.createTextNode(node.value))
    return element
