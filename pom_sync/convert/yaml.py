"""Reads and writes the YAML rendition of a document.

YAML has no notion of attributes, interleaved siblings or text next to attributes, so the
mapping reserves three keys that cannot collide with element names:

* ``'@attributes'`` - mapping of attribute name to value, always emitted first.
* ``'#text'`` - element text, used only when the element also has attributes.
* ``'#children'`` - sequence of single-key mappings, used when sibling names interleave
  (``<a/><b/><a/>``) and grouping them under keys would reorder them.

Otherwise each child element becomes a key; a run of repeated siblings becomes a
sequence under their shared name.
"""

from itertools import groupby
from operator import attrgetter
from typing import Any

import structlog
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.error import MarkedYAMLError, YAMLError
from structlog.stdlib import BoundLogger

from pom_sync.convert.document import XmlNode
from pom_sync.convert.exceptions import InvalidFormatError, source_snippet
from pom_sync.convert.xml import is_valid_xml_name
from pom_sync.utils.constants import ATTRIBUTES_KEY, CHILDREN_KEY, TEXT_KEY
from pom_sync.utils.yaml import dump_yaml_to_string, load_yaml_string

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore


def parse_yaml(source: str) -> XmlNode:
    """Parse YAML text into a document tree.

    Raises:
        InvalidFormatError: If the text is not valid YAML or does not describe a single
            root element.
    """
    try:
        data = load_yaml_string(source)
    except MarkedYAMLError as e:
        mark = e.problem_mark or e.context_mark
        problem = e.problem or e.context or "unknown problem"
        if mark is None:
            raise InvalidFormatError(f"Invalid YAML: {problem}", problem) from e
        line, column = mark.line + 1, mark.column + 1
        raise InvalidFormatError(f"Invalid YAML: {problem}", source_snippet(source, line, column), line=line, column=column) from e
    except YAMLError as e:
        raise InvalidFormatError(f"Invalid YAML: {e}", str(e)) from e
    return yaml_data_to_node(data)


def yaml_data_to_node(data: Any) -> XmlNode:
    """Build a document tree from loaded YAML data.

    The data must be a mapping with exactly one key, the root element name.
    """
    if not isinstance(data, dict) or len(data) != 1:
        shape = type(data).__name__ if not isinstance(data, dict) else f"mapping with {len(data)} keys"
        raise InvalidFormatError(f"YAML document must be a mapping with exactly one root element, found {shape}", "/")
    ((name, value),) = data.items()
    if isinstance(value, list):
        raise InvalidFormatError("The root element cannot be a sequence", f"/{name}")
    return _build_node(name, value, f"/{name}")


def _build_node(name: Any, value: Any, path: str) -> XmlNode:
    if not isinstance(name, str) or not is_valid_xml_name(name):
        raise InvalidFormatError(f"Key '{name}' is not a valid XML element name", path)
    node = XmlNode(name=name)
    if value is None or isinstance(value, str):
        node.value = value or None
        return node
    if isinstance(value, list):
        raise InvalidFormatError("Nested sequences cannot be expressed as XML elements", path)
    if not isinstance(value, dict):
        raise InvalidFormatError(f"Unsupported YAML value of type {type(value).__name__}", path)

    for key, child in value.items():
        child_path = f"{path}/{key}"
        if key == ATTRIBUTES_KEY:
            node.attributes = _build_attributes(child, child_path)
        elif key == TEXT_KEY:
            if child is not None and not isinstance(child, str):
                raise InvalidFormatError(f"'{TEXT_KEY}' must be a scalar", child_path)
            node.value = child or None
        elif key == CHILDREN_KEY:
            node.children.extend(_build_interleaved_children(child, child_path))
        else:
            node.children.extend(_build_siblings(key, child, child_path))

    if node.children and node.value is not None:
        raise InvalidFormatError(f"'{TEXT_KEY}' cannot be combined with child elements", path)
    return node


def _build_siblings(name: Any, value: Any, path: str) -> list[XmlNode]:
    if isinstance(value, list):
        return [_build_node(name, item, f"{path}[{index}]") for index, item in enumerate(value)]
    return [_build_node(name, value, path)]


def _build_attributes(value: Any, path: str) -> dict[str, str]:
    if not isinstance(value, dict):
        raise InvalidFormatError(f"'{ATTRIBUTES_KEY}' must be a mapping of attribute names to values", path)
    attributes: dict[str, str] = {}
    for name, attribute_value in value.items():
        if not isinstance(name, str) or not is_valid_xml_name(name):
            raise InvalidFormatError(f"Key '{name}' is not a valid XML attribute name", f"{path}/{name}")
        if isinstance(attribute_value, (list, dict)):
            raise InvalidFormatError(f"Attribute '{name}' must have a scalar value", f"{path}/{name}")
        attributes[name] = attribute_value or ""
    return attributes


def _build_interleaved_children(value: Any, path: str) -> list[XmlNode]:
    if not isinstance(value, list):
        raise InvalidFormatError(f"'{CHILDREN_KEY}' must be a sequence", path)
    children: list[XmlNode] = []
    for index, entry in enumerate(value):
        entry_path = f"{path}[{index}]"
        if not isinstance(entry, dict) or len(entry) != 1:
            raise InvalidFormatError(f"Each '{CHILDREN_KEY}' entry must be a mapping with exactly one key", entry_path)
        ((name, child),) = entry.items()
        children.extend(_build_siblings(name, child, f"{entry_path}/{name}"))
    return children


def node_to_yaml_data(root: XmlNode) -> CommentedMap:
    """Build the YAML data structure for a document tree, preserving source order."""
    data = CommentedMap()
    data[root.name] = _node_value(root)
    return data


def _node_value(node: XmlNode) -> Any:
    if node.is_leaf:
        return node.value

    mapping = CommentedMap()
    if node.attributes:
        mapping[ATTRIBUTES_KEY] = CommentedMap(node.attributes.items())
    if node.children:
        if _has_contiguous_names(node.children):
            for name, group in groupby(node.children, key=attrgetter("name")):
                values = [_node_value(child) for child in group]
                mapping[name] = values[0] if len(values) == 1 else CommentedSeq(values)
        else:
            logger.debug("Keeping interleaved children in order", element=node.name)
            mapping[CHILDREN_KEY] = CommentedSeq(CommentedMap([(child.name, _node_value(child))]) for child in node.children)
    elif node.value is not None:
        mapping[TEXT_KEY] = node.value
    return mapping


def _has_contiguous_names(children: list[XmlNode]) -> bool:
    """Check that every child name occurs in a single uninterrupted run."""
    runs = [name for name, _ in groupby(child.name for child in children)]
    return len(runs) == len(set(runs))


def render_yaml(root: XmlNode, indent: int = 2) -> str:
    """Render a document tree as YAML with the given indentation width."""
    return dump_yaml_to_string(node_to_yaml_data(root), indent=indent)
