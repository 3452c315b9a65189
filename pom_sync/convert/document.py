"""Defines the generic document tree shared by the XML and YAML renditions."""

from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class XmlNode:
    """A named element with optional text, ordered attributes and ordered children.

    Equality is structural: two trees are equal when names, values, attributes and the
    order of children all match. A value of None means the element has no text.
    """

    name: str
    value: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)
    children: list["XmlNode"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        """Whether the element has neither children nor attributes."""
        return not self.children and not self.attributes

    def walk(self) -> Iterator["XmlNode"]:
        """Yield this node and every descendant in document order."""
        yield self
        for child in self.children:
            yield from child.walk()
