"""Shared constants used across the application."""

# Default File Settings
# ---------------------

DEFAULT_XML_FILE = "pom.xml"
"""Default name of the XML project descriptor, relative to the base directory."""

DEFAULT_YAML_FILE = "pom.yml"
"""Default name of the YAML project descriptor, relative to the base directory."""

DEFAULT_SYNC_FILE = ".pom.yml"
"""Default name of the file holding the last synchronized snapshot."""

# Formatting Settings
# -------------------

DEFAULT_YAML_INDENT = 2
"""Default number of spaces per YAML indentation level."""

DEFAULT_XML_INDENT = 4
"""Default number of spaces per XML indentation level."""

YAML_LINE_WIDTH = 4096
"""Line width handed to the YAML emitter so long values never wrap."""

XML_DECLARATION_ENCODING = "UTF-8"
"""Encoding named in the XML declaration of generated documents."""

# Reserved YAML Keys
# ------------------
# Neither "@" nor "#" may start an XML name, so these keys can never collide
# with an element name.

ATTRIBUTES_KEY = "@attributes"
"""Key holding an element's attributes as a mapping of name to value."""

TEXT_KEY = "#text"
"""Key holding the text of an element that also carries attributes."""

CHILDREN_KEY = "#children"
"""Key holding interleaved child elements as a sequence of single-key mappings."""
