"""Contains utility functions for working with YAML documents."""

from io import StringIO
from typing import Any

from ruamel.yaml import YAML

from pom_sync.utils.constants import YAML_LINE_WIDTH


def create_yaml_loader() -> YAML:
    """Creates a YAML object that loads every scalar as a plain string.

    The base loader performs no implicit typing, so values such as "1.10" or "true" reach
    the caller exactly as written instead of becoming floats or booleans.
    """
    return YAML(typ="base")


def create_yaml_dumper(indent: int = 2) -> YAML:
    """Creates a properly configured YAML object for dumping with multiline string support."""
    yaml_dumper = YAML()
    yaml_dumper.default_flow_style = False
    yaml_dumper.explicit_start = False
    # Sequence dashes sit at the mapping indent and need at least two columns for "- ".
    yaml_dumper.indent(mapping=indent, sequence=indent + max(indent, 2), offset=indent)  # type: ignore[attr-defined]
    yaml_dumper.width = YAML_LINE_WIDTH  # Prevent line wrapping for long lines

    # Configure multiline string handling
    def represent_str(dumper: Any, data: str) -> Any:
        """Custom string representer that uses literal scalar style for multiline strings."""
        if "\n" in data:
            # Use literal scalar style (|) for multiline strings
            return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
        # Use default representation for single-line strings
        return dumper.represent_scalar("tag:yaml.org,2002:str", data)

    yaml_dumper.representer.add_representer(str, represent_str)  # type: ignore[attr-defined]

    return yaml_dumper


def dump_yaml_to_string(data: Any, indent: int = 2) -> str:
    """Dumps data to a YAML string using the configured dumper."""
    stream = StringIO()
    create_yaml_dumper(indent).dump(data, stream)  # type: ignore[misc]
    return stream.getvalue()


def load_yaml_string(text: str) -> Any:
    """Loads a YAML string with the string-only base loader."""
    return create_yaml_loader().load(text)
