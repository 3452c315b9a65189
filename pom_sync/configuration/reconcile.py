"""Reconciles and validates configuration for the sync workflow."""

from pathlib import Path

from pom_sync.configuration.exceptions import InvalidConfigurationElementError
from pom_sync.configuration.models import SyncConfig, SyncTargetOverride

TARGET_ALIASES: dict[str, SyncTargetOverride] = {
    "auto": SyncTargetOverride.AUTO,
    "xml": SyncTargetOverride.XML,
    "yaml": SyncTargetOverride.YAML,
    "yml": SyncTargetOverride.YAML,
}


def resolve_target_override(value: str) -> SyncTargetOverride:
    """Resolves a target name such as "auto", "xml", "yaml" or "yml" (case-insensitive).

    Raises:
        InvalidConfigurationElementError: If the name is not a known target.
    """
    try:
        return TARGET_ALIASES[value.strip().lower()]
    except KeyError:
        raise InvalidConfigurationElementError(
            name="sync target",
            cli_name="--target",
            env_name="POM_SYNC_TARGET",
            value=value,
            expected="one of " + ", ".join(TARGET_ALIASES),
        ) from None


def validate_indent(value: int, cli_name: str, env_name: str) -> int:
    """Validates that an indentation width is a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidConfigurationElementError(
            name="indentation width",
            cli_name=cli_name,
            env_name=env_name,
            value=value,
            expected="a positive number of spaces",
        )
    return value


def build_sync_config(
    base_dir: Path,
    xml_file: str,
    yaml_file: str,
    sync_file: str,
    yaml_indent: int,
    xml_indent: int,
    fail_if_xml_sync: bool,
    fail_if_cannot_sync: bool,
    target: str,
    debug: bool = False,
) -> SyncConfig:
    """Builds a validated SyncConfig from raw option values.

    Raises:
        InvalidConfigurationElementError: If the target or an indentation width is invalid.
    """
    return SyncConfig(
        base_dir=base_dir,
        xml_file=xml_file,
        yaml_file=yaml_file,
        sync_file=sync_file,
        yaml_indent=validate_indent(yaml_indent, "--yaml-indent", "POM_SYNC_YAML_INDENT"),
        xml_indent=validate_indent(xml_indent, "--xml-indent", "POM_SYNC_XML_INDENT"),
        fail_if_xml_sync=fail_if_xml_sync,
        fail_if_cannot_sync=fail_if_cannot_sync,
        target=resolve_target_override(target),
        debug=debug,
    )
