"""Defines the Command Line Interface (CLI) using Typer."""

import logging
import sys
from pathlib import Path

import structlog
import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from pom_sync.configuration.exceptions import ConfigurationError
from pom_sync.configuration.reconcile import build_sync_config, validate_indent
from pom_sync.convert.converter import ConversionDirection, convert, decode_source
from pom_sync.convert.exceptions import InvalidFormatError
from pom_sync.synchronize.driver import run_sync_workflow
from pom_sync.synchronize.exceptions import DocumentIOError, UnreconcilableConflictError, XmlRegeneratedError
from pom_sync.utils.constants import (
    DEFAULT_SYNC_FILE,
    DEFAULT_XML_FILE,
    DEFAULT_XML_INDENT,
    DEFAULT_YAML_FILE,
    DEFAULT_YAML_INDENT,
)
from pom_sync.utils.files import atomic_write_text, read_bytes_if_exists

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Keep an XML project descriptor and its YAML rendition in sync.")


def configure_logging(debug: bool) -> None:
    """Configure structlog to emit progress lines to stderr at INFO, or everything when debugging."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


@typer_app.command(name="sync")
def sync_cli(
    base_dir: Annotated[Path, Option(envvar="POM_SYNC_BASE_DIR", help="Base directory of the project.")] = Path("."),
    xml_file: Annotated[str, Option(envvar="POM_SYNC_XML_FILE", help="XML document, relative to the base directory.")] = DEFAULT_XML_FILE,
    yaml_file: Annotated[str, Option(envvar="POM_SYNC_YAML_FILE", help="YAML document, relative to the base directory.")] = DEFAULT_YAML_FILE,
    sync_file: Annotated[str, Option(envvar="POM_SYNC_SYNC_FILE", help="Sync file, relative to the base directory.")] = DEFAULT_SYNC_FILE,
    yaml_indent: Annotated[int, Option(envvar="POM_SYNC_YAML_INDENT", help="Number of spaces to indent YAML with.")] = DEFAULT_YAML_INDENT,
    xml_indent: Annotated[int, Option(envvar="POM_SYNC_XML_INDENT", help="Number of spaces to indent XML with.")] = DEFAULT_XML_INDENT,
    fail_if_xml_sync: Annotated[
        bool,
        Option(
            "--fail-if-xml-sync/--no-fail-if-xml-sync",
            envvar="POM_SYNC_FAIL_IF_XML_SYNC",
            help="Stop with an error after the XML document is regenerated.",
        ),
    ] = True,
    fail_if_cannot_sync: Annotated[
        bool,
        Option(
            "--fail-if-cannot-sync/--no-fail-if-cannot-sync",
            envvar="POM_SYNC_FAIL_IF_CANNOT_SYNC",
            help="Stop with an error when both documents changed since the last sync.",
        ),
    ] = True,
    target: Annotated[str, Option(envvar="POM_SYNC_TARGET", help='Force a sync into a particular format: "auto", "xml" or "yaml".')] = "auto",
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug logging.")] = False,
) -> None:
    """Synchronize the XML and YAML documents, regenerating whichever one is stale."""
    try:
        config = build_sync_config(
            base_dir=base_dir,
            xml_file=xml_file,
            yaml_file=yaml_file,
            sync_file=sync_file,
            yaml_indent=yaml_indent,
            xml_indent=xml_indent,
            fail_if_xml_sync=fail_if_xml_sync,
            fail_if_cannot_sync=fail_if_cannot_sync,
            target=target,
            debug=debug,
        )
    except ConfigurationError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1) from e

    configure_logging(config.debug)

    try:
        run_sync_workflow(config)
    except InvalidFormatError as e:
        typer.echo(f"Unable to create or parse a valid format: \n{e}", err=True)
        raise typer.Exit(code=1) from e
    except DocumentIOError as e:
        typer.echo(f"Error syncing YAML document: {e}", err=True)
        raise typer.Exit(code=1) from e
    except (ConfigurationError, UnreconcilableConflictError, XmlRegeneratedError) as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1) from e


@typer_app.command(name="xml-to-yaml")
def xml_to_yaml_cli(
    source: Annotated[Path, Argument(help="Path to the XML document to convert.")],
    destination: Annotated[Path | None, Argument(help="Where to write the YAML document (default: standard output).")] = None,
    indent: Annotated[int, Option(envvar="POM_SYNC_YAML_INDENT", help="Number of spaces to indent YAML with.")] = DEFAULT_YAML_INDENT,
) -> None:
    """Convert a single XML document into YAML."""
    _convert_file(source, destination, ConversionDirection.XML_TO_YAML, indent, "POM_SYNC_YAML_INDENT")


@typer_app.command(name="yaml-to-xml")
def yaml_to_xml_cli(
    source: Annotated[Path, Argument(help="Path to the YAML document to convert.")],
    destination: Annotated[Path | None, Argument(help="Where to write the XML document (default: standard output).")] = None,
    indent: Annotated[int, Option(envvar="POM_SYNC_XML_INDENT", help="Number of spaces to indent XML with.")] = DEFAULT_XML_INDENT,
) -> None:
    """Convert a single YAML document into XML."""
    _convert_file(source, destination, ConversionDirection.YAML_TO_XML, indent, "POM_SYNC_XML_INDENT")


def _convert_file(source: Path, destination: Path | None, direction: ConversionDirection, indent: int, indent_env_name: str) -> None:
    """Convert one file, writing the result to the destination or to standard output."""
    configure_logging(debug=False)
    try:
        validate_indent(indent, "--indent", indent_env_name)
        data = read_bytes_if_exists(source)
        if data is None:
            raise ConfigurationError(f"File not found: {source.absolute()}")
        output = convert(decode_source(data, direction), direction, indent)
        if destination is None:
            typer.echo(output, nl=False)
        else:
            atomic_write_text(destination, output)
            typer.echo(f"Wrote {destination}")
    except InvalidFormatError as e:
        typer.echo(f"Unable to create or parse a valid format: \n{e}", err=True)
        raise typer.Exit(code=1) from e
    except ConfigurationError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1) from e
    except OSError as e:
        typer.echo(f"Error converting {source}: {e}", err=True)
        raise typer.Exit(code=1) from e


if __name__ == "__main__":
    typer_app()
