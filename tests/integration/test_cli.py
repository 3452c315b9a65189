"""Integration tests for the CLI."""

from pathlib import Path

from click.testing import Result
from typer.testing import CliRunner

from pom_sync.configuration.cli import typer_app

runner = CliRunner()


def run_cli(args: list[str], env: dict[str, str] | None = None) -> Result:
    """Helper to invoke the CLI in-process and capture output.

    Args:
        args: List of command line arguments to pass to the CLI.
        env: Extra environment variables for the invocation.

    Returns:
        Result: The result of running the CLI command.
    """
    result = runner.invoke(typer_app, args, env=env)
    print(f"Command result: {result.exit_code}")
    print(f"Command output: {result.output}")
    return result


def test_sync_generates_yaml_and_sync_file(project_dir: Path) -> None:
    """Test that a first sync creates pom.yml and .pom.yml next to pom.xml."""
    result = run_cli(["sync", "--base-dir", str(project_dir)])

    assert result.exit_code == 0
    yaml_text = (project_dir / "pom.yml").read_text(encoding="utf-8")
    assert yaml_text.startswith("project:\n  '@attributes':\n")
    assert "    dependency:\n" in yaml_text
    assert (project_dir / ".pom.yml").exists()


def test_sync_twice_succeeds_without_changes(project_dir: Path) -> None:
    """Test that a second sync leaves both documents untouched."""
    run_cli(["sync", "--base-dir", str(project_dir)])
    xml_before = (project_dir / "pom.xml").read_text(encoding="utf-8")
    yaml_before = (project_dir / "pom.yml").read_text(encoding="utf-8")

    result = run_cli(["sync", "--base-dir", str(project_dir)])

    assert result.exit_code == 0
    assert (project_dir / "pom.xml").read_text(encoding="utf-8") == xml_before
    assert (project_dir / "pom.yml").read_text(encoding="utf-8") == yaml_before


def test_sync_yaml_edit_regenerates_xml_and_exits_with_error(project_dir: Path) -> None:
    """Test that regenerating pom.xml fails the invocation so the build is re-run."""
    run_cli(["sync", "--base-dir", str(project_dir)])
    yaml_path = project_dir / "pom.yml"
    yaml_path.write_text(yaml_path.read_text(encoding="utf-8").replace("1.0-SNAPSHOT", "2.0-SNAPSHOT"), encoding="utf-8")

    result = run_cli(["sync", "--base-dir", str(project_dir)])

    assert result.exit_code == 1
    assert "pom.xml modified" in result.output
    assert "<version>2.0-SNAPSHOT</version>" in (project_dir / "pom.xml").read_text(encoding="utf-8")


def test_sync_yaml_edit_with_no_fail_if_xml_sync(project_dir: Path) -> None:
    """Test that --no-fail-if-xml-sync makes XML regeneration succeed."""
    run_cli(["sync", "--base-dir", str(project_dir)])
    (project_dir / "pom.yml").write_text("project:\n  name: rewritten\n", encoding="utf-8")

    result = run_cli(["sync", "--base-dir", str(project_dir), "--no-fail-if-xml-sync"])

    assert result.exit_code == 0
    assert "<name>rewritten</name>" in (project_dir / "pom.xml").read_text(encoding="utf-8")


def test_sync_conflict_exits_with_error(project_dir: Path) -> None:
    """Test that edits to both documents are refused."""
    run_cli(["sync", "--base-dir", str(project_dir)])
    (project_dir / "pom.xml").write_text("<project><name>one</name></project>", encoding="utf-8")
    (project_dir / "pom.yml").write_text("project:\n  name: two\n", encoding="utf-8")

    result = run_cli(["sync", "--base-dir", str(project_dir)])

    assert result.exit_code == 1
    assert "Unable to automatically sync" in result.output


def test_sync_conflict_is_not_fatal_when_disabled(project_dir: Path) -> None:
    """Test that --no-fail-if-cannot-sync lets a conflicting run succeed."""
    (project_dir / "pom.yml").write_text("project:\n  name: two\n", encoding="utf-8")

    result = run_cli(["sync", "--base-dir", str(project_dir), "--no-fail-if-cannot-sync"])

    assert result.exit_code == 0
    assert not (project_dir / ".pom.yml").exists()


def test_sync_forced_target(project_dir: Path) -> None:
    """Test that --target yaml overwrites the YAML document even on a first run."""
    (project_dir / "pom.yml").write_text("project:\n  name: stale\n", encoding="utf-8")

    result = run_cli(["sync", "--base-dir", str(project_dir), "--target", "yaml"])

    assert result.exit_code == 0
    assert "stale" not in (project_dir / "pom.yml").read_text(encoding="utf-8")


def test_sync_invalid_target(project_dir: Path) -> None:
    """Test that an unknown target is rejected before anything is written."""
    result = run_cli(["sync", "--base-dir", str(project_dir), "--target", "json"])

    assert result.exit_code == 1
    assert "Invalid value 'json'" in result.output
    assert not (project_dir / "pom.yml").exists()


def test_sync_malformed_xml(tmp_path: Path) -> None:
    """Test that a parse error is reported with the offending text."""
    (tmp_path / "pom.xml").write_text("<project>\n  <name>demo</nmae>\n</project>\n", encoding="utf-8")

    result = run_cli(["sync", "--base-dir", str(tmp_path)])

    assert result.exit_code == 1
    assert "Unable to create or parse a valid format" in result.output
    assert "<name>demo</nmae>" in result.output


def test_sync_without_documents(tmp_path: Path) -> None:
    """Test that a directory without documents is a configuration error."""
    result = run_cli(["sync", "--base-dir", str(tmp_path)])

    assert result.exit_code == 1
    assert "no document to synchronize" in result.output


def test_sync_reads_options_from_environment(project_dir: Path) -> None:
    """Test that options fall back to POM_SYNC_* environment variables."""
    result = run_cli(["sync"], env={"POM_SYNC_BASE_DIR": str(project_dir), "POM_SYNC_YAML_INDENT": "4"})

    assert result.exit_code == 0
    assert (project_dir / "pom.yml").read_text(encoding="utf-8").startswith("project:\n    '@attributes':\n")


def test_xml_to_yaml_to_stdout(tmp_path: Path) -> None:
    """Test converting a single XML file to standard output."""
    source = tmp_path / "pom.xml"
    source.write_text("<project><name>demo</name></project>", encoding="utf-8")

    result = run_cli(["xml-to-yaml", str(source)])

    assert result.exit_code == 0
    assert result.stdout == "project:\n  name: demo\n"


def test_yaml_to_xml_to_file(tmp_path: Path) -> None:
    """Test converting a single YAML file into a destination file."""
    source = tmp_path / "pom.yml"
    source.write_text("project:\n  name: demo\n", encoding="utf-8")
    destination = tmp_path / "out" / "pom.xml"

    result = run_cli(["yaml-to-xml", str(source), str(destination), "--indent", "2"])

    assert result.exit_code == 0
    assert destination.read_text(encoding="utf-8") == '<?xml version="1.0" encoding="UTF-8"?>\n<project>\n  <name>demo</name>\n</project>\n'


def test_convert_missing_source(tmp_path: Path) -> None:
    """Test that converting a missing file fails with a readable message."""
    result = run_cli(["xml-to-yaml", str(tmp_path / "missing.xml")])

    assert result.exit_code == 1
    assert "File not found" in result.output


def test_sync_latin1_pom(tmp_path: Path) -> None:
    """Test that a pom.xml declaring ISO-8859-1 is synced instead of crashing."""
    xml = '<?xml version="1.0" encoding="ISO-8859-1"?>\n<project>\n    <name>d\xe9mo</name>\n</project>\n'
    (tmp_path / "pom.xml").write_bytes(xml.encode("latin-1"))

    result = run_cli(["sync", "--base-dir", str(tmp_path)])

    assert result.exit_code == 0
    assert (tmp_path / "pom.yml").read_text(encoding="utf-8") == "project:\n  name: d\xe9mo\n"


def test_sync_undecodable_pom(tmp_path: Path) -> None:
    """Test that a pom.xml that is not valid in its encoding is reported, not raised."""
    (tmp_path / "pom.xml").write_bytes(b"<project><name>d\xe9mo</name></project>")

    result = run_cli(["sync", "--base-dir", str(tmp_path)])

    assert result.exit_code == 1
    assert "Unable to create or parse a valid format" in result.output
    assert "byte 0xe9 at position 16" in result.output
    assert not (tmp_path / "pom.yml").exists()
