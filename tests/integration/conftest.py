"""Pytest configuration for integration tests."""

import os
from pathlib import Path

import pytest

POM_XML = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
    <modelVersion>4.0.0</modelVersion>
    <groupId>org.example</groupId>
    <artifactId>demo</artifactId>
    <version>1.0-SNAPSHOT</version>
    <dependencies>
        <dependency>
            <groupId>junit</groupId>
            <artifactId>junit</artifactId>
            <version>4.13.2</version>
            <scope>test</scope>
        </dependency>
    </dependencies>
</project>
"""


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove POM_SYNC_* variables so options fall back to their defaults."""
    for name in list(os.environ):
        if name.startswith("POM_SYNC_"):
            monkeypatch.delenv(name)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a project directory containing only a pom.xml."""
    (tmp_path / "pom.xml").write_text(POM_XML, encoding="utf-8")
    return tmp_path
