"""Tests for the conversion CLI commands."""

import json
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]

SCREEN = {
    "tree": {
        "id": "col",
        "type": "Column",
        "layout": {"type": "column", "spacing": 8},
        "children": [
            {"id": "title", "type": "Text", "properties": {"data": "Hello"}},
            {"id": "btn-1", "type": "ElevatedButton", "properties": {"style": "primary"}},
        ],
    },
    "definitions": [
        {
            "id": "btn-def",
            "type": "ElevatedButton",
            "name": "PrimaryButton",
            "properties": {"style": "primary"},
            "usageCount": 1,
            "usageIds": ["btn-1"],
        }
    ],
    "theme": {"colorScheme": {"primary": "#2196F3"}},
}


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, ".", *args],
        capture_output=True,
        text=True,
        cwd=REPO_ROOT,
        timeout=60,
    )


@pytest.fixture
def screen_file(tmp_path: Path) -> Path:
    path = tmp_path / "screen.json"
    path.write_text(json.dumps(SCREEN))
    return path


@pytest.mark.integration
def test_convert_json(screen_file):
    """convert prints the host JSON and exits cleanly."""
    result = _run("convert", str(screen_file))
    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["success"] is True
    assert data["root"]["children"][1]["type"] == "INSTANCE"
    assert data["stats"]["instancesCreated"] == 1


@pytest.mark.integration
def test_convert_tree_format(screen_file):
    """convert --format tree prints the node tree."""
    result = _run("convert", str(screen_file), "--format", "tree")
    assert result.returncode == 0
    assert result.stdout.startswith("Column [FRAME, vertical]")
    assert "INSTANCE -> component-button---primary-" in result.stdout


@pytest.mark.integration
def test_convert_output_file(screen_file, tmp_path):
    """convert --output writes the result to a file."""
    output = tmp_path / "out.json"
    result = _run("convert", str(screen_file), "-o", str(output))
    assert result.returncode == 0
    assert json.loads(output.read_text())["components"][0]["name"] == "Button / Primary"


@pytest.mark.integration
def test_convert_missing_input(tmp_path):
    """A missing input file fails with exit code 1."""
    result = _run("convert", str(tmp_path / "missing.json"))
    assert result.returncode == 1


@pytest.mark.integration
def test_validate_reports_schema_errors(tmp_path):
    """validate lists structural problems."""
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"type": "Column"}))
    result = _run("validate", str(path))
    assert result.returncode == 1
    assert "Schema errors" in result.stdout


@pytest.mark.integration
def test_validate_accepts_valid_tree(screen_file):
    """validate accepts a well-formed tree."""
    result = _run("validate", str(screen_file))
    assert result.returncode == 0
    assert "Valid widget tree" in result.stdout


@pytest.mark.integration
def test_env_lists_variables():
    """env lists configuration variables by category."""
    result = _run("env", "--category", "variants")
    assert result.returncode == 0
    assert "DESIGNGEN_MAX_VARIANTS" in result.stdout


@pytest.mark.integration
def test_unknown_command():
    """Unknown commands show help and fail."""
    result = _run("nope")
    assert result.returncode == 1
    assert "Usage: python . {command} [args]" in result.stdout
