"""Test configuration and fixtures for dir2sheet."""

import pytest

from dir2sheet.exclusion_rules.path_list_rules import EXCLUSION_FILE_NAME


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def project_tree(tmp_path):
    """Create a small project with an exclusion-list file."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.ts").write_text("export {}\n")
    (tmp_path / "src" / "util.js").write_text("module.exports = {}\n")
    (tmp_path / "src" / "lib").mkdir()
    (tmp_path / "src" / "lib" / "index.ts").write_text("export {}\n")
    (tmp_path / "build").mkdir()
    (tmp_path / "build" / "output.ts").write_text("compiled\n")
    (tmp_path / "builder").mkdir()
    (tmp_path / "builder" / "output.ts").write_text("tool\n")
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.md").write_text("# Guide\n")
    (tmp_path / "README.md").write_text("# Project\n")
    (tmp_path / EXCLUSION_FILE_NAME).write_text("build/\nREADME.md\n")
    return tmp_path
