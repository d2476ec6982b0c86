"""The ``validate`` command run against the job files in tests/fixtures/jobs."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from panelnest.cli.main import app


FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "jobs"


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_job(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "kitchen.json")])

        assert result.exit_code == 0
        assert "Validation passed. Job is valid." in result.output

    def test_file_not_found(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "nonexistent.json")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_invalid_json_syntax(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "invalid_json.json")])

        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output
        assert "Validation failed" in result.output

    def test_unknown_field_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "unknown_field.json")])

        assert result.exit_code == 1
        assert "options.kerf" in result.output

    def test_unplaceable_part_warns(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "with_warnings.json")])

        # Exit code 2 = valid with warnings
        assert result.exit_code == 2
        assert "parts[1]" in result.output
        assert "'plinth'" in result.output
        assert "Validation passed with 1 warning(s)" in result.output

    def test_margin_error(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "margin_error.json")])

        assert result.exit_code == 1
        assert "options.edge_margin" in result.output
        assert "Validation failed: 1 error(s)" in result.output
