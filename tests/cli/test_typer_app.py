"""Tests for the filterpipe command line."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from filterpipe.cli import app
from filterpipe.cli.common.context import CliContext, cli_context_var, get_cli_context
from filterpipe.shared.constants import CLIDefaults


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestFilterCommand:
    """Test cases for the filter command."""

    def test_filters_and_prints_paths(self, runner: CliRunner, make_file) -> None:
        """Surviving paths go to stdout, one per line, in input order."""
        # Given
        report = make_file("report.pdf", 500)
        notes = make_file("notes.txt", 5000)
        image = make_file("image.png", 500)

        # When
        result = runner.invoke(
            app,
            ["--max", "2000", "--suffixes", ".pdf,.txt", report, notes, image],
        )

        # Then
        assert result.exit_code == CLIDefaults.EXIT_SUCCESS
        assert result.stdout.splitlines() == [report]

    def test_no_filters_prints_everything(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["b", "a", "b"])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["b", "a", "b"]

    def test_explicit_unset_bounds(self, runner: CliRunner, make_file) -> None:
        """-1 disables a bound."""
        small = make_file("small.txt", 1)

        result = runner.invoke(app, ["--min", "-1", "--max", "-1", small])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == [small]

    def test_uppercase_extension_matches(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--suffixes", ".pdf", "A.PDF", "b.txt"])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["A.PDF"]

    @pytest.mark.parametrize(("min_size", "max_size"), [("100", "50"), ("100", "100")])
    def test_min_not_below_max_fails_fast(
        self, runner: CliRunner, make_file, min_size: str, max_size: str
    ) -> None:
        """Invalid bounds exit non-zero before any path is printed."""
        path = make_file("f.txt", 75)

        result = runner.invoke(app, ["--min", min_size, "--max", max_size, path])

        assert result.exit_code == CLIDefaults.EXIT_ERROR
        assert path not in result.output
        assert "minimum size must be < maximum size" in result.output

    def test_negative_bound_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--min", "-5", "a.txt"])

        assert result.exit_code == CLIDefaults.EXIT_ERROR
        assert "size bounds must be >= 0" in result.output

    def test_non_integer_bound_is_usage_error(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--max", "big", "a.txt"])

        assert result.exit_code == 2

    def test_missing_files_are_silently_skipped(self, runner: CliRunner, temp_dir) -> None:
        missing = str(temp_dir / "missing.txt")

        result = runner.invoke(app, ["--max", "10", missing])

        assert result.exit_code == 0
        assert result.output == ""

    def test_stats_table(self, runner: CliRunner, make_file) -> None:
        """--stats prints the per-stage table after the paths."""
        path = make_file("a.txt", 3)

        result = runner.invoke(app, ["--stats", "--suffixes", ".txt", path])

        assert result.exit_code == 0
        assert "Pipeline statistics" in result.output
        assert "suffix_filter" in result.output

    def test_no_stats_table_by_default(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["a.txt"])

        assert result.exit_code == 0
        assert "Pipeline statistics" not in result.output

    def test_stats_follow_cli_context(self, runner: CliRunner) -> None:
        """The table is printed when the stored context asks for it."""
        with patch("filterpipe.cli.typer_app.get_cli_context") as mock_context:
            mock_context.return_value = CliContext(show_stats=True)
            result = runner.invoke(app, ["a.txt"])

        assert result.exit_code == 0
        assert "Pipeline statistics" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert result.stdout.strip() == f"filterpipe {CLIDefaults.VERSION}"

    def test_sets_cli_context(self, runner: CliRunner) -> None:
        runner.invoke(app, ["-v", "--stats", "a"])

        context = get_cli_context()
        assert context is not None
        assert context.is_verbose()
        assert context.show_stats
        assert context.get_effective_log_level() == "DEBUG"
        cli_context_var.set(None)

    def test_json_logging(self, runner: CliRunner) -> None:
        """--log-json with INFO emits JSON log lines besides the paths."""
        result = runner.invoke(app, ["--log-json", "--log-level", "info", "a.txt"])

        assert result.exit_code == 0
        assert "a.txt" in result.output.splitlines()
        assert '"level": "INFO"' in result.output
