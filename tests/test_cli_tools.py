"""
Unit tests for the track_commit CLI.
"""

import json
from datetime import datetime
from unittest.mock import patch

import pytest
from click.testing import CliRunner

import track_commit
from services.commit_tracker.hooks import HookInstallError, SetupResult
from services.commit_tracker.main import CommitLedgerService
from shared.storage import FileLedgerStore, StorageError


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def store(tmp_path):
    """File store in a temporary tracker directory."""
    return FileLedgerStore(tmp_path / "daily_commits.json", tmp_path / "tracker.log")


@pytest.fixture
def service(store):
    """Patch the CLI to use a service over the temporary store."""
    service = CommitLedgerService(store, clock=lambda: datetime(2024, 1, 2, 12, 0))
    with patch.object(track_commit, "get_service", return_value=service):
        yield service


class TestHelpAndDispatch:
    """Test cases for help output and command dispatch."""

    def test_no_arguments_shows_help(self, runner):
        """Test running without a command shows usage and exits 0."""
        result = runner.invoke(track_commit.main, [])

        assert result.exit_code == 0
        assert "Commands:" in result.output
        assert "setup" in result.output

    @pytest.mark.parametrize("args", [["help"], ["--help"], ["-h"]])
    def test_help_variants(self, runner, args):
        """Test every help spelling shows usage and exits 0."""
        result = runner.invoke(track_commit.main, args)

        assert result.exit_code == 0
        assert "Git Commit Tracker" in result.output

    def test_unknown_command(self, runner):
        """Test an unknown command shows usage and exits 1."""
        result = runner.invoke(track_commit.main, ["frobnicate"])

        assert result.exit_code == 1
        assert "Unknown command: frobnicate" in result.output
        assert "Commands:" in result.output


class TestReportCommands:
    """Test cases for stats, weekly and log."""

    def test_stats_without_data(self, runner, service):
        """Test stats with no ledger prints the no-data message."""
        result = runner.invoke(track_commit.main, ["stats"])

        assert result.exit_code == 0
        assert "No commit data found." in result.output

    def test_stats_with_data(self, runner, service, store):
        """Test stats prints totals and the busiest days."""
        store.ledger_path.write_text(json.dumps({"2024-01-01": 3, "2024-01-02": 5}))

        result = runner.invoke(track_commit.main, ["stats"])

        assert result.exit_code == 0
        assert "Total commits tracked" in result.output
        assert "8" in result.output
        assert "2024-01-02" in result.output
        assert "8.0 commits" in result.output

    def test_stats_read_error(self, runner, service):
        """Test a storage error is reported without crashing."""
        with patch.object(service, "stats", side_effect=StorageError("unreadable")):
            result = runner.invoke(track_commit.main, ["stats"])

        assert result.exit_code == 0
        assert "unreadable" in result.output

    def test_weekly_without_data(self, runner, service):
        """Test weekly with no ledger prints the no-data message."""
        result = runner.invoke(track_commit.main, ["weekly"])

        assert "No commit data found." in result.output

    def test_weekly_with_data(self, runner, service, store):
        """Test weekly prints every weekday with one-decimal averages."""
        store.ledger_path.write_text(json.dumps({"2024-01-01": 3, "2024-01-08": 4}))

        result = runner.invoke(track_commit.main, ["weekly"])

        assert result.exit_code == 0
        for day in ("Sunday", "Monday", "Saturday"):
            assert day in result.output
        assert "3.5" in result.output
        assert "0.0" in result.output

    def test_log_without_file(self, runner, service, store):
        """Test log without a file prints a message and creates nothing."""
        result = runner.invoke(track_commit.main, ["log"])

        assert "No log file found." in result.output
        assert not store.log_path.exists()

    def test_log_shows_recent_entries(self, runner, service, store):
        """Test log prints the most recent entries."""
        store.log_path.write_text(
            "\n".join(f"2024-01-02T12:00:{i:02d}: entry {i}" for i in range(25)) + "\n"
        )

        result = runner.invoke(track_commit.main, ["log"])

        assert "Recent Log Entries" in result.output
        assert "entry 24" in result.output
        assert "entry 5" in result.output
        assert "entry 4\n" not in result.output


class TestRecordingCommands:
    """Test cases for test, record and reset."""

    def test_test_command_records_once(self, runner, service, store):
        """Test the test command records one commit."""
        result = runner.invoke(track_commit.main, ["test"])

        assert result.exit_code == 0
        assert "Testing commit tracker..." in result.output
        assert "Commit count updated: 2024-01-02 = 1" in result.output
        assert json.loads(store.ledger_path.read_text()) == {"2024-01-02": 1}

    def test_record_command_reports_failure(self, runner, service):
        """Test a failed record is reported and still exits 0."""
        with patch.object(service, "record", return_value=None):
            result = runner.invoke(track_commit.main, ["record"])

        assert result.exit_code == 0
        assert "could not be recorded" in result.output

    def test_reset_confirmed(self, runner, service, store):
        """Test reset clears data after confirmation."""
        service.record()

        with patch.object(track_commit.Confirm, "ask", return_value=True):
            result = runner.invoke(track_commit.main, ["reset"])

        assert "All data has been reset." in result.output
        assert store.ledger_path.read_text() == "{}"

    def test_reset_cancelled(self, runner, service, store):
        """Test reset keeps data when not confirmed."""
        service.record()

        with patch.object(track_commit.Confirm, "ask", return_value=False):
            result = runner.invoke(track_commit.main, ["reset"])

        assert "Reset cancelled." in result.output
        assert json.loads(store.ledger_path.read_text()) == {"2024-01-02": 1}

    def test_reset_yes_skips_prompt(self, runner, service, store):
        """Test --yes resets without asking."""
        service.record()

        with patch.object(track_commit.Confirm, "ask") as mock_ask:
            result = runner.invoke(track_commit.main, ["reset", "--yes"])

        mock_ask.assert_not_called()
        assert result.exit_code == 0
        assert store.log_path.read_text() == ""


class TestSetupCommand:
    """Test cases for setup."""

    def test_setup_success(self, runner, tmp_path):
        """Test a successful setup shows the installed hook."""
        setup_result = SetupResult(
            hook_path=tmp_path / "hooks" / "post-commit",
            hooks_dir=tmp_path / "hooks",
            ledger_path=tmp_path / "daily_commits.json",
            log_path=tmp_path / "tracker.log",
        )
        with patch.object(track_commit, "install_hook", return_value=setup_result):
            result = runner.invoke(track_commit.main, ["setup"])

        assert result.exit_code == 0
        assert "set up successfully" in result.output

    def test_setup_without_git(self, runner):
        """Test setup exits 1 with a diagnostic when git is missing."""
        error = HookInstallError("git is not installed or not on PATH.")
        with patch.object(track_commit, "install_hook", side_effect=error):
            result = runner.invoke(track_commit.main, ["setup"])

        assert result.exit_code == 1
        assert "git is not installed" in result.output
