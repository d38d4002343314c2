#!/usr/bin/env python3
"""
Git Commit Tracker CLI

This CLI tool counts every git commit made on this machine, per calendar day:
- Installs a global post-commit hook that records each commit
- Stores daily counts in a local JSON ledger
- Reports totals, the last 7 days, busiest days and weekday patterns
- Shows and resets the tracker log

Usage:
    python track_commit.py [COMMAND]

Examples:
    python track_commit.py setup     # Install the global post-commit hook
    python track_commit.py stats     # Show commit statistics
    python track_commit.py weekly    # Show the weekday breakdown
    python track_commit.py log       # Show recent tracker log entries
    python track_commit.py reset     # Reset all data (asks for confirmation)
    python track_commit.py test      # Record one commit to test the setup
"""

import logging
import sys
from typing import List

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table
from rich.text import Text

from config.settings import settings
from services.commit_tracker.hooks import HookInstallError, SetupResult, install_hook
from services.commit_tracker.main import CommitLedgerService
from shared.models import LedgerStats, WeeklyReport
from shared.storage import StorageError, get_ledger_store

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.monitoring.log_level),
    format=settings.monitoring.log_format,
)
logger = logging.getLogger(__name__)


def get_service() -> CommitLedgerService:
    """Build the ledger service over the configured tracker files."""
    return CommitLedgerService(get_ledger_store())


class CommitTrackerCLI:
    """Rich rendering for tracker reports and messages."""

    def __init__(self):
        self.console = Console()

    def display_statistics(self, stats: LedgerStats):
        """Display the statistics report."""
        table = Table(title="Git Commit Statistics", show_header=True, header_style="bold magenta")
        table.add_column("Metric", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")

        table.add_row("Total commits tracked", str(stats.total_commits))
        table.add_row("Days with commits", str(stats.active_days))
        table.add_row("Weekly average", f"{stats.weekly_average:.1f} commits")
        table.add_row(f"This month total ({stats.current_month})", f"{stats.month_total} commits")
        self.console.print(table)

        recent = Table(title="Last 7 days", show_header=True, header_style="bold magenta")
        recent.add_column("Date", style="cyan", no_wrap=True)
        recent.add_column("Commits", style="green", justify="right")
        for day in stats.last_seven_days:
            recent.add_row(day.date, str(day.count))
        self.console.print(recent)

        top = Table(
            title=f"Top {len(stats.top_days)} most active days",
            show_header=True,
            header_style="bold magenta",
        )
        top.add_column("Date", style="cyan", no_wrap=True)
        top.add_column("Commits", style="green", justify="right")
        for day in stats.top_days:
            top.add_row(day.date, str(day.count))
        self.console.print(top)

    def display_weekly_report(self, report: WeeklyReport):
        """Display per-weekday totals and averages."""
        table = Table(title="Weekly Commit Report", show_header=True, header_style="bold magenta")
        table.add_column("Day", style="cyan", no_wrap=True)
        table.add_column("Total", style="green", justify="right")
        table.add_column("Average", style="yellow", justify="right")

        for day in report.days:
            table.add_row(day.weekday.value, str(day.total), f"{day.average:.1f}")
        self.console.print(table)

    def display_log(self, lines: List[str]):
        """Display recent tracker log lines."""
        self.console.print("[bold cyan]=== Recent Log Entries ===[/bold cyan]")
        for line in lines:
            self.console.print(line, markup=False, emoji=False, highlight=False, soft_wrap=True)

    def display_setup_result(self, result: SetupResult):
        """Display a success panel after installing the hook."""
        setup_text = Text()
        setup_text.append("✅ ", style="bold green")
        setup_text.append("Git commit tracker has been set up successfully!\n\n", style="bold white")
        setup_text.append("Hook: ", style="cyan")
        setup_text.append(f"{result.hook_path}\n", style="white")
        setup_text.append("JSON data: ", style="cyan")
        setup_text.append(f"{result.ledger_path}\n", style="white")
        setup_text.append("Log file: ", style="cyan")
        setup_text.append(f"{result.log_path}\n\n", style="white")
        setup_text.append("All future git commits will be tracked automatically.", style="white")

        panel = Panel(setup_text, title="Setup", border_style="green")
        self.console.print(panel)

        if result.previous_hooks_path:
            self.console.print(
                f"[yellow]Replaced previous core.hooksPath: {result.previous_hooks_path}[/yellow]"
            )
        self.console.print("\n[bold cyan]Next Steps:[/bold cyan]")
        self.console.print("• Test the setup with: [blue]git-commit-tracker test[/blue]")
        self.console.print("• View statistics with: [blue]git-commit-tracker stats[/blue]")

    def display_error_message(self, error: str, suggestion: str = ""):
        """Display error message with helpful suggestions."""
        error_text = Text()
        error_text.append("❌ ", style="bold red")
        error_text.append("Error occurred\n\n", style="bold white")
        error_text.append("Error: ", style="red")
        error_text.append(f"{error}\n", style="white")

        if suggestion:
            error_text.append("Suggestion: ", style="yellow")
            error_text.append(f"{suggestion}", style="white")

        panel = Panel(error_text, title="Error", border_style="red")
        self.console.print(panel)

    def display_help_text(self):
        """Display help text with commands and file locations."""
        tracker = settings.tracker
        help_text = Text()
        help_text.append("Git Commit Tracker\n\n", style="bold cyan")
        help_text.append("Usage: git-commit-tracker [COMMAND]\n\n")
        help_text.append("Commands:\n", style="bold yellow")
        help_text.append("  setup     - Setup global git hooks\n")
        help_text.append("  stats     - Show commit statistics\n")
        help_text.append("  weekly    - Show weekly commit report\n")
        help_text.append("  reset     - Reset all data\n")
        help_text.append("  log       - Show tracker log\n")
        help_text.append("  test      - Test commit recording\n")
        help_text.append("  help      - Show this help\n\n")
        help_text.append("Files:\n", style="bold yellow")
        help_text.append(f"  JSON data: {tracker.ledger_path}\n")
        help_text.append(f"  Log file:  {tracker.log_path}\n")
        help_text.append(f"  Hooks dir: {tracker.hooks_dir}")

        panel = Panel(help_text, title="Help", border_style="blue")
        self.console.print(panel)


# CLI instance
cli = CommitTrackerCLI()


class TrackerGroup(click.Group):
    """Command group that reports unknown commands with usage and exit code 1."""

    def resolve_command(self, ctx, args):
        cmd_name = args[0] if args else None
        if cmd_name and not cmd_name.startswith("-") and self.get_command(ctx, cmd_name) is None:
            cli.console.print(f"[red]Unknown command: {escape(cmd_name)}[/red]")
            cli.display_help_text()
            ctx.exit(1)
        return super().resolve_command(ctx, args)


@click.group(cls=TrackerGroup, invoke_without_command=True, add_help_option=False)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--help', '-h', 'show_help', is_flag=True, help='Show detailed help')
@click.pass_context
def main(ctx: click.Context, verbose: bool, show_help: bool):
    """Count git commits per day and report on them."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if show_help or ctx.invoked_subcommand is None:
        cli.display_help_text()
        ctx.exit(0)


@main.command()
def setup():
    """Setup global git hooks."""
    cli.console.print("Setting up global git hooks...")
    try:
        result = install_hook(settings.tracker)
    except HookInstallError as e:
        cli.display_error_message(str(e), "Install git and re-run: git-commit-tracker setup")
        sys.exit(1)

    cli.display_setup_result(result)


@main.command()
def stats():
    """Show commit statistics."""
    try:
        report = get_service().stats()
    except StorageError as e:
        logger.error(f"Error reading statistics: {e}")
        cli.display_error_message(str(e), "Check the tracker directory permissions")
        return

    if report is None:
        cli.console.print("No commit data found.")
        return
    cli.display_statistics(report)


@main.command()
def weekly():
    """Show weekly commit report."""
    try:
        report = get_service().weekly()
    except StorageError as e:
        logger.error(f"Error generating weekly report: {e}")
        cli.display_error_message(str(e), "Check the tracker directory permissions")
        return

    if report is None:
        cli.console.print("No commit data found.")
        return
    cli.display_weekly_report(report)


@main.command(name="log")
def show_log():
    """Show tracker log."""
    try:
        lines = get_service().log()
    except StorageError as e:
        logger.error(f"Error reading log file: {e}")
        cli.display_error_message(str(e), "Check the tracker directory permissions")
        return

    if lines is None:
        cli.console.print("No log file found.")
        return
    cli.display_log(lines)


@main.command()
@click.option('--yes', '-y', is_flag=True, help='Skip the confirmation prompt')
def reset(yes: bool):
    """Reset all data."""
    if not yes and not Confirm.ask(
        "Are you sure you want to reset all commit data?", default=False, console=cli.console
    ):
        cli.console.print("Reset cancelled.")
        return

    try:
        get_service().reset()
    except StorageError as e:
        logger.error(f"Error resetting data: {e}")
        cli.display_error_message(str(e), "Check the tracker directory permissions")
        return
    cli.console.print("All data has been reset.")


def _record_and_report(service: CommitLedgerService) -> None:
    count = service.record()
    if count is None:
        cli.console.print(
            f"[red]Commit could not be recorded. See {settings.tracker.log_path}[/red]"
        )
        return
    cli.console.print(f"Commit count updated: {service.today()} = {count}")


@main.command(name="test")
def test_tracker():
    """Test commit recording."""
    cli.console.print("Testing commit tracker...")
    _record_and_report(get_service())
    cli.console.print("Test completed. Check stats to see if it worked.")


@main.command(hidden=True)
def record():
    """Record one commit for today and print the new count."""
    _record_and_report(get_service())


@main.command(name="help")
def show_help_command():
    """Show this help."""
    cli.display_help_text()


if __name__ == "__main__":
    main()
