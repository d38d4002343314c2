"""
Global post-commit hook installation.

Setup writes a ``post-commit`` script into the global hooks directory, points
``core.hooksPath`` at it, and provisions the ledger and log files. The hook
runs ``services.commit_tracker.run`` with the interpreter and project root
that performed the setup, from inside the tracker directory, and ignores its
output and exit status.
"""

import logging
import shlex
import shutil
import stat
import sys
from pathlib import Path
from typing import Callable, Optional

from pydantic import BaseModel, Field

from config.settings import TrackerSettings

logger = logging.getLogger(__name__)

HOOK_NAME = "post-commit"
HOOK_TEMPLATE = """#!/bin/sh
# Global post-commit hook for tracking commits
mkdir -p {tracker_dir} && cd {tracker_dir} && \\
PYTHONPATH={project_root} \\
COMMIT_TRACKER_TRACKER_DIR={tracker_dir} \\
COMMIT_TRACKER_LEDGER_FILENAME={ledger_filename} \\
COMMIT_TRACKER_LOG_FILENAME={log_filename} \\
{python} -m services.commit_tracker.run >/dev/null 2>&1 || true
"""

# Directory holding the config, shared and services packages
PROJECT_ROOT = Path(__file__).resolve().parents[2]


class HookInstallError(Exception):
    """Raised when the hook cannot be installed."""


class SetupResult(BaseModel):
    """Outcome of a successful setup."""

    hook_path: Path = Field(..., description="Installed post-commit hook")
    hooks_dir: Path = Field(..., description="Value written to core.hooksPath")
    ledger_path: Path
    log_path: Path
    previous_hooks_path: Optional[str] = Field(
        default=None, description="core.hooksPath value that was replaced"
    )


def render_hook(tracker: TrackerSettings, python: Optional[str] = None) -> str:
    """
    Render the post-commit script for the given tracker settings.

    The effective tracker paths are written into the script so the hook
    records where setup provisioned, whatever environment git runs it in.
    """
    # python -m puts the cwd on sys.path; keep the committing repo off it
    return HOOK_TEMPLATE.format(
        tracker_dir=shlex.quote(str(tracker.tracker_dir)),
        project_root=shlex.quote(str(PROJECT_ROOT)),
        ledger_filename=shlex.quote(tracker.ledger_filename),
        log_filename=shlex.quote(tracker.log_filename),
        python=shlex.quote(python or sys.executable),
    )


class GitHooksConfigurator:
    """Reads and writes the global ``core.hooksPath`` through GitPython."""

    def __init__(self):
        # GitPython refuses to import without a git executable on PATH
        import git

        self._git = git.Git()
        self._command_error = git.GitCommandError

    def get_hooks_path(self) -> Optional[str]:
        try:
            value = self._git.config("--global", "--get", "core.hooksPath")
        except self._command_error:
            # git exits 1 when the key is unset
            return None
        return value.strip() or None

    def set_hooks_path(self, hooks_dir: Path) -> None:
        try:
            self._git.config("--global", "core.hooksPath", str(hooks_dir))
        except self._command_error as e:
            raise HookInstallError(f"git config failed: {e}") from e


def provision_files(tracker: TrackerSettings) -> None:
    """Create the tracker directory, an empty ledger, and the log if missing."""
    tracker.tracker_dir.mkdir(parents=True, exist_ok=True)
    if not tracker.ledger_path.exists():
        tracker.ledger_path.write_text("{}", encoding="utf-8")
    tracker.log_path.touch(exist_ok=True)


def install_hook(
    tracker: TrackerSettings,
    configurator_factory: Callable[[], GitHooksConfigurator] = GitHooksConfigurator,
    python: Optional[str] = None,
) -> SetupResult:
    """
    Install the global post-commit hook and provision tracker files.

    Raises:
        HookInstallError: git is unavailable, or a file or config write failed.
    """
    if shutil.which("git") is None:
        raise HookInstallError("git is not installed or not on PATH. Please install git first.")

    hook_path = tracker.hooks_dir / HOOK_NAME
    try:
        provision_files(tracker)
        tracker.hooks_dir.mkdir(parents=True, exist_ok=True)
        hook_path.write_text(render_hook(tracker, python), encoding="utf-8")
        mode = hook_path.stat().st_mode
        hook_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        raise HookInstallError(f"Cannot write tracker files: {e}") from e

    configurator = configurator_factory()
    previous = configurator.get_hooks_path()
    replaced = None
    if previous and Path(previous).expanduser() != tracker.hooks_dir:
        replaced = previous
        logger.warning(f"Replacing existing core.hooksPath {previous} with {tracker.hooks_dir}")
    configurator.set_hooks_path(tracker.hooks_dir)

    logger.info(f"Installed {HOOK_NAME} hook at {hook_path}")
    return SetupResult(
        hook_path=hook_path,
        hooks_dir=tracker.hooks_dir,
        ledger_path=tracker.ledger_path,
        log_path=tracker.log_path,
        previous_hooks_path=replaced,
    )
