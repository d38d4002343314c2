"""
Storage layer for the Git commit tracker.

The ledger and the tracker log are process-wide files shared by every
repository on the machine. Services never touch them directly: they receive a
``LedgerStore`` so tests can use a temporary directory or an in-memory store.

- ``FileLedgerStore``: JSON ledger + plain text log on the local filesystem
- ``MemoryLedgerStore``: the same contract held in memory
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from config.settings import TrackerSettings, get_settings
from shared.models import Ledger

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the ledger or log cannot be read or written."""


class LedgerStore(ABC):
    """Contract shared by all ledger stores."""

    @abstractmethod
    def ledger_exists(self) -> bool:
        """Return True when a ledger has been persisted."""

    @abstractmethod
    def read_ledger_text(self) -> Optional[str]:
        """Return the raw persisted ledger, or None when absent."""

    @abstractmethod
    def write_ledger_text(self, text: str) -> None:
        """Replace the persisted ledger."""

    @abstractmethod
    def log_exists(self) -> bool:
        """Return True when the log has been created."""

    @abstractmethod
    def read_log_text(self) -> Optional[str]:
        """Return the whole log, or None when absent."""

    @abstractmethod
    def append_log_line(self, line: str) -> None:
        """Append one line to the log."""

    @abstractmethod
    def truncate_log(self) -> None:
        """Empty the log."""

    def load_ledger(self) -> Ledger:
        """
        Load the ledger, treating a missing, empty or corrupt file as empty.

        Corrupt content is not repaired here; the next save overwrites it.
        """
        text = self.read_ledger_text()
        if text is None or not text.strip():
            return Ledger()
        try:
            return Ledger.model_validate_json(text)
        except ValidationError as e:
            # Unparsable ledgers reset to empty instead of failing the caller
            logger.warning(f"Ledger content is corrupt, starting from empty: {e.error_count()} error(s)")
            return Ledger()

    def save_ledger(self, ledger: Ledger) -> None:
        self.write_ledger_text(ledger.model_dump_json(indent=2))

    def read_log_lines(self) -> Optional[List[str]]:
        """Return the non-blank log lines in file order, or None when absent."""
        text = self.read_log_text()
        if text is None:
            return None
        return [line for line in text.splitlines() if line.strip()]


class FileLedgerStore(LedgerStore):
    """Ledger and log stored as files in the tracker directory."""

    def __init__(self, ledger_path: Path, log_path: Path):
        self.ledger_path = Path(ledger_path)
        self.log_path = Path(log_path)

    @classmethod
    def from_settings(cls, tracker: TrackerSettings) -> "FileLedgerStore":
        """Create a FileLedgerStore from tracker settings."""
        return cls(ledger_path=tracker.ledger_path, log_path=tracker.log_path)

    def ledger_exists(self) -> bool:
        return self.ledger_path.is_file()

    def read_ledger_text(self) -> Optional[str]:
        if not self.ledger_exists():
            return None
        try:
            # Undecodable bytes fail JSON validation and load as a corrupt ledger
            return self.ledger_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise StorageError(f"Cannot read ledger {self.ledger_path}: {e}") from e

    def write_ledger_text(self, text: str) -> None:
        try:
            self.ledger_path.parent.mkdir(parents=True, exist_ok=True)
            self.ledger_path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot write ledger {self.ledger_path}: {e}") from e
        logger.debug(f"Wrote ledger to {self.ledger_path}")

    def log_exists(self) -> bool:
        return self.log_path.is_file()

    def read_log_text(self) -> Optional[str]:
        if not self.log_exists():
            return None
        try:
            return self.log_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read log {self.log_path}: {e}") from e

    def append_log_line(self, line: str) -> None:
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(line.rstrip("\n") + "\n")
        except OSError as e:
            raise StorageError(f"Cannot append to log {self.log_path}: {e}") from e

    def truncate_log(self) -> None:
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            self.log_path.write_text("", encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot truncate log {self.log_path}: {e}") from e


class MemoryLedgerStore(LedgerStore):
    """In-memory store with the same contract as FileLedgerStore."""

    def __init__(self, ledger_text: Optional[str] = None, log_text: Optional[str] = None):
        self.ledger_text = ledger_text
        self.log_text = log_text

    def ledger_exists(self) -> bool:
        return self.ledger_text is not None

    def read_ledger_text(self) -> Optional[str]:
        return self.ledger_text

    def write_ledger_text(self, text: str) -> None:
        self.ledger_text = text

    def log_exists(self) -> bool:
        return self.log_text is not None

    def read_log_text(self) -> Optional[str]:
        return self.log_text

    def append_log_line(self, line: str) -> None:
        self.log_text = (self.log_text or "") + line.rstrip("\n") + "\n"

    def truncate_log(self) -> None:
        self.log_text = ""


def get_ledger_store() -> FileLedgerStore:
    """Return the filesystem store configured in settings."""
    return FileLedgerStore.from_settings(get_settings().tracker)
