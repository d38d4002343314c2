"""
Commit ledger service for the Git commit tracker.

This service provides:
- Recording one commit against today's date
- Aggregate statistics over the ledger
- A per-weekday breakdown
- Recent tracker log entries
- Resetting all tracked data

Every operation is a single load-act pass over the injected ``LedgerStore``.
Nothing is cached between calls, and concurrent writers race with
last-writer-wins semantics.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from config.settings import settings
from shared.models import (
    DATE_FORMAT,
    MONTH_FORMAT,
    DailyCount,
    LedgerStats,
    Weekday,
    WeekdaySummary,
    WeeklyReport,
    parse_ledger_date,
)
from shared.storage import LedgerStore, StorageError

logger = logging.getLogger(__name__)


def format_log_line(timestamp: datetime, message: str) -> str:
    """Format one tracker log line as ``<ISO-8601 timestamp>: <message>``."""
    return f"{timestamp.isoformat()}: {message}"


class CommitLedgerService:
    """Core commit ledger with business logic."""

    def __init__(
        self,
        store: LedgerStore,
        clock: Callable[[], datetime] = datetime.now,
        top_days: Optional[int] = None,
        log_limit: Optional[int] = None,
    ):
        self.store = store
        self.clock = clock
        self.top_days = top_days or settings.tracker.top_days
        self.log_limit = log_limit or settings.tracker.log_limit

    def _now(self) -> datetime:
        # Local wall-clock time with its UTC offset
        return self.clock().astimezone()

    def today(self) -> str:
        return self._now().strftime(DATE_FORMAT)

    def record(self) -> Optional[int]:
        """
        Record one commit for today.

        Returns the new count for today, or None when the ledger could not be
        updated. Storage failures are logged and never raised, so the
        post-commit hook calling this cannot fail the commit.
        """
        now = self._now()
        today = now.strftime(DATE_FORMAT)
        try:
            ledger = self.store.load_ledger()
            count = ledger.increment(today)
            self.store.save_ledger(ledger)
            self.store.append_log_line(format_log_line(now, f"Commit recorded for {today}"))
        except StorageError as e:
            logger.error(f"Error updating commit count: {e}")
            self._log_failure(now, str(e))
            return None

        logger.info(f"Commit count updated: {today} = {count}")
        return count

    def _log_failure(self, now: datetime, reason: str) -> None:
        try:
            self.store.append_log_line(format_log_line(now, f"ERROR - {reason}"))
        except StorageError as e:
            logger.error(f"Error writing tracker log: {e}")

    def stats(self) -> Optional[LedgerStats]:
        """Compute aggregate statistics, or None when no commits are recorded."""
        ledger = self.store.load_ledger()
        if ledger.is_empty():
            return None

        now = self._now()
        today = now.date()
        total = ledger.total_commits
        active_days = ledger.active_days

        last_seven_days = []
        for offset in range(6, -1, -1):
            day = (today - timedelta(days=offset)).strftime(DATE_FORMAT)
            last_seven_days.append(DailyCount(date=day, count=ledger.count_for(day)))

        # sorted() is stable, so equal counts keep their serialization order
        ranked = sorted(ledger.items(), key=lambda item: item[1], reverse=True)
        top_days = [DailyCount(date=day, count=count) for day, count in ranked[: self.top_days]]

        current_month = now.strftime(MONTH_FORMAT)
        month_total = sum(count for day, count in ledger.items() if day.startswith(current_month))

        return LedgerStats(
            total_commits=total,
            active_days=active_days,
            last_seven_days=last_seven_days,
            top_days=top_days,
            weekly_average=total / max(1, active_days / 7),
            current_month=current_month,
            month_total=month_total,
        )

    def weekly(self) -> Optional[WeeklyReport]:
        """Bucket every recorded date by weekday, or None when there is no ledger."""
        if not self.store.ledger_exists():
            return None

        ledger = self.store.load_ledger()
        buckets: Dict[Weekday, WeekdaySummary] = {
            weekday: WeekdaySummary(weekday=weekday) for weekday in Weekday
        }
        for key, count in ledger.items():
            bucket = buckets[Weekday.for_date(parse_ledger_date(key))]
            bucket.total += count
            bucket.occurrences += 1

        return WeeklyReport(days=list(buckets.values()))

    def log(self, limit: Optional[int] = None) -> Optional[List[str]]:
        """Return the most recent non-blank log lines, or None when there is no log."""
        lines = self.store.read_log_lines()
        if lines is None:
            return None
        return lines[-(limit or self.log_limit):]

    def reset(self) -> None:
        """Clear the ledger and the tracker log. Irreversible."""
        self.store.write_ledger_text("{}")
        self.store.truncate_log()
        logger.info("All tracker data has been reset")
