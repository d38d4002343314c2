"""
Data models for the Git commit tracker.

This module provides:
- The ledger model (calendar date -> commit count)
- Report models returned by the commit ledger service
- Date helpers shared by the service and the CLI
"""

from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, RootModel, computed_field, conint, field_validator

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"


class Weekday(Enum):
    """Weekday names in report order (Sunday first)."""
    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"

    @classmethod
    def for_date(cls, day: date) -> "Weekday":
        # date.weekday() is Monday=0; shift so Sunday comes first
        return list(cls)[(day.weekday() + 1) % 7]


def parse_ledger_date(key: str) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` ledger key, returning None when it is not a date."""
    try:
        day = datetime.strptime(key, DATE_FORMAT).date()
    except (TypeError, ValueError):
        return None
    # strptime also accepts unpadded fields such as 2024-1-1
    if day.strftime(DATE_FORMAT) != key:
        return None
    return day


class Ledger(RootModel[Dict[str, conint(strict=True, ge=1)]]):
    """
    Persisted mapping from calendar date to commit count.

    Keys are ``YYYY-MM-DD`` dates and counts are at least 1; a missing key
    means zero commits that day. Key order is the order found on disk, with
    new dates appended.
    """

    root: Dict[str, conint(strict=True, ge=1)] = Field(default_factory=dict)

    @field_validator("root")
    @classmethod
    def validate_dates(cls, v):
        for key in v:
            if parse_ledger_date(key) is None:
                raise ValueError(f"Ledger key is not a YYYY-MM-DD date: {key!r}")
        return v

    def count_for(self, day: str) -> int:
        return self.root.get(day, 0)

    def increment(self, day: str) -> int:
        """Add one commit to ``day`` and return the new count."""
        self.root[day] = self.root.get(day, 0) + 1
        return self.root[day]

    def items(self):
        return self.root.items()

    def is_empty(self) -> bool:
        return not self.root

    @property
    def total_commits(self) -> int:
        return sum(self.root.values())

    @property
    def active_days(self) -> int:
        return len(self.root)


class DailyCount(BaseModel):
    """Commit count for one calendar day."""

    date: str = Field(..., description="Calendar day (YYYY-MM-DD)")
    count: int = Field(default=0, ge=0, description="Commits recorded that day")


class LedgerStats(BaseModel):
    """Aggregate statistics over the whole ledger."""

    total_commits: int = Field(..., ge=0, description="Sum of all daily counts")
    active_days: int = Field(..., ge=0, description="Days with at least one entry")
    last_seven_days: List[DailyCount] = Field(
        default_factory=list, description="Last 7 calendar days, oldest first"
    )
    top_days: List[DailyCount] = Field(
        default_factory=list, description="Busiest days, highest count first"
    )
    weekly_average: float = Field(default=0.0, ge=0, description="Commits per active week")
    current_month: str = Field(..., description="Month of the report (YYYY-MM)")
    month_total: int = Field(default=0, ge=0, description="Commits in the current month")


class WeekdaySummary(BaseModel):
    """Totals for one weekday bucket."""

    weekday: Weekday
    total: int = Field(default=0, ge=0, description="Commits on this weekday")
    occurrences: int = Field(default=0, ge=0, description="Recorded dates on this weekday")

    @computed_field
    @property
    def average(self) -> float:
        """Average commits per recorded occurrence of this weekday."""
        if self.occurrences == 0:
            return 0.0
        return self.total / self.occurrences


class WeeklyReport(BaseModel):
    """Per-weekday breakdown, Sunday through Saturday."""

    days: List[WeekdaySummary] = Field(default_factory=list)

    @computed_field
    @property
    def total_commits(self) -> int:
        return sum(day.total for day in self.days)
