#!/usr/bin/env python3
"""
Commit Tracker hook entry point.

The global post-commit hook runs this module once per commit. It records the
commit and always exits 0 so a tracker failure can never fail the commit.
"""

import logging
import sys

from config.settings import settings
from services.commit_tracker.main import CommitLedgerService
from shared.storage import get_ledger_store

logger = logging.getLogger(__name__)


def main() -> int:
    """Record one commit for today."""
    logging.basicConfig(
        level=getattr(logging, settings.monitoring.log_level),
        format=settings.monitoring.log_format,
    )
    try:
        CommitLedgerService(get_ledger_store()).record()
    except Exception as e:
        logger.error(f"Unexpected error recording commit: {e}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
