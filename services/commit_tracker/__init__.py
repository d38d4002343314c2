"""
Commit Tracker Service.

This service is responsible for:
- Recording one commit per post-commit hook invocation
- Persisting daily commit counts and the tracker log
- Reporting totals, recent history, busiest days and weekday patterns
- Installing the global post-commit hook
"""

__version__ = "1.0.0"
__author__ = "Git Commit Tracker Team"
__description__ = "Daily git commit counting and reporting service"
