"""
Per-run log of records that could not contribute to a statistic.

Aggregation never aborts on a bad record; it records a
MalformedRecordWarning here and carries on. The engine turns the log into
the ``skipped`` counts of the result.
"""

import logging
from datetime import date

from workforce_analytics.core.exceptions import MalformedRecordWarning
from workforce_analytics.schemas.analytics import SkippedRecords

logger = logging.getLogger(__name__)

SOURCES = ("attendance", "overtime", "leave")


def surrogate_key(employee_id: str, day: date, index: int) -> str:
    """Stable key for a record stored without an id."""
    return f"{employee_id}:{day.isoformat()}:{index}"


class RecordIssues:
    def __init__(self) -> None:
        self.warnings: list[MalformedRecordWarning] = []

    def skip(self, source: str, record_key: str, reason: str) -> None:
        if source not in SOURCES:
            raise ValueError(f"Unknown record source: {source}")
        warning = MalformedRecordWarning(source, record_key, reason)
        self.warnings.append(warning)
        logger.warning("Skipping %s", warning)

    def count(self, source: str) -> int:
        return sum(1 for w in self.warnings if w.source == source)

    def summary(self) -> SkippedRecords:
        return SkippedRecords(**{source: self.count(source) for source in SOURCES})
