"""Running and final statistics gathered across processed files."""

from __future__ import annotations

import logging
import threading
from collections import Counter
from dataclasses import dataclass, field
from datetime import timedelta

from crossref_fieldkit.records import FileStats

log = logging.getLogger(__name__)

_TOP_FIELDS = 10


@dataclass
class FinalStats:
    """A snapshot of everything counted during a run."""

    total_field_records: int = 0
    processed_files_ok: int = 0
    processed_files_error: int = 0
    unique_dois: int = 0
    unique_members: dict[str, int] = field(default_factory=dict)
    unique_prefixes: dict[str, int] = field(default_factory=dict)
    unique_fields: dict[str, int] = field(default_factory=dict)


class IncrementalStats:
    """Thread-safe accumulator of per-file statistics."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.total_field_records = 0
        self.processed_files_ok = 0
        self.processed_files_error = 0
        self.unique_records: set[str] = set()
        self.members: Counter = Counter()
        self.prefixes: Counter = Counter()
        self.unique_fields: Counter = Counter()

    def aggregate_file_stats(self, file_stats: FileStats) -> None:
        """Fold the statistics of one successfully processed file into the totals."""
        with self._lock:
            self.processed_files_ok += 1
            self.total_field_records += file_stats.total_fields_extracted
            self.unique_records.update(file_stats.unique_dois)
            self.unique_fields.update(file_stats.field_counts)
            self.members.update(file_stats.member_counts)
            self.prefixes.update(file_stats.prefix_counts)

    def increment_error_files(self) -> None:
        """Count one file that failed to process."""
        with self._lock:
            self.processed_files_error += 1

    def log_current_stats(self) -> None:
        """Log the current totals and the most frequent fields."""
        with self._lock:
            files_ok = self.processed_files_ok
            files_err = self.processed_files_error
            total_fields = self.total_field_records
            unique_dois = len(self.unique_records)
            field_snapshot = self.unique_fields.most_common()
            unique_members = len(self.members)
            unique_prefixes = len(self.prefixes)

        log.info("Current Statistics:")
        log.info("  Files processed: %d OK, %d Errors", files_ok, files_err)
        log.info("  Total field records extracted: %d", total_fields)
        log.info("  Unique DOIs encountered: %d", unique_dois)
        log.info("  Unique fields encountered: %d", len(field_snapshot))
        log.info("  Field breakdown (Top %d):", _TOP_FIELDS)
        for field_name, count in field_snapshot[:_TOP_FIELDS]:
            log.info("    %s: %d records", field_name, count)
        if len(field_snapshot) > _TOP_FIELDS:
            log.info("    ... (%d more fields)", len(field_snapshot) - _TOP_FIELDS)
        log.info("  Unique members: %d", unique_members)
        log.info("  Unique DOI prefixes: %d", unique_prefixes)

    def final_stats(self) -> FinalStats:
        """Return a copy of the accumulated totals."""
        with self._lock:
            return FinalStats(
                total_field_records=self.total_field_records,
                processed_files_ok=self.processed_files_ok,
                processed_files_error=self.processed_files_error,
                unique_dois=len(self.unique_records),
                unique_members=dict(self.members),
                unique_prefixes=dict(self.prefixes),
                unique_fields=dict(self.unique_fields),
            )


def format_elapsed(seconds: float | timedelta) -> str:
    """Format a duration as hours/minutes/seconds, with milliseconds under a minute."""
    if isinstance(seconds, timedelta):
        seconds = seconds.total_seconds()
    total_us = max(0, round(seconds * 1_000_000))
    total_secs, remainder_us = divmod(total_us, 1_000_000)
    millis = remainder_us // 1000
    hours, rest = divmod(total_secs, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}.{millis:03d}s"