"""Reading gzipped JSONL Crossref files and extracting requested fields."""

from __future__ import annotations

import gzip
import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

from crossref_fieldkit.paths import PathPattern

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldData:
    """One extracted value of one field of one record."""

    doi: str
    field_name: str
    subfield_path: str
    value: str
    member_id: str
    doi_prefix: str


@dataclass
class FileStats:
    """Counts gathered while processing a single file."""

    unique_dois: set[str] = field(default_factory=set)
    field_counts: Counter = field(default_factory=Counter)
    member_counts: Counter = field(default_factory=Counter)
    prefix_counts: Counter = field(default_factory=Counter)
    total_fields_extracted: int = 0


def value_to_text(value: Any) -> str:
    """Render an extracted JSON value as CSV cell text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def extract_doi(record: Any) -> str | None:
    """Return the record's DOI if it is a string."""
    if isinstance(record, dict):
        doi = record.get("DOI")
        if isinstance(doi, str):
            return doi
    return None


def extract_member_id(record: Any) -> str | None:
    """Return the record's member id, accepting strings and numbers."""
    if not isinstance(record, dict):
        return None
    member = record.get("member")
    if isinstance(member, str):
        return member
    if isinstance(member, (int, float)) and not isinstance(member, bool):
        return value_to_text(member)
    return None


def extract_doi_prefix(record: Any, doi: str | None) -> str | None:
    """Return the record's prefix field, or the part of the DOI before the first '/'."""
    if isinstance(record, dict):
        prefix = record.get("prefix")
        if isinstance(prefix, str):
            return prefix
    if doi is not None and "/" in doi:
        return doi.split("/", 1)[0]
    return None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _decode_line(raw: bytes) -> str:
    raw = raw[:-1] if raw.endswith(b"\n") else raw
    raw = raw[:-1] if raw.endswith(b"\r") else raw
    return raw.decode("utf-8")


@dataclass
class JsonlProcessor:
    """Extracts the configured fields from every record of a .jsonl.gz file."""

    patterns: Mapping[str, PathPattern]
    field_paths: Sequence[Sequence[str]]
    filter_member: str | None = None
    filter_doi_prefix: str | None = None

    def process(self, filepath: str | Path) -> tuple[list[FieldData], FileStats]:
        """Process one file; raises OSError if it cannot be opened."""
        filepath = Path(filepath)
        extracted: list[FieldData] = []
        stats = FileStats()
        lines_read = records_parsed = json_errors = 0
        missing_doi = missing_member = filtered_out = 0

        with gzip.open(filepath, "rb") as stream:
            line_num = 0
            while True:
                try:
                    raw = stream.readline()
                except (OSError, EOFError) as exc:
                    log.warning("Error reading line %d from %s: %s", line_num + 1, filepath, exc)
                    break
                if not raw:
                    break
                line_num += 1
                lines_read += 1
                try:
                    line = _decode_line(raw)
                except UnicodeDecodeError as exc:
                    log.warning("Error reading line %d from %s: %s", line_num, filepath, exc)
                    continue
                if not line.strip():
                    continue
                try:
                    record = json.loads(line, parse_constant=_reject_constant)
                except ValueError as exc:
                    json_errors += 1
                    log.warning("Error parsing JSON from %s:%d: %s", filepath, line_num, exc)
                    continue

                records_parsed += 1
                member_id = extract_member_id(record)
                doi = extract_doi(record)
                doi_prefix = extract_doi_prefix(record, doi)

                if self.filter_member is not None and member_id != self.filter_member:
                    filtered_out += 1
                    continue
                if self.filter_doi_prefix is not None and doi_prefix != self.filter_doi_prefix:
                    filtered_out += 1
                    continue
                if member_id is None:
                    missing_member += 1
                    continue
                if doi is None:
                    missing_doi += 1
                    continue
                doi_prefix = doi_prefix or ""

                record_fields = list(self._extract(record))
                if not record_fields:
                    continue
                stats.unique_dois.add(doi)
                stats.member_counts[member_id] += len(record_fields)
                stats.prefix_counts[doi_prefix] += len(record_fields)
                for field_name, subfield_path, value in record_fields:
                    stats.field_counts[field_name] += 1
                    stats.total_fields_extracted += 1
                    extracted.append(
                        FieldData(doi, field_name, subfield_path, value, member_id, doi_prefix)
                    )

        log.debug(
            "Finished processing %s: %d lines read, %d records parsed (%d JSON errors), "
            "%d fields extracted. Skipped: %d missing DOI, %d missing Member, %d filtered out.",
            filepath,
            lines_read,
            records_parsed,
            json_errors,
            len(extracted),
            missing_doi,
            missing_member,
            filtered_out,
        )
        return extracted, stats

    def _extract(self, record: Any):
        for field_path in self.field_paths:
            key = ".".join(field_path)
            pattern = self.patterns.get(key)
            if pattern is None:
                log.warning("Internal error: No pre-compiled pattern found for key '%s'", key)
                continue
            for subfield_path, value in pattern.apply(record):
                yield pattern.field_name, subfield_path, value_to_text(value)


def find_jsonl_gz_files(directory: str | Path) -> list[Path]:
    """Find every .jsonl.gz file under a directory, at any depth."""
    pattern = Path(directory) / "**" / "*.jsonl.gz"
    log.info("Searching for files matching pattern: %s", pattern)
    paths = sorted(path for path in Path(directory).glob("**/*.jsonl.gz") if path.is_file())
    if not paths:
        log.warning("No files found matching the pattern: %s", pattern)
    return paths