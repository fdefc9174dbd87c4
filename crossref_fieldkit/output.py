"""CSV writers for extracted field data: one file, or one file per member."""

from __future__ import annotations

import csv
import logging
from collections import OrderedDict
from pathlib import Path
from typing import IO, Iterable, Sequence

from crossref_fieldkit.records import FieldData

log = logging.getLogger(__name__)

HEADERS = ("doi", "field_name", "subfield_path", "value", "member_id", "doi_prefix")


def _row(item: FieldData) -> tuple[str, ...]:
    return (
        item.doi,
        item.field_name,
        item.subfield_path,
        item.value,
        item.member_id,
        item.doi_prefix,
    )


def _csv_writer(stream: IO[str]):
    return csv.writer(stream, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)


class SingleFileOutput:
    """Writes every record to one CSV file."""

    def __init__(self, path: str | Path) -> None:
        self.file_path = Path(path)
        log.info("Initializing single output file: %s", self.file_path)
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self.headers = HEADERS
        self._stream: IO[str] | None = open(
            self.file_path, "w", newline="", encoding="utf-8"
        )
        self._writer = _csv_writer(self._stream)
        self._writer.writerow(self.headers)
        self._stream.flush()

    def write_batch(self, batch: Sequence[FieldData]) -> None:
        """Append a batch of records to the file."""
        if not batch:
            return
        if self._stream is None:
            raise ValueError(f"Output file already closed: {self.file_path}")
        self._writer.writerows(_row(item) for item in batch)

    def flush(self) -> None:
        """Flush buffered rows to disk."""
        log.info("Flushing final data to: %s", self.file_path)
        if self._stream is not None:
            self._stream.flush()

    def report_files_created(self) -> int:
        """Number of output files this strategy created."""
        return 1

    def _close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None


class OrganizedOutput:
    """Writes records into one CSV file per member id, keeping a bounded set open."""

    def __init__(self, output_path: str | Path, max_open_files: int) -> None:
        path = Path(output_path)
        if path.exists() and not path.is_dir():
            raise NotADirectoryError(
                f"Output path for organized output must be a directory: {path}"
            )
        path.mkdir(parents=True, exist_ok=True)
        log.info("Initializing organized output in directory: %s", path)
        log.info("Using a maximum of %d open files at once", max_open_files)
        self.base_output_dir = path
        self.max_open_files = max(1, max_open_files)
        self.headers = HEADERS
        self.created_files: set[Path] = set()
        # Most recently used entries live at the end.
        self._open: OrderedDict[str, tuple[IO[str], object]] = OrderedDict()

    def _writer_for(self, member_id: str):
        entry = self._open.get(member_id)
        if entry is not None:
            self._open.move_to_end(member_id)
            return entry[1]

        while len(self._open) >= self.max_open_files:
            lru_member, (stream, _) = self._open.popitem(last=False)
            log.info(
                "Closing LRU file for member %s to maintain max open files limit.",
                lru_member,
            )
            try:
                stream.close()
            except OSError as exc:
                log.warning(
                    "Error flushing file for member %s before closing: %s", lru_member, exc
                )

        member_path = self.base_output_dir / f"{member_id}.csv"
        needs_header = member_path not in self.created_files
        stream = open(member_path, "a", newline="", encoding="utf-8")
        writer = _csv_writer(stream)
        if needs_header:
            writer.writerow(self.headers)
            stream.flush()
            self.created_files.add(member_path)
            log.debug("Created new file with header: %s", member_path)
        else:
            log.debug("Opened existing file in append mode: %s", member_path)
        self._open[member_id] = (stream, writer)
        return writer

    def write_batch(self, batch: Sequence[FieldData]) -> None:
        """Write a batch, routing each record to its member's file."""
        if not batch:
            return
        grouped: dict[str, list[FieldData]] = {}
        for item in batch:
            grouped.setdefault(item.member_id, []).append(item)
        for member_id, items in grouped.items():
            self._writer_for(member_id).writerows(_row(item) for item in items)

    def flush(self) -> None:
        """Flush and close every open file; raises OSError if any flush failed."""
        log.info("Flushing %d open CSV files...", len(self._open))
        errors: list[str] = []
        for member_id, (stream, _) in self._open.items():
            try:
                stream.close()
            except OSError as exc:
                errors.append(f"Failed to flush file for member {member_id}: {exc}")
        self._open.clear()
        log.info("Total unique files created/opened during run: %d", len(self.created_files))
        if errors:
            raise OSError("Errors occurred during final flush:\n - " + "\n - ".join(errors))

    def report_files_created(self) -> int:
        """Number of distinct member files created."""
        return len(self.created_files)

    def _close(self) -> None:
        for stream, _ in self._open.values():
            stream.close()
        self._open.clear()


class CsvWriterManager:
    """Chooses an output strategy and flushes it when the context ends."""

    def __init__(self, output_path: str | Path, organize: bool, max_open_files: int) -> None:
        if organize:
            self._strategy: SingleFileOutput | OrganizedOutput = OrganizedOutput(
                output_path, max_open_files
            )
        else:
            self._strategy = SingleFileOutput(output_path)

    def write_batch(self, batch: Iterable[FieldData]) -> None:
        """Write a batch of records through the chosen strategy."""
        self._strategy.write_batch(list(batch))

    def flush_all(self) -> None:
        """Flush every file of the chosen strategy."""
        self._strategy.flush()

    def report_files_created(self) -> int:
        """Number of output files created so far."""
        return self._strategy.report_files_created()

    def __enter__(self) -> "CsvWriterManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        log.info("CsvWriterManager closing. Attempting final flush...")
        try:
            self.flush_all()
        except OSError as error:
            log.error("Error flushing CSV writers during cleanup: %s", error)
        else:
            log.info("Final flush completed successfully.")
        finally:
            self._strategy._close()
        return False