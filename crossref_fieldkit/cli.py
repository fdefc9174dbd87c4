"""Command line entry point for extracting fields from Crossref JSONL.gz files."""

from __future__ import annotations

import argparse
import logging
import os
import queue
import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Sequence

from tqdm import tqdm

from crossref_fieldkit.memory import log_memory_usage
from crossref_fieldkit.output import CsvWriterManager
from crossref_fieldkit.paths import initialize_path_patterns, parse_field_specifications
from crossref_fieldkit.records import FieldData, FileStats, JsonlProcessor, find_jsonl_gz_files
from crossref_fieldkit.stats import IncrementalStats, format_elapsed

log = logging.getLogger(__name__)

_PACKAGE_LOGGER = "crossref_fieldkit"
_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}
_installed_handlers: list[logging.Handler] = []
_STOP = None


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the field extractor."""
    parser = argparse.ArgumentParser(
        prog="crossref-fields",
        description=(
            "Efficiently extracts field data from the Crossref data file "
            "in its compressed JSONL.gz format"
        ),
    )
    parser.add_argument("--version", action="version", version="%(prog)s 1.0.")
    parser.add_argument("-i", "--input", required=True, help="Directory containing JSONL.gz files")
    parser.add_argument(
        "-o", "--output", default="field_data.csv", help="Output CSV file or directory"
    )
    parser.add_argument(
        "-l", "--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARN, ERROR)"
    )
    parser.add_argument(
        "-t", "--threads", type=_non_negative_int, default=0,
        help="Number of threads to use (0 for auto)",
    )
    parser.add_argument(
        "-b", "--batch-size", type=_positive_int, default=10000,
        help="Target number of records per batch sent to writer",
    )
    parser.add_argument(
        "-s", "--stats-interval", type=_non_negative_int, default=60,
        help="Interval in seconds to log statistics",
    )
    parser.add_argument(
        "-g", "--organize", action="store_true", help="Organize output by member ID"
    )
    parser.add_argument("--member", default=None, help="Filter by member ID")
    parser.add_argument("--doi-prefix", default=None, help="Filter by DOI prefix")
    parser.add_argument(
        "--max-open-files", type=_non_negative_int, default=100,
        help="Maximum number of open files when using --organize",
    )
    parser.add_argument(
        "-f", "--fields", required=True,
        help="Comma-separated list of fields to extract (e.g., 'author.family,title,ISSN')",
    )
    return parser


def _resolve_log_level(name: str) -> int:
    level = _LOG_LEVELS.get(name.upper())
    if level is None:
        print(f"Invalid log level '{name}', defaulting to INFO.", file=sys.stderr)
        return logging.INFO
    return level


def _configure_logging(level: int) -> None:
    logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in _installed_handlers:
        logger.removeHandler(handler)
    _installed_handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-5s [%(name)s] %(message)s", "%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(handler)
    logger.setLevel(level)
    _installed_handlers.append(handler)


def _write_batches(manager: CsvWriterManager, batches: queue.Queue) -> int:
    log.info("Writer thread started.")
    batches_written = records_written = 0
    while (batch := batches.get()) is not _STOP:
        if not batch:
            continue
        try:
            manager.write_batch(batch)
        except Exception as exc:  # keep draining so producers never block
            log.error("Writer thread error writing batch: %s", exc)
            continue
        batches_written += 1
        records_written += len(batch)
        log.debug("Writer thread wrote batch %d (%d records)", batches_written, len(batch))
    log.info(
        "Writer thread finished receiving. Wrote %d records in %d batches.",
        records_written,
        batches_written,
    )
    return manager.report_files_created()


def _log_stats_periodically(
    stats: IncrementalStats, interval: float, stop: threading.Event
) -> None:
    log.info("Stats logging thread started.")
    last_log = time.monotonic()
    while not stop.wait(0.5):
        if time.monotonic() - last_log >= interval:
            log_memory_usage("periodic check")
            stats.log_current_stats()
            last_log = time.monotonic()
    log.info("Stats thread received stop signal.")
    log.info("Stats logging thread finished.")


def _log_summary(
    start: float,
    files: Sequence[Path],
    stats: IncrementalStats,
    failed: Sequence[Path],
    files_created: int | None,
    args: argparse.Namespace,
) -> None:
    log.info("-------------------- FINAL SUMMARY --------------------")
    log.info("Total execution time: %s", format_elapsed(time.monotonic() - start))
    log.info("Input files found: %d", len(files))
    final = stats.final_stats()
    log.info("Files processed successfully: %d", final.processed_files_ok)
    if failed:
        log.warning("Files with processing errors: %d", len(failed))
        for path in failed[:10]:
            log.warning("  - %s", path)
        if len(failed) > 10:
            log.warning("  ... (and %d more)", len(failed) - 10)
    log.info("Total field records extracted: %d", final.total_field_records)
    log.info("Unique DOIs encountered: %d", final.unique_dois)
    log.info("Unique Members encountered: %d", len(final.unique_members))
    log.info("Unique DOI Prefixes encountered: %d", len(final.unique_prefixes))

    log.info("Final Field breakdown:")
    sorted_fields = sorted(final.unique_fields.items(), key=lambda item: item[1], reverse=True)
    for field_name, count in sorted_fields[:20]:
        log.info("  - %s: %d records", field_name, count)
    if len(sorted_fields) > 20:
        log.info("  ... (%d more fields)", len(sorted_fields) - 20)

    members = final.unique_members
    if 0 < len(members) < 50:
        log.info("Final Member statistics:")
        for member, count in sorted(members.items(), key=lambda item: item[1], reverse=True):
            log.info("  - Member %s: %d records", member, count)
    elif len(members) >= 50:
        log.info("(Skipping detailed stats for %d members)", len(members))

    if files_created is None:
        log.error("Could not determine number of files created by writer thread.")
    elif args.organize:
        log.info("Total unique output files created/opened: %d", files_created)
    else:
        log.info("Output written to: %s", args.output)

    log_memory_usage("final")
    log.info("Extraction process finished.")
    log.info("-------------------------------------------------------")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the field extractor; returns the process exit status."""
    start = time.monotonic()
    args = build_parser().parse_args(argv)
    _configure_logging(_resolve_log_level(args.log_level))

    log.info("Starting Field Extractor")
    log_memory_usage("initial")

    if args.threads == 0:
        num_threads = os.cpu_count() or 1
        log.info("Auto-detected %d CPU cores. Using %d threads.", num_threads, num_threads)
    else:
        num_threads = args.threads
        log.info("Using specified %d threads.", num_threads)

    specs = parse_field_specifications(args.fields)
    if not specs:
        log.error("No valid field specifications provided. Check the --fields argument.")
        return 1
    log.info("Fields to extract:")
    for spec in specs:
        log.info("  - %s", ".".join(spec))

    log.info("Pre-compiling field path patterns...")
    patterns = initialize_path_patterns(specs)
    if not patterns:
        log.error("Failed to generate any path patterns from field specifications.")
        return 1
    log.info("Generated %d path patterns.", len(patterns))
    log.debug("Patterns: %s", list(patterns))

    log.info("Searching for input files in: %s", args.input)
    files = find_jsonl_gz_files(args.input)
    if not files:
        log.warning("No .jsonl.gz files found in the specified directory. Exiting.")
        return 0
    log.info("Found %d files to process.", len(files))

    log.info("Using target batch size for writer: %d records.", args.batch_size)
    log.info("Statistics logging interval: %d seconds.", args.stats_interval)
    if args.member is not None:
        log.info("Filtering by member ID: %s", args.member)
    if args.doi_prefix is not None:
        log.info("Filtering by DOI prefix: %s", args.doi_prefix)
    if args.organize:
        log.info("Output will be organized by member ID in directory: %s", args.output)
        log.info("Using max %d open output files.", args.max_open_files)
    else:
        log.info("Output will be written to single file: %s", args.output)

    try:
        manager = CsvWriterManager(args.output, args.organize, args.max_open_files)
    except OSError as exc:
        log.error("Failed to initialize output: %s", exc)
        return 1

    stats = IncrementalStats()
    capacity = max(num_threads * 2, 4)
    batches: queue.Queue = queue.Queue(maxsize=capacity)
    log.info("Using writer channel with capacity: %d", capacity)

    processor = JsonlProcessor(
        patterns=patterns,
        field_paths=specs,
        filter_member=args.member,
        filter_doi_prefix=args.doi_prefix,
    )
    progress = tqdm(
        total=len(files),
        bar_format="[{elapsed}] [{bar:40}] {n_fmt}/{total_fmt} ({remaining} @ {rate_fmt}) {postfix}",
        ascii="=> ",
    )
    progress.set_postfix_str("Starting processing...")
    progress_lock = threading.Lock()

    def process_file(path: Path) -> tuple[Path, FileStats | None]:
        began = time.monotonic()
        try:
            data, file_stats = processor.process(path)
        except Exception as exc:
            log.error("Initial error processing file %s: %s", path, exc)
            with progress_lock:
                progress.update(1)
                progress.set_postfix_str(f"ERR: {path.name} (Initial Error)")
            return path, None
        with progress_lock:
            progress.update(1)
            progress.set_postfix_str(
                f"OK: {path.name} ({len(data)} fields, {format_elapsed(time.monotonic() - began)})"
            )
        for begin in range(0, len(data), args.batch_size):
            chunk: list[FieldData] = data[begin : begin + args.batch_size]
            batches.put(chunk)
        return path, file_stats

    stop_stats = threading.Event()
    stats_thread = threading.Thread(
        target=_log_stats_periodically,
        args=(stats, args.stats_interval, stop_stats),
        name="stats-logger",
        daemon=True,
    )
    files_created: int | None = None
    failed: list[Path] = []

    with manager, ThreadPoolExecutor(max_workers=1, thread_name_prefix="csv-writer") as writer_pool:
        writer_future = writer_pool.submit(_write_batches, manager, batches)
        stats_thread.start()

        log.info("Starting parallel file processing...")
        with ThreadPoolExecutor(max_workers=num_threads) as pool:
            results = list(pool.map(process_file, files))

        log.info("File processing complete. Aggregating final stats...")
        progress.set_postfix_str("Aggregating stats...")
        batches.put(_STOP)

        for path, file_stats in results:
            if file_stats is None:
                stats.increment_error_files()
                failed.append(path)
            else:
                stats.aggregate_file_stats(file_stats)

        final = stats.final_stats()
        progress.set_postfix_str(
            f"Processing finished. {final.processed_files_ok} files OK, "
            f"{final.processed_files_error} errors."
        )
        progress.close()

        log.info("Waiting for writer thread to finish writing remaining batches...")
        try:
            files_created = writer_future.result()
        except Exception as exc:
            log.error("Writer thread returned an error: %s", exc)
        else:
            log.info("Writer thread finished successfully.")

        log.info("Signaling stats thread to stop...")
        stop_stats.set()
        log.info("Waiting for stats thread to finish...")
        stats_thread.join()
        log.info("Stats thread joined successfully.")

    _log_summary(start, files, stats, failed, files_created, args)
    return 0