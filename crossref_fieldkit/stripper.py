"""Strip or replace the directory part of the ``input_file`` column in index CSV files."""

from __future__ import annotations

import argparse
import csv
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Sequence

INPUT_FILE_COL = "input_file"


def _file_name(value: str) -> str | None:
    """Return the final component of a path, or None if it has no file name."""
    name = Path(value).name
    if not name or name == "..":
        return None
    return name


def _rewrite(value: str, new_path_base: str | Path | None, strip_only: bool) -> str:
    if not value.strip():
        return value
    filename = _file_name(value)
    if filename is None:
        return value
    if strip_only:
        return filename
    if new_path_base is not None:
        return str(Path(new_path_base) / filename)
    return value


def process_csv_file(
    input_path: str | Path,
    output_path: str | Path,
    new_path_base: str | Path | None,
    strip_only: bool,
) -> None:
    """Copy a CSV file, rewriting its ``input_file`` column.

    With ``strip_only`` each path is reduced to its file name; otherwise the
    file name is joined onto ``new_path_base``. Raises ``ValueError`` when a
    record's field count differs from the header's.
    """
    input_path = Path(input_path)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(input_path, newline="", encoding="utf-8") as source, open(
        output_path, "w", newline="", encoding="utf-8"
    ) as target:
        reader = csv.reader(source)
        writer = csv.writer(target, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)

        headers = next((row for row in reader if row), None)
        if headers is not None:
            writer.writerow(headers)
            column = headers.index(INPUT_FILE_COL) if INPUT_FILE_COL in headers else None

            for record in reader:
                if not record:
                    continue
                if len(record) != len(headers):
                    raise ValueError(
                        f"record on line {reader.line_num} has {len(record)} fields, "
                        f"but the header has {len(headers)}"
                    )
                if column is not None:
                    record[column] = _rewrite(record[column], new_path_base, strip_only)
                writer.writerow(record)

    print(f"Processed {input_path} -> {output_path}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the path stripper."""
    parser = argparse.ArgumentParser(
        prog="strip-index-paths",
        description="Strip or replace the directory of the input_file column in CSV index files",
    )
    parser.add_argument("-i", "--input-dir", required=True, type=Path, metavar="DIR")
    parser.add_argument("-o", "--output-dir", required=True, type=Path, metavar="DIR")
    parser.add_argument("-n", "--new-path", default=None, type=Path, metavar="PATH")
    parser.add_argument("-s", "--strip-only", action="store_true")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Rewrite every CSV file of the input directory; returns the exit status."""
    args = build_parser().parse_args(argv)

    if not args.strip_only and args.new_path is None:
        print(
            "Error: --new-path <PATH> is required unless --strip-only is used",
            file=sys.stderr,
        )
        return 1

    pattern = str(args.input_dir / "*.csv")
    input_files = sorted(args.input_dir.glob("*.csv"))
    if not input_files:
        print(f"No CSV files found matching pattern '{pattern}'")
        return 0

    print(f"Found {len(input_files)} CSV files. Processing...")

    def run(input_path: Path) -> str | None:
        try:
            process_csv_file(
                input_path,
                args.output_dir / input_path.name,
                args.new_path,
                args.strip_only,
            )
        except (OSError, ValueError, csv.Error) as exc:
            return f"Error processing file: {input_path}: {exc}"
        return None

    with ThreadPoolExecutor() as pool:
        failures = [message for message in pool.map(run, input_files) if message]

    for message in failures:
        print(message, file=sys.stderr)

    if failures:
        print(f"\nProcessing finished with {len(failures)} error(s).", file=sys.stderr)
        return 1

    print(
        f"\nAll {len(input_files)} files processed successfully. "
        f"Output saved to {args.output_dir}"
    )
    return 0