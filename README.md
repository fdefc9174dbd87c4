# crossref-fieldkit

Tools for pulling selected fields out of the Crossref public data file
(a directory of compressed `*.jsonl.gz` files) into flat CSV, plus a small
helper for rewriting file paths stored in CSV index files.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Extracting fields

```
crossref-fieldkit --input /data/crossref --fields "author.family,title,ISSN"
```

Every `*.jsonl.gz` file beneath the input directory is searched, recursively,
using a pool of worker threads; a progress bar is shown while files are
processed. Each value that is extracted becomes one CSV row with these
columns:

| column          | meaning                                                   |
|-----------------|-----------------------------------------------------------|
| `doi`           | DOI of the record                                         |
| `field_name`    | the requested field, e.g. `author.family`                 |
| `subfield_path` | where the value sits, e.g. `author[2].family`             |
| `value`         | the value; objects and arrays are written as compact JSON |
| `member_id`     | Crossref member ID                                        |
| `doi_prefix`    | DOI prefix (from `prefix`, or the part of the DOI before `/`) |

Records without a DOI or a member ID are skipped, as are lines that are not
valid JSON (a warning is logged for each).

Field paths use dots. Fields that the Crossref schema defines as arrays are
expanded element by element. `relation.*` matches every relation type, and
asking for one relation type such as `relation.is-preprint-of.id` also adds
the `relation.*` pattern and the matching wildcard pattern
(`relation.*.id`).

### Options

| option                  | default          | meaning                                              |
|-------------------------|------------------|------------------------------------------------------|
| `-i`, `--input`         | required         | directory holding the JSONL.gz files                 |
| `-f`, `--fields`        | required         | comma-separated list of fields to extract            |
| `-o`, `--output`        | `field_data.csv` | output CSV file, or a directory with `--organize`    |
| `-g`, `--organize`      | off              | write one CSV file per member ID (`<member>.csv`)    |
| `--max-open-files`      | `100`            | how many per-member files may be open at once        |
| `--member`              |                  | keep only records from this member ID                |
| `--doi-prefix`          |                  | keep only records with this DOI prefix               |
| `-t`, `--threads`       | `0`              | worker count; `0` uses every CPU                     |
| `-b`, `--batch-size`    | `10000`          | rows per batch handed to the writer (at least 1)     |
| `-s`, `--stats-interval`| `60`             | seconds between progress statistics in the log       |
| `-l`, `--log-level`     | `INFO`           | `DEBUG`, `INFO`, `WARN` or `ERROR`                   |
| `--version`             |                  | print the version and exit                           |

Logging goes to standard error. While running, statistics and memory use are
logged every `--stats-interval` seconds; when the run ends a summary of files
processed, rows written, unique DOIs, members, prefixes and per-field counts is
logged. The command exits with status 1 if no usable field was given or the
output cannot be created.

### Examples

One file per member, only records with one DOI prefix:

```
crossref-fieldkit -i /data/crossref -f "funder.name,funder.award" -g -o out/ --doi-prefix 10.5555
```

## Rewriting file paths in CSV indexes

CSV index files often have an `input_file` column holding the path of the
data file each row came from. `crossref-strip-paths` reads every `*.csv` in a
directory (not recursively) and writes a copy under the same name to another
directory with that column rewritten.

Keep only the file name:

```
crossref-strip-paths --input-dir index/ --output-dir index-stripped/ --strip-only
```

Point every entry at a new directory:

```
crossref-strip-paths -i index/ -o index-moved/ -n /mnt/crossref/2025
```

Either `--strip-only` (`-s`) or `--new-path` (`-n`) must be given; otherwise
the command exits with status 1. Files without an `input_file` column are
copied with their rows unchanged, and blank entries are left as they are. A
file whose rows do not all have as many fields as its header is reported as
an error, and the command then exits with status 1.

## Using it from Python

```python
from crossref_fieldkit.paths import parse_field_specifications, initialize_path_patterns
from crossref_fieldkit.records import JsonlProcessor
from crossref_fieldkit.output import CsvWriterManager

specs = parse_field_specifications("author.family,title")
patterns = initialize_path_patterns(specs)
processor = JsonlProcessor(patterns=patterns, field_paths=specs)
rows, file_stats = processor.process("part-0001.jsonl.gz")

with CsvWriterManager("out.csv", organize=False, max_open_files=100) as writer:
    writer.write_batch(rows)
```

- `crossref_fieldkit.paths` — `PathPattern`, `parse_field_specifications`,
  `initialize_path_patterns`.
- `crossref_fieldkit.records` — `JsonlProcessor`, `FieldData`, `FileStats`,
  `extract_doi`, `extract_member_id`, `extract_doi_prefix`, `value_to_text`,
  `find_jsonl_gz_files`.
- `crossref_fieldkit.output` — `SingleFileOutput`, `OrganizedOutput` and
  `CsvWriterManager`, which flushes and closes its files when its `with`
  block ends.
- `crossref_fieldkit.stats` — `IncrementalStats`, `FinalStats`,
  `format_elapsed`.
- `crossref_fieldkit.schema` — `FieldType` and `field_type`, the known types
  of Crossref field paths.
- `crossref_fieldkit.memory` — `get_memory_usage` and `log_memory_usage`.
- `crossref_fieldkit.stripper` — `process_csv_file`, which rewrites the
  `input_file` column of one CSV file.