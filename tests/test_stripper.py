import csv
from pathlib import Path

import pytest

from crossref_fieldkit.stripper import build_parser, main, process_csv_file


def _write(path: Path, rows):
    with open(path, "w", newline="", encoding="utf-8") as handle:
        csv.writer(handle, lineterminator="\n").writerows(rows)


def _read(path: Path):
    with open(path, newline="", encoding="utf-8") as handle:
        return list(csv.reader(handle))


HEADER = ["doi", "input_file", "line"]


def test_strip_only_keeps_file_name(tmp_path):
    source = tmp_path / "in.csv"
    target = tmp_path / "out.csv"
    _write(source, [HEADER, ["10.1/a", "/data/dir/part-1.jsonl.gz", "3"]])
    process_csv_file(source, target, None, True)
    assert _read(target) == [HEADER, ["10.1/a", "part-1.jsonl.gz", "3"]]


def test_replace_joins_new_base(tmp_path):
    source = tmp_path / "in.csv"
    target = tmp_path / "out.csv"
    _write(source, [HEADER, ["10.1/a", "/old/place/f.jsonl.gz", "1"]])
    base = tmp_path / "new"
    process_csv_file(source, target, base, False)
    rows = _read(target)
    assert rows[1][1] == str(base / "f.jsonl.gz")
    assert rows[1][0] == "10.1/a"
    assert rows[1][2] == "1"


def test_without_base_and_without_strip_leaves_value(tmp_path):
    source = tmp_path / "in.csv"
    target = tmp_path / "out.csv"
    rows = [HEADER, ["10.1/a", "/old/place/f.jsonl.gz", "1"]]
    _write(source, rows)
    process_csv_file(source, target, None, False)
    assert _read(target) == rows


def test_missing_column_copies_records(tmp_path):
    source = tmp_path / "in.csv"
    target = tmp_path / "out.csv"
    rows = [["doi", "path"], ["10.1/a", "/x/y.gz"]]
    _write(source, rows)
    process_csv_file(source, target, None, True)
    assert _read(target) == rows


def test_blank_and_parent_values_are_unchanged(tmp_path):
    source = tmp_path / "in.csv"
    target = tmp_path / "out.csv"
    rows = [HEADER, ["10.1/a", "   ", "1"], ["10.1/b", "..", "2"]]
    _write(source, rows)
    process_csv_file(source, target, None, True)
    assert _read(target) == rows


def test_quoted_fields_round_trip(tmp_path):
    source = tmp_path / "in.csv"
    target = tmp_path / "out.csv"
    _write(source, [HEADER, ['a, "b"', "dir/sub/file,1.gz", "x\ny"]])
    process_csv_file(source, target, None, True)
    assert _read(target) == [HEADER, ['a, "b"', "file,1.gz", "x\ny"]]


def test_creates_output_directory(tmp_path):
    source = tmp_path / "in.csv"
    target = tmp_path / "deep" / "nested" / "out.csv"
    _write(source, [HEADER, ["d", "a/b.gz", "1"]])
    process_csv_file(source, target, None, True)
    assert _read(target)[1][1] == "b.gz"


def test_unequal_field_count_raises(tmp_path):
    source = tmp_path / "in.csv"
    _write(source, [HEADER, ["only", "two"]])
    with pytest.raises(ValueError):
        process_csv_file(source, tmp_path / "out.csv", None, True)


def test_missing_input_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        process_csv_file(tmp_path / "absent.csv", tmp_path / "out.csv", None, True)


def test_parser_reads_flags(tmp_path):
    args = build_parser().parse_args(["-i", "in", "-o", "out", "-s"])
    assert args.strip_only is True
    assert args.new_path is None
    assert args.input_dir == Path("in")


def test_main_requires_new_path(tmp_path, capsys):
    status = main(["-i", str(tmp_path), "-o", str(tmp_path / "out")])
    assert status == 1
    assert "--new-path" in capsys.readouterr().err


def test_main_without_files_succeeds(tmp_path, capsys):
    status = main(["-i", str(tmp_path), "-o", str(tmp_path / "out"), "-s"])
    assert status == 0
    assert "No CSV files found" in capsys.readouterr().out


def test_main_processes_every_csv(tmp_path):
    in_dir = tmp_path / "in"
    in_dir.mkdir()
    out_dir = tmp_path / "out"
    _write(in_dir / "one.csv", [HEADER, ["d1", "/x/a.gz", "1"]])
    _write(in_dir / "two.csv", [HEADER, ["d2", "/y/b.gz", "2"]])
    (in_dir / "ignored.txt").write_text("not csv", encoding="utf-8")
    base = tmp_path / "base"
    status = main(["-i", str(in_dir), "-o", str(out_dir), "-n", str(base)])
    assert status == 0
    assert sorted(p.name for p in out_dir.iterdir()) == ["one.csv", "two.csv"]
    assert _read(out_dir / "one.csv")[1][1] == str(base / "a.gz")
    assert _read(out_dir / "two.csv")[1][1] == str(base / "b.gz")


def test_main_reports_failures(tmp_path, capsys):
    in_dir = tmp_path / "in"
    in_dir.mkdir()
    _write(in_dir / "bad.csv", [HEADER, ["short"]])
    status = main(["-i", str(in_dir), "-o", str(tmp_path / "out"), "-s"])
    assert status == 1
    assert "1 error(s)" in capsys.readouterr().err