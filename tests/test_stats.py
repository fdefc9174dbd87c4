import logging
import threading
from collections import Counter
from datetime import timedelta

from crossref_fieldkit.records import FileStats
from crossref_fieldkit.stats import FinalStats, IncrementalStats, format_elapsed


def _file_stats(dois, fields, members, prefixes):
    return FileStats(
        unique_dois=set(dois),
        field_counts=Counter(fields),
        member_counts=Counter(members),
        prefix_counts=Counter(prefixes),
        total_fields_extracted=sum(Counter(fields).values()),
    )


def test_aggregate_sums_counts_and_unions_dois():
    stats = IncrementalStats()
    stats.aggregate_file_stats(
        _file_stats(["10.1/a", "10.1/b"], {"title": 2, "ISSN": 1}, {"78": 3}, {"10.1": 3})
    )
    stats.aggregate_file_stats(
        _file_stats(["10.1/b", "10.2/c"], {"title": 4}, {"78": 1, "99": 3}, {"10.1": 1, "10.2": 3})
    )
    final = stats.final_stats()
    assert final.processed_files_ok == 2
    assert final.processed_files_error == 0
    assert final.total_field_records == 3 + 4
    assert final.unique_dois == len({"10.1/a", "10.1/b", "10.2/c"})
    assert final.unique_fields == {"title": 2 + 4, "ISSN": 1}
    assert final.unique_members == {"78": 3 + 1, "99": 3}
    assert final.unique_prefixes == {"10.1": 3 + 1, "10.2": 3}


def test_error_files_counted_separately():
    stats = IncrementalStats()
    stats.increment_error_files()
    stats.increment_error_files()
    stats.aggregate_file_stats(FileStats())
    final = stats.final_stats()
    assert final.processed_files_error == 2
    assert final.processed_files_ok == 1
    assert final.total_field_records == 0


def test_empty_stats_snapshot():
    assert IncrementalStats().final_stats() == FinalStats()


def test_final_stats_is_a_copy():
    stats = IncrementalStats()
    stats.aggregate_file_stats(_file_stats(["d"], {"title": 1}, {"1": 1}, {"p": 1}))
    snapshot = stats.final_stats()
    snapshot.unique_fields["title"] = 1000
    assert stats.final_stats().unique_fields == {"title": 1}


def test_concurrent_aggregation_is_consistent():
    stats = IncrementalStats()
    per_thread = 50
    workers = 8

    def work(worker):
        for n in range(per_thread):
            stats.aggregate_file_stats(
                _file_stats([f"10.1/{worker}-{n}"], {"title": 1}, {"7": 1}, {"10.1": 1})
            )

    threads = [threading.Thread(target=work, args=(w,)) for w in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    final = stats.final_stats()
    assert final.processed_files_ok == per_thread * workers
    assert final.unique_dois == per_thread * workers
    assert final.unique_fields["title"] == per_thread * workers


def test_log_current_stats_lists_top_fields(caplog):
    stats = IncrementalStats()
    fields = {f"field{n}": n + 1 for n in range(12)}
    stats.aggregate_file_stats(_file_stats(["d"], fields, {"1": 1}, {"p": 1}))
    with caplog.at_level(logging.INFO, logger="crossref_fieldkit.stats"):
        stats.log_current_stats()
    messages = [record.getMessage() for record in caplog.records]
    assert "Current Statistics:" in messages
    field_lines = [m for m in messages if m.endswith(" records") and m.startswith("    field")]
    assert len(field_lines) == 10
    assert field_lines[0].strip().startswith("field11:")
    assert any("more fields" in m for m in messages)


def test_format_elapsed_hours():
    assert format_elapsed(3661) == "1h 1m 1s"


def test_format_elapsed_minutes():
    assert format_elapsed(61.0) == "1m 1s"


def test_format_elapsed_seconds_with_millis():
    assert format_elapsed(1.5) == "1.500s"


def test_format_elapsed_accepts_timedelta():
    assert format_elapsed(timedelta(seconds=3661)) == format_elapsed(3661)
    assert format_elapsed(timedelta(milliseconds=1500)) == format_elapsed(1.5)