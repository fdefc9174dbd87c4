import json

from crossref_fieldkit.paths import (
    PathPattern,
    initialize_path_patterns,
    parse_field_specifications,
)


def test_parse_field_specifications_trims_and_drops_empty():
    specs = parse_field_specifications(" author.family , title ,, ISSN,")
    assert specs == [["author", "family"], ["title"], ["ISSN"]]


def test_parse_field_specifications_drops_empty_parts():
    assert parse_field_specifications("a..b, . ,") == [["a", "b"]]


def test_parse_field_specifications_only_separators():
    assert parse_field_specifications(" , ,") == []


def test_field_name_is_dotted_path():
    assert PathPattern(["author", "family"]).field_name == "author.family"


def test_array_of_objects_is_expanded():
    record = {"author": [{"family": "Smith"}, {"family": "Jones"}, {"given": "X"}]}
    results = PathPattern(["author", "family"]).apply(record)
    assert sorted(results) == [("author[0].family", "Smith"), ("author[1].family", "Jones")]


def test_array_of_strings():
    record = {"title": ["First", "Second"]}
    results = PathPattern(["title"]).apply(record)
    assert sorted(results) == [("title[0]", "First"), ("title[1]", "Second")]


def test_complex_value_round_trips_as_json():
    author = {"given": "Ann", "family": "Smith", "affiliation": []}
    results = PathPattern(["author"]).apply({"author": [author]})
    assert len(results) == 1
    path, value = results[0]
    assert path == "author[0]"
    assert json.loads(value) == author


def test_primitive_values_kept():
    record = {"is-referenced-by-count": 5, "language": None, "score": 1.5}
    assert PathPattern(["is-referenced-by-count"]).apply(record) == [
        ("is-referenced-by-count", 5)
    ]
    assert PathPattern(["language"]).apply(record) == [("language", None)]
    assert PathPattern(["score"]).apply(record) == [("score", 1.5)]


def test_missing_field_gives_nothing():
    assert PathPattern(["publisher"]).apply({"title": ["T"]}) == []


def test_object_where_array_expected_is_single_item():
    results = PathPattern(["title"]).apply({"title": {"x": 1}})
    assert len(results) == 1
    assert results[0][0] == "title"
    assert json.loads(results[0][1]) == {"x": 1}


def test_scalar_where_array_expected_is_dropped():
    assert PathPattern(["ISSN"]).apply({"ISSN": "1234-5678"}) == []


def test_star_outside_relation_is_not_expanded():
    record = {"author": [{"family": "Smith"}]}
    assert PathPattern(["author", "*"]).apply(record) == []


def test_non_dict_record_gives_nothing():
    assert PathPattern(["title"]).apply(["title"]) == []


def test_initialize_without_relation():
    patterns = initialize_path_patterns([["title"], ["author", "family"]])
    assert set(patterns) == {"title", "author.family"}
    assert patterns["author.family"].field_name == "author.family"


def test_initialize_skips_empty_path():
    assert initialize_path_patterns([[]]) == {}


def test_initialize_adds_relation_wildcards():
    patterns = initialize_path_patterns([["relation", "is-cited-by", "id"]])
    assert set(patterns) == {"relation.is-cited-by.id", "relation.*", "relation.*.id"}


def test_relation_wildcard_expands_dynamic_keys():
    patterns = initialize_path_patterns([["relation", "cites", "id"]])
    record = {
        "relation": {
            "cites": [{"id": "10.1/x", "id-type": "doi"}],
            "is-part-of": [{"id": "10.2/y"}],
        }
    }
    results = patterns["relation.*.id"].apply(record)
    assert sorted(results) == [
        ("relation.cites[0].id", "10.1/x"),
        ("relation.is-part-of[0].id", "10.2/y"),
    ]


def test_relation_star_pattern_yields_each_item():
    record = {"relation": {"cites": [{"id": "a"}, {"id": "b"}]}}
    results = PathPattern(["relation", "*"]).apply(record)
    assert sorted(path for path, _ in results) == ["relation.cites[0]", "relation.cites[1]"]
    assert sorted(json.loads(value)["id"] for _, value in results) == ["a", "b"]