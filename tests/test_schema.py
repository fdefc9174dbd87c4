import pytest

from crossref_fieldkit.schema import SCHEMA, FieldType, field_type


@pytest.mark.parametrize(
    "path, expected",
    [
        ("DOI", FieldType.VALUE),
        ("ISSN", FieldType.ARRAY),
        ("author", FieldType.ARRAY),
        ("author.family", FieldType.VALUE),
        ("author.affiliation", FieldType.ARRAY),
        ("created", FieldType.OBJECT),
        ("created.date-parts", FieldType.ARRAY),
        ("relation", FieldType.OBJECT),
        ("relation.*", FieldType.ARRAY),
        ("relation.*.id-type", FieldType.VALUE),
        ("resource.primary", FieldType.OBJECT),
        ("project.funding.award-amount.percentage", FieldType.VALUE),
        ("year", FieldType.VALUE),
    ],
)
def test_known_paths(path, expected):
    assert field_type(path) is expected


@pytest.mark.parametrize(
    "path",
    ["", "doi", "author.family.extra", "not-a-field", "relation.is-preprint-of"],
)
def test_unknown_paths_return_none(path):
    assert field_type(path) is None


def test_every_child_has_container_parent():
    for path in SCHEMA:
        if "." in path:
            parent = path.rsplit(".", 1)[0]
            assert field_type(parent) in (FieldType.ARRAY, FieldType.OBJECT), path


def test_date_parts_are_always_arrays():
    date_parts = [p for p in SCHEMA if p.split(".")[-1] == "date-parts"]
    assert date_parts
    assert all(field_type(p) is FieldType.ARRAY for p in date_parts)


def test_schema_is_read_only():
    with pytest.raises(TypeError):
        SCHEMA["new-field"] = FieldType.VALUE  # type: ignore[index]
    assert field_type("new-field") is None


def test_field_type_agrees_with_schema_mapping():
    for path, kind in SCHEMA.items():
        assert field_type(path) is kind