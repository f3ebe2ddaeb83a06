"""Tests for the synthetic sample-data generator."""

import csv
import io
import json
import uuid

import pytest

from schema_forge.codegen.artifacts.csv import (
    SampleDataGenerator,
    rows_to_csv,
    seeded_uuid_factory,
)
from schema_forge.codegen.artifacts.csv.sample_data import normalize_datetime
from schema_forge.codegen.core.generator import GeneratorError
from schema_forge.codegen.core.schema import Field, FieldType, Table


def _counter_factory():
    values = iter(f"00000000-0000-4000-8000-{i:012d}" for i in range(1, 1000))
    return lambda: next(values)


def test_float_without_example_gets_numeric_placeholders(posts_table):
    rows = list(csv.DictReader(io.StringIO(SampleDataGenerator().generate(posts_table))))

    assert len(rows) == 5
    prices = [row["price"] for row in rows]
    assert all(prices)
    assert [float(p) for p in prices] == [10.5, 21.0, 31.5, 42.0, 52.5]
    assert len(set(prices)) > 1


def test_example_values_are_used(posts_table):
    rows = SampleDataGenerator().generate_rows(posts_table, 3)
    assert [r["status"] for r in rows] == ["draft", "draft", "draft"]


def test_placeholders_by_type(posts_table):
    rows = SampleDataGenerator().generate_rows(posts_table, 2, uuid_factory=_counter_factory())

    assert rows[0]["views"] == 1
    assert rows[1]["views"] == 2
    assert rows[0]["title"] == "title 1"
    assert rows[1]["author_id"] == "2"
    assert rows[0]["id"] == "00000000-0000-4000-8000-000000000001"


def test_enum_without_example_cycles_values():
    table = Table("t", [Field("level", FieldType.ENUM, enum_values=["low", "high"])])
    rows = SampleDataGenerator().generate_rows(table, 3)
    assert [r["level"] for r in rows] == ["low", "high", "low"]


def test_datetime_placeholders_and_examples():
    table = Table(
        "events",
        [
            Field("starts_at", FieldType.DATETIME),
            Field("ends_at", FieldType.DATETIME, example_value="2024-03-03T10:30:00"),
        ],
    )
    rows = SampleDataGenerator().generate_rows(table, 2)

    assert rows[0]["starts_at"] == "2024-01-01 09:00:00"
    assert rows[1]["starts_at"] == "2024-01-02 09:00:00"
    assert rows[0]["ends_at"] == "2024-03-03 10:30:00"


def test_unparseable_datetime_is_kept():
    assert normalize_datetime("not a date at all xyz") == "not a date at all xyz"


def test_bool_image_and_json_placeholders():
    table = Table(
        "gallery",
        [
            Field("public", FieldType.BOOL),
            Field("cover", FieldType.IMAGE),
            Field("meta", FieldType.JSON),
        ],
    )
    text = SampleDataGenerator().generate(table)
    rows = list(csv.DictReader(io.StringIO(text)))

    assert [r["public"] for r in rows[:2]] == ["true", "false"]
    assert rows[0]["cover"] == "https://example.com/images/gallery-1.jpg"
    assert json.loads(rows[2]["meta"]) == {"id": 3}


def test_seeded_runs_are_reproducible(blog_schema):
    generator = SampleDataGenerator({"sample_seed": 42})
    first = generator.generate(blog_schema)
    assert first == generator.generate(blog_schema)
    assert first == SampleDataGenerator({"sample_seed": 42}).generate(blog_schema)


def test_seeded_factory_yields_version_4_uuids():
    factory = seeded_uuid_factory(7)
    values = [factory() for _ in range(3)]
    assert len(set(values)) == 3
    assert all(uuid.UUID(v).version == 4 for v in values)


def test_unseeded_uuids_differ(users_table):
    rows = SampleDataGenerator().generate_rows(users_table, 4)
    assert len({r["id"] for r in rows}) == 4


def test_negative_count_gives_no_rows(users_table, caplog):
    assert SampleDataGenerator().generate_rows(users_table, -3) == []
    assert "Negative" in caplog.text


def test_json_output(users_table):
    generator = SampleDataGenerator({"output_format": "json", "sample_rows": 2})
    rows = json.loads(generator.generate(users_table))

    assert generator.file_extension == ".json"
    assert generator.suggested_filename("users") == "users_sample.json"
    assert len(rows) == 2
    assert list(rows[0]) == [f.name for f in users_table.fields]
    assert rows[0]["email"] == "ada@example.com"


def test_json_schema_is_keyed_by_table(blog_schema):
    generator = SampleDataGenerator({"output_format": "json", "sample_rows": 1})
    data = json.loads(generator.generate(blog_schema))
    assert list(data) == ["posts", "users"]


def test_csv_schema_blocks(blog_schema):
    text = SampleDataGenerator({"sample_rows": 1}).generate(blog_schema)
    blocks = text.split("\n\n")
    assert len(blocks) == 2
    assert blocks[0].startswith('"id","author_id","title"')
    assert blocks[1].startswith('"id","email","display_name","created_at"')


def test_unknown_output_format_is_rejected():
    with pytest.raises(GeneratorError):
        SampleDataGenerator({"output_format": "xml"})


def test_external_rows_are_projected(users_table):
    rows = [{"email": "x@example.com", "unexpected": 1}]
    text = rows_to_csv(users_table, rows)
    assert text == '"id","email","display_name","created_at"\n"","x@example.com","",""\n'

    exported = SampleDataGenerator({"output_format": "json"}).export_rows(users_table, rows)
    assert json.loads(exported) == [
        {"id": None, "email": "x@example.com", "display_name": None, "created_at": None}
    ]
