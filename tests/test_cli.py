"""End-to-end tests for the schema-forge command line."""

import json

import pytest

from schema_forge.main import create_parser, main


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage: schema-forge" in capsys.readouterr().out


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert "schema-forge 0.1.0" in capsys.readouterr().out


def test_list_artifacts(capsys):
    assert main(["--list-artifacts"]) == 0
    out = capsys.readouterr().out
    assert "Supported Artifacts" in out
    assert "content_config" in out
    assert "sample_data" in out


def test_artifact_info(capsys):
    assert main(["--artifact-info", "ddl"]) == 0
    out = capsys.readouterr().out
    assert "SQLGenerator" in out
    assert "application/sql" in out


def test_artifact_info_unknown(capsys):
    assert main(["--artifact-info", "graphql"]) == 1
    assert "not supported" in capsys.readouterr().out


def test_info_command(schema_file, capsys):
    assert main(["info", str(schema_file)]) == 0
    out = capsys.readouterr().out
    assert "blog" in out
    assert "author_id" in out
    assert "Schema Statistics" in out


def test_info_missing_file(tmp_path, capsys):
    assert main(["info", str(tmp_path / "missing.json")]) == 1
    assert "File not found" in capsys.readouterr().out


def test_relations_command(tmp_path, capsys):
    path = tmp_path / "shop.json"
    path.write_text(
        json.dumps(
            {
                "name": "shop",
                "tables": [
                    {"name": "users", "fields": [{"name": "id", "type_general": "uuid", "primary_key": True}]},
                    {"name": "orders", "fields": [{"name": "user_id", "type_general": "uuid"}]},
                ],
            }
        ),
        encoding="utf-8",
    )
    assert main(["relations", str(path)]) == 0
    out = capsys.readouterr().out
    assert "Suggested Relations" in out
    assert "user_id" in out


def test_relations_none_found(schema_file, capsys):
    assert main(["relations", str(schema_file)]) == 0
    assert "No relation suggestions" in capsys.readouterr().out


def test_inspection_requires_input():
    with pytest.raises(SystemExit):
        create_parser().parse_args(["info"])


def test_generate_to_directory(schema_file, tmp_path):
    out_dir = tmp_path / "build"
    assert main(["generate", str(schema_file), "-a", "sql,docs", "-o", str(out_dir)]) == 0

    assert sorted(p.name for p in out_dir.iterdir()) == ["blog.md", "blog_postgres.sql"]
    sql = (out_dir / "blog_postgres.sql").read_text(encoding="utf-8")
    assert "CREATE TABLE users" in sql


def test_generate_default_kinds_for_one_table(schema_file, tmp_path):
    out_dir = tmp_path / "build"
    assert main(["generate", str(schema_file), "--table", "users", "-o", str(out_dir)]) == 0

    assert sorted(p.name for p in out_dir.iterdir()) == [
        "acf_users.json",
        "config.ts",
        "users.csv",
        "users.md",
        "users_[slug].astro",
        "users_postgres.sql",
    ]


def test_generate_prints_to_stdout(schema_file, capsys):
    assert main(["generate", str(schema_file), "-t", "users", "-a", "sql", "--verbose"]) == 0
    out = capsys.readouterr().out
    assert "CREATE TABLE users" in out
    assert "Generation Metadata" in out


def test_generate_dialect_and_comments(schema_file, tmp_path):
    out_dir = tmp_path / "build"
    args = ["generate", str(schema_file), "-a", "sql", "-d", "sqlite", "--no-comments", "-o", str(out_dir)]
    assert main(args) == 0
    assert (out_dir / "blog_sqlite.sql").exists()


def test_generate_with_config_file(schema_file, tmp_path):
    config = tmp_path / "forge.json"
    config.write_text(json.dumps({"dialect": "mysql", "sample_rows": 2}), encoding="utf-8")
    out_dir = tmp_path / "build"

    args = ["generate", str(schema_file), "-a", "sql,sample", "--config", str(config), "-o", str(out_dir)]
    assert main(args) == 0

    assert (out_dir / "blog_mysql.sql").exists()
    sample = (out_dir / "blog_sample.csv").read_text(encoding="utf-8")
    # two blocks of header + two rows
    assert len(sample.strip().split("\n")) == 7


def test_seeded_sample_data_is_reproducible(schema_file, tmp_path):
    outputs = []
    for name in ("first", "second"):
        out_dir = tmp_path / name
        args = ["generate", str(schema_file), "-a", "sample_data", "--seed", "7", "-o", str(out_dir)]
        assert main(args) == 0
        outputs.append((out_dir / "blog_sample.csv").read_text(encoding="utf-8"))
    assert outputs[0] == outputs[1]


@pytest.mark.parametrize(
    "extra",
    [
        ["--table", "missing"],
        ["-a", "graphql"],
        ["-a", " , "],
        ["-a", "sql", "-d", "oracle"],
        ["--config", "does-not-exist.json"],
    ],
)
def test_generate_errors(schema_file, capsys, extra):
    assert main(["generate", str(schema_file)] + extra) == 1
    assert "Error" in capsys.readouterr().out


def test_generate_requires_input(capsys):
    assert main(["generate", "-a", "sql"]) == 1
    assert "Input source required" in capsys.readouterr().out
