"""Tests for the SQL DDL generator."""

import pytest

from schema_forge.codegen.artifacts.sql import (
    Dialect,
    SQLGenerator,
    create_sql_generator,
    order_tables_by_dependency,
    resolve_dialect,
)
from schema_forge.codegen.core.generator import GeneratorError, generate_artifact
from schema_forge.codegen.core.schema import Field, ForeignKey, IndexKind, Schema, Table

SCENARIO_USERS = {
    "name": "users",
    "fields": [
        {
            "name": "id",
            "type_general": "uuid",
            "primary_key": True,
            "unique": True,
            "required": True,
        },
        {"name": "email", "type_general": "string", "required": True, "unique": True},
    ],
}


def test_postgres_primary_key_not_redundant():
    table = Table.from_dict(SCENARIO_USERS)
    sql = create_sql_generator("postgres").generate(table)

    assert "  id UUID PRIMARY KEY,\n" in sql
    assert "id UUID PRIMARY KEY NOT NULL" not in sql
    assert "id UUID PRIMARY KEY UNIQUE" not in sql
    assert "  email VARCHAR(255) NOT NULL UNIQUE\n" in sql


def test_sqlite_quotes_identifiers_and_skips_comments():
    table = Table.from_dict(SCENARIO_USERS)
    table.fields[1].description = "Login email"
    sql = create_sql_generator("sqlite").generate(table)

    assert 'CREATE TABLE IF NOT EXISTS "users" (' in sql
    assert '"id" TEXT PRIMARY KEY' in sql
    assert "COMMENT ON COLUMN" not in sql


def test_header_comment(users_table):
    sql = SQLGenerator().generate(users_table)
    assert sql.startswith("-- Table: users\n-- Description: Registered users\nCREATE TABLE users (")


def test_clause_order_and_default(users_table):
    sql = SQLGenerator().generate(users_table)
    assert "  id UUID PRIMARY KEY DEFAULT gen_random_uuid(),\n" in sql
    assert "  created_at TIMESTAMP NOT NULL DEFAULT now()\n" in sql


def test_explicit_type_sql_passes_through():
    table = Table("things", [Field("geom", type_sql="GEOMETRY(Point, 4326)")])
    sql = SQLGenerator().generate(table)
    assert "  geom GEOMETRY(Point, 4326)\n" in sql


def test_postgres_comments_indexes_and_foreign_keys(users_table, posts_table):
    users_table.get_field("email").description = "User's login"
    generator = create_sql_generator("postgres")

    users_sql = generator.generate(users_table)
    assert "COMMENT ON COLUMN users.email IS 'User''s login';" in users_sql
    assert "CREATE INDEX idx_users_email ON users USING btree (email);" in users_sql

    posts_sql = generator.generate(posts_table)
    assert (
        "ALTER TABLE posts ADD CONSTRAINT fk_posts_author_id "
        "FOREIGN KEY (author_id) REFERENCES users(id);"
    ) in posts_sql


def test_section_order(posts_table):
    title = posts_table.get_field("title")
    title.description = "Headline"
    title.index = IndexKind.GIN
    sql = create_sql_generator("postgres").generate(posts_table)

    positions = [
        sql.index("CREATE TABLE posts"),
        sql.index("COMMENT ON COLUMN"),
        sql.index("CREATE INDEX"),
        sql.index("ALTER TABLE posts ADD CONSTRAINT"),
        sql.index("ENABLE ROW LEVEL SECURITY"),
    ]
    assert positions == sorted(positions)


def test_postgres_row_level_security(posts_table):
    sql = create_sql_generator("postgres").generate(posts_table)
    assert "ALTER TABLE posts ENABLE ROW LEVEL SECURITY;" in sql
    assert (
        "CREATE POLICY posts_author_id_policy ON posts\n"
        "  FOR ALL USING (auth.uid() = author_id);"
    ) in sql


def test_no_rls_without_policies(users_table):
    sql = create_sql_generator("postgres").generate(users_table)
    assert "ROW LEVEL SECURITY" not in sql
    assert "CREATE POLICY" not in sql


def test_sqlite_never_emits_postgres_constructs(posts_table, users_table):
    generator = create_sql_generator("sqlite")
    sql = generator.generate(posts_table) + generator.generate(users_table)

    assert "ROW LEVEL SECURITY" not in sql
    assert "CREATE POLICY" not in sql
    assert "COMMENT ON" not in sql
    assert "USING" not in sql
    assert "CASCADE" not in sql
    assert "ALTER TABLE" not in sql
    assert '  FOREIGN KEY ("author_id") REFERENCES "users"("id")' in sql
    assert 'CREATE INDEX IF NOT EXISTS "idx_users_email" ON "users" ("email");' in sql


def test_mysql_dialect(users_table, posts_table):
    generator = create_sql_generator("mysql")
    sql = generator.generate(users_table)
    assert "  id VARCHAR(36) PRIMARY KEY DEFAULT gen_random_uuid(),\n" in sql
    assert "CREATE INDEX idx_users_email ON users (email) USING BTREE;" in sql
    assert "COMMENT ON" not in sql
    assert "ROW LEVEL SECURITY" not in generator.generate(posts_table)


def test_dialect_aliases():
    assert resolve_dialect("PostgreSQL") == Dialect.POSTGRES
    assert resolve_dialect("sqlite3") == Dialect.SQLITE
    assert create_sql_generator("mariadb").dialect == Dialect.MYSQL


def test_unknown_dialect_fails_loudly():
    with pytest.raises(GeneratorError):
        create_sql_generator("oracle")


def test_comment_injection_is_neutralised():
    table = Table("t", [Field("id", primary_key=True)], description="evil\nDROP TABLE x;")
    sql = SQLGenerator().generate(table)
    assert "-- Description: evil DROP TABLE x;\n" in sql
    assert "\nDROP TABLE x;" not in sql


def test_empty_table_still_produces_statement(empty_table):
    sql = SQLGenerator().generate(empty_table)
    assert "CREATE TABLE empty (\n);" in sql


def test_schema_script_order(blog_schema):
    sql = create_sql_generator("postgres").generate(blog_schema)

    assert sql.startswith("-- Schema: blog\n-- Version: 2.1.0\n-- Dialect: POSTGRES\n")
    # DROPs in schema order, before any CREATE
    assert sql.index("DROP TABLE IF EXISTS posts CASCADE;") < sql.index(
        "DROP TABLE IF EXISTS users CASCADE;"
    )
    assert sql.index("DROP TABLE IF EXISTS users CASCADE;") < sql.index("CREATE TABLE")
    # referenced table created first
    assert sql.index("CREATE TABLE users") < sql.index("CREATE TABLE posts")
    # foreign keys deferred until every table exists
    assert sql.index("-- Foreign keys") > sql.index("CREATE TABLE posts")
    assert sql.index("ALTER TABLE posts ADD CONSTRAINT") > sql.index("-- Foreign keys")


def test_schema_script_sqlite(blog_schema):
    sql = create_sql_generator("sqlite").generate(blog_schema)
    assert 'DROP TABLE IF EXISTS "posts";' in sql
    assert "-- Dialect: SQLITE" in sql
    assert "-- Foreign keys" not in sql


def test_schema_without_drops(blog_schema):
    sql = create_sql_generator("postgres", drop_tables=False).generate(blog_schema)
    assert "DROP TABLE" not in sql


def test_if_not_exists_option(users_table):
    sql = create_sql_generator("postgres", if_not_exists=True).generate(users_table)
    assert "CREATE TABLE IF NOT EXISTS users (" in sql


def test_dependency_order_is_stable_and_handles_cycles():
    a = Table("a", [Field("b_id", foreign_key=ForeignKey("b"))])
    b = Table("b", [Field("c_id", foreign_key=ForeignKey("c"))])
    c = Table("c", [Field("id", primary_key=True)])
    d = Table("d", [Field("ext_id", foreign_key=ForeignKey("external"))])
    schema = Schema("s", [a, b, c, d])
    assert [t.name for t in order_tables_by_dependency(schema)] == ["c", "b", "a", "d"]

    x = Table("x", [Field("y_id", foreign_key=ForeignKey("y"))])
    y = Table("y", [Field("x_id", foreign_key=ForeignKey("x"))])
    cyclic = Schema("cyc", [x, y])
    assert [t.name for t in order_tables_by_dependency(cyclic)] == ["x", "y"]


def test_idempotent(blog_schema):
    generator = create_sql_generator("postgres")
    assert generator.generate(blog_schema) == generator.generate(blog_schema)


def test_formatting_keeps_comment_literal_verbatim():
    description = "First line  \n\n\nafter blank lines"
    table = Table("notes", [Field("body", description=description)])

    result = generate_artifact(SQLGenerator(), table)

    assert f"IS '{description}';" in result.content
    assert result.content.endswith(";\n")


def test_formatting_applies_line_ending(users_table):
    result = generate_artifact(SQLGenerator({"line_ending": "\r\n"}), users_table)
    assert "\r\n" in result.content
    assert "\n" not in result.content.replace("\r\n", "")
