"""Shared fixtures for schema-forge tests."""

import pytest

from schema_forge.codegen.core.schema import Schema, Table


USERS = {
    "name": "users",
    "description": "Registered users",
    "fields": [
        {
            "name": "id",
            "type_general": "uuid",
            "primary_key": True,
            "unique": True,
            "required": True,
            "default_sql": "gen_random_uuid()",
        },
        {
            "name": "email",
            "type_general": "string",
            "required": True,
            "unique": True,
            "description": "Login email",
            "example_value": "ada@example.com",
            "index": "BTree",
        },
        {
            "name": "display_name",
            "type_general": "string",
            "slug_compatible": True,
            "description": "Public name",
        },
        {
            "name": "created_at",
            "type_general": "datetime",
            "required": True,
            "default_sql": "now()",
        },
    ],
}

POSTS = {
    "name": "posts",
    "description": "Blog posts",
    "notes": "Soft-deleted posts stay in the table",
    "fields": [
        {"name": "id", "type_general": "uuid", "primary_key": True, "required": True},
        {
            "name": "author_id",
            "type_general": "relation",
            "required": True,
            "foreign_key": "users(id)",
            "relation_cardinality": "1-N",
            "supabase_policy": "auth.uid() = author_id",
        },
        {"name": "title", "type_general": "string", "required": True},
        {
            "name": "status",
            "type_general": "enum",
            "enum_values": ["draft", "published"],
            "example_value": "draft",
        },
        {"name": "price", "type_general": "float", "example_value": ""},
        {"name": "views", "type_general": "int"},
    ],
}


@pytest.fixture
def users_table() -> Table:
    return Table.from_dict(USERS)


@pytest.fixture
def posts_table() -> Table:
    return Table.from_dict(POSTS)


@pytest.fixture
def empty_table() -> Table:
    return Table(name="empty")


@pytest.fixture
def blog_schema() -> Schema:
    # posts is listed first on purpose: it references users
    return Schema.from_dict(
        {
            "name": "blog",
            "description": "Blog backend",
            "version": "2.1.0",
            "tables": [POSTS, USERS],
        }
    )


@pytest.fixture
def schema_file(tmp_path, blog_schema):
    path = tmp_path / "blog.json"
    path.write_text(blog_schema.to_json(), encoding="utf-8")
    return path
