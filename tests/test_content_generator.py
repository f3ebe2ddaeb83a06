"""Tests for the content-collection config generator."""

from schema_forge.codegen.artifacts.content import (
    ContentConfigGenerator,
    object_key,
    zod_expression,
)
from schema_forge.codegen.core.schema import Field, FieldType, Table


def test_zod_expressions():
    assert zod_expression(Field("id", FieldType.UUID, required=True)) == "z.string().uuid()"
    assert zod_expression(Field("n", FieldType.INT)) == "z.number().int().optional()"
    assert zod_expression(Field("meta", FieldType.JSON, required=True)) == "z.record(z.any())"


def test_enum_uses_listed_values():
    field = Field("status", FieldType.ENUM, enum_values=["draft", "it's live"])
    assert zod_expression(field) == "z.enum(['draft', 'it\\'s live']).optional()"


def test_enum_without_values_falls_back_to_string():
    assert zod_expression(Field("status", FieldType.ENUM, required=True)) == "z.string()"


def test_object_key_quotes_non_identifiers():
    assert object_key("title") == "title"
    assert object_key("$ref") == "$ref"
    assert object_key("blog-posts") == "'blog-posts'"
    assert object_key("2fa") == "'2fa'"


def test_table_module(posts_table):
    code = ContentConfigGenerator().generate(posts_table)

    assert "import { defineCollection, z } from 'astro:content';" in code
    assert "// Blog posts\nconst postsCollection = defineCollection({" in code
    assert "  type: 'content',\n  schema: z.object({\n" in code
    assert "    id: z.string().uuid(),\n" in code
    assert "    status: z.enum(['draft', 'published']).optional(),\n" in code
    assert "    price: z.number().optional(),\n" in code
    assert "export const collections = {\n  posts: postsCollection,\n};" in code


def test_field_order_is_preserved(posts_table):
    code = ContentConfigGenerator().generate(posts_table)
    positions = [code.index(f"    {f.name}: ") for f in posts_table.fields]
    assert positions == sorted(positions)


def test_schema_module_registers_every_collection(blog_schema):
    code = ContentConfigGenerator().generate(blog_schema)

    assert code.count("import { defineCollection") == 1
    assert "// blog\n" in code
    assert "const postsCollection" in code
    assert "const usersCollection" in code
    assert "  posts: postsCollection,\n  users: usersCollection,\n" in code


def test_comments_can_be_disabled(posts_table):
    code = ContentConfigGenerator({"add_comments": False}).generate(posts_table)
    assert "// Blog posts" not in code


def test_odd_table_names():
    table = Table("blog-posts", [Field("title", required=True)])
    code = ContentConfigGenerator().generate(table)
    assert "const blogPostsCollection = defineCollection" in code
    assert "  'blog-posts': blogPostsCollection,\n" in code


def test_empty_table_gives_empty_object(empty_table):
    code = ContentConfigGenerator().generate(empty_table)
    assert "schema: z.object({\n  }),\n" in code


def test_metadata():
    generator = ContentConfigGenerator()
    assert generator.artifact_kind == "content_config"
    assert generator.file_extension == ".ts"
    assert generator.suggested_filename("anything") == "config.ts"
