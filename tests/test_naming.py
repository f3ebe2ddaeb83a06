"""Tests for naming and escaping helpers."""

from schema_forge.codegen.core import escaping
from schema_forge.codegen.core.naming import (
    NamingCase,
    clean_identifier,
    create_typescript_sanitizer,
    to_camel_case,
    to_pascal_case,
    to_snake_case,
)


def test_case_conversion():
    assert to_snake_case("BlogPost") == "blog_post"
    assert to_snake_case("blog-post") == "blog_post"
    assert to_camel_case("blog_posts") == "blogPosts"
    assert to_pascal_case("blog_posts") == "BlogPosts"


def test_clean_identifier():
    assert clean_identifier("order items") == "order_items"
    assert clean_identifier("1st") == "_1st"
    assert clean_identifier("!!!") == "field"


def test_sanitizer_reserved_words_and_conflicts():
    sanitizer = create_typescript_sanitizer()
    assert sanitizer.sanitize_name("class", NamingCase.CAMEL_CASE) == "class_"
    assert sanitizer.sanitize_name("user_posts", NamingCase.PASCAL_CASE) == "UserPosts"
    assert sanitizer.sanitize_name("UserPosts", NamingCase.PASCAL_CASE) == "UserPosts1"
    # stable for repeated input
    assert sanitizer.sanitize_name("user_posts", NamingCase.PASCAL_CASE) == "UserPosts"


def test_sanitizer_reset():
    sanitizer = create_typescript_sanitizer()
    sanitizer.sanitize_name("users", NamingCase.PASCAL_CASE)
    sanitizer.reset()
    assert sanitizer.sanitize_name("Users", NamingCase.PASCAL_CASE) == "Users"


def test_sql_comment_collapses_newlines():
    assert escaping.sql_comment("line one\n  line two\r\nthree") == "line one line two three"


def test_sql_string_doubles_quotes():
    assert escaping.sql_string("it's") == "'it''s'"


def test_quote_identifier():
    assert escaping.quote_identifier("users") == '"users"'
    assert escaping.quote_identifier('we"ird') == '"we""ird"'


def test_js_string():
    assert escaping.js_string("it's") == "'it\\'s'"
    assert escaping.js_string("a\\b\nc") == "'a\\\\b\\nc'"


def test_md_cell():
    assert escaping.md_cell("a | b\nc") == "a \\| b<br>c"
    assert escaping.md_cell(None) == ""


def test_block_comment_breaks_terminator():
    assert escaping.block_comment("a */ b\nc") == "a *\\/ b c"
