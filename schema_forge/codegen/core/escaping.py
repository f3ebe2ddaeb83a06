"""
Format-specific escaping rules.

Free text from the schema (descriptions, notes, example values) ends up
inside SQL comments and literals, Markdown tables, JavaScript string
literals and block comments; each of those needs its own escaping.
"""

import re

_NEWLINES = re.compile(r"\s*[\r\n]+\s*")


def single_line(text: str) -> str:
    """Collapse line breaks (and surrounding blanks) into single spaces."""
    return _NEWLINES.sub(" ", str(text or "")).strip()


def sql_comment(text: str) -> str:
    """Text safe inside a ``--`` comment: no line break may end it early."""
    return single_line(text)


def sql_string(text: str) -> str:
    """Quoted SQL string literal with embedded single quotes doubled."""
    return "'" + str(text).replace("'", "''") + "'"


def quote_identifier(name: str, quote: str = '"') -> str:
    """Delimit an identifier, doubling any embedded delimiter."""
    return f"{quote}{name.replace(quote, quote * 2)}{quote}"


def js_string(text: str) -> str:
    """Single-quoted JavaScript/TypeScript string literal."""
    escaped = (
        str(text)
        .replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def md_cell(text: str) -> str:
    """Text safe inside a Markdown table cell."""
    value = str(text or "").replace("|", "\\|")
    return re.sub(r"\r?\n", "<br>", value).strip()


def block_comment(text: str) -> str:
    """Single-line text safe inside a ``/* ... */`` comment."""
    return single_line(text).replace("*/", "*\\/")
