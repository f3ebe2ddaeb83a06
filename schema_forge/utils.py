"""Utility functions for loading and saving schema documents.

This module provides functions for loading schema JSON from files and URLs
with proper error handling, and for writing the JSON project format back.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .codegen.core.schema import Schema, Table
from .logging_config import get_logger

logger = get_logger(__name__)


class SchemaLoaderError(Exception):
    """Custom exception for schema loading errors."""

    pass


def schema_from_document(data: Any, default_name: str = "schema") -> Schema:
    """Build a Schema from a parsed JSON document.

    Accepts a schema object (``{"tables": [...]}``), a single table object
    (``{"fields": [...]}``) or a bare list of tables.

    Args:
        data: Parsed JSON document.
        default_name: Schema name used when the document has none.

    Returns:
        Coerced Schema.
    """
    if isinstance(data, list):
        logger.debug("Document is a list; treating items as tables")
        return Schema.from_dict({"name": default_name, "tables": data})

    if isinstance(data, dict) and "tables" not in data and "fields" in data:
        table = Table.from_dict(data)
        logger.debug("Document is a single table: %s", table.name)
        return Schema(name=table.name, tables=[table])

    if isinstance(data, dict) and not data.get("name"):
        data = {**data, "name": default_name}

    return Schema.from_dict(data)


def load_schema_from_file(file_path: str | Path) -> tuple[str, Schema]:
    """Load a schema from a local JSON file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, schema).

    Raises:
        FileNotFoundError: If file doesn't exist.
        SchemaLoaderError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load schema from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise SchemaLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise SchemaLoaderError(f"Error reading file {file_path}: {e}") from e

    schema = schema_from_document(data, default_name=file_path.stem)
    logger.info(f"Successfully loaded schema {schema.name!r} from {file_path}")
    return f"📄 {file_path}", schema


def load_schema_from_url(url: str, timeout: int = 30) -> tuple[str, Schema]:
    """Load a schema from a URL.

    Args:
        url: URL to fetch the schema JSON from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, schema).

    Raises:
        SchemaLoaderError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug(f"Attempting to load schema from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise SchemaLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "application/json" not in content_type and not url.endswith(".json"):
            logger.warning(f"URL {url} does not have JSON content type: {content_type}")

        data = response.json()
    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise SchemaLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise SchemaLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise SchemaLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.JSONDecodeError as e:
        logger.error(f"Invalid JSON response from URL {url}: {e}")
        raise SchemaLoaderError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}")
        raise SchemaLoaderError(f"Request error for URL {url}: {e}") from e

    default_name = Path(parsed_url.path).stem or "schema"
    schema = schema_from_document(data, default_name=default_name)
    logger.info(f"Successfully loaded schema {schema.name!r} from {url}")
    return f"🌐 {url}", schema


def load_schema(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, Schema]:
    """Load a schema from either a file or URL.

    Args:
        file_path: Path to local JSON file (mutually exclusive with url).
        url: URL to fetch JSON from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, schema).

    Raises:
        SchemaLoaderError: If neither or both parameters are provided, or loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path and not url:
        logger.error("Neither file_path nor url provided")
        raise SchemaLoaderError("Either file_path or url must be provided")

    if file_path and url:
        logger.error("Both file_path and url provided")
        raise SchemaLoaderError("Cannot specify both file_path and url")

    if file_path:
        return load_schema_from_file(file_path)
    return load_schema_from_url(url, timeout)


def save_schema(schema: Schema, file_path: str | Path) -> Path:
    """Write a schema in the JSON project format.

    Args:
        schema: Schema to save.
        file_path: Destination path.

    Returns:
        The path written.

    Raises:
        SchemaLoaderError: If the file cannot be written.
    """
    file_path = Path(file_path)
    try:
        file_path.write_text(schema.to_json() + "\n", encoding="utf-8")
    except OSError as e:
        logger.error(f"Error writing file {file_path}: {e}")
        raise SchemaLoaderError(f"Error writing file {file_path}: {e}") from e

    logger.info(f"Saved schema {schema.name!r} to {file_path}")
    return file_path
