"""
CSV generator module.

Generates schema-description CSV files and synthetic sample data.
"""

from .generator import HEADERS, CSVGenerator, field_row, write_csv
from .sample_data import (
    SampleDataGenerator,
    random_uuid_factory,
    rows_to_csv,
    rows_to_json,
    seeded_uuid_factory,
)

__all__ = [
    "CSVGenerator",
    "HEADERS",
    "field_row",
    "write_csv",
    "SampleDataGenerator",
    "random_uuid_factory",
    "seeded_uuid_factory",
    "rows_to_csv",
    "rows_to_json",
]
