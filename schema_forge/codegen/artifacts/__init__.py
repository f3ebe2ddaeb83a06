"""
Artifact-specific generators.

Each subpackage turns tables and schemas into one artifact format.
"""

from .acf import ACFGenerator
from .content import ContentConfigGenerator
from .csv import CSVGenerator, SampleDataGenerator
from .docs import DocumentationGenerator
from .page import PageGenerator
from .prisma import PrismaGenerator
from .schema_json import SchemaJSONGenerator
from .sql import SQLGenerator, create_sql_generator
from .typescript import TypeScriptGenerator

__all__ = [
    "SQLGenerator",
    "create_sql_generator",
    "ContentConfigGenerator",
    "ACFGenerator",
    "CSVGenerator",
    "SampleDataGenerator",
    "PageGenerator",
    "DocumentationGenerator",
    "TypeScriptGenerator",
    "PrismaGenerator",
    "SchemaJSONGenerator",
]
