"""Schema Forge: generate database and content artifacts from table schemas."""

__version__ = "0.1.0"
