"""
Content-collection config generator module.

Generates typed content-collection definitions validated with zod.
"""

from .generator import ContentConfigGenerator, object_key, zod_expression

__all__ = ["ContentConfigGenerator", "object_key", "zod_expression"]
