"""
Page template generator module.

Generates Astro dynamic pages for content collections.
"""

from .generator import PageGenerator, pick_slug_field

__all__ = ["PageGenerator", "pick_slug_field"]
