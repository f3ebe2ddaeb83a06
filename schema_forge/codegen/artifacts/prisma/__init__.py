"""
Prisma generator module.

Generates Prisma schema models for tables.
"""

from .generator import PrismaGenerator, prisma_default

__all__ = ["PrismaGenerator", "prisma_default"]
