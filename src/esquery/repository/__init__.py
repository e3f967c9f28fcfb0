"""Repositories declaring string queries on their methods."""

from .base import SearchOperations
from .query import Repository, StringQueryMethod, string_query

__all__ = [
    "SearchOperations",
    "Repository",
    "StringQueryMethod",
    "string_query",
]
