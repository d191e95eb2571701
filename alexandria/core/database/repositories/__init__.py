"""
Repositories organized by business domain.

Each repository wraps the queries of one aggregate and only flushes;
services commit.
"""

from .base import AsyncBaseRepository, QueryBuilder, SqlRepository
from .bundle import SqlRepoBundle, build_sql_repos

__all__ = [
    "AsyncBaseRepository",
    "QueryBuilder",
    "SqlRepoBundle",
    "SqlRepository",
    "build_sql_repos",
]
