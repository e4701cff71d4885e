# core/search/__init__.py
"""
Search Package
"""
from .search_index import (
    SearchIndex,
    ResultEntry,
    IndexUnusableError,
    search
)

__all__ = [
    'SearchIndex',
    'ResultEntry',
    'IndexUnusableError',
    'search'
]
