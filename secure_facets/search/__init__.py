"""
Search-side building blocks for facet estimation.

Provides:
- ResultPager: lazy, batch-paginated hit stream over a SearchBackend
- InMemorySearchBackend: SearchBackend over documents held in memory
- facet_buckets, count_facet_values: exact facet counting over a hit stream
"""

from .memory import InMemorySearchBackend, count_facet_values, facet_buckets
from .pager import DEFAULT_BATCH_SIZE, ResultPager

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "InMemorySearchBackend",
    "ResultPager",
    "count_facet_values",
    "facet_buckets",
]
