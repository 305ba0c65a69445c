"""
Collaborator interfaces consumed by the facet estimator.

The estimator is a library invoked by a higher-level query execution path.
It owns no network surface; everything remote goes through a SearchBackend.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from .types import AggregationSnapshot, FacetTable, Hit, SearchPage, SearchQuery

PermissionPredicate = Callable[[Hit], bool]
"""Pure visibility check for one document."""


class SearchBackend(Protocol):
    """A search engine that executes queries one page at a time."""

    def fetch_page(self, query: SearchQuery, batch_size: int, offset: int) -> SearchPage:
        """Execute the query and return up to ``batch_size`` hits starting at ``offset``.

        Each call is one remote query execution. ``total_hits`` is reported on
        every page and assumed stable within one estimation.
        """
        ...

    def aggregate(self, query: SearchQuery, number_of_facets: int) -> AggregationSnapshot:
        """Execute the query and return raw facet counts plus the total hit count.

        Counts are not filtered by permissions.
        """
        ...


class FacetCounter(Protocol):
    """Anything that can produce a facet table for a query."""

    def get_facets(self, query: SearchQuery, number_of_facets: int) -> FacetTable:
        """Return up to ``number_of_facets`` values per facet field."""
        ...
