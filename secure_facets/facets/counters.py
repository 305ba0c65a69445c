"""
Exact and raw facet counters.

SecureFacetCounter is the exact, access-control-aware fallback: it pages
through every matching document and counts only the visible ones.
InsecureFacetCounter returns the engine's own aggregation counts without
any permission filtering; the statistical estimator uses it for candidates.
"""

from __future__ import annotations

import logging

from ..protocol import PermissionPredicate, SearchBackend
from ..search import DEFAULT_BATCH_SIZE, ResultPager, count_facet_values
from ..types import AggregationSnapshot, FacetTable, SearchQuery

logger = logging.getLogger(__name__)


class SecureFacetCounter:
    """Exact facet counts over the documents the caller may see.

    Cost grows with the number of matching documents: every one of them is
    fetched and permission-checked.
    """

    def __init__(
        self,
        backend: SearchBackend,
        is_visible: PermissionPredicate,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        self.backend = backend
        self.is_visible = is_visible
        self.batch_size = batch_size

    def get_facets(self, query: SearchQuery, number_of_facets: int) -> FacetTable:
        pager = ResultPager(self.backend, query, self.batch_size)
        visible_hits = (hit for hit in pager if self.is_visible(hit))
        table = count_facet_values(visible_hits, query.facet_fields, number_of_facets)
        logger.debug(f"Secure facet count fetched {pager.pages_fetched} pages")
        return table


class InsecureFacetCounter:
    """Facet counts straight from the engine's aggregation, unfiltered."""

    def __init__(self, backend: SearchBackend) -> None:
        self.backend = backend

    def fetch_snapshot(self, query: SearchQuery, number_of_facets: int) -> AggregationSnapshot:
        """Run the aggregation query; returns candidates and the total hit count."""
        return self.backend.aggregate(query, number_of_facets)

    def get_facets(self, query: SearchQuery, number_of_facets: int) -> FacetTable:
        return self.fetch_snapshot(query, number_of_facets).top(number_of_facets)
