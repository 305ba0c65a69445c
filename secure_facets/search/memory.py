"""
In-memory search backend.

Matches, ranks and aggregates a fixed list of documents. Meant for tests,
development and small embedded corpora: every new query scans the whole
list. Real deployments plug in an adapter for their search engine that
satisfies the same SearchBackend protocol.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import Any

from ..types import AggregationSnapshot, FacetValue, Hit, SearchPage, SearchQuery


class InMemorySearchBackend:
    """SearchBackend over documents held in memory.

    Matching rules:
    - ``query.text`` matches hits where any string field contains it
      (case-insensitive); empty text matches every hit
    - ``query.filters`` require field equality (or membership for
      multi-valued fields)

    Hits are ranked by score (descending), ties broken by doc_id. The ranked
    matches of the most recent query are kept, so paging through one query
    scans and sorts the documents once.
    """

    def __init__(self, documents: Iterable[Hit]) -> None:
        self._documents = list(documents)
        self._last_query: SearchQuery | None = None
        self._last_matches: list[Hit] = []
        self.fetch_calls = 0
        self.aggregate_calls = 0
        self.rank_calls = 0

    def __len__(self) -> int:
        return len(self._documents)

    def fetch_page(self, query: SearchQuery, batch_size: int, offset: int) -> SearchPage:
        self.fetch_calls += 1
        matches = self._ranked_matches(query)
        return SearchPage(hits=matches[offset : offset + batch_size], total_hits=len(matches))

    def aggregate(self, query: SearchQuery, number_of_facets: int) -> AggregationSnapshot:
        """Raw facet counts over every match, as an engine aggregation would report them."""
        self.aggregate_calls += 1
        matches = self._ranked_matches(query)
        return AggregationSnapshot.from_buckets(
            facet_buckets(matches, query.facet_fields),
            total_documents=len(matches),
            number_of_facets=number_of_facets,
        )

    def _ranked_matches(self, query: SearchQuery) -> list[Hit]:
        if self._last_query is not None and query == self._last_query:
            return self._last_matches

        self.rank_calls += 1
        matches = [hit for hit in self._documents if self._matches(hit, query)]
        matches.sort(key=lambda hit: (-hit.score, hit.doc_id))
        self._last_query = query
        self._last_matches = matches
        return matches

    @staticmethod
    def _matches(hit: Hit, query: SearchQuery) -> bool:
        for name, expected in query.filters.items():
            actual = hit.fields.get(name)
            if isinstance(actual, (list, tuple, set, frozenset)):
                if expected not in actual:
                    return False
            elif actual != expected:
                return False

        if not query.text:
            return True
        needle = query.text.lower()
        return any(_contains(value, needle) for value in hit.fields.values())


def _contains(value: Any, needle: str) -> bool:
    if isinstance(value, str):
        return needle in value.lower()
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(isinstance(v, str) and needle in v.lower() for v in value)
    return False


def facet_buckets(
    hits: Iterable[Hit],
    facet_fields: Iterable[str],
) -> dict[str, list[dict[str, Any]]]:
    """Count facet labels into engine-style ``{"key", "doc_count"}`` buckets.

    Each document counts once per label. Buckets are ordered by count
    descending, ties broken by label; fields with no values map to an
    empty list.
    """
    fields = list(facet_fields)
    counters: dict[str, Counter[str]] = {name: Counter() for name in fields}
    for hit in hits:
        for name in fields:
            counters[name].update(set(hit.facet_labels(name)))

    buckets: dict[str, list[dict[str, Any]]] = {}
    for name in fields:
        ordered = sorted(counters[name].items(), key=lambda item: (-item[1], item[0]))
        buckets[name] = [{"key": label, "doc_count": count} for label, count in ordered]
    return buckets


def count_facet_values(
    hits: Iterable[Hit],
    facet_fields: Iterable[str],
    number_of_facets: int,
) -> dict[str, list[FacetValue]]:
    """Count facet labels over hits and keep the top values per field.

    Args:
        hits: Documents to count
        facet_fields: Fields to facet on
        number_of_facets: Maximum values kept per field

    Returns:
        Facet table ordered like :func:`facet_buckets`
    """
    buckets = facet_buckets(hits, facet_fields)
    return {
        name: [
            FacetValue(label=bucket["key"], count=bucket["doc_count"])
            for bucket in field_buckets[:number_of_facets]
        ]
        for name, field_buckets in buckets.items()
    }
