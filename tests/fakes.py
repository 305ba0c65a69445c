"""
Corpus builders and recording test doubles.

The doubles let tests count page fetches, inject backend failures and pin
the number of visible documents in a sample.
"""

from __future__ import annotations

from secure_facets.types import (
    AggregationSnapshot,
    DocumentVisibility,
    FacetTable,
    Hit,
    SearchPage,
    SearchQuery,
)

COLORS = ["red", "blue", "green"]


def make_corpus(size: int, public_every: int = 2) -> list[Hit]:
    """
    Build ``size`` hits owned by someone else.

    Every ``public_every``-th hit (starting with the first) is public, the
    rest are private, so an outsider sees ceil(size / public_every) of them.
    """
    hits = []
    for i in range(size):
        visibility = (
            DocumentVisibility.PUBLIC if i % public_every == 0 else DocumentVisibility.PRIVATE
        )
        hits.append(
            Hit(
                doc_id=f"doc-{i:05d}",
                score=float(size - i),
                fields={"title": f"report {i}", "color": COLORS[i % len(COLORS)]},
                owner_id="owner",
                visibility=visibility,
            )
        )
    return hits


class RecordingBackend:
    """SearchBackend double that records calls and can fail on demand."""

    def __init__(
        self,
        hits: list[Hit],
        total_hits: int | None = None,
        fail_on_offset: int | None = None,
        candidates: FacetTable | None = None,
    ) -> None:
        self.hits = hits
        self.total_hits = len(hits) if total_hits is None else total_hits
        self.fail_on_offset = fail_on_offset
        self.candidates = candidates or {}
        self.offsets: list[int] = []
        self.aggregate_calls = 0

    def fetch_page(self, query: SearchQuery, batch_size: int, offset: int) -> SearchPage:
        self.offsets.append(offset)
        if self.fail_on_offset is not None and offset == self.fail_on_offset:
            raise ConnectionError(f"backend unavailable at offset {offset}")
        return SearchPage(hits=self.hits[offset : offset + batch_size], total_hits=self.total_hits)

    def aggregate(self, query: SearchQuery, number_of_facets: int) -> AggregationSnapshot:
        self.aggregate_calls += 1
        return AggregationSnapshot(
            facets=self.candidates,
            total_documents=self.total_hits,
            number_of_facets=number_of_facets,
        )


class StubFacetCounter:
    """FacetCounter double returning a fixed table."""

    def __init__(self, table: FacetTable) -> None:
        self.table = table
        self.calls: list[tuple[SearchQuery, int]] = []

    def get_facets(self, query: SearchQuery, number_of_facets: int) -> FacetTable:
        self.calls.append((query, number_of_facets))
        return self.table


class FirstNVisible:
    """Predicate that reports only its first ``n`` calls as visible."""

    def __init__(self, n: int) -> None:
        self.n = n
        self.calls = 0

    def __call__(self, hit: Hit) -> bool:
        self.calls += 1
        return self.calls <= self.n
