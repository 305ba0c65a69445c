"""
Lazy, batch-paginated iteration over a remote ranked result stream.

A page is only fetched when the consumer asks for the hit after the last
one buffered, so memory stays bounded by one page regardless of how many
documents match.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from ..protocol import SearchBackend
from ..types import Hit, SearchQuery

logger = logging.getLogger(__name__)

# Native page size of the search engine.
DEFAULT_BATCH_SIZE = 1000


class ResultPager:
    """Forward-only sequence of the hits matching a query.

    Pages of ``batch_size`` hits are requested at increasing offsets. The
    sequence ends after the first page holding fewer than ``batch_size`` hits
    (its hits are still yielded), including an empty page.

    Every ``iter()`` starts over from offset zero and re-executes the query.
    Results are not guaranteed to be identical between traversals when the
    underlying result set changes or ranks tie. Backend errors are not
    retried and propagate to whoever is consuming the sequence.

    ``pages_fetched`` counts the pages requested by the most recent
    traversal; starting a new one resets it.

    Usage:
        pager = ResultPager(backend, query)
        for hit in pager:
            ...
    """

    def __init__(
        self,
        backend: SearchBackend,
        query: SearchQuery,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")

        self.backend = backend
        self.query = query
        self.batch_size = batch_size
        self.pages_fetched = 0

    def __iter__(self) -> Iterator[Hit]:
        self.pages_fetched = 0
        offset = 0
        while True:
            page = self.backend.fetch_page(self.query, self.batch_size, offset)
            self.pages_fetched += 1
            hits = list(page.hits)
            logger.debug(f"Fetched {len(hits)} hits at offset {offset}")

            yield from hits

            if len(hits) < self.batch_size:
                return
            offset += self.batch_size
