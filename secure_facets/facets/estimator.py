"""
Statistical, access-control-aware facet estimation.

Exact secure facet counting has to permission-check every matching
document, which gets expensive for large result sets. The estimator
instead permission-checks a bounded random sample of the matches and
extrapolates each candidate count by the visible share of that sample:

    1. Get candidate facet counts and the total hit count, from a cached
       aggregation when it covers the request, else from one query.
    2. If total hits < sample size, delegate to the exact secure counter.
    3. Otherwise page through the matches, reservoir-sample them down to
       the sample size (unless the sample size already covers every hit),
       and count how many sampled documents are visible.
    4. Rescale every candidate count by visible / sample size and drop
       values that truncate to zero.

The estimator is synchronous and pull-based: pages are only fetched when
the sampler or the access check asks for the next hit.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..access import count_accessible
from ..config import SampleConfiguration
from ..logging_utils import FacetsLoggerAdapter
from ..protocol import FacetCounter, PermissionPredicate, SearchBackend
from ..sampling import ReservoirSampler
from ..search import DEFAULT_BATCH_SIZE, ResultPager
from ..types import AggregationSnapshot, FacetTable, SearchQuery, facet_table_to_dict
from .counters import InsecureFacetCounter, SecureFacetCounter
from .rescale import rescale_facet_values

logger = logging.getLogger(__name__)


class FacetStrategy(Enum):
    """How the facets of one query were computed."""

    EXACT = "exact"  # Delegated to the secure counter
    STATISTICAL = "statistical"  # Sampled and extrapolated


def choose_strategy(total_hits: int, sample_size: int) -> FacetStrategy:
    """Pick exact counting when the population is smaller than the sample size.

    Below that size exhaustive permission checking is already cheap and
    sampling would only add noise.
    """
    if total_hits < sample_size:
        return FacetStrategy.EXACT
    return FacetStrategy.STATISTICAL


@dataclass
class FacetEstimation:
    """Result of one estimation, with the numbers that produced it."""

    facets: FacetTable
    strategy: FacetStrategy
    total_hits: int
    sample_size: int
    accessible_sample_count: int | None = None
    sampled: bool = False
    from_cache: bool = False
    duration_ms: int = 0

    @property
    def visible_ratio(self) -> float | None:
        """Visible share of the sample, None when counted exactly."""
        if self.accessible_sample_count is None:
            return None
        return self.accessible_sample_count / self.sample_size

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "facets": facet_table_to_dict(self.facets),
            "strategy": self.strategy.value,
            "total_hits": self.total_hits,
            "sample_size": self.sample_size,
            "accessible_sample_count": self.accessible_sample_count,
            "sampled": self.sampled,
            "from_cache": self.from_cache,
            "duration_ms": self.duration_ms,
        }


class FacetEstimator:
    """Estimates access-control-aware facet counts by sampling.

    Usage:
        estimator = FacetEstimator(backend, controller.predicate_for(principal), config)

        # Facet table only
        facets = estimator.estimate(query, number_of_facets=10)

        # With strategy and sample statistics, reusing a prior aggregation
        result = estimator.estimate_detailed(query, 10, cached=snapshot)
    """

    def __init__(
        self,
        backend: SearchBackend,
        is_visible: PermissionPredicate,
        config: SampleConfiguration | None = None,
        exact_counter: FacetCounter | None = None,
        candidate_counter: InsecureFacetCounter | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        """Initialize the estimator.

        Args:
            backend: Search backend executing the query
            is_visible: Permission predicate for the requesting identity
            config: Sampling configuration (defaults from SampleConfiguration())
            exact_counter: Fallback for small populations
                           (default: SecureFacetCounter over the same backend)
            candidate_counter: Source of candidate counts and total hits
                               (default: InsecureFacetCounter over the same backend)
            batch_size: Page size used when paging through matches
        """
        self.backend = backend
        self.is_visible = is_visible
        self.config = config or SampleConfiguration()
        self.batch_size = batch_size
        self.exact_counter = exact_counter or SecureFacetCounter(backend, is_visible, batch_size)
        self.candidate_counter = candidate_counter or InsecureFacetCounter(backend)

    def get_facets(self, query: SearchQuery, number_of_facets: int) -> FacetTable:
        """FacetCounter interface; same as :meth:`estimate`."""
        return self.estimate(query, number_of_facets)

    def estimate(
        self,
        query: SearchQuery,
        number_of_facets: int,
        cached: AggregationSnapshot | None = None,
    ) -> FacetTable:
        """Estimate visible facet counts for a query.

        Args:
            query: Query whose results are faceted
            number_of_facets: Values requested per facet field
            cached: Aggregation from a prior execution of the same query

        Returns:
            Facet field -> values, in candidate order
        """
        return self.estimate_detailed(query, number_of_facets, cached).facets

    def estimate_detailed(
        self,
        query: SearchQuery,
        number_of_facets: int,
        cached: AggregationSnapshot | None = None,
    ) -> FacetEstimation:
        """Estimate visible facet counts and report how they were obtained.

        Backend and predicate failures propagate unchanged; there is no
        partial result.
        """
        start = time.monotonic()
        sample_size = self.config.sample_size
        log = FacetsLoggerAdapter(
            logger, {"query_text": query.text, "sample_size": sample_size}
        )

        from_cache = cached is not None and cached.covers(number_of_facets)
        if from_cache:
            candidates = cached.top(number_of_facets)
            total_hits = cached.total_documents
        else:
            log.warning("Facets and total hit count are being retrieved from the search backend")
            snapshot = self.candidate_counter.fetch_snapshot(query, number_of_facets)
            candidates = snapshot.top(number_of_facets)
            total_hits = snapshot.total_documents

        strategy = choose_strategy(total_hits, sample_size)
        if strategy is FacetStrategy.EXACT:
            log.debug(
                f"Sample size {sample_size} is greater than hit count {total_hits}, "
                "getting secure facet counts"
            )
            result = FacetEstimation(
                facets=self.exact_counter.get_facets(query, number_of_facets),
                strategy=strategy,
                total_hits=total_hits,
                sample_size=sample_size,
                from_cache=from_cache,
            )
        else:
            accessible, sampled = self._count_accessible_sample(query, total_hits, log)
            log.debug(f"{accessible} of {sample_size} sampled documents are accessible")

            facets = {
                name: rescale_facet_values(values, accessible, sample_size)
                for name, values in candidates.items()
            }
            result = FacetEstimation(
                facets=facets,
                strategy=strategy,
                total_hits=total_hits,
                sample_size=sample_size,
                accessible_sample_count=accessible,
                sampled=sampled,
                from_cache=from_cache,
            )

        result.duration_ms = _elapsed_ms(start)
        log.info(
            f"Estimated facets with {strategy.value} strategy",
            extra={
                "strategy": strategy.value,
                "total_hits": total_hits,
                "accessible_sample_count": result.accessible_sample_count,
                "duration_ms": result.duration_ms,
            },
        )
        return result

    def _count_accessible_sample(
        self,
        query: SearchQuery,
        total_hits: int,
        log: logging.LoggerAdapter,
    ) -> tuple[int, bool]:
        """Count visible documents in a sample of the matches.

        Returns:
            (accessible count, whether sampling was applied)
        """
        sample_size = self.config.sample_size
        pager = ResultPager(self.backend, query, self.batch_size)

        if sample_size < total_hits:
            log.debug(f"Sample size {sample_size} is less than hit count {total_hits}, sampling")
            sampler = ReservoirSampler(self.config.random_seed)
            sample = sampler.sample(pager, population_size=total_hits, sample_size=sample_size)
            if len(sample) < sample_size:
                log.warning(
                    f"Search backend produced only {len(sample)} documents "
                    f"for {total_hits} reported hits"
                )
            return count_accessible(sample, self.is_visible), True

        # Every matching document fits in the sample budget
        return count_accessible(pager, self.is_visible), False


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
