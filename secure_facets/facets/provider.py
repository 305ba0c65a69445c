"""Selects the facet counter for a configured FacetMode."""

from __future__ import annotations

from ..config import FacetMode, SampleConfiguration
from ..protocol import FacetCounter, PermissionPredicate, SearchBackend
from ..search import DEFAULT_BATCH_SIZE
from .counters import InsecureFacetCounter, SecureFacetCounter
from .estimator import FacetEstimator


def create_facet_counter(
    config: SampleConfiguration,
    backend: SearchBackend,
    is_visible: PermissionPredicate,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> FacetCounter:
    """
    Create the facet counter matching ``config.mode``.

    Args:
        config: Facet configuration (mode, sample size, seed)
        backend: Search backend executing queries
        is_visible: Permission predicate for the requesting identity
        batch_size: Page size used when paging through matches

    Returns:
        SecureFacetCounter, InsecureFacetCounter or FacetEstimator
    """
    if config.mode is FacetMode.SECURE:
        return SecureFacetCounter(backend, is_visible, batch_size)
    if config.mode is FacetMode.INSECURE:
        return InsecureFacetCounter(backend)
    return FacetEstimator(backend, is_visible, config, batch_size=batch_size)
