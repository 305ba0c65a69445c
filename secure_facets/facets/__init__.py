"""
Facet counting for access-controlled search results.

This module provides:
- FacetEstimator: sample-and-extrapolate estimation of visible facet counts
- SecureFacetCounter: exact counts over visible documents
- InsecureFacetCounter: raw engine counts, no permission filtering
- rescale_facet_values: extrapolation of candidate counts
- create_facet_counter: counter selection by FacetMode

Usage:
    from secure_facets.facets import FacetEstimator

    estimator = FacetEstimator(backend, is_visible, config)
    facets = estimator.estimate(query, number_of_facets=10)
"""

from .counters import InsecureFacetCounter, SecureFacetCounter
from .estimator import FacetEstimation, FacetEstimator, FacetStrategy, choose_strategy
from .provider import create_facet_counter
from .rescale import prune_zero_counts, proportion_facet_values, rescale_facet_values

__all__ = [
    # Estimation
    "FacetEstimator",
    "FacetEstimation",
    "FacetStrategy",
    "choose_strategy",
    # Counters
    "SecureFacetCounter",
    "InsecureFacetCounter",
    "create_facet_counter",
    # Rescaling
    "rescale_facet_values",
    "proportion_facet_values",
    "prune_zero_counts",
]
