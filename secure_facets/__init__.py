"""
Secure Facets

Statistical, access-control-aware facet counting for full-text search.

Provides:
- Lazy batch pagination over a search backend's ranked results
- Seeded reservoir sampling of the matching-document stream
- Permission-filtered sample counting and facet count extrapolation
- Exact secure fallback for small result sets

Usage:

    >>> from secure_facets import (
    ...     AccessController, FacetEstimator, Principal, SampleConfiguration, SearchQuery,
    ... )
    >>> config = SampleConfiguration.from_env()
    >>> is_visible = AccessController().predicate_for(Principal(user_id="alice"))
    >>> estimator = FacetEstimator(backend, is_visible, config)
    >>> facets = estimator.estimate(SearchQuery("report", facet_fields=("category",)), 10)
"""

from .access import AccessController, AccessDecision, Principal, count_accessible
from .config import FacetMode, SampleConfiguration
from .exceptions import ConfigurationError, FacetsError
from .facets import (
    FacetEstimation,
    FacetEstimator,
    FacetStrategy,
    InsecureFacetCounter,
    SecureFacetCounter,
    choose_strategy,
    create_facet_counter,
    rescale_facet_values,
)
from .protocol import FacetCounter, PermissionPredicate, SearchBackend
from .sampling import ReservoirSampler, reservoir_sample
from .search import InMemorySearchBackend, ResultPager
from .types import (
    AggregationSnapshot,
    DocumentVisibility,
    FacetTable,
    FacetValue,
    Hit,
    SearchPage,
    SearchQuery,
)

__all__ = [
    # Types
    "AggregationSnapshot",
    "DocumentVisibility",
    "FacetTable",
    "FacetValue",
    "Hit",
    "SearchPage",
    "SearchQuery",
    # Protocols
    "FacetCounter",
    "PermissionPredicate",
    "SearchBackend",
    # Configuration
    "FacetMode",
    "SampleConfiguration",
    # Search and sampling
    "InMemorySearchBackend",
    "ResultPager",
    "ReservoirSampler",
    "reservoir_sample",
    # Access control
    "AccessController",
    "AccessDecision",
    "Principal",
    "count_accessible",
    # Facets
    "FacetEstimator",
    "FacetEstimation",
    "FacetStrategy",
    "SecureFacetCounter",
    "InsecureFacetCounter",
    "choose_strategy",
    "create_facet_counter",
    "rescale_facet_values",
    # Exceptions
    "FacetsError",
    "ConfigurationError",
]

__version__ = "0.1.0"
