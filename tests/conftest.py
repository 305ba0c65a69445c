"""
Shared test configuration and fixtures.
"""

import pytest

from secure_facets.access import AccessController, Principal
from secure_facets.search import InMemorySearchBackend
from secure_facets.types import SearchQuery

from .fakes import make_corpus


@pytest.fixture
def query() -> SearchQuery:
    return SearchQuery(text="report", facet_fields=("color",))


@pytest.fixture
def outsider_predicate():
    """Visibility predicate for a principal that owns nothing."""
    return AccessController().predicate_for(Principal(user_id="outsider"))


@pytest.fixture
def corpus_backend() -> InMemorySearchBackend:
    """In-memory backend over 30 hits, 15 of them public."""
    return InMemorySearchBackend(make_corpus(30))
