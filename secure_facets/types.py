"""
Core data types for facet estimation.

Hits come from the search backend, facet values from the candidate and
exact counters. Everything here is immutable; a FacetTable is a plain
mapping from facet field to an ordered list of FacetValue.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# =============================================================================
# Queries and Hits
# =============================================================================


class DocumentVisibility(Enum):
    """Document visibility levels."""

    PRIVATE = "private"  # Only owner can read (default)
    TEAM = "team"  # Members of the document's teams can read
    ORGANIZATION = "organization"  # All org members can read
    PUBLIC = "public"  # Any authenticated principal can read


@dataclass(frozen=True)
class SearchQuery:
    """A full-text search predicate.

    The estimator never looks inside a query; it is passed through to the
    search backend unchanged.
    """

    text: str = ""
    facet_fields: tuple[str, ...] = ()
    filters: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Hit:
    """A single ranked search result.

    Carries the facet field values of the document and the ownership
    information the access controller needs to decide visibility.
    """

    doc_id: str
    score: float = 0.0
    fields: Mapping[str, Any] = field(default_factory=dict)
    owner_id: str | None = None
    visibility: DocumentVisibility = DocumentVisibility.PRIVATE
    org_id: str | None = None
    team_ids: tuple[str, ...] = ()

    def facet_labels(self, facet_field: str) -> list[str]:
        """Labels this hit contributes to a facet field (multi-valued fields allowed)."""
        value = self.fields.get(facet_field)
        if value is None:
            return []
        if isinstance(value, (list, tuple, set, frozenset)):
            return [str(v) for v in value]
        return [str(value)]


@dataclass(frozen=True)
class SearchPage:
    """One page of ranked hits plus the total hit count reported with it."""

    hits: Sequence[Hit]
    total_hits: int


# =============================================================================
# Facets
# =============================================================================


@dataclass(frozen=True)
class FacetValue:
    """A facet label with its document count."""

    label: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"label": self.label, "count": self.count}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FacetValue:
        """Deserialize from dictionary."""
        return cls(label=str(data["label"]), count=int(data["count"]))


FacetTable = dict[str, list[FacetValue]]


def facet_table_to_dict(table: FacetTable) -> dict[str, list[dict[str, Any]]]:
    """Serialize a facet table to plain dictionaries (order preserved)."""
    return {name: [fv.to_dict() for fv in values] for name, values in table.items()}


@dataclass(frozen=True)
class AggregationSnapshot:
    """Facet candidates and total hit count from a prior query execution.

    A snapshot is only reusable for requests that ask for at most
    ``number_of_facets`` values per field.
    """

    facets: FacetTable
    total_documents: int
    number_of_facets: int

    def covers(self, number_of_facets: int) -> bool:
        """Whether this snapshot holds enough values per field for the request."""
        return self.number_of_facets >= number_of_facets

    def top(self, number_of_facets: int) -> FacetTable:
        """Facet table truncated to ``number_of_facets`` values per field."""
        return {name: list(values[:number_of_facets]) for name, values in self.facets.items()}

    @classmethod
    def from_buckets(
        cls,
        buckets: Mapping[str, Sequence[Mapping[str, Any]]],
        total_documents: int,
        number_of_facets: int,
    ) -> AggregationSnapshot:
        """Build a snapshot from raw engine aggregation buckets.

        Args:
            buckets: Facet field -> buckets shaped ``{"key": ..., "doc_count": ...}``,
                     in the order the engine returned them
            total_documents: Total hit count of the query that produced them
            number_of_facets: Number of buckets kept per field

        Returns:
            AggregationSnapshot with bucket order preserved
        """
        facets: FacetTable = {}
        for name, field_buckets in buckets.items():
            facets[name] = [
                FacetValue(label=str(bucket["key"]), count=int(bucket["doc_count"]))
                for bucket in list(field_buckets)[:number_of_facets]
            ]
        return cls(
            facets=facets,
            total_documents=total_documents,
            number_of_facets=number_of_facets,
        )
