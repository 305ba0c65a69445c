"""
Extrapolation of candidate facet counts from a permission-filtered sample.

If ``accessible`` of ``sample_size`` sampled documents turned out visible,
that ratio is applied uniformly to every candidate count. Counts are
truncated, never rounded, so a rescaled count never exceeds the original.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..types import FacetValue


def proportion_facet_values(
    values: Sequence[FacetValue],
    accessible: int,
    sample_size: int,
) -> list[tuple[FacetValue, bool]]:
    """Rescale each value, pairing it with whether it truncated to zero.

    Order is preserved.
    """
    proportioned = []
    for value in values:
        count = value.count * accessible // sample_size
        proportioned.append((FacetValue(value.label, count), count == 0))
    return proportioned


def prune_zero_counts(proportioned: Sequence[tuple[FacetValue, bool]]) -> list[FacetValue]:
    """Drop zero entries, but only when at least one entry is zero.

    Order is preserved.
    """
    if any(is_zero for _, is_zero in proportioned):
        return [value for value, is_zero in proportioned if not is_zero]
    return [value for value, _ in proportioned]


def rescale_facet_values(
    values: Sequence[FacetValue],
    accessible: int,
    sample_size: int,
) -> list[FacetValue]:
    """
    Extrapolate one facet's candidate counts from the visible share of a sample.

    Each count becomes ``count * accessible // sample_size``. Entries that
    truncate to zero are treated as noise and removed. When the whole sample
    was visible (``accessible >= sample_size``) the values are returned as-is.

    Args:
        values: Candidate values in display order
        accessible: Number of sampled documents the caller may see
        sample_size: Configured sample size (the denominator)

    Returns:
        Rescaled values, order preserved

    Raises:
        ValueError: If sample_size is not positive
    """
    if sample_size <= 0:
        raise ValueError(f"sample_size must be > 0, got {sample_size}")

    if accessible >= sample_size:
        return list(values)

    return prune_zero_counts(proportion_facet_values(values, accessible, sample_size))
