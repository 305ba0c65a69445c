"""Fixed-size uniform sampling of hit streams."""

from .reservoir import ReservoirSampler, reservoir_sample

__all__ = ["ReservoirSampler", "reservoir_sample"]
