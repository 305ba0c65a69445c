"""
Facet sampling configuration.

Configuration can be built directly, from environment variables, or from
the ``facets`` section of a YAML settings file:

```yaml
facets:
  mode: statistical      # secure | insecure | statistical
  sample_size: 1000
  random_seed: 42        # optional, time-derived when missing
```
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 1000

ENV_MODE = "SECURE_FACETS_MODE"
ENV_SAMPLE_SIZE = "SECURE_FACETS_SAMPLE_SIZE"
ENV_RANDOM_SEED = "SECURE_FACETS_RANDOM_SEED"


class FacetMode(Enum):
    """How facet counts are computed for access-controlled results."""

    SECURE = "secure"  # Exact: every matching document is permission-checked
    INSECURE = "insecure"  # Raw engine counts, no permission filtering
    STATISTICAL = "statistical"  # Permission-check a sample and extrapolate

    @classmethod
    def parse(cls, value: str) -> FacetMode:
        try:
            return cls(value.strip().lower())
        except ValueError as e:
            allowed = ", ".join(m.value for m in cls)
            raise ConfigurationError("mode", f"must be one of: {allowed}", value) from e


def _default_seed() -> int:
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class SampleConfiguration:
    """Sampling parameters, constant for the lifetime of an estimation.

    Attributes:
        sample_size: Maximum number of documents permission-checked per query
        random_seed: Seed for the reservoir sampler's generator; time-derived
            and logged when not given
        mode: Facet counting mode
    """

    sample_size: int = DEFAULT_SAMPLE_SIZE
    random_seed: int | None = None
    mode: FacetMode = FacetMode.STATISTICAL

    def __post_init__(self) -> None:
        if isinstance(self.sample_size, bool) or not isinstance(self.sample_size, int):
            raise ConfigurationError("sample_size", "must be an integer", str(self.sample_size))
        if self.sample_size <= 0:
            raise ConfigurationError("sample_size", "must be > 0", str(self.sample_size))
        if self.random_seed is None:
            seed = _default_seed()
            logger.info(f"No random seed configured, using {seed}")
            object.__setattr__(self, "random_seed", seed)
        if not isinstance(self.random_seed, int):
            raise ConfigurationError("random_seed", "must be an integer", str(self.random_seed))

    @classmethod
    def from_env(cls) -> SampleConfiguration:
        """Create config from environment variables.

        Expected environment variables (all optional):
        - SECURE_FACETS_MODE: secure, insecure or statistical
        - SECURE_FACETS_SAMPLE_SIZE: positive integer
        - SECURE_FACETS_RANDOM_SEED: integer

        Raises:
            ConfigurationError: If a variable is set but cannot be parsed
        """
        data: dict[str, Any] = {}
        if mode := os.environ.get(ENV_MODE):
            data["mode"] = mode
        if sample_size := os.environ.get(ENV_SAMPLE_SIZE):
            data["sample_size"] = sample_size
        if seed := os.environ.get(ENV_RANDOM_SEED):
            data["random_seed"] = seed
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SampleConfiguration:
        """Create config from a settings mapping; missing keys take defaults."""
        kwargs: dict[str, Any] = {}
        if data.get("mode") is not None:
            kwargs["mode"] = FacetMode.parse(str(data["mode"]))
        if data.get("sample_size") is not None:
            kwargs["sample_size"] = _parse_int("sample_size", data["sample_size"])
        if data.get("random_seed") is not None:
            kwargs["random_seed"] = _parse_int("random_seed", data["random_seed"])
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: Path) -> SampleConfiguration:
        """Load config from the ``facets`` section of a YAML settings file.

        A missing file yields the defaults.

        Raises:
            ConfigurationError: If the file is not valid YAML or values are invalid
        """
        if not path.exists():
            return cls.from_dict({})

        try:
            config = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError("facets", f"invalid YAML in {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigurationError("facets", f"settings in {path} must be a mapping")
        section = config.get("facets") or {}
        if not isinstance(section, dict):
            raise ConfigurationError("facets", "section must be a mapping", str(section))
        return cls.from_dict(section)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "mode": self.mode.value,
            "sample_size": self.sample_size,
            "random_seed": self.random_seed,
        }


def _parse_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(name, "must be an integer", str(value))
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(name, "must be an integer", str(value)) from e
