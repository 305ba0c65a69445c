"""Principal and decision types for access control."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Principal:
    """The identity a search is executed on behalf of."""

    user_id: str
    org_id: str | None = None
    team_ids: tuple[str, ...] = field(default_factory=tuple)


@dataclass
class AccessDecision:
    """Result of an access control check."""

    allowed: bool
    reason: str
