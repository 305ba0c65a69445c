"""Access control for search hits."""

from .controller import AccessController, count_accessible
from .permissions import AccessDecision, Principal

__all__ = ["AccessController", "AccessDecision", "Principal", "count_accessible"]
