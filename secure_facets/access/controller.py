"""Read access checks for search hits."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..protocol import PermissionPredicate
from ..types import DocumentVisibility, Hit
from .permissions import AccessDecision, Principal

logger = logging.getLogger(__name__)


class AccessController:
    """Centralized read access control for search hits.

    Implements permission checks based on document visibility and the
    principal's organization and team membership.
    """

    def check_access(self, principal: Principal, hit: Hit) -> AccessDecision:
        """Check if a principal may read a hit.

        Args:
            principal: Identity executing the search
            hit: Document to check

        Returns:
            AccessDecision with allowed status and reason
        """
        # Owner always has access
        if hit.owner_id is not None and hit.owner_id == principal.user_id:
            return AccessDecision(allowed=True, reason="owner")

        if hit.visibility == DocumentVisibility.PRIVATE:
            return AccessDecision(allowed=False, reason="private_document")

        if hit.visibility == DocumentVisibility.PUBLIC:
            return AccessDecision(allowed=True, reason="public_read")

        elif hit.visibility == DocumentVisibility.ORGANIZATION:
            if principal.org_id is not None and principal.org_id == hit.org_id:
                return AccessDecision(allowed=True, reason="org_member")

        elif hit.visibility == DocumentVisibility.TEAM:
            if set(principal.team_ids) & set(hit.team_ids):
                return AccessDecision(allowed=True, reason="team_member")

        return AccessDecision(allowed=False, reason="insufficient_permission")

    def predicate_for(self, principal: Principal) -> PermissionPredicate:
        """Visibility predicate bound to one principal."""

        def is_visible(hit: Hit) -> bool:
            return self.check_access(principal, hit).allowed

        return is_visible


def count_accessible(sample: Iterable[Hit], is_visible: PermissionPredicate) -> int:
    """Count the hits the caller is allowed to see.

    The predicate is applied to every hit; its failures propagate.

    Args:
        sample: Hits to check (consumed once)
        is_visible: Visibility predicate

    Returns:
        Number of visible hits
    """
    checked = 0
    visible = 0
    for hit in sample:
        checked += 1
        if is_visible(hit):
            visible += 1
    logger.debug(f"{visible} of {checked} checked hits are accessible")
    return visible
