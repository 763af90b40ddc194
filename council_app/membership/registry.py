"""Immutable membership registry for council principals."""

from collections.abc import Iterable, Iterator
from typing import Any

import structlog

from ..errors import Unauthorized

Principal = str

logger = structlog.get_logger(__name__)


class MembershipRegistry:
    """Fixed set of principals authorized to propose and vote.

    The founder (the principal constructing the council) is always a member.
    Membership cannot change after construction.
    """

    def __init__(self, founder: Principal, members: Iterable[Principal] = ()):
        self._founder = founder
        self._members: frozenset[Principal] = frozenset(members) | {founder}

        logger.info(
            "Membership registry created",
            founder=founder,
            member_count=len(self._members)
        )

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "MembershipRegistry":
        """Build a registry from the merged configuration dict."""
        membership = config.get("membership", {})
        return cls(
            founder=membership["founder"],
            members=membership.get("members") or [],
        )

    @property
    def founder(self) -> Principal:
        return self._founder

    @property
    def members(self) -> frozenset[Principal]:
        return self._members

    def is_member(self, principal: Any) -> bool:
        """Return True if the principal belongs to the council."""
        try:
            return principal in self._members
        except TypeError:
            # unhashable input
            return False

    def require_member(self, principal: Any, operation: str) -> None:
        """Raise Unauthorized unless the principal is a member."""
        if not self.is_member(principal):
            logger.warning(
                "Rejected non-member",
                principal=principal,
                operation=operation
            )
            raise Unauthorized(
                f"{principal!r} is not a council member",
                principal=principal,
                operation=operation,
            )

    def __contains__(self, principal: Any) -> bool:
        return self.is_member(principal)

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[Principal]:
        return iter(sorted(self._members))
