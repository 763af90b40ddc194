"""
Ledger data models for proposal lifecycle management.

This module defines immutable data structures for proposals, their action
targets and per-member vote states, plus the JSON-safe record form used by
the key-value store.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from ..utils.time import format_timestamp, parse_timestamp


class VoteState(str, Enum):
    """Recorded vote of one member on one proposal."""
    ABSENT = "absent"
    YES = "yes"
    NO = "no"


class ProposalStatus(str, Enum):
    """Proposal lifecycle states."""
    OPEN = "open"
    EXECUTED = "executed"


@dataclass(frozen=True)
class ActionTarget:
    """Action a proposal performs once it passes."""

    address: str                                     # Endpoint or handler name
    payload: bytes = b""

    def to_record(self) -> dict[str, Any]:
        return {"address": self.address, "payload": self.payload.hex()}

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "ActionTarget":
        return cls(
            address=record["address"],
            payload=bytes.fromhex(record.get("payload", "")),
        )


@dataclass(frozen=True)
class Proposal:
    """A recorded request to perform an action, with its tallies."""

    id: int
    target: ActionTarget

    # Execution flag, set at most once
    executed: bool = False

    # Tallies, kept equal to the number of YES / NO vote entries
    yes_count: int = 0
    no_count: int = 0

    proposer: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def status(self) -> ProposalStatus:
        return ProposalStatus.EXECUTED if self.executed else ProposalStatus.OPEN

    def with_vote_correction(self, previous: VoteState, supports: bool) -> 'Proposal':
        """Apply one vote, removing the voter's previous vote from the tallies first."""
        yes_count = self.yes_count
        no_count = self.no_count

        if previous == VoteState.YES:
            yes_count -= 1
        elif previous == VoteState.NO:
            no_count -= 1

        if supports:
            yes_count += 1
        else:
            no_count += 1

        return Proposal(
            id=self.id,
            target=self.target,
            executed=self.executed,
            yes_count=yes_count,
            no_count=no_count,
            proposer=self.proposer,
            created_at=self.created_at
        )

    def with_executed(self) -> 'Proposal':
        """Mark the proposal as executed."""
        return Proposal(
            id=self.id,
            target=self.target,
            executed=True,
            yes_count=self.yes_count,
            no_count=self.no_count,
            proposer=self.proposer,
            created_at=self.created_at
        )

    def to_record(self) -> dict[str, Any]:
        """Serialize to the JSON-safe form stored in the key-value store."""
        return {
            "id": self.id,
            "target": self.target.to_record(),
            "executed": self.executed,
            "yes_count": self.yes_count,
            "no_count": self.no_count,
            "proposer": self.proposer,
            "created_at": format_timestamp(self.created_at) if self.created_at else None,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Proposal":
        return cls(
            id=record["id"],
            target=ActionTarget.from_record(record["target"]),
            executed=record["executed"],
            yes_count=record["yes_count"],
            no_count=record["no_count"],
            proposer=record.get("proposer"),
            created_at=parse_timestamp(record.get("created_at")),
        )
