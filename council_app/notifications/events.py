"""Events emitted by the proposal ledger."""

from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Union


@dataclass(frozen=True)
class ProposalCreated:
    """A proposal was appended to the ledger."""
    event_type: ClassVar[str] = "proposal_created"

    proposal_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"event_type": self.event_type, **asdict(self)}


@dataclass(frozen=True)
class VoteCast:
    """A member's vote on a proposal was recorded."""
    event_type: ClassVar[str] = "vote_cast"

    proposal_id: int
    principal: str

    def to_dict(self) -> dict[str, Any]:
        return {"event_type": self.event_type, **asdict(self)}


LedgerEvent = Union[ProposalCreated, VoteCast]
