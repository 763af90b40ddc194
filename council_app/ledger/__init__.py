"""
Proposal ledger module.

Owns the ordered proposals, per-member vote states and tallies, and the
threshold rule that executes a proposal's action exactly once.
"""
from .models import ActionTarget, Proposal, ProposalStatus, VoteState
from .proposals import VOTE_THRESHOLD, ProposalLedger

__all__ = [
    "ActionTarget",
    "Proposal",
    "ProposalStatus",
    "VoteState",
    "VOTE_THRESHOLD",
    "ProposalLedger",
]
